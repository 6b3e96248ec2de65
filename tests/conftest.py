"""
Shared pytest fixtures for the cube-sphere navigation tests
"""

import pytest

from cubenav.data.mock_generator import CubeSphereGenerator
from cubenav.grid.nav_graph import NavGraph


@pytest.fixture(params=[1, 2, 3, 4, 5])
def N(request):
    """Grid resolution (cells per face edge)."""
    return request.param


@pytest.fixture
def flat_mesh():
    """N=4 flat-faced cube mesh, half edge 1."""
    return CubeSphereGenerator(4, spherify=False, seed=0).generate_mesh()


@pytest.fixture
def sphere_mesh():
    """N=4 cube-sphere mesh, radius 2."""
    return CubeSphereGenerator(4, radius=2.0, seed=0).generate_mesh()


@pytest.fixture
def small_graph(flat_mesh):
    """N=4 graph with world positions, everything walkable."""
    return NavGraph.from_mesh(flat_mesh)


@pytest.fixture
def open_graph():
    """N=8 graph without geometry, everything walkable."""
    return NavGraph(8)
