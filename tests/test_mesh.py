"""
Tests for mesh input, the procedural generator and surface locators.
"""

import numpy as np
import pytest

from cubenav.data.mesh import CubeMesh, MeshSurfaceLocator, NearestNodeLocator, SurfaceHit
from cubenav.data.mock_generator import CubeSphereGenerator
from cubenav.errors import IncompleteGeometryError, UnmappedFaceError
from cubenav.grid.nav_graph import NavGraph
from cubenav.grid.node import Vector3
from cubenav.grid.topology import CubeFace


class TestCubeMesh:
    """Input validation and triangle mapping."""

    def test_shapes(self, flat_mesh):
        assert flat_mesh.vertices.shape == (6 * 25, 3)
        assert flat_mesh.triangle_count == 6 * 16 * 2
        assert set(flat_mesh.uv_maps) == set(CubeFace)

    def test_bad_vertices(self):
        with pytest.raises(ValueError):
            CubeMesh(np.zeros((4, 2)), np.zeros((1, 3)), {})

    def test_bad_uv_map(self, flat_mesh):
        with pytest.raises(ValueError):
            CubeMesh(flat_mesh.vertices, flat_mesh.triangles, {CubeFace.FRONT: np.zeros((3, 2))})

    def test_each_cell_gets_two_triangles(self, flat_mesh):
        counts = {}
        for i in range(flat_mesh.triangle_count):
            cell = flat_mesh.cell_from_triangle(i, 4)
            counts[cell] = counts.get(cell, 0) + 1
        assert len(counts) == 6 * 16
        assert set(counts.values()) == {2}

    def test_grid_size_mismatch(self, flat_mesh):
        # Last cell of FRONT starts at uv 0.75, i.e. cell 2 of a 2x2 grid
        last_front_triangle = (3 * 4 + 3) * 2
        with pytest.raises(IncompleteGeometryError):
            flat_mesh.cell_from_triangle(last_front_triangle, 2)

    def test_unmapped_vertices(self, flat_mesh):
        uv_maps = {face: np.full_like(uv, -1.0) for face, uv in flat_mesh.uv_maps.items()}
        mesh = CubeMesh(flat_mesh.vertices, flat_mesh.triangles, uv_maps)
        with pytest.raises(UnmappedFaceError):
            mesh.cell_from_triangle(0, 4)


class TestGenerator:
    """Procedural cube-sphere."""

    def test_sphere_vertices_on_radius(self, sphere_mesh):
        radii = np.linalg.norm(sphere_mesh.vertices, axis=1)
        assert np.allclose(radii, 2.0)

    def test_flat_vertices_on_cube(self, flat_mesh):
        assert np.allclose(np.abs(flat_mesh.vertices).max(axis=1), 1.0)

    def test_invalid_arguments(self):
        with pytest.raises(ValueError):
            CubeSphereGenerator(0)
        with pytest.raises(ValueError):
            CubeSphereGenerator(4, radius=0)

    def test_obstacles(self):
        graph = NavGraph(4)
        generator = CubeSphereGenerator(4, seed=1)
        keep = [(CubeFace.FRONT, 0, 0), (CubeFace.BACK, 3, 3)]
        blocked = generator.generate_obstacles(graph, 0.5, keep_walkable=keep)
        assert len(blocked) == 48
        assert len(set(blocked)) == 48
        assert graph.walkable_node_count == 48
        for key in keep:
            assert graph.nodes[key].walkable

    def test_obstacles_reproducible(self):
        a = CubeSphereGenerator(4, seed=7).generate_obstacles(NavGraph(4), 0.2)
        b = CubeSphereGenerator(4, seed=7).generate_obstacles(NavGraph(4), 0.2)
        assert a == b

    def test_no_obstacles(self):
        graph = NavGraph(4)
        assert CubeSphereGenerator(4).generate_obstacles(graph, 0.0) == []
        assert graph.walkable_node_count == graph.total_nodes

    def test_bad_fraction(self):
        with pytest.raises(ValueError):
            CubeSphereGenerator(4).generate_obstacles(NavGraph(4), 1.0)


class TestMeshSurfaceLocator:
    """Locating hits by triangle and by face coordinates."""

    def test_by_triangle(self, flat_mesh):
        locator = MeshSurfaceLocator(flat_mesh, 4)
        for i in range(flat_mesh.triangle_count):
            assert locator.locate(SurfaceHit(triangle_index=i)) == flat_mesh.cell_from_triangle(i, 4)

    def test_by_uv(self, flat_mesh):
        locator = MeshSurfaceLocator(flat_mesh, 4)
        hit = SurfaceHit(uvs={CubeFace.FRONT: (-1.0, -1.0), CubeFace.TOP: (0.3, 0.99)})
        assert locator.locate(hit) == (CubeFace.TOP, 1, 3)

    def test_uv_on_far_edge_is_clamped(self, flat_mesh):
        locator = MeshSurfaceLocator(flat_mesh, 4)
        assert locator.locate_uv({CubeFace.LEFT: (1.0, 1.0)}) == (CubeFace.LEFT, 3, 3)

    def test_uv_off_every_face(self, flat_mesh):
        locator = MeshSurfaceLocator(flat_mesh, 4)
        with pytest.raises(UnmappedFaceError):
            locator.locate(SurfaceHit(uvs={CubeFace.FRONT: (-0.5, 0.2)}))

    def test_bad_triangle_index(self, flat_mesh):
        locator = MeshSurfaceLocator(flat_mesh, 4)
        with pytest.raises(UnmappedFaceError):
            locator.locate(SurfaceHit(triangle_index=flat_mesh.triangle_count))

    def test_empty_hit(self, flat_mesh):
        with pytest.raises(UnmappedFaceError):
            MeshSurfaceLocator(flat_mesh, 4).locate(SurfaceHit())


class TestNearestNodeLocator:
    """Locating hits by world position."""

    def test_by_position(self, small_graph):
        locator = NearestNodeLocator(small_graph)
        assert locator.locate(SurfaceHit(position=Vector3(-0.7, 0.8, -1.0))) == (CubeFace.FRONT, 0, 3)

    def test_position_required(self, small_graph):
        with pytest.raises(UnmappedFaceError):
            NearestNodeLocator(small_graph).locate(SurfaceHit(triangle_index=0))
