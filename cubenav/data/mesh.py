"""
Cube-sphere mesh input and surface locators.

A CubeMesh carries one 2D parameterization per face: an (V, 2) array with a
(u, v) pair in [0, 1] for every vertex lying on that face and negative
values for vertices that do not. A triangle belongs to the first face whose
map has all three of its vertices non-negative.
"""

from __future__ import annotations
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, TYPE_CHECKING

import numpy as np

from ..errors import IncompleteGeometryError, UnmappedFaceError
from ..grid.node import Vector3
from ..grid.topology import CubeFace

if TYPE_CHECKING:
    from ..grid.nav_graph import NavGraph

Cell = Tuple[CubeFace, int, int]


class CubeMesh:
    """Triangle mesh of a cube-sphere with per-face parameterizations."""

    def __init__(self, vertices: np.ndarray, triangles: np.ndarray,
                 uv_maps: Dict[CubeFace, np.ndarray]):
        """
        Args:
            vertices: (V, 3) world-space vertex positions
            triangles: (T, 3) vertex indices
            uv_maps: Per-face (V, 2) parameterization
        """
        self.vertices = np.asarray(vertices, dtype=np.float64)
        self.triangles = np.asarray(triangles, dtype=np.int64)
        self.uv_maps = {face: np.asarray(uv, dtype=np.float64) for face, uv in uv_maps.items()}

        if self.vertices.ndim != 2 or self.vertices.shape[1] != 3:
            raise ValueError("vertices must be (V, 3)")
        if self.triangles.ndim != 2 or self.triangles.shape[1] != 3:
            raise ValueError("triangles must be (T, 3)")
        for face, uv in self.uv_maps.items():
            if uv.shape != (len(self.vertices), 2):
                raise ValueError(f"uv map of {face.name} must be ({len(self.vertices)}, 2)")

    @property
    def triangle_count(self) -> int:
        return len(self.triangles)

    def infer_grid_size(self) -> int:
        """Cells per face edge: two triangles per cell, six faces."""
        cells_per_face = self.triangle_count / 12
        grid_size = int(round(math.sqrt(cells_per_face)))
        if grid_size < 1 or grid_size * grid_size * 12 != self.triangle_count:
            raise IncompleteGeometryError(
                f"{self.triangle_count} triangles do not form six square grids"
            )
        return grid_size

    def triangle_positions(self, triangle_index: int) -> np.ndarray:
        """(3, 3) world-space vertices of a triangle."""
        return self.vertices[self.triangles[triangle_index]]

    def face_from_vertices(self, vertex_indices) -> CubeFace:
        """The face whose parameterization contains all the given vertices."""
        for face in CubeFace:
            uv = self.uv_maps.get(face)
            if uv is None:
                continue
            if np.all(uv[vertex_indices] >= 0):
                return face
        raise UnmappedFaceError(f"Vertices {list(vertex_indices)} lie on no face map")

    def cell_from_triangle(self, triangle_index: int, grid_size: int) -> Cell:
        """
        Grid cell covered by a triangle.

        The triangle's lowest (u, v) is a grid corner, so rounding it to the
        nearest multiple of the cell size is exact despite float noise.
        """
        vertex_indices = self.triangles[triangle_index]
        face = self.face_from_vertices(vertex_indices)
        uv = self.uv_maps[face][vertex_indices]
        x = int(round(uv[:, 0].min() * grid_size))
        y = int(round(uv[:, 1].min() * grid_size))
        if not (0 <= x < grid_size and 0 <= y < grid_size):
            raise IncompleteGeometryError(
                f"Triangle {triangle_index} maps to cell ({x}, {y}), outside a "
                f"{grid_size}x{grid_size} grid"
            )
        return face, x, y


@dataclass
class SurfaceHit:
    """
    A point picked on the cube-sphere surface, e.g. by a raycast.

    Any subset of the fields may be known; each locator uses what it needs.
    """
    position: Optional[Vector3] = None
    triangle_index: Optional[int] = None
    uvs: Optional[Dict[CubeFace, Tuple[float, float]]] = None


class SurfaceLocator(ABC):
    """Maps a surface hit to the (face, x, y) cell containing it."""

    @abstractmethod
    def locate(self, hit: SurfaceHit) -> Cell:
        """
        Cell containing the hit.

        Raises:
            UnmappedFaceError: the hit matches no face
        """
        pass


class MeshSurfaceLocator(SurfaceLocator):
    """Locates hits by the triangle they struck or by their per-face coordinates."""

    def __init__(self, mesh: CubeMesh, grid_size: int):
        self.mesh = mesh
        self.grid_size = grid_size

    def locate(self, hit: SurfaceHit) -> Cell:
        if hit.triangle_index is not None:
            if not 0 <= hit.triangle_index < self.mesh.triangle_count:
                raise UnmappedFaceError(f"Triangle index {hit.triangle_index} is not in the mesh")
            return self.mesh.cell_from_triangle(hit.triangle_index, self.grid_size)
        if hit.uvs is not None:
            return self.locate_uv(hit.uvs)
        raise UnmappedFaceError("Hit has neither a triangle index nor face coordinates")

    def locate_uv(self, uvs: Dict[CubeFace, Tuple[float, float]]) -> Cell:
        """
        First face (in CubeFace order) holding the point with non-negative
        coordinates; cell = floor(coordinate / cell size).
        """
        grid_max = self.grid_size - 1
        for face in CubeFace:
            if face not in uvs:
                continue
            u, v = uvs[face]
            if u >= 0 and v >= 0:
                x = min(int(math.floor(u * self.grid_size)), grid_max)
                y = min(int(math.floor(v * self.grid_size)), grid_max)
                return face, x, y
        raise UnmappedFaceError(f"Point {uvs} lies on no face map")


class NearestNodeLocator(SurfaceLocator):
    """Locates hits by world position, snapping to the closest node centre."""

    def __init__(self, graph: NavGraph):
        self.graph = graph

    def locate(self, hit: SurfaceHit) -> Cell:
        if hit.position is None:
            raise UnmappedFaceError("Hit has no world position")
        return self.graph.nearest_node(hit.position).key
