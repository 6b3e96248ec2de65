"""Procedural cube-sphere meshes and obstacle layouts for development and testing."""

from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from ..grid.nav_graph import NavGraph
from ..grid.node import NodeKey
from ..grid.topology import CubeFace
from .mesh import CubeMesh

logger = logging.getLogger(__name__)

# Placement of each face grid on the unit cube [0, 1]^3: origin corner,
# direction of the face's x axis, direction of its y axis. These frames are
# the ones the seam crossing table in grid.nav_graph assumes.
FACE_FRAMES: Dict[CubeFace, Tuple[Tuple[float, float, float], ...]] = {
    CubeFace.FRONT:  ((0, 0, 0), (1, 0, 0), (0, 1, 0)),
    CubeFace.TOP:    ((0, 1, 0), (1, 0, 0), (0, 0, 1)),
    CubeFace.BACK:   ((1, 0, 1), (-1, 0, 0), (0, 1, 0)),
    CubeFace.BOTTOM: ((0, 0, 1), (1, 0, 0), (0, 0, -1)),
    CubeFace.RIGHT:  ((1, 0, 0), (0, 0, 1), (0, 1, 0)),
    CubeFace.LEFT:   ((0, 0, 1), (0, 0, -1), (0, 1, 0)),
}


class CubeSphereGenerator:
    """Generate cube-sphere meshes and random blocked cells."""

    def __init__(self, grid_size: int, radius: float = 1.0, spherify: bool = True,
                 seed: Optional[int] = None):
        """
        Args:
            grid_size: Cells per face edge
            radius: Sphere radius (or half the cube edge when spherify is False)
            spherify: Push vertices onto the sphere; otherwise keep a flat cube
            seed: Random seed for reproducibility
        """
        if grid_size < 1:
            raise ValueError(f"grid_size must be positive, got {grid_size}")
        if radius <= 0:
            raise ValueError(f"radius must be positive, got {radius}")
        self.grid_size = grid_size
        self.radius = radius
        self.spherify = spherify
        self.rng = np.random.default_rng(seed)

    def generate_mesh(self, shuffle: bool = False) -> CubeMesh:
        """
        Build the mesh: (grid_size + 1)^2 vertices per face, every cell split
        into two triangles along its diagonal.

        Args:
            shuffle: Randomize triangle order (the builder must not depend on it)
        """
        n = self.grid_size
        side = n + 1
        verts_per_face = side * side
        total = 6 * verts_per_face

        vertices = np.zeros((total, 3))
        uv_maps = {face: np.full((total, 2), -1.0) for face in CubeFace}
        triangles: List[Tuple[int, int, int]] = []
        ticks = np.arange(side) / n

        for face_index, face in enumerate(CubeFace):
            origin, u_axis, v_axis = (np.array(a, dtype=np.float64) for a in FACE_FRAMES[face])
            base = face_index * verts_per_face

            for i in range(side):
                for j in range(side):
                    idx = base + i * side + j
                    vertices[idx] = origin + ticks[i] * u_axis + ticks[j] * v_axis
                    uv_maps[face][idx] = (ticks[i], ticks[j])

            for i in range(n):
                for j in range(n):
                    a = base + i * side + j
                    b = base + (i + 1) * side + j
                    c = base + (i + 1) * side + j + 1
                    d = base + i * side + j + 1
                    triangles.append((a, b, c))
                    triangles.append((a, c, d))

        # Centre on the origin, cube edge 2
        vertices = (vertices - 0.5) * 2.0
        if self.spherify:
            vertices /= np.linalg.norm(vertices, axis=1, keepdims=True)
        vertices *= self.radius

        triangle_array = np.array(triangles, dtype=np.int64)
        if shuffle:
            triangle_array = triangle_array[self.rng.permutation(len(triangle_array))]

        logger.debug(f"Generated cube-sphere mesh: {total} vertices, {len(triangle_array)} triangles")
        return CubeMesh(vertices, triangle_array, uv_maps)

    def generate_obstacles(
        self,
        graph: NavGraph,
        fraction: float,
        keep_walkable: Iterable[NodeKey] = ()
    ) -> List[NodeKey]:
        """
        Mark a random fraction of the graph's nodes unwalkable.

        Args:
            graph: Graph to modify
            fraction: Share of all nodes to block, in [0, 1)
            keep_walkable: Cells that must stay walkable (e.g. scenario endpoints)

        Returns:
            Keys of the nodes that were blocked
        """
        if not 0 <= fraction < 1:
            raise ValueError(f"fraction must be in [0, 1), got {fraction}")

        keep = set(keep_walkable)
        candidates = [key for key in graph.nodes if key not in keep]
        count = min(len(candidates), int(round(fraction * graph.total_nodes)))
        if count == 0:
            return []

        chosen = self.rng.choice(len(candidates), size=count, replace=False)
        blocked = [candidates[int(i)] for i in chosen]
        for key in blocked:
            graph.nodes[key].walkable = False

        logger.info(f"Blocked {len(blocked)}/{graph.total_nodes} nodes")
        return blocked
