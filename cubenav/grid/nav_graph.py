"""Navigation graph over the six face grids of a cube-sphere."""

from __future__ import annotations
import logging
import time
from typing import Callable, Dict, Iterator, List, Optional, Tuple, TYPE_CHECKING

import numpy as np
from scipy.spatial import cKDTree

from ..errors import IncompleteGeometryError, OutOfRangeCoordinateError
from .node import Node, NodeKey, Vector3
from .topology import CubeFace, ConnectionDirection, get_connected_face

if TYPE_CHECKING:
    from ..data.mesh import CubeMesh

logger = logging.getLogger(__name__)

N = ConnectionDirection.NORTH
E = ConnectionDirection.EAST
S = ConnectionDirection.SOUTH
W = ConnectionDirection.WEST

# 8-connectivity offsets
NEIGHBOR_OFFSETS = [
    (dx, dy)
    for dx in (-1, 0, 1)
    for dy in (-1, 0, 1)
    if not (dx == 0 and dy == 0)
]

# (x, y, grid_max) of an edge cell -> (x, y) of the cell across the seam
EdgeCrossing = Callable[[int, int, int], Tuple[int, int]]

# Faces meet with different relative rotations, so each (face, edge) pair
# has its own rule. The target face is FACE_CONNECTIONS[face][edge].
EDGE_CROSSINGS: Dict[Tuple[CubeFace, ConnectionDirection], EdgeCrossing] = {
    (CubeFace.FRONT, N):  lambda x, y, m: (x, 0),
    (CubeFace.FRONT, E):  lambda x, y, m: (0, y),
    (CubeFace.FRONT, S):  lambda x, y, m: (x, m),
    (CubeFace.FRONT, W):  lambda x, y, m: (m, y),

    (CubeFace.TOP, N):    lambda x, y, m: (m - x, m),
    (CubeFace.TOP, E):    lambda x, y, m: (y, m),
    (CubeFace.TOP, S):    lambda x, y, m: (x, m),
    (CubeFace.TOP, W):    lambda x, y, m: (m - y, m),

    (CubeFace.BACK, N):   lambda x, y, m: (m - x, m),
    (CubeFace.BACK, E):   lambda x, y, m: (0, y),
    (CubeFace.BACK, S):   lambda x, y, m: (m - x, 0),
    (CubeFace.BACK, W):   lambda x, y, m: (m, y),

    (CubeFace.BOTTOM, N): lambda x, y, m: (x, 0),
    (CubeFace.BOTTOM, E): lambda x, y, m: (m - y, 0),
    (CubeFace.BOTTOM, S): lambda x, y, m: (m - x, 0),
    (CubeFace.BOTTOM, W): lambda x, y, m: (y, 0),

    (CubeFace.RIGHT, N):  lambda x, y, m: (m, x),
    (CubeFace.RIGHT, E):  lambda x, y, m: (0, y),
    (CubeFace.RIGHT, S):  lambda x, y, m: (m, m - x),
    (CubeFace.RIGHT, W):  lambda x, y, m: (m, y),

    (CubeFace.LEFT, N):   lambda x, y, m: (0, m - x),
    (CubeFace.LEFT, E):   lambda x, y, m: (0, y),
    (CubeFace.LEFT, S):   lambda x, y, m: (0, x),
    (CubeFace.LEFT, W):   lambda x, y, m: (m, y),
}


class NavGraph:
    """
    All nodes of a cube-sphere, 6 * grid_size^2 of them.

    Owned by the application and passed to the router explicitly.
    """

    def __init__(self, grid_size: int):
        """
        Create the node table.

        Args:
            grid_size: Number of cells along one edge of a face
        """
        if grid_size < 1:
            raise ValueError(f"grid_size must be positive, got {grid_size}")
        self.grid_size = grid_size
        self.nodes: Dict[NodeKey, Node] = {}
        self._tree: Optional[cKDTree] = None
        self._tree_keys: List[NodeKey] = []
        self._create_nodes()

    @property
    def grid_max(self) -> int:
        return self.grid_size - 1

    def _create_nodes(self) -> None:
        for face in CubeFace:
            for x in range(self.grid_size):
                for y in range(self.grid_size):
                    node = Node(face, x, y, self.grid_size)
                    self.nodes[node.key] = node

    @classmethod
    def from_mesh(cls, mesh: CubeMesh, grid_size: Optional[int] = None) -> NavGraph:
        """
        Build the graph from cube-sphere geometry.

        Every triangle is mapped to the cell it covers; each cell must end up
        with exactly two triangles, whose shared edge gives its world
        position.

        Args:
            mesh: Triangle list with per-face parameterization
            grid_size: Cells per face edge (inferred from the triangle count if None)
        """
        start_time = time.time()
        if grid_size is None:
            grid_size = mesh.infer_grid_size()

        graph = cls(grid_size)
        logger.info(f"Building navigation graph: {mesh.triangle_count} triangles, "
                    f"{graph.total_nodes} nodes (grid {grid_size}x{grid_size})")

        for triangle_index in range(mesh.triangle_count):
            face, x, y = mesh.cell_from_triangle(triangle_index, grid_size)
            graph.get_node(face, x, y).add_triangle(mesh.triangle_positions(triangle_index))

        for node in graph.nodes.values():
            node.calculate_world_position()

        elapsed = time.time() - start_time
        logger.info(f"Navigation graph built in {elapsed:.3f}s")
        return graph

    def get_node(self, face: CubeFace, x: int, y: int) -> Node:
        """Look up the node at (face, x, y)."""
        if not (0 <= x <= self.grid_max and 0 <= y <= self.grid_max):
            raise OutOfRangeCoordinateError(x, y, self.grid_size)
        return self.nodes[(face, x, y)]

    def edge_neighbour(self, face: CubeFace, direction: ConnectionDirection,
                       x: int, y: int) -> Node:
        """Node across the given edge of face from edge cell (x, y)."""
        crossing = EDGE_CROSSINGS[(face, direction)]
        nx, ny = crossing(x, y, self.grid_max)
        return self.get_node(get_connected_face(face, direction), nx, ny)

    def get_neighbors(self, node: Node) -> List[Node]:
        """
        All 8-connected neighbours of a node, walkable or not.

        An offset that leaves the face through one edge continues on the
        connected face; one that leaves through two edges at once would
        cross the cube vertex and is skipped, so corner cells have 7
        neighbours spread over three faces.
        """
        neighbors = []
        m = self.grid_max

        for dx, dy in NEIGHBOR_OFFSETS:
            nx, ny = node.x + dx, node.y + dy
            x_inside = 0 <= nx <= m
            y_inside = 0 <= ny <= m

            if x_inside and y_inside:
                neighbors.append(self.nodes[(node.face, nx, ny)])
            elif x_inside:
                direction = N if ny > m else S
                neighbors.append(self.edge_neighbour(node.face, direction, nx, node.y))
            elif y_inside:
                direction = E if nx > m else W
                neighbors.append(self.edge_neighbour(node.face, direction, node.x, ny))

        return neighbors

    def walkable_neighbors(self, node: Node) -> List[Node]:
        """Neighbours that can be stepped on."""
        return [n for n in self.get_neighbors(node) if n.walkable]

    def set_walkable(self, face: CubeFace, x: int, y: int, walkable: bool) -> None:
        self.get_node(face, x, y).walkable = walkable

    def nearest_node(self, position: Vector3) -> Node:
        """
        Node whose world position is closest to a world-space point.

        Requires world positions, i.e. a graph built with from_mesh().
        """
        if self._tree is None:
            self._build_spatial_index()
        _, idx = self._tree.query([position.x, position.y, position.z])
        return self.nodes[self._tree_keys[int(idx)]]

    def _build_spatial_index(self) -> None:
        missing = sum(1 for n in self.nodes.values() if n.world_pos is None)
        if missing:
            raise IncompleteGeometryError(
                f"{missing} nodes have no world position; build the graph from a mesh first"
            )
        self._tree_keys = list(self.nodes.keys())
        points = np.array([self.nodes[k].world_pos.to_list() for k in self._tree_keys])
        self._tree = cKDTree(points)

    def walkable_nodes(self) -> Iterator[Node]:
        """Iterate over all walkable nodes."""
        for node in self.nodes.values():
            if node.walkable:
                yield node

    @property
    def total_nodes(self) -> int:
        return len(self.nodes)

    @property
    def walkable_node_count(self) -> int:
        return sum(1 for _ in self.walkable_nodes())

    def __repr__(self) -> str:
        return (f"NavGraph(6x{self.grid_size}x{self.grid_size}, "
                f"walkable={self.walkable_node_count}/{self.total_nodes})")
