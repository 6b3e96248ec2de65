"""Vector3 and Node classes for the cube-sphere navigation graph."""

from __future__ import annotations
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..errors import IncompleteGeometryError, OutOfRangeCoordinateError
from .grid_point import GridPoint
from .topology import CubeFace

NodeKey = Tuple[CubeFace, int, int]


class Vector3:
    """3D vector with arithmetic operations."""

    __slots__ = ('x', 'y', 'z')

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector3:
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __rmul__(self, scalar: float) -> Vector3:
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> Vector3:
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector3):
            return False
        return (abs(self.x - other.x) < 1e-9 and
                abs(self.y - other.y) < 1e-9 and
                abs(self.z - other.z) < 1e-9)

    def __hash__(self) -> int:
        return hash((round(self.x, 6), round(self.y, 6), round(self.z, 6)))

    def __repr__(self) -> str:
        return f"Vector3({self.x:.3f}, {self.y:.3f}, {self.z:.3f})"

    def magnitude(self) -> float:
        """Length of the vector."""
        return math.sqrt(self.x ** 2 + self.y ** 2 + self.z ** 2)

    def normalized(self) -> Vector3:
        """Return unit vector in same direction."""
        mag = self.magnitude()
        if mag < 1e-9:
            return Vector3(0, 0, 0)
        return self / mag

    def distance_to(self, other: Vector3) -> float:
        return (other - self).magnitude()

    def midpoint(self, other: Vector3) -> Vector3:
        """Point halfway between this vector and other."""
        return (self + other) * 0.5

    def to_tuple(self) -> Tuple[float, float, float]:
        """Convert to tuple."""
        return (self.x, self.y, self.z)

    def to_list(self) -> list:
        """Convert to list."""
        return [self.x, self.y, self.z]

    @classmethod
    def from_array(cls, arr: Sequence[float]) -> Vector3:
        """Create from any length-3 sequence (list, tuple, numpy row)."""
        return cls(arr[0], arr[1], arr[2])


class Node:
    """
    One grid cell of the navigation graph.

    Identity is (face, x, y). The node only holds build-time data: the two
    mesh triangles covering the cell, its world position and the walkable
    flag. Search scores live in the router, not here.
    """

    __slots__ = ('face', 'x', 'y', 'walkable', 'world_pos', 'triangles')

    def __init__(self, face: CubeFace, x: int, y: int, grid_size: int,
                 walkable: bool = True):
        if not (0 <= x < grid_size and 0 <= y < grid_size):
            raise OutOfRangeCoordinateError(x, y, grid_size)
        self.face = face
        self.x = x
        self.y = y
        self.walkable = walkable
        self.world_pos: Optional[Vector3] = None
        self.triangles: List[np.ndarray] = []

    @property
    def key(self) -> NodeKey:
        return (self.face, self.x, self.y)

    def to_grid_point(self, grid_size: int) -> GridPoint:
        """A fresh GridPoint with this node's coordinates."""
        return GridPoint(self.face, self.x, self.y, grid_size)

    def add_triangle(self, triangle: np.ndarray) -> None:
        """
        Attach one of the two triangles covering this cell.

        Args:
            triangle: (3, 3) array of world-space vertex positions
        """
        if len(self.triangles) >= 2:
            raise IncompleteGeometryError(
                f"Node {self.face.name} ({self.x}, {self.y}) already has both triangles"
            )
        self.triangles.append(np.asarray(triangle, dtype=np.float64))

    def calculate_world_position(self) -> Vector3:
        """
        Set world_pos to the midpoint of the edge the two triangles share.

        The shared edge is the cell's diagonal, so its midpoint is the
        cell's centroid.
        """
        if len(self.triangles) != 2:
            raise IncompleteGeometryError(
                f"Node {self.face.name} ({self.x}, {self.y}) has "
                f"{len(self.triangles)} triangle(s), expected 2"
            )
        first, second = self.triangles
        second_keys = {tuple(np.round(v, 9)) for v in second}
        shared = [v for v in first if tuple(np.round(v, 9)) in second_keys]
        if len(shared) != 2:
            raise IncompleteGeometryError(
                f"Triangles of node {self.face.name} ({self.x}, {self.y}) share "
                f"{len(shared)} vertices, expected 2"
            )
        self.world_pos = Vector3.from_array(shared[0]).midpoint(Vector3.from_array(shared[1]))
        return self.world_pos

    def __repr__(self) -> str:
        status = "walkable" if self.walkable else "blocked"
        return f"Node({self.face.name}, {self.x}, {self.y}, {status})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return False
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)
