"""Grid coordinate on one cube face and the closed-form transforms used to unfold faces."""

from __future__ import annotations
from enum import Enum

from ..errors import OutOfRangeCoordinateError
from .topology import CubeFace


class GridZone(Enum):
    """
    Region of a face relative to its two diagonals.

    The *_MIDDLE zones are the four triangles between the diagonals; the
    corner-named zones are the diagonal cells themselves, split at the
    horizontal midline. Only used to pick opposite-face unfoldings.
    """
    TOP_LEFT = "top_left"
    TOP_MIDDLE = "top_middle"
    TOP_RIGHT = "top_right"
    LEFT_MIDDLE = "left_middle"
    RIGHT_MIDDLE = "right_middle"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_MIDDLE = "bottom_middle"
    BOTTOM_RIGHT = "bottom_right"


class GridPoint:
    """
    A point (x, y) on the grid of one cube face.

    x grows to the east, y to the north. The transforms mutate the point and
    return it so calls can be chained; they are meant for temporary copies
    (see copy()), never for a node's own coordinate. After a copy has been
    translated past the grid (unfolding), only the octile metric may be
    applied to it.
    """

    __slots__ = ('face', 'x', 'y', 'grid_size')

    def __init__(self, face: CubeFace, x: int, y: int, grid_size: int):
        self.face = face
        self.x = x
        self.y = y
        self.grid_size = grid_size

    @property
    def grid_max(self) -> int:
        return self.grid_size - 1

    def copy(self) -> GridPoint:
        return GridPoint(self.face, self.x, self.y, self.grid_size)

    def in_range(self) -> bool:
        return 0 <= self.x <= self.grid_max and 0 <= self.y <= self.grid_max

    def _check_in_range(self) -> None:
        if not self.in_range():
            raise OutOfRangeCoordinateError(self.x, self.y, self.grid_size)

    def rotate_90_cw(self, count: int = 1) -> GridPoint:
        """Move the point as if the grid were rotated clockwise count times."""
        self._check_in_range()
        for _ in range(count % 4):
            self.x, self.y = self.y, self.grid_max - self.x
        return self

    def rotate_90_ccw(self, count: int = 1) -> GridPoint:
        """Inverse of rotate_90_cw."""
        self._check_in_range()
        for _ in range(count % 4):
            self.x, self.y = self.grid_max - self.y, self.x
        return self

    def mirror_horizontal(self) -> GridPoint:
        """Flip about the horizontal midline: (0, 0) -> (0, max)."""
        self._check_in_range()
        self.y = self.grid_max - self.y
        return self

    def mirror_vertical(self) -> GridPoint:
        """Flip about the vertical midline: (0, 0) -> (max, 0)."""
        self._check_in_range()
        self.x = self.grid_max - self.x
        return self

    def determine_grid_zone(self) -> GridZone:
        """
        Classify the point into one of the eight GridZones.

        Works on 1-based scan indices: the cell's own index and the indices
        of the two diagonal cells on the same row. Cells exactly on a
        diagonal get a corner-named zone, and whether the row lies in the
        top or bottom half decides which of the two.
        """
        self._check_in_range()
        size = self.grid_size
        grid_index = self.y * size + self.x + 1
        bottom_left_to_top_right = self.y * size + self.y + 1
        top_left_to_bottom_right = self.y * size + size - self.y

        top_half = self.y >= size // 2
        bottom_half = not top_half

        if (grid_index < top_left_to_bottom_right and top_half or
                grid_index < bottom_left_to_top_right and bottom_half):
            return GridZone.LEFT_MIDDLE
        if (grid_index > bottom_left_to_top_right and top_half or
                grid_index > top_left_to_bottom_right and bottom_half):
            return GridZone.RIGHT_MIDDLE
        if top_left_to_bottom_right < grid_index < bottom_left_to_top_right and top_half:
            return GridZone.TOP_MIDDLE
        if bottom_left_to_top_right < grid_index < top_left_to_bottom_right and bottom_half:
            return GridZone.BOTTOM_MIDDLE

        if top_half:
            if grid_index == top_left_to_bottom_right:
                return GridZone.TOP_LEFT
            return GridZone.TOP_RIGHT
        if grid_index == top_left_to_bottom_right:
            return GridZone.BOTTOM_RIGHT
        return GridZone.BOTTOM_LEFT

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GridPoint):
            return False
        return (self.face is other.face and self.x == other.x and
                self.y == other.y and self.grid_size == other.grid_size)

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"GridPoint({self.face.name}, {self.x}, {self.y})"
