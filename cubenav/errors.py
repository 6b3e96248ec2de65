"""Exception types raised by the navigation core."""


class CubeNavError(Exception):
    """Base class for all cube-sphere navigation errors."""


class OutOfRangeCoordinateError(CubeNavError, ValueError):
    """A grid coordinate lies outside [0, grid_max]. Signals a caller bug."""

    def __init__(self, x: int, y: int, grid_size: int):
        self.x = x
        self.y = y
        self.grid_size = grid_size
        super().__init__(
            f"Coordinates ({x}, {y}) are outside the {grid_size}x{grid_size} grid"
        )


class UnmappedFaceError(CubeNavError, LookupError):
    """A surface point or triangle matches no face parameterization."""


class IncompleteGeometryError(CubeNavError):
    """The navigation mesh could not be built from the given geometry."""


class UnreachableTopologyError(CubeNavError, RuntimeError):
    """A topology table was queried for a structurally impossible combination."""
