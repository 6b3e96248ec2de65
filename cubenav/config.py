"""
Configuration for the cube-sphere navigation demo.

Centralized configuration that can be modified for different scenarios.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .grid.topology import CubeFace

# (face name, x, y), e.g. ("front", 0, 0)
CellSpec = Tuple[str, int, int]


@dataclass
class MeshConfig:
    """Cube-sphere geometry configuration."""
    grid_size: int = 8  # cells along one face edge
    radius: float = 1.0
    spherify: bool = True  # False keeps a flat-faced cube

    def __post_init__(self):
        if self.grid_size < 1:
            raise ValueError(f"grid_size must be positive, got {self.grid_size}")
        if self.radius <= 0:
            raise ValueError(f"radius must be positive, got {self.radius}")


@dataclass
class ObstacleConfig:
    """Random obstacle placement."""
    fraction: float = 0.1  # share of cells marked unwalkable

    def __post_init__(self):
        if not 0 <= self.fraction < 1:
            raise ValueError(f"obstacle fraction must be in [0, 1), got {self.fraction}")


@dataclass
class RoutingConfig:
    """Routing algorithm configuration."""
    max_expansions: Optional[int] = None  # search budget, None = unlimited
    path_smoothing_points: int = 5  # points per segment for smoothing

    def __post_init__(self):
        if self.max_expansions is not None and self.max_expansions < 0:
            raise ValueError(f"max_expansions must be non-negative, got {self.max_expansions}")
        if self.path_smoothing_points < 1:
            raise ValueError("path_smoothing_points must be at least 1")


@dataclass
class ScenarioConfig:
    """A single routing scenario."""
    start: CellSpec
    end: CellSpec
    name: Optional[str] = None

    def start_cell(self) -> Tuple[CubeFace, int, int]:
        return parse_cell(self.start)

    def end_cell(self) -> Tuple[CubeFace, int, int]:
        return parse_cell(self.end)


def parse_cell(spec: CellSpec) -> Tuple[CubeFace, int, int]:
    """Turn ("front", 1, 2) into (CubeFace.FRONT, 1, 2)."""
    face_name, x, y = spec
    try:
        face = CubeFace(face_name.lower())
    except ValueError:
        raise ValueError(f"Unknown face {face_name!r}") from None
    return face, int(x), int(y)


@dataclass
class DemoConfig:
    """Complete demo configuration."""
    mesh: MeshConfig = field(default_factory=MeshConfig)
    obstacles: ObstacleConfig = field(default_factory=ObstacleConfig)
    routing: RoutingConfig = field(default_factory=RoutingConfig)
    scenarios: List[ScenarioConfig] = field(default_factory=list)
    random_seed: int = 42
    output_dir: str = "data/output"

    def __post_init__(self):
        # Default scenarios if none provided
        if not self.scenarios:
            m = self.mesh.grid_size - 1
            mid = self.mesh.grid_size // 2

            self.scenarios = [
                # Corner to corner on one face
                ScenarioConfig(start=("front", 0, 0), end=("front", m, m), name="same_face"),
                # Across the north seam
                ScenarioConfig(start=("front", mid, 0), end=("top", mid, m), name="adjacent_face"),
                # To the far side of the cube
                ScenarioConfig(start=("front", mid, mid), end=("back", mid, mid), name="opposite_face"),
            ]

        for scenario in self.scenarios:
            for _, x, y in (scenario.start_cell(), scenario.end_cell()):
                if not (0 <= x < self.mesh.grid_size and 0 <= y < self.mesh.grid_size):
                    raise ValueError(
                        f"Scenario {scenario.name!r} cell ({x}, {y}) is outside "
                        f"the {self.mesh.grid_size}x{self.mesh.grid_size} grid"
                    )


# Preset configurations
PRESETS = {
    "demo": DemoConfig(),
    "small": DemoConfig(
        mesh=MeshConfig(grid_size=4),
        obstacles=ObstacleConfig(fraction=0.05),
    ),
    "large": DemoConfig(
        mesh=MeshConfig(grid_size=32),
        obstacles=ObstacleConfig(fraction=0.2),
        routing=RoutingConfig(path_smoothing_points=3),
    ),
}
