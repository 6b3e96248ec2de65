"""
Path renderers.

A renderer receives the node path produced by the router and turns it into
whatever its consumer draws. The polyline renderer keeps smoothed
world-space curves, ready to hand to a viewer.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Optional

from ..errors import IncompleteGeometryError
from ..grid.node import Node, Vector3
from ..routing.path_smoother import PathSmoother, compute_path_length


class PathRenderer(ABC):
    """Consumer of finished paths."""

    @abstractmethod
    def render(self, path: List[Node]) -> None:
        """Render an ordered node path (start first, goal last)."""
        pass


class PolylineRenderer(PathRenderer):
    """Collects one smoothed world-space polyline per rendered path."""

    def __init__(self, smoother: Optional[PathSmoother] = None):
        self.smoother = smoother or PathSmoother()
        self.polylines: List[List[Vector3]] = []

    def render(self, path: List[Node]) -> None:
        positions = []
        for node in path:
            if node.world_pos is None:
                raise IncompleteGeometryError(f"{node} has no world position")
            positions.append(node.world_pos)
        self.polylines.append(self.smoother.smooth(positions))

    @property
    def last(self) -> Optional[List[Vector3]]:
        return self.polylines[-1] if self.polylines else None

    def total_length(self) -> float:
        """Summed length of every collected polyline."""
        return sum(compute_path_length(p) for p in self.polylines)

    def clear(self) -> None:
        self.polylines.clear()
