"""
Path smoothing using spline interpolation.

Turns the zig-zag of grid cell centres returned by the router into a smooth
world-space polyline for renderers and agents following the path.
"""

from __future__ import annotations
import numpy as np
from typing import List, Optional
from scipy.interpolate import CubicSpline

from ..grid.node import Vector3


class PathSmoother:
    """
    Smooths paths using cubic spline interpolation.

    Takes a list of waypoints and produces a smooth curve that passes
    through the original points. With surface_radius set, every output
    point is pushed back onto the sphere of that radius, so the curve does
    not cut through a cube-sphere.
    """

    def __init__(self, points_per_segment: int = 5,
                 surface_radius: Optional[float] = None):
        """
        Initialize path smoother.

        Args:
            points_per_segment: Number of interpolated points between each
                               pair of original waypoints
            surface_radius: Radius of the sphere to project onto (None: no projection)
        """
        if points_per_segment < 1:
            raise ValueError("points_per_segment must be at least 1")
        self.points_per_segment = points_per_segment
        self.surface_radius = surface_radius

    def smooth(
        self,
        path: List[Vector3],
        num_points: Optional[int] = None,
        preserve_endpoints: bool = True
    ) -> List[Vector3]:
        """
        Smooth a path using cubic spline interpolation.

        Args:
            path: List of waypoints (Vector3)
            num_points: Total number of output points (overrides points_per_segment)
            preserve_endpoints: Ensure first/last points match exactly

        Returns:
            Smoothed path as list of Vector3
        """
        if len(path) < 2:
            return list(path)

        if num_points is None:
            num_points = (len(path) - 1) * self.points_per_segment + 1

        if len(path) == 2:
            smoothed = self._linear_interpolate(path[0], path[1], num_points)
        else:
            points = np.array([p.to_list() for p in path])

            # Parameterize by cumulative chord length
            t = self._compute_parameter(points)

            # One spline evaluates all three coordinates
            spline = CubicSpline(t, points, axis=0, bc_type='natural')
            t_smooth = np.linspace(t[0], t[-1], num_points)
            smoothed = [Vector3.from_array(row) for row in spline(t_smooth)]

        if self.surface_radius is not None:
            smoothed = [self._project(p) for p in smoothed]

        # Ensure exact endpoints if requested
        if preserve_endpoints and len(smoothed) >= 2:
            smoothed[0] = Vector3(path[0].x, path[0].y, path[0].z)
            smoothed[-1] = Vector3(path[-1].x, path[-1].y, path[-1].z)

        return smoothed

    def resample(
        self,
        path: List[Vector3],
        target_spacing: float
    ) -> List[Vector3]:
        """
        Resample path to have approximately uniform point spacing.

        Args:
            path: List of waypoints
            target_spacing: Desired distance between consecutive points

        Returns:
            Resampled path with uniform spacing
        """
        if len(path) < 2:
            return list(path)

        total_length = compute_path_length(path)
        num_points = max(2, int(total_length / target_spacing) + 1)

        return self.smooth(path, num_points=num_points)

    def _project(self, point: Vector3) -> Vector3:
        direction = point.normalized()
        if direction.magnitude() == 0:
            return point
        return direction * self.surface_radius

    def _compute_parameter(self, points: np.ndarray) -> np.ndarray:
        """
        Compute parameterization based on cumulative chord length.

        Repeated points would give a non-increasing parameter, which
        CubicSpline rejects, so zero-length steps get a tiny length.
        """
        diffs = np.diff(points, axis=0)
        distances = np.sqrt(np.sum(diffs ** 2, axis=1))
        distances = np.maximum(distances, 1e-9)

        t = np.zeros(len(points))
        t[1:] = np.cumsum(distances)

        # Normalize to [0, 1] for numerical stability
        return t / t[-1]

    def _linear_interpolate(
        self,
        start: Vector3,
        end: Vector3,
        num_points: int
    ) -> List[Vector3]:
        """Simple linear interpolation between two points."""
        if num_points < 2:
            return [start, end]

        result = []
        for i in range(num_points):
            t = i / (num_points - 1)
            result.append(start + (end - start) * t)

        return result


def compute_path_length(path: List[Vector3]) -> float:
    """Total length of a polyline."""
    total = 0.0
    for i in range(len(path) - 1):
        total += path[i].distance_to(path[i + 1])
    return total


def path_to_list(path: List[Vector3]) -> List[List[float]]:
    """Convert path to list of [x, y, z] for JSON serialization."""
    return [p.to_list() for p in path]
