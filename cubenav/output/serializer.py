"""JSON serialisation of routing results."""

from __future__ import annotations
import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np

from ..grid.nav_graph import NavGraph
from ..grid.node import Vector3
from ..routing.astar import PathResult
from ..routing.path_smoother import path_to_list


class NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy types."""
    def default(self, obj):
        if isinstance(obj, np.floating):
            return float(obj)
        if isinstance(obj, np.integer):
            return int(obj)
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        return super().default(obj)


@dataclass
class ScenarioData:
    """One serialised scenario."""
    scenario_id: str
    start: List[Any]
    end: List[Any]
    route: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.scenario_id,
            'start': self.start,
            'end': self.end,
            'route': self.route,
        }


@dataclass
class DemoOutput:
    """Top-level report written by the CLI."""
    grid_size: int
    radius: float
    total_nodes: int
    walkable_nodes: int
    scenarios: List[ScenarioData] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'grid': {
                'grid_size': self.grid_size,
                'radius': self.radius,
                'total_nodes': self.total_nodes,
                'walkable_nodes': self.walkable_nodes,
            },
            'scenarios': [s.to_dict() for s in self.scenarios],
        }


class RouteSerializer:
    """Builds JSON-ready dictionaries from routing results."""

    def __init__(self, precision: int = 4):
        self.precision = precision

    def serialize_path_result(
        self,
        result: PathResult,
        smoothed: Optional[List[Vector3]] = None
    ) -> Dict[str, Any]:
        """
        Args:
            result: Router output
            smoothed: Optional smoothed world-space polyline for the path
        """
        data = result.to_dict()
        if smoothed is not None:
            data['smoothed_path'] = [
                [round(c, self.precision) for c in point]
                for point in path_to_list(smoothed)
            ]
        return data

    def serialize_scenario(
        self,
        scenario_id: str,
        start: List[Any],
        end: List[Any],
        route: Dict[str, Any]
    ) -> ScenarioData:
        return ScenarioData(scenario_id=scenario_id, start=list(start), end=list(end), route=route)

    def create_demo_output(
        self,
        graph: NavGraph,
        radius: float,
        scenarios: List[ScenarioData]
    ) -> DemoOutput:
        return DemoOutput(
            grid_size=graph.grid_size,
            radius=radius,
            total_nodes=graph.total_nodes,
            walkable_nodes=graph.walkable_node_count,
            scenarios=scenarios,
        )

    def save_json(self, output: DemoOutput, path: str, indent: Optional[int] = 2) -> None:
        """Write the report, creating parent directories as needed."""
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, 'w') as f:
            json.dump(output.to_dict(), f, indent=indent, cls=NumpyEncoder)
