"""
A* pathfinding over the cube-sphere navigation graph.

Surface distance serves as both the step cost and the heuristic. All search
bookkeeping lives in per-call maps keyed by node identity, so a graph can be
searched repeatedly without resetting anything.
"""

from __future__ import annotations
import heapq
import itertools
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Set, Tuple

from ..grid.nav_graph import NavGraph
from ..grid.node import Node, NodeKey
from ..grid.topology import CubeFace
from .surface_distance import surface_distance

logger = logging.getLogger(__name__)


class PathStatus(Enum):
    """Outcome of a search."""
    FOUND = "found"
    NO_PATH = "no_path"
    CANCELLED = "cancelled"


@dataclass
class PathResult:
    """Result of pathfinding."""
    status: PathStatus
    path: List[Node] = field(default_factory=list)
    total_cost: Optional[int] = None
    nodes_explored: int = 0

    @property
    def success(self) -> bool:
        return self.status is PathStatus.FOUND

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'status': self.status.value,
            'path': [[n.face.value, n.x, n.y] for n in self.path],
            'total_cost': self.total_cost,
            'nodes_explored': self.nodes_explored,
        }


class AStarRouter:
    """
    A* search between two nodes of a NavGraph.

    Open nodes are ordered by f = g + h, ties broken by the lower h.
    """

    def __init__(self, graph: NavGraph, max_expansions: Optional[int] = None):
        """
        Initialize router.

        Args:
            graph: Navigation graph to search
            max_expansions: Give up (CANCELLED) after expanding this many nodes
        """
        if max_expansions is not None and max_expansions < 0:
            raise ValueError("max_expansions must be non-negative")
        self.graph = graph
        self.max_expansions = max_expansions

    def _distance(self, a: Node, b: Node) -> int:
        size = self.graph.grid_size
        return surface_distance(a.to_grid_point(size), b.to_grid_point(size))

    def find_path_between(
        self,
        start: Tuple[CubeFace, int, int],
        goal: Tuple[CubeFace, int, int]
    ) -> PathResult:
        """Find a path between two (face, x, y) cells."""
        return self.find_path(self.graph.get_node(*start), self.graph.get_node(*goal))

    def find_path(self, start_node: Node, goal_node: Node) -> PathResult:
        """
        Find a shortest walkable path from start_node to goal_node.

        The start node itself need not be walkable (an agent may stand on
        it); every other node on the path must be.

        Returns:
            PathResult; status NO_PATH when the goal cannot be reached
        """
        # Already there, whether or not the cell is walkable
        if start_node.key == goal_node.key:
            return PathResult(status=PathStatus.FOUND, path=[start_node],
                              total_cost=0, nodes_explored=1)

        if not goal_node.walkable:
            logger.info(f"Goal {goal_node} is not walkable")
            return PathResult(status=PathStatus.NO_PATH)

        result = self._astar(start_node, goal_node)

        if result.success:
            logger.debug(f"Path found {start_node} -> {goal_node}: "
                         f"{len(result.path)} nodes, cost {result.total_cost}, "
                         f"{result.nodes_explored} explored")
        else:
            logger.info(f"No path {start_node} -> {goal_node} "
                        f"({result.status.value}, {result.nodes_explored} explored)")
        return result

    def _astar(self, start_node: Node, goal_node: Node) -> PathResult:
        """
        Core A* implementation.
        """
        # Priority queue: (f_score, h_score, insertion order, node)
        counter = itertools.count()
        start_h = self._distance(start_node, goal_node)
        pq: List[Tuple[int, int, int, Node]] = [(start_h, start_h, next(counter), start_node)]

        # Cost to reach each node (g_score)
        g_scores: Dict[NodeKey, int] = {start_node.key: 0}

        # Previous node in best known path
        previous: Dict[NodeKey, Node] = {}

        # Closed set
        visited: Set[NodeKey] = set()

        while pq:
            _, _, _, current = heapq.heappop(pq)

            # Skip superseded entries
            if current.key in visited:
                continue

            if self.max_expansions is not None and len(visited) >= self.max_expansions:
                return PathResult(status=PathStatus.CANCELLED, nodes_explored=len(visited))

            visited.add(current.key)

            if current.key == goal_node.key:
                return PathResult(
                    status=PathStatus.FOUND,
                    path=self._reconstruct_path(previous, goal_node),
                    total_cost=g_scores[current.key],
                    nodes_explored=len(visited)
                )

            g_score = g_scores[current.key]
            for neighbor in self.graph.walkable_neighbors(current):
                if neighbor.key in visited:
                    continue

                tentative_g = g_score + self._distance(current, neighbor)

                if neighbor.key not in g_scores or tentative_g < g_scores[neighbor.key]:
                    g_scores[neighbor.key] = tentative_g
                    previous[neighbor.key] = current

                    h = self._distance(neighbor, goal_node)
                    heapq.heappush(pq, (tentative_g + h, h, next(counter), neighbor))

        # Frontier exhausted
        return PathResult(status=PathStatus.NO_PATH, nodes_explored=len(visited))

    def _reconstruct_path(self, previous: Dict[NodeKey, Node], goal_node: Node) -> List[Node]:
        """Follow parent links back from the goal, then reverse."""
        path = [goal_node]
        current = goal_node

        while current.key in previous:
            current = previous[current.key]
            path.append(current)

        path.reverse()
        return path
