"""
Tests for A* search over the navigation graph.
"""

import pytest

from cubenav.grid.grid_point import GridPoint
from cubenav.grid.nav_graph import NEIGHBOR_OFFSETS, NavGraph
from cubenav.grid.topology import CubeFace
from cubenav.routing.astar import AStarRouter, PathStatus
from cubenav.routing.surface_distance import calculate_shortest_distance, surface_distance

F = CubeFace


def path_cost(graph, path):
    n = graph.grid_size
    return sum(
        surface_distance(a.to_grid_point(n), b.to_grid_point(n))
        for a, b in zip(path, path[1:])
    )


def assert_connected(graph, path):
    for a, b in zip(path, path[1:]):
        assert b in graph.get_neighbors(a), (a, b)


class TestFound:
    """Successful searches."""

    def test_same_face_cost_is_octile(self, open_graph):
        router = AStarRouter(open_graph)
        result = router.find_path_between((F.FRONT, 1, 1), (F.FRONT, 5, 3))
        assert result.status is PathStatus.FOUND
        assert result.success
        assert result.total_cost == 48
        assert result.path[0].key == (F.FRONT, 1, 1)
        assert result.path[-1].key == (F.FRONT, 5, 3)
        assert len(result.path) == 5
        assert_connected(open_graph, result.path)

    def test_open_face_matches_octile_everywhere(self):
        graph = NavGraph(5)
        router = AStarRouter(graph)
        start = (F.TOP, 2, 2)
        for x in range(5):
            for y in range(5):
                result = router.find_path_between(start, (F.TOP, x, y))
                expected = calculate_shortest_distance(
                    GridPoint(F.TOP, 2, 2, 5), GridPoint(F.TOP, x, y, 5)
                )
                assert result.total_cost == expected

    def test_across_one_seam(self):
        graph = NavGraph(4)
        result = AStarRouter(graph).find_path_between((F.FRONT, 1, 3), (F.TOP, 1, 1))
        assert result.success
        assert result.total_cost == 20
        assert [n.key for n in result.path] == [
            (F.FRONT, 1, 3), (F.TOP, 1, 0), (F.TOP, 1, 1)
        ]

    def test_to_opposite_face(self):
        graph = NavGraph(4)
        result = AStarRouter(graph).find_path_between((F.FRONT, 1, 3), (F.BACK, 2, 3))
        assert result.success
        assert result.total_cost == 50
        assert len(result.path) == 6
        assert_connected(graph, result.path)
        assert path_cost(graph, result.path) == result.total_cost

    def test_start_is_goal(self, open_graph):
        result = AStarRouter(open_graph).find_path_between((F.LEFT, 3, 3), (F.LEFT, 3, 3))
        assert result.success
        assert result.total_cost == 0
        assert [n.key for n in result.path] == [(F.LEFT, 3, 3)]

    def test_detours_around_wall(self, open_graph):
        for y in range(0, 7):
            open_graph.set_walkable(F.FRONT, 4, y, False)
        router = AStarRouter(open_graph)
        result = router.find_path_between((F.FRONT, 2, 0), (F.FRONT, 6, 0))
        assert result.success
        assert all(n.walkable for n in result.path)
        assert result.total_cost > 40
        assert path_cost(open_graph, result.path) == result.total_cost

    def test_unwalkable_start_is_goal(self, open_graph):
        open_graph.set_walkable(F.FRONT, 1, 1, False)
        result = AStarRouter(open_graph).find_path_between((F.FRONT, 1, 1), (F.FRONT, 1, 1))
        assert result.status is PathStatus.FOUND
        assert result.total_cost == 0
        assert [n.key for n in result.path] == [(F.FRONT, 1, 1)]

    def test_start_need_not_be_walkable(self, open_graph):
        open_graph.set_walkable(F.FRONT, 0, 0, False)
        result = AStarRouter(open_graph).find_path_between((F.FRONT, 0, 0), (F.FRONT, 2, 0))
        assert result.success
        assert result.total_cost == 20

    def test_repeated_searches_are_independent(self, open_graph):
        router = AStarRouter(open_graph)
        first = router.find_path_between((F.FRONT, 0, 0), (F.RIGHT, 3, 3))
        router.find_path_between((F.BOTTOM, 7, 7), (F.TOP, 0, 0))
        again = router.find_path_between((F.FRONT, 0, 0), (F.RIGHT, 3, 3))
        assert first.total_cost == again.total_cost
        assert [n.key for n in first.path] == [n.key for n in again.path]

    def test_to_dict(self):
        graph = NavGraph(4)
        data = AStarRouter(graph).find_path_between((F.FRONT, 1, 3), (F.TOP, 1, 1)).to_dict()
        assert data['status'] == 'found'
        assert data['total_cost'] == 20
        assert data['path'][0] == ['front', 1, 3]


class TestNotFound:
    """No path and cancellation."""

    def test_walled_in_start(self):
        graph = NavGraph(4)
        for dx, dy in NEIGHBOR_OFFSETS:
            graph.set_walkable(F.FRONT, 1 + dx, 1 + dy, False)
        result = AStarRouter(graph).find_path_between((F.FRONT, 1, 1), (F.FRONT, 3, 3))
        assert result.status is PathStatus.NO_PATH
        assert not result.success
        assert result.path == []
        assert result.total_cost is None
        assert result.nodes_explored == 1

    def test_blocked_goal(self, open_graph):
        open_graph.set_walkable(F.TOP, 2, 2, False)
        result = AStarRouter(open_graph).find_path_between((F.FRONT, 0, 0), (F.TOP, 2, 2))
        assert result.status is PathStatus.NO_PATH
        assert result.nodes_explored == 0

    def test_expansion_budget_cancels(self, open_graph):
        router = AStarRouter(open_graph, max_expansions=1)
        result = router.find_path_between((F.FRONT, 0, 0), (F.BACK, 0, 0))
        assert result.status is PathStatus.CANCELLED
        assert result.nodes_explored == 1

    def test_negative_budget_rejected(self, open_graph):
        with pytest.raises(ValueError):
            AStarRouter(open_graph, max_expansions=-1)
