"""
Tests for cube face adjacency.
"""

import pytest

from cubenav.errors import UnreachableTopologyError
from cubenav.grid.topology import (
    CubeFace,
    ConnectionDirection,
    FACE_CONNECTIONS,
    OPPOSITE_FACES,
    get_connected_face,
    get_connection_direction,
    is_connected_face,
    is_opposite_direction,
    rotate_direction,
)

N = ConnectionDirection.NORTH
E = ConnectionDirection.EAST
S = ConnectionDirection.SOUTH
W = ConnectionDirection.WEST


class TestFaceConnections:
    """Adjacency table structure."""

    def test_every_face_has_four_distinct_neighbours(self):
        for face, edges in FACE_CONNECTIONS.items():
            neighbours = set(edges.values())
            assert len(neighbours) == 4
            assert face not in neighbours
            assert OPPOSITE_FACES[face] not in neighbours

    def test_opposite_is_involution(self):
        for face in CubeFace:
            assert OPPOSITE_FACES[OPPOSITE_FACES[face]] is face

    def test_front_neighbours(self):
        assert get_connected_face(CubeFace.FRONT, N) is CubeFace.TOP
        assert get_connected_face(CubeFace.FRONT, E) is CubeFace.RIGHT
        assert get_connected_face(CubeFace.FRONT, S) is CubeFace.BOTTOM
        assert get_connected_face(CubeFace.FRONT, W) is CubeFace.LEFT

    def test_back_neighbours(self):
        assert get_connected_face(CubeFace.BACK, N) is CubeFace.TOP
        assert get_connected_face(CubeFace.BACK, E) is CubeFace.LEFT
        assert get_connected_face(CubeFace.BACK, S) is CubeFace.BOTTOM
        assert get_connected_face(CubeFace.BACK, W) is CubeFace.RIGHT

    def test_none_direction_raises(self):
        with pytest.raises(UnreachableTopologyError):
            get_connected_face(CubeFace.TOP, ConnectionDirection.NONE)


class TestConnectionDirection:
    """Direction lookup derived from the adjacency table."""

    def test_inverse_of_connected_face(self):
        for face in CubeFace:
            for direction in (N, E, S, W):
                other = get_connected_face(face, direction)
                assert get_connection_direction(face, other) is direction

    def test_both_sides_of_a_seam_agree(self):
        for face in CubeFace:
            for direction in (N, E, S, W):
                other = get_connected_face(face, direction)
                back = get_connection_direction(other, face)
                assert get_connected_face(other, back) is face

    def test_opposite_faces_have_no_direction(self):
        for face in CubeFace:
            assert get_connection_direction(face, OPPOSITE_FACES[face]) is ConnectionDirection.NONE

    def test_same_face_has_no_direction(self):
        assert get_connection_direction(CubeFace.LEFT, CubeFace.LEFT) is ConnectionDirection.NONE

    def test_is_connected_face(self):
        assert is_connected_face(CubeFace.FRONT, CubeFace.TOP)
        assert not is_connected_face(CubeFace.FRONT, CubeFace.BACK)
        assert not is_connected_face(CubeFace.RIGHT, CubeFace.LEFT)


class TestDirections:
    """Compass helpers."""

    def test_opposite_pairs(self):
        assert is_opposite_direction(N, S)
        assert is_opposite_direction(W, E)
        assert not is_opposite_direction(N, E)
        assert not is_opposite_direction(N, N)
        assert not is_opposite_direction(N, ConnectionDirection.NONE)

    @pytest.mark.parametrize("turns,expected", [(0, N), (1, E), (2, S), (3, W), (4, N), (-1, W)])
    def test_rotate_direction(self, turns, expected):
        assert rotate_direction(N, turns) is expected

    def test_rotate_none_raises(self):
        with pytest.raises(UnreachableTopologyError):
            rotate_direction(ConnectionDirection.NONE, 1)
