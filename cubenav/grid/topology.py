"""
Cube face adjacency.

Each face carries its own 2D grid frame (x to the east, y to the north).
FACE_CONNECTIONS records, in that local frame, which face lies across each
edge. Every other relation (direction lookup, opposite faces) is derived from
it so the tables can never disagree.
"""

from __future__ import annotations
from enum import Enum
from typing import Dict, Tuple

from ..errors import UnreachableTopologyError


class CubeFace(Enum):
    """The six faces of the cube."""
    FRONT = "front"
    TOP = "top"
    BACK = "back"
    BOTTOM = "bottom"
    RIGHT = "right"
    LEFT = "left"


class ConnectionDirection(Enum):
    """Edge of a face, seen from the face's own frame."""
    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"
    NONE = "none"


N = ConnectionDirection.NORTH
E = ConnectionDirection.EAST
S = ConnectionDirection.SOUTH
W = ConnectionDirection.WEST

OPPOSITE_FACES: Dict[CubeFace, CubeFace] = {
    CubeFace.FRONT: CubeFace.BACK,
    CubeFace.BACK: CubeFace.FRONT,
    CubeFace.TOP: CubeFace.BOTTOM,
    CubeFace.BOTTOM: CubeFace.TOP,
    CubeFace.RIGHT: CubeFace.LEFT,
    CubeFace.LEFT: CubeFace.RIGHT,
}

FACE_CONNECTIONS: Dict[CubeFace, Dict[ConnectionDirection, CubeFace]] = {
    CubeFace.FRONT:  {N: CubeFace.TOP,   E: CubeFace.RIGHT, S: CubeFace.BOTTOM, W: CubeFace.LEFT},
    CubeFace.TOP:    {N: CubeFace.BACK,  E: CubeFace.RIGHT, S: CubeFace.FRONT,  W: CubeFace.LEFT},
    CubeFace.BACK:   {N: CubeFace.TOP,   E: CubeFace.LEFT,  S: CubeFace.BOTTOM, W: CubeFace.RIGHT},
    CubeFace.BOTTOM: {N: CubeFace.FRONT, E: CubeFace.RIGHT, S: CubeFace.BACK,   W: CubeFace.LEFT},
    CubeFace.RIGHT:  {N: CubeFace.TOP,   E: CubeFace.BACK,  S: CubeFace.BOTTOM, W: CubeFace.FRONT},
    CubeFace.LEFT:   {N: CubeFace.TOP,   E: CubeFace.FRONT, S: CubeFace.BOTTOM, W: CubeFace.BACK},
}

_DIRECTION_LOOKUP: Dict[Tuple[CubeFace, CubeFace], ConnectionDirection] = {
    (face, other): direction
    for face, edges in FACE_CONNECTIONS.items()
    for direction, other in edges.items()
}

# Clockwise order, used for quarter-turn arithmetic
COMPASS: Tuple[ConnectionDirection, ...] = (N, E, S, W)

# Unit step in a face's (x, y) frame
DIRECTION_VECTORS: Dict[ConnectionDirection, Tuple[int, int]] = {
    N: (0, 1),
    E: (1, 0),
    S: (0, -1),
    W: (-1, 0),
}


def is_connected_face(start_face: CubeFace, end_face: CubeFace) -> bool:
    """True unless end_face is the face opposite start_face."""
    return end_face is not OPPOSITE_FACES[start_face]


def get_connection_direction(start_face: CubeFace,
                             end_face: CubeFace) -> ConnectionDirection:
    """
    Edge of start_face (in start_face's frame) that end_face is attached to.

    Returns ConnectionDirection.NONE when the faces share no edge, i.e. they
    are opposite or identical.
    """
    return _DIRECTION_LOOKUP.get((start_face, end_face), ConnectionDirection.NONE)


def get_connected_face(face: CubeFace, direction: ConnectionDirection) -> CubeFace:
    """Face lying across the given edge of face."""
    edges = FACE_CONNECTIONS[face]
    if direction not in edges:
        raise UnreachableTopologyError(
            f"{face.name} has no neighbour in direction {direction.name}"
        )
    return edges[direction]


def is_opposite_direction(dir1: ConnectionDirection, dir2: ConnectionDirection) -> bool:
    """True for north/south and east/west pairs."""
    if dir1 is ConnectionDirection.NONE or dir2 is ConnectionDirection.NONE:
        return False
    return rotate_direction(dir1, 2) is dir2


def rotate_direction(direction: ConnectionDirection,
                     quarter_turns: int) -> ConnectionDirection:
    """Rotate a compass direction clockwise by a number of quarter turns (may be negative)."""
    if direction is ConnectionDirection.NONE:
        raise UnreachableTopologyError("Cannot rotate ConnectionDirection.NONE")
    return COMPASS[(COMPASS.index(direction) + quarter_turns) % 4]
