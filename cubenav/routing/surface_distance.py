"""
Estimated shortest surface distance between two grid points on the cube.

Distances are integer octile distances (orthogonal step 10, diagonal step 14)
measured after unfolding the end point's face into the start face's plane:

- same face: no unfolding needed
- adjacent faces: the end face is hinged onto the shared edge
- opposite faces: every plausible route over one or two side faces is laid
  out flat and the shortest result wins

The opposite-face case is a heuristic estimate, not an exact geodesic.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

from ..errors import UnreachableTopologyError
from ..grid.grid_point import GridPoint, GridZone
from ..grid.topology import (
    CubeFace,
    ConnectionDirection,
    DIRECTION_VECTORS,
    OPPOSITE_FACES,
    get_connected_face,
    get_connection_direction,
    is_connected_face,
    rotate_direction,
)

ORTHOGONAL_COST = 10
DIAGONAL_COST = 14

N = ConnectionDirection.NORTH
E = ConnectionDirection.EAST
S = ConnectionDirection.SOUTH
W = ConnectionDirection.WEST


class ExtendedGrid(Enum):
    """
    Placement of the opposite face in an unfolded layout around the start face.

    The start face sits in the centre. *_MIDDLE placements put the opposite
    face straight beyond one side face; the others go through a side face
    and then the side face hinged on its left or right edge.
    """
    TOP_LEFT = "top_left"
    TOP_MIDDLE = "top_middle"
    TOP_RIGHT = "top_right"
    RIGHT_TOP = "right_top"
    RIGHT_MIDDLE = "right_middle"
    RIGHT_BOT = "right_bot"
    BOT_RIGHT = "bot_right"
    BOT_MIDDLE = "bot_middle"
    BOT_LEFT = "bot_left"
    LEFT_BOT = "left_bot"
    LEFT_MIDDLE = "left_middle"
    LEFT_TOP = "left_top"


# Quarter turns (clockwise) that bring a face into its neighbour's frame,
# keyed by (edge of the start face, edge of the end face) of their seam.
SEAM_QUARTER_TURNS: Dict[Tuple[ConnectionDirection, ConnectionDirection], int] = {
    (N, S): 0, (E, W): 0, (S, N): 0, (W, E): 0,
    (N, N): 2, (E, E): 2, (S, S): 2, (W, W): 2,
    (N, E): 1, (E, S): 1, (S, W): 1, (W, N): 1,
    (N, W): 3, (E, N): 3, (S, E): 3, (W, S): 3,
}

# GridPoint transforms realising each rotation
QUARTER_TURN_RECIPES: Dict[int, Tuple[str, ...]] = {
    0: (),
    1: ('rotate_90_cw',),
    2: ('mirror_horizontal', 'mirror_vertical'),
    3: ('rotate_90_ccw',),
}

# Steps through the unfolded layout, in the start face's frame, that lead
# from the start face onto the opposite face.
EXTENDED_GRID_ROUTES: Dict[ExtendedGrid, Tuple[ConnectionDirection, ...]] = {
    ExtendedGrid.TOP_LEFT:     (N, W, N),
    ExtendedGrid.TOP_MIDDLE:   (N, N),
    ExtendedGrid.TOP_RIGHT:    (N, E, N),
    ExtendedGrid.RIGHT_TOP:    (E, N, E),
    ExtendedGrid.RIGHT_MIDDLE: (E, E),
    ExtendedGrid.RIGHT_BOT:    (E, S, E),
    ExtendedGrid.BOT_RIGHT:    (S, E, S),
    ExtendedGrid.BOT_MIDDLE:   (S, S),
    ExtendedGrid.BOT_LEFT:     (S, W, S),
    ExtendedGrid.LEFT_BOT:     (W, S, W),
    ExtendedGrid.LEFT_MIDDLE:  (W, W),
    ExtendedGrid.LEFT_TOP:     (W, N, W),
}

# Placements worth evaluating for a start point in each zone. Routes that
# would double back past the far corner of the start face are left out.
ZONE_CANDIDATES: Dict[GridZone, Tuple[ExtendedGrid, ...]] = {
    GridZone.TOP_LEFT: (
        ExtendedGrid.TOP_MIDDLE, ExtendedGrid.TOP_RIGHT,
        ExtendedGrid.RIGHT_MIDDLE,
        ExtendedGrid.BOT_MIDDLE,
        ExtendedGrid.LEFT_BOT, ExtendedGrid.LEFT_MIDDLE,
    ),
    GridZone.TOP_MIDDLE: (
        ExtendedGrid.TOP_LEFT, ExtendedGrid.TOP_MIDDLE, ExtendedGrid.TOP_RIGHT,
        ExtendedGrid.RIGHT_MIDDLE, ExtendedGrid.RIGHT_BOT,
        ExtendedGrid.BOT_MIDDLE,
        ExtendedGrid.LEFT_BOT, ExtendedGrid.LEFT_MIDDLE,
    ),
    GridZone.TOP_RIGHT: (
        ExtendedGrid.TOP_LEFT, ExtendedGrid.TOP_MIDDLE,
        ExtendedGrid.RIGHT_MIDDLE, ExtendedGrid.RIGHT_BOT,
        ExtendedGrid.BOT_MIDDLE,
        ExtendedGrid.LEFT_MIDDLE,
    ),
    GridZone.BOTTOM_LEFT: (
        ExtendedGrid.TOP_MIDDLE,
        ExtendedGrid.RIGHT_MIDDLE,
        ExtendedGrid.BOT_RIGHT, ExtendedGrid.BOT_MIDDLE,
        ExtendedGrid.LEFT_MIDDLE, ExtendedGrid.LEFT_TOP,
    ),
    GridZone.BOTTOM_MIDDLE: (
        ExtendedGrid.TOP_MIDDLE,
        ExtendedGrid.RIGHT_TOP, ExtendedGrid.RIGHT_MIDDLE,
        ExtendedGrid.BOT_RIGHT, ExtendedGrid.BOT_MIDDLE, ExtendedGrid.BOT_LEFT,
        ExtendedGrid.LEFT_MIDDLE, ExtendedGrid.LEFT_TOP,
    ),
    GridZone.BOTTOM_RIGHT: (
        ExtendedGrid.TOP_MIDDLE,
        ExtendedGrid.RIGHT_TOP, ExtendedGrid.RIGHT_MIDDLE,
        ExtendedGrid.BOT_MIDDLE, ExtendedGrid.BOT_LEFT,
        ExtendedGrid.LEFT_MIDDLE,
    ),
    GridZone.LEFT_MIDDLE: (
        ExtendedGrid.TOP_MIDDLE, ExtendedGrid.TOP_RIGHT,
        ExtendedGrid.RIGHT_MIDDLE,
        ExtendedGrid.BOT_RIGHT, ExtendedGrid.BOT_MIDDLE,
        ExtendedGrid.LEFT_BOT, ExtendedGrid.LEFT_MIDDLE, ExtendedGrid.LEFT_TOP,
    ),
    GridZone.RIGHT_MIDDLE: (
        ExtendedGrid.TOP_LEFT, ExtendedGrid.TOP_MIDDLE,
        ExtendedGrid.RIGHT_TOP, ExtendedGrid.RIGHT_MIDDLE, ExtendedGrid.RIGHT_BOT,
        ExtendedGrid.BOT_MIDDLE, ExtendedGrid.BOT_LEFT,
        ExtendedGrid.LEFT_MIDDLE,
    ),
}


@dataclass(frozen=True)
class Unfolding:
    """
    How to lay the opposite face out for one start face and placement.

    transforms are GridPoint method names applied to the end point;
    offset is in whole grids, (+) moving the end point, (-) the start point.
    """
    transforms: Tuple[str, ...]
    offset: Tuple[int, int]


def _build_unfoldings() -> Dict[Tuple[CubeFace, ExtendedGrid], Unfolding]:
    """
    Derive the Unfolding of every (start face, placement) pair.

    Walks each placement's route across the adjacency table. A layout step
    is translated into the current face's own frame by undoing the rotation
    accumulated so far; the face across that edge then adds its seam
    rotation.
    """
    table = {}
    for start_face in CubeFace:
        for placement, route in EXTENDED_GRID_ROUTES.items():
            face = start_face
            quarter_turns = 0
            offset_x, offset_y = 0, 0

            for step in route:
                local_edge = rotate_direction(step, -quarter_turns)
                next_face = get_connected_face(face, local_edge)
                back_edge = get_connection_direction(next_face, face)
                quarter_turns = (quarter_turns + SEAM_QUARTER_TURNS[(local_edge, back_edge)]) % 4
                dx, dy = DIRECTION_VECTORS[step]
                offset_x, offset_y = offset_x + dx, offset_y + dy
                face = next_face

            if face is not OPPOSITE_FACES[start_face]:
                raise UnreachableTopologyError(
                    f"Placement {placement.name} from {start_face.name} ends on {face.name}"
                )
            table[(start_face, placement)] = Unfolding(
                QUARTER_TURN_RECIPES[quarter_turns], (offset_x, offset_y)
            )
    return table


UNFOLDINGS: Dict[Tuple[CubeFace, ExtendedGrid], Unfolding] = _build_unfoldings()


def calculate_shortest_distance(start: GridPoint, end: GridPoint) -> int:
    """Octile distance between two points in one plane (faces are ignored)."""
    x_diff = abs(start.x - end.x)
    y_diff = abs(start.y - end.y)

    if x_diff < y_diff:
        return x_diff * DIAGONAL_COST + (y_diff - x_diff) * ORTHOGONAL_COST
    return y_diff * DIAGONAL_COST + (x_diff - y_diff) * ORTHOGONAL_COST


def surface_distance(start: GridPoint, end: GridPoint) -> int:
    """
    Estimated shortest distance over the cube surface from start to end.

    Neither argument is modified.
    """
    if start.face is end.face:
        return calculate_shortest_distance(start, end)

    if is_connected_face(start.face, end.face):
        return connected_face_distance(start, end)

    return opposing_face_distance(start, end)


def unfold_connected(start: GridPoint, end: GridPoint) -> Tuple[GridPoint, GridPoint]:
    """
    Copies of start and end laid out on one plane, end's face hinged onto
    the seam it shares with start's face.
    """
    dir1 = get_connection_direction(start.face, end.face)
    dir2 = get_connection_direction(end.face, start.face)
    if dir1 is ConnectionDirection.NONE or dir2 is ConnectionDirection.NONE:
        raise UnreachableTopologyError(
            f"{start.face.name} and {end.face.name} do not share an edge"
        )

    start = start.copy()
    end = end.copy()

    quarter_turns = SEAM_QUARTER_TURNS[(dir1, dir2)]
    if quarter_turns == 2:
        end.rotate_90_cw(2)
    elif quarter_turns == 1:
        end.rotate_90_cw()
    elif quarter_turns == 3:
        end.rotate_90_ccw()

    size = start.grid_size
    if dir1 is N:
        end.y += size
    elif dir1 is E:
        end.x += size
    elif dir1 is S:
        start.y += size
    else:
        start.x += size

    return start, end


def connected_face_distance(start: GridPoint, end: GridPoint) -> int:
    """Distance between points on two faces that share an edge."""
    start, end = unfold_connected(start, end)
    return calculate_shortest_distance(start, end)


def unfold_extended(extended_grid: ExtendedGrid, start: GridPoint,
                    end: GridPoint) -> Tuple[GridPoint, GridPoint]:
    """Copies of start and end laid out with end's (opposite) face at extended_grid."""
    if end.face is not OPPOSITE_FACES[start.face]:
        raise UnreachableTopologyError(
            f"{end.face.name} is not opposite {start.face.name}"
        )
    unfolding = UNFOLDINGS[(start.face, extended_grid)]

    start = start.copy()
    end = end.copy()
    for transform in unfolding.transforms:
        getattr(end, transform)()

    size = start.grid_size
    offset_x, offset_y = unfolding.offset
    if offset_x > 0:
        end.x += offset_x * size
    else:
        start.x -= offset_x * size
    if offset_y > 0:
        end.y += offset_y * size
    else:
        start.y -= offset_y * size

    return start, end


def distance_on_extended_grid(extended_grid: ExtendedGrid, start: GridPoint,
                              end: GridPoint) -> int:
    """One candidate distance between points on opposite faces."""
    start, end = unfold_extended(extended_grid, start, end)
    return calculate_shortest_distance(start, end)


def opposing_face_distance(start: GridPoint, end: GridPoint) -> int:
    """
    Distance between points on opposite faces.

    The minimum over the placements listed for the start point's zone.
    """
    zone = start.determine_grid_zone()
    return min(
        distance_on_extended_grid(grid, start, end)
        for grid in ZONE_CANDIDATES[zone]
    )
