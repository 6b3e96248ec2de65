from .topology import (
    CubeFace,
    ConnectionDirection,
    get_connection_direction,
    get_connected_face,
    is_connected_face,
    is_opposite_direction,
)
from .grid_point import GridPoint, GridZone
from .node import Node, Vector3
from .nav_graph import NavGraph
