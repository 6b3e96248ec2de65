from .surface_distance import (
    ExtendedGrid,
    surface_distance,
    calculate_shortest_distance,
    connected_face_distance,
    opposing_face_distance,
)
from .astar import AStarRouter, PathResult, PathStatus
from .path_smoother import PathSmoother, compute_path_length, path_to_list
