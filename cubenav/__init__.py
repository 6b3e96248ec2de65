"""Grid-based pathfinding on the surface of a cube-sphere."""

__version__ = "0.1.0"
