from .mesh import CubeMesh, SurfaceHit, SurfaceLocator, MeshSurfaceLocator, NearestNodeLocator
from .mock_generator import CubeSphereGenerator
