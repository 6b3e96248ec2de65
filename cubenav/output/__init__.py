from .renderer import PathRenderer, PolylineRenderer
from .serializer import RouteSerializer, ScenarioData, DemoOutput
