"""Visual tree rendering."""

from .nodes import VisualNode
from .renderer import RenderContext, SurfaceRenderer, camel_to_snake

__all__ = ["VisualNode", "RenderContext", "SurfaceRenderer", "camel_to_snake"]
