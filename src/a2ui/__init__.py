"""
A2UI protocol interpreter
Applies agent-produced UI message batches to surfaces and renders them.
"""

from .core import Settings, UnprocessableBatchError, ValidationError, create_container, get_settings
from .interpreter import BatchResult, MessageProcessor, Surface, SurfaceStore, replay
from .protocol import parse_batch, validate_batch
from .render import SurfaceRenderer, VisualNode
from .handlers import A2UISession, MessageSource

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "get_settings",
    "create_container",
    "ValidationError",
    "UnprocessableBatchError",
    "Surface",
    "SurfaceStore",
    "MessageProcessor",
    "BatchResult",
    "replay",
    "parse_batch",
    "validate_batch",
    "SurfaceRenderer",
    "VisualNode",
    "A2UISession",
    "MessageSource",
]
