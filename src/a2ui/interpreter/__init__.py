"""
Protocol interpreter
Paths, bindable values, surface state and the message fold.
"""

from .paths import (
    split_path,
    join_path,
    resolve_path,
    get_value_at_path,
    set_value_at_path,
    delete_value_at_path,
)
from .values import resolve_value, resolve_text, resolve_number, resolve_bool, to_text
from .store import Surface, SurfaceStore
from .processor import BatchResult, MessageProcessor, replay

__all__ = [
    "split_path",
    "join_path",
    "resolve_path",
    "get_value_at_path",
    "set_value_at_path",
    "delete_value_at_path",
    "resolve_value",
    "resolve_text",
    "resolve_number",
    "resolve_bool",
    "to_text",
    "Surface",
    "SurfaceStore",
    "BatchResult",
    "MessageProcessor",
    "replay",
]
