"""Bindable value resolution against a surface data model."""

import math
from typing import Any

from ..core.json import safe_json_dumps
from ..protocol.components import BoundValue
from .paths import get_value_at_path, resolve_path

# Checked in order; the first tag present wins, and any literal beats "path"
LITERAL_TAGS: tuple[str, ...] = ("literal_string", "literal_number", "literal_boolean", "literal_array")


def resolve_value(value: Any, data_model: Any, context_path: str = "") -> Any:
    """
    Resolve a bindable property value.

    Args:
        value: A BoundValue, or a plain scalar/array that is returned unchanged
        data_model: The surface data model
        context_path: Path of the enclosing template item ("" outside templates)

    Returns:
        The literal or bound value; None when neither is present or the path
        does not resolve
    """
    if not isinstance(value, BoundValue):
        return value

    for tag in LITERAL_TAGS:
        if value.has(tag):
            return getattr(value, tag)

    if value.path is not None:
        return get_value_at_path(data_model, resolve_path(value.path, context_path))

    return None


def to_text(value: Any) -> str:
    """Display string for a resolved value ("" when undefined)."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list, tuple)):
        return safe_json_dumps(value)
    return str(value)


def resolve_text(value: Any, data_model: Any, context_path: str = "") -> str:
    return to_text(resolve_value(value, data_model, context_path))


def resolve_number(value: Any, data_model: Any, context_path: str = "") -> float | int | None:
    """Resolve to a finite number; numeric strings are accepted, anything else is None."""
    resolved = resolve_value(value, data_model, context_path)
    if isinstance(resolved, bool):
        return None
    if isinstance(resolved, int):
        return resolved
    if isinstance(resolved, float):
        return resolved if math.isfinite(resolved) else None
    if isinstance(resolved, str):
        try:
            number = float(resolved.strip())
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


def resolve_bool(value: Any, data_model: Any, context_path: str = "", default: bool = False) -> bool:
    resolved = resolve_value(value, data_model, context_path)
    return resolved if isinstance(resolved, bool) else default
