"""Fast, tolerant JSON decoding for model output, with multiple backends."""

from typing import Any
import json

import msgspec
import orjson
from json_repair import repair_json


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


def strip_code_fences(text: str) -> str:
    """
    Remove a surrounding markdown code block, if any.

    Models are told to answer with raw JSON but regularly wrap it in
    ```json ... ``` anyway.

    Args:
        text: Raw model output

    Returns:
        Text with the outer fence removed and whitespace stripped
    """
    working_text = text.strip()

    if working_text.startswith("```json"):
        working_text = working_text[7:]
    elif working_text.startswith("```"):
        working_text = working_text[3:]
    if working_text.endswith("```"):
        working_text = working_text[:-3]

    return working_text.strip()


def extract_json_boundaries(text: str, opener: str = "[", closer: str = "]") -> tuple[int, int] | None:
    """
    Find the outermost JSON container in text.

    Args:
        text: Text potentially containing JSON
        opener: Opening bracket of the expected container
        closer: Closing bracket of the expected container

    Returns:
        (start, end) slice bounds or None if not found
    """
    start = text.find(opener)
    end = text.rfind(closer)

    if start == -1 or end == -1 or end < start:
        return None

    return (start, end + 1)


def _decode(json_str: str, repair: bool) -> Any:
    # Try msgspec first (fastest)
    try:
        return msgspec.json.Decoder().decode(json_str.encode("utf-8"))
    except msgspec.DecodeError:
        pass

    # Standard library, then json_repair as last resort
    try:
        return json.loads(json_str)
    except (json.JSONDecodeError, RecursionError) as e:
        if not repair:
            raise JSONParseError(f"Invalid JSON: {e}", e)

    try:
        repaired = repair_json(json_str)
        return json.loads(repaired)
    except Exception as repair_error:
        raise JSONParseError(f"JSON repair failed: {repair_error}", repair_error)


def extract_json(text: str, repair: bool = True) -> Any:
    """
    Decode a JSON document from model output.

    Strips code fences and decodes the whole text. When that fails, the
    outermost array (or, failing that, object) is cut out of surrounding prose
    and decoded with msgspec, the standard library and finally json_repair.

    Args:
        text: Text containing JSON
        repair: Attempt to repair invalid JSON with json_repair

    Returns:
        Decoded JSON value

    Raises:
        JSONParseError: If parsing fails
    """
    cleaned = strip_code_fences(text)
    if not cleaned:
        raise JSONParseError("Empty JSON document")

    try:
        return msgspec.json.Decoder().decode(cleaned.encode("utf-8"))
    except msgspec.DecodeError:
        pass

    boundaries = extract_json_boundaries(cleaned, "[", "]") or extract_json_boundaries(
        cleaned, "{", "}"
    )
    if boundaries is None:
        raise JSONParseError("No JSON value found in text")

    start, end = boundaries
    return _decode(cleaned[start:end], repair)


def safe_json_dumps(obj: Any, **kwargs: Any) -> str:
    """
    Encode object to JSON string using fastest available library.

    Args:
        obj: Object to encode
        **kwargs: Additional arguments (indent, sort_keys)

    Returns:
        JSON string
    """
    indent = kwargs.get("indent", 0)
    sort_keys = kwargs.get("sort_keys", False)

    if indent == 0:
        option = orjson.OPT_SORT_KEYS if sort_keys else 0
        try:
            return orjson.dumps(obj, option=option).decode("utf-8")
        except (TypeError, ValueError):
            # e.g. integers outside the 64-bit range
            pass

    if indent == 0 and not sort_keys:
        try:
            return msgspec.json.Encoder().encode(obj).decode("utf-8")
        except (TypeError, ValueError, OverflowError):
            pass

    # Pretty-printed output or fallback (most compatible)
    return json.dumps(
        obj,
        indent=indent if indent > 0 else None,
        sort_keys=sort_keys,
        ensure_ascii=False,
        default=str,
    )


def validate_json_size(data: str | bytes, max_size: int, name: str = "JSON") -> None:
    """
    Validate raw JSON size.

    Args:
        data: JSON text to validate
        max_size: Maximum allowed size in bytes
        name: Name for error messages

    Raises:
        JSONParseError: If size exceeds limit
    """
    size = len(data.encode("utf-8")) if isinstance(data, str) else len(data)
    if size > max_size:
        raise JSONParseError(f"{name} size {size} bytes exceeds maximum {max_size} bytes")


def json_depth_exceeds(obj: Any, max_depth: int, current_depth: int = 0) -> bool:
    """Return True when obj nests deeper than max_depth containers."""
    if current_depth > max_depth:
        return True

    if isinstance(obj, dict):
        return any(json_depth_exceeds(v, max_depth, current_depth + 1) for v in obj.values())
    if isinstance(obj, list):
        return any(json_depth_exceeds(v, max_depth, current_depth + 1) for v in obj)
    return False


def validate_json_depth(obj: Any, max_depth: int = 32) -> None:
    """
    Validate JSON nesting depth to prevent runaway recursion downstream.

    Args:
        obj: Decoded value to validate
        max_depth: Maximum allowed nesting depth

    Raises:
        JSONParseError: If depth exceeds limit
    """
    if json_depth_exceeds(obj, max_depth):
        raise JSONParseError(f"JSON nesting depth exceeds maximum {max_depth}")
