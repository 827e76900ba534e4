"""Slash-delimited paths into a JSON-like data model.

Lookups never raise: a type mismatch, missing key or out-of-range index
resolves to ``None``. Writes create intermediate mappings as needed and
return the (possibly replaced) tree.
"""

from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence
from typing import Any

from ..core.logging_config import get_logger

logger = get_logger(__name__)

RELATIVE_PREFIX = "./"


def split_path(path: str | None) -> list[str]:
    """Split a path into segments, discarding empty ones ("/a/b" == "a/b/")."""
    if not path:
        return []
    return [segment for segment in path.split("/") if segment]


def is_root_path(path: str | None) -> bool:
    """True for "/", "" and None (and any path made only of slashes)."""
    return not split_path(path)


def join_path(base: str, segment: str | int) -> str:
    """Context path of one template item: ``{base}/{segment}``."""
    return f"{base.rstrip('/')}/{segment}"


def resolve_path(path: str, context_path: str = "") -> str:
    """
    Compose a possibly-relative path with the enclosing template context.

    "./name" inside context "/items/1" becomes "/items/1/name"; "." is the
    context item itself. Anything else is absolute from the data model root.
    """
    if path == ".":
        return context_path or "/"
    if path.startswith(RELATIVE_PREFIX):
        return context_path + path[1:]
    return path


def _as_index(segment: str) -> int | None:
    # Non-negative decimal integers only: "-1", "+1" and " 1" are not indices
    if segment.isdigit() and segment.isascii():
        return int(segment)
    return None


def _is_sequence(node: Any) -> bool:
    return isinstance(node, Sequence) and not isinstance(node, (str, bytes, bytearray))


def _is_container(node: Any) -> bool:
    return isinstance(node, (MutableMapping, MutableSequence))


def _child(node: Any, segment: str) -> tuple[bool, Any]:
    if isinstance(node, Mapping):
        if segment in node:
            return True, node[segment]
        return False, None
    if _is_sequence(node):
        index = _as_index(segment)
        if index is not None and index < len(node):
            return True, node[index]
    return False, None


def get_value_at_path(tree: Any, path: str | None) -> Any:
    """
    Read the value at path.

    Args:
        tree: Data model root
        path: Slash-delimited path; root path returns the tree itself

    Returns:
        The value, or None when any segment does not resolve
    """
    current = tree
    for segment in split_path(path):
        found, current = _child(current, segment)
        if not found:
            return None
    return current


def set_value_at_path(tree: Any, path: str | None, value: Any) -> Any:
    """
    Assign value at path, creating empty mappings for missing intermediates.

    A root path replaces the whole tree. On a sequence, an index equal to its
    length appends. A segment that cannot be followed (scalar intermediate,
    index past the end, non-numeric index into a sequence) leaves the tree
    untouched.

    Args:
        tree: Data model root (mutated in place)
        path: Slash-delimited target path
        value: Value to store

    Returns:
        The tree to keep: ``value`` for a root path, otherwise ``tree``
    """
    segments = split_path(path)
    if not segments:
        return value

    if not _is_container(tree):
        logger.warning("path_not_writable", path=path, reason="scalar_root")
        return tree

    current: Any = tree
    for segment in segments[:-1]:
        if isinstance(current, MutableMapping):
            nxt = current.get(segment)
            if not _is_container(nxt):
                if segment in current and current[segment] is not None:
                    logger.warning("path_not_writable", path=path, segment=segment)
                    return tree
                nxt = {}
                current[segment] = nxt
            current = nxt
        else:
            index = _as_index(segment)
            if index is None or index > len(current):
                logger.warning("path_not_writable", path=path, segment=segment)
                return tree
            if index == len(current):
                current.append({})
            nxt = current[index]
            if not _is_container(nxt):
                if nxt is not None:
                    logger.warning("path_not_writable", path=path, segment=segment)
                    return tree
                nxt = {}
                current[index] = nxt
            current = nxt

    last = segments[-1]
    if isinstance(current, MutableMapping):
        current[last] = value
        return tree

    index = _as_index(last)
    if index is None or index > len(current):
        logger.warning("path_not_writable", path=path, segment=last)
    elif index == len(current):
        current.append(value)
    else:
        current[index] = value
    return tree


def delete_value_at_path(tree: Any, path: str | None) -> Any:
    """
    Remove the entry at path. Removing a sequence element shifts later ones.

    Args:
        tree: Data model root (mutated in place)
        path: Slash-delimited target path

    Returns:
        The tree to keep: an empty mapping for a root path, otherwise ``tree``
    """
    segments = split_path(path)
    if not segments:
        return {}

    parent = get_value_at_path(tree, "/".join(segments[:-1]))
    last = segments[-1]

    if isinstance(parent, MutableMapping):
        parent.pop(last, None)
    elif isinstance(parent, MutableSequence):
        index = _as_index(last)
        if index is not None and index < len(parent):
            del parent[index]
    return tree
