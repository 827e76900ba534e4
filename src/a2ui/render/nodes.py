"""Visual tree produced by the renderer."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class VisualNode:
    """
    One node of a rendered surface.

    Nodes compare structurally, so rendering unchanged state twice yields
    equal trees.
    """

    tag: str
    attrs: dict[str, Any] = field(default_factory=dict)
    children: tuple["VisualNode", ...] = ()
    text: str | None = None

    def find(self, tag: str) -> list["VisualNode"]:
        """All nodes with the given tag, depth-first in document order."""
        found = [self] if self.tag == tag else []
        for child in self.children:
            found.extend(child.find(tag))
        return found

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        result: dict[str, Any] = {"tag": self.tag, "attrs": dict(self.attrs)}
        if self.text is not None:
            result["text"] = self.text
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result
