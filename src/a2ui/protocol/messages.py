"""Protocol messages: a closed union, one model per message kind."""

from collections.abc import Mapping
from typing import Annotated, Any, ClassVar

from pydantic import BeforeValidator

from ..core.logging_config import get_logger
from ..core.validate import UnprocessableBatchError
from .components import Component, ProtocolModel, parse_component

logger = get_logger(__name__)


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _to_components(value: Any) -> tuple[Component, ...]:
    if not isinstance(value, list):
        return ()
    parsed = (parse_component(item) for item in value)
    return tuple(c for c in parsed if c is not None)


class CreateSurface(ProtocolModel):
    """Create (or reset) a surface."""

    kind: ClassVar[str] = "createSurface"

    surface_id: str
    catalog_id: Annotated[str | None, BeforeValidator(_str_or_none)] = None


class UpdateComponents(ProtocolModel):
    """Insert or fully overwrite components by id."""

    kind: ClassVar[str] = "updateComponents"

    surface_id: str
    components: Annotated[tuple[Component, ...], BeforeValidator(_to_components)] = ()


class UpdateDataModel(ProtocolModel):
    """Set (or remove) a value in the surface data model."""

    kind: ClassVar[str] = "updateDataModel"

    surface_id: str
    path: Annotated[str | None, BeforeValidator(_str_or_none)] = None
    op: Annotated[str | None, BeforeValidator(_str_or_none)] = None
    value: Any = None

    @property
    def has_value(self) -> bool:
        """True if a value was sent, even an explicit null."""
        return "value" in self.model_fields_set


class DeleteSurface(ProtocolModel):
    """Remove a surface entirely."""

    kind: ClassVar[str] = "deleteSurface"

    surface_id: str


Message = CreateSurface | UpdateComponents | UpdateDataModel | DeleteSurface

# First kind present wins when an element carries several
MESSAGE_TYPES: tuple[type[ProtocolModel], ...] = (
    CreateSurface,
    UpdateComponents,
    UpdateDataModel,
    DeleteSurface,
)
MESSAGE_KINDS: tuple[str, ...] = tuple(m.kind for m in MESSAGE_TYPES)


def parse_message(raw: Any, index: int = 0) -> Message | None:
    """
    Parse one batch element into its message variant.

    Args:
        raw: Decoded batch element
        index: Position in the batch (for error reporting)

    Returns:
        The parsed message, or None if it targets no surface and was dropped

    Raises:
        UnprocessableBatchError: If the element is structurally invalid
    """
    if not isinstance(raw, Mapping):
        raise UnprocessableBatchError(
            f"Message {index} must be an object, got {type(raw).__name__}", index
        )

    present = [m for m in MESSAGE_TYPES if m.kind in raw]
    if not present:
        raise UnprocessableBatchError(
            f"Message {index} has no recognized kind (expected one of {', '.join(MESSAGE_KINDS)})",
            index,
        )

    model = present[0]
    if len(present) > 1:
        logger.warning(
            "multiple_message_kinds",
            index=index,
            applied=model.kind,
            ignored=[m.kind for m in present[1:]],
        )

    payload = raw[model.kind]
    if not isinstance(payload, Mapping):
        raise UnprocessableBatchError(f"Message {index}: '{model.kind}' must be an object", index)

    surface_id = payload.get("surfaceId")
    if not isinstance(surface_id, str) or not surface_id:
        logger.warning("message_dropped", index=index, kind=model.kind, reason="missing_surface_id")
        return None

    return model.model_validate(dict(payload))
