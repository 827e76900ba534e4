"""
Message Processor
Folds an ordered message batch over a surface store.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from ..core.config import Settings, get_settings
from ..core.logging_config import get_logger
from ..protocol.messages import (
    CreateSurface,
    DeleteSurface,
    Message,
    UpdateComponents,
    UpdateDataModel,
)
from ..protocol.parser import BatchParser
from .store import SurfaceStore

logger = get_logger(__name__)

OP_ADD = "add"
OP_REPLACE = "replace"
OP_REMOVE = "remove"


@dataclass
class BatchResult:
    """Outcome of applying one batch."""

    applied: int = 0
    ignored: int = 0
    surfaces: list[str] = field(default_factory=list)

    def touch(self, surface_id: str) -> None:
        if surface_id not in self.surfaces:
            self.surfaces.append(surface_id)


class MessageProcessor:
    """
    Applies protocol messages to a SurfaceStore.

    Messages apply strictly in list order, so later messages observe the
    effects of earlier ones in the same batch. A batch is one critical
    section on the store lock.
    """

    def __init__(self, store: SurfaceStore, settings: Settings | None = None):
        self.store = store
        self.settings = settings or get_settings()
        self.parser = BatchParser(self.settings)

    def apply_batch(self, raw: str | bytes | list[Any]) -> BatchResult:
        """
        Parse and apply a raw batch.

        Args:
            raw: Batch JSON text or an already-decoded list

        Returns:
            BatchResult with applied/ignored counts

        Raises:
            UnprocessableBatchError: If the batch is malformed (nothing is applied)
        """
        messages = self.parser.parse(raw)
        return self.apply(messages)

    def apply(self, messages: Iterable[Message]) -> BatchResult:
        """Apply parsed messages in order; unknown surfaces are no-ops."""
        result = BatchResult()

        with self.store.lock:
            for message in messages:
                if self._apply_one(message):
                    result.applied += 1
                    result.touch(message.surface_id)
                else:
                    result.ignored += 1

        logger.info(
            "batch_applied",
            applied=result.applied,
            ignored=result.ignored,
            surfaces=result.surfaces,
        )
        return result

    def _apply_one(self, message: Message) -> bool:
        if isinstance(message, CreateSurface):
            catalog_id = message.catalog_id or self.settings.default_catalog_id
            self.store.create_surface(message.surface_id, catalog_id)
            return True

        if isinstance(message, UpdateComponents):
            return self.store.upsert_components(message.surface_id, message.components)

        if isinstance(message, UpdateDataModel):
            return self._update_data_model(message)

        if isinstance(message, DeleteSurface):
            return self.store.delete_surface(message.surface_id)

        logger.warning("unhandled_message", type=type(message).__name__)
        return False

    def _update_data_model(self, message: UpdateDataModel) -> bool:
        if message.op == OP_REMOVE:
            return self.store.remove_data_model(message.surface_id, message.path)

        if message.op not in (None, OP_ADD, OP_REPLACE):
            logger.debug("unknown_op_treated_as_set", op=message.op, surface_id=message.surface_id)

        if not message.has_value:
            logger.debug("data_model_update_without_value", surface_id=message.surface_id)
            return False

        return self.store.set_data_model(message.surface_id, message.path, message.value)


def replay(messages: Iterable[Message], settings: Settings | None = None) -> SurfaceStore:
    """
    Build a fresh store from a message log.

    Args:
        messages: Parsed messages, in order
        settings: Settings for the processor

    Returns:
        The resulting store
    """
    store = SurfaceStore()
    MessageProcessor(store, settings).apply(messages)
    return store
