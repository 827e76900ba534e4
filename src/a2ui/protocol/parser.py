"""Batch Parser - model output to typed protocol messages with validation."""

import copy
from typing import Any

from returns.result import Failure, Result, Success

from ..core.config import Settings, get_settings
from ..core.json import JSONParseError, extract_json, json_depth_exceeds, validate_json_size
from ..core.logging_config import get_logger
from ..core.validate import UnprocessableBatchError, ValidationResult
from .messages import Message, parse_message

logger = get_logger(__name__)


class BatchParser:
    """Parses a raw message batch (JSON text or decoded list) into messages."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    def parse(self, raw: str | bytes | list[Any]) -> list[Message]:
        """
        Parse a whole batch. Nothing is returned unless every element is
        structurally valid, so a malformed batch is never partially applied.

        Args:
            raw: JSON text (code fences tolerated) or an already-decoded list

        Returns:
            Messages in batch order; elements targeting no surface are dropped

        Raises:
            UnprocessableBatchError: If the batch is not an array of messages
        """
        batch = self._decode(raw) if isinstance(raw, (str, bytes)) else raw

        if not isinstance(batch, list):
            logger.error("invalid_batch", type=type(batch).__name__)
            raise UnprocessableBatchError(
                f"Message batch must be an array, got {type(batch).__name__}"
            )

        if len(batch) > self.settings.max_messages:
            logger.error("batch_too_long", count=len(batch), limit=self.settings.max_messages)
            raise UnprocessableBatchError(
                f"Message batch has {len(batch)} messages, maximum is {self.settings.max_messages}"
            )

        if json_depth_exceeds(batch, self.settings.max_json_depth):
            logger.error("batch_too_deep", limit=self.settings.max_json_depth)
            raise UnprocessableBatchError(
                f"Message batch nesting exceeds maximum depth {self.settings.max_json_depth}"
            )

        if batch is raw:
            # Parsed messages never alias caller-owned input
            batch = copy.deepcopy(batch)

        messages: list[Message] = []
        for index, element in enumerate(batch):
            message = parse_message(element, index)
            if message is not None:
                messages.append(message)

        logger.debug("batch_parsed", received=len(batch), parsed=len(messages))
        return messages

    def _decode(self, raw: str | bytes) -> Any:
        text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
        try:
            validate_json_size(text, self.settings.max_batch_bytes, "Message batch")
            return extract_json(text, repair=False)
        except JSONParseError as e:
            logger.error("json_parse_failed", error=str(e))
            raise UnprocessableBatchError(f"Invalid JSON: {e}") from e


def parse_batch(raw: str | bytes | list[Any], settings: Settings | None = None) -> list[Message]:
    """
    Convenience function to parse a message batch

    Args:
        raw: Batch JSON text or decoded list
        settings: Limits to enforce (defaults to environment settings)

    Returns:
        Parsed messages
    """
    parser = BatchParser(settings)
    return parser.parse(raw)


def validate_batch(
    raw: str | bytes | list[Any], settings: Settings | None = None
) -> Result[list[Message], ValidationResult]:
    """
    Parse a message batch (Result pattern version).

    Args:
        raw: Batch JSON text or decoded list
        settings: Limits to enforce

    Returns:
        Success with the messages, or Failure describing why the batch is unprocessable
    """
    try:
        return Success(parse_batch(raw, settings))
    except UnprocessableBatchError as e:
        field = None if e.index is None else f"[{e.index}]"
        return Failure(ValidationResult(str(e), field=field))
