"""Session Handler.

Host-facing glue: send a prompt to a message source, apply the batch it
returns, render the result. The source is whatever network client the host
uses; the interpreter itself performs no I/O.
"""

from typing import Any, Protocol, runtime_checkable

from pydantic import ValidationError as PydanticValidationError

from ..core import get_logger, LogContext, PromptRequest, Settings, ValidationError, get_settings
from ..core.id import new_batch_id, new_session_id
from ..interpreter.processor import BatchResult, MessageProcessor
from ..render.nodes import VisualNode
from ..render.renderer import SurfaceRenderer

logger = get_logger(__name__)


@runtime_checkable
class MessageSource(Protocol):
    """Anything that turns user text into a message batch."""

    async def fetch(self, user_text: str) -> str | bytes | list[Any]:
        """Return a raw batch: JSON text or an already-decoded list."""
        ...


class A2UISession:
    """Binds a message source to one processor/renderer pair."""

    def __init__(
        self,
        source: MessageSource,
        processor: MessageProcessor,
        renderer: SurfaceRenderer,
        settings: Settings | None = None,
    ) -> None:
        self.source = source
        self.processor = processor
        self.renderer = renderer
        self.settings = settings or get_settings()
        self.session_id = new_session_id()

    async def send(self, text: str) -> BatchResult:
        """
        Send a prompt and apply the returned batch.

        Args:
            text: User prompt

        Returns:
            BatchResult of the applied batch

        Raises:
            ValidationError: If the prompt is empty or too long
            UnprocessableBatchError: If the source returned a malformed batch
        """
        prompt = self._validate(text)
        batch_id = new_batch_id()

        with LogContext(session_id=self.session_id, batch_id=batch_id):
            logger.info("prompt_sent", message=prompt[:50])
            raw = await self.source.fetch(prompt)
            # No await below: the batch applies as one critical section
            result = self.processor.apply_batch(raw)
            logger.info("batch_received", applied=result.applied, surfaces=result.surfaces)
            return result

    def render(self, surface_id: str) -> VisualNode | None:
        """Render one surface (None if absent or rootless)."""
        return self.renderer.render_surface(surface_id)

    def render_all(self) -> dict[str, VisualNode | None]:
        """Render every live surface, keyed by id, in creation order."""
        with self.processor.store.lock:
            return {
                surface.surface_id: self.renderer.render_surface(surface.surface_id)
                for surface in self.processor.store.list_surfaces()
            }

    def _validate(self, text: str) -> str:
        try:
            validated = PromptRequest(message=text)
        except PydanticValidationError as e:
            logger.error("validation", error=str(e))
            raise ValidationError(f"Invalid prompt: {e.errors()[0]['msg']}") from e

        if len(validated.message) > self.settings.max_prompt_length:
            logger.error("validation", error="prompt_too_long", length=len(validated.message))
            raise ValidationError(
                f"Prompt exceeds maximum length {self.settings.max_prompt_length}"
            )
        return validated.message
