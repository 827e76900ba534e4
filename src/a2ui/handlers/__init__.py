"""Host-facing handlers."""

from .session import A2UISession, MessageSource

__all__ = ["A2UISession", "MessageSource"]
