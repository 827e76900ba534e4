"""Input validation with strong typing."""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field, field_validator, ConfigDict


class ValidationError(Exception):
    """Validation failed."""

    pass


class UnprocessableBatchError(ValidationError):
    """A message batch is structurally invalid and was not applied."""

    def __init__(self, message: str, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index


@dataclass(frozen=True)
class ValidationResult:
    """Validation error with details (for Result pattern)."""

    message: str
    field: str | None = None
    value: Any | None = None


class RequestValidator(BaseModel):
    """Base validator with strict configuration."""

    model_config = ConfigDict(
        strict=True, validate_assignment=True, extra="forbid", frozen=True  # Immutable by default
    )


class PromptRequest(RequestValidator):
    """Validated user prompt handed to the message source."""

    message: str = Field(min_length=1)

    @field_validator("message")
    @classmethod
    def validate_message(cls, v: str) -> str:
        """Ensure message is non-empty after stripping."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Message cannot be empty")
        return stripped
