"""Configuration Management."""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Interpreter settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="A2UI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Batch limits
    max_batch_bytes: int = Field(
        default=512 * 1024, gt=0, description="Max size of a raw message batch"
    )
    max_json_depth: int = Field(default=32, gt=0, description="Max nesting depth of a batch")
    max_messages: int = Field(default=1_000, gt=0, description="Max messages per batch")

    # Rendering
    max_render_depth: int = Field(
        default=64, gt=0, description="Max component nesting depth when rendering"
    )

    # Protocol
    default_catalog_id: str = Field(
        default="a2ui.dev:standard:0.8", description="Catalog assumed when none is sent"
    )

    # Prompts
    max_prompt_length: int = Field(default=10_000, gt=0, description="Max user prompt length")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
