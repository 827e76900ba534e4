"""Pytest configuration and fixtures."""

import os

import pytest

from a2ui.core import Settings, create_container
from a2ui.interpreter import MessageProcessor, SurfaceStore
from a2ui.render import SurfaceRenderer


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ["A2UI_LOG_LEVEL"] = "DEBUG"


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Test settings (explicit values, independent of the environment)."""
    return Settings(
        log_level="DEBUG",
        max_batch_bytes=64 * 1024,
        max_json_depth=32,
        max_messages=200,
        max_render_depth=16,
    )


@pytest.fixture
def di_container(settings):
    """Dependency injection container for testing."""
    return create_container(settings)


@pytest.fixture
def store():
    """Empty surface store."""
    return SurfaceStore()


@pytest.fixture
def processor(store, settings):
    """Processor bound to the test store."""
    return MessageProcessor(store, settings)


@pytest.fixture
def renderer(store, settings):
    """Renderer reading the test store."""
    return SurfaceRenderer(store, settings)


@pytest.fixture
def apply(processor, renderer):
    """Apply a decoded batch and return the rendered "main" surface."""

    def _apply(batch, surface_id="main"):
        processor.apply_batch(batch)
        return renderer.render_surface(surface_id)

    return _apply
