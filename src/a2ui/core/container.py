"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from .config import Settings, get_settings
from ..interpreter.processor import MessageProcessor
from ..interpreter.store import SurfaceStore
from ..render.renderer import SurfaceRenderer


class CoreModule(Module):
    """Core dependencies."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        """Provide settings (environment defaults unless given)."""
        return self.settings or get_settings()

    @singleton
    @provider
    def provide_store(self) -> SurfaceStore:
        """Provide the surface store singleton."""
        return SurfaceStore()

    @singleton
    @provider
    def provide_processor(self, store: SurfaceStore, settings: Settings) -> MessageProcessor:
        """Provide message processor bound to the shared store."""
        return MessageProcessor(store, settings)

    @singleton
    @provider
    def provide_renderer(self, store: SurfaceStore, settings: Settings) -> SurfaceRenderer:
        """Provide renderer reading the shared store."""
        return SurfaceRenderer(store, settings)


def create_container(settings: Settings | None = None) -> Injector:
    """Create configured injector."""
    return Injector([CoreModule(settings)])
