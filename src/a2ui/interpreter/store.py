"""Surface Store - authoritative per-surface state.

Every operation is total over the current set of surfaces: an unknown surface
id is a no-op, never an error, because message producers cannot be trusted to
reference ids correctly.
"""

import copy
import threading
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from ..core.logging_config import get_logger
from ..protocol.catalog import ROOT_COMPONENT_ID
from ..protocol.components import Component
from .paths import delete_value_at_path, is_root_path, set_value_at_path

logger = get_logger(__name__)


@dataclass
class Surface:
    """One independently addressable UI: a component graph plus its data model."""

    surface_id: str
    catalog_id: str
    components: dict[str, Component] = field(default_factory=dict)
    data_model: Any = field(default_factory=dict)

    @property
    def root(self) -> Component | None:
        """The rendering entry point, if one has been sent."""
        return self.components.get(ROOT_COMPONENT_ID)

    def get_component(self, component_id: str | None) -> Component | None:
        if component_id is None:
            return None
        return self.components.get(component_id)

    def to_dict(self) -> dict[str, Any]:
        """Export as plain JSON-compatible dictionary."""
        return {
            "surfaceId": self.surface_id,
            "catalogId": self.catalog_id,
            "components": {
                cid: c.model_dump(mode="json", by_alias=True, exclude_unset=True)
                for cid, c in self.components.items()
            },
            "dataModel": copy.deepcopy(self.data_model),
        }


class SurfaceStore:
    """
    Map of live surfaces, keyed by surface id.

    Mutations return True when they changed state. ``lock`` is the store's
    single critical section: the message processor holds it for a whole batch
    and the renderer holds it while reading.
    """

    def __init__(self) -> None:
        self._surfaces: dict[str, Surface] = {}
        self.lock = threading.RLock()

    def create_surface(self, surface_id: str, catalog_id: str) -> Surface:
        """Insert an empty surface; re-creating an existing id resets it."""
        if surface_id in self._surfaces:
            logger.debug("surface_reset", surface_id=surface_id)
        surface = Surface(surface_id=surface_id, catalog_id=catalog_id)
        self._surfaces[surface_id] = surface
        return surface

    def upsert_components(self, surface_id: str, components: Iterable[Component]) -> bool:
        """Insert or fully overwrite each component at its id."""
        surface = self._surfaces.get(surface_id)
        if surface is None:
            logger.debug("unknown_surface", op="upsert_components", surface_id=surface_id)
            return False

        for component in components:
            surface.components[component.id] = component
        return True

    def set_data_model(self, surface_id: str, path: str | None, value: Any) -> bool:
        """Replace the whole data model (root path) or set the value at path."""
        surface = self._surfaces.get(surface_id)
        if surface is None:
            logger.debug("unknown_surface", op="set_data_model", surface_id=surface_id)
            return False

        value = copy.deepcopy(value)
        if is_root_path(path):
            surface.data_model = value
        else:
            base = surface.data_model if surface.data_model is not None else {}
            surface.data_model = set_value_at_path(base, path, value)
        return True

    def remove_data_model(self, surface_id: str, path: str | None) -> bool:
        """Delete the entry at path; a root path empties the data model."""
        surface = self._surfaces.get(surface_id)
        if surface is None:
            logger.debug("unknown_surface", op="remove_data_model", surface_id=surface_id)
            return False

        surface.data_model = delete_value_at_path(surface.data_model, path)
        return True

    def delete_surface(self, surface_id: str) -> bool:
        """Remove the surface entirely."""
        return self._surfaces.pop(surface_id, None) is not None

    def get_surface(self, surface_id: str) -> Surface | None:
        return self._surfaces.get(surface_id)

    def list_surfaces(self) -> list[Surface]:
        """Live surfaces in creation order."""
        return list(self._surfaces.values())

    def clear(self) -> None:
        """Drop every surface."""
        self._surfaces.clear()

    def snapshot(self) -> dict[str, dict[str, Any]]:
        """Plain-dict dump of every surface, for debugging and tests."""
        with self.lock:
            return {sid: s.to_dict() for sid, s in self._surfaces.items()}

    def __len__(self) -> int:
        return len(self._surfaces)

    def __contains__(self, surface_id: object) -> bool:
        return surface_id in self._surfaces

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._surfaces))
