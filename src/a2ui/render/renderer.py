"""
Tree Renderer
Projects surface state into a generic visual tree.

The renderer keeps no per-render state: the surface, the template context path
and the chain of components being rendered travel down the recursion in a
RenderContext, so independent surfaces can be rendered concurrently.
"""

import copy
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from ..core.config import Settings, get_settings
from ..core.logging_config import get_logger
from ..interpreter.paths import get_value_at_path, join_path, resolve_path
from ..interpreter.store import Surface, SurfaceStore
from ..interpreter.values import (
    resolve_bool,
    resolve_number,
    resolve_text,
    resolve_value,
    to_text,
)
from ..protocol import catalog
from ..protocol.catalog import enum_or_default
from ..protocol.components import (
    ButtonComponent,
    CardComponent,
    CheckBoxComponent,
    ChildrenRef,
    ColumnComponent,
    Component,
    DateTimeInputComponent,
    DividerComponent,
    ExplicitChildren,
    IconComponent,
    ImageComponent,
    ListComponent,
    ModalComponent,
    MultipleChoiceComponent,
    RowComponent,
    SliderComponent,
    TabsComponent,
    TemplateChildren,
    TextComponent,
    TextFieldComponent,
)
from .nodes import VisualNode

logger = get_logger(__name__)

_CAPITAL = re.compile(r"([A-Z])")

# TextField type -> kind of native input
_INPUT_KINDS = {"number": "number", "date": "date"}


def camel_to_snake(name: str) -> str:
    """accountCircle -> account_circle"""
    return _CAPITAL.sub(r"_\1", name).lower()


def _midpoint(low: int | float, high: int | float) -> int | float:
    if isinstance(low, int) and isinstance(high, int):
        total = low + high
        return total // 2 if total % 2 == 0 else total / 2
    # halve first so two large finite bounds cannot overflow to inf
    value = low / 2 + high / 2
    return int(value) if value.is_integer() else value


@dataclass(frozen=True)
class RenderContext:
    """Everything one recursive render step needs to know."""

    surface: Surface
    context_path: str = ""
    ancestry: frozenset[tuple[str, str]] = frozenset()
    depth: int = 0

    @property
    def data_model(self) -> Any:
        return self.surface.data_model

    def enter(self, component_id: str, context_path: str | None = None) -> "RenderContext":
        path = self.context_path if context_path is None else context_path
        return RenderContext(
            surface=self.surface,
            context_path=path,
            ancestry=self.ancestry | {(component_id, path)},
            depth=self.depth + 1,
        )


class SurfaceRenderer:
    """Renders surfaces held in a SurfaceStore. Never mutates the store."""

    def __init__(self, store: SurfaceStore, settings: Settings | None = None):
        self.store = store
        self.settings = settings or get_settings()
        self._rules: dict[type, Callable[[Any, RenderContext], VisualNode]] = {
            TextComponent: self._render_text,
            ImageComponent: self._render_image,
            IconComponent: self._render_icon,
            RowComponent: self._render_row,
            ColumnComponent: self._render_column,
            ListComponent: self._render_list,
            CardComponent: self._render_card,
            ButtonComponent: self._render_button,
            TextFieldComponent: self._render_text_field,
            DividerComponent: self._render_divider,
            SliderComponent: self._render_slider,
            CheckBoxComponent: self._render_checkbox,
            MultipleChoiceComponent: self._render_multiple_choice,
            DateTimeInputComponent: self._render_datetime_input,
            TabsComponent: self._render_tabs,
            ModalComponent: self._render_modal,
        }

    def render_surface(self, surface_id: str) -> VisualNode | None:
        """
        Render the current state of a surface.

        Args:
            surface_id: Surface to render

        Returns:
            The root visual node, or None if the surface does not exist or
            has no "root" component
        """
        with self.store.lock:
            surface = self.store.get_surface(surface_id)
            if surface is None:
                logger.debug("render_unknown_surface", surface_id=surface_id)
                return None
            if surface.root is None:
                logger.debug("render_no_root", surface_id=surface_id)
                return None

            return self.render_component(surface.root.id, RenderContext(surface))

    def render_component(
        self, component_id: str | None, context: RenderContext, context_path: str | None = None
    ) -> VisualNode | None:
        """
        Render one component by id, optionally under a new context path.

        Dangling ids, self-reentry on the same context path and recursion past
        the configured depth all render as absent (None).
        """
        component = context.surface.get_component(component_id)
        if component is None:
            return None

        path = context.context_path if context_path is None else context_path
        if (component.id, path) in context.ancestry:
            logger.warning(
                "render_cycle",
                surface_id=context.surface.surface_id,
                component_id=component.id,
                context_path=path,
            )
            return None

        if context.depth >= self.settings.max_render_depth:
            logger.warning(
                "render_depth_exceeded",
                surface_id=context.surface.surface_id,
                component_id=component.id,
                limit=self.settings.max_render_depth,
            )
            return None

        return self._dispatch(component, context.enter(component.id, path))

    def _dispatch(self, component: Component, context: RenderContext) -> VisualNode:
        rule = self._rules.get(type(component))
        if rule is None:
            return VisualNode(
                tag="unknown",
                attrs={"type": component.type},
                text=f"[Unknown: {component.type}]",
            )
        return rule(component, context)

    # ------------------------------------------------------------------
    # Children
    # ------------------------------------------------------------------

    def _render_child(self, component_id: str | None, context: RenderContext) -> tuple[VisualNode, ...]:
        node = self.render_component(component_id, context)
        return (node,) if node is not None else ()

    def _render_children(self, ref: ChildrenRef | None, context: RenderContext) -> tuple[VisualNode, ...]:
        if isinstance(ref, ExplicitChildren):
            nodes = (self.render_component(cid, context) for cid in ref.ids)
            return tuple(n for n in nodes if n is not None)

        if isinstance(ref, TemplateChildren):
            return self._expand_template(ref, context)

        return ()

    def _expand_template(self, template: TemplateChildren, context: RenderContext) -> tuple[VisualNode, ...]:
        binding = resolve_path(template.data_binding, context.context_path)
        data = get_value_at_path(context.data_model, binding)

        if isinstance(data, list):
            keys: list[Any] = list(range(len(data)))
        elif isinstance(data, Mapping):
            keys = list(data.keys())
        else:
            return ()

        nodes = []
        for key in keys:
            node = self.render_component(template.component_id, context, join_path(binding, key))
            if node is not None:
                nodes.append(node)
        return tuple(nodes)

    # ------------------------------------------------------------------
    # Per-type rules
    # ------------------------------------------------------------------

    def _render_text(self, component: TextComponent, context: RenderContext) -> VisualNode:
        role = enum_or_default(
            component.usage_hint, catalog.TEXT_USAGE_HINTS, catalog.DEFAULT_TEXT_USAGE_HINT
        )
        return VisualNode(
            tag="text",
            attrs={"role": role},
            text=resolve_text(component.text, context.data_model, context.context_path),
        )

    def _render_image(self, component: ImageComponent, context: RenderContext) -> VisualNode:
        return VisualNode(
            tag="image",
            attrs={
                "url": resolve_text(component.url, context.data_model, context.context_path),
                "fit": enum_or_default(component.fit, catalog.IMAGE_FITS, catalog.DEFAULT_IMAGE_FIT),
                "size": enum_or_default(
                    component.usage_hint, catalog.IMAGE_USAGE_HINTS, catalog.DEFAULT_IMAGE_USAGE_HINT
                ),
            },
        )

    def _render_icon(self, component: IconComponent, context: RenderContext) -> VisualNode:
        name = resolve_value(component.name, context.data_model, context.context_path)
        name = to_text(name)
        return VisualNode(
            tag="icon",
            attrs={"name": camel_to_snake(name) if name else catalog.DEFAULT_ICON_NAME},
        )

    def _layout(
        self,
        tag: str,
        direction: str,
        component: RowComponent | ColumnComponent | ListComponent,
        context: RenderContext,
    ) -> VisualNode:
        return VisualNode(
            tag=tag,
            attrs={
                "direction": direction,
                "distribution": enum_or_default(
                    component.distribution, catalog.DISTRIBUTIONS, catalog.DEFAULT_DISTRIBUTION
                ),
                "alignment": enum_or_default(
                    component.alignment, catalog.ALIGNMENTS, catalog.DEFAULT_ALIGNMENT
                ),
            },
            children=self._render_children(component.children, context),
        )

    def _render_row(self, component: RowComponent, context: RenderContext) -> VisualNode:
        return self._layout("row", "horizontal", component, context)

    def _render_column(self, component: ColumnComponent, context: RenderContext) -> VisualNode:
        return self._layout("column", "vertical", component, context)

    def _render_list(self, component: ListComponent, context: RenderContext) -> VisualNode:
        direction = enum_or_default(
            component.direction, catalog.DIRECTIONS, catalog.DEFAULT_LIST_DIRECTION
        )
        return self._layout("list", direction, component, context)

    def _render_card(self, component: CardComponent, context: RenderContext) -> VisualNode:
        return VisualNode(tag="card", children=self._render_child(component.child, context))

    def _render_button(self, component: ButtonComponent, context: RenderContext) -> VisualNode:
        return VisualNode(
            tag="button",
            attrs={
                "primary": bool(component.primary),
                "action": copy.deepcopy(component.action),
                "context_path": context.context_path,
            },
            children=self._render_child(component.child, context),
        )

    def _render_text_field(self, component: TextFieldComponent, context: RenderContext) -> VisualNode:
        field_type = enum_or_default(
            component.text_field_type, catalog.TEXT_FIELD_TYPES, catalog.DEFAULT_TEXT_FIELD_TYPE
        )
        return VisualNode(
            tag="text_field",
            attrs={
                "label": resolve_text(component.label, context.data_model, context.context_path),
                "text": resolve_text(component.text, context.data_model, context.context_path),
                "field_type": field_type,
                "multiline": field_type == "longText",
                "masked": field_type == "obscured",
                "input_kind": _INPUT_KINDS.get(field_type, "text"),
            },
        )

    def _render_divider(self, component: DividerComponent, context: RenderContext) -> VisualNode:
        return VisualNode(
            tag="divider",
            attrs={"axis": enum_or_default(component.axis, catalog.AXES, catalog.DEFAULT_AXIS)},
        )

    def _render_slider(self, component: SliderComponent, context: RenderContext) -> VisualNode:
        low = catalog.DEFAULT_SLIDER_MIN if component.min_value is None else component.min_value
        high = catalog.DEFAULT_SLIDER_MAX if component.max_value is None else component.max_value

        value = resolve_number(component.value, context.data_model, context.context_path)
        if value is None:
            value = _midpoint(low, high)

        return VisualNode(tag="slider", attrs={"min": low, "max": high, "value": value})

    def _render_checkbox(self, component: CheckBoxComponent, context: RenderContext) -> VisualNode:
        return VisualNode(
            tag="checkbox",
            attrs={
                "label": resolve_text(component.label, context.data_model, context.context_path),
                "checked": resolve_bool(component.value, context.data_model, context.context_path),
            },
        )

    def _render_multiple_choice(
        self, component: MultipleChoiceComponent, context: RenderContext
    ) -> VisualNode:
        selections = resolve_value(component.selections, context.data_model, context.context_path)
        options = [
            {
                "label": resolve_text(option.label, context.data_model, context.context_path),
                "value": copy.deepcopy(option.value),
            }
            for option in component.options
        ]
        return VisualNode(
            tag="multiple_choice",
            attrs={
                "selections": copy.deepcopy(selections) if isinstance(selections, list) else [],
                "options": options,
                "max_allowed": component.max_allowed_selections,
            },
        )

    def _render_datetime_input(
        self, component: DateTimeInputComponent, context: RenderContext
    ) -> VisualNode:
        return VisualNode(
            tag="datetime_input",
            attrs={
                "value": resolve_text(component.value, context.data_model, context.context_path),
                "enable_date": component.enable_date is not False,
                "enable_time": component.enable_time is not False,
            },
        )

    def _render_tabs(self, component: TabsComponent, context: RenderContext) -> VisualNode:
        tabs = tuple(
            VisualNode(
                tag="tab",
                attrs={"title": resolve_text(item.title, context.data_model, context.context_path)},
                children=self._render_child(item.child, context),
            )
            for item in component.tab_items
        )
        return VisualNode(tag="tabs", children=tabs)

    def _render_modal(self, component: ModalComponent, context: RenderContext) -> VisualNode:
        return VisualNode(
            tag="modal",
            children=(
                VisualNode(
                    tag="modal_entry",
                    children=self._render_child(component.entry_point_child, context),
                ),
                VisualNode(
                    tag="modal_content",
                    children=self._render_child(component.content_child, context),
                ),
            ),
        )
