"""Component records, parsed once at ingestion into typed variants.

Producers are language models, so every optional property is coerced leniently:
a value of the wrong shape becomes "absent" instead of rejecting the whole
component. Only a missing id drops a record.
"""

import math
from collections.abc import Mapping
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from ..core.logging_config import get_logger
from . import catalog

logger = get_logger(__name__)


class ProtocolModel(BaseModel):
    """Base for wire models: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


# ---------------------------------------------------------------------------
# Lenient field coercion
# ---------------------------------------------------------------------------


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _number_or_none(value: Any) -> int | float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    # Bounds must be usable as floats: no NaN, infinities or oversized ints
    try:
        if not math.isfinite(value):
            return None
    except OverflowError:
        return None
    return value


def _int_or_none(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _bool_or_none(value: Any) -> bool | None:
    return value if isinstance(value, bool) else None


class BoundValue(ProtocolModel):
    """
    A property value that is either an inline literal or a data-model path.

    Which tags were actually sent matters (a literal of ``null`` still beats a
    path), so presence is read from ``model_fields_set``.
    """

    literal_string: Any = None
    literal_number: Any = None
    literal_boolean: Any = None
    literal_array: Any = None
    path: Annotated[str | None, BeforeValidator(_str_or_none)] = None

    def has(self, field_name: str) -> bool:
        """Return True if the tag was present in the record."""
        return field_name in self.model_fields_set


def _to_bindable(value: Any) -> Any:
    if isinstance(value, BoundValue):
        return value
    if isinstance(value, Mapping):
        return BoundValue.model_validate(dict(value))
    return value


# Literal scalars/arrays pass through unchanged, mappings become BoundValue
Bindable = Annotated[Any, BeforeValidator(_to_bindable)]
EnumStr = Annotated[str | None, BeforeValidator(_str_or_none)]
ComponentId = Annotated[str | None, BeforeValidator(_str_or_none)]
Number = Annotated[int | float | None, BeforeValidator(_number_or_none)]
OptionalInt = Annotated[int | None, BeforeValidator(_int_or_none)]
OptionalBool = Annotated[bool | None, BeforeValidator(_bool_or_none)]


class ExplicitChildren(ProtocolModel):
    """Ordered list of child component ids."""

    ids: tuple[str, ...] = ()


class TemplateChildren(ProtocolModel):
    """One component definition repeated per item found at a data binding."""

    component_id: str
    data_binding: str


ChildrenRef = ExplicitChildren | TemplateChildren


def _to_children(value: Any) -> ChildrenRef | None:
    if isinstance(value, (ExplicitChildren, TemplateChildren)):
        return value
    if not isinstance(value, Mapping):
        return None

    explicit = value.get("explicitList")
    if isinstance(explicit, list):
        return ExplicitChildren(ids=tuple(i for i in explicit if isinstance(i, str)))

    template = value.get("template")
    if isinstance(template, Mapping):
        component_id = template.get("componentId")
        data_binding = template.get("dataBinding")
        if isinstance(component_id, str) and component_id and isinstance(data_binding, str) and data_binding:
            return TemplateChildren(component_id=component_id, data_binding=data_binding)

    return None


Children = Annotated[ChildrenRef | None, BeforeValidator(_to_children)]


class ChoiceOption(ProtocolModel):
    """One selectable option of a MultipleChoice."""

    label: Bindable = None
    value: Any = None


class TabItem(ProtocolModel):
    """One tab: a title and the component shown under it."""

    title: Bindable = None
    child: ComponentId = None


def _to_models(model: type[ProtocolModel]):
    def coerce(value: Any) -> tuple:
        if not isinstance(value, list):
            return ()
        return tuple(model.model_validate(item) for item in value if isinstance(item, Mapping))

    return coerce


# ---------------------------------------------------------------------------
# Component variants
# ---------------------------------------------------------------------------


class ComponentBase(ProtocolModel):
    """Fields shared by every component record."""

    model_config = ConfigDict(extra="allow")

    id: str
    type: str


class TextComponent(ComponentBase):
    type: Literal["Text"] = catalog.TEXT
    text: Bindable = None
    usage_hint: EnumStr = None


class ImageComponent(ComponentBase):
    type: Literal["Image"] = catalog.IMAGE
    url: Bindable = None
    fit: EnumStr = None
    usage_hint: EnumStr = None


class IconComponent(ComponentBase):
    type: Literal["Icon"] = catalog.ICON
    name: Bindable = None


class RowComponent(ComponentBase):
    type: Literal["Row"] = catalog.ROW
    children: Children = None
    distribution: EnumStr = None
    alignment: EnumStr = None


class ColumnComponent(ComponentBase):
    type: Literal["Column"] = catalog.COLUMN
    children: Children = None
    distribution: EnumStr = None
    alignment: EnumStr = None


class ListComponent(ComponentBase):
    type: Literal["List"] = catalog.LIST
    children: Children = None
    direction: EnumStr = None
    distribution: EnumStr = None
    alignment: EnumStr = None


class CardComponent(ComponentBase):
    type: Literal["Card"] = catalog.CARD
    child: ComponentId = None


class ButtonComponent(ComponentBase):
    type: Literal["Button"] = catalog.BUTTON
    child: ComponentId = None
    primary: OptionalBool = None
    # Opaque to the interpreter; the host application owns event handling
    action: Any = None


class TextFieldComponent(ComponentBase):
    type: Literal["TextField"] = catalog.TEXT_FIELD
    label: Bindable = None
    text: Bindable = None
    text_field_type: EnumStr = None


class DividerComponent(ComponentBase):
    type: Literal["Divider"] = catalog.DIVIDER
    axis: EnumStr = None


class SliderComponent(ComponentBase):
    type: Literal["Slider"] = catalog.SLIDER
    value: Bindable = None
    min_value: Number = None
    max_value: Number = None


class CheckBoxComponent(ComponentBase):
    type: Literal["CheckBox"] = catalog.CHECK_BOX
    label: Bindable = None
    value: Bindable = None


class MultipleChoiceComponent(ComponentBase):
    type: Literal["MultipleChoice"] = catalog.MULTIPLE_CHOICE
    selections: Bindable = None
    options: Annotated[tuple[ChoiceOption, ...], BeforeValidator(_to_models(ChoiceOption))] = ()
    max_allowed_selections: OptionalInt = None


class DateTimeInputComponent(ComponentBase):
    type: Literal["DateTimeInput"] = catalog.DATE_TIME_INPUT
    value: Bindable = None
    enable_date: OptionalBool = None
    enable_time: OptionalBool = None


class TabsComponent(ComponentBase):
    type: Literal["Tabs"] = catalog.TABS
    tab_items: Annotated[tuple[TabItem, ...], BeforeValidator(_to_models(TabItem))] = ()


class ModalComponent(ComponentBase):
    type: Literal["Modal"] = catalog.MODAL
    entry_point_child: ComponentId = None
    content_child: ComponentId = None


class UnknownComponent(ComponentBase):
    """Fallback for types outside the catalog; extra properties are kept as-is."""


Component = (
    TextComponent
    | ImageComponent
    | IconComponent
    | RowComponent
    | ColumnComponent
    | ListComponent
    | CardComponent
    | ButtonComponent
    | TextFieldComponent
    | DividerComponent
    | SliderComponent
    | CheckBoxComponent
    | MultipleChoiceComponent
    | DateTimeInputComponent
    | TabsComponent
    | ModalComponent
    | UnknownComponent
)

COMPONENT_MODELS: dict[str, type[ComponentBase]] = {
    catalog.TEXT: TextComponent,
    catalog.IMAGE: ImageComponent,
    catalog.ICON: IconComponent,
    catalog.ROW: RowComponent,
    catalog.COLUMN: ColumnComponent,
    catalog.LIST: ListComponent,
    catalog.CARD: CardComponent,
    catalog.BUTTON: ButtonComponent,
    catalog.TEXT_FIELD: TextFieldComponent,
    catalog.DIVIDER: DividerComponent,
    catalog.SLIDER: SliderComponent,
    catalog.CHECK_BOX: CheckBoxComponent,
    catalog.MULTIPLE_CHOICE: MultipleChoiceComponent,
    catalog.DATE_TIME_INPUT: DateTimeInputComponent,
    catalog.TABS: TabsComponent,
    catalog.MODAL: ModalComponent,
}


def parse_component(raw: Any) -> Component | None:
    """
    Parse one component record into its typed variant.

    Args:
        raw: Decoded component record ({id, type, ...props})

    Returns:
        The typed component, or None when the record has no usable id
    """
    if not isinstance(raw, Mapping):
        logger.warning("component_skipped", reason="not_an_object")
        return None

    component_id = raw.get("id")
    if not isinstance(component_id, str) or not component_id:
        logger.warning("component_skipped", reason="missing_id")
        return None

    raw_type = raw.get("type")
    model = COMPONENT_MODELS.get(raw_type) if isinstance(raw_type, str) else None

    if model is None:
        type_name = raw_type if isinstance(raw_type, str) else ("" if raw_type is None else str(raw_type))
        return UnknownComponent.model_validate({**raw, "id": component_id, "type": type_name})

    try:
        return model.model_validate(dict(raw))
    except PydanticValidationError as e:
        # Keep the component addressable; its properties degrade to defaults
        logger.warning("component_degraded", id=component_id, type=raw_type, error=str(e))
        return model.model_validate({"id": component_id, "type": raw_type})
