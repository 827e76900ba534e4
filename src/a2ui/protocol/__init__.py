"""
A2UI protocol models
Typed components and messages, the standard catalog, and the batch parser.
"""

from .catalog import STANDARD_CATALOG_ID, COMPONENT_TYPES, ROOT_COMPONENT_ID
from .components import (
    BoundValue,
    ExplicitChildren,
    TemplateChildren,
    ChildrenRef,
    Component,
    UnknownComponent,
    parse_component,
)
from .messages import (
    CreateSurface,
    UpdateComponents,
    UpdateDataModel,
    DeleteSurface,
    Message,
    parse_message,
)
from .parser import BatchParser, parse_batch, validate_batch

__all__ = [
    "STANDARD_CATALOG_ID",
    "COMPONENT_TYPES",
    "ROOT_COMPONENT_ID",
    "BoundValue",
    "ExplicitChildren",
    "TemplateChildren",
    "ChildrenRef",
    "Component",
    "UnknownComponent",
    "parse_component",
    "CreateSurface",
    "UpdateComponents",
    "UpdateDataModel",
    "DeleteSurface",
    "Message",
    "parse_message",
    "BatchParser",
    "parse_batch",
    "validate_batch",
]
