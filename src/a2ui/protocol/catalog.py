"""Standard component catalog (a2ui.dev:standard:0.8).

The interpreter never branches on a surface's catalog id; these tables are the
vocabulary the renderer understands and the enum values it accepts.
"""

STANDARD_CATALOG_ID = "a2ui.dev:standard:0.8"

# Component type tags
TEXT = "Text"
IMAGE = "Image"
ICON = "Icon"
ROW = "Row"
COLUMN = "Column"
LIST = "List"
CARD = "Card"
BUTTON = "Button"
TEXT_FIELD = "TextField"
DIVIDER = "Divider"
SLIDER = "Slider"
CHECK_BOX = "CheckBox"
MULTIPLE_CHOICE = "MultipleChoice"
DATE_TIME_INPUT = "DateTimeInput"
TABS = "Tabs"
MODAL = "Modal"

COMPONENT_TYPES: frozenset[str] = frozenset(
    {
        TEXT,
        IMAGE,
        ICON,
        ROW,
        COLUMN,
        LIST,
        CARD,
        BUTTON,
        TEXT_FIELD,
        DIVIDER,
        SLIDER,
        CHECK_BOX,
        MULTIPLE_CHOICE,
        DATE_TIME_INPUT,
        TABS,
        MODAL,
    }
)

ROOT_COMPONENT_ID = "root"

# Text
TEXT_USAGE_HINTS: frozenset[str] = frozenset({"h1", "h2", "h3", "h4", "h5", "caption", "body"})
DEFAULT_TEXT_USAGE_HINT = "body"

# Image
IMAGE_FITS: frozenset[str] = frozenset({"contain", "cover", "fill", "none", "scale-down"})
DEFAULT_IMAGE_FIT = "cover"
IMAGE_USAGE_HINTS: frozenset[str] = frozenset(
    {"icon", "avatar", "smallFeature", "mediumFeature", "largeFeature", "header"}
)
DEFAULT_IMAGE_USAGE_HINT = "mediumFeature"

DEFAULT_ICON_NAME = "help"

# Layout
DISTRIBUTIONS: frozenset[str] = frozenset(
    {"start", "center", "end", "spaceBetween", "spaceAround", "spaceEvenly"}
)
DEFAULT_DISTRIBUTION = "start"
ALIGNMENTS: frozenset[str] = frozenset({"start", "center", "end", "stretch"})
DEFAULT_ALIGNMENT = "center"
DIRECTIONS: frozenset[str] = frozenset({"vertical", "horizontal"})
DEFAULT_LIST_DIRECTION = "vertical"

# TextField
TEXT_FIELD_TYPES: frozenset[str] = frozenset({"date", "longText", "number", "shortText", "obscured"})
DEFAULT_TEXT_FIELD_TYPE = "shortText"

# Divider
AXES: frozenset[str] = frozenset({"horizontal", "vertical"})
DEFAULT_AXIS = "horizontal"

# Slider
DEFAULT_SLIDER_MIN = 0
DEFAULT_SLIDER_MAX = 100


def enum_or_default(value: object, allowed: frozenset[str], default: str) -> str:
    """Return value if it is one of the allowed enum strings, else the default."""
    if isinstance(value, str) and value in allowed:
        return value
    return default
