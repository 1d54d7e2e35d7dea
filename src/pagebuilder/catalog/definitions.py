"""
Built-in Component Definitions
The palette offered to the editor, with defaults copied into every new node.
"""

from .types import (
    ComponentCategory,
    ComponentDefinition,
    ComponentStyles,
    ComponentType,
    PropSchema,
    SelectOption,
    StyleSchema,
)


def _options(*values: str) -> list[SelectOption]:
    return [SelectOption(label=v.capitalize(), value=v) for v in values]


# Style editor groups shared by several types
SPACING_STYLES = [
    StyleSchema(name="marginTop", label="Margin Top", category="margin", type="number", unit="px", min=0),
    StyleSchema(name="marginBottom", label="Margin Bottom", category="margin", type="number", unit="px", min=0),
    StyleSchema(name="paddingTop", label="Padding Top", category="margin", type="number", unit="px", min=0),
    StyleSchema(name="paddingRight", label="Padding Right", category="margin", type="number", unit="px", min=0),
    StyleSchema(name="paddingBottom", label="Padding Bottom", category="margin", type="number", unit="px", min=0),
    StyleSchema(name="paddingLeft", label="Padding Left", category="margin", type="number", unit="px", min=0),
]

SIZE_STYLES = [
    StyleSchema(name="width", label="Width", category="size", type="text"),
    StyleSchema(name="height", label="Height", category="size", type="text"),
]

BORDER_STYLES = [
    StyleSchema(name="borderWidth", label="Border Width", category="border", type="number", unit="px", min=0),
    StyleSchema(
        name="borderStyle",
        label="Border Style",
        category="border",
        type="select",
        options=_options("none", "solid", "dashed", "dotted"),
    ),
    StyleSchema(name="borderColor", label="Border Color", category="border", type="color"),
    StyleSchema(name="borderRadius", label="Radius", category="border", type="number", unit="px", min=0),
]

BACKGROUND_STYLES = [
    StyleSchema(name="backgroundColor", label="Background", category="background", type="color"),
]

TYPOGRAPHY_STYLES = [
    StyleSchema(name="fontSize", label="Font Size", category="typography", type="number", unit="px", min=8, max=96),
    StyleSchema(
        name="fontWeight",
        label="Font Weight",
        category="typography",
        type="select",
        options=_options("normal", "500", "600", "bold"),
    ),
    StyleSchema(name="color", label="Color", category="typography", type="color"),
    StyleSchema(
        name="textAlign",
        label="Align",
        category="typography",
        type="select",
        options=_options("left", "center", "right"),
    ),
]

FLEX_STYLES = [
    StyleSchema(
        name="flexDirection",
        label="Direction",
        category="layout",
        type="select",
        options=_options("row", "column"),
    ),
    StyleSchema(
        name="justifyContent",
        label="Justify",
        category="layout",
        type="select",
        options=_options("flex-start", "center", "flex-end", "space-between"),
    ),
    StyleSchema(
        name="alignItems",
        label="Align Items",
        category="layout",
        type="select",
        options=_options("stretch", "flex-start", "center", "flex-end"),
    ),
    StyleSchema(name="gap", label="Gap", category="layout", type="number", unit="px", min=0),
]


BUILTIN_DEFINITIONS: list[ComponentDefinition] = [
    ComponentDefinition(
        type=ComponentType.TEXT,
        name="Text",
        icon="type",
        category=ComponentCategory.BASIC,
        default_props={"content": "Text"},
        default_styles=ComponentStyles(font_size=14, color="#333333", line_height=1.5),
        prop_schema=[PropSchema(name="content", label="Content", type="textarea", default="Text")],
        style_schema=TYPOGRAPHY_STYLES + SPACING_STYLES,
    ),
    ComponentDefinition(
        type=ComponentType.BUTTON,
        name="Button",
        icon="square",
        category=ComponentCategory.BASIC,
        default_props={"text": "Button", "variant": "default", "size": "default", "disabled": False},
        default_styles=ComponentStyles(),
        prop_schema=[
            PropSchema(name="text", label="Label", type="text", default="Button"),
            PropSchema(
                name="variant",
                label="Variant",
                type="select",
                default="default",
                options=_options("default", "secondary", "outline", "ghost", "destructive"),
            ),
            PropSchema(
                name="size",
                label="Size",
                type="select",
                default="default",
                options=_options("sm", "default", "lg"),
            ),
            PropSchema(name="disabled", label="Disabled", type="boolean", default=False),
        ],
        style_schema=SIZE_STYLES + SPACING_STYLES,
    ),
    ComponentDefinition(
        type=ComponentType.INPUT,
        name="Input",
        icon="text-cursor-input",
        category=ComponentCategory.BASIC,
        default_props={"placeholder": "Enter text", "type": "text", "disabled": False},
        default_styles=ComponentStyles(width="100%"),
        prop_schema=[
            PropSchema(name="placeholder", label="Placeholder", type="text", default="Enter text"),
            PropSchema(
                name="type",
                label="Input Type",
                type="select",
                default="text",
                options=_options("text", "password", "email", "number"),
            ),
            PropSchema(name="disabled", label="Disabled", type="boolean", default=False),
        ],
        style_schema=SIZE_STYLES + SPACING_STYLES,
    ),
    ComponentDefinition(
        type=ComponentType.TEXTAREA,
        name="Textarea",
        icon="align-left",
        category=ComponentCategory.BASIC,
        default_props={"placeholder": "Enter text", "rows": 4},
        default_styles=ComponentStyles(width="100%"),
        prop_schema=[
            PropSchema(name="placeholder", label="Placeholder", type="text", default="Enter text"),
            PropSchema(name="rows", label="Rows", type="number", default=4, min=1, max=20),
        ],
        style_schema=SIZE_STYLES + SPACING_STYLES,
    ),
    ComponentDefinition(
        type=ComponentType.IMAGE,
        name="Image",
        icon="image",
        category=ComponentCategory.BASIC,
        default_props={"src": "https://placehold.co/400x200", "alt": "Image", "fit": "cover"},
        default_styles=ComponentStyles(width="100%", height="200px"),
        prop_schema=[
            PropSchema(name="src", label="Source", type="text", default="https://placehold.co/400x200"),
            PropSchema(name="alt", label="Alt Text", type="text", default="Image"),
            PropSchema(
                name="fit",
                label="Fit",
                type="select",
                default="cover",
                options=_options("cover", "contain", "fill"),
            ),
        ],
        style_schema=SIZE_STYLES + BORDER_STYLES + SPACING_STYLES,
    ),
    ComponentDefinition(
        type=ComponentType.CONTAINER,
        name="Container",
        icon="box",
        category=ComponentCategory.LAYOUT,
        default_props={},
        default_styles=ComponentStyles(
            display="flex",
            flex_direction="column",
            gap=8,
            padding_top=16,
            padding_right=16,
            padding_bottom=16,
            padding_left=16,
            min_height="80px",
        ),
        style_schema=FLEX_STYLES + SIZE_STYLES + SPACING_STYLES + BORDER_STYLES + BACKGROUND_STYLES,
    ),
    ComponentDefinition(
        type=ComponentType.ROW,
        name="Row",
        icon="columns",
        category=ComponentCategory.LAYOUT,
        default_props={},
        default_styles=ComponentStyles(
            display="flex",
            flex_direction="row",
            flex_wrap="wrap",
            gap=8,
            align_items="center",
            min_height="40px",
        ),
        style_schema=FLEX_STYLES + SIZE_STYLES + SPACING_STYLES + BACKGROUND_STYLES,
    ),
    ComponentDefinition(
        type=ComponentType.DIVIDER,
        name="Divider",
        icon="minus",
        category=ComponentCategory.LAYOUT,
        default_props={"orientation": "horizontal"},
        default_styles=ComponentStyles(margin_top=8, margin_bottom=8, border_color="#e5e7eb"),
        prop_schema=[
            PropSchema(
                name="orientation",
                label="Orientation",
                type="select",
                default="horizontal",
                options=_options("horizontal", "vertical"),
            ),
        ],
        style_schema=SPACING_STYLES + BORDER_STYLES,
    ),
    ComponentDefinition(
        type=ComponentType.CARD,
        name="Card",
        icon="credit-card",
        category=ComponentCategory.ADVANCED,
        default_props={"title": "Card Title", "description": ""},
        default_styles=ComponentStyles(
            padding_top=16,
            padding_right=16,
            padding_bottom=16,
            padding_left=16,
            border_width=1,
            border_style="solid",
            border_color="#e5e7eb",
            border_radius=8,
            background_color="#ffffff",
        ),
        prop_schema=[
            PropSchema(name="title", label="Title", type="text", default="Card Title"),
            PropSchema(name="description", label="Description", type="textarea", default=""),
        ],
        style_schema=SIZE_STYLES + SPACING_STYLES + BORDER_STYLES + BACKGROUND_STYLES,
    ),
    ComponentDefinition(
        type=ComponentType.LINK,
        name="Link",
        icon="link",
        category=ComponentCategory.ADVANCED,
        default_props={"text": "Link", "href": "#", "target": "_self"},
        default_styles=ComponentStyles(color="#2563eb"),
        prop_schema=[
            PropSchema(name="text", label="Text", type="text", default="Link"),
            PropSchema(name="href", label="URL", type="text", default="#"),
            PropSchema(
                name="target",
                label="Open In",
                type="select",
                default="_self",
                options=_options("_self", "_blank"),
            ),
        ],
        style_schema=TYPOGRAPHY_STYLES + SPACING_STYLES,
    ),
]
