"""
Catalog Type Definitions
Component kinds, visual styles and the editor-facing prop/style schemas.
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


Number = int | float


class ComponentType(str, Enum):
    """Closed set of component kinds a node may have"""
    TEXT = "text"
    BUTTON = "button"
    INPUT = "input"
    TEXTAREA = "textarea"
    IMAGE = "image"
    CONTAINER = "container"
    ROW = "row"
    DIVIDER = "divider"
    CARD = "card"
    LINK = "link"


class ComponentCategory(str, Enum):
    """Palette grouping"""
    BASIC = "basic"
    LAYOUT = "layout"
    ADVANCED = "advanced"


class ComponentStyles(BaseModel):
    """
    Visual style of a node.

    Every key is optional; an unset key means "inherit the renderer default".
    Python names are snake_case, the stored form uses the camelCase aliases.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    # Layout
    display: str | None = None
    flex_direction: str | None = None
    justify_content: str | None = None
    align_items: str | None = None
    flex_wrap: str | None = None
    gap: Number | None = None

    # Size
    width: str | None = None
    height: str | None = None
    min_width: str | None = None
    min_height: str | None = None
    max_width: str | None = None
    max_height: str | None = None

    # Spacing
    margin_top: Number | None = None
    margin_right: Number | None = None
    margin_bottom: Number | None = None
    margin_left: Number | None = None
    padding_top: Number | None = None
    padding_right: Number | None = None
    padding_bottom: Number | None = None
    padding_left: Number | None = None

    # Border
    border_width: Number | None = None
    border_style: str | None = None
    border_color: str | None = None
    border_radius: Number | None = None

    # Background
    background_color: str | None = None
    background_image: str | None = None

    # Typography
    font_size: Number | None = None
    font_weight: str | None = None
    color: str | None = None
    text_align: str | None = None
    line_height: Number | None = None

    # Other
    opacity: Number | None = None
    box_shadow: str | None = None
    overflow: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Stored form: camelCase keys, unset keys omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def known_keys(cls) -> set[str]:
        """Every accepted key, in both spellings."""
        keys: set[str] = set()
        for name, field in cls.model_fields.items():
            keys.add(name)
            if field.alias:
                keys.add(field.alias)
        return keys


class SelectOption(BaseModel):
    """Choice offered by a select-type editor field"""
    label: str
    value: str


class PropSchema(BaseModel):
    """Property editor field for a component type"""
    name: str
    label: str
    type: Literal["text", "number", "boolean", "select", "color", "textarea"]
    default: Any = None
    options: list[SelectOption] | None = None
    min: Number | None = None
    max: Number | None = None


class StyleSchema(BaseModel):
    """Style editor field for a component type"""
    name: str
    label: str
    category: Literal["layout", "size", "margin", "border", "background", "typography", "other"]
    type: Literal["number", "select", "text", "color"]
    unit: str | None = None
    options: list[SelectOption] | None = None
    min: Number | None = None
    max: Number | None = None


class ComponentDefinition(BaseModel):
    """Catalog entry: what a freshly added node of this type looks like"""

    model_config = ConfigDict(frozen=True)

    type: ComponentType
    name: str
    icon: str
    category: ComponentCategory
    default_props: dict[str, Any] = Field(default_factory=dict)
    default_styles: ComponentStyles = Field(default_factory=ComponentStyles)
    prop_schema: list[PropSchema] = Field(default_factory=list)
    style_schema: list[StyleSchema] = Field(default_factory=list)


class DragData(BaseModel):
    """Payload carried while a palette item is being dragged"""
    type: Literal["component"] = "component"
    component_type: ComponentType
