"""Tests for the type catalog."""

import pytest

from pagebuilder.catalog import (
    ComponentCategory,
    ComponentDefinition,
    ComponentStyles,
    ComponentType,
    TypeCatalog,
    default_catalog,
)


@pytest.mark.unit
def test_default_catalog_covers_every_type():
    catalog = default_catalog()

    assert len(catalog) == len(ComponentType)
    assert catalog.types() == list(ComponentType)


@pytest.mark.unit
@pytest.mark.parametrize("tag", ["text", ComponentType.TEXT])
def test_lookup_by_tag_or_enum(tag):
    definition = default_catalog().get(tag)

    assert definition is not None
    assert definition.name == "Text"
    assert definition.default_props == {"content": "Text"}


@pytest.mark.unit
@pytest.mark.parametrize("tag", ["carousel", "", "TEXT", None, 3])
def test_unknown_tags(tag):
    catalog = default_catalog()

    assert catalog.get(tag) is None
    assert tag not in catalog


@pytest.mark.unit
def test_coerce():
    assert TypeCatalog.coerce("row") is ComponentType.ROW
    assert TypeCatalog.coerce(ComponentType.ROW) is ComponentType.ROW
    assert TypeCatalog.coerce("column") is None


@pytest.mark.unit
def test_by_category():
    layout = {d.type for d in default_catalog().by_category(ComponentCategory.LAYOUT)}

    assert layout == {ComponentType.CONTAINER, ComponentType.ROW, ComponentType.DIVIDER}


@pytest.mark.unit
def test_duplicate_definition_rejected():
    definition = ComponentDefinition(
        type=ComponentType.TEXT, name="Text", icon="type", category=ComponentCategory.BASIC
    )

    with pytest.raises(ValueError):
        TypeCatalog([definition, definition])


@pytest.mark.unit
def test_subset_catalog():
    definition = default_catalog().get("button")
    catalog = TypeCatalog([definition])

    assert "button" in catalog
    assert "text" not in catalog


@pytest.mark.unit
class TestComponentStyles:
    """Test style model aliases."""

    def test_camel_and_snake_input(self):
        styles = ComponentStyles.model_validate({"backgroundColor": "#fff", "font_size": 12})

        assert styles.background_color == "#fff"
        assert styles.font_size == 12

    def test_to_dict_omits_unset(self):
        styles = ComponentStyles(padding_top=4)

        assert styles.to_dict() == {"paddingTop": 4}

    def test_unknown_keys_dropped(self):
        styles = ComponentStyles.model_validate({"zIndex": 3})

        assert styles.to_dict() == {}

    def test_known_keys(self):
        keys = ComponentStyles.known_keys()

        assert {"borderRadius", "border_radius", "gap"} <= keys
        assert "zIndex" not in keys
