"""Tests for the in-memory persistence adapter."""

import pytest

from pagebuilder.core import ValidationError, loads
from pagebuilder.core.id import Prefix
from pagebuilder.persistence import (
    MemoryAdapter,
    PersistenceAdapter,
    RecordNotFound,
    TemplateProvider,
    loads_forest,
)


@pytest.mark.unit
def test_satisfies_protocols(memory_adapter):
    assert isinstance(memory_adapter, PersistenceAdapter)
    assert isinstance(memory_adapter, TemplateProvider)


@pytest.mark.unit
class TestProjects:
    """Test project storage."""

    def test_save_then_load(self, memory_adapter):
        record_id = memory_adapter.save('[{"id": "a", "type": "text"}]', name="Home")

        assert record_id.startswith("prj_")
        assert len(record_id) == len(Prefix.PROJECT) + 1 + 26
        assert memory_adapter.load(record_id) == '[{"id": "a", "type": "text"}]'

    def test_default_name(self, memory_adapter):
        record_id = memory_adapter.save("[]")

        assert memory_adapter.get_project(record_id).name == "Untitled"

    def test_name_is_stripped(self, memory_adapter):
        record_id = memory_adapter.save("[]", name="  Landing  ", description="Main page")
        record = memory_adapter.get_project(record_id)

        assert record.name == "Landing"
        assert record.description == "Main page"

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_name_rejected(self, memory_adapter, name):
        with pytest.raises(ValidationError):
            memory_adapter.save("[]", name=name)

    @pytest.mark.parametrize("serialized", ["", "{}", "[1,"])
    def test_invalid_forest_rejected(self, memory_adapter, serialized):
        with pytest.raises(ValidationError):
            memory_adapter.save(serialized)

    def test_load_unknown(self, memory_adapter):
        with pytest.raises(RecordNotFound) as exc_info:
            memory_adapter.load("prj_missing")

        assert exc_info.value.record_id == "prj_missing"

    def test_list_most_recently_updated_first(self, memory_adapter):
        first = memory_adapter.save("[]", name="First")
        second = memory_adapter.save("[]", name="Second")

        assert [r.id for r in memory_adapter.list_projects()] == [second, first]

        memory_adapter.update(first, name="First again")

        assert [r.name for r in memory_adapter.list_projects()] == ["First again", "Second"]

    def test_partial_update(self, memory_adapter):
        record_id = memory_adapter.save("[]", name="Page", description="Draft")
        created = memory_adapter.get_project(record_id)

        updated = memory_adapter.update(record_id, serialized='[{"id": "x", "type": "row"}]')

        assert updated.name == "Page"
        assert updated.description == "Draft"
        assert updated.components == '[{"id": "x", "type": "row"}]'
        assert updated.created_at == created.created_at
        assert updated.updated_at >= created.updated_at

    def test_update_unknown(self, memory_adapter):
        with pytest.raises(RecordNotFound):
            memory_adapter.update("prj_missing", name="X")

    def test_delete(self, memory_adapter):
        record_id = memory_adapter.save("[]")

        memory_adapter.delete(record_id)

        assert memory_adapter.list_projects() == []
        with pytest.raises(RecordNotFound):
            memory_adapter.delete(record_id)


@pytest.mark.unit
class TestTemplates:
    """Test template storage."""

    def test_seeded_with_builtins(self, memory_adapter):
        names = [t.name for t in memory_adapter.list_templates()]

        assert names == ["Blank Page", "Login Page"]

    def test_builtin_login_page_loads(self, memory_adapter, settings):
        login = memory_adapter.list_templates()[1]

        forest = loads_forest(login.components, settings=settings)

        assert [node.id for node in forest] == ["title-1", "input-1", "input-2", "button-1"]
        assert forest[2].props["type"] == "password"
        assert forest[3].name == "Button"

    def test_blank_page_is_empty(self, memory_adapter):
        blank = memory_adapter.list_templates()[0]

        assert loads(blank.components) == []

    def test_unseeded(self, settings):
        adapter = MemoryAdapter(settings, templates=None)

        assert adapter.list_templates() == []

    def test_create_and_get(self, memory_adapter):
        template = memory_adapter.create_template("[]", name="Empty", thumbnail="thumb.png")

        assert template.id.startswith("tpl_")
        assert memory_adapter.get_template(template.id) == template
        assert memory_adapter.list_templates()[-1] == template

    def test_get_unknown(self, memory_adapter):
        with pytest.raises(RecordNotFound) as exc_info:
            memory_adapter.get_template("tpl_missing")

        assert exc_info.value.kind == "Template"
