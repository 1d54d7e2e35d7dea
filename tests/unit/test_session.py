"""Tests for the editing session."""

import pytest
from returns.pipeline import is_successful

from pagebuilder.core import loads
from pagebuilder.core.id import Prefix
from pagebuilder.persistence import PersistenceError, RecordNotFound
from pagebuilder.session import EditorSession


class SaveOnlyAdapter:
    """Adapter with no template support."""

    def __init__(self):
        self.saved = {}

    def save(self, serialized, *, name="Untitled", description=None):
        record_id = f"rec_{len(self.saved)}"
        self.saved[record_id] = serialized
        return record_id

    def load(self, record_id):
        if record_id not in self.saved:
            raise RecordNotFound(record_id)
        return self.saved[record_id]


@pytest.mark.unit
class TestSaveLoad:
    """Test the save/load boundary."""

    def test_new_session_is_clean(self, session):
        assert not session.is_dirty
        assert session.record_id is None
        assert session.session_id.startswith("sess_")

    def test_edit_marks_dirty_and_save_cleans(self, session):
        session.store.add_node("text")
        assert session.is_dirty

        record_id = session.save("Home")

        assert not session.is_dirty
        assert session.record_id == record_id

    def test_selection_does_not_mark_dirty(self, session):
        node = session.store.add_node("text").unwrap()
        session.save("Home")

        session.store.deselect()
        session.store.select_component(node.id)

        assert not session.is_dirty

    def test_round_trip(self, session, store):
        container = store.add_node("container").unwrap()
        store.add_node("button", parent_id=container.id)
        store.add_node("divider")
        before = [node.to_dict() for node in store.forest]
        record_id = session.save("Home")

        session.reset()
        assert len(store) == 0

        session.load(record_id)

        assert [node.to_dict() for node in store.forest] == before
        assert session.record_id == record_id
        assert not session.is_dirty
        assert store.selected_id is None

    def test_round_trip_at_depth_limit(self, session, store, settings):
        """The deepest tree the store allows saves and reloads unchanged."""
        parent = store.add_node("container").unwrap()
        for _ in range(settings.max_tree_depth - 1):
            parent = store.add_node("container", parent_id=parent.id).unwrap()
            store.update_props(parent.id, {"data": {"rows": [[1, 2]]}})
        assert not is_successful(store.add_node("text", parent_id=parent.id))
        before = [node.to_dict() for node in store.forest]

        record_id = session.save("Deep")
        session.reset()
        session.load(record_id)

        assert [node.to_dict() for node in store.forest] == before
        assert len(store) == settings.max_tree_depth

    def test_load_unknown_keeps_canvas(self, session, store):
        store.add_node("text")

        with pytest.raises(RecordNotFound):
            session.load("prj_missing")

        assert len(store) == 1


@pytest.mark.unit
@pytest.mark.asyncio
class TestAssetsOnSave:
    """Local assets are inlined into the stored forest."""

    async def test_save_inlines_local_images(self, session, store, assets, memory_adapter, png_bytes):
        asset = await assets.ingest(png_bytes, "a.png")
        image = store.add_node("image").unwrap()
        store.update_props(image.id, {"src": asset.id})

        record_id = session.save("With image")
        stored = loads(memory_adapter.load(record_id))

        assert stored[0]["props"]["src"] == asset.data_url
        assert image.props["src"] == asset.id
        assert not session.is_dirty

    async def test_save_without_inlining(self, session, store, assets, memory_adapter, png_bytes):
        await assets.ingest(png_bytes, "a.png")
        image = store.add_node("image").unwrap()
        store.update_props(image.id, {"src": "img_1"})

        record_id = session.save("Raw", inline_assets=False)

        assert loads(memory_adapter.load(record_id))[0]["props"]["src"] == "img_1"

    async def test_reset_drops_assets(self, session, assets, png_bytes):
        await assets.ingest(png_bytes, "a.png")

        session.reset()

        assert len(assets) == 0
        assert not session.is_dirty


@pytest.mark.unit
class TestTemplates:
    """Test template instantiation."""

    def test_apply_login_template(self, session, store, memory_adapter):
        login = memory_adapter.list_templates()[1]

        forest = session.apply_template(login.id)

        assert [node.type.value for node in forest] == ["text", "input", "input", "button"]
        assert all(node.id.startswith(f"{Prefix.COMPONENT}_") for node in store.iter_nodes())
        assert "title-1" not in store
        assert session.record_id is None
        assert session.is_dirty

    def test_applying_twice_gives_distinct_ids(self, session, store, memory_adapter):
        login = memory_adapter.list_templates()[1]

        first = {node.id for node in session.apply_template(login.id)}
        second = {node.id for node in session.apply_template(login.id)}

        assert not first & second

    def test_blank_template_is_clean(self, session, memory_adapter):
        blank = memory_adapter.list_templates()[0]

        assert session.apply_template(blank.id) == []
        assert not session.is_dirty

    def test_unknown_template(self, session):
        with pytest.raises(RecordNotFound):
            session.apply_template("tpl_missing")

    def test_adapter_without_templates(self, settings):
        session = EditorSession(SaveOnlyAdapter(), settings=settings)

        with pytest.raises(PersistenceError, match="does not provide templates"):
            session.apply_template("tpl_any")

    def test_plain_adapter_round_trip(self, settings):
        session = EditorSession(SaveOnlyAdapter(), settings=settings)
        session.store.add_node("card")

        record_id = session.save("Card")
        session.reset()
        session.load(record_id)

        assert len(session.store) == 1
