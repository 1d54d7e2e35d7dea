"""
Editing Session
One canvas, its assets and the store it is saved to.
"""

from .assets import AssetRegistry
from .catalog import TypeCatalog
from .core import LogContext, Settings, get_logger, get_settings, hash_string
from .core.id import new_node_id, new_session_id
from .editor import Node, TreeStore
from .persistence import PersistenceAdapter, PersistenceError, TemplateProvider, dumps_forest, loads_forest

logger = get_logger(__name__)


class EditorSession:
    """
    Ties a TreeStore and an AssetRegistry to a persistence adapter.

    ``is_dirty`` compares a fingerprint of the current forest with the one
    taken at the last save, load or reset.
    """

    def __init__(
        self,
        adapter: PersistenceAdapter,
        store: TreeStore | None = None,
        assets: AssetRegistry | None = None,
        settings: Settings | None = None,
        catalog: TypeCatalog | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.adapter = adapter
        self.store = store or TreeStore(catalog, settings=self.settings)
        self.assets = assets or AssetRegistry(self.store, self.settings)
        self.session_id = new_session_id()
        self.record_id: str | None = None
        self._saved_fingerprint = self._fingerprint()

    @property
    def is_dirty(self) -> bool:
        return self._fingerprint() != self._saved_fingerprint

    def save(self, name: str = "Untitled", description: str | None = None, inline_assets: bool = True) -> str:
        """
        Serialize the forest and hand it to the adapter.

        With ``inline_assets`` every local image reference is written as a
        ``data:`` URL so the stored page does not depend on this session.

        Returns:
            Record id assigned by the adapter
        """
        with LogContext(session_id=self.session_id):
            forest = self.store.forest
            if inline_assets and self.assets.has_local_references():
                forest = self.assets.inline_forest(forest)

            serialized = dumps_forest(forest)
            record_id = self.adapter.save(serialized, name=name, description=description)

            self.record_id = record_id
            self._saved_fingerprint = self._fingerprint()
            logger.info("session_saved", record_id=record_id, nodes=len(self.store))
            return record_id

    def load(self, record_id: str) -> None:
        """
        Replace the canvas with a stored forest. Assets are dropped.

        Raises:
            RecordNotFound: If the adapter has no such record
            ValidationError: If the stored forest is malformed
        """
        with LogContext(session_id=self.session_id, record_id=record_id):
            text = self.adapter.load(record_id)
            forest = loads_forest(text, self.store.catalog, self.settings)

            self.store.load(forest)
            self.assets.clear()
            self.record_id = record_id
            self._saved_fingerprint = self._fingerprint()
            logger.info("session_loaded", nodes=len(self.store))

    def apply_template(self, template_id: str) -> list[Node]:
        """
        Replace the canvas with a template's forest under fresh node ids.

        The result is a new unsaved page: it has no record id and is dirty
        unless the template is empty.

        Raises:
            PersistenceError: If the adapter does not serve templates
            RecordNotFound: If there is no such template
        """
        if not isinstance(self.adapter, TemplateProvider):
            raise PersistenceError(f"{type(self.adapter).__name__} does not provide templates")

        with LogContext(session_id=self.session_id, template_id=template_id):
            template = self.adapter.get_template(template_id)
            forest = loads_forest(template.components, self.store.catalog, self.settings)
            for root in forest:
                for node in root.walk():
                    node.id = new_node_id()

            self.store.load(forest)
            self.assets.clear()
            self.record_id = None
            logger.info("template_applied", name=template.name, nodes=len(self.store))
            return self.store.forest

    def reset(self) -> None:
        """Empty canvas, no assets, nothing to save."""
        self.store.clear_canvas()
        self.assets.clear()
        self.record_id = None
        self._saved_fingerprint = self._fingerprint()

    def _fingerprint(self) -> str:
        return hash_string(dumps_forest(self.store.forest))
