"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from ..catalog import TypeCatalog, default_catalog
from ..clients.backend import PersistenceClient
from ..monitoring import MetricsCollector, metrics_collector
from ..persistence import MemoryAdapter, PersistenceAdapter
from ..session import EditorSession
from .config import Settings, get_settings
from .logging_config import get_logger

logger = get_logger(__name__)


class CoreModule(Module):
    """Core dependencies."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        return self.settings

    @singleton
    @provider
    def provide_catalog(self) -> TypeCatalog:
        """Provide the built-in type catalog."""
        return default_catalog()

    @singleton
    @provider
    def provide_metrics(self) -> MetricsCollector:
        return metrics_collector

    @singleton
    @provider
    def provide_adapter(self, settings: Settings, metrics: MetricsCollector) -> PersistenceAdapter:
        """Provide the configured persistence backend."""
        if settings.persistence_backend == "http":
            client = PersistenceClient.from_settings(settings, metrics)
            if not client.health_check():
                logger.warning("backend_unreachable", url=settings.backend_url)
            return client
        return MemoryAdapter(settings)

    @provider
    def provide_session(self, adapter: PersistenceAdapter, settings: Settings, catalog: TypeCatalog) -> EditorSession:
        """Provide a fresh editing session (one per canvas)."""
        return EditorSession(adapter, settings=settings, catalog=catalog)


def create_container(settings: Settings | None = None) -> Injector:
    """Create configured injector."""
    return Injector([CoreModule(settings)])
