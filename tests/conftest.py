"""Pytest configuration and fixtures."""

import os

import pytest
from prometheus_client import CollectorRegistry

from pagebuilder.assets import AssetRegistry
from pagebuilder.catalog import default_catalog
from pagebuilder.core import Settings
from pagebuilder.editor import TreeStore
from pagebuilder.monitoring import MetricsCollector
from pagebuilder.persistence import MemoryAdapter
from pagebuilder.session import EditorSession


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ["PAGEBUILDER_LOG_LEVEL"] = "DEBUG"
    os.environ["PAGEBUILDER_PERSISTENCE_BACKEND"] = "memory"


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Test settings (no .env lookup)."""
    return Settings(_env_file=None)


@pytest.fixture
def metrics():
    """Metrics collector on a private registry."""
    return MetricsCollector(CollectorRegistry())


@pytest.fixture
def catalog():
    return default_catalog()


# ============================================================================
# Editor Fixtures
# ============================================================================

@pytest.fixture
def store(catalog, metrics, settings):
    """Empty tree store."""
    return TreeStore(catalog, metrics=metrics, settings=settings)


@pytest.fixture
def abc_store(store):
    """Store whose forest is three root text nodes, A, B and C."""
    for name in ("A", "B", "C"):
        node = store.add_node("text").unwrap()
        store.update_node(node.id, {"name": name})
    return store


@pytest.fixture
def assets(store, settings, metrics):
    """Asset registry whose ids count up from img_1."""
    counter = iter(range(1, 1_000))
    return AssetRegistry(store, settings, id_factory=lambda: f"img_{next(counter)}", metrics=metrics)


# ============================================================================
# Persistence Fixtures
# ============================================================================

@pytest.fixture
def memory_adapter(settings):
    return MemoryAdapter(settings)


@pytest.fixture
def session(memory_adapter, store, assets, settings):
    return EditorSession(memory_adapter, store=store, assets=assets, settings=settings)


@pytest.fixture
def png_bytes():
    """Smallest valid PNG header plus a little payload."""
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
