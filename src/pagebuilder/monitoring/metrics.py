"""
Metrics Collection
Prometheus metrics for editor operations, asset ingestion and persistence
"""

import time
from contextlib import contextmanager
from typing import Callable, Optional

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, Histogram, generate_latest


class MetricsCollector:
    """
    Collects and exposes Prometheus metrics for an editor process.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None) -> None:
        self.registry = registry if registry is not None else REGISTRY

        # Edit metrics
        self.edit_operations_total = Counter(
            "pagebuilder_edit_operations_total",
            "Total number of tree store operations",
            ["operation", "status"],
            registry=self.registry,
        )
        self.forest_nodes = Gauge(
            "pagebuilder_forest_nodes",
            "Number of nodes in the most recently edited forest",
            registry=self.registry,
        )

        # Asset metrics
        self.asset_ingest_total = Counter(
            "pagebuilder_asset_ingest_total",
            "Total number of asset ingestions",
            ["status"],
            registry=self.registry,
        )
        self.asset_ingest_bytes = Histogram(
            "pagebuilder_asset_ingest_bytes",
            "Size of ingested asset payloads",
            buckets=[1_024, 16_384, 131_072, 1_048_576, 4_194_304, 16_777_216],
            registry=self.registry,
        )
        self.assets_swept_total = Counter(
            "pagebuilder_assets_swept_total",
            "Total number of unused assets discarded by sweeps",
            registry=self.registry,
        )

        # Persistence metrics
        self.persistence_requests_total = Counter(
            "pagebuilder_persistence_requests_total",
            "Total number of persistence adapter calls",
            ["operation", "status"],
            registry=self.registry,
        )
        self.persistence_duration = Histogram(
            "pagebuilder_persistence_duration_seconds",
            "Persistence call duration in seconds",
            ["operation"],
            buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0],
            registry=self.registry,
        )

    def record_edit(self, operation: str, status: str, node_count: int | None = None) -> None:
        """Record a tree store operation."""
        self.edit_operations_total.labels(operation=operation, status=status).inc()
        if node_count is not None:
            self.forest_nodes.set(node_count)

    def record_ingest(self, status: str, size_bytes: int = 0) -> None:
        """Record an asset ingestion."""
        self.asset_ingest_total.labels(status=status).inc()
        if status == "success":
            self.asset_ingest_bytes.observe(size_bytes)

    def record_sweep(self, discarded: int) -> None:
        self.assets_swept_total.inc(discarded)

    def record_persistence(self, operation: str, status: str, duration: float) -> None:
        """Record a persistence adapter call."""
        self.persistence_requests_total.labels(operation=operation, status=status).inc()
        self.persistence_duration.labels(operation=operation).observe(duration)

    @contextmanager
    def measure_duration(self, callback: Callable[[float], None]):
        """Context manager to measure operation duration."""
        start = time.time()
        try:
            yield
        finally:
            callback(time.time() - start)

    def get_metrics(self) -> bytes:
        """Get metrics in Prometheus format."""
        return generate_latest(self.registry)


# Global metrics collector instance
metrics_collector = MetricsCollector()
