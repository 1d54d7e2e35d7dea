"""
Editor Monitoring
Prometheus-based metrics for edit, asset and persistence operations
"""

from .metrics import MetricsCollector, metrics_collector

__all__ = [
    "MetricsCollector",
    "metrics_collector",
]
