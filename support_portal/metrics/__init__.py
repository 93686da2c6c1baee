"""Metrics shared by the portal services."""
from .definitions import DEFAULT_METRIC_DEFINITIONS, MetricDefinition
from .registry import MetricsRegistry

metrics_registry = MetricsRegistry()


def register_default_metrics(registry: MetricsRegistry | None = None) -> MetricsRegistry:
    """Register the portal metrics on ``registry``, the shared one by default."""
    target = registry if registry is not None else metrics_registry
    for definition in DEFAULT_METRIC_DEFINITIONS:
        target.register(definition)
    return target


register_default_metrics()

__all__ = [
    "MetricDefinition",
    "MetricsRegistry",
    "metrics_registry",
    "register_default_metrics",
]
