"""In-process metrics registry."""
from __future__ import annotations

from typing import ContextManager, Dict, Iterable, Tuple, Type, TypeVar

from .base import CounterMetric, DistributionMetric, Labels, LabelValues, Metric
from .definitions import MetricDefinition

M = TypeVar("M", bound=Metric)

_METRIC_TYPES: Dict[str, Type[Metric]] = {
    CounterMetric.kind: CounterMetric,
    DistributionMetric.kind: DistributionMetric,
}


class MetricsRegistry:
    """Hold metric instances by name.

    The portal runs single threaded, so the registry does not lock. Asking
    for an existing name returns the registered instance; asking for it as a
    different metric type raises ``TypeError``.
    """

    def __init__(self) -> None:
        self._metrics: Dict[str, Metric] = {}

    def _lookup(
        self,
        metric_type: Type[M],
        name: str,
        description: str,
        label_names: Iterable[str] | None,
    ) -> M:
        metric = self._metrics.get(name)
        if metric is None:
            metric = metric_type(name, description=description, label_names=label_names)
            self._metrics[name] = metric
        if not isinstance(metric, metric_type):
            raise TypeError(f"'{name}' is already registered as a {metric.kind}")
        return metric

    def counter(
        self, name: str, *, description: str = "", label_names: Iterable[str] | None = None
    ) -> CounterMetric:
        return self._lookup(CounterMetric, name, description, label_names)

    def distribution(
        self, name: str, *, description: str = "", label_names: Iterable[str] | None = None
    ) -> DistributionMetric:
        return self._lookup(DistributionMetric, name, description, label_names)

    def register(self, definition: MetricDefinition) -> Metric:
        metric_type = _METRIC_TYPES.get(definition.metric_type)
        if metric_type is None:
            raise ValueError(f"Unsupported metric type: {definition.metric_type}")
        return self._lookup(metric_type, definition.name, definition.description, definition.label_names)

    def metrics(self) -> Tuple[Metric, ...]:
        return tuple(self._metrics.values())

    def snapshot(self) -> Dict[str, Dict[LabelValues, Dict[str, float]]]:
        return {name: metric.snapshot() for name, metric in self._metrics.items()}

    def reset(self) -> None:
        """Drop observed values but keep every registration."""

        for metric in self._metrics.values():
            metric.reset()

    def time_distribution(self, name: str, *, labels: Labels | None = None) -> ContextManager[None]:
        return self.distribution(name).time(labels=labels)
