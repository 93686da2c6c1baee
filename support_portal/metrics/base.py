"""Counter and distribution metrics with fixed label names."""
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from time import perf_counter
from typing import ClassVar, Dict, Iterable, Iterator, Mapping, Tuple

LabelValues = Tuple[str, ...]
Labels = Mapping[str, str]


class Metric:
    """Named series keyed by the values of ``label_names``.

    A metric declared without label names refuses labels; one declared with
    label names requires all of them on every update.
    """

    kind: ClassVar[str] = "metric"

    def __init__(self, name: str, *, description: str = "", label_names: Iterable[str] | None = None) -> None:
        self.name = name
        self.description = description
        self.label_names: Tuple[str, ...] = tuple(label_names or ())

    def series_key(self, labels: Labels | None = None) -> LabelValues:
        labels = labels or {}
        if not self.label_names:
            if labels:
                raise ValueError(f"{self.kind} '{self.name}' takes no labels, got {sorted(labels)}")
            return ()
        missing = [name for name in self.label_names if name not in labels]
        if missing:
            raise ValueError(f"{self.kind} '{self.name}' is missing labels {missing}")
        return tuple(str(labels[name]) for name in self.label_names)

    def snapshot(self) -> Dict[LabelValues, Dict[str, float]]:
        raise NotImplementedError

    def reset(self) -> None:
        raise NotImplementedError


class CounterMetric(Metric):
    kind = "counter"

    def __init__(self, name: str, *, description: str = "", label_names: Iterable[str] | None = None) -> None:
        super().__init__(name, description=description, label_names=label_names)
        self._totals: Dict[LabelValues, float] = {}

    def inc(self, amount: float = 1.0, *, labels: Labels | None = None) -> None:
        if amount < 0:
            raise ValueError(f"counter '{self.name}' cannot decrease")
        key = self.series_key(labels)
        self._totals[key] = self._totals.get(key, 0.0) + amount

    def value(self, *, labels: Labels | None = None) -> float:
        return self._totals.get(self.series_key(labels), 0.0)

    def snapshot(self) -> Dict[LabelValues, Dict[str, float]]:
        return {key: {"value": total} for key, total in self._totals.items()}

    def reset(self) -> None:
        self._totals = {}


@dataclass
class DistributionStats:
    count: int = 0
    total: float = 0.0
    min: float = float("inf")
    max: float = float("-inf")

    def add(self, value: float) -> None:
        self.count += 1
        self.total += value
        self.min = min(self.min, value)
        self.max = max(self.max, value)

    @property
    def mean(self) -> float:
        return self.total / self.count if self.count else 0.0

    def as_dict(self) -> Dict[str, float]:
        empty = self.count == 0
        return {
            "count": float(self.count),
            "sum": self.total,
            "min": 0.0 if empty else self.min,
            "max": 0.0 if empty else self.max,
            "avg": self.mean,
        }


class DistributionMetric(Metric):
    """Running count, sum, min and max of observed values per series."""

    kind = "distribution"

    def __init__(self, name: str, *, description: str = "", label_names: Iterable[str] | None = None) -> None:
        super().__init__(name, description=description, label_names=label_names)
        self._series: Dict[LabelValues, DistributionStats] = {}

    def observe(self, value: float, *, labels: Labels | None = None) -> None:
        self._series.setdefault(self.series_key(labels), DistributionStats()).add(value)

    @contextmanager
    def time(self, *, labels: Labels | None = None) -> Iterator[None]:
        """Observe the wall time of the block in seconds, even if it raises."""

        started = perf_counter()
        try:
            yield
        finally:
            self.observe(perf_counter() - started, labels=labels)

    def snapshot(self) -> Dict[LabelValues, Dict[str, float]]:
        return {key: stats.as_dict() for key, stats in self._series.items()}

    def reset(self) -> None:
        self._series = {}
