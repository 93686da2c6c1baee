from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from support_portal.analytics.recorder import AnalyticsRecorder
from support_portal.metrics import MetricsRegistry, register_default_metrics
from support_portal.preferences.service import KBHelpfulVotes, PortalPreferences
from support_portal.storage import InMemoryBackend, PersistentStore
from support_portal.tickets.repository import TicketRepository
from support_portal.tickets.service import TicketService


class FakeClock:
    """Deterministic clock that moves forward ``step`` on every call."""

    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def metrics() -> MetricsRegistry:
    return register_default_metrics(MetricsRegistry())


@pytest.fixture
def backend() -> InMemoryBackend:
    return InMemoryBackend()


@pytest.fixture
def store(backend: InMemoryBackend, metrics: MetricsRegistry) -> PersistentStore:
    return PersistentStore(backend, metrics=metrics)


@pytest.fixture
def recorder(store: PersistentStore, clock: FakeClock, metrics: MetricsRegistry) -> AnalyticsRecorder:
    return AnalyticsRecorder(store, clock=clock, metrics=metrics)


@pytest.fixture
def ticket_service(
    store: PersistentStore,
    recorder: AnalyticsRecorder,
    clock: FakeClock,
    metrics: MetricsRegistry,
) -> TicketService:
    return TicketService(TicketRepository(store), recorder=recorder, clock=clock, metrics=metrics)


@pytest.fixture
def preferences(store: PersistentStore) -> PortalPreferences:
    return PortalPreferences(store)


@pytest.fixture
def votes(store: PersistentStore, recorder: AnalyticsRecorder) -> KBHelpfulVotes:
    return KBHelpfulVotes(store, recorder=recorder)
