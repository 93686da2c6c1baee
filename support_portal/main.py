from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from opentelemetry.sdk.trace import TracerProvider

from support_portal.admin import AdminTools
from support_portal.analytics.recorder import AnalyticsRecorder
from support_portal.core.config import Settings, get_settings
from support_portal.core.logging import configure_logging, init_tracer, shutdown_tracer
from support_portal.core.utils import Clock, utcnow
from support_portal.metrics import metrics_registry
from support_portal.preferences.service import KBHelpfulVotes, PortalPreferences
from support_portal.storage import InMemoryBackend, JsonFileBackend, PersistentStore, StorageBackend
from support_portal.tickets.repository import TicketRepository
from support_portal.tickets.service import TicketService


@dataclass(slots=True)
class SupportPortal:
    """Wired services sharing one persistent store."""

    settings: Settings
    logger: logging.Logger
    store: PersistentStore
    tickets: TicketService
    analytics: AnalyticsRecorder
    preferences: PortalPreferences
    votes: KBHelpfulVotes
    admin: AdminTools
    tracer_provider: TracerProvider | None = None

    def close(self) -> None:
        shutdown_tracer(self.tracer_provider)
        self.tracer_provider = None


def _build_backend(settings: Settings) -> StorageBackend:
    if settings.storage_backend == "memory":
        return InMemoryBackend(quota_bytes=settings.storage_quota_bytes)
    return JsonFileBackend(Path(settings.storage_path), quota_bytes=settings.storage_quota_bytes)


def create_portal(
    settings: Settings | None = None,
    *,
    backend: StorageBackend | None = None,
    clock: Clock | None = None,
) -> SupportPortal:
    settings = settings or get_settings()
    logger = configure_logging(settings)
    tracer_provider = init_tracer(settings)
    clock = clock or utcnow

    store = PersistentStore(
        backend if backend is not None else _build_backend(settings),
        namespace=settings.storage_namespace,
        metrics=metrics_registry,
    )
    recorder = AnalyticsRecorder(
        store,
        max_events=settings.analytics_max_events,
        clock=clock,
        metrics=metrics_registry,
    )
    tickets = TicketService(
        TicketRepository(store),
        recorder=recorder,
        clock=clock,
        metrics=metrics_registry,
    )
    preferences = PortalPreferences(store)
    votes = KBHelpfulVotes(store, recorder=recorder)
    admin = AdminTools(tickets=tickets, recorder=recorder, votes=votes, preferences=preferences)

    logger.info(
        "Support portal ready (environment=%s, storage=%s)",
        settings.environment,
        settings.storage_backend if backend is None else type(backend).__name__,
    )
    return SupportPortal(
        settings=settings,
        logger=logger,
        store=store,
        tickets=tickets,
        analytics=recorder,
        preferences=preferences,
        votes=votes,
        admin=admin,
        tracer_provider=tracer_provider,
    )
