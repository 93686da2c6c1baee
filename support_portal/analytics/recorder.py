from __future__ import annotations

import logging
from typing import Sequence

from opentelemetry import trace

from support_portal.core.utils import Clock, IdFactory, new_local_id, utcnow
from support_portal.metrics import MetricsRegistry, metrics_registry
from support_portal.metrics.definitions import ANALYTICS_EVENTS_RECORDED, ANALYTICS_SUMMARY_DURATION
from support_portal.preferences.models import HelpfulVote
from support_portal.reference.kb import KBArticle
from support_portal.storage import ANALYTICS, PersistentStore
from support_portal.tickets.models import Ticket

from .events import (
    AdminActionPayload,
    AnalyticsArea,
    AnalyticsEvent,
    CatalogSubmitPayload,
    EventPayload,
    IncidentSubmitPayload,
    KBHelpfulVotePayload,
    KBViewPayload,
    SearchClickPayload,
    SearchPayload,
    TicketCommentAddedPayload,
    TicketNoteAddedPayload,
)
from .summary import AnalyticsSummary, summarize

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

DEFAULT_MAX_EVENTS = 1500


class AnalyticsRecorder:
    """Append usage events to the analytics slice and build dashboard summaries.

    The log keeps the most recent ``max_events`` entries. Recording never
    raises because of persistence problems; the store reports those.
    """

    def __init__(
        self,
        store: PersistentStore,
        *,
        max_events: int = DEFAULT_MAX_EVENTS,
        clock: Clock = utcnow,
        id_factory: IdFactory = new_local_id,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        if max_events < 1:
            raise ValueError("max_events must be positive")
        self._store = store
        self._max_events = max_events
        self._clock = clock
        self._id_factory = id_factory
        self._metrics = metrics or metrics_registry

    def record(self, payload: EventPayload, *, area: AnalyticsArea | str) -> AnalyticsEvent:
        event = AnalyticsEvent(
            id=self._id_factory("ANL"),
            created_at=self._clock(),
            area=AnalyticsArea(area),
            payload=payload,
        )
        events = self._store.read(ANALYTICS)
        events.append(event)
        if not self._store.write(ANALYTICS, events[-self._max_events :]):
            logger.warning("Analytics event %s (%s) was not persisted", event.id, event.type)
        self._metrics.counter(ANALYTICS_EVENTS_RECORDED).inc(labels={"type": event.type.value})
        logger.debug("Recorded %s event %s in area %s", event.type, event.id, event.area)
        return event

    def events(self) -> list[AnalyticsEvent]:
        return self._store.read(ANALYTICS)

    def reset(self) -> None:
        self._store.reset(ANALYTICS)

    def summary(
        self,
        tickets: Sequence[Ticket],
        *,
        top_n: int = 8,
        priority_top_n: int = 4,
    ) -> AnalyticsSummary:
        """Summarize the stored event log together with ``tickets``."""

        events = self.events()
        with tracer.start_as_current_span("analytics.summary") as span:
            span.set_attribute("analytics.event_count", len(events))
            span.set_attribute("analytics.ticket_count", len(tickets))
            with self._metrics.time_distribution(ANALYTICS_SUMMARY_DURATION):
                return summarize(events, tickets, top_n=top_n, priority_top_n=priority_top_n)

    # Typed helpers used by the UI layer.

    def track_kb_view(self, article: KBArticle) -> AnalyticsEvent:
        return self.record(
            KBViewPayload(
                slug=article.slug,
                title=article.title,
                category=article.category,
                product=article.product,
                product_family=article.product_family,
            ),
            area=AnalyticsArea.KB,
        )

    def track_search(
        self,
        *,
        area: AnalyticsArea | str,
        query: str,
        result_count: int,
        context: str | None = None,
    ) -> AnalyticsEvent | None:
        trimmed = query.strip()
        if not trimmed:
            return None
        return self.record(
            SearchPayload(query=trimmed, result_count=result_count, context=context),
            area=area,
        )

    def track_search_click(
        self,
        *,
        area: AnalyticsArea | str,
        query: str,
        clicked_slug: str,
        clicked_title: str,
        rank: int,
    ) -> AnalyticsEvent:
        return self.record(
            SearchClickPayload(
                query=query.strip() or None,
                clicked_slug=clicked_slug,
                clicked_title=clicked_title,
                rank=rank,
            ),
            area=area,
        )

    def track_kb_helpful_vote(self, article: KBArticle, vote: HelpfulVote | str) -> AnalyticsEvent:
        return self.record(
            KBHelpfulVotePayload(slug=article.slug, title=article.title, vote=HelpfulVote(vote)),
            area=AnalyticsArea.KB,
        )

    def track_catalog_submit(
        self,
        *,
        slug: str,
        title: str,
        category: str,
        product: str,
        ticket_id: str | None = None,
    ) -> AnalyticsEvent:
        return self.record(
            CatalogSubmitPayload(
                slug=slug, title=title, category=category, product=product, ticket_id=ticket_id
            ),
            area=AnalyticsArea.CATALOG,
        )

    def track_incident_submit(self, ticket: Ticket) -> AnalyticsEvent:
        return self.record(
            IncidentSubmitPayload(
                ticket_id=ticket.id,
                category=ticket.category,
                subcategory=ticket.subcategory,
                product=ticket.product,
                priority=ticket.priority.value,
            ),
            area=AnalyticsArea.PORTAL,
        )

    def track_ticket_activity(self, ticket_id: str, mode: str) -> AnalyticsEvent:
        if mode == "note":
            payload: EventPayload = TicketNoteAddedPayload(ticket_id=ticket_id)
        elif mode == "comment":
            payload = TicketCommentAddedPayload(ticket_id=ticket_id)
        else:
            raise ValueError(f"Unsupported ticket activity mode: {mode}")
        return self.record(payload, area=AnalyticsArea.TICKETS)

    def track_admin_action(self, action: str) -> AnalyticsEvent:
        return self.record(AdminActionPayload(action=action), area=AnalyticsArea.ADMIN)
