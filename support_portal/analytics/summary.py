"""Dashboard aggregates over the analytics log and the ticket set."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence

from support_portal.core.utils import normalize_text
from support_portal.preferences.models import HelpfulVote
from support_portal.tickets.models import Ticket, TicketType

from .events import (
    AnalyticsEvent,
    CatalogSubmitPayload,
    IncidentSubmitPayload,
    KBHelpfulVotePayload,
    KBViewPayload,
    SearchPayload,
)


@dataclass(slots=True, frozen=True)
class CountEntry:
    label: str
    count: int


@dataclass(slots=True, frozen=True)
class SummaryTotals:
    kb_views: int = 0
    searches: int = 0
    catalog_submissions: int = 0
    incident_submissions: int = 0
    helpful_yes: int = 0
    helpful_no: int = 0


@dataclass(slots=True, frozen=True)
class AnalyticsSummary:
    totals: SummaryTotals
    most_viewed_kb_articles: tuple[CountEntry, ...]
    most_searched_issues: tuple[CountEntry, ...]
    top_products: tuple[CountEntry, ...]
    incidents_by_priority: tuple[CountEntry, ...]
    top_ticket_categories: tuple[CountEntry, ...]


def top_counts(counts: Mapping[str, int], limit: int) -> tuple[CountEntry, ...]:
    """Order ``counts`` by count descending, keeping first-seen order on ties.

    ``counts`` must iterate in first-seen order (plain dicts do); the sort is
    stable, so equal counts keep that order.
    """

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return tuple(CountEntry(label=label, count=count) for label, count in ranked[:limit])


def _bump(counts: dict[str, int], label: str) -> None:
    counts[label] = counts.get(label, 0) + 1


def summarize(
    events: Iterable[AnalyticsEvent],
    tickets: Sequence[Ticket],
    *,
    top_n: int = 8,
    priority_top_n: int = 4,
) -> AnalyticsSummary:
    """Recompute every dashboard aggregate from scratch.

    Event-derived lists come from payloads; ``incidents_by_priority`` and
    ``top_ticket_categories`` read the ticket data instead. The function has
    no side effects, so identical inputs always give identical summaries.
    """

    views_by_slug: dict[str, int] = {}
    searches_by_query: dict[str, int] = {}
    products: dict[str, int] = {}
    priorities: dict[str, int] = {}
    categories: dict[str, int] = {}

    kb_views = searches = catalog_submissions = incident_submissions = 0
    helpful_yes = helpful_no = 0

    for event in events:
        payload = event.payload
        if isinstance(payload, KBViewPayload):
            kb_views += 1
            _bump(views_by_slug, payload.slug)
        elif isinstance(payload, SearchPayload):
            searches += 1
            query = normalize_text(payload.query)
            if query:
                _bump(searches_by_query, query)
        elif isinstance(payload, KBHelpfulVotePayload):
            if payload.vote is HelpfulVote.YES:
                helpful_yes += 1
            else:
                helpful_no += 1
        elif isinstance(payload, CatalogSubmitPayload):
            catalog_submissions += 1
            _bump(products, payload.product)
        elif isinstance(payload, IncidentSubmitPayload):
            incident_submissions += 1
            _bump(products, payload.product)

    for ticket in tickets:
        _bump(categories, ticket.category)
        if ticket.type is TicketType.INCIDENT:
            _bump(priorities, ticket.priority.value)

    return AnalyticsSummary(
        totals=SummaryTotals(
            kb_views=kb_views,
            searches=searches,
            catalog_submissions=catalog_submissions,
            incident_submissions=incident_submissions,
            helpful_yes=helpful_yes,
            helpful_no=helpful_no,
        ),
        most_viewed_kb_articles=top_counts(views_by_slug, top_n),
        most_searched_issues=top_counts(searches_by_query, top_n),
        top_products=top_counts(products, top_n),
        incidents_by_priority=top_counts(priorities, priority_top_n),
        top_ticket_categories=top_counts(categories, top_n),
    )
