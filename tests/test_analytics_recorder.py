from __future__ import annotations

import pytest

from support_portal.analytics.events import (
    AdminActionPayload,
    AnalyticsArea,
    AnalyticsEvent,
    AnalyticsEventType,
    SearchPayload,
)
from support_portal.analytics.recorder import AnalyticsRecorder
from support_portal.metrics.definitions import ANALYTICS_EVENTS_RECORDED, ANALYTICS_SUMMARY_DURATION
from support_portal.reference.kb import get_kb_article_by_slug
from support_portal.storage import ANALYTICS, InMemoryBackend, PersistenceWarning, PersistentStore


def test_record_derives_type_from_payload(recorder, metrics):
    event = recorder.record(SearchPayload(query="vpn", result_count=3), area=AnalyticsArea.KB)

    assert event.type is AnalyticsEventType.SEARCH
    assert event.area is AnalyticsArea.KB
    assert event.id.startswith("ANL-")
    assert recorder.events() == [event]
    assert metrics.counter(ANALYTICS_EVENTS_RECORDED).value(labels={"type": "search"}) == 1


def test_log_keeps_only_most_recent_events(store, clock, metrics):
    recorder = AnalyticsRecorder(store, max_events=3, clock=clock, metrics=metrics)

    for index in range(5):
        recorder.track_admin_action(f"action-{index}")

    assert [event.payload.action for event in recorder.events()] == [
        "action-2",
        "action-3",
        "action-4",
    ]


def test_default_cap_is_1500(store, clock, metrics):
    backlog = [
        AnalyticsEvent(
            id=f"ANL-{index}",
            created_at=clock(),
            area=AnalyticsArea.ADMIN,
            payload=AdminActionPayload(action=str(index)),
        )
        for index in range(1499)
    ]
    store.write(ANALYTICS, backlog)
    recorder = AnalyticsRecorder(store, clock=clock, metrics=metrics)

    recorder.track_admin_action("1499")
    recorder.track_admin_action("1500")

    events = recorder.events()
    assert len(events) == 1500
    assert events[0].payload.action == "1"
    assert events[-1].payload.action == "1500"


def test_blank_search_is_not_recorded(recorder):
    assert recorder.track_search(area="kb", query="   ", result_count=0) is None
    assert recorder.events() == []

    event = recorder.track_search(area="kb", query="  outlook  ", result_count=1, context="kb-page")
    assert event.payload.query == "outlook"
    assert event.payload.context == "kb-page"


def test_typed_helpers(recorder):
    article = get_kb_article_by_slug("vpn-connects-but-no-internal-resources")

    view = recorder.track_kb_view(article)
    click = recorder.track_search_click(
        area="portal", query=" ", clicked_slug=article.slug, clicked_title=article.title, rank=1
    )
    vote = recorder.track_kb_helpful_vote(article, "no")

    assert view.payload.product_family == article.product_family
    assert click.payload.query is None
    assert vote.type is AnalyticsEventType.KB_HELPFUL_VOTE
    assert [event.id for event in recorder.events()] == [view.id, click.id, vote.id]


def test_unknown_ticket_activity_mode(recorder):
    with pytest.raises(ValueError):
        recorder.track_ticket_activity("INC-1", "status")


def test_persistence_failure_does_not_raise(clock, metrics):
    store = PersistentStore(InMemoryBackend(quota_bytes=10), metrics=metrics)
    recorder = AnalyticsRecorder(store, clock=clock, metrics=metrics)

    with pytest.warns(PersistenceWarning):
        event = recorder.track_admin_action("reset_tickets")

    assert event.payload.action == "reset_tickets"
    assert recorder.events() == []


def test_summary_is_timed(recorder, metrics):
    recorder.track_admin_action("seed_demo_tickets")

    summary = recorder.summary([])

    assert summary.totals.kb_views == 0
    assert metrics.distribution(ANALYTICS_SUMMARY_DURATION).snapshot()[()]["count"] == 1


def test_max_events_must_be_positive(store):
    with pytest.raises(ValueError):
        AnalyticsRecorder(store, max_events=0)
