import pytest

from support_portal.admin import AdminTools
from support_portal.analytics.events import AnalyticsEventType
from support_portal.reference.kb import get_kb_article_by_slug


@pytest.fixture
def admin(ticket_service, recorder, votes, preferences):
    return AdminTools(tickets=ticket_service, recorder=recorder, votes=votes, preferences=preferences)


def _actions(recorder):
    return [
        event.payload.action
        for event in recorder.events()
        if event.type is AnalyticsEventType.ADMIN_ACTION
    ]


def test_seed_and_reset_tickets_are_recorded(admin, ticket_service, recorder):
    seeded = admin.seed_demo_tickets()
    assert len(seeded) == 5
    assert len(ticket_service.list_tickets()) == 5

    admin.reset_tickets()
    assert ticket_service.list_tickets() == []
    assert _actions(recorder) == ["seed_demo_tickets", "reset_tickets"]


def test_reset_analytics_leaves_only_its_own_event(admin, recorder):
    recorder.track_search(area="kb", query="vpn", result_count=1)
    admin.seed_demo_tickets()

    admin.reset_analytics()

    events = recorder.events()
    assert len(events) == 1
    assert events[0].payload.action == "reset_analytics"


def test_reset_votes_and_enable_admin_mode(admin, votes, preferences, recorder):
    votes.set_vote(get_kb_article_by_slug("windows-printer-job-stuck-in-queue"), "yes")

    admin.reset_kb_votes()
    admin.enable_admin_mode()

    assert votes.get_votes() == {}
    assert preferences.is_admin_enabled()
    assert _actions(recorder) == ["reset_kb_helpful_votes", "enable_admin_mode_from_admin_page"]
