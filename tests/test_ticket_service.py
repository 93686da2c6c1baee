from __future__ import annotations

import pytest

from support_portal.analytics.events import AnalyticsEventType
from support_portal.metrics.definitions import TICKETS_CREATED
from support_portal.storage import TICKETS
from support_portal.tickets.models import (
    ActivityActor,
    ActivityKind,
    Impact,
    Priority,
    TicketDraft,
    TicketType,
    Urgency,
)
from support_portal.tickets.service import (
    CatalogItemNotFoundError,
    InvalidTicketTransitionError,
    TicketNotFoundError,
    TicketValidationError,
)
from support_portal.tickets.state import TicketStatus


def _incident_draft(**overrides) -> TicketDraft:
    values = dict(
        type=TicketType.INCIDENT,
        impact=Impact.HIGH,
        urgency=Urgency.MEDIUM,
        category="Microsoft 365",
        product="Outlook",
        summary="  Outlook search returns nothing  ",
        description=" Search index looks stale. ",
    )
    values.update(overrides)
    return TicketDraft(**values)


def test_create_incident_derives_priority_and_logs_creation(ticket_service, recorder, metrics):
    ticket = ticket_service.create_ticket(_incident_draft())

    assert ticket.priority is Priority.P2
    assert ticket.status is TicketStatus.NEW
    assert ticket.summary == "Outlook search returns nothing"
    assert ticket.description == "Search index looks stale."
    assert ticket.id.startswith("INC-")
    assert len(ticket.activity_log) == 1
    assert ticket.activity_log[0].kind is ActivityKind.CREATED
    assert ticket.activity_log[0].actor is ActivityActor.SYSTEM

    assert ticket_service.get_ticket(ticket.id) == ticket
    events = recorder.events()
    assert [event.type for event in events] == [AnalyticsEventType.INCIDENT_SUBMIT]
    assert events[0].payload.ticket_id == ticket.id
    assert events[0].payload.priority == "P2"
    assert metrics.counter(TICKETS_CREATED).value(labels={"type": "Incident"}) == 1


def test_create_request_does_not_record_incident_submit(ticket_service, recorder):
    ticket = ticket_service.create_ticket(
        _incident_draft(type=TicketType.REQUEST, impact="Low", urgency="Low")
    )

    assert ticket.id.startswith("REQ-")
    assert ticket.priority is Priority.P4
    assert recorder.events() == []


def test_invalid_draft_reports_field_errors_without_writing(ticket_service, store, backend):
    with pytest.raises(TicketValidationError) as excinfo:
        ticket_service.create_ticket(_incident_draft(summary="   ", category="", urgency=None))

    assert set(excinfo.value.errors) == {"summary", "category", "urgency"}
    assert backend.get_item(store.key_for(TICKETS)) is None
    assert ticket_service.list_tickets() == []


def test_unknown_impact_is_a_validation_error(ticket_service):
    with pytest.raises(TicketValidationError) as excinfo:
        ticket_service.create_ticket(_incident_draft(impact="Critical"))

    assert "impact" in excinfo.value.errors


def test_every_bad_enum_field_is_reported_together(ticket_service):
    draft = _incident_draft(
        type="Outage", impact="", urgency="Whenever", preferred_contact_method="Pager"
    )

    with pytest.raises(TicketValidationError) as excinfo:
        ticket_service.create_ticket(draft)

    assert excinfo.value.errors == {
        "type": "Unsupported type: Outage",
        "impact": "Impact is required.",
        "urgency": "Unsupported urgency: Whenever",
        "preferred_contact_method": "Unsupported preferred contact method: Pager",
    }
    assert ticket_service.list_tickets() == []


def test_change_status_appends_activity_and_bumps_updated_at(ticket_service):
    ticket = ticket_service.create_ticket(_incident_draft())

    updated = ticket_service.change_status(ticket.id, TicketStatus.IN_PROGRESS, note="Collecting logs.")

    assert updated.status is TicketStatus.IN_PROGRESS
    assert updated.updated_at > ticket.updated_at
    entry = updated.activity_log[-1]
    assert entry.kind is ActivityKind.STATUS
    assert entry.actor is ActivityActor.ANALYST
    assert entry.message == "Status updated from New to In Progress. Collecting logs."
    assert ticket_service.get_ticket(ticket.id) == updated


def test_same_status_is_recorded_not_dropped(ticket_service):
    ticket = ticket_service.create_ticket(_incident_draft())

    updated = ticket_service.change_status(ticket.id, "New")

    assert updated.status is TicketStatus.NEW
    assert updated.updated_at > ticket.updated_at
    assert len(updated.activity_log) == 2
    assert updated.activity_log[-1].message == "Status reconfirmed as New."


def test_resolved_ticket_cannot_be_reopened(ticket_service):
    ticket = ticket_service.create_ticket(_incident_draft())
    ticket_service.change_status(ticket.id, TicketStatus.IN_PROGRESS)
    with pytest.raises(InvalidTicketTransitionError):
        ticket_service.change_status(ticket.id, TicketStatus.RESOLVED)
    ticket_service.change_status(ticket.id, TicketStatus.WAITING_ON_USER)
    resolved = ticket_service.change_status(ticket.id, TicketStatus.RESOLVED)

    with pytest.raises(InvalidTicketTransitionError):
        ticket_service.change_status(ticket.id, TicketStatus.IN_PROGRESS)

    assert ticket_service.get_ticket(ticket.id) == resolved
    closed = ticket_service.change_status(ticket.id, TicketStatus.CLOSED)
    assert closed.activity_log[-1].message == "Status updated from Resolved to Closed."


def test_disallowed_transition_leaves_ticket_untouched(ticket_service):
    ticket = ticket_service.create_ticket(_incident_draft())

    with pytest.raises(InvalidTicketTransitionError) as excinfo:
        ticket_service.change_status(ticket.id, TicketStatus.RESOLVED)

    assert isinstance(excinfo.value, TicketValidationError)
    assert "status" in excinfo.value.errors
    assert ticket_service.get_ticket(ticket.id) == ticket


def test_closed_ticket_rejects_status_changes_but_accepts_notes(ticket_service, recorder):
    ticket = ticket_service.create_ticket(_incident_draft())
    ticket_service.change_status(ticket.id, TicketStatus.CLOSED)

    with pytest.raises(InvalidTicketTransitionError):
        ticket_service.change_status(ticket.id, TicketStatus.IN_PROGRESS)
    with pytest.raises(InvalidTicketTransitionError):
        ticket_service.change_status(ticket.id, TicketStatus.CLOSED)

    updated = ticket_service.add_note(ticket.id, "Post-incident review complete.")
    assert updated.status is TicketStatus.CLOSED
    assert updated.activity_log[-1].kind is ActivityKind.NOTE
    assert recorder.events()[-1].type is AnalyticsEventType.TICKET_NOTE_ADDED


def test_unknown_ticket_raises_not_found_without_writing(ticket_service, store, backend):
    ticket_service.create_ticket(_incident_draft())
    before = backend.get_item(store.key_for(TICKETS))

    with pytest.raises(TicketNotFoundError):
        ticket_service.change_status("INC-missing", TicketStatus.IN_PROGRESS)
    with pytest.raises(TicketNotFoundError):
        ticket_service.add_comment("INC-missing", "Hello?")
    with pytest.raises(TicketNotFoundError):
        ticket_service.get_ticket("INC-missing")

    assert backend.get_item(store.key_for(TICKETS)) == before


def test_comments_and_notes_keep_chronological_order(ticket_service, recorder):
    ticket = ticket_service.create_ticket(_incident_draft())

    ticket_service.add_note(ticket.id, "Checked the search index.")
    updated = ticket_service.add_comment(ticket.id, "  It started after the update.  ")

    kinds = [entry.kind for entry in updated.activity_log]
    assert kinds == [ActivityKind.CREATED, ActivityKind.NOTE, ActivityKind.COMMENT]
    assert updated.activity_log[-1].actor is ActivityActor.USER
    assert updated.activity_log[-1].message == "It started after the update."
    assert [event.type for event in recorder.events()][-2:] == [
        AnalyticsEventType.TICKET_NOTE_ADDED,
        AnalyticsEventType.TICKET_COMMENT_ADDED,
    ]


def test_empty_note_is_rejected(ticket_service):
    ticket = ticket_service.create_ticket(_incident_draft())

    with pytest.raises(TicketValidationError):
        ticket_service.add_note(ticket.id, "   ")

    assert len(ticket_service.get_ticket(ticket.id).activity_log) == 1


def test_catalog_request_builds_request_ticket(ticket_service, recorder):
    ticket = ticket_service.create_catalog_request(
        "request-shared-mailbox-access",
        {
            "mailboxName": "finance@company.com",
            "accessType": "Full Access",
            "managerApproval": "APR-311",
            "businessReason": "Month-end close",
        },
    )

    assert ticket.type is TicketType.REQUEST
    assert ticket.impact is Impact.MEDIUM and ticket.urgency is Urgency.MEDIUM
    assert ticket.priority is Priority.P3
    assert ticket.catalog_item_slug == "request-shared-mailbox-access"
    assert ticket.summary.endswith(" - finance@company.com")
    assert "Submitted Catalog Fields:" in ticket.description
    assert ticket.requested_fields["mailboxName"] == "finance@company.com"

    event = recorder.events()[-1]
    assert event.type is AnalyticsEventType.CATALOG_SUBMIT
    assert event.payload.ticket_id == ticket.id


def test_catalog_request_validates_required_fields(ticket_service):
    with pytest.raises(TicketValidationError) as excinfo:
        ticket_service.create_catalog_request("request-shared-mailbox-access", {})

    assert excinfo.value.errors
    assert ticket_service.list_tickets() == []


def test_catalog_request_for_unknown_item(ticket_service):
    with pytest.raises(CatalogItemNotFoundError):
        ticket_service.create_catalog_request("request-a-pony", {})


def test_list_tickets_filters_and_orders_by_update(ticket_service, clock):
    first = ticket_service.create_ticket(_incident_draft(summary="First"))
    second = ticket_service.create_ticket(
        _incident_draft(summary="Second", type=TicketType.REQUEST, category="Software")
    )
    clock.advance(minutes=5)
    ticket_service.add_note(first.id, "Bumped to the top.")

    assert [ticket.id for ticket in ticket_service.list_tickets()] == [first.id, second.id]
    assert [ticket.id for ticket in ticket_service.list_tickets(ticket_type="Request")] == [second.id]
    assert [ticket.id for ticket in ticket_service.list_tickets(category=["Software", "VPN"])] == [second.id]
    assert ticket_service.list_tickets(status=TicketStatus.CLOSED) == []
    assert len(ticket_service.list_tickets(priority=[Priority.P2])) == 2


def test_seed_then_reset(ticket_service):
    seeded = ticket_service.seed_demo_tickets()

    assert {ticket.status for ticket in seeded} == set(TicketStatus)
    assert {ticket.priority for ticket in seeded} == set(Priority)
    assert len(ticket_service.list_tickets()) == 5

    ticket_service.reset_tickets()
    assert ticket_service.list_tickets() == []
