"""Fixed demo tickets covering every status and priority."""

from __future__ import annotations

from datetime import datetime, timedelta

from .models import (
    ActivityActor,
    ActivityKind,
    ContactMethod,
    Impact,
    Ticket,
    TicketActivityEntry,
    TicketType,
    Urgency,
)
from .priority import priority_policy
from .state import TicketStatus

INCIDENT_CREATED_MESSAGE = "Incident submitted through the demo support portal."
REQUEST_CREATED_MESSAGE = "Service request submitted through the demo catalog."


def _entry(
    ticket_id: str,
    index: int,
    at: datetime,
    actor: ActivityActor,
    kind: ActivityKind,
    message: str,
) -> TicketActivityEntry:
    return TicketActivityEntry(
        id=f"ACT-{ticket_id}-{index}",
        created_at=at,
        actor=actor,
        kind=kind,
        message=message,
    )


def build_demo_tickets(now: datetime) -> list[Ticket]:
    """Return the demo ticket set with timestamps relative to ``now``."""

    def hours(count: int) -> datetime:
        return now - timedelta(hours=count)

    def minutes(count: int) -> datetime:
        return now - timedelta(minutes=count)

    return [
        Ticket(
            id="INC-1003",
            created_at=minutes(20),
            updated_at=minutes(20),
            type=TicketType.INCIDENT,
            status=TicketStatus.NEW,
            priority=priority_policy(Impact.HIGH, Urgency.HIGH),
            impact=Impact.HIGH,
            urgency=Urgency.HIGH,
            category="Networking / VPN",
            subcategory="Remote Access",
            product="Corporate VPN",
            summary="VPN disconnects for the entire remote sales team",
            description=(
                "Remote sales staff are disconnected from the corporate VPN every few minutes "
                "and cannot reach the CRM or file shares."
            ),
            preferred_contact_method=ContactMethod.PHONE,
            attachments=[],
            activity_log=[
                _entry("INC-1003", 0, minutes(20), ActivityActor.SYSTEM, ActivityKind.CREATED,
                       INCIDENT_CREATED_MESSAGE),
            ],
        ),
        Ticket(
            id="INC-1001",
            created_at=hours(26),
            updated_at=minutes(45),
            type=TicketType.INCIDENT,
            status=TicketStatus.IN_PROGRESS,
            priority=priority_policy(Impact.HIGH, Urgency.MEDIUM),
            impact=Impact.HIGH,
            urgency=Urgency.MEDIUM,
            category="Microsoft 365",
            subcategory="Teams",
            product="Teams",
            summary="Teams desktop app microphone intermittently unavailable",
            description=(
                "Microphone works in system settings but Teams stops detecting it after "
                "docking/undocking. Affects multiple meetings during the day."
            ),
            preferred_contact_method=ContactMethod.TEAMS,
            attachments=["teams-audio-settings.png"],
            activity_log=[
                _entry("INC-1001", 0, hours(26), ActivityActor.SYSTEM, ActivityKind.CREATED,
                       INCIDENT_CREATED_MESSAGE),
                _entry("INC-1001", 1, minutes(45), ActivityActor.ANALYST, ActivityKind.STATUS,
                       "Status updated from New to In Progress. Collecting device and Teams logs."),
            ],
        ),
        Ticket(
            id="REQ-2001",
            created_at=hours(72),
            updated_at=hours(6),
            type=TicketType.REQUEST,
            status=TicketStatus.WAITING_ON_USER,
            priority=priority_policy(Impact.MEDIUM, Urgency.LOW),
            impact=Impact.MEDIUM,
            urgency=Urgency.LOW,
            category="Access Request",
            subcategory="Shared Mailbox",
            product="Outlook",
            summary="Request shared mailbox access for Marketing Ops",
            description=(
                "User needs read/send-as access to marketing-ops@ mailbox for campaign "
                "coordination. Manager approval pending."
            ),
            preferred_contact_method=ContactMethod.EMAIL,
            attachments=[],
            catalog_item_slug="request-shared-mailbox-access",
            requested_fields={
                "mailboxName": "marketing-ops@company.com",
                "accessType": "Full Access + Send As",
            },
            activity_log=[
                _entry("REQ-2001", 0, hours(72), ActivityActor.SYSTEM, ActivityKind.CREATED,
                       REQUEST_CREATED_MESSAGE),
                _entry("REQ-2001", 1, hours(6), ActivityActor.ANALYST, ActivityKind.COMMENT,
                       "Please confirm manager approval ticket/reference so we can proceed."),
            ],
        ),
        Ticket(
            id="INC-1002",
            created_at=hours(8),
            updated_at=hours(2),
            type=TicketType.INCIDENT,
            status=TicketStatus.RESOLVED,
            priority=priority_policy(Impact.MEDIUM, Urgency.MEDIUM),
            impact=Impact.MEDIUM,
            urgency=Urgency.MEDIUM,
            category="Adobe",
            subcategory="Creative Cloud Desktop",
            product="Adobe Creative Cloud",
            summary="Creative Cloud desktop app opens then immediately closes",
            description=(
                "Adobe Creative Cloud desktop app launches but exits after splash screen on "
                "Windows 11 managed device."
            ),
            preferred_contact_method=ContactMethod.EMAIL,
            attachments=["cc-crash.mp4"],
            activity_log=[
                _entry("INC-1002", 0, hours(8), ActivityActor.SYSTEM, ActivityKind.CREATED,
                       INCIDENT_CREATED_MESSAGE),
                _entry("INC-1002", 1, hours(4), ActivityActor.ANALYST, ActivityKind.NOTE,
                       "Validated Adobe licensing service and proxy connectivity before cache cleanup."),
                _entry("INC-1002", 2, hours(2), ActivityActor.ANALYST, ActivityKind.STATUS,
                       "Status updated from Waiting on User to Resolved. Safe cache reset completed "
                       "and sign-in restored."),
            ],
        ),
        Ticket(
            id="REQ-2002",
            created_at=hours(120),
            updated_at=hours(96),
            type=TicketType.REQUEST,
            status=TicketStatus.CLOSED,
            priority=priority_policy(Impact.LOW, Urgency.HIGH),
            impact=Impact.LOW,
            urgency=Urgency.HIGH,
            category="Software",
            subcategory="Request Software Install (Adobe / Figma / Office Add-in)",
            product="Desktop Applications",
            summary="Request Software Install (Adobe / Figma / Office Add-in) - Figma Desktop",
            description="Figma Desktop needed for the brand refresh project.",
            preferred_contact_method=ContactMethod.EMAIL,
            attachments=[],
            catalog_item_slug="request-software-install-adobe-figma-office-addin",
            requested_fields={
                "softwareName": "Figma Desktop",
                "deviceAsset": "LPT-12345",
                "businessJustification": "Brand refresh design reviews.",
                "neededBy": "",
            },
            activity_log=[
                _entry("REQ-2002", 0, hours(120), ActivityActor.SYSTEM, ActivityKind.CREATED,
                       REQUEST_CREATED_MESSAGE),
                _entry("REQ-2002", 1, hours(96), ActivityActor.ANALYST, ActivityKind.STATUS,
                       "Status updated from Resolved to Closed. Install pushed and confirmed."),
            ],
        ),
    ]
