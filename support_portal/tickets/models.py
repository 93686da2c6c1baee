from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Mapping, Sequence, Union

from .state import TicketStatus

RequestedFieldValue = Union[str, list[str], bool]


class _LabelEnum(str, Enum):
    def __str__(self) -> str:
        return self.value


class TicketType(_LabelEnum):
    INCIDENT = "Incident"
    REQUEST = "Request"


class Impact(_LabelEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Urgency(_LabelEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Priority(_LabelEnum):
    P1 = "P1"
    P2 = "P2"
    P3 = "P3"
    P4 = "P4"


class ContactMethod(_LabelEnum):
    EMAIL = "Email"
    TEAMS = "Teams"
    PHONE = "Phone"


class ActivityActor(_LabelEnum):
    SYSTEM = "System"
    USER = "User"
    ANALYST = "Analyst"


class ActivityKind(_LabelEnum):
    STATUS = "status"
    NOTE = "note"
    COMMENT = "comment"
    CREATED = "created"


@dataclass(slots=True, frozen=True)
class TicketActivityEntry:
    """Single entry in a ticket's append-only activity log."""

    id: str
    created_at: datetime
    actor: ActivityActor
    kind: ActivityKind
    message: str


@dataclass(slots=True)
class Ticket:
    """Aggregate representing a tracked incident or service request."""

    id: str
    created_at: datetime
    updated_at: datetime
    type: TicketType
    status: TicketStatus
    priority: Priority
    impact: Impact
    urgency: Urgency
    category: str
    product: str
    summary: str
    description: str
    preferred_contact_method: ContactMethod
    subcategory: str | None = None
    attachments: list[str] = field(default_factory=list)
    catalog_item_slug: str | None = None
    requested_fields: dict[str, RequestedFieldValue] | None = None
    activity_log: list[TicketActivityEntry] = field(default_factory=list)


@dataclass(slots=True)
class TicketDraft:
    """Intake input for a new ticket.

    There is no priority field: priority is always derived from impact and
    urgency. Enum-typed fields also accept their string values.
    """

    type: TicketType | str
    impact: Impact | str | None
    urgency: Urgency | str | None
    category: str
    product: str
    summary: str
    description: str = ""
    subcategory: str | None = None
    preferred_contact_method: ContactMethod | str = ContactMethod.EMAIL
    attachments: Sequence[str] = ()
    catalog_item_slug: str | None = None
    requested_fields: Mapping[str, RequestedFieldValue] | None = None
