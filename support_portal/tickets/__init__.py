"""Ticket domain types, lifecycle rules and the priority policy.

:class:`~support_portal.tickets.service.TicketService` is imported from
``support_portal.tickets.service`` because it depends on the storage layer.
"""

from .models import (
    ActivityActor,
    ActivityKind,
    ContactMethod,
    Impact,
    Priority,
    Ticket,
    TicketActivityEntry,
    TicketDraft,
    TicketType,
    Urgency,
)
from .priority import PRIORITY_MATRIX, priority_policy
from .state import TicketStateMachine, TicketStatus

__all__ = [
    "ActivityActor",
    "ActivityKind",
    "ContactMethod",
    "Impact",
    "PRIORITY_MATRIX",
    "Priority",
    "Ticket",
    "TicketActivityEntry",
    "TicketDraft",
    "TicketStateMachine",
    "TicketStatus",
    "TicketType",
    "Urgency",
    "priority_policy",
]
