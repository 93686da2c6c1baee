from __future__ import annotations

from enum import Enum
from typing import Mapping


class TicketStatus(str, Enum):
    """Supported states for a ticket's lifecycle."""

    NEW = "New"
    IN_PROGRESS = "In Progress"
    WAITING_ON_USER = "Waiting on User"
    RESOLVED = "Resolved"
    CLOSED = "Closed"

    def __str__(self) -> str:
        return self.value


class TicketStateMachine:
    """Validate ticket lifecycle transitions.

    Tickets move New, In Progress, Waiting on User, Resolved, Closed in that
    order. ``New`` is the only initial state and ``Closed`` is terminal. Every
    open state may be closed directly, and ``In Progress`` / ``Waiting on User``
    may move back and forth. Requests for the current status are accepted so
    the service can record them, except on a terminal state.
    """

    _TRANSITIONS: Mapping[TicketStatus, frozenset[TicketStatus]] = {
        TicketStatus.NEW: frozenset({TicketStatus.IN_PROGRESS, TicketStatus.CLOSED}),
        TicketStatus.IN_PROGRESS: frozenset({TicketStatus.WAITING_ON_USER, TicketStatus.CLOSED}),
        TicketStatus.WAITING_ON_USER: frozenset(
            {TicketStatus.IN_PROGRESS, TicketStatus.RESOLVED, TicketStatus.CLOSED}
        ),
        TicketStatus.RESOLVED: frozenset({TicketStatus.CLOSED}),
        TicketStatus.CLOSED: frozenset(),
    }

    @classmethod
    def initial_state(cls) -> TicketStatus:
        return TicketStatus.NEW

    @classmethod
    def is_terminal(cls, state: TicketStatus) -> bool:
        return not cls._TRANSITIONS.get(state)

    @classmethod
    def allowed_targets(cls, current: TicketStatus) -> frozenset[TicketStatus]:
        return cls._TRANSITIONS.get(current, frozenset())

    @classmethod
    def can_transition(cls, current: TicketStatus, new: TicketStatus) -> bool:
        if current == new:
            return not cls.is_terminal(current)
        return new in cls.allowed_targets(current)
