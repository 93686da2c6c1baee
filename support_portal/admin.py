"""Administrative maintenance actions exposed on the admin page."""

from __future__ import annotations

import logging

from support_portal.analytics.recorder import AnalyticsRecorder
from support_portal.preferences.service import KBHelpfulVotes, PortalPreferences
from support_portal.tickets.models import Ticket
from support_portal.tickets.service import TicketService

logger = logging.getLogger(__name__)

SEED_DEMO_TICKETS = "seed_demo_tickets"
RESET_TICKETS = "reset_tickets"
RESET_ANALYTICS = "reset_analytics"
RESET_KB_HELPFUL_VOTES = "reset_kb_helpful_votes"
ENABLE_ADMIN_MODE = "enable_admin_mode_from_admin_page"


class AdminTools:
    """Destructive maintenance operations, each recorded as an admin action."""

    def __init__(
        self,
        *,
        tickets: TicketService,
        recorder: AnalyticsRecorder,
        votes: KBHelpfulVotes,
        preferences: PortalPreferences,
    ) -> None:
        self._tickets = tickets
        self._recorder = recorder
        self._votes = votes
        self._preferences = preferences

    def seed_demo_tickets(self) -> list[Ticket]:
        tickets = self._tickets.seed_demo_tickets()
        self._record(SEED_DEMO_TICKETS)
        return tickets

    def reset_tickets(self) -> None:
        self._tickets.reset_tickets()
        self._record(RESET_TICKETS)

    def reset_analytics(self) -> None:
        """Clear the event log; the reset itself is the first new event."""

        self._recorder.reset()
        self._record(RESET_ANALYTICS)

    def reset_kb_votes(self) -> None:
        self._votes.reset()
        self._record(RESET_KB_HELPFUL_VOTES)

    def enable_admin_mode(self) -> None:
        self._preferences.set_admin_enabled(True)
        self._record(ENABLE_ADMIN_MODE)

    def _record(self, action: str) -> None:
        logger.info("Admin action: %s", action)
        self._recorder.track_admin_action(action)
