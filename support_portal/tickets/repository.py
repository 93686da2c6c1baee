from __future__ import annotations

from typing import Sequence

from support_portal.storage import TICKETS, PersistentStore

from .models import Ticket


class TicketRepository:
    """Data access layer for the tickets slice.

    Every call reads a fresh snapshot and writes the whole slice back. Write
    methods return ``False`` when the store could not persist the change.
    """

    def __init__(self, store: PersistentStore) -> None:
        self._store = store

    def list_tickets(self) -> list[Ticket]:
        tickets = self._store.read(TICKETS)
        return sorted(tickets, key=lambda ticket: ticket.updated_at, reverse=True)

    def get_ticket(self, ticket_id: str) -> Ticket | None:
        for ticket in self._store.read(TICKETS):
            if ticket.id == ticket_id:
                return ticket
        return None

    def create_ticket(self, ticket: Ticket) -> bool:
        current = self._store.read(TICKETS)
        return self._store.write(TICKETS, [ticket, *current])

    def update_ticket(self, ticket: Ticket) -> bool | None:
        """Replace the stored ticket with the same id; ``None`` if it is gone."""

        current = self._store.read(TICKETS)
        for index, existing in enumerate(current):
            if existing.id == ticket.id:
                current[index] = ticket
                return self._store.write(TICKETS, current)
        return None

    def replace_all(self, tickets: Sequence[Ticket]) -> bool:
        return self._store.write(TICKETS, list(tickets))

    def clear(self) -> None:
        self._store.reset(TICKETS)
