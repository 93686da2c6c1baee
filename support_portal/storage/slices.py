"""The four independently versioned slices of portal state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from pydantic import BaseModel

from support_portal.analytics.events import AnalyticsEvent
from support_portal.preferences.models import HelpfulVote, PortalState
from support_portal.tickets.models import Ticket

from .schemas import (
    AnalyticsEnvelope,
    AnalyticsEventRecord,
    KBHelpfulVotesEnvelope,
    PortalStateEnvelope,
    TicketRecord,
    TicketsEnvelope,
)

T = TypeVar("T")


@dataclass(frozen=True)
class Slice(Generic[T]):
    """Describe how one slice is keyed, defaulted and (de)serialized."""

    name: str
    key_suffix: str
    envelope: type[BaseModel]
    default: Callable[[], T]
    encode: Callable[[T], BaseModel]
    decode: Callable[[BaseModel], T]

    def key(self, namespace: str) -> str:
        return f"{namespace}:{self.key_suffix}"


TICKETS: Slice[list[Ticket]] = Slice(
    name="tickets",
    key_suffix="tickets:v1",
    envelope=TicketsEnvelope,
    default=list,
    encode=lambda tickets: TicketsEnvelope(
        tickets=[TicketRecord.from_entity(ticket) for ticket in tickets]
    ),
    decode=lambda envelope: [record.to_entity() for record in envelope.tickets],
)

ANALYTICS: Slice[list[AnalyticsEvent]] = Slice(
    name="analytics",
    key_suffix="analytics:v1",
    envelope=AnalyticsEnvelope,
    default=list,
    encode=lambda events: AnalyticsEnvelope(
        events=[AnalyticsEventRecord.from_entity(event) for event in events]
    ),
    decode=lambda envelope: [record.to_entity() for record in envelope.events],
)

PORTAL_STATE: Slice[PortalState] = Slice(
    name="portal_state",
    key_suffix="state:v1",
    envelope=PortalStateEnvelope,
    default=PortalState,
    encode=PortalStateEnvelope.from_entity,
    decode=lambda envelope: envelope.to_entity(),
)

KB_HELPFUL_VOTES: Slice[dict[str, HelpfulVote]] = Slice(
    name="kb_helpful_votes",
    key_suffix="kbHelpfulVotes:v1",
    envelope=KBHelpfulVotesEnvelope,
    default=dict,
    encode=lambda votes: KBHelpfulVotesEnvelope(votes=dict(votes)),
    decode=lambda envelope: dict(envelope.votes),
)

ALL_SLICES: tuple[Slice, ...] = (TICKETS, ANALYTICS, PORTAL_STATE, KB_HELPFUL_VOTES)
