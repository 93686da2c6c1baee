"""Analytics event types.

Each event type has its own payload model. At the persistence boundary a
payload is flattened into camelCase keys holding scalar values only.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Literal, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from support_portal.preferences.models import HelpfulVote

FlatValue = Union[str, int, float, bool, None]


class AnalyticsEventType(str, Enum):
    KB_VIEW = "kb_view"
    SEARCH = "search"
    SEARCH_CLICK = "search_click"
    KB_HELPFUL_VOTE = "kb_helpful_vote"
    CATALOG_SUBMIT = "catalog_submit"
    INCIDENT_SUBMIT = "incident_submit"
    TICKET_NOTE_ADDED = "ticket_note_added"
    TICKET_COMMENT_ADDED = "ticket_comment_added"
    ADMIN_ACTION = "admin_action"

    def __str__(self) -> str:
        return self.value


class AnalyticsArea(str, Enum):
    KB = "kb"
    CATALOG = "catalog"
    PORTAL = "portal"
    TICKETS = "tickets"
    ANALYTICS = "analytics"
    ADMIN = "admin"

    def __str__(self) -> str:
        return self.value


class EventPayload(BaseModel):
    """Base class for typed payloads; subclasses pin ``event_type``."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    event_type: ClassVar[AnalyticsEventType]

    def to_flat(self) -> dict[str, FlatValue]:
        return self.model_dump(by_alias=True, mode="json")


class KBViewPayload(EventPayload):
    event_type: ClassVar[AnalyticsEventType] = AnalyticsEventType.KB_VIEW

    slug: str
    title: str
    category: str
    product: str
    product_family: str


class SearchPayload(EventPayload):
    event_type: ClassVar[AnalyticsEventType] = AnalyticsEventType.SEARCH

    query: str
    result_count: int = Field(ge=0)
    context: str | None = None


class SearchClickPayload(EventPayload):
    event_type: ClassVar[AnalyticsEventType] = AnalyticsEventType.SEARCH_CLICK

    query: str | None
    clicked_slug: str
    clicked_title: str
    rank: int = Field(ge=1)


class KBHelpfulVotePayload(EventPayload):
    event_type: ClassVar[AnalyticsEventType] = AnalyticsEventType.KB_HELPFUL_VOTE

    slug: str
    title: str
    vote: HelpfulVote


class CatalogSubmitPayload(EventPayload):
    event_type: ClassVar[AnalyticsEventType] = AnalyticsEventType.CATALOG_SUBMIT

    slug: str
    title: str
    category: str
    product: str
    ticket_id: str | None = None


class IncidentSubmitPayload(EventPayload):
    event_type: ClassVar[AnalyticsEventType] = AnalyticsEventType.INCIDENT_SUBMIT

    ticket_id: str | None = None
    category: str
    subcategory: str | None = None
    product: str
    priority: str


class TicketNoteAddedPayload(EventPayload):
    event_type: ClassVar[AnalyticsEventType] = AnalyticsEventType.TICKET_NOTE_ADDED

    ticket_id: str
    mode: Literal["note"] = "note"


class TicketCommentAddedPayload(EventPayload):
    event_type: ClassVar[AnalyticsEventType] = AnalyticsEventType.TICKET_COMMENT_ADDED

    ticket_id: str
    mode: Literal["comment"] = "comment"


class AdminActionPayload(EventPayload):
    event_type: ClassVar[AnalyticsEventType] = AnalyticsEventType.ADMIN_ACTION

    action: str


PAYLOAD_TYPES: Mapping[AnalyticsEventType, type[EventPayload]] = {
    payload_type.event_type: payload_type
    for payload_type in (
        KBViewPayload,
        SearchPayload,
        SearchClickPayload,
        KBHelpfulVotePayload,
        CatalogSubmitPayload,
        IncidentSubmitPayload,
        TicketNoteAddedPayload,
        TicketCommentAddedPayload,
        AdminActionPayload,
    )
}


def parse_payload(event_type: AnalyticsEventType | str, flat: Mapping[str, Any]) -> EventPayload:
    """Rebuild the typed payload for ``event_type`` from its flat form."""

    return PAYLOAD_TYPES[AnalyticsEventType(event_type)].model_validate(dict(flat))


@dataclass(slots=True, frozen=True)
class AnalyticsEvent:
    """Immutable usage observation."""

    id: str
    created_at: datetime
    area: AnalyticsArea
    payload: EventPayload

    @property
    def type(self) -> AnalyticsEventType:
        return self.payload.event_type
