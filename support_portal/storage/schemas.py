"""Serialized envelopes for the four persisted slices.

Records use camelCase aliases so the stored JSON keeps the flat shape the
portal has always written.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from support_portal.analytics.events import (
    AnalyticsArea,
    AnalyticsEvent,
    AnalyticsEventType,
    FlatValue,
    parse_payload,
)
from support_portal.preferences.models import HelpfulVote, PortalState
from support_portal.tickets.models import (
    ActivityActor,
    ActivityKind,
    ContactMethod,
    Impact,
    Priority,
    Ticket,
    TicketActivityEntry,
    TicketType,
    Urgency,
)
from support_portal.tickets.priority import priority_policy
from support_portal.tickets.state import TicketStatus

SCHEMA_VERSION = 1


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TicketActivityRecord(_Record):
    id: str
    created_at: datetime
    actor: ActivityActor
    kind: ActivityKind = Field(alias="type")
    message: str

    @classmethod
    def from_entity(cls, entity: TicketActivityEntry) -> "TicketActivityRecord":
        return cls(
            id=entity.id,
            created_at=entity.created_at,
            actor=entity.actor,
            kind=entity.kind,
            message=entity.message,
        )

    def to_entity(self) -> TicketActivityEntry:
        return TicketActivityEntry(
            id=self.id,
            created_at=self.created_at,
            actor=self.actor,
            kind=self.kind,
            message=self.message,
        )


class TicketRecord(_Record):
    id: str
    created_at: datetime
    updated_at: datetime
    type: TicketType
    status: TicketStatus
    priority: Priority
    impact: Impact
    urgency: Urgency
    category: str
    subcategory: str | None = None
    product: str
    summary: str
    description: str
    preferred_contact_method: ContactMethod
    attachments: list[str] = Field(default_factory=list)
    catalog_item_slug: str | None = None
    requested_fields: dict[str, Union[bool, str, list[str]]] | None = None
    activity_log: list[TicketActivityRecord] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_priority(self) -> "TicketRecord":
        expected = priority_policy(self.impact, self.urgency)
        if self.priority != expected:
            raise ValueError(
                f"Ticket {self.id} stores priority {self.priority} but "
                f"{self.impact}/{self.urgency} maps to {expected}"
            )
        return self

    @classmethod
    def from_entity(cls, entity: Ticket) -> "TicketRecord":
        return cls(
            id=entity.id,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            type=entity.type,
            status=entity.status,
            priority=entity.priority,
            impact=entity.impact,
            urgency=entity.urgency,
            category=entity.category,
            subcategory=entity.subcategory,
            product=entity.product,
            summary=entity.summary,
            description=entity.description,
            preferred_contact_method=entity.preferred_contact_method,
            attachments=list(entity.attachments),
            catalog_item_slug=entity.catalog_item_slug,
            requested_fields=_copy_fields(entity.requested_fields),
            activity_log=[TicketActivityRecord.from_entity(item) for item in entity.activity_log],
        )

    def to_entity(self) -> Ticket:
        return Ticket(
            id=self.id,
            created_at=self.created_at,
            updated_at=self.updated_at,
            type=self.type,
            status=self.status,
            priority=self.priority,
            impact=self.impact,
            urgency=self.urgency,
            category=self.category,
            subcategory=self.subcategory,
            product=self.product,
            summary=self.summary,
            description=self.description,
            preferred_contact_method=self.preferred_contact_method,
            attachments=list(self.attachments),
            catalog_item_slug=self.catalog_item_slug,
            requested_fields=_copy_fields(self.requested_fields),
            activity_log=[item.to_entity() for item in self.activity_log],
        )


class AnalyticsEventRecord(_Record):
    id: str
    type: AnalyticsEventType
    created_at: datetime
    area: AnalyticsArea
    payload: dict[str, FlatValue] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_payload(self) -> "AnalyticsEventRecord":
        parse_payload(self.type, self.payload)
        return self

    @classmethod
    def from_entity(cls, entity: AnalyticsEvent) -> "AnalyticsEventRecord":
        return cls(
            id=entity.id,
            type=entity.type,
            created_at=entity.created_at,
            area=entity.area,
            payload=entity.payload.to_flat(),
        )

    def to_entity(self) -> AnalyticsEvent:
        return AnalyticsEvent(
            id=self.id,
            created_at=self.created_at,
            area=self.area,
            payload=parse_payload(self.type, self.payload),
        )


class TicketsEnvelope(_Record):
    version: Literal[1] = SCHEMA_VERSION
    tickets: list[TicketRecord] = Field(default_factory=list)


class AnalyticsEnvelope(_Record):
    version: Literal[1] = SCHEMA_VERSION
    events: list[AnalyticsEventRecord] = Field(default_factory=list)


class PortalStateEnvelope(_Record):
    version: Literal[1] = SCHEMA_VERSION
    admin_enabled: bool = False
    sidebar_collapsed: bool = False

    @classmethod
    def from_entity(cls, entity: PortalState) -> "PortalStateEnvelope":
        return cls(admin_enabled=entity.admin_enabled, sidebar_collapsed=entity.sidebar_collapsed)

    def to_entity(self) -> PortalState:
        return PortalState(admin_enabled=self.admin_enabled, sidebar_collapsed=self.sidebar_collapsed)


class KBHelpfulVotesEnvelope(_Record):
    version: Literal[1] = SCHEMA_VERSION
    votes: dict[str, HelpfulVote] = Field(default_factory=dict)


def _copy_fields(fields):
    if fields is None:
        return None
    return {key: list(value) if isinstance(value, list) else value for key, value in fields.items()}
