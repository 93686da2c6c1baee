from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timedelta
from enum import Enum
from typing import TYPE_CHECKING, Callable, Collection, Iterable, Mapping, TypeVar

from opentelemetry import trace

from support_portal.core.utils import Clock, IdFactory, new_local_id, utcnow
from support_portal.metrics import MetricsRegistry, metrics_registry
from support_portal.metrics.definitions import (
    TICKET_ACTIVITY_ENTRIES,
    TICKET_STATUS_CHANGES,
    TICKETS_CREATED,
)
from support_portal.reference.catalog import CatalogItem, FieldValue, get_catalog_item_by_slug

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
from .priority import priority_policy
from .repository import TicketRepository
from .seed import INCIDENT_CREATED_MESSAGE, REQUEST_CREATED_MESSAGE, build_demo_tickets
from .state import TicketStateMachine, TicketStatus

if TYPE_CHECKING:
    from support_portal.analytics.recorder import AnalyticsRecorder

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

E = TypeVar("E", bound=Enum)


class TicketServiceError(RuntimeError):
    """Base error for ticket service issues."""


class TicketValidationError(TicketServiceError):
    """Raised when ticket input is missing or invalid.

    ``errors`` maps the offending field to a message for inline form feedback.
    """

    def __init__(self, message: str, errors: Mapping[str, str] | None = None) -> None:
        super().__init__(message)
        self.errors: dict[str, str] = dict(errors or {})


class InvalidTicketTransitionError(TicketValidationError):
    """Raised when attempting to transition to a disallowed status."""


class TicketNotFoundError(TicketServiceError):
    """Raised when a ticket could not be located."""


class CatalogItemNotFoundError(TicketServiceError):
    """Raised when a catalog request references an unknown catalog item."""


def _enum_error(enum_type: type[Enum], value: object, field: str) -> str | None:
    label = field.replace("_", " ")
    if value is None or value == "":
        return f"{label.capitalize()} is required."
    try:
        enum_type(value)
    except ValueError:
        return f"Unsupported {label}: {value}"
    return None


def _draft_errors(draft: TicketDraft) -> dict[str, str]:
    """Return a field to message map for everything wrong with ``draft``."""

    errors: dict[str, str] = {}
    if not (draft.summary or "").strip():
        errors["summary"] = "Summary is required."
    if not (draft.category or "").strip():
        errors["category"] = "Category is required."
    enum_fields = (
        ("type", TicketType, draft.type),
        ("impact", Impact, draft.impact),
        ("urgency", Urgency, draft.urgency),
        ("preferred_contact_method", ContactMethod, draft.preferred_contact_method),
    )
    for field, enum_type, value in enum_fields:
        message = _enum_error(enum_type, value, field)
        if message is not None:
            errors[field] = message
    return errors


def _as_filter(values: E | str | Iterable[E | str] | None, enum_type: Callable[[str], E] | None = None) -> Collection | None:
    if values is None:
        return None
    if isinstance(values, str):
        values = [values]
    if enum_type is None:
        return frozenset(values)
    return frozenset(enum_type(value) for value in values)


class TicketService:
    """High level orchestration for ticket intake, status and activity updates."""

    def __init__(
        self,
        repository: TicketRepository,
        *,
        recorder: "AnalyticsRecorder | None" = None,
        state_machine: type[TicketStateMachine] = TicketStateMachine,
        catalog_lookup: Callable[[str], CatalogItem | None] = get_catalog_item_by_slug,
        clock: Clock = utcnow,
        id_factory: IdFactory = new_local_id,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        self._repository = repository
        self._recorder = recorder
        self._state_machine = state_machine
        self._catalog_lookup = catalog_lookup
        self._clock = clock
        self._id_factory = id_factory
        self._metrics = metrics or metrics_registry

    # Intake

    def create_ticket(self, draft: TicketDraft) -> Ticket:
        ticket = self._build_ticket(draft)
        with tracer.start_as_current_span("tickets.create") as span:
            span.set_attribute("ticket.type", ticket.type.value)
            span.set_attribute("ticket.priority", ticket.priority.value)
            if not self._repository.create_ticket(ticket):
                logger.warning("Ticket %s was created but not persisted", ticket.id)

        self._metrics.counter(TICKETS_CREATED).inc(labels={"type": ticket.type.value})
        logger.info("Created %s %s with priority %s", ticket.type, ticket.id, ticket.priority)
        if ticket.type is TicketType.INCIDENT and self._recorder is not None:
            self._recorder.track_incident_submit(ticket)
        return ticket

    def create_catalog_request(
        self,
        item_slug: str,
        values: Mapping[str, FieldValue],
        *,
        preferred_contact_method: ContactMethod | str = ContactMethod.EMAIL,
        attachments: Iterable[str] = (),
    ) -> Ticket:
        item = self._catalog_lookup(item_slug)
        if item is None:
            raise CatalogItemNotFoundError(f"Catalog item {item_slug} not found")

        errors = item.validate(values)
        if errors:
            raise TicketValidationError(f"Catalog request for {item.slug} is incomplete", errors)

        submitted = {
            catalog_field.id: values.get(catalog_field.id, catalog_field.empty_value())
            for catalog_field in item.required_fields
        }
        first_value = next(iter(submitted.values()), "")
        suffix = f" - {first_value.strip()}" if isinstance(first_value, str) and first_value.strip() else ""
        description = "\n".join(
            [
                item.description,
                "",
                "Submitted Catalog Fields:",
                *(
                    f"{catalog_field.label}: {_stringify(submitted[catalog_field.id])}"
                    for catalog_field in item.required_fields
                ),
            ]
        )

        ticket = self.create_ticket(
            TicketDraft(
                type=TicketType.REQUEST,
                impact=Impact.MEDIUM,
                urgency=Urgency.MEDIUM,
                category=item.category,
                subcategory=item.title,
                product=item.product,
                summary=f"{item.title}{suffix}",
                description=description,
                preferred_contact_method=preferred_contact_method,
                attachments=list(attachments),
                catalog_item_slug=item.slug,
                requested_fields={
                    key: list(value) if isinstance(value, list) else value
                    for key, value in values.items()
                },
            )
        )
        if self._recorder is not None:
            self._recorder.track_catalog_submit(
                slug=item.slug,
                title=item.title,
                category=item.category,
                product=item.product,
                ticket_id=ticket.id,
            )
        return ticket

    # Reads

    def get_ticket(self, ticket_id: str) -> Ticket:
        ticket = self._repository.get_ticket(ticket_id)
        if ticket is None:
            raise TicketNotFoundError(f"Ticket {ticket_id} not found")
        return ticket

    def list_tickets(
        self,
        *,
        status: TicketStatus | str | Iterable[TicketStatus | str] | None = None,
        ticket_type: TicketType | str | Iterable[TicketType | str] | None = None,
        priority: Priority | str | Iterable[Priority | str] | None = None,
        category: str | Iterable[str] | None = None,
    ) -> list[Ticket]:
        """Return tickets, newest update first, optionally filtered."""

        statuses = _as_filter(status, TicketStatus)
        types = _as_filter(ticket_type, TicketType)
        priorities = _as_filter(priority, Priority)
        categories = _as_filter(category)

        return [
            ticket
            for ticket in self._repository.list_tickets()
            if (statuses is None or ticket.status in statuses)
            and (types is None or ticket.type in types)
            and (priorities is None or ticket.priority in priorities)
            and (categories is None or ticket.category in categories)
        ]

    # Mutations

    def change_status(
        self,
        ticket_id: str,
        new_status: TicketStatus | str,
        *,
        actor: ActivityActor | str = ActivityActor.ANALYST,
        note: str = "",
    ) -> Ticket:
        try:
            target = TicketStatus(new_status)
        except ValueError as exc:
            raise TicketValidationError(
                f"Unsupported status: {new_status}", {"status": f"Unsupported status: {new_status}"}
            ) from exc

        ticket = self.get_ticket(ticket_id)
        current = ticket.status
        if not self._state_machine.can_transition(current, target):
            raise InvalidTicketTransitionError(
                f"Cannot transition {current} -> {target}",
                {"status": f"{current} tickets cannot move to {target}."},
            )

        if current == target:
            message = f"Status reconfirmed as {target}."
        else:
            message = f"Status updated from {current} to {target}."
        if note.strip():
            message = f"{message} {note.strip()}"

        with tracer.start_as_current_span("tickets.change_status") as span:
            span.set_attribute("ticket.id", ticket_id)
            span.set_attribute("ticket.to_status", target.value)
            updated = self._append_activity(
                ticket,
                actor=ActivityActor(actor),
                kind=ActivityKind.STATUS,
                message=message,
                status=target,
            )

        self._metrics.counter(TICKET_STATUS_CHANGES).inc(labels={"to_status": target.value})
        logger.info("Ticket %s status %s -> %s", ticket_id, current, target)
        return updated

    def add_note(
        self,
        ticket_id: str,
        message: str,
        *,
        actor: ActivityActor | str = ActivityActor.ANALYST,
    ) -> Ticket:
        return self._add_message(ticket_id, message, actor=ActivityActor(actor), kind=ActivityKind.NOTE)

    def add_comment(
        self,
        ticket_id: str,
        message: str,
        *,
        actor: ActivityActor | str = ActivityActor.USER,
    ) -> Ticket:
        return self._add_message(ticket_id, message, actor=ActivityActor(actor), kind=ActivityKind.COMMENT)

    # Administrative

    def reset_tickets(self) -> None:
        self._repository.clear()
        logger.info("Cleared all tickets")

    def seed_demo_tickets(self) -> list[Ticket]:
        """Replace the stored tickets with the fixed demo set."""

        tickets = build_demo_tickets(self._clock())
        if not self._repository.replace_all(tickets):
            logger.warning("Demo tickets were built but not persisted")
            return sorted(tickets, key=lambda ticket: ticket.updated_at, reverse=True)
        logger.info("Seeded %d demo tickets", len(tickets))
        return self._repository.list_tickets()

    # Internals

    def _build_ticket(self, draft: TicketDraft) -> Ticket:
        errors = _draft_errors(draft)
        if errors:
            raise TicketValidationError("Ticket is missing required fields", errors)

        ticket_type = TicketType(draft.type)
        impact = Impact(draft.impact)
        urgency = Urgency(draft.urgency)
        contact = ContactMethod(draft.preferred_contact_method)
        summary = draft.summary.strip()
        category = draft.category.strip()

        now = self._clock()
        is_incident = ticket_type is TicketType.INCIDENT
        return Ticket(
            id=self._id_factory("INC" if is_incident else "REQ"),
            created_at=now,
            updated_at=now,
            type=ticket_type,
            status=self._state_machine.initial_state(),
            priority=priority_policy(impact, urgency),
            impact=impact,
            urgency=urgency,
            category=category,
            subcategory=draft.subcategory,
            product=draft.product,
            summary=summary,
            description=(draft.description or "").strip(),
            preferred_contact_method=contact,
            attachments=list(draft.attachments),
            catalog_item_slug=draft.catalog_item_slug,
            requested_fields=dict(draft.requested_fields) if draft.requested_fields is not None else None,
            activity_log=[
                TicketActivityEntry(
                    id=self._id_factory("ACT"),
                    created_at=now,
                    actor=ActivityActor.SYSTEM,
                    kind=ActivityKind.CREATED,
                    message=INCIDENT_CREATED_MESSAGE if is_incident else REQUEST_CREATED_MESSAGE,
                )
            ],
        )

    def _add_message(
        self,
        ticket_id: str,
        message: str,
        *,
        actor: ActivityActor,
        kind: ActivityKind,
    ) -> Ticket:
        text = (message or "").strip()
        if not text:
            raise TicketValidationError(f"{kind.value.capitalize()} text is required", {"message": "Message is required."})

        ticket = self.get_ticket(ticket_id)
        updated = self._append_activity(ticket, actor=actor, kind=kind, message=text)
        self._metrics.counter(TICKET_ACTIVITY_ENTRIES).inc(labels={"kind": kind.value})
        if self._recorder is not None:
            self._recorder.track_ticket_activity(ticket_id, kind.value)
        return updated

    def _append_activity(
        self,
        ticket: Ticket,
        *,
        actor: ActivityActor,
        kind: ActivityKind,
        message: str,
        status: TicketStatus | None = None,
    ) -> Ticket:
        now = self._next_timestamp(ticket.updated_at)
        entry = TicketActivityEntry(
            id=self._id_factory("ACT"),
            created_at=now,
            actor=actor,
            kind=kind,
            message=message,
        )
        updated = replace(
            ticket,
            status=status if status is not None else ticket.status,
            updated_at=now,
            activity_log=[*ticket.activity_log, entry],
        )
        persisted = self._repository.update_ticket(updated)
        if persisted is None:
            raise TicketNotFoundError(f"Ticket {ticket.id} not found")
        if not persisted:
            logger.warning("Update to ticket %s was not persisted", ticket.id)
        return updated

    def _next_timestamp(self, previous: datetime) -> datetime:
        now = self._clock()
        if now <= previous:
            return previous + timedelta(microseconds=1)
        return now


def _stringify(value: FieldValue) -> str:
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, list):
        return ", ".join(value) if value else "-"
    return value.strip() or "-"
