"""Metric definitions used across the portal."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

TICKETS_CREATED = "support_tickets_created_total"
TICKET_STATUS_CHANGES = "support_ticket_status_changes_total"
TICKET_ACTIVITY_ENTRIES = "support_ticket_activity_entries_total"
ANALYTICS_EVENTS_RECORDED = "support_analytics_events_recorded_total"
STORE_WRITE_FAILURES = "support_store_write_failures_total"
STORE_CORRUPT_RECOVERIES = "support_store_corrupt_recoveries_total"
ANALYTICS_SUMMARY_DURATION = "support_analytics_summary_duration_seconds"


@dataclass(frozen=True)
class MetricDefinition:
    """Describe a metric that should exist in the registry."""

    name: str
    metric_type: str
    description: str
    label_names: Tuple[str, ...] = ()


DEFAULT_METRIC_DEFINITIONS: Tuple[MetricDefinition, ...] = (
    MetricDefinition(
        name=TICKETS_CREATED,
        metric_type="counter",
        description="Tickets created through intake.",
        label_names=("type",),
    ),
    MetricDefinition(
        name=TICKET_STATUS_CHANGES,
        metric_type="counter",
        description="Accepted ticket status change requests.",
        label_names=("to_status",),
    ),
    MetricDefinition(
        name=TICKET_ACTIVITY_ENTRIES,
        metric_type="counter",
        description="Notes and comments appended to tickets.",
        label_names=("kind",),
    ),
    MetricDefinition(
        name=ANALYTICS_EVENTS_RECORDED,
        metric_type="counter",
        description="Analytics events appended to the event log.",
        label_names=("type",),
    ),
    MetricDefinition(
        name=STORE_WRITE_FAILURES,
        metric_type="counter",
        description="Slice writes that could not be persisted.",
        label_names=("slice",),
    ),
    MetricDefinition(
        name=STORE_CORRUPT_RECOVERIES,
        metric_type="counter",
        description="Slice reads that fell back to the default value.",
        label_names=("slice",),
    ),
    MetricDefinition(
        name=ANALYTICS_SUMMARY_DURATION,
        metric_type="distribution",
        description="Duration of analytics summary recomputes in seconds.",
    ),
)
