"""Analytics event types and dashboard summaries.

The store-backed :class:`~support_portal.analytics.recorder.AnalyticsRecorder`
lives in ``support_portal.analytics.recorder``; the storage layer imports the
event types from this package.
"""

from .events import AnalyticsArea, AnalyticsEvent, AnalyticsEventType, EventPayload, parse_payload
from .summary import AnalyticsSummary, CountEntry, SummaryTotals, summarize, top_counts

__all__ = [
    "AnalyticsArea",
    "AnalyticsEvent",
    "AnalyticsEventType",
    "AnalyticsSummary",
    "CountEntry",
    "EventPayload",
    "SummaryTotals",
    "parse_payload",
    "summarize",
    "top_counts",
]
