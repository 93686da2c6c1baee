"""Impact/urgency priority policy."""

from __future__ import annotations

from typing import Mapping

from .models import Impact, Priority, Urgency

# Fixed intake matrix. High impact stays at P2 for both medium and low
# urgency, so the table is intentionally not strictly monotonic.
PRIORITY_MATRIX: Mapping[Impact, Mapping[Urgency, Priority]] = {
    Impact.HIGH: {
        Urgency.HIGH: Priority.P1,
        Urgency.MEDIUM: Priority.P2,
        Urgency.LOW: Priority.P2,
    },
    Impact.MEDIUM: {
        Urgency.HIGH: Priority.P2,
        Urgency.MEDIUM: Priority.P3,
        Urgency.LOW: Priority.P4,
    },
    Impact.LOW: {
        Urgency.HIGH: Priority.P3,
        Urgency.MEDIUM: Priority.P4,
        Urgency.LOW: Priority.P4,
    },
}


def priority_policy(impact: Impact | str, urgency: Urgency | str) -> Priority:
    """Return the priority tier for an impact/urgency pair.

    Plain strings are coerced to their enum members; unknown values raise
    ``ValueError``.
    """

    return PRIORITY_MATRIX[Impact(impact)][Urgency(urgency)]
