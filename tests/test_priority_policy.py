import pytest

from support_portal.tickets.models import Impact, Priority, Urgency
from support_portal.tickets.priority import priority_policy


@pytest.mark.parametrize(
    ("impact", "urgency", "expected"),
    [
        (Impact.HIGH, Urgency.HIGH, Priority.P1),
        (Impact.HIGH, Urgency.MEDIUM, Priority.P2),
        (Impact.HIGH, Urgency.LOW, Priority.P2),
        (Impact.MEDIUM, Urgency.HIGH, Priority.P2),
        (Impact.MEDIUM, Urgency.MEDIUM, Priority.P3),
        (Impact.MEDIUM, Urgency.LOW, Priority.P4),
        (Impact.LOW, Urgency.HIGH, Priority.P3),
        (Impact.LOW, Urgency.MEDIUM, Priority.P4),
        (Impact.LOW, Urgency.LOW, Priority.P4),
    ],
)
def test_priority_matrix(impact, urgency, expected):
    assert priority_policy(impact, urgency) is expected


def test_priority_policy_accepts_labels():
    assert priority_policy("High", "Medium") is Priority.P2


def test_priority_policy_rejects_unknown_levels():
    with pytest.raises(ValueError):
        priority_policy("Critical", "High")
