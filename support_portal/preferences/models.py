from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class HelpfulVote(str, Enum):
    YES = "yes"
    NO = "no"

    def __str__(self) -> str:
        return self.value


@dataclass(slots=True, frozen=True)
class PortalState:
    """Local portal preferences, replaced wholesale on every toggle."""

    admin_enabled: bool = False
    sidebar_collapsed: bool = False
