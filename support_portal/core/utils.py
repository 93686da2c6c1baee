from __future__ import annotations

import re
import unicodedata
import uuid
from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]
IdFactory = Callable[[str], str]

_WHITESPACE_RE = re.compile(r"\s+")


def utcnow() -> datetime:
    """Return a timezone aware UTC timestamp."""

    return datetime.now(timezone.utc)


def new_local_id(prefix: str) -> str:
    """Generate a prefixed identifier such as ``INC-<uuid4>``."""

    return f"{prefix}-{uuid.uuid4()}"


def normalize_text(text: str | None) -> str:
    """Collapse whitespace, lowercase and unicode-normalize free text."""

    normalized = unicodedata.normalize("NFKC", text or "")
    normalized = normalized.lower().strip()
    return _WHITESPACE_RE.sub(" ", normalized)
