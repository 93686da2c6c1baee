from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from support_portal.reference.kb import KBArticle
from support_portal.storage import KB_HELPFUL_VOTES, PORTAL_STATE, PersistentStore

from .models import HelpfulVote, PortalState

if TYPE_CHECKING:
    from support_portal.analytics.recorder import AnalyticsRecorder

logger = logging.getLogger(__name__)


class PortalPreferences:
    """Admin mode and layout toggles kept in the portal state slice."""

    def __init__(self, store: PersistentStore) -> None:
        self._store = store

    def get_state(self) -> PortalState:
        return self._store.read(PORTAL_STATE)

    def is_admin_enabled(self) -> bool:
        return self.get_state().admin_enabled

    def set_admin_enabled(self, enabled: bool) -> PortalState:
        return self._update(admin_enabled=bool(enabled))

    def set_sidebar_collapsed(self, collapsed: bool) -> PortalState:
        return self._update(sidebar_collapsed=bool(collapsed))

    def _update(self, **changes: bool) -> PortalState:
        state = replace(self.get_state(), **changes)
        if not self._store.write(PORTAL_STATE, state):
            logger.warning("Portal state change %s was not persisted", changes)
        return state


class KBHelpfulVotes:
    """Per-article "was this helpful?" votes, at most one per article."""

    def __init__(self, store: PersistentStore, *, recorder: "AnalyticsRecorder | None" = None) -> None:
        self._store = store
        self._recorder = recorder

    def get_votes(self) -> dict[str, HelpfulVote]:
        return self._store.read(KB_HELPFUL_VOTES)

    def get_vote(self, slug: str) -> HelpfulVote | None:
        return self.get_votes().get(slug)

    def set_vote(self, article: KBArticle, vote: HelpfulVote | str) -> HelpfulVote:
        """Store ``vote`` for ``article``, replacing any earlier vote."""

        value = HelpfulVote(vote)
        votes = self.get_votes()
        votes[article.slug] = value
        if not self._store.write(KB_HELPFUL_VOTES, votes):
            logger.warning("Vote on %s was not persisted", article.slug)
        if self._recorder is not None:
            self._recorder.track_kb_helpful_vote(article, value)
        return value

    def reset(self) -> None:
        self._store.reset(KB_HELPFUL_VOTES)
