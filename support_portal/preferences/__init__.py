"""Portal preference and KB vote types.

The store-backed services live in ``support_portal.preferences.service``.
"""

from .models import HelpfulVote, PortalState

__all__ = ["HelpfulVote", "PortalState"]
