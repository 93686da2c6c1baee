"""Support portal engine: tickets, analytics, recommendations and local persistence."""

__version__ = "0.1.0"
