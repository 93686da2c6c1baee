"""Client-local persistence for tickets, analytics, preferences and votes."""

from .backends import InMemoryBackend, JsonFileBackend, StorageBackend, StorageQuotaExceededError
from .slices import ALL_SLICES, ANALYTICS, KB_HELPFUL_VOTES, PORTAL_STATE, TICKETS, Slice
from .store import PersistenceWarning, PersistentStore

__all__ = [
    "ALL_SLICES",
    "ANALYTICS",
    "InMemoryBackend",
    "JsonFileBackend",
    "KB_HELPFUL_VOTES",
    "PORTAL_STATE",
    "PersistenceWarning",
    "PersistentStore",
    "Slice",
    "StorageBackend",
    "StorageQuotaExceededError",
    "TICKETS",
]
