"""Versioned client-local persistence for portal state."""

from __future__ import annotations

import json
import logging
import warnings
from typing import TypeVar

from pydantic import ValidationError

from support_portal.metrics import MetricsRegistry, metrics_registry
from support_portal.metrics.definitions import STORE_CORRUPT_RECOVERIES, STORE_WRITE_FAILURES

from .backends import StorageBackend
from .schemas import SCHEMA_VERSION
from .slices import ALL_SLICES, Slice

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_NAMESPACE = "supportPortal"


class PersistenceWarning(UserWarning):
    """Issued when a slice write could not be persisted."""


class PersistentStore:
    """Whole-value read/write access to the portal slices.

    Reads never raise: a missing, unparsable or foreign-version value yields
    the slice default. Writes replace the stored value; backend failures are
    reported through :class:`PersistenceWarning` and a ``False`` return.
    Concurrent writers sharing one backend get last-write-wins semantics.
    """

    def __init__(
        self,
        backend: StorageBackend,
        *,
        namespace: str = DEFAULT_NAMESPACE,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        self._backend = backend
        self._namespace = namespace
        self._metrics = metrics or metrics_registry

    @property
    def backend(self) -> StorageBackend:
        return self._backend

    def key_for(self, slice_: Slice[T]) -> str:
        return slice_.key(self._namespace)

    def read(self, slice_: Slice[T]) -> T:
        key = self.key_for(slice_)
        try:
            raw = self._backend.get_item(key)
        except (OSError, UnicodeDecodeError) as exc:
            return self._recover(slice_, f"backend read failed: {exc}")
        if raw is None:
            return slice_.default()

        try:
            data = json.loads(raw)
        except ValueError as exc:
            return self._recover(slice_, f"invalid JSON: {exc}")

        if not isinstance(data, dict):
            return self._recover(slice_, f"expected an object, found {type(data).__name__}")
        if data.get("version") != SCHEMA_VERSION:
            return self._recover(
                slice_, f"version mismatch: stored {data.get('version')!r}, expected {SCHEMA_VERSION}"
            )

        try:
            envelope = slice_.envelope.model_validate(data)
            return slice_.decode(envelope)
        except (ValidationError, ValueError, KeyError) as exc:
            return self._recover(slice_, f"schema validation failed: {exc}")

    def write(self, slice_: Slice[T], value: T) -> bool:
        key = self.key_for(slice_)
        try:
            payload = slice_.encode(value).model_dump_json(by_alias=True)
            self._backend.set_item(key, payload)
        except (OSError, ValueError, TypeError) as exc:
            message = f"Could not persist {slice_.name} slice ({key}): {exc}"
            logger.warning(message)
            self._metrics.counter(STORE_WRITE_FAILURES).inc(labels={"slice": slice_.name})
            warnings.warn(PersistenceWarning(message), stacklevel=2)
            return False
        return True

    def reset(self, slice_: Slice[T]) -> T:
        key = self.key_for(slice_)
        try:
            self._backend.remove_item(key)
        except OSError as exc:
            message = f"Could not clear {slice_.name} slice ({key}): {exc}"
            logger.warning(message)
            self._metrics.counter(STORE_WRITE_FAILURES).inc(labels={"slice": slice_.name})
            warnings.warn(PersistenceWarning(message), stacklevel=2)
        logger.info("Reset %s slice", slice_.name)
        return slice_.default()

    def reset_all(self) -> None:
        for slice_ in ALL_SLICES:
            self.reset(slice_)

    def _recover(self, slice_: Slice[T], reason: str) -> T:
        logger.warning(
            "Recovering %s slice (%s) with its default value: %s",
            slice_.name,
            self.key_for(slice_),
            reason,
        )
        self._metrics.counter(STORE_CORRUPT_RECOVERIES).inc(labels={"slice": slice_.name})
        return slice_.default()
