"""Logging and tracing bootstrap for the support portal."""

from __future__ import annotations

import logging
from logging.config import dictConfig
from typing import Any

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from support_portal.core.config import Settings

ROOT_LOGGER = "support_portal"

_active_provider: TracerProvider | None = None


def _parse_headers(raw: str | None) -> dict[str, str]:
    """Parse ``key=value,key2=value2`` OTLP headers, skipping malformed pairs."""

    pairs = (item.split("=", 1) for item in (raw or "").split(",") if "=" in item)
    return {key.strip(): value.strip() for key, value in pairs}


def _logging_config(level: int, fmt: str) -> dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"portal": {"format": fmt}},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "portal",
                "level": level,
            }
        },
        "loggers": {
            ROOT_LOGGER: {"handlers": ["console"], "level": level, "propagate": True},
        },
    }


def configure_logging(settings: Settings) -> logging.Logger:
    """Install the console handler for the ``support_portal`` logger tree."""

    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    dictConfig(_logging_config(level, settings.log_format))
    return logging.getLogger(ROOT_LOGGER)


def _span_exporter(settings: Settings) -> OTLPSpanExporter:
    options: dict[str, Any] = {}
    if settings.otel_exporter_otlp_endpoint:
        options["endpoint"] = settings.otel_exporter_otlp_endpoint
    headers = _parse_headers(settings.otel_exporter_otlp_headers)
    if headers:
        options["headers"] = headers
    return OTLPSpanExporter(**options)


def init_tracer(settings: Settings) -> TracerProvider | None:
    """Install an OTLP tracer provider when tracing is enabled.

    Returns ``None`` when tracing is off or a provider from an earlier call is
    still active; spans then go to whatever provider is already global.
    """

    global _active_provider

    if not settings.otel_enabled or _active_provider is not None:
        return None

    provider = TracerProvider(resource=Resource.create({"service.name": settings.otel_service_name}))
    provider.add_span_processor(BatchSpanProcessor(_span_exporter(settings)))
    trace.set_tracer_provider(provider)
    _active_provider = provider
    logging.getLogger(ROOT_LOGGER).info("Tracing enabled for %s", settings.otel_service_name)
    return provider


def shutdown_tracer(provider: TracerProvider | None) -> None:
    """Flush and stop ``provider``; a ``None`` provider is ignored."""

    global _active_provider

    if provider is None:
        return
    provider.shutdown()
    if provider is _active_provider:
        _active_provider = None
