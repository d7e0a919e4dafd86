"""Logging and tracing for bucket-tools.

Logs are JSON lines on stderr, leaving stdout to command output such as
``bucket-tools cat``. Tracing is off unless ``BUCKET_TOOLS_OTEL_ENABLED`` is
set; when on, finished spans for tree walks are printed to the console.
"""

import logging
import sys
from typing import Any, Optional

import structlog
from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)

from .config import settings


def build_tracer_provider(exporter: Optional[SpanExporter] = None) -> TracerProvider:
    """Create a tracer provider tagged with the configured service name."""
    resource = Resource.create({"service.name": settings.otel_service_name})
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(BatchSpanProcessor(exporter or ConsoleSpanExporter()))
    return provider


def setup_tracing() -> Optional[TracerProvider]:
    """Install the global tracer provider when tracing is enabled."""
    if not settings.otel_enabled:
        return None

    provider = build_tracer_provider()
    trace.set_tracer_provider(provider)
    return provider


def setup_logging(level: Optional[str] = None) -> None:
    """Set up structured logging with structlog.

    Args:
        level: Level name overriding ``BUCKET_TOOLS_LOG_LEVEL``
    """
    level_name = (level or settings.log_level).upper()
    logging.basicConfig(format="%(message)s", stream=sys.stderr)
    logging.getLogger().setLevel(getattr(logging, level_name))

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    return structlog.get_logger(name)


def get_tracer(name: str) -> trace.Tracer:
    """Get a tracer; spans are dropped unless tracing was set up."""
    return trace.get_tracer(name)


setup_logging()
setup_tracing()
