"""
Logging and tracing configuration for the signup form engine.

Remote checks and submissions are wrapped in ``traced_operation`` so that
each one becomes an OpenTelemetry span carrying the field or attempt as
attributes. Spans can be exported to the console, to a JSON Lines file,
to any extra span exporter, or any combination of these. Tracing stays
off until ``setup_tracing`` is called.
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import IO, AsyncGenerator

from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import ReadableSpan, Span, TracerProvider
from opentelemetry.sdk.trace.export import (
    ConsoleSpanExporter,
    SimpleSpanProcessor,
    SpanExporter,
)
from opentelemetry.trace import Tracer

from signup_form.config import get_config

logger = logging.getLogger("signup-form")

_provider: TracerProvider | None = None
_tracer: Tracer | None = None
_enabled = False
_trace_file: IO[str] | None = None


def _summary_line(span: ReadableSpan) -> str:
    duration_ms = (span.end_time - span.start_time) / 1_000_000
    return f"[TRACE] {span.name} ({duration_ms:.1f} ms, {span.status.status_code.name}){os.linesep}"


def _json_line(span: ReadableSpan) -> str:
    return span.to_json(indent=None) + "\n"


def setup_logging(level: str | None = None) -> None:
    """Configure the root logging level and format for the package loggers."""
    level = level or get_config().log_level
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def setup_tracing(
    enabled: bool | None = None,
    console: bool = True,
    verbose: bool = False,
    file_path: str | None = None,
    exporter: SpanExporter | None = None,
) -> None:
    """
    Configure tracing for the signup form engine.

    Replaces any previous tracing setup.

    Args:
        enabled: Whether tracing is enabled. If None, uses config.enable_tracing.
        console: Whether to print spans to the console.
        verbose: Whether to print full span JSON instead of a summary line.
        file_path: Optional file path to append spans to (JSON Lines).
        exporter: Optional extra span exporter, e.g. an in-memory one.

    Example:
        >>> from signup_form.tracing import setup_tracing
        >>> setup_tracing(console=True, verbose=True)
    """
    global _provider, _tracer, _enabled, _trace_file

    shutdown_tracing()

    _enabled = get_config().enable_tracing if enabled is None else enabled
    if not _enabled:
        return

    provider = TracerProvider(resource=Resource.create({"service.name": "signup-form"}))

    if console:
        formatter = (lambda span: span.to_json() + os.linesep) if verbose else _summary_line
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter(formatter=formatter)))

    if file_path:
        _trace_file = open(file_path, "a", encoding="utf-8")
        provider.add_span_processor(
            SimpleSpanProcessor(ConsoleSpanExporter(out=_trace_file, formatter=_json_line))
        )

    if exporter is not None:
        provider.add_span_processor(SimpleSpanProcessor(exporter))

    _provider = provider
    _tracer = provider.get_tracer("signup-form")
    logger.debug(f"Tracing enabled (console={console}, file={file_path})")


def shutdown_tracing() -> None:
    """Flush and drop the current tracing setup."""
    global _provider, _tracer, _enabled, _trace_file

    if _provider is not None:
        _provider.shutdown()
    if _trace_file is not None:
        _trace_file.close()
    _provider = None
    _tracer = None
    _enabled = False
    _trace_file = None


def is_tracing_enabled() -> bool:
    return _enabled and _tracer is not None


def disable_tracing() -> None:
    """Disable all tracing. Exporters stay configured."""
    global _enabled
    _enabled = False


def enable_tracing() -> None:
    """Enable tracing again after ``disable_tracing``."""
    global _enabled
    _enabled = True


@asynccontextmanager
async def traced_operation(
    name: str,
    **attributes,
) -> AsyncGenerator[Span | None, None]:
    """
    Context manager for tracing a specific operation.

    Yields the span, or None while tracing is off. An exception leaving
    the block is recorded on the span and sets its status to error.

    Args:
        name: Name of the operation to trace.
        attributes: Span attributes (str, bool, int or float values).

    Example:
        >>> async with traced_operation("username_check", field="username"):
        ...     taken = await client.is_username_taken(username)
    """
    if not is_tracing_enabled():
        yield None
        return

    with _tracer.start_as_current_span(name, attributes=attributes) as span:
        yield span
