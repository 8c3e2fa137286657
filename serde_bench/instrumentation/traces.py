"""
Tracing utilities for serialization benchmarking.

Wraps each measured benchmark step in an OpenTelemetry span so runs can be
inspected alongside other instrumented services.
"""

import os
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor
from opentelemetry.trace import Status, StatusCode


class TracingConfig:
    """Configuration for tracing setup."""

    def __init__(
        self,
        service_name: str = "serde-bench",
        enable_console_export: Optional[bool] = None,
    ):
        self.service_name = service_name
        if enable_console_export is None:
            enable_console_export = os.getenv("SERDE_BENCH_TRACE", "").lower() in ("1", "true", "yes")
        self.enable_console_export = enable_console_export


class Tracer:
    """OpenTelemetry tracer bound to a private provider."""

    def __init__(self, config: Optional[TracingConfig] = None):
        self.config = config or TracingConfig()
        self._provider: Optional[TracerProvider] = None
        self._otel_tracer = None
        self._initialized = False

    def initialize(self) -> "Tracer":
        """Initialize the tracer provider and exporters."""
        if self._initialized:
            return self

        resource = Resource.create({"service.name": self.config.service_name})
        self._provider = TracerProvider(resource=resource)

        if self.config.enable_console_export:
            self._provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))

        self._otel_tracer = trace.get_tracer(
            self.config.service_name,
            tracer_provider=self._provider,
        )
        self._initialized = True
        return self

    def shutdown(self) -> None:
        """Flush and shut down the provider."""
        if self._provider:
            self._provider.shutdown()
        self._provider = None
        self._otel_tracer = None
        self._initialized = False

    @contextmanager
    def span(
        self,
        name: str,
        attributes: Optional[dict] = None,
    ) -> Iterator[Any]:
        """Create a traced span.

        Usage:
            with tracer.span("json.write", {"bench.list_length": 10000}) as span:
                # do work
                span.set_attribute("bench.median_ms", 1.2)
        """
        if not self._initialized:
            self.initialize()

        span_obj = self._otel_tracer.start_span(name)
        if attributes:
            for key, value in attributes.items():
                span_obj.set_attribute(key, value)

        try:
            yield span_obj
        except Exception as e:
            span_obj.set_status(Status(StatusCode.ERROR, str(e)))
            span_obj.record_exception(e)
            raise
        finally:
            span_obj.end()


# Global tracer instance
_global_tracer: Optional[Tracer] = None


def get_tracer(config: Optional[TracingConfig] = None) -> Tracer:
    """Get or create the global tracer instance."""
    global _global_tracer
    if _global_tracer is None:
        _global_tracer = Tracer(config)
    return _global_tracer


def init_tracing(config: Optional[TracingConfig] = None) -> Tracer:
    """Initialize global tracing."""
    tracer = get_tracer(config)
    return tracer.initialize()


def shutdown_tracing() -> None:
    """Shutdown global tracing."""
    global _global_tracer
    if _global_tracer:
        _global_tracer.shutdown()
        _global_tracer = None
