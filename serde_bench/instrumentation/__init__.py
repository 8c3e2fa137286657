"""
Instrumentation module for serialization benchmarking.

Provides timing utilities and tracing integration.
"""

from .timing import (
    ResultSet,
    Timer,
    async_timed,
    median_index,
)

from .traces import (
    Tracer,
    TracingConfig,
    get_tracer,
    init_tracing,
    shutdown_tracing,
)

__all__ = [
    # Timing
    "ResultSet",
    "Timer",
    "async_timed",
    "median_index",
    # Tracing
    "Tracer",
    "TracingConfig",
    "get_tracer",
    "init_tracing",
    "shutdown_tracing",
]
