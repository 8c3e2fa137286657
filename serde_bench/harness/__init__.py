"""
Benchmark harness for serialization experiments.

Provides the timing harness, orchestration and reporting.
"""

from .runner import (
    BenchmarkConfig,
    BenchmarkResult,
    BenchmarkRunner,
    FormatMeasurement,
    noop,
    run,
)

from .reporter import (
    ConsoleReporter,
    ChartReporter,
    JSONReporter,
)

__all__ = [
    # Runner
    "BenchmarkConfig",
    "BenchmarkResult",
    "BenchmarkRunner",
    "FormatMeasurement",
    "noop",
    "run",
    # Reporter
    "ConsoleReporter",
    "ChartReporter",
    "JSONReporter",
]
