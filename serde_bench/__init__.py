"""
serde-bench - JSON vs MessagePack round-trip benchmarks.

Times serializing a list of small objects to disk and reading it back,
for increasing list sizes.

Key modules:
- benchmarks: Per-format write/read measurements
- instrumentation: Timing utilities and tracing integration
- harness: The timing harness, orchestration and reporting
- scenarios: List size definitions and the test payload
"""

__version__ = "0.1.0"

from . import benchmarks
from . import instrumentation
from . import harness
from . import scenarios

__all__ = [
    "benchmarks",
    "instrumentation",
    "harness",
    "scenarios",
]
