"""
Timing utilities for serialization benchmarking.

Provides a locally scoped timer, an async timing context manager and the
ResultSet container holding per-iteration samples and their statistics.
"""

import time
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Iterable


class Timer:
    """Simple timer for manual timing control."""

    def __init__(self, name: str = "timer"):
        self.name = name
        self.start_time: float = 0.0
        self.end_time: float = 0.0
        self._running = False

    def start(self) -> "Timer":
        """Start the timer."""
        self.start_time = time.perf_counter()
        self._running = True
        return self

    def stop(self) -> "Timer":
        """Stop the timer."""
        self.end_time = time.perf_counter()
        self._running = False
        return self

    @property
    def running(self) -> bool:
        return self._running

    @property
    def elapsed_ms(self) -> float:
        """Elapsed time in milliseconds."""
        end = self.end_time if not self._running else time.perf_counter()
        return (end - self.start_time) * 1000


@asynccontextmanager
async def async_timed(name: str = "operation") -> AsyncIterator[Timer]:
    """Async context manager for timing async operations.

    The timer is stopped when the block exits, including when it raises.

    Usage:
        async with async_timed("write") as timer:
            await do_write()
        print(f"Elapsed: {timer.elapsed_ms}ms")
    """
    timer = Timer(name).start()
    try:
        yield timer
    finally:
        timer.stop()


def median_index(n: int) -> int:
    """Index into an ascending-sorted sequence of length n used as its median.

    Selects floor((n + 1) / 2), which for n >= 2 is the upper-middle element
    or beyond. For n == 1 the formula points past the end, so it is clamped
    to the last element.
    """
    if n <= 0:
        raise ValueError("median of an empty sample set is undefined")
    return min((n + 1) // 2, n - 1)


@dataclass(frozen=True)
class ResultSet:
    """Samples from one harness run plus derived statistics.

    ``samples`` keeps execution order; sorting for the median is done on a
    copy.
    """

    samples: tuple[float, ...]
    mean: float
    median: float

    @classmethod
    def from_samples(cls, samples: Iterable[float]) -> "ResultSet":
        """Build a ResultSet, computing mean and median from raw samples."""
        values = tuple(float(s) for s in samples)
        if not values:
            raise ValueError("cannot summarize an empty sample set")

        ordered = sorted(values)
        return cls(
            samples=values,
            mean=sum(values) / len(values),
            median=ordered[median_index(len(ordered))],
        )

    @property
    def count(self) -> int:
        """Number of timed samples."""
        return len(self.samples)

    @property
    def min(self) -> float:
        return min(self.samples)

    @property
    def max(self) -> float:
        return max(self.samples)

    def percentile(self, p: float) -> float:
        """Calculate percentile of the samples by linear interpolation."""
        sorted_values = sorted(self.samples)
        k = (len(sorted_values) - 1) * (p / 100)
        f = int(k)
        c = f + 1 if f + 1 < len(sorted_values) else f
        return sorted_values[f] + (k - f) * (sorted_values[c] - sorted_values[f])

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "count": self.count,
            "samples_ms": list(self.samples),
            "mean_ms": self.mean,
            "median_ms": self.median,
            "min_ms": self.min,
            "max_ms": self.max,
            "p95_ms": self.percentile(95),
        }
