"""
Benchmark orchestrator for serialization round-trip experiments.

Provides the timing harness that repeatedly awaits an operation and
summarizes its durations, plus a runner that sweeps formats and list sizes
and collects the results.
"""

import json
import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Awaitable, Callable, Mapping, Optional

from ..instrumentation.timing import ResultSet, async_timed
from ..scenarios.definitions import ListSizeScenario, get_default_scenarios, get_scenarios


# Zero-argument async callable timed by the harness
Operation = Callable[[], Awaitable[object]]


async def noop() -> None:
    """Default cleanup operation."""


def _check_count(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


async def run(
    test_operation: Operation,
    iterations: int = 10,
    warmup_iterations: int = 5,
    cleanup_operation: Operation = noop,
) -> ResultSet:
    """Time ``test_operation`` and return per-iteration samples with stats.

    Runs ``warmup_iterations`` untimed executions first, then
    ``iterations`` timed ones. Every execution is followed by
    ``cleanup_operation``, which is awaited only after the test operation
    has completed and is never included in the measured time.

    Any exception from either operation propagates immediately and no
    ResultSet is returned. If the test operation raises, the cleanup for
    that iteration is not run.

    Raises:
        ValueError: if ``iterations`` is zero or either count is negative.
        TypeError: if either count is not an int.
    """
    _check_count("iterations", iterations)
    _check_count("warmup_iterations", warmup_iterations)
    if iterations == 0:
        raise ValueError("iterations must be at least 1 to compute mean and median")

    for _ in range(warmup_iterations):
        await test_operation()
        await cleanup_operation()

    samples: list[float] = []
    for i in range(iterations):
        async with async_timed(f"iteration-{i}") as timer:
            await test_operation()
        await cleanup_operation()
        samples.append(timer.elapsed_ms)

    return ResultSet.from_samples(samples)


def _env_int(environ: Mapping[str, str], key: str) -> Optional[int]:
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None


@dataclass
class BenchmarkConfig:
    """Configuration for a benchmark run."""

    name: str = "serde_roundtrip"
    description: str = ""
    formats: list[str] = field(default_factory=lambda: ["json", "msgpack"])
    scenarios: list[ListSizeScenario] = field(default_factory=get_default_scenarios)
    iterations: int = 10
    warmup_iterations: int = 5
    work_dir: Path = field(default_factory=lambda: Path("."))
    metadata: dict = field(default_factory=dict)

    def __post_init__(self):
        _check_count("iterations", self.iterations)
        _check_count("warmup_iterations", self.warmup_iterations)
        self.work_dir = Path(self.work_dir)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        **overrides,
    ) -> "BenchmarkConfig":
        """Build a config from SERDE_BENCH_* environment variables.

        Keyword overrides whose value is not None take precedence over the
        environment.
        """
        environ = os.environ if environ is None else environ
        values: dict = {}

        iterations = _env_int(environ, "SERDE_BENCH_ITERATIONS")
        if iterations is not None:
            values["iterations"] = iterations

        warmup = _env_int(environ, "SERDE_BENCH_WARMUP")
        if warmup is not None:
            values["warmup_iterations"] = warmup

        sizes = environ.get("SERDE_BENCH_SIZES", "").strip()
        if sizes:
            values["scenarios"] = get_scenarios([s.strip() for s in sizes.split(",") if s.strip()])

        work_dir = environ.get("SERDE_BENCH_WORK_DIR", "").strip()
        if work_dir:
            values["work_dir"] = Path(work_dir)

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "name": self.name,
            "description": self.description,
            "formats": list(self.formats),
            "scenarios": [s.to_dict() for s in self.scenarios],
            "iterations": self.iterations,
            "warmup_iterations": self.warmup_iterations,
            "work_dir": str(self.work_dir),
            "metadata": self.metadata,
        }


@dataclass
class FormatMeasurement:
    """Write and read timings for one format at one list size."""

    format_name: str
    scenario: ListSizeScenario
    write: ResultSet
    read: ResultSet
    payload_bytes: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "format": self.format_name,
            "scenario": self.scenario.to_dict(),
            "payload_bytes": self.payload_bytes,
            "write": self.write.to_dict(),
            "read": self.read.to_dict(),
        }


@dataclass
class BenchmarkResult:
    """Results from a benchmark run."""

    config: BenchmarkConfig
    measurements: list[FormatMeasurement]
    start_time: datetime
    end_time: datetime
    metadata: dict = field(default_factory=dict)

    def get(self, format_name: str, label: str) -> Optional[FormatMeasurement]:
        """Look up the measurement for a format and scenario label."""
        for m in self.measurements:
            if m.format_name == format_name and m.scenario.label == label:
                return m
        return None

    def median_table(self) -> list[tuple[str, list[Optional[float]]]]:
        """Rows of (scenario label, medians) in config order.

        Columns follow ``config.formats``, read before write for each
        format. Missing measurements are None.
        """
        rows = []
        for scenario in self.config.scenarios:
            values: list[Optional[float]] = []
            for format_name in self.config.formats:
                m = self.get(format_name, scenario.label)
                values.append(m.read.median if m else None)
                values.append(m.write.median if m else None)
            rows.append((scenario.label, values))
        return rows

    def to_dict(self) -> dict:
        """Convert result to dictionary for serialization."""
        return {
            "config": self.config.to_dict(),
            "measurements": [m.to_dict() for m in self.measurements],
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "duration_seconds": (self.end_time - self.start_time).total_seconds(),
            "metadata": self.metadata,
        }

    def save(self, path: Path) -> None:
        """Save results to JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)


# Measures one format at one list size
MeasureFn = Callable[[str, ListSizeScenario, BenchmarkConfig], Awaitable[FormatMeasurement]]


class BenchmarkRunner:
    """Orchestrates benchmark execution across formats and list sizes."""

    def __init__(self, verbose: bool = True):
        self.verbose = verbose

    async def run_benchmark(
        self,
        fn: MeasureFn,
        config: BenchmarkConfig,
    ) -> BenchmarkResult:
        """Run ``fn`` for every format and scenario in ``config``.

        Formats are swept in the outer loop, matching the order in which
        results are reported. The first failure aborts the whole run.
        """
        measurements: list[FormatMeasurement] = []
        start_time = datetime.now()

        if self.verbose:
            print(f"\nRunning benchmark: {config.name}")
            print(f"  Formats: {config.formats}")
            print(f"  List sizes: {[s.label for s in config.scenarios]}")
            print(f"  Warmup iterations: {config.warmup_iterations}")
            print(f"  Timed iterations: {config.iterations}")

        for format_name in config.formats:
            for scenario in config.scenarios:
                if self.verbose:
                    print(f"currently testing: {format_name} {scenario.label}")
                measurements.append(await fn(format_name, scenario, config))

        return BenchmarkResult(
            config=config,
            measurements=measurements,
            start_time=start_time,
            end_time=datetime.now(),
        )
