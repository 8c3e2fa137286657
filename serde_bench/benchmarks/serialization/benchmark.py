"""
Serialization benchmarks - JSON vs MessagePack round trips through disk.

For each list size, times serialize-and-write and read-and-deserialize of
the same payload, once per format.
"""

import asyncio
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

import msgpack

from ...instrumentation.traces import get_tracer
from ...harness.runner import (
    BenchmarkConfig,
    BenchmarkResult,
    FormatMeasurement,
    Operation,
    run,
)
from ...scenarios.definitions import ListSizeScenario, build_test_list


@dataclass(frozen=True)
class SerializationFormat:
    """A named codec that turns Python objects into bytes and back."""

    name: str
    suffix: str
    dumps: Callable[[Any], bytes]
    loads: Callable[[bytes], Any]


def _json_dumps(obj: Any) -> bytes:
    return json.dumps(obj, separators=(",", ":")).encode("utf-8")


def _json_loads(data: bytes) -> Any:
    return json.loads(data)


JSON_FORMAT = SerializationFormat("json", "json", _json_dumps, _json_loads)
MSGPACK_FORMAT = SerializationFormat("msgpack", "msgpack", msgpack.packb, msgpack.unpackb)

FORMATS = {f.name: f for f in (JSON_FORMAT, MSGPACK_FORMAT)}


def get_format(name: str) -> SerializationFormat:
    """Get a serialization format by name."""
    try:
        return FORMATS[name]
    except KeyError:
        raise ValueError(
            f"Unknown format: {name!r} (choose from {', '.join(FORMATS)})"
        ) from None


def payload_path(work_dir: Path, fmt: SerializationFormat) -> Path:
    """Temp file used by a format; each format gets its own file."""
    return Path(work_dir) / f"temp.{fmt.suffix}"


def write_operation(fmt: SerializationFormat, payload: Any, path: Path) -> Operation:
    """Build an operation that serializes ``payload`` and writes it to ``path``."""

    async def write() -> None:
        data = fmt.dumps(payload)
        await asyncio.to_thread(path.write_bytes, data)

    return write


def read_operation(fmt: SerializationFormat, path: Path) -> Operation:
    """Build an operation that reads ``path`` and deserializes it."""

    async def read() -> Any:
        data = await asyncio.to_thread(path.read_bytes)
        return fmt.loads(data)

    return read


async def measure_format(
    format_name: str,
    scenario: ListSizeScenario,
    config: BenchmarkConfig,
) -> FormatMeasurement:
    """Benchmark writing then reading one format at one list size.

    The write phase leaves the payload on disk for the read phase. The temp
    file is removed afterwards, also when a phase fails.
    """
    fmt = get_format(format_name)
    tracer = get_tracer()
    payload = build_test_list(scenario.length)
    path = payload_path(config.work_dir, fmt)
    path.parent.mkdir(parents=True, exist_ok=True)

    attributes = {
        "bench.format": fmt.name,
        "bench.list_length": scenario.length,
        "bench.iterations": config.iterations,
        "bench.warmup_iterations": config.warmup_iterations,
    }

    try:
        with tracer.span(f"{fmt.name}.write", {**attributes, "bench.direction": "write"}) as span:
            write_results = await run(
                write_operation(fmt, payload, path),
                iterations=config.iterations,
                warmup_iterations=config.warmup_iterations,
            )
            span.set_attribute("bench.mean_ms", write_results.mean)
            span.set_attribute("bench.median_ms", write_results.median)

        payload_bytes = path.stat().st_size

        with tracer.span(f"{fmt.name}.read", {**attributes, "bench.direction": "read"}) as span:
            read_results = await run(
                read_operation(fmt, path),
                iterations=config.iterations,
                warmup_iterations=config.warmup_iterations,
            )
            span.set_attribute("bench.mean_ms", read_results.mean)
            span.set_attribute("bench.median_ms", read_results.median)
    finally:
        path.unlink(missing_ok=True)

    return FormatMeasurement(
        format_name=fmt.name,
        scenario=scenario,
        write=write_results,
        read=read_results,
        payload_bytes=payload_bytes,
    )


class SerializationBenchmarkSuite:
    """Suite sweeping serialization formats over list sizes."""

    def __init__(self, verbose: bool = True):
        self.verbose = verbose
        self.runner = None
        self.reporter = None

    def setup(self):
        """Initialize runner and reporter."""
        from ...harness.runner import BenchmarkRunner
        from ...harness.reporter import ConsoleReporter

        self.runner = BenchmarkRunner(verbose=self.verbose)
        self.reporter = ConsoleReporter()

    async def run_all(
        self,
        config: Optional[BenchmarkConfig] = None,
    ) -> BenchmarkResult:
        """Run every configured format and list size, then print the table."""
        if not self.runner:
            self.setup()

        config = config or BenchmarkConfig()
        for name in config.formats:
            get_format(name)

        result = await self.runner.run_benchmark(measure_format, config)

        if self.verbose:
            print(self.reporter.results_table(result))

        return result

    async def run_format(
        self,
        format_name: str,
        config: Optional[BenchmarkConfig] = None,
    ) -> BenchmarkResult:
        """Run a single format over the configured list sizes."""
        config = config or BenchmarkConfig()
        single = BenchmarkConfig(
            name=f"{config.name}_{format_name}",
            description=config.description,
            formats=[format_name],
            scenarios=config.scenarios,
            iterations=config.iterations,
            warmup_iterations=config.warmup_iterations,
            work_dir=config.work_dir,
            metadata=config.metadata,
        )
        return await self.run_all(single)
