"""
Results aggregation and visualization for benchmark results.

Provides the delimited console table, JSON export and charts.
"""

from pathlib import Path
from typing import Optional

import matplotlib

matplotlib.use("Agg")  # Non-interactive backend

import matplotlib.pyplot as plt
import numpy as np

from .runner import BenchmarkResult, FormatMeasurement


def round_2dp(value: Optional[float]) -> Optional[float]:
    """Round to two decimal places, passing None through."""
    if value is None:
        return None
    return round(value, 2)


class ConsoleReporter:
    """Generates console/CLI reports."""

    separator = ",\t"

    def format_duration(self, ms: float) -> str:
        """Format duration for display."""
        if ms < 1000:
            return f"{ms:.2f}ms"
        return f"{ms / 1000:.2f}s"

    def format_size(self, num_bytes: int) -> str:
        """Format a byte count for display."""
        size = float(num_bytes)
        for unit in ("B", "KiB", "MiB"):
            if size < 1024:
                return f"{size:.1f}{unit}" if unit != "B" else f"{int(size)}B"
            size /= 1024
        return f"{size:.1f}GiB"

    def table_header(self, formats: list[str]) -> str:
        """Header row: list length, then read/write columns per format."""
        columns = ["list length"]
        for name in formats:
            columns.append(f"{name} read")
            columns.append(f"{name} write")
        return self.separator.join(columns)

    def results_table(self, result: BenchmarkResult) -> str:
        """Delimited table of median timings in ms, one row per list size."""
        lines = [self.table_header(result.config.formats)]
        for label, values in result.median_table():
            cells = [label] + ["" if v is None else str(round_2dp(v)) for v in values]
            lines.append(self.separator.join(cells))
        return "\n".join(lines)

    def single_measurement(self, measurement: FormatMeasurement) -> str:
        """Generate report for a single format/list size measurement."""
        lines = []
        lines.append(f"\n{'=' * 60}")
        lines.append(
            f"{measurement.format_name} @ {measurement.scenario.label} "
            f"({measurement.scenario.length} items)")
        lines.append(f"{'=' * 60}")
        lines.append(f"  Payload size: {self.format_size(measurement.payload_bytes)}")

        for direction, rs in (("Write", measurement.write), ("Read", measurement.read)):
            lines.append(f"\n{direction} ({rs.count} runs):")
            lines.append(f"  {'Median:':<8} {self.format_duration(rs.median)}")
            lines.append(f"  {'Mean:':<8} {self.format_duration(rs.mean)}")
            lines.append(f"  {'p95:':<8} {self.format_duration(rs.percentile(95))}")
            lines.append(f"  {'Min:':<8} {self.format_duration(rs.min)}")
            lines.append(f"  {'Max:':<8} {self.format_duration(rs.max)}")

        return "\n".join(lines)


class ChartReporter:
    """Generates visual charts using matplotlib."""

    def __init__(self, output_dir: Optional[Path] = None):
        self.output_dir = output_dir or Path("results/charts")

    def median_chart(
        self,
        result: BenchmarkResult,
        filename: Optional[str] = None,
    ) -> Optional[Path]:
        """Line chart of median latency against list length, per format and direction."""
        if not result.measurements:
            return None

        # x values must increase regardless of --sizes order
        scenarios = sorted(result.config.scenarios, key=lambda s: s.length)
        lengths = np.array([s.length for s in scenarios])

        fig, ax = plt.subplots(figsize=(10, 6))
        for format_name in result.config.formats:
            for direction in ("read", "write"):
                medians = []
                for scenario in scenarios:
                    m = result.get(format_name, scenario.label)
                    medians.append(getattr(m, direction).median if m else np.nan)
                ax.plot(
                    lengths,
                    np.array(medians, dtype=float),
                    marker="o",
                    linestyle="-" if direction == "read" else "--",
                    label=f"{format_name} {direction}",
                )

        ax.set_xlabel("List length")
        ax.set_ylabel("Median latency (ms)")
        ax.set_title(f"Serialization round trip: {result.config.name}")
        ax.legend()
        ax.grid(True, alpha=0.3)

        self.output_dir.mkdir(parents=True, exist_ok=True)
        filename = filename or f"{result.config.name}_medians.png"
        filepath = self.output_dir / filename
        fig.savefig(filepath, dpi=150, bbox_inches="tight")
        plt.close(fig)

        return filepath


class JSONReporter:
    """Exports results as JSON for further analysis."""

    def __init__(self, output_dir: Optional[Path] = None):
        self.output_dir = output_dir or Path("results")

    def save_result(self, result: BenchmarkResult) -> Path:
        """Save a single result to JSON."""
        timestamp = result.start_time.strftime("%Y%m%d_%H%M%S")
        filepath = self.output_dir / f"{result.config.name}_{timestamp}.json"
        result.save(filepath)
        return filepath
