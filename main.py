#!/usr/bin/env python3
"""
serde-bench - Main entry point for running serialization benchmarks.

Usage:
    python main.py [command] [options]

Commands:
    json      - Benchmark JSON write/read round trips
    msgpack   - Benchmark MessagePack write/read round trips
    all       - Benchmark every format and print the comparison table
"""

import argparse
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

from serde_bench.benchmarks.serialization import FORMATS, SerializationBenchmarkSuite
from serde_bench.harness.reporter import ChartReporter, JSONReporter
from serde_bench.harness.runner import BenchmarkConfig
from serde_bench.instrumentation.traces import TracingConfig, init_tracing, shutdown_tracing
from serde_bench.scenarios import get_default_scenarios, get_scenarios, list_scenarios


def build_config(args) -> BenchmarkConfig:
    """Merge CLI arguments over SERDE_BENCH_* environment settings."""
    if args.sizes:
        scenarios = get_scenarios([s.strip() for s in args.sizes.split(",") if s.strip()])
    elif args.extended:
        scenarios = get_default_scenarios(extended=True)
    else:
        scenarios = None

    formats = list(FORMATS) if args.command == "all" else [args.command]

    return BenchmarkConfig.from_env(
        name=f"serde_{args.command}",
        formats=formats,
        scenarios=scenarios,
        iterations=args.iterations,
        warmup_iterations=args.warmup,
        work_dir=args.work_dir,
    )


async def run_benchmarks(args):
    """Run the selected benchmarks and write any requested artifacts."""
    config = build_config(args)
    suite = SerializationBenchmarkSuite(verbose=not args.quiet)

    if not args.quiet:
        print("=" * 70)
        print(f"SERDE BENCH - {args.command.upper()}")
        print("=" * 70)

    result = await suite.run_all(config)

    if args.quiet:
        print(suite.reporter.results_table(result))

    if args.details:
        for measurement in result.measurements:
            print(suite.reporter.single_measurement(measurement))

    if args.save_json:
        path = JSONReporter(args.output_dir).save_result(result)
        print(f"\nResults saved to {path}")

    if args.chart:
        path = ChartReporter(args.output_dir / "charts").median_chart(result)
        if path:
            print(f"Chart saved to {path}")

    return result


def main():
    parser = argparse.ArgumentParser(
        description="serde-bench - JSON vs MessagePack round-trip benchmarks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
    python main.py all
    python main.py json --sizes 10k,100k --iterations 20
    python main.py msgpack --extended --chart

List sizes: {', '.join(list_scenarios())}
        """,
    )

    parser.add_argument(
        "command",
        choices=[*FORMATS, "all"],
        help="Format to benchmark",
    )
    parser.add_argument(
        "--sizes",
        default=None,
        help="Comma-separated list sizes to run (default: 10k,100k,250k,500k,750k)",
    )
    parser.add_argument(
        "--extended",
        action="store_true",
        help="Also run the 1m, 5m and 10m list sizes",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=None,
        help="Timed iterations per measurement (default: 10)",
    )
    parser.add_argument(
        "--warmup",
        type=int,
        default=None,
        help="Untimed warmup iterations per measurement (default: 5)",
    )
    parser.add_argument(
        "--work-dir",
        type=Path,
        default=None,
        help="Directory for temporary payload files (default: current directory)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("results"),
        help="Directory to save results (default: results/)",
    )
    parser.add_argument(
        "--save-json",
        action="store_true",
        help="Save full results, including raw samples, as JSON",
    )
    parser.add_argument(
        "--chart",
        action="store_true",
        help="Save a PNG chart of median latency by list size",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Export OpenTelemetry spans to the console",
    )
    parser.add_argument(
        "--details",
        action="store_true",
        help="Print mean/median/p95/min/max and payload size for every measurement",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only print the results table",
    )

    args = parser.parse_args()

    # Load environment variables from .env file
    load_dotenv()

    init_tracing(TracingConfig(enable_console_export=True if args.trace else None))

    try:
        asyncio.run(run_benchmarks(args))
    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user")
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)
    finally:
        shutdown_tracing()


if __name__ == "__main__":
    main()
