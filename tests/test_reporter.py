import json
from datetime import datetime

from serde_bench.harness.reporter import ChartReporter, ConsoleReporter, JSONReporter, round_2dp
from serde_bench.harness.runner import BenchmarkConfig, BenchmarkResult, FormatMeasurement
from serde_bench.instrumentation import ResultSet
from serde_bench.scenarios import ListSizeScenario


TEN_K = ListSizeScenario("10k", 10_000)
HUNDRED_K = ListSizeScenario("100k", 100_000)


def measurement(format_name, scenario, read, write):
    return FormatMeasurement(
        format_name=format_name,
        scenario=scenario,
        write=ResultSet.from_samples([write]),
        read=ResultSet.from_samples([read]),
        payload_bytes=2048,
    )


def sample_result():
    return BenchmarkResult(
        config=BenchmarkConfig(scenarios=[TEN_K, HUNDRED_K]),
        measurements=[
            measurement("json", TEN_K, 1.234, 2.0),
            measurement("json", HUNDRED_K, 12.346, 20.5),
            measurement("msgpack", TEN_K, 0.999, 1.111),
            measurement("msgpack", HUNDRED_K, 9.876, 10.0),
        ],
        start_time=datetime(2024, 5, 6, 7, 8, 9),
        end_time=datetime(2024, 5, 6, 7, 8, 19),
    )


def test_round_2dp():
    assert round_2dp(1.234) == 1.23
    assert round_2dp(None) is None


def test_results_table():
    table = ConsoleReporter().results_table(sample_result())

    assert table.splitlines() == [
        "list length,\tjson read,\tjson write,\tmsgpack read,\tmsgpack write",
        "10k,\t1.23,\t2.0,\t1.0,\t1.11",
        "100k,\t12.35,\t20.5,\t9.88,\t10.0",
    ]


def test_results_table_leaves_missing_cells_empty():
    result = sample_result()
    result.measurements = result.measurements[:2]

    rows = ConsoleReporter().results_table(result).splitlines()

    assert rows[1] == "10k,\t1.23,\t2.0,\t,\t"


def test_single_measurement():
    text = ConsoleReporter().single_measurement(measurement("json", TEN_K, 1.5, 2500.0))

    assert "json @ 10k (10000 items)" in text
    assert "Payload size: 2.0KiB" in text
    assert "2.50s" in text
    assert "1.50ms" in text


def test_format_size():
    reporter = ConsoleReporter()

    assert reporter.format_size(512) == "512B"
    assert reporter.format_size(3 * 1024 * 1024) == "3.0MiB"


def test_json_reporter_roundtrip(tmp_path):
    reporter = JSONReporter(tmp_path)
    path = reporter.save_result(sample_result())

    assert path.name == "serde_roundtrip_20240506_070809.json"
    data = json.loads(path.read_text())
    assert len(data["measurements"]) == 4
    assert data["duration_seconds"] == 10


def test_chart_written(tmp_path):
    path = ChartReporter(tmp_path).median_chart(sample_result())

    assert path == tmp_path / "serde_roundtrip_medians.png"
    assert path.stat().st_size > 0


def test_chart_skipped_without_measurements(tmp_path):
    result = sample_result()
    result.measurements = []

    assert ChartReporter(tmp_path).median_chart(result) is None


def test_chart_orders_points_by_list_length(tmp_path, monkeypatch):
    from matplotlib.axes import Axes

    plotted = []
    original_plot = Axes.plot

    def recording_plot(self, x, y, *args, **kwargs):
        plotted.append((list(x), list(y), kwargs["label"]))
        return original_plot(self, x, y, *args, **kwargs)

    monkeypatch.setattr(Axes, "plot", recording_plot)

    result = sample_result()
    result.config.scenarios = [HUNDRED_K, TEN_K]
    ChartReporter(tmp_path).median_chart(result)

    by_label = {label: (x, y) for x, y, label in plotted}
    assert by_label["json read"] == ([10_000, 100_000], [1.234, 12.346])
    assert by_label["msgpack write"] == ([10_000, 100_000], [1.111, 10.0])
