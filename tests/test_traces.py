import pytest
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode

from serde_bench.instrumentation.traces import (
    Tracer,
    TracingConfig,
    get_tracer,
    init_tracing,
    shutdown_tracing,
)


@pytest.fixture
def tracer_and_exporter():
    tracer = Tracer(TracingConfig(enable_console_export=False)).initialize()
    exporter = InMemorySpanExporter()
    tracer._provider.add_span_processor(SimpleSpanProcessor(exporter))
    yield tracer, exporter
    tracer.shutdown()


def test_span_records_attributes(tracer_and_exporter):
    tracer, exporter = tracer_and_exporter

    with tracer.span("json.write", {"bench.list_length": 10}) as span:
        span.set_attribute("bench.median_ms", 1.5)

    (finished,) = exporter.get_finished_spans()
    assert finished.name == "json.write"
    assert finished.attributes["bench.list_length"] == 10
    assert finished.attributes["bench.median_ms"] == 1.5


def test_span_records_and_reraises_errors(tracer_and_exporter):
    tracer, exporter = tracer_and_exporter

    with pytest.raises(RuntimeError):
        with tracer.span("msgpack.read"):
            raise RuntimeError("bad payload")

    (finished,) = exporter.get_finished_spans()
    assert finished.status.status_code == StatusCode.ERROR
    assert finished.events[0].name == "exception"


def test_trace_env_flag(monkeypatch):
    monkeypatch.setenv("SERDE_BENCH_TRACE", "true")
    assert TracingConfig().enable_console_export

    monkeypatch.setenv("SERDE_BENCH_TRACE", "0")
    assert not TracingConfig().enable_console_export


def test_global_tracer_lifecycle():
    shutdown_tracing()
    tracer = init_tracing(TracingConfig(enable_console_export=False))

    assert get_tracer() is tracer
    shutdown_tracing()
    assert get_tracer() is not tracer
    shutdown_tracing()
