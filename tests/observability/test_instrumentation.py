import time

import pytest
from loguru import logger

from srsglass.observability.instrumentation import Instrumentation, NoOpInstrumentation
from srsglass.observability.metrics import MetricRecorder


@pytest.fixture
def log_lines():
    captured = []
    sink_id = logger.add(lambda msg: captured.append(str(msg)), level="DEBUG")
    yield captured
    logger.remove(sink_id)


def test_instrumentation_timer_leaf_only():
    inst = Instrumentation(enabled=True)

    with inst.timer("Step", record=False):
        with inst.timer("leaf"):
            time.sleep(0.005)

    assert inst.timeline["leaf"] > 0
    assert "Step" not in inst.timeline


def test_repeated_leaf_accumulates():
    inst = Instrumentation(enabled=True)

    for _ in range(2):
        with inst.timer("write_timesheet"):
            time.sleep(0.002)

    assert list(inst.timeline) == ["write_timesheet"]
    assert inst.timeline["write_timesheet"] >= 0.004


def test_timer_records_even_when_step_fails():
    inst = Instrumentation(enabled=True)

    with pytest.raises(ValueError):
        with inst.timer("decode_dump"):
            raise ValueError("bad dump")

    assert "decode_dump" in inst.timeline


def test_instrumentation_metrics():
    inst = Instrumentation(enabled=True)
    inst.metrics.record("regions", 123)

    assert inst.metrics.metrics["regions"] == 123


def test_metric_rate():
    metrics = MetricRecorder()
    metrics.record("regions", 1000)

    assert metrics.rate("regions", 0.5) == 2000
    assert metrics.rate("regions", 0.0) is None
    assert metrics.rate("regions", None) is None
    assert metrics.rate("total_nations", 1.0) is None


def test_noop_instrumentation(log_lines):
    inst = NoOpInstrumentation()

    with inst.timer("anything"):
        pass
    inst.metrics.record("regions", 1)
    inst.generate_timeline_report("2024-01-02")

    assert inst.timeline == {}
    assert inst.metrics.metrics == {}
    assert log_lines == []


def test_generate_timeline_report(log_lines):
    inst = Instrumentation(enabled=True)

    with inst.timer("decode_dump"):
        time.sleep(0.005)
    inst.metrics.record("regions", 3)
    inst.metrics.record("total_nations", 100)

    inst.generate_timeline_report("2024-01-02")

    output = "\n".join(log_lines)
    assert "Timesheet timeline for 2024-01-02" in output
    assert "decode_dump" in output
    assert "total_nations" in output
    assert "regions/s (decode_dump)" in output
