#!filepath: tests/observability/test_instrumentation.py

import time

from learnet.observability import Instrumentation, NoOpInstrumentation


def test_instrumentation_timer():
    inst = Instrumentation(enabled=True)

    with inst.timer("fit:Machine @ 1"):
        time.sleep(0.01)

    assert "fit:Machine @ 1" in inst.timeline
    assert inst.timeline["fit:Machine @ 1"] > 0


def test_parent_timer_is_not_recorded():
    inst = Instrumentation(enabled=True)

    with inst.timer("fit!:Node @ 3", record=False):
        with inst.timer("fit:Machine @ 2"):
            pass

    assert list(inst.timeline) == ["fit:Machine @ 2"]


def test_timer_records_even_when_body_raises():
    inst = Instrumentation(enabled=True)

    try:
        with inst.timer("failing"):
            raise ValueError("boom")
    except ValueError:
        pass

    assert "failing" in inst.timeline


def test_disabled_instrumentation_records_nothing():
    inst = Instrumentation(enabled=False)

    with inst.timer("x"):
        pass
    inst.metrics.record("rows", 1)

    assert inst.timeline == {}
    assert inst.metrics.metrics == {}


def test_noop_instrumentation():
    inst = NoOpInstrumentation()

    with inst.timer("x", record=False):
        pass
    inst.metrics.record("rows", 1)
    inst.generate_timeline_report("nothing")

    assert inst.timeline == {}
    assert inst.metrics.metrics == {}


def test_generate_timeline_report(log_records):
    inst = Instrumentation(enabled=True)

    with inst.timer("phase_X"):
        time.sleep(0.005)

    inst.generate_timeline_report("Node @ 9")

    output = "\n".join(log_records)

    assert "phase_X" in output
    assert "Fit timeline for Node @ 9" in output
