#!filepath: tests/observability/test_timeline_report.py

from learnet.observability.timeline_reporter import TimelineReporter


def test_timeline_log_output(log_records):
    tl = {
        "fit:Machine @ 1": 1.23,
        "fit:Machine @ 2": 2.34,
    }
    reporter = TimelineReporter(tl, "Node @ 3")

    reporter.print()

    output = "\n".join(log_records)

    assert "Fit timeline for Node @ 3" in output
    assert "fit:Machine @ 1" in output
    assert "1.230s" in output
    assert "3.570s" in output
