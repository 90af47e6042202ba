#!filepath: learnet/observability/instrumentation.py
from __future__ import annotations

from dataclasses import dataclass
from contextlib import contextmanager
from collections import OrderedDict
from typing import Dict

from learnet.observability.timer import Timer
from learnet.observability.metrics import MetricRecorder
from learnet.observability.timeline_reporter import TimelineReporter


@dataclass
class Instrumentation:
    """
    Leaf-only accounting + parent scopes.

    1. The timeline only holds leaf timers (record=True)
    2. Parent timers (record=False) only bound wall-time
    3. Nothing is logged on the hot path
    """

    enabled: bool = True

    def __post_init__(self):
        self._timer = Timer(enabled=self.enabled)
        self.metrics = MetricRecorder(enabled=self.enabled)

        # timeline: OrderedDict[leaf_name, elapsed_seconds]
        self.timeline: Dict[str, float] = OrderedDict()

    # ---------------------------------------------------------
    # Context manager timer
    # ---------------------------------------------------------
    def timer(self, name: str, *, record: bool = True):
        """
        Parameters
        ----------
        name : str
            timer name
        record : bool
            - True  : leaf, written to the timeline
            - False : parent scope, no side effects
        """
        inst = self

        @contextmanager
        def _ctx():
            if not inst.enabled:
                yield
                return

            inst._timer.start(name)
            try:
                yield
            finally:
                elapsed = inst._timer.end(name)
                if record:
                    inst.timeline[name] = elapsed

        return _ctx()

    def generate_timeline_report(self, title: str):
        TimelineReporter(self.timeline, title).print()


# -------------------------------------------------------------
# No-op Instrumentation
# -------------------------------------------------------------
class NoOpInstrumentation:
    """Used when no instrumentation is passed."""

    def __init__(self):
        self.metrics = MetricRecorder(enabled=False)
        self.timeline: Dict[str, float] = {}

    def timer(self, name: str, *, record: bool = True):
        return _NoOpTimer()

    def generate_timeline_report(self, title: str):
        pass


class _NoOpTimer:
    def __enter__(self):
        pass

    def __exit__(self, exc_type, exc, tb):
        pass
