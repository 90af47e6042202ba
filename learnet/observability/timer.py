#!filepath: learnet/observability/timer.py
import time
from typing import Dict


class Timer:
    """
    Named wall-clock stopwatch.

    Names are handles such as ``fit:Machine @ 3``; a name can only be
    running once at a time. ``totals`` accumulates every finished lap.
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._running: Dict[str, float] = {}
        self.totals: Dict[str, float] = {}

    def start(self, name: str) -> None:
        if self.enabled:
            self._running[name] = time.perf_counter()

    def end(self, name: str) -> float:
        """Seconds since ``start(name)``; 0.0 when disabled or never started."""
        began = self._running.pop(name, None) if self.enabled else None
        if began is None:
            return 0.0
        lap = time.perf_counter() - began
        self.totals[name] = self.totals.get(name, 0.0) + lap
        return lap

    def is_running(self, name: str) -> bool:
        return name in self._running
