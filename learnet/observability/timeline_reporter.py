#!filepath: learnet/observability/timeline_reporter.py
from typing import Dict

from learnet.utils.logger import logs


class TimelineReporter:
    """
    Scheduler timeline report: leaf timer name -> seconds
    """

    def __init__(self, timeline: Dict[str, float], title: str):
        self.timeline = timeline
        self.title = title

    def print(self):
        logs.info(f"[Timeline] ===== Fit timeline for {self.title} =====")

        total = 0.0
        for name, sec in self.timeline.items():
            logs.info(f"[Timeline] {str(name):<30} {sec:>8.3f}s")
            total += sec

        logs.info(f"[Timeline] Total{'':<27} {total:>8.3f}s")
        logs.info("[Timeline] ===========================================")
