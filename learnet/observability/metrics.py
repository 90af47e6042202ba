#!filepath: learnet/observability/metrics.py
from dataclasses import dataclass, field
from typing import Any, Dict

from learnet.utils.logger import logs


@dataclass
class MetricRecorder:
    """
    Scheduler metrics: last value per name plus integer counters
    (e.g. ``machines.trained``).
    """

    enabled: bool = True
    metrics: Dict[str, Any] = field(default_factory=dict)

    def record(self, name: str, value: Any) -> None:
        if not self.enabled:
            return
        self.metrics[name] = value
        logs.debug(f"[Metric] {name} = {value}")

    def increment(self, name: str, by: int = 1) -> int:
        if not self.enabled:
            return 0
        self.metrics[name] = self.metrics.get(name, 0) + by
        return self.metrics[name]
