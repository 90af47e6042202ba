#!filepath: learnet/network/scheduler.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from learnet import config
from learnet.network.machine import FitOutcome
from learnet.network.node import Node
from learnet.observability.instrumentation import Instrumentation, NoOpInstrumentation
from learnet.utils.logger import logs


@dataclass
class FitSummary:
    """Handles of the machines visited by one scheduler pass, by outcome."""

    trained: List[int] = field(default_factory=list)
    updated: List[int] = field(default_factory=list)
    up_to_date: List[int] = field(default_factory=list)
    frozen: List[int] = field(default_factory=list)

    def add(self, uid: int, outcome: FitOutcome) -> None:
        getattr(self, outcome.value).append(uid)

    @property
    def retrained(self) -> List[int]:
        return [*self.trained, *self.updated]


def fit(
    N: Node,
    rows: Any = None,
    verbosity: Optional[int] = None,
    force: bool = False,
    inst: Instrumentation | NoOpInstrumentation | None = None,
) -> Node:
    """
    Train the machines of the learning network terminating at ``N``.

    Pull scheduler:
      - only machines on N's tape are considered
      - machines are visited once, in tape (topological) order
      - frozen machines are always skipped
      - otherwise a machine is retrained when ``force`` is set, when it
        is stale, or when ``rows`` differs from its last selection

    A second call with nothing changed does no work, with one exception:
    a frozen machine whose model changed after its last fit stays stale,
    so machines downstream of it retrain on every call until it is
    thawed (or its model restored).

    Runs strictly sequentially. A failing model fit propagates; machines
    already retrained keep their new results, the failing one keeps its
    old ones.

    Returns ``N`` itself.
    """
    if verbosity is None:
        verbosity = config.settings.network.verbosity
    inst = inst if inst is not None else NoOpInstrumentation()

    summary = FitSummary()

    with inst.timer(f"fit!:{N!r}", record=False):
        for mach in N.machines():
            if mach.frozen:
                if verbosity >= 1:
                    logs.info(f"[fit!] {mach!r} is frozen -> skip")
                summary.add(mach.uid, FitOutcome.FROZEN)
                continue

            if not force and not mach.needs_fit(rows):
                summary.add(mach.uid, FitOutcome.UP_TO_DATE)
                continue

            with inst.timer(f"fit:{mach!r}"):
                outcome = mach.fit(rows=rows, verbosity=verbosity, force=force)
            summary.add(mach.uid, outcome)

    if summary.up_to_date and verbosity >= 1:
        skipped = ", ".join(f"Machine @ {uid}" for uid in summary.up_to_date)
        logs.info(
            f"[fit!] Not retraining {skipped}. Already up to date. "
            "Use force=True to force retraining."
        )

    inst.metrics.record("fit_summary", summary)
    for outcome in FitOutcome:
        inst.metrics.increment(f"machines.{outcome.value}", len(getattr(summary, outcome.value)))
    return N
