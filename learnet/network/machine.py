from __future__ import annotations

import copy
from enum import Enum
from typing import Any, Hashable, Optional, Tuple

from learnet import config
from learnet.models.base import Model, Supervised, Unsupervised
from learnet.network.abstract import AbstractNode, next_handle
from learnet.network.source import source
from learnet.utils.errors import ArityError, UntrainedError
from learnet.utils.logger import logs
from learnet.utils.tables import rows_key


class FitOutcome(str, Enum):
    TRAINED = "trained"
    UPDATED = "updated"
    UP_TO_DATE = "up_to_date"
    FROZEN = "frozen"

    @property
    def did_work(self) -> bool:
        return self in (FitOutcome.TRAINED, FitOutcome.UPDATED)


class Machine:
    """
    Machine: binds one model to the nodes supplying its training data.

    Owns (exclusively):
      - fitresult / cache / report of the last successful fit
      - previous_model  : snapshot of the model at the last fit
      - upstream_state  : states of the training args at the last fit
      - rows            : row selection used at the last fit
      - state           : number of successful fits

    Staleness:
      never fit
      OR model != previous_model
      OR a training argument is stale
      OR a training argument changed state since the last fit
    """

    def __init__(self, model: Model, *args: Any):
        if not isinstance(model, Model):
            raise TypeError(f"Expected a Model, got {type(model).__name__}")

        args = tuple(a if isinstance(a, AbstractNode) else source(a) for a in args)

        if isinstance(model, Supervised) and len(args) < 2:
            raise ArityError(
                f"Wrong number of arguments for {type(model).__name__}. "
                "You must provide target(s) for supervised models."
            )
        if isinstance(model, Unsupervised) and len(args) != 1:
            raise ArityError(
                f"Wrong number of arguments for {type(model).__name__}. "
                "Use Machine(model, X) for an unsupervised model."
            )

        self.uid: int = next_handle()
        self.model = model
        self.args: Tuple[AbstractNode, ...] = args

        self.previous_model: Optional[Model] = None
        self.fitresult: Any = None
        self.cache: Any = None
        self.report: Any = None

        self.frozen: bool = False
        self.state: int = 0
        self.rows: Hashable = None
        self.upstream_state: Tuple[Any, ...] = self._current_upstream_state()

    # --------------------------------------------------
    # Freezing
    # --------------------------------------------------
    def freeze(self) -> "Machine":
        """Never retrain this machine until thawed."""
        self.frozen = True
        return self

    def thaw(self) -> "Machine":
        self.frozen = False
        return self

    # --------------------------------------------------
    # Staleness
    # --------------------------------------------------
    @property
    def is_trained(self) -> bool:
        return self.state > 0

    def _current_upstream_state(self) -> Tuple[Any, ...]:
        return tuple(arg.state() for arg in self.args)

    def is_stale(self) -> bool:
        return (
            not self.is_trained
            or self.model != self.previous_model
            or any(arg.is_stale() for arg in self.args)
            or self._current_upstream_state() != self.upstream_state
        )

    def needs_fit(self, rows: Any = None) -> bool:
        """Stale, or asked to train on a different row selection."""
        return self.is_stale() or rows_key(rows) != self.rows

    # --------------------------------------------------
    # Training
    # --------------------------------------------------
    @logs.catch(msg="model call raised; previous fit results kept", log_time=False)
    def fit(
        self,
        rows: Any = None,
        verbosity: Optional[int] = None,
        force: bool = False,
    ) -> FitOutcome:
        """
        Retrain if needed.

        - frozen                                 -> FROZEN (no-op)
        - never fit / force / rows or data moved -> model.fit   (TRAINED)
        - only the model changed                 -> model.update (UPDATED)
        - otherwise                              -> UP_TO_DATE (no-op)

        New results replace old ones only after the model call returns.
        """
        if verbosity is None:
            verbosity = config.settings.network.verbosity

        if self.frozen:
            if verbosity >= 0:
                logs.warning(f"[Machine] {self!r} not trained as it is frozen.")
            return FitOutcome.FROZEN

        message = self.model.clean()
        if message and verbosity >= 0:
            logs.warning(f"[Machine] {self!r}: {message}")

        key = rows_key(rows)
        upstream_state = self._current_upstream_state()

        data_changed = (
            key != self.rows
            or upstream_state != self.upstream_state
            or any(arg.is_stale() for arg in self.args)
        )

        if not self.is_trained or data_changed or force:
            outcome = FitOutcome.TRAINED
        elif self.model != self.previous_model:
            outcome = FitOutcome.UPDATED
        else:
            if verbosity >= 1:
                logs.info(
                    f"[Machine] Not retraining {self!r}. It appears up-to-date. "
                    "Use force=True to force retraining."
                )
            return FitOutcome.UP_TO_DATE

        data = [arg.evaluate(rows=rows) for arg in self.args]

        if outcome is FitOutcome.TRAINED:
            if verbosity >= 1:
                logs.info(f"[Machine] Training {self!r}.")
            fitresult, cache, report = self.model.fit(verbosity, *data)
        else:
            if verbosity >= 1:
                logs.info(f"[Machine] Updating {self!r}.")
            fitresult, cache, report = self.model.update(
                verbosity, self.fitresult, self.cache, *data
            )

        self.fitresult = fitresult
        self.cache = cache
        self.report = report
        self.previous_model = copy.deepcopy(self.model)
        self.upstream_state = upstream_state
        self.rows = key
        self.state += 1

        return outcome

    # --------------------------------------------------
    # Access to the fit result
    # --------------------------------------------------
    def require_fitted(self, operation: str = "apply") -> None:
        if not self.is_trained:
            raise UntrainedError(
                f"{self!r} has not been trained; cannot {operation}. "
                "Call fit on a downstream node first."
            )

    def fitted_params(self) -> Any:
        self.require_fitted("fitted_params")
        return self.model.fitted_params(self.fitresult)

    # --------------------------------------------------
    # Display
    # --------------------------------------------------
    def describe(self) -> str:
        args = ", ".join(repr(a) for a in self.args)
        return f"machine({self.model!r}, {args})"

    def __repr__(self) -> str:
        return f"Machine @ {self.uid}"


def machine(model: Model, *args: Any) -> Machine:
    """Bind ``model`` to training nodes; raw data is wrapped in sources."""
    return Machine(model, *args)
