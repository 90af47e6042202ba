from __future__ import annotations

from typing import Any, Tuple

from pydantic import BaseModel, ConfigDict


FitReturn = Tuple[Any, Any, Any]


class Model(BaseModel):
    """
    Model (configuration object)

    A model only carries hyperparameters. Learned state never lives on
    the model: ``fit`` returns it and the owning machine caches it.

    Contract consumed by the engine:
    - fit(verbosity, *training_data) -> (fitresult, cache, report)
    - update(verbosity, fitresult, cache, *training_data) -> same triple
    - value equality (``==``) and deep copy (``model_copy(deep=True)``)
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
        arbitrary_types_allowed=True,
    )

    # --------------------------------------------------
    # Training contract
    # --------------------------------------------------
    def fit(self, verbosity: int, *args) -> FitReturn:
        raise NotImplementedError(f"{type(self).__name__} does not implement fit")

    def update(self, verbosity: int, fitresult: Any, cache: Any, *args) -> FitReturn:
        """
        Warm restart after a hyperparameter change. Training data is
        guaranteed unchanged since the last fit. Defaults to a fresh fit.
        """
        return self.fit(verbosity, *args)

    def clean(self) -> str:
        """
        Hook to repair invalid hyperparameters before training.
        Returns a warning message ("" when nothing was changed).
        """
        return ""

    def fitted_params(self, fitresult: Any) -> Any:
        return {"fitresult": fitresult}


class Supervised(Model):
    """Trained on (features, target[, ...]): at least two training arguments."""

    def predict(self, fitresult: Any, X: Any) -> Any:
        raise NotImplementedError(f"{type(self).__name__} does not implement predict")


class Deterministic(Supervised):
    pass


class Probabilistic(Supervised):
    """``predict`` returns per-row distributions."""

    def predict_mean(self, fitresult: Any, X: Any) -> Any:
        raise NotImplementedError(f"{type(self).__name__} does not implement predict_mean")

    def predict_mode(self, fitresult: Any, X: Any) -> Any:
        raise NotImplementedError(f"{type(self).__name__} does not implement predict_mode")

    def predict_median(self, fitresult: Any, X: Any) -> Any:
        raise NotImplementedError(f"{type(self).__name__} does not implement predict_median")


class Unsupervised(Model):
    """Trained on a single argument."""

    def transform(self, fitresult: Any, X: Any) -> Any:
        raise NotImplementedError(f"{type(self).__name__} does not implement transform")

    def inverse_transform(self, fitresult: Any, X: Any) -> Any:
        raise NotImplementedError(
            f"{type(self).__name__} does not implement inverse_transform"
        )
