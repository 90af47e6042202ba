"""
Built-in models (FINAL)

Small reference models used to exercise learning networks. They are
NOT a model library: each one only implements enough of the model
contract to be trained and applied inside a network.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd
from pydantic import Field
from sklearn.linear_model import Ridge

from learnet.models.base import Deterministic, Probabilistic, Unsupervised
from learnet.network.composites import SupervisedNetwork, fitresults
from learnet.network.machine import Machine
from learnet.network.scheduler import fit as fit_network
from learnet.network.source import source
from learnet.network.sugar import predict, transform
from learnet.utils.logger import logs
from learnet.utils.tables import nrows


# ======================================================================
# Transformers
# ======================================================================
class FeatureSelector(Unsupervised):
    """Keep ``features`` (all columns when None)."""

    features: Optional[List[str]] = None

    def fit(self, verbosity: int, X: pd.DataFrame):
        fitresult = list(X.columns) if self.features is None else list(self.features)
        missing = set(fitresult) - set(X.columns)
        if missing:
            raise ValueError(f"[FeatureSelector] unknown features: {sorted(missing)}")
        return fitresult, None, None

    def transform(self, fitresult: List[str], X: pd.DataFrame) -> pd.DataFrame:
        return X[fitresult]


class Standardizer(Unsupervised):
    """
    Z-score every numeric column of a table.

    fitresult: {column: (mean, std)}; a zero std is replaced by 1.
    """

    def fit(self, verbosity: int, X: pd.DataFrame):
        fitresult: Dict[str, tuple] = {}
        for col in X.select_dtypes(include="number").columns:
            mean = float(X[col].mean())
            std = float(X[col].std(ddof=1)) if len(X) > 1 else 0.0
            fitresult[col] = (mean, std if std > 0 else 1.0)

        if verbosity >= 2:
            logs.info(f"[Standardizer] standardizing {list(fitresult)}")
        return fitresult, None, {"features_fit": list(fitresult)}

    def transform(self, fitresult: Dict[str, tuple], X: pd.DataFrame) -> pd.DataFrame:
        out = X.copy()
        for col, (mean, std) in fitresult.items():
            out[col] = (X[col] - mean) / std
        return out

    def inverse_transform(self, fitresult: Dict[str, tuple], X: pd.DataFrame) -> pd.DataFrame:
        out = X.copy()
        for col, (mean, std) in fitresult.items():
            out[col] = X[col] * std + mean
        return out


class UnivariateStandardizer(Unsupervised):
    """Z-score a single vector."""

    def fit(self, verbosity: int, v: Any):
        arr = np.asarray(v, dtype=float)
        std = float(arr.std(ddof=1)) if arr.size > 1 else 0.0
        return (float(arr.mean()), std if std > 0 else 1.0), None, None

    def transform(self, fitresult: tuple, v: Any) -> np.ndarray:
        mean, std = fitresult
        return (np.asarray(v, dtype=float) - mean) / std

    def inverse_transform(self, fitresult: tuple, w: Any) -> np.ndarray:
        mean, std = fitresult
        return np.asarray(w, dtype=float) * std + mean


# ======================================================================
# Supervised
# ======================================================================
class ConstantRegressor(Deterministic):
    """Predicts the training target mean."""

    def fit(self, verbosity: int, X: Any, y: Any):
        return float(np.mean(np.asarray(y, dtype=float))), None, None

    def predict(self, fitresult: float, X: Any) -> np.ndarray:
        return np.full(nrows(X), fitresult)

    def fitted_params(self, fitresult: float) -> Dict[str, float]:
        return {"mean": fitresult}


class ConstantClassifier(Probabilistic):
    """Predicts the training class frequencies for every row."""

    def fit(self, verbosity: int, X: Any, y: Any):
        freq = pd.Series(np.asarray(y)).value_counts(normalize=True).sort_index()
        return freq, None, {"classes": list(freq.index)}

    def predict(self, fitresult: pd.Series, X: Any) -> pd.DataFrame:
        return pd.DataFrame([fitresult.to_dict()] * nrows(X))

    def predict_mode(self, fitresult: pd.Series, X: Any) -> np.ndarray:
        return np.full(nrows(X), fitresult.idxmax(), dtype=object)


class RidgeRegressor(Deterministic):
    """scikit-learn Ridge on a numeric table."""

    alpha: float = Field(default=1.0, ge=0.0)
    fit_intercept: bool = True

    def fit(self, verbosity: int, X: Any, y: Any):
        est = Ridge(alpha=self.alpha, fit_intercept=self.fit_intercept)
        est.fit(np.asarray(X, dtype=float), np.asarray(y, dtype=float))
        report = {"n_features": int(est.n_features_in_)}
        return est, None, report

    def predict(self, fitresult: Ridge, X: Any) -> np.ndarray:
        return fitresult.predict(np.asarray(X, dtype=float))

    def fitted_params(self, fitresult: Ridge) -> Dict[str, Any]:
        return {"coef": fitresult.coef_, "intercept": fitresult.intercept_}


# ======================================================================
# Hand-written composite
# ======================================================================
class SimpleDeterministicComposite(SupervisedNetwork):
    """
    transformer (unsupervised) followed by a deterministic regressor.
    Mainly intended for testing.
    """

    regressor: Deterministic = Field(default_factory=ConstantRegressor)
    transformer: Unsupervised = Field(default_factory=FeatureSelector)

    def fit(self, verbosity: int, Xtrain: Any, ytrain: Any):
        X = source(Xtrain)
        y = source(ytrain)

        t = Machine(self.transformer, X)
        Xt = transform(t, X)

        l = Machine(self.regressor, Xt, y)
        yhat = predict(l, Xt)

        fit_network(yhat, verbosity=verbosity)

        return fitresults(X, y, yhat)
