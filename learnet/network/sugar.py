"""
Operation functions usable on both nodes and data:

    predict(mach, Xs)     # Xs a node   -> dynamic Node
    predict(mach, Xnew)   # Xnew data   -> predictions, right away
    predict(mach)         # predictions on the machine's own training input
"""
from __future__ import annotations

from typing import Any

from learnet.network.abstract import AbstractNode
from learnet.network.machine import Machine
from learnet.network.node import Node
from learnet.network.operations import (
    InverseTransform,
    Operation,
    Predict,
    PredictMean,
    PredictMedian,
    PredictMode,
    Transform,
)


def _call(op: Operation, mach: Machine, args: tuple) -> Any:
    if not isinstance(mach, Machine):
        raise TypeError(f"{op.name} expects a Machine first, got {type(mach).__name__}")

    if any(isinstance(a, AbstractNode) for a in args):
        return Node(op, mach, *args)

    if not args:
        mach.require_fitted(op.name)
        args = (mach.args[0].evaluate(),)
    return op.apply(mach, *args)


def predict(mach: Machine, *args: Any) -> Any:
    return _call(Predict(), mach, args)


def predict_mean(mach: Machine, *args: Any) -> Any:
    return _call(PredictMean(), mach, args)


def predict_mode(mach: Machine, *args: Any) -> Any:
    return _call(PredictMode(), mach, args)


def predict_median(mach: Machine, *args: Any) -> Any:
    return _call(PredictMedian(), mach, args)


def transform(mach: Machine, *args: Any) -> Any:
    return _call(Transform(), mach, args)


def inverse_transform(mach: Machine, *args: Any) -> Any:
    return _call(InverseTransform(), mach, args)
