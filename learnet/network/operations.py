"""
Operations carried by nodes.

The set is closed: a node either dispatches through its machine's fit
result (Predict, Transform, ...) or applies a plain function to its
evaluated arguments (StaticApply).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Dict


@dataclass(frozen=True)
class Operation:
    name: ClassVar[str] = ""

    def apply(self, machine, *args) -> Any:
        machine.require_fitted(self.name)
        return getattr(machine.model, self.name)(machine.fitresult, *args)

    @property
    def label(self) -> str:
        return self.name


@dataclass(frozen=True)
class Predict(Operation):
    name: ClassVar[str] = "predict"


@dataclass(frozen=True)
class PredictMean(Operation):
    name: ClassVar[str] = "predict_mean"


@dataclass(frozen=True)
class PredictMode(Operation):
    name: ClassVar[str] = "predict_mode"


@dataclass(frozen=True)
class PredictMedian(Operation):
    name: ClassVar[str] = "predict_median"


@dataclass(frozen=True)
class Transform(Operation):
    name: ClassVar[str] = "transform"


@dataclass(frozen=True)
class InverseTransform(Operation):
    name: ClassVar[str] = "inverse_transform"


@dataclass(frozen=True)
class StaticApply(Operation):
    """A pure function of the evaluated arguments; no machine involved."""

    fn: Callable[..., Any] = None
    name: ClassVar[str] = "static"

    def apply(self, machine, *args) -> Any:
        return self.fn(*args)

    @property
    def label(self) -> str:
        return getattr(self.fn, "__name__", repr(self.fn))


DYNAMIC_OPERATIONS: Dict[str, Operation] = {
    op.name: op
    for op in (
        Predict(),
        PredictMean(),
        PredictMode(),
        PredictMedian(),
        Transform(),
        InverseTransform(),
    )
}


def resolve_operation(operation: Any, dynamic: bool) -> Operation:
    """
    Map what the user passed (variant, operation function, name or plain
    callable) onto an Operation variant.
    """
    if isinstance(operation, Operation):
        op = operation
    elif dynamic:
        key = operation if isinstance(operation, str) else getattr(operation, "__name__", None)
        if key not in DYNAMIC_OPERATIONS:
            raise TypeError(
                f"{operation!r} is not a machine operation. "
                f"Available: {', '.join(DYNAMIC_OPERATIONS)}"
            )
        op = DYNAMIC_OPERATIONS[key]
    elif callable(operation):
        op = StaticApply(operation)
    else:
        raise TypeError(f"Expected a callable or an Operation, got {type(operation).__name__}")

    if dynamic and isinstance(op, StaticApply):
        raise TypeError("A static operation cannot be bound to a machine")
    if not dynamic and not isinstance(op, StaticApply):
        raise TypeError(f"Operation '{op.name}' requires a machine")
    return op
