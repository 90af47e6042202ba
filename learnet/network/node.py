from __future__ import annotations

from typing import Any, List, Optional, Tuple

import numpy as np

from learnet import config
from learnet.network.abstract import AbstractNode
from learnet.network.machine import Machine
from learnet.network.operations import Operation, StaticApply, resolve_operation
from learnet.network.source import Source
from learnet.utils.errors import EmptyArgsError, MultipleOriginsError
from learnet.utils.logger import logs


def _merge(tape: List[AbstractNode], seen: set, more: List[AbstractNode]) -> None:
    """Append the elements of ``more`` not already on ``tape`` (by handle)."""
    for n in more:
        if n.uid not in seen:
            seen.add(n.uid)
            tape.append(n)


class Node(AbstractNode):
    """
    Node: deferred computation.

    Static node  (machine is None):
        N()        = f(args[0](), ..., args[n]())
        N(rows=r)  = f(args[0](rows=r), ..., args[n](rows=r))
        N(X)       = f(args[0](X), ..., args[n](X))

    Dynamic node (bound to a machine):
        J()        = op(machine, args[0](), ..., args[n]())
        ...

    Call-time edges (``args``) are re-evaluated on every call. Training
    edges (``machine.args``) are only followed by the scheduler.
    Nodes are immutable once built.
    """

    def __init__(self, operation: Any, machine: Optional[Machine] = None, *args: AbstractNode):
        super().__init__()

        if machine is not None and not isinstance(machine, Machine):
            raise TypeError(f"Expected a Machine or None, got {type(machine).__name__}")
        if machine is None and not args:
            raise EmptyArgsError(
                "`args` in `node(f, args...)` must be non-empty for a static operation."
            )
        for arg in args:
            if not isinstance(arg, AbstractNode):
                raise TypeError(
                    f"Node arguments must be nodes or sources, got {type(arg).__name__}"
                )

        self.operation: Operation = resolve_operation(operation, dynamic=machine is not None)
        self.machine: Optional[Machine] = machine
        self.args: Tuple[AbstractNode, ...] = tuple(args)

        # origins: sources reachable through call-time edges only
        origins: List[Source] = []
        seen_origins: set = set()
        for arg in self.args:
            for s in arg.origins:
                if s.uid not in seen_origins:
                    seen_origins.add(s.uid)
                    origins.append(s)
        self._origins = origins

        if len(origins) > 1 and config.settings.network.warn_on_multiple_origins:
            logs.warning(
                f"[Node] A node referencing multiple origins when called "
                f"has been defined: {origins}."
            )

        # tape: call-time args, then training args, then self
        upstream: List[AbstractNode] = []
        seen: set = set()
        for arg in self.args:
            _merge(upstream, seen, arg.tape())
        if machine is not None:
            for arg in machine.args:
                _merge(upstream, seen, arg.tape())
        self._upstream = upstream

    # --------------------------------------------------
    # Graph structure
    # --------------------------------------------------
    @property
    def origins(self) -> List[Source]:
        return list(self._origins)

    def tape(self) -> List[AbstractNode]:
        return [*self._upstream, self]

    # --------------------------------------------------
    # Staleness
    # --------------------------------------------------
    def is_stale(self) -> bool:
        return (self.machine is not None and self.machine.is_stale()) or any(
            arg.is_stale() for arg in self.args
        )

    def state(self) -> Tuple[Any, ...]:
        """(machine fit counter, call-time arg states, training arg states)"""
        if self.machine is None:
            return 0, tuple(arg.state() for arg in self.args), ()
        return (
            self.machine.state,
            tuple(arg.state() for arg in self.args),
            tuple(arg.state() for arg in self.machine.args),
        )

    # --------------------------------------------------
    # Evaluation
    # --------------------------------------------------
    def evaluate(self, rows: Any = None) -> Any:
        if self.machine is not None:
            self.machine.require_fitted(self.operation.name)
        values = [arg.evaluate(rows=rows) for arg in self.args]
        return self.operation.apply(self.machine, *values)

    def evaluate_on(self, Xnew: Any) -> Any:
        if len(self._origins) != 1:
            raise MultipleOriginsError(
                f"{self!r} has {len(self._origins)} origins {self._origins}; "
                "only nodes with a unique origin are callable on new data. "
                "Use node.origins to inspect."
            )
        if self.machine is not None:
            self.machine.require_fitted(self.operation.name)
        values = [arg.evaluate_on(Xnew) for arg in self.args]
        return self.operation.apply(self.machine, *values)

    # --------------------------------------------------
    # Training
    # --------------------------------------------------
    def fit(self, rows: Any = None, verbosity: Optional[int] = None, force: bool = False, inst=None) -> "Node":
        from learnet.network.scheduler import fit

        return fit(self, rows=rows, verbosity=verbosity, force=force, inst=inst)

    # --------------------------------------------------
    # Hyperparameter access through the owning machine
    # --------------------------------------------------
    def __getitem__(self, name: str) -> Any:
        if self.machine is None:
            raise KeyError(f"{self!r} is a static node and has no model")
        return getattr(self.machine.model, name)

    def __setitem__(self, name: str, value: Any) -> None:
        if self.machine is None:
            raise KeyError(f"{self!r} is a static node and has no model")
        setattr(self.machine.model, name, value)

    # --------------------------------------------------
    # Display
    # --------------------------------------------------
    def describe(self) -> str:
        parts = []
        if self.machine is not None:
            parts.append(repr(self.machine))
        parts.extend(
            repr(arg) if isinstance(arg, Source) else arg.describe() for arg in self.args
        )
        return f"{self.operation.label}({', '.join(parts)})"

    def __repr__(self) -> str:
        return f"Node @ {self.uid}"

    def __str__(self) -> str:
        return f"Node @ {self.uid} = {self.describe()}"


def node(operation: Any, *args: Any) -> Node:
    """
    N = node(f, args...)               static node
    J = node(predict, mach, args...)   dynamic node

    ``operation`` may be an Operation variant, one of the operation
    functions (predict, transform, ...), or its name.
    """
    if args and isinstance(args[0], Machine):
        return Node(operation, args[0], *args[1:])
    return Node(operation, None, *args)


# ------------------------------------------------------------------
# Static sugar
# ------------------------------------------------------------------
def log(X: AbstractNode) -> Node:
    return node(StaticApply(np.log), X)


def exp(X: AbstractNode) -> Node:
    return node(StaticApply(np.exp), X)


def _to_matrix(X: Any) -> np.ndarray:
    if hasattr(X, "to_numpy"):
        return X.to_numpy()
    return np.asarray(X)


def matrix(X: AbstractNode) -> Node:
    return node(_to_matrix, X)
