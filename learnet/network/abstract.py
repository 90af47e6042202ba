from __future__ import annotations

import itertools
import operator
from typing import Any, List

# handles shared by sources, nodes and machines
_handles = itertools.count(1)


def next_handle() -> int:
    return next(_handles)


class AbstractNode:
    """
    Common surface of Source and Node.

    Calling behaviour:
        N()          -> N.evaluate()
        N(rows=r)    -> N.evaluate(rows=r)
        N(Xnew)      -> N.evaluate_on(Xnew)
    """

    def __init__(self):
        self.uid: int = next_handle()

    # --------------------------------------------------
    # Contract
    # --------------------------------------------------
    def evaluate(self, rows: Any = None) -> Any:
        raise NotImplementedError

    def evaluate_on(self, Xnew: Any) -> Any:
        raise NotImplementedError

    def is_stale(self) -> bool:
        raise NotImplementedError

    def state(self) -> Any:
        raise NotImplementedError

    @property
    def origins(self) -> List["AbstractNode"]:
        raise NotImplementedError

    def tape(self) -> List["AbstractNode"]:
        """All upstream nodes, this one last, in an order consistent with the DAG."""
        raise NotImplementedError

    def __call__(self, *args, rows: Any = None) -> Any:
        if not args:
            return self.evaluate(rows=rows)
        if len(args) > 1 or rows is not None:
            raise TypeError(
                f"{self!r} takes either new data or rows=..., not both"
            )
        return self.evaluate_on(args[0])

    # --------------------------------------------------
    # Queries over the tape
    # --------------------------------------------------
    def nodes(self) -> List["AbstractNode"]:
        return self.tape()

    def sources(self) -> list:
        from learnet.network.source import Source

        return [n for n in self.tape() if isinstance(n, Source)]

    def machines(self) -> list:
        """Distinct machines of the network, in tape order."""
        seen = set()
        out = []
        for n in self.tape():
            mach = getattr(n, "machine", None)
            if mach is None or mach.uid in seen:
                continue
            seen.add(mach.uid)
            out.append(mach)
        return out

    def models(self) -> list:
        """Distinct (by identity) models of the network, in tape order."""
        out = []
        for mach in self.machines():
            if not any(m is mach.model for m in out):
                out.append(mach.model)
        return out

    # --------------------------------------------------
    # Arithmetic sugar (static nodes)
    # --------------------------------------------------
    def __add__(self, other):
        from learnet.network.node import node

        if isinstance(other, AbstractNode):
            return node(operator.add, self, other)
        return node(_Shift(other), self)

    def __radd__(self, other):
        from learnet.network.node import node

        return node(_Shift(other), self)

    def __mul__(self, other):
        from learnet.network.node import node

        if isinstance(other, AbstractNode):
            return node(operator.mul, self, other)
        return node(_Scale(other), self)

    def __rmul__(self, other):
        from learnet.network.node import node

        return node(_Scale(other), self)


class _Shift:
    def __init__(self, value):
        self.value = value
        self.__name__ = f"shift({value!r})"

    def __call__(self, v):
        return self.value + v


class _Scale:
    def __init__(self, value):
        self.value = value
        self.__name__ = f"scale({value!r})"

    def __call__(self, v):
        return self.value * v
