from __future__ import annotations

from typing import Any, List

from learnet.network.abstract import AbstractNode
from learnet.utils.tables import selectrows


class Source(AbstractNode):
    """
    Source: graph leaf wrapping training data (table, vector, ...).

        Xs()         -> X
        Xs(rows=r)   -> selectrows(X, r)
        Xs(Xnew)     -> Xnew

    A source is never stale. Rebinding the payload does not make
    dependents stale: retrain with force=True if the data changed meaning.
    """

    def __init__(self, data: Any):
        super().__init__()
        self.data = data

    def rebind(self, data: Any) -> "Source":
        """Attach new data in place; identity preserved."""
        self.data = data
        return self

    def evaluate(self, rows: Any = None) -> Any:
        return selectrows(self.data, rows)

    def evaluate_on(self, Xnew: Any) -> Any:
        return Xnew

    def is_stale(self) -> bool:
        return False

    def state(self) -> int:
        return 0

    @property
    def origins(self) -> List["Source"]:
        return [self]

    def tape(self) -> List[AbstractNode]:
        return [self]

    def __repr__(self) -> str:
        return f"Source @ {self.uid}"


def source(X: Any) -> Source:
    """Wrap data in a Source; a Source is returned unchanged."""
    if isinstance(X, Source):
        return X
    return Source(X)


def rebind(s: Source, X: Any) -> Source:
    return s.rebind(X)
