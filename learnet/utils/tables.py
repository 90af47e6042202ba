# learnet/utils/tables.py
from __future__ import annotations

from typing import Any, Hashable

import numpy as np
import pandas as pd


def selectrows(X: Any, rows: Any) -> Any:
    """
    Row selection shared by sources and machines.

    - rows is None      -> X unchanged (all rows)
    - pandas objects    -> positional .iloc
    - numpy arrays      -> fancy / slice indexing on axis 0
    - None payload      -> None (anonymized source)
    - other sequences   -> list of selected items
    """
    if rows is None or X is None:
        return X

    if isinstance(X, (pd.DataFrame, pd.Series)):
        return X.iloc[_as_indexer(rows)]

    if isinstance(X, np.ndarray):
        return X[_as_indexer(rows)]

    if isinstance(rows, slice):
        return list(X[rows])

    return [X[i] for i in _as_indexer(rows)]


def nrows(X: Any) -> int:
    if X is None:
        return 0
    if isinstance(X, (pd.DataFrame, pd.Series, np.ndarray)):
        return int(X.shape[0])
    return len(X)


def rows_key(rows: Any) -> Hashable:
    """
    Normalise a row selection to a hashable value so that two selections
    picking the same rows compare equal.
    """
    if rows is None:
        return None
    if isinstance(rows, slice):
        return ("slice", rows.start, rows.stop, rows.step)
    return tuple(int(i) for i in _as_indexer(rows).ravel())


# ------------------------------------------------------------------
# Internal
# ------------------------------------------------------------------
def _as_indexer(rows: Any):
    """slice unchanged, anything else as integer positions (masks included)"""
    if isinstance(rows, slice):
        return rows
    arr = np.asarray(rows)
    if arr.dtype == bool:
        return np.flatnonzero(arr)
    if arr.size == 0:
        return arr.astype(int)
    return arr
