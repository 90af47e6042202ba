#!filepath: tests/test_source.py
import numpy as np
import pandas as pd

from learnet import Source, rebind, source


def test_source_call_forms(table):
    Xs = source(table)

    assert Xs() is table
    pd.testing.assert_frame_equal(Xs(rows=[0, 2]), table.iloc[[0, 2]])

    Xnew = table.head(3)
    assert Xs(Xnew) is Xnew


def test_source_of_source_is_identity(table):
    Xs = source(table)
    assert source(Xs) is Xs


def test_rebind_keeps_identity():
    Xs = Source([1, 2, 3])
    uid = Xs.uid

    out = rebind(Xs, [4, 5])

    assert out is Xs
    assert Xs.uid == uid
    assert Xs() == [4, 5]


def test_source_is_never_stale():
    Xs = source(np.zeros(3))
    assert Xs.is_stale() is False
    Xs.rebind(np.ones(3))
    assert Xs.is_stale() is False
    assert Xs.state() == 0


def test_source_graph_queries():
    Xs = source([1, 2])
    assert Xs.origins == [Xs]
    assert Xs.tape() == [Xs]
    assert Xs.nodes() == [Xs]
    assert Xs.machines() == []


def test_source_repr_uses_handle():
    a, b = source(1), source(2)
    assert repr(a) == f"Source @ {a.uid}"
    assert a.uid != b.uid


def test_anonymized_source_evaluates_to_none():
    Xs = source(np.arange(4))
    Xs.rebind(None)
    assert Xs() is None
    assert Xs(rows=[1]) is None
