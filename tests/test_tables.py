#!filepath: tests/test_tables.py
import numpy as np
import pandas as pd

from learnet.utils.tables import nrows, rows_key, selectrows


def test_selectrows_none_returns_input(table):
    assert selectrows(table, None) is table


def test_selectrows_pandas_is_positional():
    s = pd.Series([10, 20, 30], index=["a", "b", "c"])
    out = selectrows(s, [2, 0])
    assert list(out) == [30, 10]


def test_selectrows_numpy_and_slices():
    X = np.arange(12).reshape(6, 2)
    np.testing.assert_array_equal(selectrows(X, [1, 3]), X[[1, 3]])
    np.testing.assert_array_equal(selectrows(X, slice(0, 2)), X[:2])
    np.testing.assert_array_equal(selectrows(X, range(2)), X[:2])


def test_selectrows_plain_sequences():
    assert selectrows(["a", "b", "c"], [0, 2]) == ["a", "c"]
    assert selectrows(("a", "b", "c"), slice(1, None)) == ["b", "c"]


def test_nrows():
    assert nrows(None) == 0
    assert nrows([1, 2, 3]) == 3
    assert nrows(np.zeros((4, 2))) == 4
    assert nrows(pd.DataFrame({"a": [1, 2]})) == 2


def test_rows_key_normalises_equivalent_selections():
    assert rows_key(None) is None
    assert rows_key([1, 2]) == rows_key(np.array([1, 2]))
    assert rows_key(range(3)) == rows_key([0, 1, 2])
    assert rows_key(slice(0, 5)) == ("slice", 0, 5, None)
    assert rows_key([1, 2]) != rows_key([2, 1])


def test_selectrows_boolean_mask_on_every_payload():
    mask = [True, False, True]
    assert selectrows(["a", "b", "c"], mask) == ["a", "c"]
    np.testing.assert_array_equal(selectrows(np.array([1, 2, 3]), mask), [1, 3])
    assert list(selectrows(pd.Series([1, 2, 3]), mask)) == [1, 3]


def test_rows_key_mask_is_keyed_by_positions():
    mask = [False, True, False, False]
    assert rows_key(mask) == rows_key([1])
    assert rows_key(mask) != rows_key([0, 1, 0, 0])
    assert rows_key(np.array(mask)) == (1,)


def test_selectrows_empty_selection():
    assert selectrows([1, 2], []) == []
    assert len(selectrows(pd.DataFrame({"a": [1, 2]}), [])) == 0
