#!filepath: tests/test_replace.py
import numpy as np
import pytest

from learnet import (
    Machine,
    MissingModelError,
    MissingSourceError,
    NetworkError,
    Source,
    fit,
    inverse_transform,
    predict,
    replace,
    source,
    transform,
)
from fakes import Centerer, MeanRegressor


@pytest.fixture
def network(table, target):
    Xs, ys = source(table), source(target)
    t = Machine(Centerer(tag="t"), Xs)
    Xt = transform(t, Xs)
    r = Machine(MeanRegressor(tag="r"), Xt, ys)
    yhat = predict(r, Xt)
    return Xs, ys, t, r, yhat


def test_replace_sources_and_models(network, table, target):
    Xs, ys, t, r, yhat = network
    X2, y2 = source(table * 2), source(target * 3)
    r2 = MeanRegressor(tag="r2", shift=1.0)

    clone = replace(yhat, (Xs, X2), (ys, y2), (r.model, r2))

    assert clone is not yhat
    assert {s.uid for s in clone.sources()} == {X2.uid, y2.uid}
    assert any(m is r2 for m in clone.models())
    assert not any(m is t.model for m in clone.models())
    assert all(not m.is_trained for m in clone.machines())
    assert {m.uid for m in clone.machines()}.isdisjoint({t.uid, r.uid})

    fit(clone)
    assert clone()[0] == pytest.approx(3 * target.mean() + 1.0)
    assert not r.is_trained


def test_replace_accepts_a_mapping(network, table, target):
    Xs, ys, t, r, yhat = network
    X2, y2 = source(table), source(target)
    clone = replace(yhat, {Xs: X2, ys: y2})
    assert {s.uid for s in clone.sources()} == {X2.uid, y2.uid}


def test_unsubstituted_models_are_copied(network, table, target):
    Xs, ys, t, r, yhat = network
    clone = replace(yhat, (Xs, source(table)), (ys, source(target)))

    copies = clone.models()
    assert copies == [t.model, r.model]
    assert all(c is not m for c, m in zip(copies, [t.model, r.model]))


def test_unsubstituted_sources_are_duplicated_with_warning(network, log_records):
    Xs, ys, t, r, yhat = network
    clone = replace(yhat, (r.model, MeanRegressor()))

    new_sources = clone.sources()
    assert {s.uid for s in new_sources}.isdisjoint({Xs.uid, ys.uid})
    assert new_sources[0]().equals(Xs())
    assert new_sources[0]() is not Xs()
    assert any("Data there will be duplicated" in msg for msg in log_records)


def test_duplicate_source_warning_can_be_disabled(network, log_records, monkeypatch):
    from learnet import config

    monkeypatch.setattr(config.settings.network, "warn_on_source_copy", False)
    *_, yhat = network
    replace(yhat)
    assert not any("duplicated" in msg for msg in log_records)


def test_shared_machine_stays_shared(table):
    Xs = source(table)
    t = Machine(Centerer(), Xs)
    back = inverse_transform(t, transform(t, Xs))

    clone = replace(back, (Xs, source(table)))

    assert len(clone.machines()) == 1
    assert clone.machines()[0] is not t


def test_frozen_flag_is_carried(network, table, target):
    Xs, ys, t, r, yhat = network
    t.freeze()
    clone = replace(yhat, (Xs, source(table)), (ys, source(target)))

    frozen = [m.frozen for m in clone.machines()]
    assert frozen == [True, False]


def test_replace_errors(network):
    Xs, ys, t, r, yhat = network

    with pytest.raises(MissingSourceError):
        replace(yhat, (Source([1]), source([2])))
    with pytest.raises(MissingModelError):
        replace(yhat, (MeanRegressor(), MeanRegressor()))
    with pytest.raises(TypeError):
        replace(yhat, (Xs, [1, 2]))
    with pytest.raises(TypeError):
        replace(yhat, (r.model, "not a model"))
    with pytest.raises(TypeError):
        replace(yhat, ("x", "y"))
    with pytest.raises(NetworkError):
        replace(Xs, (Xs, source([1])))


def test_model_lookup_is_by_identity(network):
    """An equal but distinct model is not a model of the network."""
    Xs, ys, t, r, yhat = network
    twin = MeanRegressor(tag="r")
    assert twin == r.model

    with pytest.raises(MissingModelError):
        replace(yhat, (twin, MeanRegressor()))
