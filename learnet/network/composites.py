"""
Learning networks exported as stand-alone models.

Two ways to export a network:

1. By hand: subclass ``SupervisedNetwork`` / ``UnsupervisedNetwork``,
   build the network inside ``fit`` from fresh sources, call the
   scheduler, and ``return fitresults(Xs, ys, yhat)``.

2. With the builder: ``from_network(yhat, Xs, ys, regressor=ridge, ...)``
   turns an existing network into a composite whose ``fit`` clones the
   network (``replace``) onto new data and new component models.

In both cases the fit result *is* the terminal node of a private
network, and the cache holds its source data detached from the sources
(``anonymize``) until the next ``update``.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from pydantic import Field, PrivateAttr

from learnet.models.base import Model, Supervised, Unsupervised
from learnet.network.abstract import AbstractNode
from learnet.network.node import Node
from learnet.network.replace import replace
from learnet.network.scheduler import fit as fit_network
from learnet.network.source import Source, source
from learnet.utils.errors import ArityError, MissingModelError, MissingSourceError, NetworkError


# ============================================================
# Anonymized cache
# ============================================================
@dataclass
class AnonymizedCache:
    sources: Tuple[Source, ...]
    data: Tuple[Any, ...]

    def reattach(self) -> None:
        for s, d in zip(self.sources, self.data):
            s.rebind(d)

    def detach(self) -> None:
        for s in self.sources:
            s.rebind(None)


def anonymize(*sources: Source) -> AnonymizedCache:
    """
    Capture the payloads of ``sources`` and clear the sources.
    """
    cache = AnonymizedCache(sources=tuple(sources), data=tuple(s.data for s in sources))
    cache.detach()
    return cache


# ============================================================
# Network-wide reports
# ============================================================
def network_report(N: AbstractNode) -> Dict[str, Any]:
    machs = N.machines()
    return {"machines": machs, "reports": [m.report for m in machs]}


def network_fitted_params(N: AbstractNode) -> Dict[str, Any]:
    machs = N.machines()
    return {"machines": machs, "fitted_params": [m.fitted_params() for m in machs]}


def fitresults(*args: AbstractNode) -> Tuple[Node, AnonymizedCache, Dict[str, Any]]:
    """
    fitresults(Xs, yhat)      unsupervised
    fitresults(Xs, ys, yhat)  supervised

    What the fit method of an exported network returns.
    """
    *sources, N = args
    report = network_report(N)
    cache = anonymize(*sources)
    return N, cache, report


# ============================================================
# Base classes
# ============================================================
class _NetworkMixin:
    """Shared fall-backs for models whose fit result is a network node."""

    def component_models(self) -> list:
        out = []
        for name in type(self).model_fields:
            value = getattr(self, name)
            if isinstance(value, Model):
                out.append(value)
            elif isinstance(value, dict):
                out.extend(v for v in value.values() if isinstance(v, Model))
        return out

    def update(self, verbosity: int, fitresult: Node, cache: Any, *args):
        # a component swapped for a new object is not wired into the network
        bound = fitresult.models()
        if not all(any(m is b for b in bound) for m in self.component_models()):
            return self.fit(verbosity, *args)

        anonymised = isinstance(cache, AnonymizedCache)
        if anonymised:
            cache.reattach()
        try:
            fit_network(fitresult, verbosity=verbosity)
        finally:
            if anonymised:
                cache.detach()

        return fitresult, cache, network_report(fitresult)

    def fitted_params(self, fitresult: Node) -> Dict[str, Any]:
        return network_fitted_params(fitresult)


class SupervisedNetwork(_NetworkMixin, Supervised):
    def predict(self, fitresult: Node, Xnew: Any) -> Any:
        return fitresult(Xnew)


class UnsupervisedNetwork(_NetworkMixin, Unsupervised):
    def transform(self, fitresult: Node, Xnew: Any) -> Any:
        return fitresult(Xnew)


# ============================================================
# Builder
# ============================================================
def supervised_fit_method(
    network_Xs: Source,
    network_ys: Source,
    network_N: Node,
    network_models: Dict[str, Model],
) -> Callable:

    def fit(model: "ExportedSupervisedNetwork", verbosity: int, X: Any, y: Any, *more: Any):
        if more:
            raise ArityError(
                f"{model.name} was exported with one input and one target source; "
                f"got {len(more)} extra training argument(s)."
            )
        Xs = source(X)
        ys = source(y)
        replacements = [(network_models[k], model.components[k]) for k in network_models]
        replacements += [(network_Xs, Xs), (network_ys, ys)]
        yhat = replace(network_N, *replacements)

        if {s.uid for s in yhat.sources()} != {Xs.uid, ys.uid}:
            raise NetworkError("Failed to replace sources in network blueprint.")

        fit_network(yhat, verbosity=verbosity)
        return fitresults(Xs, ys, yhat)

    return fit


def unsupervised_fit_method(
    network_Xs: Source,
    network_N: Node,
    network_models: Dict[str, Model],
) -> Callable:

    def fit(model: "ExportedUnsupervisedNetwork", verbosity: int, X: Any):
        Xs = source(X)
        replacements = [(network_models[k], model.components[k]) for k in network_models]
        replacements.append((network_Xs, Xs))
        Xout = replace(network_N, *replacements)

        if {s.uid for s in Xout.sources()} != {Xs.uid}:
            raise NetworkError("Failed to replace sources in network blueprint.")

        fit_network(Xout, verbosity=verbosity)
        return fitresults(Xs, Xout)

    return fit


class _Exported:
    """Composite produced by ``from_network``; components keyed by field name."""

    def fit(self, verbosity: int, *args):
        if self._fit_method is None:
            raise NetworkError(
                f"{self.name} has no network blueprint; build it with from_network"
            )
        return self._fit_method(self, verbosity, *args)

    def __getitem__(self, name: str) -> Model:
        return self.components[name]


class ExportedSupervisedNetwork(_Exported, SupervisedNetwork):
    name: str = "Composite"
    components: Dict[str, Model] = Field(default_factory=dict)
    _fit_method: Optional[Callable] = PrivateAttr(default=None)


class ExportedUnsupervisedNetwork(_Exported, UnsupervisedNetwork):
    name: str = "Composite"
    components: Dict[str, Model] = Field(default_factory=dict)
    _fit_method: Optional[Callable] = PrivateAttr(default=None)


def from_network(
    N: Node,
    Xs: Source,
    ys: Optional[Source] = None,
    name: str = "Composite",
    **components: Model,
):
    """
    Export the learning network terminating at ``N`` as a new model.

    composite = from_network(yhat, Xs, ys, regressor=ridge, transformer=std)

    ``Xs`` (and ``ys`` for a supervised export) are the input sources of
    the network; each keyword names a model of the network that becomes
    a hyperparameter of the composite, defaulting to a deep copy of it.
    Training the composite replays the network on fresh sources with the
    composite's current components.
    """
    if not isinstance(N, Node):
        raise TypeError(f"{type(N).__name__} given where Node was expected.")

    source_uids = {s.uid for s in N.sources()}
    if not isinstance(Xs, Source) or Xs.uid not in source_uids:
        raise MissingSourceError(f"Specified input source {Xs!r} is not a source of {N!r}.")
    if ys is not None and (not isinstance(ys, Source) or ys.uid not in source_uids):
        raise MissingSourceError(f"Specified target source {ys!r} is not a source of {N!r}.")

    models_ = N.models()
    for key, model in components.items():
        if not any(m is model for m in models_):
            raise MissingModelError(
                f"Component '{key}' is not a model of the learning network terminating at {N!r}. "
                "Use node.models() to inspect models."
            )

    network_models = dict(components)
    defaults = {k: copy.deepcopy(m) for k, m in components.items()}

    if ys is None:
        composite = ExportedUnsupervisedNetwork(name=name, components=defaults)
        composite._fit_method = unsupervised_fit_method(Xs, N, network_models)
    else:
        composite = ExportedSupervisedNetwork(name=name, components=defaults)
        composite._fit_method = supervised_fit_method(Xs, ys, N, network_models)

    return composite
