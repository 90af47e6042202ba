"""
Learning networks
=================

- Source     : leaf wrapping (rebindable) data
- Machine    : model + training nodes + cached fit result
- Node       : deferred computation, static or bound to a machine
- fit        : pull scheduler retraining stale machines in tape order
- replace    : clone a network with substituted sources / models
- from_network : export a network as a reusable composite model
"""
from .source import Source, source, rebind
from .machine import FitOutcome, Machine, machine
from .node import Node, node, log, exp, matrix
from .operations import (
    Operation,
    Predict,
    PredictMean,
    PredictMode,
    PredictMedian,
    Transform,
    InverseTransform,
    StaticApply,
)
from .sugar import (
    predict,
    predict_mean,
    predict_mode,
    predict_median,
    transform,
    inverse_transform,
)
from .scheduler import FitSummary, fit
from .replace import replace
from .composites import (
    AnonymizedCache,
    SupervisedNetwork,
    UnsupervisedNetwork,
    anonymize,
    fitresults,
    from_network,
    network_fitted_params,
    network_report,
)

__all__ = [
    "Source", "source", "rebind",
    "FitOutcome", "Machine", "machine",
    "Node", "node", "log", "exp", "matrix",
    "Operation", "Predict", "PredictMean", "PredictMode", "PredictMedian",
    "Transform", "InverseTransform", "StaticApply",
    "predict", "predict_mean", "predict_mode", "predict_median",
    "transform", "inverse_transform",
    "FitSummary", "fit",
    "replace",
    "AnonymizedCache", "SupervisedNetwork", "UnsupervisedNetwork",
    "anonymize", "fitresults", "from_network",
    "network_fitted_params", "network_report",
]
