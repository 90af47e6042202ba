#!filepath: learnet/__init__.py

from .utils.logger import Logging, logs, init_logging
from . import config
from .config import AppConfig, configure
from .utils import errors
from .utils.errors import (
    NetworkError,
    ArityError,
    EmptyArgsError,
    UntrainedError,
    MultipleOriginsError,
    MissingSourceError,
    MissingModelError,
)
from .models import Model, Supervised, Deterministic, Probabilistic, Unsupervised
from .network import *  # noqa: F401,F403
from .network import __all__ as _network_all
from .observability import Instrumentation, NoOpInstrumentation
from .models import builtins

__all__ = [
    "logs", "Logging", "init_logging",
    "config", "AppConfig", "configure",
    "errors",
    "NetworkError", "ArityError", "EmptyArgsError", "UntrainedError",
    "MultipleOriginsError", "MissingSourceError", "MissingModelError",
    "Model", "Supervised", "Deterministic", "Probabilistic", "Unsupervised",
    "Instrumentation", "NoOpInstrumentation",
    "builtins",
    *_network_all,
]
