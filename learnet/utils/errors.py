# learnet/utils/errors.py
class NetworkError(RuntimeError):
    """
    Base class for every error raised by the learning network engine.
    Raised synchronously at the point of violation, never retried.
    """


class ArityError(NetworkError):
    """
    Machine constructed with a number of training arguments that does not
    match its model kind (supervised >= 2, unsupervised == 1).
    """


class EmptyArgsError(NetworkError):
    """Static node constructed without call-time arguments."""


class UntrainedError(NetworkError):
    """Operation applied through a machine that has never been fit."""


class MultipleOriginsError(NetworkError):
    """
    Node called on new data while it is reachable from more than one
    source (or from none) through call-time edges.
    """


class MissingSourceError(NetworkError):
    """Export substitution keyed on a source that is not in the network."""


class MissingModelError(NetworkError):
    """Export substitution keyed on a model that is not in the network."""
