from .base import Deterministic, Model, Probabilistic, Supervised, Unsupervised

__all__ = ["Model", "Supervised", "Deterministic", "Probabilistic", "Unsupervised"]
