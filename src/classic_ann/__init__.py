"""Backpropagation network and self-organizing map written in plain Python."""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING

from .backprop import BackpropNetwork, BNode, TrainingHistory, TrainingPattern
from .config import BackpropConfig, SOMConfig
from .errors import ConfigurationMismatchError, DimensionMismatchError, NetworkError
from .math_utils import euclidean_distance, sigmoid
from .schedules import ExponentialDecay, som_time_constant
from .som import SOMNetwork, SOMNode, SOMTrainingHistory

if TYPE_CHECKING:  # pragma: no cover - import-time hinting only
    from .visualization import plot_som, plot_training_history, u_matrix

__all__ = [
    "BackpropConfig",
    "BackpropNetwork",
    "BNode",
    "ConfigurationMismatchError",
    "DimensionMismatchError",
    "ExponentialDecay",
    "NetworkError",
    "SOMConfig",
    "SOMNetwork",
    "SOMNode",
    "SOMTrainingHistory",
    "TrainingHistory",
    "TrainingPattern",
    "euclidean_distance",
    "plot_som",
    "plot_training_history",
    "sigmoid",
    "som_time_constant",
    "u_matrix",
]


def __getattr__(name: str):  # pragma: no cover - small wrapper
    if name in {"plot_som", "plot_training_history", "u_matrix"}:
        return getattr(import_module("classic_ann.visualization"), name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
