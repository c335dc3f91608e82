"""Configuration dataclasses for the backpropagation network and the SOM."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class BackpropConfig:
    """Configuration controlling the layout and learning rates of a backprop network.

    Parameters
    ----------
    input_count:
        Number of values in every input vector.
    hidden_count:
        Size of the hidden layer. Larger values increase model capacity.
    output_count:
        Number of output units. Each unit is an independent sigmoid.
    hidden_learning_rate:
        Step size applied to the input-to-hidden weights and to the hidden
        thresholds.
    output_learning_rate:
        Step size applied to the hidden-to-output weights and to the output
        thresholds.
    seed:
        Optional random seed used for the initial weights and thresholds.
        Setting the seed makes construction reproducible.
    """

    input_count: int
    hidden_count: int
    output_count: int
    hidden_learning_rate: float = 0.15
    output_learning_rate: float = 0.2
    seed: int | None = None


@dataclass(slots=True)
class SOMConfig:
    """Configuration for a rectangular self-organizing map.

    ``feature_size`` is the length of the vectors the map is matched against and
    ``prototype_size`` the length of the label vectors it answers with.
    """

    height: int
    width: int
    feature_size: int
    prototype_size: int
    learning_rate: float = 0.05
    seed: int | None = None
