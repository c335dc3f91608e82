"""Exponential decay schedules used by SOM training."""
from __future__ import annotations

from dataclasses import dataclass

import math


def som_time_constant(iterations: int, radius: float) -> float:
    """Return ``iterations / ln(radius)``.

    A radius of one or less has no positive logarithm, so the schedule degrades
    to a constant (infinite time constant) instead of dividing by zero.
    """

    if radius <= 1:
        return math.inf
    return iterations / math.log(radius)


@dataclass(slots=True)
class ExponentialDecay:
    """Schedule ``initial * exp(-step / time_constant)``.

    Parameters
    ----------
    initial:
        Value the schedule starts from at step ``0``.
    time_constant:
        Number of steps after which the value has shrunk by a factor ``e``.
        ``math.inf`` keeps the value constant.
    """

    initial: float
    time_constant: float

    def __post_init__(self) -> None:
        if self.time_constant <= 0:
            raise ValueError("time_constant must be positive")

    def value(self, step: int) -> float:
        """Return the decayed value for the provided step."""

        return self.initial * math.exp(-step / self.time_constant)

    def as_list(self, steps: int) -> list[float]:
        """Materialise steps ``1..steps`` for diagnostic or logging purposes."""

        return [self.value(step) for step in range(1, steps + 1)]
