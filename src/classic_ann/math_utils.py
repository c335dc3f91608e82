"""Mathematical helper utilities."""
from __future__ import annotations

import math
from typing import Sequence


def sigmoid(x: float) -> float:
    """Logistic activation ``1 / (1 + e^-x)``."""

    # math.exp overflows for large negative inputs; the limit is exactly zero.
    if x < -709.0:
        return 0.0
    return 1.0 / (1.0 + math.exp(-x))


def euclidean_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Compute the L2 distance between two vectors of equal length."""

    total = 0.0
    for va, vb in zip(a, b):
        diff = va - vb
        total += diff * diff
    return math.sqrt(total)


def grid_distance(x1: int, y1: int, x2: int, y2: int) -> float:
    dx = x1 - x2
    dy = y1 - y2
    return math.sqrt(dx * dx + dy * dy)
