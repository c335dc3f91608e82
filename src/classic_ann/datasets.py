"""Small datasets used by the demos and the convergence tests."""

from __future__ import annotations

import math

from .backprop import TrainingPattern

Vector = list[float]


def binary_digits(value: int, width: int) -> Vector:
    """Encode ``value`` as ``width`` binary digits, most significant first."""

    if value < 0:
        raise ValueError("value must be non-negative")
    if value >= 1 << width:
        raise ValueError(f"{value} does not fit in {width} binary digits")
    return [float((value >> shift) & 1) for shift in range(width - 1, -1, -1)]


def is_prime(n: int) -> bool:
    if n < 2:
        return False
    if n % 2 == 0:
        return n == 2
    for divisor in range(3, math.isqrt(n) + 1, 2):
        if n % divisor == 0:
            return False
    return True


def primes_below(limit: int) -> list[int]:
    return [n for n in range(limit) if is_prime(n)]


def prime_patterns(limit: int = 1000, width: int = 10) -> list[TrainingPattern]:
    """Label the binary encoding of every integer below ``limit`` with whether it is prime."""

    return [
        TrainingPattern(binary_digits(n, width), [1.0 if is_prime(n) else 0.0])
        for n in range(limit)
    ]


def ramp_patterns() -> tuple[list[Vector], list[Vector]]:
    """Three well separated 10-wide patterns paired with one-hot labels."""

    features = [
        [0.9, 0.8, 0.7, 0.6, 0.5, 0.4, 0.3, 0.2, 0.1, 0.0],
        [0.0, 0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9],
        [0.1, 0.2, 0.3, 0.4, 0.5, 0.5, 0.4, 0.3, 0.2, 0.1],
    ]
    prototypes = [
        [1.0, 0.0, 0.0],
        [0.0, 1.0, 0.0],
        [0.0, 0.0, 1.0],
    ]
    return features, prototypes


def noisy_ramp_patterns() -> list[Vector]:
    """Distorted copies of :func:`ramp_patterns`, in the same order."""

    return [
        [0.9, 0.8, 0.3, 0.4, 0.4, 0.5, 0.4, 0.3, 0.2, 0.4],
        [0.1, 0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.8],
        [0.1, 0.2, 0.3, 0.4, 0.6, 0.6, 0.4, 0.3, 0.2, 0.1],
    ]


__all__ = [
    "binary_digits",
    "is_prime",
    "primes_below",
    "prime_patterns",
    "ramp_patterns",
    "noisy_ramp_patterns",
]
