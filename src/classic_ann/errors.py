"""Exceptions raised by the network entry points."""
from __future__ import annotations


class NetworkError(ValueError):
    """Base class for invalid training or prediction requests."""


class DimensionMismatchError(NetworkError):
    """A vector does not match the configured layer or map sizes."""

    def __init__(self, kind: str, expected: int, actual: int, index: int | None = None) -> None:
        self.kind = kind
        self.expected = expected
        self.actual = actual
        self.index = index
        where = "" if index is None else f" (pattern {index})"
        super().__init__(f"expected {kind} vector length {expected}, got {actual}{where}")


class ConfigurationMismatchError(NetworkError):
    """Feature and prototype pattern lists have different lengths."""

    def __init__(self, feature_count: int, prototype_count: int) -> None:
        self.feature_count = feature_count
        self.prototype_count = prototype_count
        super().__init__(
            f"got {feature_count} feature vectors but {prototype_count} prototype vectors"
        )


__all__ = ["NetworkError", "DimensionMismatchError", "ConfigurationMismatchError"]
