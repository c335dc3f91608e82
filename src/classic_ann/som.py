"""Self-organizing map trained by competitive learning with a Gaussian neighborhood."""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
import random
from typing import Iterable, Sequence

from tqdm.auto import tqdm

from .config import SOMConfig
from .errors import ConfigurationMismatchError, DimensionMismatchError
from .math_utils import euclidean_distance, grid_distance
from .schedules import ExponentialDecay, som_time_constant

logger = logging.getLogger(__name__)

Vector = list[float]


@dataclass
class SOMTrainingHistory:
    """Per-epoch neighborhood radius and learning rate used by :meth:`SOMNetwork.train`."""

    radii: list[float] = field(default_factory=list)
    learning_rates: list[float] = field(default_factory=list)


class SOMNode:
    """Map cell holding a feature vector ``fv`` and a prototype vector ``pv``."""

    __slots__ = ("fv", "pv", "_x", "_y")

    def __init__(self, fv: Vector, pv: Vector, x: int, y: int) -> None:
        self.fv = fv
        self.pv = pv
        self._x = x
        self._y = y

    @property
    def x(self) -> int:
        return self._x

    @property
    def y(self) -> int:
        return self._y

    def __str__(self) -> str:
        fv = "".join(f"{value:.2f}, " for value in self.fv)
        pv = "".join(f"{value:.2f}, " for value in self.pv)
        return f"Node FV [{fv}] PV [{pv}]"

    def __repr__(self) -> str:
        return f"SOMNode(x={self._x}, y={self._y})"


class SOMNetwork:
    """Rectangular self-organizing map.

    Nodes are stored row-major, so the node in column ``x`` of row ``y`` sits at
    index ``y * width + x``. Each node carries a feature vector used for matching
    and a prototype vector returned by :meth:`predict`. Training pulls the best
    matching node and its grid neighbors towards every training pair; both the
    neighborhood radius and the learning rate decay exponentially with the epoch.
    """

    def __init__(
        self,
        height: int,
        width: int,
        feature_size: int,
        prototype_size: int,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.height = height
        self.width = width
        self.feature_size = feature_size
        self.prototype_size = prototype_size
        self.radius = (height + width) // 2
        self.learning_rate = 0.05
        self.nodes: list[SOMNode] = []
        for y in range(height):
            for x in range(width):
                fv = [self.rng.random() for _ in range(feature_size)]
                pv = [self.rng.random() for _ in range(prototype_size)]
                self.nodes.append(SOMNode(fv, pv, x, y))

    @classmethod
    def from_config(cls, config: SOMConfig) -> "SOMNetwork":
        som = cls(
            config.height,
            config.width,
            config.feature_size,
            config.prototype_size,
            rng=random.Random(config.seed),
        )
        som.learning_rate = config.learning_rate
        return som

    def node_at(self, x: int, y: int) -> SOMNode:
        """Return the node in column ``x`` of row ``y``."""

        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"grid cell ({x}, {y}) outside {self.width}x{self.height} map")
        return self.nodes[y * self.width + x]

    def best_match(self, target: Sequence[float]) -> int:
        """Return the index of the node whose feature vector is closest to ``target``.

        The scan starts from a bound of ``sqrt(feature_size)`` and index ``1``;
        only strictly closer nodes replace the current best, so ties resolve to
        the earliest node and a target no node beats maps to index ``1``.
        """

        minimum = math.sqrt(self.feature_size)
        minimum_index = 1
        for index, node in enumerate(self.nodes):
            distance = euclidean_distance(node.fv, target)
            if distance < minimum:
                minimum = distance
                minimum_index = index
        return minimum_index

    def train(
        self,
        iterations: int,
        feature_vectors: Sequence[Sequence[float]],
        prototype_vectors: Sequence[Sequence[float]],
        *,
        progress: bool = False,
    ) -> SOMTrainingHistory:
        """Train the map for ``iterations`` epochs over the paired vectors."""

        if len(feature_vectors) != len(prototype_vectors):
            raise ConfigurationMismatchError(len(feature_vectors), len(prototype_vectors))
        for index, (fv, pv) in enumerate(zip(feature_vectors, prototype_vectors)):
            if len(fv) != self.feature_size:
                raise DimensionMismatchError("feature", self.feature_size, len(fv), index)
            if len(pv) != self.prototype_size:
                raise DimensionMismatchError("prototype", self.prototype_size, len(pv), index)

        history = SOMTrainingHistory()
        if iterations <= 0 or not self.nodes:
            return history

        time_constant = som_time_constant(iterations, self.radius)
        radius_schedule = ExponentialDecay(float(self.radius), time_constant)
        rate_schedule = ExponentialDecay(self.learning_rate, time_constant)
        pairs = list(zip(feature_vectors, prototype_vectors))

        logger.debug(
            "training %dx%d SOM on %d patterns for %d iterations (radius %d, time constant %.3f)",
            self.height,
            self.width,
            len(pairs),
            iterations,
            self.radius,
            time_constant,
        )

        epochs: Iterable[int] = range(1, iterations + 1)
        if progress:
            epochs = tqdm(epochs, desc="SOM", unit="epoch")
        for epoch in epochs:
            radius = radius_schedule.value(epoch)
            rate = rate_schedule.value(epoch)
            history.radii.append(radius)
            history.learning_rates.append(rate)
            for fv_target, pv_target in pairs:
                self._update_neighborhood(epoch, radius, rate, fv_target, pv_target)

        logger.debug("SOM training finished, final radius %.4f", history.radii[-1])
        return history

    def _update_neighborhood(
        self,
        epoch: int,
        radius: float,
        rate: float,
        fv_target: Sequence[float],
        pv_target: Sequence[float],
    ) -> None:
        best = self.nodes[self.best_match(fv_target)]
        staged: list[tuple[SOMNode, Vector, Vector]] = []
        for node in self.nodes:
            distance = grid_distance(best.x, best.y, node.x, node.y)
            if distance >= radius:
                continue
            influence = math.exp(-(distance * distance) / (2.0 * radius * epoch))
            step = influence * rate
            fv = [value + step * (target - value) for value, target in zip(node.fv, fv_target)]
            pv = [value + step * (target - value) for value, target in zip(node.pv, pv_target)]
            staged.append((node, fv, pv))

        # Commit after the scan so every node above was updated from pre-update vectors.
        for node, fv, pv in staged:
            node.fv = fv
            node.pv = pv

    def predict(self, fv: Sequence[float]) -> list[float]:
        """Return the prototype vector of the best matching node."""

        return list(self.nodes[self.best_match(fv)].pv)

    def predict_class(self, fv: Sequence[float]) -> list[int]:
        """Return the best matching prototype as truncated percentages."""

        return [int(value * 100) for value in self.nodes[self.best_match(fv)].pv]

    def __repr__(self) -> str:
        return (
            f"SOMNetwork(height={self.height}, width={self.width}, "
            f"feature_size={self.feature_size}, prototype_size={self.prototype_size})"
        )
