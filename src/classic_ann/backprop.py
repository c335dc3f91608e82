"""Three-layer backpropagation network implemented with only the Python standard library."""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
import random
from typing import Iterable, NamedTuple, Sequence

from tqdm.auto import tqdm

from .config import BackpropConfig
from .errors import DimensionMismatchError
from .math_utils import sigmoid

logger = logging.getLogger(__name__)

Vector = list[float]


class TrainingPattern(NamedTuple):
    """Single block of inputs and the outputs the network should produce for them."""

    input: Sequence[float]
    output: Sequence[float]


@dataclass
class TrainingHistory:
    """Container storing metrics collected during :meth:`BackpropNetwork.train`."""

    losses: list[float] = field(default_factory=list)


def _as_pattern(pattern) -> TrainingPattern:
    if isinstance(pattern, TrainingPattern):
        return pattern
    if hasattr(pattern, "input") and hasattr(pattern, "output"):
        return TrainingPattern(pattern.input, pattern.output)
    inputs, outputs = pattern
    return TrainingPattern(inputs, outputs)


class BNode:
    """Unit of a backprop layer.

    ``threshold`` and ``weights`` persist across training; ``activation`` and
    ``error`` are scratch values rewritten by every pass.
    """

    __slots__ = ("threshold", "weights", "activation", "error")

    def __init__(self, weight_count: int) -> None:
        self.threshold = 0.0
        self.weights: Vector = [0.0] * max(weight_count, 0)
        self.activation = 0.0
        self.error = 0.0

    def __repr__(self) -> str:
        return f"BNode(threshold={self.threshold:.4f}, weights={len(self.weights)})"


class BackpropNetwork:
    """Feed-forward network with one hidden layer trained by the delta rule.

    Weights live on the sending node: ``input_layer[i].weights[h]`` connects
    input ``i`` to hidden unit ``h`` and ``hidden_layer[h].weights[o]`` connects
    hidden unit ``h`` to output ``o``. Every unit uses a sigmoid activation and a
    trainable threshold. Training is online: each pattern updates the weights
    immediately.
    """

    def __init__(
        self,
        input_count: int,
        hidden_count: int,
        output_count: int,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.hidden_rate = 0.15
        self.output_rate = 0.2
        self.input_layer = [BNode(hidden_count) for _ in range(max(input_count, 0))]
        self.hidden_layer = [BNode(output_count) for _ in range(max(hidden_count, 0))]
        self.output_layer = [BNode(0) for _ in range(max(output_count, 0))]
        self._initialise_parameters()

    @classmethod
    def from_config(cls, config: BackpropConfig) -> "BackpropNetwork":
        network = cls(
            config.input_count,
            config.hidden_count,
            config.output_count,
            rng=random.Random(config.seed),
        )
        network.set_learning_rates(config.hidden_learning_rate, config.output_learning_rate)
        return network

    def _initialise_parameters(self) -> None:
        for node in self.input_layer:
            node.weights = [self.rng.random() - 0.49999 for _ in node.weights]
        for node in self.hidden_layer:
            node.weights = [self.rng.random() for _ in node.weights]
        for node in self.hidden_layer:
            node.threshold = self.rng.random()
        for node in self.output_layer:
            node.threshold = self.rng.random()

    @property
    def input_count(self) -> int:
        return len(self.input_layer)

    @property
    def hidden_count(self) -> int:
        return len(self.hidden_layer)

    @property
    def output_count(self) -> int:
        return len(self.output_layer)

    def set_learning_rates(self, hidden_rate: float, output_rate: float) -> None:
        """Set the learning rates of the hidden and the output layer."""

        self.hidden_rate = hidden_rate
        self.output_rate = output_rate

    def _check_pattern(self, pattern: TrainingPattern, index: int | None = None) -> None:
        if len(pattern.input) != self.input_count:
            raise DimensionMismatchError("input", self.input_count, len(pattern.input), index)
        if len(pattern.output) != self.output_count:
            raise DimensionMismatchError("output", self.output_count, len(pattern.output), index)

    def _forward(self, inputs: Sequence[float]) -> None:
        for h, hidden in enumerate(self.hidden_layer):
            total = 0.0
            for value, node in zip(inputs, self.input_layer):
                total += value * node.weights[h]
            hidden.activation = sigmoid(total + hidden.threshold)

        for o, output in enumerate(self.output_layer):
            total = 0.0
            for hidden in self.hidden_layer:
                total += hidden.activation * hidden.weights[o]
            output.activation = sigmoid(total + output.threshold)

    def _backward(self, inputs: Sequence[float], desired: Sequence[float]) -> None:
        for output, target in zip(self.output_layer, desired):
            activation = output.activation
            output.error = activation * (1.0 - activation) * (target - activation)

        # Hidden errors are taken against the weights used in the forward pass.
        for hidden in self.hidden_layer:
            total = 0.0
            for weight, output in zip(hidden.weights, self.output_layer):
                total += weight * output.error
            activation = hidden.activation
            hidden.error = total * activation * (1.0 - activation)

        for hidden in self.hidden_layer:
            hidden.threshold += hidden.error * self.hidden_rate
        for output in self.output_layer:
            output.threshold += output.error * self.output_rate

        for hidden in self.hidden_layer:
            scale = hidden.activation * self.output_rate
            weights = hidden.weights
            for o, output in enumerate(self.output_layer):
                weights[o] += scale * output.error

        for value, node in zip(inputs, self.input_layer):
            scale = value * self.hidden_rate
            weights = node.weights
            for h, hidden in enumerate(self.hidden_layer):
                weights[h] += scale * hidden.error

    def train_one_pattern(self, inputs: Sequence[float], desired: Sequence[float]) -> float:
        """Apply a single online update and return the squared error before it."""

        self._check_pattern(TrainingPattern(inputs, desired))
        return self._train_one_pattern(inputs, desired)

    def _train_one_pattern(self, inputs: Sequence[float], desired: Sequence[float]) -> float:
        self._forward(inputs)
        squared_error = 0.0
        for output, target in zip(self.output_layer, desired):
            diff = target - output.activation
            squared_error += diff * diff
        self._backward(inputs, desired)
        return squared_error

    def train(
        self,
        iterations: int,
        patterns: Iterable[TrainingPattern | Sequence[Sequence[float]]],
        *,
        progress: bool = False,
    ) -> TrainingHistory:
        """Run ``iterations`` sweeps of online gradient descent over ``patterns``.

        Every pattern is validated before the first update, so a
        :class:`DimensionMismatchError` leaves the network untouched.
        """

        dataset = [_as_pattern(pattern) for pattern in patterns]
        for index, pattern in enumerate(dataset):
            self._check_pattern(pattern, index)

        logger.debug(
            "training backprop %d-%d-%d on %d patterns for %d iterations",
            self.input_count,
            self.hidden_count,
            self.output_count,
            len(dataset),
            iterations,
        )

        history = TrainingHistory()
        epochs: Iterable[int] = range(iterations)
        if progress:
            epochs = tqdm(epochs, desc="Backprop", unit="epoch")
        for _ in epochs:
            epoch_error = 0.0
            for pattern in dataset:
                epoch_error += self._train_one_pattern(pattern.input, pattern.output)
            samples = len(dataset) * self.output_count
            history.losses.append(epoch_error / samples if samples else 0.0)

        if history.losses:
            logger.debug("backprop training finished, final loss %.6f", history.losses[-1])
        return history

    def total_error(self) -> float:
        """Sum of the output error terms computed by the most recent update."""

        return sum(node.error for node in self.output_layer)

    def predict(self, inputs: Sequence[float]) -> list[float]:
        """Return the raw output activations for ``inputs``."""

        if len(inputs) != self.input_count:
            raise DimensionMismatchError("input", self.input_count, len(inputs))
        self._forward(inputs)
        return [node.activation for node in self.output_layer]

    def predict_class(self, inputs: Sequence[float]) -> list[int]:
        """Threshold each output activation at 0.5."""

        return [1 if value > 0.5 else 0 for value in self.predict(inputs)]

    def __repr__(self) -> str:
        return (
            f"BackpropNetwork(input={self.input_count}, hidden={self.hidden_count}, "
            f"output={self.output_count}, rates=({self.hidden_rate}, {self.output_rate}))"
        )
