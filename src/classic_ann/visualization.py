"""Plotting utilities for training curves and trained maps."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

import matplotlib.pyplot as plt
import numpy as np

from .math_utils import euclidean_distance

if TYPE_CHECKING:  # pragma: no cover - import-time hinting only
    from matplotlib.figure import Figure

    from .som import SOMNetwork


def plot_training_history(losses: Sequence[float]) -> "Figure":
    """Plot the per-epoch mean squared error of a backprop run."""

    fig = plt.figure()
    plt.plot(losses)
    plt.xlabel("Epoch")
    plt.ylabel("Mean squared error")
    plt.title("Backprop Training")
    plt.tight_layout()
    return fig


def u_matrix(som: "SOMNetwork") -> np.ndarray:
    """Mean feature-vector distance of every node to its 4-connected neighbors.

    The result has shape ``(height, width)``; large values mark cluster borders.
    """

    grid = np.zeros((som.height, som.width), dtype=float)
    for node in som.nodes:
        distances = []
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            x, y = node.x + dx, node.y + dy
            if 0 <= x < som.width and 0 <= y < som.height:
                distances.append(euclidean_distance(node.fv, som.node_at(x, y).fv))
        if distances:
            grid[node.y, node.x] = sum(distances) / len(distances)
    return grid


def plot_som(som: "SOMNetwork") -> "Figure":
    """Render the U-matrix of ``som`` with the winning prototype index per cell."""

    fig = plt.figure()
    plt.imshow(u_matrix(som), cmap="bone_r", origin="upper")
    plt.colorbar(label="Mean neighbor distance")
    if som.prototype_size:
        for node in som.nodes:
            label = int(np.argmax(node.pv))
            plt.text(node.x, node.y, str(label), ha="center", va="center", fontsize=7)
    plt.xlabel("x")
    plt.ylabel("y")
    plt.title("SOM U-Matrix")
    plt.tight_layout()
    return fig
