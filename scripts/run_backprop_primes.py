#!/usr/bin/env python3
"""Teach a backprop network which integers below a limit are prime."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from classic_ann import BackpropConfig, BackpropNetwork
from classic_ann.datasets import prime_patterns


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description=__doc__)
    p.add_argument("--iterations", type=int, default=5000, help="Training sweeps over the dataset")
    p.add_argument("--limit", type=int, default=1000, help="Integers 0..limit-1 are classified")
    p.add_argument("--width", type=int, default=10, help="Binary digits per input vector")
    p.add_argument("--hidden", type=int, default=19)
    p.add_argument("--hidden-rate", type=float, default=0.15)
    p.add_argument("--output-rate", type=float, default=0.2)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--progress", action="store_true", help="Show a progress bar")
    p.add_argument("--plot", type=Path, default=None, help="Save the loss curve to this file")
    p.add_argument("--verbose", action="store_true")
    return p.parse_args()


def main() -> None:
    args = parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="[%(asctime)s][%(levelname)s] %(message)s")

    patterns = prime_patterns(args.limit, args.width)
    network = BackpropNetwork.from_config(
        BackpropConfig(
            input_count=args.width,
            hidden_count=args.hidden,
            output_count=1,
            hidden_learning_rate=args.hidden_rate,
            output_learning_rate=args.output_rate,
            seed=args.seed,
        )
    )
    print(f"-- Backprop init: {network}")
    print("training")
    history = network.train(args.iterations, patterns, progress=args.progress)

    print("running predictions")
    errors = sum(
        int(network.predict_class(pattern.input)[0] != int(pattern.output[0]))
        for pattern in patterns
    )
    print(f"total errors {errors} / {len(patterns)}")

    if args.plot is not None:
        from classic_ann.visualization import plot_training_history

        plot_training_history(history.losses).savefig(args.plot)
        print(f"Saved loss curve to {args.plot}")


if __name__ == "__main__":
    main()
