#!/usr/bin/env python3
"""Train a SOM on three ramp patterns and classify noisy variants of them."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from classic_ann import SOMConfig, SOMNetwork
from classic_ann.datasets import noisy_ramp_patterns, ramp_patterns


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description=__doc__)
    p.add_argument("--iterations", type=int, default=5000)
    p.add_argument("--height", type=int, default=12)
    p.add_argument("--width", type=int, default=12)
    p.add_argument("--learning-rate", type=float, default=0.05)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--progress", action="store_true", help="Show a progress bar")
    p.add_argument("--plot", type=Path, default=None, help="Save the U-matrix to this file")
    p.add_argument("--verbose", action="store_true")
    return p.parse_args()


def main() -> None:
    args = parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="[%(asctime)s][%(levelname)s] %(message)s")

    features, prototypes = ramp_patterns()
    som = SOMNetwork.from_config(
        SOMConfig(
            height=args.height,
            width=args.width,
            feature_size=len(features[0]),
            prototype_size=len(prototypes[0]),
            learning_rate=args.learning_rate,
            seed=args.seed,
        )
    )
    print(f"-- SOM init: {som}")
    print("training")
    som.train(args.iterations, features, prototypes, progress=args.progress)

    for fv in features:
        print(fv, som.predict_class(fv))
    print("running predictions")
    for fv in noisy_ramp_patterns():
        print(fv, som.predict_class(fv))

    if args.plot is not None:
        from classic_ann.visualization import plot_som

        plot_som(som).savefig(args.plot)
        print(f"Saved U-matrix to {args.plot}")


if __name__ == "__main__":
    main()
