#!/usr/bin/env python
"""Stress the invariant-correction step with a long random walk.

Composes many random Advance/Rotate operations on a single point and
reports the worst residual of each hyperboloid invariant:

1. <p, p> = -1      (position on the sheet)
2. <v, v> = 1       (unit heading)
3. <p, v> = 0       (heading tangent at position)

Exits non-zero if any residual exceeds the tolerance.
"""

import argparse
import sys

import numpy as np

from hypergaze.geometry import HyperbolicPoint


def random_walk(steps: int, seed: int, max_step: float = 0.01):
    rng = np.random.default_rng(seed)
    point = HyperbolicPoint.origin()
    worst = np.zeros(3)
    for _ in range(steps):
        if rng.random() < 0.5:
            point = point.advance(rng.uniform(-max_step, max_step))
        else:
            point.rotate(rng.uniform(-np.pi, np.pi))
        worst = np.maximum(worst, point.invariant_residuals())
    return point, worst


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--steps", type=int, default=10_000)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--tolerance", type=float, default=1e-4)
    args = parser.parse_args()

    print("=" * 60)
    print("INVARIANT DRIFT CHECK")
    print("=" * 60)
    print(f"  Steps: {args.steps}, seed: {args.seed}")
    print()

    point, worst = random_walk(args.steps, args.seed)

    labels = ["<p,p> + 1", "<v,v> - 1", "<p,v>"]
    for label, value in zip(labels, worst):
        status = "OK" if value < args.tolerance else "DRIFT"
        print(f"  {label:10s} {value:.3e}  [{status}]")
    print()
    print(f"  Final point: {point!r}")

    return 0 if np.all(worst < args.tolerance) else 1


if __name__ == "__main__":
    sys.exit(main())
