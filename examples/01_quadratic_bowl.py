#!/usr/bin/env python3
"""
Example 1: Quadratic Bowl

Minimize f(x) = (x - 3)^2 in one dimension and
f(x, y) = (x - 1)^2 + (y + 2)^2 in two dimensions, recording the best
point every 10 steps.

Usage:
    python examples/01_quadratic_bowl.py
"""
import numpy as np

from pysimplex.fitting import shifted_quadratic
from pysimplex.minimizer import SimplexMinimizer
from pysimplex.observer import HistoryObserver


def main():
    print("=" * 60)
    print("  Example 1: QUADRATIC BOWL")
    print("=" * 60)

    minimizer = SimplexMinimizer()

    result = minimizer.run(lambda x: (x[0] - 3.0) ** 2, [0.0], 1.0)
    print(f"\n1-D: x = {result.x[0]:.8f}, f = {result.fun:.3e}")
    print(f"     {result.message}, {result.n_evaluations} evaluations")

    history = HistoryObserver()
    minimizer.set_progress_callback(10, history)
    result = minimizer.run(shifted_quadratic([1.0, -2.0]), [0.0, 0.0], 0.5)
    print(f"\n2-D: x = {np.round(result.x, 6)}, f = {result.fun:.3e}")
    print(f"     {result.message}, moves: {result.info['moves']}")

    print("\n  step   best f")
    for i, best in enumerate(history.history, start=1):
        print(f"  {10 * i:4d}   {best.value:.3e}")


if __name__ == "__main__":
    main()
