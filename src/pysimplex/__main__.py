"""Allow running with: python -m pysimplex CONFIG.yaml

Runs the minimization described by a YAML configuration file and prints
the best point found.
"""
import argparse
import logging
import sys
from typing import List, Optional

import pysimplex
from pysimplex.builder import load_and_run


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="pysimplex",
        description=f"pysimplex {pysimplex.__version__} - downhill-simplex minimization",
    )
    parser.add_argument("config", help="YAML configuration file")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="enable debug logging"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    result = load_and_run(args.config)

    print(f"x         = {result.x.tolist()}")
    print(f"f(x)      = {result.fun}")
    print(f"steps     = {result.n_steps}")
    print(f"evals     = {result.n_evaluations}")
    print(f"converged = {result.converged}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
