import argparse
import logging
import sys

import numpy as np

from securebox.base import InvalidDimensionsError
from securebox.config import FALLBACK_MODES, SolverConfig, load_config
from securebox.solver import solve_box

# A is (y*x)^2 bytes and elimination is cubic in y*x.
MAX_CELLS = 1024


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}")
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="securebox", description="Unlock a randomly shuffled SecureBox."
    )
    ap.add_argument("y", type=_positive_int, help="Number of rows")
    ap.add_argument("x", type=_positive_int, help="Number of columns")
    ap.add_argument("--seed", type=int, default=None, help="Shuffle seed")
    ap.add_argument("--config", default=None, help="YAML solver config")
    ap.add_argument(
        "--max-retries",
        type=int,
        default=None,
        help="Fallback rounds before giving up (default: y*x)",
    )
    ap.add_argument(
        "--fallback",
        choices=FALLBACK_MODES,
        default=None,
        help="Cells to re-toggle each fallback round",
    )
    ap.add_argument(
        "-v", "--verbose", action="store_true", help="Log solver progress"
    )
    return ap


def main(argv=None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    if args.y * args.x > MAX_CELLS:
        ap.error(
            f"{args.y}x{args.x} box has {args.y * args.x} cells, limit is {MAX_CELLS}"
        )

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        cfg = load_config(args.config) if args.config else SolverConfig()
        cfg = cfg.override(max_retries=args.max_retries, fallback=args.fallback)
    except (OSError, ValueError) as exc:
        ap.error(str(exc))

    rng = np.random.default_rng(args.seed)
    try:
        result = solve_box(args.y, args.x, rng=rng, config=cfg)
    except InvalidDimensionsError as exc:
        ap.error(str(exc))

    if result.locked:
        print("BOX: LOCKED!")
    else:
        print("BOX: OPENED!")
    return int(result.locked)


if __name__ == "__main__":
    sys.exit(main())
