from __future__ import annotations
import argparse
import logging

import numpy as np

from book_generator import GeneratorConfig, write_book_csv


def main(argv=None):
    defaults = GeneratorConfig()
    ap = argparse.ArgumentParser(description="Write a random, non-crossed order book CSV.")
    ap.add_argument("out", nargs="?", default=defaults.output_path)
    ap.add_argument("levels", nargs="?", type=int, default=defaults.levels)
    ap.add_argument("mid", nargs="?", type=float, default=defaults.mid_price)
    ap.add_argument("--tick", type=float, default=defaults.tick_size)
    ap.add_argument("--min_size", type=float, default=defaults.min_size)
    ap.add_argument("--max_size", type=float, default=defaults.max_size)
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--log_level", type=str.upper, default="WARNING",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    args = ap.parse_args(argv)

    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.seed is not None:
        np.random.seed(args.seed)

    cfg = GeneratorConfig(
        output_path=args.out,
        levels=args.levels,
        mid_price=args.mid,
        tick_size=args.tick,
        min_size=args.min_size,
        max_size=args.max_size,
    )
    try:
        write_book_csv(cfg)
    except (OSError, ValueError) as exc:
        raise SystemExit(f"[ERROR] {exc}")

    print(f"Generated {cfg.output_path} ({cfg.levels} bids + {cfg.levels} asks, mid = {cfg.mid_price})")


if __name__ == "__main__":
    main()
