import argparse
import logging
import sys

import numpy as np

from securebox.opener import open_box


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(
        description="Shuffle a rows x columns SecureBox and try to unlock it."
    )
    ap.add_argument("rows", type=int)
    ap.add_argument("columns", type=int)
    ap.add_argument(
        "--seed", type=int, default=None, help="Seed for the initial shuffle"
    )
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    rng = np.random.default_rng(args.seed)
    locked = open_box(args.rows, args.columns, rng=rng)

    if locked:
        print("BOX: LOCKED!")
    else:
        print("BOX: OPENED!")
    return int(locked)


if __name__ == "__main__":
    sys.exit(main())
