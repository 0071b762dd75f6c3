"""Length of Collatz sequences."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

DEFAULT_START = 11


def collatz_length(n: int) -> int:
    """Return the length of the Collatz sequence beginning at ``n``."""
    length = 1
    while n > 1:
        n = n // 2 if n % 2 == 0 else 3 * n + 1
        length += 1
    return length


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="collatz",
        description="Print the length of a Collatz sequence.",
    )
    parser.add_argument(
        "start",
        nargs="?",
        type=int,
        default=DEFAULT_START,
        help=f"first number of the sequence (default: {DEFAULT_START})",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Print the length of the Collatz sequence starting at the given number."""
    args = _build_parser().parse_args(argv)
    length = collatz_length(args.start)
    print(f"Length: {length}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())