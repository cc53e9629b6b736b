"""Command-line entry point for the dining philosophers simulation."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from .config import InvalidInput, parse_args
from .table import Simulation


def _fail(message: str) -> int:
    print(f"{message}\n")
    return 1


def main(argv: Sequence[str] | None = None) -> int:
    """Run the simulation with the given arguments; return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not 4 <= len(args) <= 5:
        return _fail("Wrong number of args")
    try:
        settings = parse_args(args)
    except InvalidInput:
        return _fail("Invalid input")
    Simulation(settings, sys.stdout).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())