"""Unified command-line interface for the pidarm joint controller.

The parser definitions are delegated to the individual CLI modules under
``pidarm.cli`` so the entry point stays lightweight.
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from pidarm.cli import chain, rotation, simulate
from pidarm.cli.utils import LOG_LEVELS, configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pidarm", description="quaternion PID joint chain")
    parser.add_argument(
        "--log-level", default="WARNING", type=str.upper, choices=LOG_LEVELS, help="logging level"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    simulate.register_subparsers(sub)
    rotation.register_subparsers(sub)
    chain.register_subparsers(sub)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
