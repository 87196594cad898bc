"""Shared helpers for CLI modules."""

from __future__ import annotations

import argparse
import logging

import sympy as sp

from pidarm.config import ConfigError, load_chain
from pidarm.model.chain import KinematicChain
from pidarm.presets import PRESETS

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level.upper()), format=LOG_FORMAT)


def pprint_expr(expr: sp.Basic) -> None:
    sp.pprint(expr, use_unicode=True)  # type: ignore[operator]


def add_chain_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", type=str, default=None, help="YAML chain description")
    parser.add_argument("--preset", choices=sorted(PRESETS), default="three-link", help="built-in chain")


def chain_from_args(args: argparse.Namespace) -> KinematicChain:
    if args.config:
        try:
            return load_chain(args.config)
        except ConfigError as e:
            raise SystemExit(f"config error: {e}") from e
    return PRESETS[args.preset]()
