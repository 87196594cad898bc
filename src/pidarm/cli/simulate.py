"""CLI wiring for the headless tick loop."""

from __future__ import annotations

import argparse

from pidarm.cli.utils import add_chain_arguments, chain_from_args
from pidarm.control.session import format_report, hold_keys, run_session
from pidarm.control.targets import DEFAULT_STEP


def _window(start: int, length: int) -> tuple[int, int] | None:
    return (start, start + length) if length > 0 else None


def cmd_simulate(args: argparse.Namespace) -> int:
    if args.dt <= 0:
        raise SystemExit("--dt must be positive")
    chain = chain_from_args(args)

    commands = hold_keys(
        up=_window(0, args.hold_up),
        down=_window(args.hold_up, args.hold_down),
        reset_at=args.reset_at,
    )

    last = None
    for report in run_session(chain, args.ticks, args.dt, commands, step=args.step):
        last = report
        if args.every > 0 and report.tick % args.every == 0:
            print(f"t={report.tick * args.dt:.3f}s  max error {report.max_error_deg:.3f} deg")
            print(format_report(report))
    if last is not None:
        print("\nfinal:")
        print(format_report(last))
    return 0


def register_subparsers(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    sim = subparsers.add_parser("simulate", help="run the controllers without a renderer")
    add_chain_arguments(sim)
    sim.add_argument("--ticks", type=int, default=600)
    sim.add_argument("--dt", type=float, default=1.0 / 60.0, help="seconds per tick")
    sim.add_argument("--hold-up", type=int, default=90, help="ticks the increment key is held")
    sim.add_argument("--hold-down", type=int, default=0, help="ticks the decrement key is held afterwards")
    sim.add_argument("--reset-at", type=int, default=None, help="tick on which reset is pressed")
    sim.add_argument("--step", type=float, default=DEFAULT_STEP, help="degrees per held tick")
    sim.add_argument("--every", type=int, default=60, help="print every N ticks (0 to disable)")
    sim.set_defaults(func=cmd_simulate)
