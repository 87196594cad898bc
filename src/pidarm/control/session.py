"""Headless tick driver standing in for the render loop.

Each tick resolves the held keys into a target command, broadcasts it, runs
every joint's controller and reports what a display would show.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from pidarm.control.pid import JointController
from pidarm.control.targets import DEFAULT_STEP, apply_command, resolve_command
from pidarm.model.chain import KinematicChain

logger = logging.getLogger(__name__)

KeyState = tuple[bool, bool, bool]  # (increment, decrement, reset)
CommandSource = Callable[[int], KeyState]

DT_SPIKE = 0.25  # seconds


@dataclass(frozen=True)
class TickReport:
    tick: int
    targets: list[float]
    end_effector: list[float] | None
    max_error_deg: float


def hold_keys(
    up: tuple[int, int] | None = None,
    down: tuple[int, int] | None = None,
    reset_at: int | None = None,
) -> CommandSource:
    """Build a command source from half-open tick ranges ``[start, stop)``."""

    def _inside(window: tuple[int, int] | None, tick: int) -> bool:
        return window is not None and window[0] <= tick < window[1]

    def _keys(tick: int) -> KeyState:
        return _inside(up, tick), _inside(down, tick), reset_at is not None and tick == reset_at

    return _keys


def run_session(
    chain: KinematicChain,
    ticks: int,
    dt: float,
    commands: CommandSource | None = None,
    controller: JointController | None = None,
    step: float = DEFAULT_STEP,
) -> Iterator[TickReport]:
    if dt > DT_SPIKE:
        logger.warning("dt %.3fs is large; the controller may overshoot", dt)
    for tick in range(ticks):
        if commands is not None:
            apply_command(chain.joints, resolve_command(*commands(tick)), step)
        chain.tick(dt, controller)
        max_err = max((math.degrees(e) for e in chain.tracking_errors()), default=0.0)
        end = chain.display_position() if chain.end_effector is not None else None
        yield TickReport(tick=tick, targets=chain.target_angles(), end_effector=end, max_error_deg=max_err)


def format_report(report: TickReport) -> str:
    text = "joints: " + "".join(f"[{i}]: {angle:g} " for i, angle in enumerate(report.targets))
    if report.end_effector is not None:
        text += f"\nend_effector: {report.end_effector}"
    return text
