"""Operator target commands, broadcast to every joint of a chain."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from pidarm.model.joint import JointState

MIN_ANGLE = 0.0
MAX_ANGLE = 360.0
DEFAULT_STEP = 1.0  # degrees per tick


class TargetCommand(Enum):
    INCREMENT = "increment"
    DECREMENT = "decrement"
    RESET = "reset"


def clamp_angle(angle: float) -> float:
    return min(max(float(angle), MIN_ANGLE), MAX_ANGLE)


def resolve_command(increment: bool, decrement: bool, reset: bool) -> TargetCommand | None:
    """Pick one command from the held keys; increment wins, then decrement, then reset."""
    if increment:
        return TargetCommand.INCREMENT
    if decrement:
        return TargetCommand.DECREMENT
    if reset:
        return TargetCommand.RESET
    return None


def set_target(joint: JointState, angle: float) -> None:
    joint.target_angle = clamp_angle(angle)


def apply_command(
    joints: Iterable[JointState], command: TargetCommand | None, step: float = DEFAULT_STEP
) -> None:
    if command is None:
        return
    for joint in joints:
        if command is TargetCommand.INCREMENT:
            set_target(joint, joint.target_angle + step)
        elif command is TargetCommand.DECREMENT:
            set_target(joint, joint.target_angle - step)
        else:
            joint.target_angle = 0.0


__all__ = [
    "DEFAULT_STEP",
    "MAX_ANGLE",
    "MIN_ANGLE",
    "TargetCommand",
    "apply_command",
    "clamp_angle",
    "resolve_command",
    "set_target",
]
