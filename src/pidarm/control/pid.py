"""Quaternion PID controller driving a joint toward its target angle.

The proportional signal is the vector part of the error rotation
``conj(current) * target``, so the error shrinks along the shortest
rotational path and never wraps at 360 degrees. Integral and derivative are
the usual running sum and backward difference over that vector.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from pidarm.core import quaternion as quat
from pidarm.core.orientation import (
    RotationBuilder,
    degrees_to_radians,
    error_quaternion,
    joint_rotation,
)
from pidarm.model.joint import JointState
from pidarm.type_utils import Quat, Vector3

logger = logging.getLogger(__name__)

__all__ = ["ControlStep", "JointController", "pid_step", "tracking_error"]


@dataclass(frozen=True)
class ControlStep:
    increment: Quat
    p: Vector3
    i: Vector3
    d: Vector3
    output: Vector3
    derivative_applied: bool


def tracking_error(joint: JointState, rotation: RotationBuilder = joint_rotation) -> float:
    """Angle (rad) between the joint's current orientation and its target."""
    target = rotation(joint.rotation_axis, degrees_to_radians(joint.target_angle))
    return quat.angle(error_quaternion(joint.orientation, target))


def pid_step(joint: JointState, dt: float, rotation: RotationBuilder = joint_rotation) -> ControlStep:
    """Compute one control step for ``joint`` and update its memory in place.

    The returned increment is meant to be applied about the joint's pivot; the
    joint's orientation itself is left untouched here.
    """
    if dt < 0.0:
        logger.warning("negative dt %.6f for joint %r", dt, joint.name)

    target = rotation(joint.rotation_axis, degrees_to_radians(joint.target_angle))
    error = error_quaternion(joint.orientation, target)

    p = quat.vector_part(error)
    i = joint.memory.i_prior + p * dt
    with np.errstate(divide="ignore", invalid="ignore"):
        d = (p - joint.memory.p_prior) / dt

    out = p * joint.gains.p_gain + i * joint.gains.i_gain
    derivative_applied = bool(np.all(np.isfinite(d)))
    if derivative_applied:
        out = out + d * joint.gains.d_gain
    else:
        logger.warning("dropping non-finite derivative for joint %r (dt=%r)", joint.name, dt)

    increment = rotation(out, dt)

    joint.memory.p_prior = p
    joint.memory.i_prior = i
    return ControlStep(
        increment=increment,
        p=p,
        i=i,
        d=d,
        output=out,
        derivative_applied=derivative_applied,
    )


class JointController:
    """Holds the rotation builder; all controller state lives on the joint."""

    def __init__(self, rotation: RotationBuilder = joint_rotation) -> None:
        self.rotation = rotation

    def step(self, joint: JointState, dt: float) -> ControlStep:
        return pid_step(joint, dt, self.rotation)
