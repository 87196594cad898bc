from __future__ import annotations

import math
from collections.abc import Sequence
from enum import Enum
from typing import Callable, Literal, cast, overload

import numpy as np
import sympy as sp
from sympy.algebras.quaternion import Quaternion

from pidarm.core import quaternion as quat
from pidarm.type_utils import Num, Quat

RotationBuilder = Callable[[Sequence[float] | np.ndarray, float], Quat]


class RotationMode(str, Enum):
    """How an axis vector and a scalar are turned into a rotation."""

    PER_AXIS = "per_axis"
    AXIS_ANGLE = "axis_angle"


def degrees_to_radians(angle: float) -> float:
    return angle * (math.pi / 180.0)


@overload
def joint_rotation(
    rotation_axis: Sequence[float] | np.ndarray, multiplier: float, *, numeric: Literal[True] = True
) -> Quat: ...


@overload
def joint_rotation(
    rotation_axis: Sequence[Num], multiplier: Num, *, numeric: Literal[False]
) -> Quaternion: ...


def joint_rotation(
    rotation_axis: Sequence[Num] | np.ndarray,
    multiplier: Num,
    *,
    numeric: bool = True,
) -> Quat | Quaternion:
    """Compose Rx(ax*m) * Ry(ay*m) * Rz(az*m).

    Each component of ``rotation_axis`` scales its own elementary rotation.
    This equals a true axis-angle rotation only for cardinal unit axes; mixed
    axes give the product of three separate rotations.
    """
    if len(rotation_axis) != 3:
        raise ValueError("rotation_axis must have length 3")

    if numeric:
        ax, ay, az = (float(c) for c in rotation_axis)
        m = float(multiplier)
        qx = quat.from_axis_angle((1.0, 0.0, 0.0), ax * m)
        qy = quat.from_axis_angle((0.0, 1.0, 0.0), ay * m)
        qz = quat.from_axis_angle((0.0, 0.0, 1.0), az * m)
        return quat.multiply(quat.multiply(qx, qy), qz)

    ax_s, ay_s, az_s = (sp.sympify(c) for c in rotation_axis)
    m_s = sp.sympify(multiplier)
    half = sp.Rational(1, 2)
    qx = Quaternion(sp.cos(ax_s * m_s * half), sp.sin(ax_s * m_s * half), 0, 0)
    qy = Quaternion(sp.cos(ay_s * m_s * half), 0, sp.sin(ay_s * m_s * half), 0)
    qz = Quaternion(sp.cos(az_s * m_s * half), 0, 0, sp.sin(az_s * m_s * half))
    return cast(Quaternion, qx * qy * qz)


def joint_rotation_symbolic(rotation_axis: Sequence[Num], multiplier: Num) -> Quaternion:
    """Helper wrapper for the symbolic per-axis composition."""
    return joint_rotation(rotation_axis, multiplier, numeric=False)


def axis_angle_rotation(rotation_axis: Sequence[float] | np.ndarray, multiplier: float) -> Quat:
    """Rotate by ``|axis| * multiplier`` radians about the normalised axis."""
    axis = quat.as_vector3(rotation_axis)
    norm = float(np.linalg.norm(axis))
    return quat.from_axis_angle(axis, norm * float(multiplier))


def rotation_builder(mode: RotationMode) -> RotationBuilder:
    if mode is RotationMode.AXIS_ANGLE:
        return axis_angle_rotation
    return joint_rotation


def error_quaternion(current: Sequence[float] | np.ndarray, target: Sequence[float] | np.ndarray) -> Quat:
    """Rotation mapping ``current`` onto ``target``: normalize(conj(current) * target)."""
    return quat.normalize(quat.multiply(quat.conjugate(current), target))


def quaternion_to_array(q: Quaternion) -> Quat:
    """Evaluate a SymPy quaternion into a numeric ``[w, x, y, z]`` array."""
    return np.array([float(sp.N(c)) for c in (q.a, q.b, q.c, q.d)], dtype=float)


__all__ = [
    "RotationBuilder",
    "RotationMode",
    "axis_angle_rotation",
    "degrees_to_radians",
    "error_quaternion",
    "joint_rotation",
    "joint_rotation_symbolic",
    "quaternion_to_array",
    "rotation_builder",
]
