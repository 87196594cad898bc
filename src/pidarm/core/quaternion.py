"""Numeric quaternion helpers.

All quaternions are float64 arrays in ``[w, x, y, z]`` order, where ``w`` is
the scalar part and ``[x, y, z]`` the vector part. Functions are pure and
return new arrays.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from pidarm.type_utils import Quat, Vector3

__all__ = [
    "as_quat",
    "as_vector3",
    "identity",
    "normalize",
    "multiply",
    "conjugate",
    "rotate_vector",
    "from_axis_angle",
    "vector_part",
    "angle",
    "is_finite",
]


def as_quat(q: Sequence[float] | np.ndarray) -> Quat:
    arr = np.asarray(q, dtype=float)
    if arr.shape != (4,):
        raise ValueError(f"quaternion must have shape (4,), received {arr.shape}")
    return arr


def as_vector3(v: Sequence[float] | np.ndarray) -> Vector3:
    arr = np.asarray(v, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"vector must have shape (3,), received {arr.shape}")
    return arr


def identity() -> Quat:
    return np.array([1.0, 0.0, 0.0, 0.0], dtype=float)


def normalize(q: Sequence[float] | np.ndarray, eps: float = 1e-12) -> Quat:
    """Scale ``q`` to unit length; degenerate norms collapse to the identity."""
    q = as_quat(q)
    norm = float(np.linalg.norm(q))
    if not math.isfinite(norm) or norm < eps:
        return identity()
    return q / norm


def multiply(q1: Sequence[float] | np.ndarray, q2: Sequence[float] | np.ndarray) -> Quat:
    """Hamilton product ``q1 * q2`` (apply ``q2`` first, then ``q1``)."""
    w1, x1, y1, z1 = as_quat(q1)
    w2, x2, y2, z2 = as_quat(q2)
    return np.array(
        [
            w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
            w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
            w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
        ],
        dtype=float,
    )


def conjugate(q: Sequence[float] | np.ndarray) -> Quat:
    w, x, y, z = as_quat(q)
    return np.array([w, -x, -y, -z], dtype=float)


def rotate_vector(q: Sequence[float] | np.ndarray, v: Sequence[float] | np.ndarray) -> Vector3:
    """Rotate ``v`` by the unit quaternion ``q``.

    Uses v' = v + 2w (u x v) + 2 u x (u x v) with u the vector part of q.
    """
    q = as_quat(q)
    v = as_vector3(v)
    w = q[0]
    u = q[1:]
    uv = np.cross(u, v)
    return v + 2.0 * w * uv + 2.0 * np.cross(u, uv)


def from_axis_angle(axis: Sequence[float] | np.ndarray, theta: float) -> Quat:
    """Rotation of ``theta`` radians about ``axis`` (normalised internally)."""
    axis = as_vector3(axis)
    norm = float(np.linalg.norm(axis))
    if norm < 1e-12:
        return identity()
    half = 0.5 * float(theta)
    s = math.sin(half)
    n = axis / norm
    return np.array([math.cos(half), n[0] * s, n[1] * s, n[2] * s], dtype=float)


def vector_part(q: Sequence[float] | np.ndarray) -> Vector3:
    return as_quat(q)[1:].copy()


def angle(q: Sequence[float] | np.ndarray) -> float:
    """Rotation magnitude of ``q`` in radians along the shortest path, in [0, pi]."""
    q = normalize(q)
    mag = float(np.linalg.norm(q[1:]))
    return 2.0 * math.atan2(mag, abs(float(q[0])))


def is_finite(q: Sequence[float] | np.ndarray) -> bool:
    return bool(np.all(np.isfinite(np.asarray(q, dtype=float))))
