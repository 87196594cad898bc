"""CLI wiring for inspecting the per-axis joint rotation."""

from __future__ import annotations

import argparse

import numpy as np
import sympy as sp

from pidarm.cli.utils import pprint_expr
from pidarm.core import quaternion as quat
from pidarm.core.orientation import (
    axis_angle_rotation,
    degrees_to_radians,
    joint_rotation,
    joint_rotation_symbolic,
)


def cmd_rotation(args: argparse.Namespace) -> int:
    axis = [float(v) for v in args.axis]

    if args.symbolic:
        theta = sp.Symbol("theta", real=True)
        q = joint_rotation_symbolic(axis, theta)
        print("Per-axis composition Rx*Ry*Rz (w, x, y, z):")
        pprint_expr(sp.simplify(sp.Matrix([q.a, q.b, q.c, q.d])))  # type: ignore[no-untyped-call]
        return 0

    theta = degrees_to_radians(args.angle)
    q = joint_rotation(axis, theta)
    print("per-axis  (w, x, y, z):", np.round(q, 6).tolist())
    print(f"angle (deg): {np.degrees(quat.angle(q)):.6f}")
    if args.compare:
        q_aa = axis_angle_rotation(axis, theta)
        print("axis-angle (w, x, y, z):", np.round(q_aa, 6).tolist())
        delta = quat.angle(quat.multiply(quat.conjugate(q), q_aa))
        print(f"difference (deg): {np.degrees(delta):.6f}")
    return 0


def register_subparsers(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    rotation = subparsers.add_parser("rotation", help="show the joint rotation for an axis")
    rotation.add_argument("--axis", type=float, nargs=3, default=[0.0, 1.0, 0.0], help="axis multipliers x y z")
    rotation.add_argument("--angle", type=float, default=90.0, help="angle in degrees")
    rotation.add_argument("--symbolic", action="store_true", help="print the SymPy expression in theta")
    rotation.add_argument("--compare", action="store_true", help="also show the true axis-angle rotation")
    rotation.set_defaults(func=cmd_rotation)
