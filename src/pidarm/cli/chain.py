"""CLI wiring for describing a chain."""

from __future__ import annotations

import argparse

import numpy as np

from pidarm.cli.utils import add_chain_arguments, chain_from_args


def cmd_chain(args: argparse.Namespace) -> int:
    chain = chain_from_args(args)
    print(f"rotation mode: {chain.rotation_mode.value}")
    for i, joint in enumerate(chain):
        pose = chain.world_transform(i)
        indent = "  " * chain.depth(i)
        print(
            f"{indent}[{i}] {joint.name}: axis={joint.rotation_axis.tolist()} "
            f"pivot={joint.pivot.tolist()} parent={chain.parents[i]} "
            f"gains=({joint.gains.p_gain:g}, {joint.gains.i_gain:g}, {joint.gains.d_gain:g}) "
            f"world={np.round(pose.position, 3).tolist()}"
        )
    if chain.end_effector is not None:
        print("end_effector:", chain.display_position())
    return 0


def register_subparsers(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    chain = subparsers.add_parser("chain", help="print the joint tree and rest positions")
    add_chain_arguments(chain)
    chain.set_defaults(func=cmd_chain)
