from __future__ import annotations

import math

import numpy as np
import pytest

from pidarm.control.targets import TargetCommand, apply_command
from pidarm.core import quaternion as quat
from pidarm.core.orientation import RotationMode, joint_rotation
from pidarm.model.chain import ChainError, KinematicChain
from pidarm.model.joint import JointState
from pidarm.presets import three_link_arm, single_joint


def _branching_chain() -> KinematicChain:
    chain = KinematicChain()
    chain.add_joint(JointState.create((0, 1, 0), translation=(0, 1, 0), name="root"))
    chain.add_joint(JointState.create((1, 0, 0), pivot=(0, 0.5, 0), translation=(0.5, 1, 0), name="a"), parent=0)
    chain.add_joint(JointState.create((1, 0, 0), pivot=(0, 0.5, 0), translation=(0, 1, 0), name="a1"))
    chain.add_joint(JointState.create((0, 0, 1), pivot=(0, 0.5, 0), translation=(-0.5, 1, 0), name="b"), parent=0)
    chain.add_joint(JointState.create((0, 0, 1), pivot=(0, 0.5, 0), translation=(0, 1, 0), name="b1"))
    return chain


def test_three_link_rest_position() -> None:
    chain = three_link_arm()
    assert np.allclose(chain.end_effector_position(), (0.6, 4.5, 0.0))
    assert chain.display_position() == [0.6, 4.5, 0.0]


def test_topology_queries() -> None:
    chain = _branching_chain()
    assert chain.parents == [None, 0, 1, 0, 3]
    assert chain.children(0) == [1, 3]
    assert chain.subtree(1) == [1, 2]
    assert chain.subtree(0) == [0, 1, 2, 3, 4]
    assert chain.ancestors(4) == [0, 3, 4]
    assert chain.depth(4) == 2


def test_rotating_root_moves_effector_rigidly() -> None:
    chain = three_link_arm()
    before = chain.end_effector_position()
    q = quat.from_axis_angle((0.0, 1.0, 0.0), 0.7)
    chain.apply_rotation(0, q)
    pivot = chain.joints[0].pivot
    assert np.allclose(chain.end_effector_position(), pivot + quat.rotate_vector(q, before - pivot))


def test_rotating_inner_joint_is_rigid_about_its_pivot() -> None:
    chain = three_link_arm()
    chain.apply_rotation(0, quat.from_axis_angle((0.0, 1.0, 0.0), 0.9))
    child = chain.joints[2]
    child_state = (child.translation.copy(), child.orientation.copy())

    parent_pose = chain.world_transform(0)
    pivot_world = chain.world_point(0, chain.joints[1].pivot)
    before = chain.end_effector_position()

    q = quat.from_axis_angle((1.0, 0.0, 0.0), -0.6)
    chain.apply_rotation(1, q)

    q_world = quat.multiply(quat.multiply(parent_pose.orientation, q), quat.conjugate(parent_pose.orientation))
    expected = pivot_world + quat.rotate_vector(q_world, before - pivot_world)
    assert np.allclose(chain.end_effector_position(), expected)
    # descendants are carried, not modified
    assert np.array_equal(child.translation, child_state[0])
    assert np.array_equal(child.orientation, child_state[1])
    # the rotated joint's ancestor is untouched
    assert np.allclose(chain.world_transform(0).position, parent_pose.position)


def test_sibling_subtree_is_unaffected() -> None:
    chain = _branching_chain()
    b_before = [chain.world_transform(i).position for i in (3, 4)]
    chain.apply_rotation(1, quat.from_axis_angle((1.0, 0.0, 0.0), 1.2))
    b_after = [chain.world_transform(i).position for i in (3, 4)]
    assert np.allclose(b_before, b_after)
    assert np.allclose(b_before[1] - b_before[0], b_after[1] - b_after[0])


def test_controlled_arm_matches_direct_rotation() -> None:
    controlled = three_link_arm()
    apply_command(controlled.joints, TargetCommand.INCREMENT, step=90.0)
    for _ in range(1500):
        controlled.tick(1.0 / 60.0)

    expected = three_link_arm()
    for i, joint in enumerate(expected.joints):
        expected.apply_rotation(i, joint_rotation(joint.rotation_axis, math.pi / 2))

    assert np.allclose(controlled.end_effector_position(), expected.end_effector_position(), atol=1e-2)


def test_axis_angle_mode_converges_for_cardinal_axis() -> None:
    chain = single_joint((0.0, 0.0, 1.0))
    chain.rotation_mode = RotationMode.AXIS_ANGLE
    chain.joints[0].target_angle = 30.0
    for _ in range(900):
        chain.tick(1.0 / 60.0)
    target = joint_rotation((0.0, 0.0, 1.0), math.radians(30.0))
    err = quat.multiply(quat.conjugate(chain.joints[0].orientation), target)
    assert math.degrees(quat.angle(err)) < 0.5


def test_invalid_topology_raises() -> None:
    chain = KinematicChain()
    with pytest.raises(ChainError):
        chain.set_end_effector((0.0, 1.0, 0.0))
    chain.add_joint(JointState.create((0, 1, 0)))
    with pytest.raises(ChainError):
        chain.add_joint(JointState.create((1, 0, 0)), parent=5)
    with pytest.raises(ChainError):
        chain.end_effector_position()
    with pytest.raises(ChainError):
        chain.apply_rotation(3, quat.identity())


def test_unnamed_joints_get_index_names() -> None:
    chain = KinematicChain()
    chain.add_joint(JointState.create((0, 1, 0)))
    chain.add_joint(JointState.create((1, 0, 0)))
    assert [j.name for j in chain] == ["joint0", "joint1"]
