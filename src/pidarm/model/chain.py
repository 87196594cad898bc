"""Tree of joints composed through parent-relative transforms.

Each node stores only its own translation, orientation and pivot, all in the
parent's frame. World poses are computed on demand by walking from the root
to the node, so nothing has to be invalidated when a joint moves.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import NamedTuple

import numpy as np

from pidarm.control.pid import ControlStep, JointController, tracking_error
from pidarm.core import quaternion as quat
from pidarm.core.orientation import RotationMode, rotation_builder
from pidarm.model.joint import JointState, PIDGains
from pidarm.type_utils import Quat, Vector3

logger = logging.getLogger(__name__)

__all__ = ["ChainError", "EndEffector", "JointSpec", "KinematicChain", "Pose"]


class ChainError(ValueError):
    """Invalid chain topology or joint index."""


class Pose(NamedTuple):
    position: Vector3
    orientation: Quat


@dataclass(frozen=True)
class JointSpec:
    """Construction record for one joint; ``parent=None`` means the previous joint."""

    rotation_axis: tuple[float, float, float]
    pivot: tuple[float, float, float] = (0.0, 0.0, 0.0)
    translation: tuple[float, float, float] = (0.0, 0.0, 0.0)
    gains: PIDGains = field(default_factory=PIDGains)
    parent: int | None = None
    name: str = ""


@dataclass
class EndEffector:
    """Terminal, non-actuated node: a fixed offset in its parent's frame."""

    offset: Vector3
    parent: int


class KinematicChain:
    def __init__(self, rotation_mode: RotationMode = RotationMode.PER_AXIS) -> None:
        self.rotation_mode = rotation_mode
        self.joints: list[JointState] = []
        self.parents: list[int | None] = []
        self.end_effector: EndEffector | None = None

    @classmethod
    def from_specs(
        cls,
        specs: Sequence[JointSpec],
        end_effector: Sequence[float] | None = None,
        end_effector_parent: int | None = None,
        rotation_mode: RotationMode = RotationMode.PER_AXIS,
    ) -> "KinematicChain":
        chain = cls(rotation_mode)
        for spec in specs:
            joint = JointState.create(
                spec.rotation_axis,
                pivot=spec.pivot,
                translation=spec.translation,
                gains=spec.gains,
                name=spec.name,
            )
            chain.add_joint(joint, parent=spec.parent)
        if end_effector is not None:
            chain.set_end_effector(end_effector, parent=end_effector_parent)
        return chain

    # ---- construction ----
    def add_joint(self, joint: JointState, parent: int | None = None) -> int:
        """Append ``joint`` under ``parent`` and return its index.

        ``parent=None`` attaches to the previously added joint (or makes the
        joint the root if the chain is empty). Use ``parent=-1`` to add
        another root.
        """
        index = len(self.joints)
        if parent is None:
            parent = index - 1 if index > 0 else -1
        if parent != -1:
            self._check_index(parent)
        if not joint.name:
            joint.name = f"joint{index}"
        self.joints.append(joint)
        self.parents.append(None if parent == -1 else parent)
        logger.debug("added %s (parent=%s)", joint.name, self.parents[-1])
        return index

    def set_end_effector(self, offset: Sequence[float], parent: int | None = None) -> None:
        if not self.joints:
            raise ChainError("cannot attach an end effector to an empty chain")
        parent = len(self.joints) - 1 if parent is None else parent
        self._check_index(parent)
        self.end_effector = EndEffector(offset=quat.as_vector3(offset), parent=parent)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.joints):
            raise ChainError(f"joint index out of range: {index}")

    # ---- topology ----
    def __len__(self) -> int:
        return len(self.joints)

    def __iter__(self) -> Iterator[JointState]:
        return iter(self.joints)

    def children(self, index: int) -> list[int]:
        self._check_index(index)
        return [i for i, p in enumerate(self.parents) if p == index]

    def subtree(self, index: int) -> list[int]:
        """``index`` and all of its descendants, parents before children."""
        self._check_index(index)
        out = [index]
        for i in range(index + 1, len(self.joints)):
            if self.parents[i] in out:
                out.append(i)
        return out

    def ancestors(self, index: int) -> list[int]:
        """Indices from the root down to ``index`` (inclusive)."""
        self._check_index(index)
        path: list[int] = []
        node: int | None = index
        while node is not None:
            path.append(node)
            node = self.parents[node]
        return path[::-1]

    def depth(self, index: int) -> int:
        return len(self.ancestors(index)) - 1

    # ---- motion ----
    def apply_rotation(self, index: int, rotation: Sequence[float] | np.ndarray) -> None:
        """Rotate joint ``index`` about its own pivot, in its parent's frame.

        Descendants are carried along by composition; their state is not touched.
        """
        self._check_index(index)
        joint = self.joints[index]
        q = quat.as_quat(rotation)
        joint.translation = joint.pivot + quat.rotate_vector(q, joint.translation - joint.pivot)
        joint.orientation = quat.normalize(quat.multiply(q, joint.orientation))

    def tick(self, dt: float, controller: JointController | None = None) -> list[ControlStep]:
        """Run one control step for every joint, then apply the increments."""
        if controller is None:
            controller = JointController(rotation_builder(self.rotation_mode))
        steps = [controller.step(joint, dt) for joint in self.joints]
        for index, step in enumerate(steps):
            self.apply_rotation(index, step.increment)
        return steps

    # ---- queries ----
    def world_transform(self, index: int) -> Pose:
        position = np.zeros(3, dtype=float)
        orientation = quat.identity()
        for node in self.ancestors(index):
            joint = self.joints[node]
            position = position + quat.rotate_vector(orientation, joint.translation)
            orientation = quat.multiply(orientation, joint.orientation)
        return Pose(position, orientation)

    def world_point(self, index: int, local_point: Sequence[float]) -> Vector3:
        """Map a point expressed in joint ``index``'s own frame to world space."""
        pose = self.world_transform(index)
        return pose.position + quat.rotate_vector(pose.orientation, local_point)

    def end_effector_position(self) -> Vector3:
        if self.end_effector is None:
            raise ChainError("chain has no end effector")
        return self.world_point(self.end_effector.parent, self.end_effector.offset)

    def display_position(self, decimals: int = 2) -> list[float]:
        return [round(float(v), decimals) for v in self.end_effector_position()]

    def target_angles(self) -> list[float]:
        return [joint.target_angle for joint in self.joints]

    def tracking_errors(self) -> list[float]:
        """Per-joint angle (rad) still separating each orientation from its target."""
        rotation = rotation_builder(self.rotation_mode)
        return [tracking_error(joint, rotation) for joint in self.joints]
