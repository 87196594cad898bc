"""Per-joint state: gains, controller memory, pivot, axis and target."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

from pidarm.core import quaternion as quat
from pidarm.type_utils import Quat, Vector3


def _zeros3() -> Vector3:
    return np.zeros(3, dtype=float)


@dataclass(frozen=True)
class PIDGains:
    p_gain: float = 20.0
    i_gain: float = 8.0
    d_gain: float = 0.05


@dataclass
class ControllerMemory:
    """Last proportional error and accumulated integral error."""

    p_prior: Vector3 = field(default_factory=_zeros3)
    i_prior: Vector3 = field(default_factory=_zeros3)

    def reset(self) -> None:
        self.p_prior = _zeros3()
        self.i_prior = _zeros3()


@dataclass
class JointState:
    """A single rigid link with its own PID controller state.

    ``pivot`` and ``translation`` live in the parent's frame. The controller
    rotates the joint about ``pivot``, which moves ``translation`` and
    updates ``orientation``.
    """

    rotation_axis: Vector3
    pivot: Vector3 = field(default_factory=_zeros3)
    translation: Vector3 = field(default_factory=_zeros3)
    gains: PIDGains = field(default_factory=PIDGains)
    target_angle: float = 0.0
    name: str = ""
    memory: ControllerMemory = field(default_factory=ControllerMemory)
    orientation: Quat = field(default_factory=quat.identity)

    def __post_init__(self) -> None:
        self.rotation_axis = quat.as_vector3(self.rotation_axis)
        self.pivot = quat.as_vector3(self.pivot)
        self.translation = quat.as_vector3(self.translation)
        self.orientation = quat.as_quat(self.orientation)
        self.target_angle = float(self.target_angle)

    @classmethod
    def create(
        cls,
        rotation_axis: Sequence[float],
        pivot: Sequence[float] = (0.0, 0.0, 0.0),
        translation: Sequence[float] = (0.0, 0.0, 0.0),
        gains: PIDGains | None = None,
        name: str = "",
    ) -> "JointState":
        return cls(
            rotation_axis=np.asarray(rotation_axis, dtype=float),
            pivot=np.asarray(pivot, dtype=float),
            translation=np.asarray(translation, dtype=float),
            gains=gains if gains is not None else PIDGains(),
            name=name,
        )

    def reset_memory(self) -> None:
        self.memory.reset()
