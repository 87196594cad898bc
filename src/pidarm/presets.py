"""Ready-made chains, including the three-link demo arm."""

from __future__ import annotations

from collections.abc import Sequence

from pidarm.core.orientation import RotationMode
from pidarm.model.chain import JointSpec, KinematicChain
from pidarm.model.joint import PIDGains

P_GAIN = 20.0
I_GAIN = 8.0
D_GAIN = 0.05

ARM_LENGTH = 1.5
ARM_WIDTH = 0.3

DEFAULT_GAINS = PIDGains(P_GAIN, I_GAIN, D_GAIN)


def three_link_specs(gains: PIDGains = DEFAULT_GAINS) -> list[JointSpec]:
    """Base turning about Y, then two elbows about X stacked on top of each other.

    Each link is offset sideways by ``ARM_WIDTH`` so neighbours do not overlap.
    """
    elbow_pivot = (0.0, ARM_LENGTH / 2.0, 0.0)
    return [
        JointSpec(rotation_axis=(0.0, 1.0, 0.0), translation=(0.0, ARM_LENGTH / 2.0, 0.0), gains=gains, name="base"),
        JointSpec(
            rotation_axis=(1.0, 0.0, 0.0),
            pivot=elbow_pivot,
            translation=(ARM_WIDTH, ARM_LENGTH, 0.0),
            gains=gains,
            name="elbow1",
        ),
        JointSpec(
            rotation_axis=(1.0, 0.0, 0.0),
            pivot=elbow_pivot,
            translation=(ARM_WIDTH, ARM_LENGTH, 0.0),
            gains=gains,
            name="elbow2",
        ),
    ]


def three_link_arm(
    gains: PIDGains = DEFAULT_GAINS, rotation_mode: RotationMode = RotationMode.PER_AXIS
) -> KinematicChain:
    return KinematicChain.from_specs(
        three_link_specs(gains),
        end_effector=(0.0, ARM_LENGTH / 2.0, 0.0),
        rotation_mode=rotation_mode,
    )


def single_joint(
    rotation_axis: Sequence[float] = (0.0, 1.0, 0.0),
    gains: PIDGains = DEFAULT_GAINS,
    length: float = ARM_LENGTH,
) -> KinematicChain:
    spec = JointSpec(
        rotation_axis=(float(rotation_axis[0]), float(rotation_axis[1]), float(rotation_axis[2])),
        translation=(0.0, length / 2.0, 0.0),
        gains=gains,
        name="joint0",
    )
    return KinematicChain.from_specs([spec], end_effector=(0.0, length / 2.0, 0.0))


PRESETS = {
    "three-link": three_link_arm,
    "single": single_joint,
}
