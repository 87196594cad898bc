from .control.pid import ControlStep, JointController, pid_step
from .control.targets import TargetCommand, apply_command, clamp_angle, resolve_command
from .core.orientation import RotationMode, error_quaternion, joint_rotation
from .model.chain import ChainError, JointSpec, KinematicChain, Pose
from .model.joint import ControllerMemory, JointState, PIDGains

__all__ = [
    "ChainError",
    "ControlStep",
    "ControllerMemory",
    "JointController",
    "JointSpec",
    "JointState",
    "KinematicChain",
    "PIDGains",
    "Pose",
    "RotationMode",
    "TargetCommand",
    "apply_command",
    "clamp_angle",
    "error_quaternion",
    "joint_rotation",
    "pid_step",
    "resolve_command",
]
