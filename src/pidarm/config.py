"""YAML chain configuration.

Example::

    rotation_mode: per_axis
    default_gains: {p: 20, i: 8, d: 0.05}
    joints:
      - name: base
        axis: [0, 1, 0]
        translation: [0, 0.75, 0]
      - name: elbow
        axis: [1, 0, 0]
        pivot: [0, 0.75, 0]
        translation: [0.3, 1.5, 0]
        parent: 0
    end_effector: {offset: [0, 0.75, 0]}

``parent`` defaults to the previous joint; ``-1`` starts a new root.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from pidarm.core.orientation import RotationMode
from pidarm.model.chain import ChainError, JointSpec, KinematicChain
from pidarm.model.joint import PIDGains
from pidarm.presets import DEFAULT_GAINS

logger = logging.getLogger(__name__)

__all__ = ["ConfigError", "load_chain", "parse_chain"]


class ConfigError(ValueError):
    """Configuration file is missing keys or holds ill-typed values."""


def _vec3(value: Any, key: str) -> tuple[float, float, float]:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise ConfigError(f"'{key}' must be a list of 3 numbers")
    try:
        x, y, z = (float(v) for v in value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"'{key}' must be a list of 3 numbers") from e
    return x, y, z


def _gains(value: Any, key: str, fallback: PIDGains) -> PIDGains:
    if value is None:
        return fallback
    if not isinstance(value, Mapping):
        raise ConfigError(f"'{key}' must be a mapping with p/i/d")
    try:
        return PIDGains(
            p_gain=float(value.get("p", fallback.p_gain)),
            i_gain=float(value.get("i", fallback.i_gain)),
            d_gain=float(value.get("d", fallback.d_gain)),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"'{key}' gains must be numbers") from e


def _parent(value: Any, key: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"'{key}' must be an integer joint index")
    return value


def parse_chain(data: Mapping[str, Any]) -> KinematicChain:
    if not isinstance(data, Mapping):
        raise ConfigError("configuration root must be a mapping")

    try:
        mode = RotationMode(data.get("rotation_mode", RotationMode.PER_AXIS.value))
    except ValueError as e:
        raise ConfigError(f"unknown rotation_mode: {data.get('rotation_mode')!r}") from e

    default_gains = _gains(data.get("default_gains"), "default_gains", DEFAULT_GAINS)

    joints = data.get("joints")
    if not isinstance(joints, list) or not joints:
        raise ConfigError("'joints' must be a non-empty list")

    specs: list[JointSpec] = []
    for i, entry in enumerate(joints):
        key = f"joints[{i}]"
        if not isinstance(entry, Mapping):
            raise ConfigError(f"'{key}' must be a mapping")
        if "axis" not in entry:
            raise ConfigError(f"missing '{key}.axis'")
        specs.append(
            JointSpec(
                rotation_axis=_vec3(entry["axis"], f"{key}.axis"),
                pivot=_vec3(entry.get("pivot", [0, 0, 0]), f"{key}.pivot"),
                translation=_vec3(entry.get("translation", [0, 0, 0]), f"{key}.translation"),
                gains=_gains(entry.get("gains"), f"{key}.gains", default_gains),
                parent=_parent(entry.get("parent"), f"{key}.parent"),
                name=str(entry.get("name") or ""),
            )
        )

    effector = data.get("end_effector")
    offset = None
    effector_parent = None
    if effector is not None:
        if not isinstance(effector, Mapping) or "offset" not in effector:
            raise ConfigError("'end_effector' must be a mapping with an 'offset'")
        offset = _vec3(effector["offset"], "end_effector.offset")
        effector_parent = _parent(effector.get("parent"), "end_effector.parent")

    try:
        chain = KinematicChain.from_specs(specs, offset, effector_parent, rotation_mode=mode)
    except ChainError as e:
        raise ConfigError(str(e)) from e
    logger.info("loaded chain with %d joints (%s)", len(chain), mode.value)
    return chain


def load_chain(path: str | Path) -> KinematicChain:
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e
    return parse_chain(data)
