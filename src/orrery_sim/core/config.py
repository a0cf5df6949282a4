"""
Simulation settings.

One explicit unit policy governs every body: catalog distances (AU) are
multiplied by `distance_scale` to get scene units, and `size_hint` by
`size_scale` to get a display size. Bodies that already carry a scene-unit
radius (`mean_radius`) bypass the distance scale.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

from orrery_sim.core.constants import (
    DAYS_PER_YEAR,
    DEFAULT_ANGULAR_SPEED,
    DEFAULT_DISTANCE_SCALE,
    DEFAULT_ROTATION_STEP,
    DEFAULT_SEGMENT_COUNT,
)
from orrery_sim.core.errors import ConfigurationError


class OrbitPolicy(Enum):
    """How a body's orbit phase and radius are derived."""
    MEAN_RADIUS = "mean_radius"              # time-driven angle, constant mean radius
    ACCUMULATED_ANGLE = "accumulated_angle"  # fixed increment per tick, constant radius
    KEPLERIAN = "keplerian"                  # time-driven two-body motion on the ellipse


@dataclass(frozen=True)
class UnitPolicy:
    distance_scale: float = DEFAULT_DISTANCE_SCALE
    size_scale: float = 1.0
    days_per_year: float = DAYS_PER_YEAR
    y_offset: float = 0.0

    def __post_init__(self):
        if not (math.isfinite(self.distance_scale) and self.distance_scale > 0):
            raise ConfigurationError(f"distance_scale must be positive. Got: {self.distance_scale}")
        if not (math.isfinite(self.size_scale) and self.size_scale > 0):
            raise ConfigurationError(f"size_scale must be positive. Got: {self.size_scale}")
        if not (math.isfinite(self.days_per_year) and self.days_per_year > 0):
            raise ConfigurationError(f"days_per_year must be positive. Got: {self.days_per_year}")
        if not math.isfinite(self.y_offset):
            raise ConfigurationError(f"y_offset must be finite. Got: {self.y_offset}")


@dataclass(frozen=True)
class SimulationConfig:
    units: UnitPolicy = field(default_factory=UnitPolicy)
    policy: OrbitPolicy = OrbitPolicy.MEAN_RADIUS
    segment_count: int = DEFAULT_SEGMENT_COUNT
    rotation_step: float = DEFAULT_ROTATION_STEP
    default_angular_speed: float = DEFAULT_ANGULAR_SPEED
    dt_days: float = 1.0

    def __post_init__(self):
        if not isinstance(self.policy, OrbitPolicy):
            raise ConfigurationError(f"policy must be an OrbitPolicy. Got: {self.policy!r}")
        if self.segment_count < 3:
            raise ConfigurationError(f"segment_count must be >= 3. Got: {self.segment_count}")
        if not (math.isfinite(self.rotation_step) and self.rotation_step >= 0):
            raise ConfigurationError(f"rotation_step must be non-negative. Got: {self.rotation_step}")
        if not math.isfinite(self.default_angular_speed):
            raise ConfigurationError(f"default_angular_speed must be finite. Got: {self.default_angular_speed}")
        if not (math.isfinite(self.dt_days) and self.dt_days > 0):
            raise ConfigurationError(f"dt_days must be positive. Got: {self.dt_days}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SimulationConfig":
        """
        Build from a plain mapping, e.g.
            {"units": {"distance_scale": 100}, "policy": "keplerian", "segment_count": 128}
        Unknown keys are rejected.
        """
        data = dict(data)
        units_data = data.pop("units", {}) or {}
        try:
            units = UnitPolicy(**units_data)
        except TypeError as exc:
            raise ConfigurationError(f"Unknown unit setting: {exc}") from exc

        if "policy" in data:
            try:
                data["policy"] = OrbitPolicy(data["policy"])
            except ValueError as exc:
                raise ConfigurationError(f"Unknown orbit policy. Got: {data['policy']!r}") from exc

        try:
            return cls(units=units, **data)
        except TypeError as exc:
            raise ConfigurationError(f"Unknown simulation setting: {exc}") from exc


def load_config(path: str) -> SimulationConfig:
    """Read a SimulationConfig from a JSON file."""
    try:
        with open(Path(path), "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Could not read config file '{path}': {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file '{path}' must hold a JSON object.")
    return SimulationConfig.from_dict(data)


DEFAULT_UNITS = UnitPolicy()
DEFAULT_CONFIG = SimulationConfig()
