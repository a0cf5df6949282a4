from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from orrery_sim.core.config import DEFAULT_CONFIG, DEFAULT_UNITS, OrbitPolicy, SimulationConfig, UnitPolicy
from orrery_sim.core.errors import ConfigurationError
from orrery_sim.core.vectors import ORIGIN, Vector3
from orrery_sim.physics.orbit import (
    OrbitalElements,
    advance_orbit_angle,
    advance_self_rotation,
    compute_position,
    orbital_radius,
    position_at_angle,
)


@dataclass
class BodyState:
    """Per-frame state. Written only by the owning body's kinematics step."""
    position: Vector3 = ORIGIN
    self_rotation: float = 0.0
    orbit_angle: float = 0.0
    last_t: Optional[float] = None


@dataclass
class CelestialBody:
    """
    A body in the orrery: immutable elements plus mutable per-frame state.
    The policy is fixed per body so the orbit phase strategy never changes mid-run.
    """
    elements: OrbitalElements
    policy: OrbitPolicy = OrbitPolicy.MEAN_RADIUS
    units: UnitPolicy = DEFAULT_UNITS
    state: BodyState = field(default_factory=BodyState)

    def __post_init__(self):
        # Start at the t=0 position so presentation has something to draw before the first tick
        self.state.position = self._initial_position()

    @property
    def body_id(self) -> str:
        return self.elements.body_id

    @property
    def name(self) -> str:
        return self.elements.name

    def display_size(self) -> float:
        return self.elements.size_hint * self.units.size_scale

    def _initial_position(self) -> Vector3:
        if self.policy is OrbitPolicy.ACCUMULATED_ANGLE:
            return position_at_angle(
                orbital_radius(self.elements, self.units),
                self.state.orbit_angle,
                self.elements.initial_phase,
                self.units.y_offset,
            )
        return compute_position(self.elements, 0.0, self.units, self.policy)

    def advance(self, t: float, config: SimulationConfig = DEFAULT_CONFIG) -> BodyState:
        """
        Move to simulation time t (days) and spin by one rotation step.
        Speed-driven bodies ignore t and add their angular speed once per call.
        config.units must match the units the body was built with.
        """
        if config.units != self.units:
            raise ConfigurationError(
                f"Body '{self.body_id}' was built with {self.units}, stepped with {config.units}."
            )

        if self.policy is OrbitPolicy.ACCUMULATED_ANGLE:
            speed = self.elements.angular_speed
            if speed is None:
                speed = config.default_angular_speed
            self.state.orbit_angle = advance_orbit_angle(self.state.orbit_angle, speed)
            self.state.position = position_at_angle(
                orbital_radius(self.elements, self.units),
                self.state.orbit_angle,
                self.elements.initial_phase,
                self.units.y_offset,
            )
        else:
            self.state.position = compute_position(self.elements, t, self.units, self.policy)

        self.state.self_rotation = advance_self_rotation(self.state.self_rotation, config.rotation_step)
        self.state.last_t = t
        return self.state
