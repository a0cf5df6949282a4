# src/orrery_sim/physics/orbit.py

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from orrery_sim.core.config import DEFAULT_UNITS, OrbitPolicy, UnitPolicy
from orrery_sim.core.constants import TWO_PI
from orrery_sim.core.errors import InvalidElements, InvalidParameter
from orrery_sim.core.vectors import Vector3, ecliptic_point
from orrery_sim.physics.kepler import solve_keplers_equation, true_anomaly_from_eccentric, wrap_to_2pi


@dataclass(frozen=True)
class OrbitalElements:
    """
    Simplified orbital elements for one body circling the sun.

    Units:
        semi_major_axis: dataset distance unit (AU for catalogs, scene units for the planet list)
        eccentricity: 0 <= e < 1
        orbital_period: days
        size_hint: visual scale only
        initial_phase: radians
        mean_radius: optional orbit radius already in scene units (skips the distance scale)
        angular_speed: optional radians per tick for speed-driven bodies
    """
    body_id: str
    name: str
    semi_major_axis: float
    eccentricity: float
    orbital_period: float
    size_hint: float = 1.0
    initial_phase: float = 0.0
    mean_radius: Optional[float] = None
    angular_speed: Optional[float] = None

    def __post_init__(self):
        if not self.body_id.strip():
            raise InvalidElements("Body ID cannot be empty or whitespace.")
        for label, value in (
            ("Semi-major axis", self.semi_major_axis),
            ("Eccentricity", self.eccentricity),
            ("Orbital period", self.orbital_period),
            ("Size hint", self.size_hint),
            ("Initial phase", self.initial_phase),
        ):
            if not math.isfinite(value):
                raise InvalidElements(f"{label} must be finite. Got: {value}")

        if self.semi_major_axis <= 0:
            raise InvalidElements(f"Semi-major axis must be positive. Got: {self.semi_major_axis}")
        if not (0.0 <= self.eccentricity < 1.0):
            raise InvalidElements(
                f"Only elliptic orbits are supported (0 <= e < 1). Got: {self.eccentricity}"
            )
        if self.orbital_period <= 0:
            raise InvalidElements(f"Orbital period must be positive. Got: {self.orbital_period}")
        if self.size_hint <= 0:
            raise InvalidElements(f"Size hint must be positive. Got: {self.size_hint}")
        if self.mean_radius is not None and not (math.isfinite(self.mean_radius) and self.mean_radius > 0):
            raise InvalidElements(f"Mean radius must be positive. Got: {self.mean_radius}")
        if self.angular_speed is not None and not math.isfinite(self.angular_speed):
            raise InvalidElements(f"Angular speed must be finite. Got: {self.angular_speed}")

    @property
    def perihelion(self) -> float:
        return self.semi_major_axis * (1.0 - self.eccentricity)

    @property
    def aphelion(self) -> float:
        return self.semi_major_axis * (1.0 + self.eccentricity)

    @property
    def mean_distance(self) -> float:
        """(q + Q) / 2, which is the semi-major axis."""
        return (self.perihelion + self.aphelion) / 2.0


def _check_elements(elements: OrbitalElements) -> None:
    # Re-checked here so duck-typed element records fail the same way
    period = elements.orbital_period
    if not math.isfinite(period) or period <= 0:
        raise InvalidElements(f"Orbital period must be positive. Got: {period}")
    e = elements.eccentricity
    if not (0.0 <= e < 1.0):
        raise InvalidElements(f"Only elliptic orbits are supported (0 <= e < 1). Got: {e}")


def orbital_radius(elements: OrbitalElements, units: UnitPolicy = DEFAULT_UNITS) -> float:
    """Constant orbit radius in scene units."""
    if elements.mean_radius is not None:
        return elements.mean_radius
    return elements.mean_distance * units.distance_scale


def orbit_angle(elements: OrbitalElements, t: float) -> float:
    """Time-driven orbit angle (rad): one full turn per orbital period."""
    period = elements.orbital_period
    if period == 0:
        raise InvalidElements("Orbital period must be non-zero.")
    return TWO_PI * t / period


def position_at_angle(radius: float, angle_rad: float, initial_phase: float = 0.0, y_offset: float = 0.0) -> Vector3:
    return ecliptic_point(radius, angle_rad + initial_phase, y_offset)


def keplerian_position(elements: OrbitalElements, t: float, units: UnitPolicy = DEFAULT_UNITS) -> Vector3:
    """
    Two-body position in the orbital plane, sun at the focus, perihelion on +X.
    initial_phase acts as the mean anomaly at t=0.
    """
    e = elements.eccentricity
    M = wrap_to_2pi(orbit_angle(elements, t) + elements.initial_phase)
    E = solve_keplers_equation(M, e)
    nu = true_anomaly_from_eccentric(E, e)

    # orbital_radius() is the scaled semi-major axis
    r = orbital_radius(elements, units) * (1.0 - e * math.cos(E))
    return ecliptic_point(r, nu, units.y_offset)


def compute_position(
    elements: OrbitalElements,
    t: float,
    units: UnitPolicy = DEFAULT_UNITS,
    policy: OrbitPolicy = OrbitPolicy.MEAN_RADIUS,
) -> Vector3:
    """
    Position (scene units) of a body at simulation time t (days).
    Pure function of (elements, t) for the time-driven policies.
    """
    _check_elements(elements)

    if policy is OrbitPolicy.MEAN_RADIUS:
        angle = orbit_angle(elements, t)
        return position_at_angle(orbital_radius(elements, units), angle, elements.initial_phase, units.y_offset)
    if policy is OrbitPolicy.KEPLERIAN:
        return keplerian_position(elements, t, units)

    raise InvalidParameter(
        f"Policy {policy.value} keeps per-body state; step a CelestialBody instead."
    )


def advance_orbit_angle(angle_rad: float, angular_speed: float) -> float:
    """Accumulated-angle step: add a fixed increment, wrap to [0, 2π)."""
    return wrap_to_2pi(angle_rad + angular_speed)


def advance_self_rotation(rotation_rad: float, step_rad: float) -> float:
    """Cosmetic spin: monotone increment per tick, wraps at 2π."""
    if step_rad < 0:
        raise InvalidParameter(f"Rotation step must be non-negative. Got: {step_rad}")
    return wrap_to_2pi(rotation_rad + step_rad)
