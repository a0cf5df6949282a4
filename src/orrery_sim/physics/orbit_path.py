"""
Orbit ring sampling.

Paths are closed polylines: `segment_count + 1` points where the last point
repeats the first, so a line-loop renderer draws a seamless ring.
"""

from __future__ import annotations

import math
from typing import Dict, Optional, Tuple

from orrery_sim.core.config import DEFAULT_UNITS, OrbitPolicy, UnitPolicy
from orrery_sim.core.constants import DEFAULT_SEGMENT_COUNT, TWO_PI
from orrery_sim.core.errors import InvalidParameter
from orrery_sim.core.vectors import Vector3
from orrery_sim.physics.orbit import OrbitalElements, orbital_radius

OrbitPath = Tuple[Vector3, ...]


def _check_segments(segment_count: int) -> None:
    if segment_count < 3:
        raise InvalidParameter(f"segment_count must be >= 3. Got: {segment_count}")


def sample(radius: float, segment_count: int = DEFAULT_SEGMENT_COUNT) -> OrbitPath:
    """Circle of given radius in the XZ plane, starting on +X."""
    _check_segments(segment_count)
    if not (math.isfinite(radius) and radius > 0):
        raise InvalidParameter(f"Radius must be positive. Got: {radius}")

    points = []
    for i in range(segment_count):
        theta = (i / segment_count) * TWO_PI
        points.append((radius * math.cos(theta), 0.0, radius * math.sin(theta)))
    points.append(points[0])
    return tuple(points)


def sample_ellipse(
    semi_major_axis: float,
    eccentricity: float,
    segment_count: int = DEFAULT_SEGMENT_COUNT,
    scale: float = 1.0,
) -> OrbitPath:
    """
    Ellipse with the sun at one focus and perihelion on +X:
        r(θ) = a(1 - e²) / (1 + e cos θ)
    sampled uniformly in true anomaly.
    """
    _check_segments(segment_count)
    if not (math.isfinite(semi_major_axis) and semi_major_axis > 0):
        raise InvalidParameter(f"Semi-major axis must be positive. Got: {semi_major_axis}")
    if not (0.0 <= eccentricity < 1.0):
        raise InvalidParameter(f"Eccentricity must be in [0, 1). Got: {eccentricity}")

    p = semi_major_axis * scale * (1.0 - eccentricity * eccentricity)
    points = []
    for i in range(segment_count):
        theta = (i / segment_count) * TWO_PI
        r = p / (1.0 + eccentricity * math.cos(theta))
        points.append((r * math.cos(theta), 0.0, r * math.sin(theta)))
    points.append(points[0])
    return tuple(points)


class OrbitPathCache:
    """Memoised circle paths keyed by (radius, segment_count)."""

    def __init__(self):
        self._paths: Dict[Tuple[float, int], OrbitPath] = {}

    def get(self, radius: float, segment_count: int = DEFAULT_SEGMENT_COUNT) -> OrbitPath:
        key = (radius, segment_count)
        path = self._paths.get(key)
        if path is None:
            path = sample(radius, segment_count)
            self._paths[key] = path
        return path

    def clear(self) -> None:
        self._paths.clear()

    def __len__(self) -> int:
        return len(self._paths)


def path_for(
    elements: OrbitalElements,
    units: UnitPolicy = DEFAULT_UNITS,
    policy: OrbitPolicy = OrbitPolicy.MEAN_RADIUS,
    segment_count: int = DEFAULT_SEGMENT_COUNT,
    cache: Optional[OrbitPathCache] = None,
) -> OrbitPath:
    """Ring that matches how the body is animated under `policy`."""
    radius = orbital_radius(elements, units)
    if policy is OrbitPolicy.KEPLERIAN:
        # radius is the scaled semi-major axis
        return sample_ellipse(radius, elements.eccentricity, segment_count)
    if cache is not None:
        return cache.get(radius, segment_count)
    return sample(radius, segment_count)
