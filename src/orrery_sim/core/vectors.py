from __future__ import annotations

import math
from typing import Tuple

Vector3 = Tuple[float, float, float]

ORIGIN: Vector3 = (0.0, 0.0, 0.0)


def ecliptic_point(radius: float, angle_rad: float, y: float = 0.0) -> Vector3:
    """Point on a ring of given radius in the XZ plane."""
    return (radius * math.cos(angle_rad), y, radius * math.sin(angle_rad))


def dot(a: Vector3, b: Vector3) -> float:
    return a[0]*b[0] + a[1]*b[1] + a[2]*b[2]


def norm(a: Vector3) -> float:
    return math.sqrt(dot(a, a))


def planar_radius(a: Vector3) -> float:
    """Distance from the Y axis (radius within the orbital plane)."""
    return math.hypot(a[0], a[2])
