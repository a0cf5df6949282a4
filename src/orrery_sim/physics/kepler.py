# Two-body anomaly helpers

from __future__ import annotations

import math

from orrery_sim.core.constants import TWO_PI


def wrap_to_2pi(angle_rad: float) -> float:
    """Wrap angle to [0, 2π)."""
    wrapped = angle_rad % TWO_PI
    # -tiny % 2π rounds to exactly 2π in floating point
    return 0.0 if wrapped >= TWO_PI else wrapped


def solve_keplers_equation(M_rad: float, e: float, tol: float = 1e-12, max_iter: int = 50) -> float:
    """
    Eccentric anomaly E for mean anomaly M on an ellipse (0 <= e < 1),
    i.e. the root of E - e sin(E) = M, by Newton-Raphson.

    Catalog comets reach e ~ 0.97, so the high-e start matters. Raises
    ValueError for e outside [0, 1) and RuntimeError if max_iter is exhausted.
    """
    if not (0.0 <= e < 1.0):
        raise ValueError("Elliptic Kepler solver requires 0 <= e < 1.")

    M = wrap_to_2pi(M_rad)

    # E(2pi - M) = 2pi - E(M): solve on [0, pi] and mirror
    mirrored = M > math.pi
    if mirrored:
        M = TWO_PI - M

    # f(E) = E - e sin E - M is increasing and convex on [0, pi] with f(pi) >= 0,
    # so Newton started at pi walks down to the root without overshooting.
    # For mild eccentricities M itself is already close.
    E = M if e < 0.8 else math.pi

    for _ in range(max_iter):
        step = (E - e * math.sin(E) - M) / (1.0 - e * math.cos(E))
        E -= step
        if abs(step) < tol:
            return wrap_to_2pi(TWO_PI - E if mirrored else E)

    raise RuntimeError(f"Kepler solver did not converge for M={M_rad}, e={e}.")


def true_anomaly_from_eccentric(E_rad: float, e: float) -> float:
    """ν from E, via atan2 so the quadrant is preserved."""
    denom = 1.0 - e * math.cos(E_rad)
    sin_v = (math.sqrt(1.0 - e * e) * math.sin(E_rad)) / denom
    cos_v = (math.cos(E_rad) - e) / denom
    return math.atan2(sin_v, cos_v)
