import math
from types import SimpleNamespace

import pytest

from orrery_sim.core.config import OrbitPolicy, UnitPolicy
from orrery_sim.core.errors import InvalidElements, InvalidParameter
from orrery_sim.core.vectors import norm, planar_radius
from orrery_sim.physics.orbit import (
    OrbitalElements,
    advance_orbit_angle,
    advance_self_rotation,
    compute_position,
    orbit_angle,
    orbital_radius,
)


def earth_like(**overrides):
    fields = dict(body_id="earth", name="Earth", semi_major_axis=1.0, eccentricity=0.0, orbital_period=365.0)
    fields.update(overrides)
    return OrbitalElements(**fields)


def assert_close(p, q, tol=1e-9):
    for a, b in zip(p, q):
        assert abs(a - b) < tol, (p, q)


def test_mean_radius_end_to_end():
    el = earth_like()
    assert_close(compute_position(el, 0.0), (100.0, 0.0, 0.0))
    assert_close(compute_position(el, 182.5), (-100.0, 0.0, 0.0))
    assert_close(compute_position(el, 91.25), (0.0, 0.0, 100.0))


def test_periodicity_time_driven():
    el = OrbitalElements(
        body_id="eros", name="Eros", semi_major_axis=1.458, eccentricity=0.2229,
        orbital_period=642.4, initial_phase=0.7,
    )
    for policy in (OrbitPolicy.MEAN_RADIUS, OrbitPolicy.KEPLERIAN):
        for t1 in [0.0, 13.7, 250.0, 1000.3]:
            p1 = compute_position(el, t1, policy=policy)
            p2 = compute_position(el, t1 + el.orbital_period, policy=policy)
            assert_close(p1, p2, tol=1e-6)


def test_mean_radius_is_mean_of_perihelion_and_aphelion():
    el = earth_like(semi_major_axis=2.0, eccentricity=0.5)
    assert el.perihelion == pytest.approx(1.0)
    assert el.aphelion == pytest.approx(3.0)
    assert orbital_radius(el) == pytest.approx(200.0)
    for t in [0.0, 50.0, 300.0]:
        assert planar_radius(compute_position(el, t)) == pytest.approx(200.0)


def test_explicit_mean_radius_skips_distance_scale():
    el = earth_like(semi_major_axis=30.0, mean_radius=30.0)
    assert orbital_radius(el) == 30.0
    assert_close(compute_position(el, 0.0), (30.0, 0.0, 0.0))


def test_unit_policy_scale_and_offset():
    units = UnitPolicy(distance_scale=10.0, y_offset=5.0)
    assert_close(compute_position(earth_like(), 0.0, units), (10.0, 5.0, 0.0))


def test_initial_phase_offsets_angle():
    el = earth_like(initial_phase=math.pi / 2)
    assert_close(compute_position(el, 0.0), (0.0, 0.0, 100.0))


def test_keplerian_radius_between_perihelion_and_aphelion():
    el = earth_like(eccentricity=0.4)
    assert_close(compute_position(el, 0.0, policy=OrbitPolicy.KEPLERIAN), (60.0, 0.0, 0.0))
    assert_close(compute_position(el, 182.5, policy=OrbitPolicy.KEPLERIAN), (-140.0, 0.0, 0.0), tol=1e-6)
    for t in [10.0, 90.0, 200.0, 330.0]:
        r = norm(compute_position(el, t, policy=OrbitPolicy.KEPLERIAN))
        assert 60.0 - 1e-9 <= r <= 140.0 + 1e-9


def test_zero_period_rejected():
    with pytest.raises(InvalidElements, match="Orbital period must be positive"):
        earth_like(orbital_period=0.0)

    duck = SimpleNamespace(orbital_period=0.0, eccentricity=0.0, semi_major_axis=1.0,
                           mean_radius=None, initial_phase=0.0)
    with pytest.raises(InvalidElements):
        compute_position(duck, 10.0)
    with pytest.raises(InvalidElements):
        orbit_angle(duck, 10.0)


def test_out_of_range_eccentricity_rejected():
    with pytest.raises(InvalidElements, match="elliptic"):
        earth_like(eccentricity=1.2)
    with pytest.raises(InvalidElements, match="elliptic"):
        earth_like(eccentricity=1.0)
    with pytest.raises(InvalidElements, match="elliptic"):
        earth_like(eccentricity=-0.1)

    duck = SimpleNamespace(orbital_period=365.0, eccentricity=1.2, semi_major_axis=1.0,
                           mean_radius=None, initial_phase=0.0)
    with pytest.raises(InvalidElements):
        compute_position(duck, 0.0)


def test_accumulated_angle_policy_needs_body_state():
    with pytest.raises(InvalidParameter, match="per-body state"):
        compute_position(earth_like(), 0.0, policy=OrbitPolicy.ACCUMULATED_ANGLE)


def test_advance_orbit_angle_wraps():
    assert advance_orbit_angle(0.0, 0.01) == pytest.approx(0.01)
    assert advance_orbit_angle(2 * math.pi - 0.005, 0.01) == pytest.approx(0.005)


def test_self_rotation_monotone_and_wraps():
    r = 0.0
    previous = r
    for _ in range(100):
        r = advance_self_rotation(r, 0.01)
        assert r > previous
        previous = r
    assert r == pytest.approx(1.0)
    assert advance_self_rotation(2 * math.pi - 0.004, 0.01) == pytest.approx(0.006)

    with pytest.raises(InvalidParameter):
        advance_self_rotation(0.0, -0.1)
