import math
import pytest

from orrery_sim.core.config import OrbitPolicy, UnitPolicy
from orrery_sim.core.errors import InvalidParameter
from orrery_sim.physics.orbit import OrbitalElements
from orrery_sim.physics.orbit_path import OrbitPathCache, path_for, sample, sample_ellipse


@pytest.mark.parametrize("radius,n", [(1.0, 3), (100.0, 64), (42.5, 100), (0.25, 7)])
def test_sample_shape(radius, n):
    path = sample(radius, n)
    assert len(path) == n + 1
    assert path[0] == path[-1]
    for x, y, z in path:
        assert y == 0.0
        assert math.isclose(x * x + z * z, radius * radius, rel_tol=1e-12)


def test_sample_quarter_turn():
    path = sample(100.0, 64)
    assert len(path) == 65
    assert path[0] == (100.0, 0.0, 0.0)
    x, y, z = path[16]
    assert abs(x) < 1e-9
    assert y == 0.0
    assert z == pytest.approx(100.0)


def test_sample_default_segments():
    assert len(sample(5.0)) == 65


def test_sample_rejects_degenerate_polygon():
    with pytest.raises(InvalidParameter, match="segment_count must be >= 3"):
        sample(100.0, 2)


@pytest.mark.parametrize("radius", [0.0, -5.0, math.inf, math.nan])
def test_sample_rejects_bad_radius(radius):
    with pytest.raises(InvalidParameter, match="Radius must be positive"):
        sample(radius, 16)


def test_sample_is_deterministic():
    assert sample(12.0, 32) == sample(12.0, 32)


def test_ellipse_apsides_and_closure():
    path = sample_ellipse(2.0, 0.5, 64, scale=100.0)
    assert len(path) == 65
    assert path[0] == path[-1]
    assert path[0][0] == pytest.approx(100.0)   # perihelion a(1-e)
    assert path[32][0] == pytest.approx(-300.0)  # aphelion a(1+e)
    assert all(p[1] == 0.0 for p in path)


def test_ellipse_zero_eccentricity_matches_circle():
    circle = sample(50.0, 32)
    ellipse = sample_ellipse(50.0, 0.0, 32)
    for p, q in zip(circle, ellipse):
        assert p == pytest.approx(q)


def test_ellipse_rejects_bad_parameters():
    with pytest.raises(InvalidParameter):
        sample_ellipse(1.0, 1.0, 64)
    with pytest.raises(InvalidParameter):
        sample_ellipse(1.0, 0.2, 2)
    with pytest.raises(InvalidParameter):
        sample_ellipse(-1.0, 0.2, 64)


class TestOrbitPathCache:
    def test_reuses_paths_per_radius(self):
        cache = OrbitPathCache()
        a = cache.get(100.0, 64)
        b = cache.get(100.0, 64)
        assert a is b
        assert len(cache) == 1

        cache.get(100.0, 32)
        cache.get(50.0, 64)
        assert len(cache) == 3

    def test_clear(self):
        cache = OrbitPathCache()
        cache.get(10.0)
        cache.clear()
        assert len(cache) == 0

    def test_propagates_invalid_parameter(self):
        cache = OrbitPathCache()
        with pytest.raises(InvalidParameter):
            cache.get(10.0, 2)
        assert len(cache) == 0


def test_path_for_matches_policy():
    el = OrbitalElements(body_id="x", name="X", semi_major_axis=1.0, eccentricity=0.5, orbital_period=365.0)
    units = UnitPolicy(distance_scale=100.0)

    ring = path_for(el, units, OrbitPolicy.MEAN_RADIUS, 64)
    assert ring[0] == (100.0, 0.0, 0.0)

    ellipse = path_for(el, units, OrbitPolicy.KEPLERIAN, 64)
    assert ellipse[0][0] == pytest.approx(50.0)
    assert ellipse[32][0] == pytest.approx(-150.0)

    cache = OrbitPathCache()
    first = path_for(el, units, OrbitPolicy.ACCUMULATED_ANGLE, 64, cache)
    second = path_for(el, units, OrbitPolicy.MEAN_RADIUS, 64, cache)
    assert first is second
