# tests/test_physics_astrometry.py
import math
import pytest

from minorephem.config import SPEED_OF_LIGHT_AU_PER_DAY
from minorephem.core.types import ApparentPlace, Position, PositionProvider
from minorephem.data.sun_position import KeplerianSunPosition
from minorephem.physics.astrometry import AstrometricReducer, light_time
from minorephem.physics.orbit import OrbitalElementSet, OrbitPropagator

JDE = 2458760.5


class RecordingProvider(PositionProvider):
    """Returns a fixed position and records every requested date."""

    def __init__(self, x, y, z):
        self.pos = Position(x, y, z, math.sqrt(x * x + y * y + z * z))
        self.calls = []

    def position(self, jde):
        self.calls.append(jde)
        return self.pos


class LinearMotionProvider(PositionProvider):
    """Moves along +y at a fixed speed (AU/day)."""

    def __init__(self, x0, y0, z0, speed):
        self.start = (x0, y0, z0)
        self.speed = speed

    def position(self, jde):
        x0, y0, z0 = self.start
        y = y0 + self.speed * (jde - JDE)
        return Position(x0, y, z0, math.sqrt(x0 * x0 + y * y + z0 * z0))


def test_light_time_one_au():
    """Light crosses 1 AU in about 8.32 minutes."""
    tau = light_time(1.0)
    assert math.isclose(tau, 0.005776, abs_tol=1e-6)
    assert math.isclose(tau * 1440.0, 8.317, abs_tol=1e-3)


def test_object_reevaluated_once_at_retarded_time():
    """With delta = 1 AU the second evaluation is at jde - 1/c."""
    sun = RecordingProvider(1.0, 0.0, 0.0)
    obj = RecordingProvider(-1.0, 1.0, 0.0)  # geocentric (0, 1, 0)

    AstrometricReducer(obj, sun).reduce(JDE)

    assert len(obj.calls) == 2
    assert obj.calls[0] == JDE
    assert obj.calls[1] == pytest.approx(JDE - 1.0 / SPEED_OF_LIGHT_AU_PER_DAY, abs=1e-12)
    assert sun.calls == [JDE]


def test_reduction_geometry_right_angle():
    sun = RecordingProvider(1.0, 0.0, 0.0)
    obj = RecordingProvider(-1.0, 1.0, 0.0)

    place = AstrometricReducer(obj, sun).reduce(JDE)

    assert isinstance(place, ApparentPlace)
    assert place.ra == pytest.approx(math.pi / 2)
    assert place.dec == pytest.approx(0.0)
    assert place.delta == pytest.approx(1.0)
    assert place.r == pytest.approx(math.sqrt(2.0))
    assert place.elongation == pytest.approx(math.pi / 2)
    assert place.phase_angle == pytest.approx(math.pi / 4)


def test_corrected_position_is_used():
    """Distances come from the object at jde - tau, not at jde."""
    sun = RecordingProvider(1.0, 0.0, 0.0)
    obj = LinearMotionProvider(-1.0, 1.0, 0.0, speed=0.5)

    place = AstrometricReducer(obj, sun).reduce(JDE)

    retarded = obj.position(JDE - light_time(1.0))
    expected_delta = math.sqrt((1.0 + retarded.x) ** 2 + retarded.y ** 2 + retarded.z ** 2)
    assert place.delta == pytest.approx(expected_delta, abs=1e-15)
    assert place.r == pytest.approx(retarded.r, abs=1e-15)
    assert place.delta < 1.0


def test_right_ascension_normalized():
    sun = RecordingProvider(1.0, 0.0, 0.0)
    obj = RecordingProvider(-1.0, -1.0, 0.5)  # geocentric eta < 0

    place = AstrometricReducer(obj, sun).reduce(JDE)

    assert math.pi < place.ra < 2 * math.pi
    assert place.dec > 0


def test_triangle_law_of_sines():
    """Earth, Sun and the light-time corrected object form a closed triangle."""
    elements = OrbitalElementSet.from_mean_anomaly(
        2.7691652, 0.0765760, math.radians(10.59407), math.radians(73.59764),
        math.radians(80.30553), math.radians(77.37209), 2459000.5)
    sun = KeplerianSunPosition()
    reducer = AstrometricReducer(OrbitPropagator(elements), sun)

    for jde in (2459000.5, 2459100.5, 2459250.5):
        place = reducer.reduce(jde)
        R = sun.position(jde).r
        sun_angle = math.pi - place.elongation - place.phase_angle
        assert sun_angle > 0
        assert place.r / math.sin(place.elongation) == pytest.approx(R / math.sin(place.phase_angle), rel=1e-9)
        assert place.delta / math.sin(sun_angle) == pytest.approx(R / math.sin(place.phase_angle), rel=1e-9)
        assert 0 <= place.ra < 2 * math.pi
        assert -math.pi / 2 <= place.dec <= math.pi / 2
