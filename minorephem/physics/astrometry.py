"""
Reduction of heliocentric positions to apparent geocentric coordinates.

The reducer combines an object position provider with a provider of the
Sun's geocentric position (Meeus 33.10) and applies one light-time step.
"""

import logging
import math

from ..config import SPEED_OF_LIGHT_AU_PER_DAY
from ..core.types import ApparentPlace, PositionProvider

logger = logging.getLogger(__name__)


def light_time(distance_au: float) -> float:
    """Light travel time in days over distance_au."""
    return distance_au / SPEED_OF_LIGHT_AU_PER_DAY


class AstrometricReducer:
    """
    Computes astrometric J2000 right ascension, declination, elongation and
    phase angle of an object as seen from the center of the Earth.

    Args:
        object_provider: Heliocentric positions of the object.
        sun_provider: Geocentric positions of the Sun (X, Y, Z, R), which is the
            Earth's heliocentric position with its sign reversed. The provider
            is expected to be loaded already and is only read from.
    """

    def __init__(self, object_provider: PositionProvider, sun_provider: PositionProvider):
        self.object_provider = object_provider
        self.sun_provider = sun_provider

    def reduce(self, jde: float) -> ApparentPlace:
        """
        Apparent place of the object at jde.

        The object is re-evaluated once at jde - tau, tau being the light time
        over the first geocentric distance. The Earth stays at jde. Coincident
        bodies (zero r or delta) are outside the domain and not checked.
        """
        X, Y, Z, R = self.sun_provider.position(jde)

        x, y, z, r = self.object_provider.position(jde)
        xi, eta, zeta = X + x, Y + y, Z + z
        delta = math.sqrt(xi * xi + eta * eta + zeta * zeta)

        tau = light_time(delta)
        x, y, z, r = self.object_provider.position(jde - tau)
        xi, eta, zeta = X + x, Y + y, Z + z
        delta = math.sqrt(xi * xi + eta * eta + zeta * zeta)

        ra = math.atan2(eta, xi)
        if ra < 0:
            ra += 2 * math.pi
        dec = math.asin(zeta / delta)

        R = math.sqrt(X * X + Y * Y + Z * Z)
        elongation = math.acos((xi * X + eta * Y + zeta * Z) / R / delta)
        phase_angle = math.acos((xi * x + eta * y + zeta * z) / r / delta)

        return ApparentPlace(ra, dec, elongation, phase_angle, r, delta)
