"""
Heliocentric positions of minor planets from Keplerian elements.

The propagator follows Meeus, Astronomical Algorithms (2nd ed.), chapter 33:
the orientation of the orbit relative to the J2000 equator is reduced once to
three angles and three magnitudes (33.7, 33.8), after which every position
costs one Kepler solution and three sines (33.9).
"""

import logging
import math
from dataclasses import dataclass

from ..config import (
    DANGEROUS_ECCENTRICITY_WARNING,
    GAUSSIAN_GRAVITATIONAL_CONSTANT,
    SIN_OBLIQUITY_J2000,
    COS_OBLIQUITY_J2000
)
from ..core.types import Position, PositionProvider
from .kepler import solve_kepler, true_anomaly, radius_vector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrbitalElementSet:
    """
    Elliptical heliocentric orbital elements referred to the J2000 ecliptic.

    Attributes:
        semimajor_axis: a in AU (> 0)
        eccentricity: e, 0 <= e < 1 (not validated)
        inclination: i in radians
        arg_perihelion: omega in radians
        ascending_node: Omega in radians
        perihelion_time: T_p as a Julian Ephemeris Date
    """
    semimajor_axis: float
    eccentricity: float
    inclination: float
    arg_perihelion: float
    ascending_node: float
    perihelion_time: float

    @classmethod
    def from_mean_anomaly(cls,
                          semimajor_axis: float,
                          eccentricity: float,
                          inclination: float,
                          arg_perihelion: float,
                          ascending_node: float,
                          mean_anomaly: float,
                          epoch_jde: float) -> 'OrbitalElementSet':
        """
        Builds an element set from the mean anomaly at an osculation epoch,
        as catalogs publish them. Angles in radians.
        """
        n = GAUSSIAN_GRAVITATIONAL_CONSTANT / (semimajor_axis * math.sqrt(semimajor_axis))
        return cls(
            semimajor_axis=semimajor_axis,
            eccentricity=eccentricity,
            inclination=inclination,
            arg_perihelion=arg_perihelion,
            ascending_node=ascending_node,
            perihelion_time=epoch_jde - mean_anomaly / n,
        )


class OrbitPropagator(PositionProvider):
    """
    Heliocentric J2000 equatorial positions for one set of orbital elements.

    Mean motion and the orientation constants are computed at construction and
    never change, so a propagator can be shared freely between callers.
    """

    def __init__(self, elements: OrbitalElementSet):
        self.elements = elements

        a = elements.semimajor_axis
        self.mean_motion = GAUSSIAN_GRAVITATIONAL_CONSTANT / (a * math.sqrt(a))

        sin_node, cos_node = math.sin(elements.ascending_node), math.cos(elements.ascending_node)
        sin_i, cos_i = math.sin(elements.inclination), math.cos(elements.inclination)
        sin_eps, cos_eps = SIN_OBLIQUITY_J2000, COS_OBLIQUITY_J2000

        # (33.7)
        F = cos_node
        G = sin_node * cos_eps
        H = sin_node * sin_eps
        P = -sin_node * cos_i
        Q = cos_node * cos_i * cos_eps - sin_i * sin_eps
        R = cos_node * cos_i * sin_eps + sin_i * cos_eps

        # (33.8)
        self.angle_a = math.atan2(F, P)
        self.angle_b = math.atan2(G, Q)
        self.angle_c = math.atan2(H, R)
        self.magnitude_a = math.hypot(F, P)
        self.magnitude_b = math.hypot(G, Q)
        self.magnitude_c = math.hypot(H, R)

        if elements.eccentricity > DANGEROUS_ECCENTRICITY_WARNING:
            logger.warning(f"High eccentricity {elements.eccentricity:.6f}: Newton iteration may need the bisection fallback")

        logger.debug(f"Propagator ready: a={a:.6f} AU, e={elements.eccentricity:.6f}, "
                     f"n={math.degrees(self.mean_motion):.8f} deg/day")

    def mean_anomaly(self, jde: float) -> float:
        return self.mean_motion * (jde - self.elements.perihelion_time)

    def position(self, jde: float) -> Position:
        """
        Heliocentric rectangular equatorial coordinates at jde.

        Args:
            jde: Julian Ephemeris Date.

        Returns:
            Position(x, y, z, r) in AU.
        """
        e = self.elements.eccentricity
        E = solve_kepler(self.mean_anomaly(jde), e)
        nu = true_anomaly(E, e)
        r = float(radius_vector(E, e, self.elements.semimajor_axis))

        # (33.9)
        u = self.elements.arg_perihelion + nu
        x = r * self.magnitude_a * math.sin(self.angle_a + u)
        y = r * self.magnitude_b * math.sin(self.angle_b + u)
        z = r * self.magnitude_c * math.sin(self.angle_c + u)
        return Position(x, y, z, r)
