"""
Providers of the Sun's geocentric position for astrometric reduction.

Both providers return J2000 equatorial rectangular coordinates (X, Y, Z) of
the Sun as seen from the Earth's center, plus the Earth-Sun distance R.
"""

import logging
import math
from typing import Dict, Optional

import numpy as np
from skyfield.api import Loader, load

from ..config import (
    DEFAULT_SKYFIELD_KERNEL,
    EARTH_MEAN_ELEMENTS_J2000,
    J2000_JDE
)
from ..core.types import Position, PositionProvider
from ..exceptions import EphemerisLoadError
from ..physics.orbit import OrbitalElementSet, OrbitPropagator

logger = logging.getLogger(__name__)


class SkyfieldSunPosition(PositionProvider):
    """
    Sun positions from a JPL development ephemeris through Skyfield.

    Args:
        ephemeris: A loaded Skyfield kernel containing 'sun' and 'earth'.
        timescale: A Skyfield Timescale.
    """

    def __init__(self, ephemeris, timescale):
        self.timescale = timescale
        self._sun_from_earth = ephemeris['sun'] - ephemeris['earth']

    @classmethod
    def load(cls, kernel: str = DEFAULT_SKYFIELD_KERNEL,
             directory: Optional[str] = None) -> 'SkyfieldSunPosition':
        """
        Loads the kernel once. Skyfield downloads it on first use if it is
        not already present in the working (or given) directory.

        Raises:
            EphemerisLoadError: If the kernel cannot be read or downloaded.
        """
        loader = Loader(directory) if directory else load
        logger.info(f"Loading planetary ephemeris {kernel}")
        try:
            return cls(loader(kernel), loader.timescale())
        except (OSError, ValueError, KeyError) as e:
            raise EphemerisLoadError(f"Cannot load planetary ephemeris '{kernel}': {e}") from e

    def position(self, jde: float) -> Position:
        t = self.timescale.tt_jd(jde)
        x, y, z = np.asarray(self._sun_from_earth.at(t).position.au, dtype=float)
        return Position(float(x), float(y), float(z), float(math.sqrt(x * x + y * y + z * z)))


class KeplerianSunPosition(PositionProvider):
    """
    Low-precision Sun positions from Earth's mean J2000 orbital elements.

    Mean motion is derived from the semimajor axis, so the longitude drifts
    by about 0.02 degree per decade away from J2000 on top of the ~0.01 degree
    error of the mean orbit itself. Needs no ephemeris file.
    """

    def __init__(self, elements: Dict[str, float] = EARTH_MEAN_ELEMENTS_J2000):
        arg_perihelion = elements['varpi_deg'] - elements['Omega_deg']
        mean_anomaly = elements['L_deg'] - elements['varpi_deg']
        self._earth = OrbitPropagator(OrbitalElementSet.from_mean_anomaly(
            semimajor_axis=elements['a'],
            eccentricity=elements['e'],
            inclination=math.radians(elements['i_deg']),
            arg_perihelion=math.radians(arg_perihelion),
            ascending_node=math.radians(elements['Omega_deg']),
            mean_anomaly=math.radians(mean_anomaly),
            epoch_jde=J2000_JDE,
        ))

    def position(self, jde: float) -> Position:
        x, y, z, r = self._earth.position(jde)
        return Position(-x, -y, -z, r)
