"""
Shared data types for the ephemeris pipeline.

Positions flow from a PositionProvider into the astrometric reduction, and
each queried instant yields one immutable EphemerisSample.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import NamedTuple, Optional


class Position(NamedTuple):
    """Rectangular equatorial J2000 coordinates and distance, all in AU."""
    x: float
    y: float
    z: float
    r: float


class ApparentPlace(NamedTuple):
    """Output of the astrometric reduction (angles in radians, distances in AU).

    Attributes:
        ra: Right ascension in [0, 2*pi)
        dec: Declination
        elongation: Sun-Earth-object angle
        phase_angle: Sun-object-Earth angle
        r: Heliocentric distance of the object
        delta: Geocentric distance of the object
    """
    ra: float
    dec: float
    elongation: float
    phase_angle: float
    r: float
    delta: float


class PositionProvider(ABC):
    """Anything that can place a body in J2000 equatorial rectangular coordinates.

    Implemented by the orbit propagator (heliocentric object positions) and by
    the Earth/Sun ephemeris providers (geocentric Sun positions).
    """

    @abstractmethod
    def position(self, jde: float) -> Position:
        """Returns (x, y, z, r) in AU at Julian Ephemeris Date jde."""
        pass


@dataclass(frozen=True)
class EphemerisSample:
    """Apparent place and brightness of an object at one instant.

    Angles are in radians and distances in AU. magnitude is None exactly when
    the object's absolute magnitude H is unknown.
    """
    jde: float
    ra: float
    dec: float
    elongation: float
    phase_angle: float
    r: float
    delta: float
    magnitude: Optional[float] = None
