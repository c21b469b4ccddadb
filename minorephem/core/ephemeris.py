"""
Ephemeris generation for a single minor planet.

Ties the orbit propagator, the astrometric reducer and the H-G magnitude law
together: one EphemerisSample per requested Julian Ephemeris Date.
"""

import logging
from typing import Iterable, List

from ..physics.astrometry import AstrometricReducer
from ..physics.orbit import OrbitalElementSet, OrbitPropagator
from ..physics.photometry import AbsoluteMagnitudeParams, apparent_magnitude
from .types import EphemerisSample, PositionProvider

logger = logging.getLogger(__name__)


class EphemerisGenerator:
    """
    Produces apparent places and magnitudes for one object.

    The sun provider is passed in already loaded and is reused for every
    sample; its lifetime belongs to the caller.

    Args:
        elements: Orbital elements of the object.
        sun_provider: Geocentric Sun positions (see AstrometricReducer).
        magnitude_params: H and G of the object; defaults to unknown H.
    """

    def __init__(self,
                 elements: OrbitalElementSet,
                 sun_provider: PositionProvider,
                 magnitude_params: AbsoluteMagnitudeParams = AbsoluteMagnitudeParams()):
        self.propagator = OrbitPropagator(elements)
        self.reducer = AstrometricReducer(self.propagator, sun_provider)
        self.magnitude_params = magnitude_params

    def sample(self, jde: float) -> EphemerisSample:
        place = self.reducer.reduce(jde)
        magnitude = apparent_magnitude(self.magnitude_params, place.phase_angle, place.r, place.delta)
        logger.debug(f"JDE {jde:.5f}: r={place.r:.6f} AU, delta={place.delta:.6f} AU, V={magnitude}")
        return EphemerisSample(
            jde=jde,
            ra=place.ra,
            dec=place.dec,
            elongation=place.elongation,
            phase_angle=place.phase_angle,
            r=place.r,
            delta=place.delta,
            magnitude=magnitude,
        )

    def samples(self, jdes: Iterable[float]) -> List[EphemerisSample]:
        return [self.sample(jde) for jde in jdes]
