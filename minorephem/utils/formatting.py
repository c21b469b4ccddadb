"""
Text rendering of ephemeris samples.

Right ascension is shown as sexagesimal hours, declination and elongation as
sexagesimal degrees. Magnitudes follow the display threshold rule.
"""

from typing import Optional

import astropy.units as u
from astropy.coordinates import Angle

from ..config import (
    ANGLE_DISPLAY_PRECISION,
    DEFAULT_MAGNITUDE_DISPLAY_THRESHOLD,
    MAGNITUDE_DISPLAY_FORMAT,
    RA_DISPLAY_PRECISION
)
from ..core.types import EphemerisSample
from ..physics.photometry import is_displayed

EPHEMERIS_HEADER = "  RA          Dec          V    Elongation"


def format_ra(ra_rad: float, precision: int = RA_DISPLAY_PRECISION) -> str:
    """Right ascension in radians as e.g. '18h45m06.3s'."""
    # Round to the displayed resolution before wrapping so 23h59m59.96s reads 00h00m00.0s
    ticks_per_hour = 3600 * 10 ** precision
    ticks = int(round(float(Angle(ra_rad, u.rad).hour) * ticks_per_hour)) % (24 * ticks_per_hour)
    return Angle(ticks / ticks_per_hour, u.hourangle).to_string(
        unit=u.hourangle, sep='hms', precision=precision, pad=True)


def format_angle(angle_rad: float, precision: int = ANGLE_DISPLAY_PRECISION,
                 signed: bool = True) -> str:
    """Angle in radians as e.g. '-23d01m59s'."""
    return Angle(angle_rad, u.rad).to_string(
        unit=u.deg, sep='dms', precision=precision, pad=True, alwayssign=signed)


def format_magnitude(magnitude: Optional[float],
                     threshold: float = DEFAULT_MAGNITUDE_DISPLAY_THRESHOLD) -> str:
    if not is_displayed(magnitude, threshold):
        return ''
    return MAGNITUDE_DISPLAY_FORMAT.format(magnitude)


def format_sample_line(sample: EphemerisSample,
                       threshold: float = DEFAULT_MAGNITUDE_DISPLAY_THRESHOLD) -> str:
    return (f"{format_ra(sample.ra)} {format_angle(sample.dec)} "
            f"{format_magnitude(sample.magnitude, threshold):>4s}, "
            f"{format_angle(sample.elongation, signed=False)}")
