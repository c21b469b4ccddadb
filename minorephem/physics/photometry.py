"""
Apparent visual magnitude of minor planets in the IAU H-G system
(Bowell et al. 1989).
"""

import math
from dataclasses import dataclass
from typing import Optional

from ..config import (
    DEFAULT_SLOPE_PARAMETER,
    DEFAULT_MAGNITUDE_DISPLAY_THRESHOLD,
    HG_PHI1_A, HG_PHI1_B,
    HG_PHI2_A, HG_PHI2_B
)


@dataclass(frozen=True)
class AbsoluteMagnitudeParams:
    """
    Absolute magnitude H and slope parameter G.

    Either may be unknown. A missing G is replaced by the standard 0.15;
    a missing H has no substitute and makes every magnitude unknown.
    """
    H: Optional[float] = None
    G: Optional[float] = None

    @property
    def slope(self) -> float:
        return self.G if self.G is not None else DEFAULT_SLOPE_PARAMETER


def phase_functions(phase_angle: float):
    """Returns (Phi1, Phi2) for a phase angle in radians."""
    t = math.tan(phase_angle / 2)
    phi1 = math.exp(-HG_PHI1_A * t ** HG_PHI1_B)
    phi2 = math.exp(-HG_PHI2_A * t ** HG_PHI2_B)
    return phi1, phi2


def apparent_magnitude(params: AbsoluteMagnitudeParams,
                       phase_angle: float,
                       r: float,
                       delta: float) -> Optional[float]:
    """
    Apparent visual magnitude V.

    Args:
        params: H and G of the object.
        phase_angle: Sun-object-Earth angle in radians.
        r: Heliocentric distance in AU.
        delta: Geocentric distance in AU.

    Returns:
        V, or None when H is unknown.
    """
    if params.H is None:
        return None

    G = params.slope
    phi1, phi2 = phase_functions(phase_angle)
    return params.H + 5 * math.log10(r * delta) - 2.5 * math.log10((1 - G) * phi1 + G * phi2)


def is_displayed(magnitude: Optional[float],
                 threshold: float = DEFAULT_MAGNITUDE_DISPLAY_THRESHOLD) -> bool:
    """Display rule for printed ephemerides: known and not brighter than threshold."""
    return magnitude is not None and magnitude >= threshold
