"""
Solutions of Kepler's equation for elliptical heliocentric orbits.

This module implements the eccentric anomaly solvers used by the orbit
propagator: a capped Newton-Raphson iteration, a slower bisection method that
converges for every elliptical eccentricity, and a combined solver that falls
back from the first to the second.

Functions:
    solve_kepler_newton: Newton-Raphson solution, raises on non-convergence
    solve_kepler_bisection: Sinnott's bisection solution, always converges
    solve_kepler: Newton-Raphson with bisection fallback
    true_anomaly: True anomaly from eccentric anomaly
    radius_vector: Heliocentric distance from eccentric anomaly

Dependencies:
    numpy: Vectorized numerical operations
    logging: Convergence information and warnings
"""

import logging
import numpy as np
from typing import Optional, Tuple, Union

from ..config import (
    DEFAULT_KEPLER_TOLERANCE,
    DEFAULT_KEPLER_MAX_ITERATIONS,
    BISECTION_STEPS,
    HIGH_ECCENTRICITY_THRESHOLD,
    HIGH_E_COEFFICIENT,
    KEPLER_LOGGING_PRECISION
)
from ..exceptions import ConvergenceError

logger = logging.getLogger(__name__)

TWO_PI = 2.0 * np.pi


def _reduce_mean_anomaly(M_rad: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Splits M into a value in [-pi, pi] and the whole revolutions removed.

    Solvers work on the reduced value; adding the revolutions back to E keeps
    E - e*sin(E) = M for the caller's M, not just for M modulo 2*pi.
    """
    revolutions = TWO_PI * np.round(M_rad / TWO_PI)
    return M_rad - revolutions, revolutions


def _as_flat_array(M_rad):
    input_is_scalar = np.isscalar(M_rad)
    M_rad = np.asarray(M_rad, dtype=float)
    return M_rad.flatten(), M_rad.shape, input_is_scalar


def _restore_shape(E: np.ndarray, shape, input_is_scalar: bool):
    result = E.reshape(shape)
    if input_is_scalar:
        return float(result.item())
    return result


def _newton_iterations(M_norm: np.ndarray,
                       e: float,
                       tol: float,
                       max_iter: int,
                       e_threshold: float,
                       coeff_high_e: float) -> Tuple[np.ndarray, np.ndarray]:
    """Runs at most max_iter Newton steps, returning E and a per-element convergence mask."""
    # Initial guess strategy based on eccentricity
    if e < e_threshold:
        E = M_norm + e * np.sin(M_norm) * (1.0 + e * np.cos(M_norm))
    else:
        E = M_norm + coeff_high_e * e * np.sign(np.sin(M_norm))

    converged = np.zeros(E.shape, dtype=bool)

    for _ in range(max_iter):
        mask = ~converged

        if not np.any(mask):
            break

        f_E = E[mask] - e * np.sin(E[mask]) - M_norm[mask]
        f_prime_E = 1.0 - e * np.cos(E[mask])

        delta = f_E / f_prime_E
        E[mask] -= delta

        # Converged once the correction step is smaller than the tolerance
        converged[mask] = np.abs(delta) < tol

    return E, converged


def solve_kepler_newton(M_rad: Union[float, np.ndarray],
                        e: float,
                        tol: Optional[float] = None,
                        max_iter: Optional[int] = None,
                        e_threshold: Optional[float] = None,
                        coeff_high_e: Optional[float] = None) -> Union[float, np.ndarray]:
    """
    Solves Kepler's equation (M = E - e*sin(E)) for Eccentric Anomaly (E)
    using the Newton-Raphson method with a hybrid initial guess strategy.

    Operates on scalars or numpy arrays. Uses centralized configuration from
    config.py when optional arguments are omitted.

    Args:
        M_rad: Mean anomaly in radians. Can be a scalar or numpy array.
        e: Eccentricity of the orbit (0 <= e < 1, not checked).
        tol: Step size below which an element counts as converged.
        max_iter: Maximum number of iterations (15 by default).
        e_threshold: Eccentricity above which the high-e initial guess is used.
        coeff_high_e: Coefficient for the high-eccentricity initial guess.

    Returns:
        The Eccentric Anomaly (E) in radians. Same shape as input M_rad.

    Raises:
        ConvergenceError: If any element has not converged after max_iter steps.
    """
    tol = tol if tol is not None else DEFAULT_KEPLER_TOLERANCE
    max_iter = max_iter if max_iter is not None else DEFAULT_KEPLER_MAX_ITERATIONS
    e_threshold = e_threshold if e_threshold is not None else HIGH_ECCENTRICITY_THRESHOLD
    coeff_high_e = coeff_high_e if coeff_high_e is not None else HIGH_E_COEFFICIENT

    M_flat, shape, input_is_scalar = _as_flat_array(M_rad)
    M_norm, revolutions = _reduce_mean_anomaly(M_flat)

    E, converged = _newton_iterations(M_norm, e, tol, max_iter, e_threshold, coeff_high_e)

    if not np.all(converged):
        failed = int(np.sum(~converged))
        raise ConvergenceError(
            f"Newton-Raphson did not converge in {max_iter} iterations for "
            f"{failed} of {len(converged)} values (e={e:.{KEPLER_LOGGING_PRECISION}f})"
        )

    return _restore_shape(E + revolutions, shape, input_is_scalar)


def _bisect(M_norm: np.ndarray, e: float, steps: int) -> np.ndarray:
    # Sinnott (1985): binary search on [0, pi] using the symmetry E(-M) = -E(M)
    sign = np.where(M_norm < 0.0, -1.0, 1.0)
    M_abs = np.abs(M_norm)

    E0 = np.full(M_abs.shape, np.pi / 2.0)
    D = np.pi / 4.0
    for _ in range(steps):
        M1 = E0 - e * np.sin(E0)
        E0 = E0 + D * np.sign(M_abs - M1)
        D /= 2.0

    return sign * E0


def solve_kepler_bisection(M_rad: Union[float, np.ndarray],
                           e: float,
                           steps: Optional[int] = None) -> Union[float, np.ndarray]:
    """
    Solves Kepler's equation by bisection (Sinnott 1985).

    Slower than Newton-Raphson but converges for every 0 <= e < 1 and any M,
    since E - e*sin(E) is monotonic in E. Each step halves the bracket, so the
    default 53 steps reach double precision.

    Args:
        M_rad: Mean anomaly in radians. Can be a scalar or numpy array.
        e: Eccentricity of the orbit (0 <= e < 1, not checked).
        steps: Number of halvings. Uses BISECTION_STEPS if None.

    Returns:
        The Eccentric Anomaly (E) in radians. Same shape as input M_rad.
    """
    steps = steps if steps is not None else BISECTION_STEPS

    M_flat, shape, input_is_scalar = _as_flat_array(M_rad)
    M_norm, revolutions = _reduce_mean_anomaly(M_flat)

    E = _bisect(M_norm, e, steps)

    return _restore_shape(E + revolutions, shape, input_is_scalar)


def solve_kepler(M_rad: Union[float, np.ndarray],
                 e: float,
                 tol: Optional[float] = None,
                 max_iter: Optional[int] = None) -> Union[float, np.ndarray]:
    """
    Solves Kepler's equation, falling back to bisection where Newton fails.

    Values that do not converge within max_iter Newton-Raphson steps are
    recomputed with solve_kepler_bisection. Non-convergence is therefore
    handled here and never reaches the caller.

    Args:
        M_rad: Mean anomaly in radians. Can be a scalar or numpy array.
        e: Eccentricity of the orbit (0 <= e < 1, not checked).
        tol: Newton step tolerance. Uses DEFAULT_KEPLER_TOLERANCE if None.
        max_iter: Newton iteration cap. Uses DEFAULT_KEPLER_MAX_ITERATIONS if None.

    Returns:
        The Eccentric Anomaly (E) in radians. Same shape as input M_rad.
    """
    tol = tol if tol is not None else DEFAULT_KEPLER_TOLERANCE
    max_iter = max_iter if max_iter is not None else DEFAULT_KEPLER_MAX_ITERATIONS

    M_flat, shape, input_is_scalar = _as_flat_array(M_rad)
    M_norm, revolutions = _reduce_mean_anomaly(M_flat)

    E, converged = _newton_iterations(
        M_norm, e, tol, max_iter, HIGH_ECCENTRICITY_THRESHOLD, HIGH_E_COEFFICIENT
    )

    if not np.all(converged):
        failed = ~converged
        logger.debug(f"Newton-Raphson hit {max_iter} iterations for {int(np.sum(failed))} values "
                     f"(e={e:.{KEPLER_LOGGING_PRECISION}f}); using bisection")
        E[failed] = _bisect(M_norm[failed], e, BISECTION_STEPS)

    return _restore_shape(E + revolutions, shape, input_is_scalar)


def true_anomaly(E_rad: Union[float, np.ndarray], e: float) -> Union[float, np.ndarray]:
    """
    True anomaly from eccentric anomaly.

    Uses the atan2 form, which stays continuous through perihelion and keeps
    the quadrant for all E.
    """
    return np.arctan2(np.sqrt(1.0 - e * e) * np.sin(E_rad), np.cos(E_rad) - e)


def radius_vector(E_rad: Union[float, np.ndarray], e: float, a: float) -> Union[float, np.ndarray]:
    """Heliocentric distance r = a(1 - e*cos E), in the units of a."""
    return a * (1.0 - e * np.cos(E_rad))
