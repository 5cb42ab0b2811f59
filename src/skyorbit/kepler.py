"""
skyorbit.kepler — Kepler Equation & Keplerian Elements
========================================================

Elliptic Kepler equation solver, anomaly conversions, and the
perifocal → inertial rotation shared by the satellite orbit model and the
planetary ephemeris.  All pure NumPy.
"""

import logging

import numpy as np
from numpy.typing import NDArray

from .utils import GM_EARTH, wrap_pi

logger = logging.getLogger(__name__)


class KeplerConvergenceError(RuntimeError):
    """Kepler's equation did not converge within the iteration cap."""


# ════════════════════════════════════════════════════════════════════════════
#  Kepler Equation
# ════════════════════════════════════════════════════════════════════════════

def solve_kepler(M: float, e: float, tol: float = 1e-12,
                 max_iter: int = 50) -> float:
    """Solve Kepler's equation  M = E − e sin(E)  via Newton–Raphson.

    Parameters
    ----------
    M : float — mean anomaly [rad]
    e : float — eccentricity, 0 ≤ e < 1
    tol : float — convergence tolerance on the Newton step [rad]
    max_iter : int — iteration cap

    Returns
    -------
    E : float — eccentric anomaly [rad], same revolution as M

    Raises
    ------
    ValueError — eccentricity outside [0, 1)
    KeplerConvergenceError — tolerance not reached in ``max_iter`` steps
    """
    if not 0.0 <= e < 1.0:
        raise ValueError(f"Eccentricity must be in [0, 1), got {e}")
    # Smart initial guess (Markley-style)
    E = M + 0.85 * e * np.sign(np.sin(M)) if e < 0.8 else M - np.mod(M, 2.0 * np.pi) + np.pi
    for _ in range(max_iter):
        f = E - e * np.sin(E) - M
        fp = 1.0 - e * np.cos(E)
        dE = -f / fp
        E += dE
        if abs(dE) < tol:
            return float(E)
    logger.debug("Kepler iteration stalled: M=%r e=%r last step=%r", M, e, dE)
    raise KeplerConvergenceError(
        f"Kepler's equation did not converge in {max_iter} iterations "
        f"(M={M}, e={e}, |dE|={abs(dE):.3e})"
    )


def eccentric_to_true_anomaly(E: float, e: float) -> float:
    """True anomaly [rad] from eccentric anomaly, in the same revolution as E."""
    return float(2.0 * np.arctan2(
        np.sqrt(1.0 + e) * np.sin(E / 2.0),
        np.sqrt(1.0 - e) * np.cos(E / 2.0),
    ))


def kepler_correction(M: float, e: float) -> float:
    """Correction to orbital phase for eccentricity, ν − M [rad].

    Wrapped to (−π, π]; for small e this is ≈ 2e sin M.
    """
    E = solve_kepler(M, e)
    return wrap_pi(eccentric_to_true_anomaly(E, e) - M)


# ════════════════════════════════════════════════════════════════════════════
#  Keplerian → Inertial
# ════════════════════════════════════════════════════════════════════════════

def perifocal_to_eci_matrix(i: float, raan: float, argp: float) -> NDArray:
    """Rotation R_z(raan) · R_x(i) · R_z(argp) from the orbit plane to ECI."""
    cos_raan, sin_raan = np.cos(raan), np.sin(raan)
    cos_argp, sin_argp = np.cos(argp), np.sin(argp)
    cos_i, sin_i = np.cos(i), np.sin(i)

    return np.array([
        [cos_raan * cos_argp - sin_raan * sin_argp * cos_i,
         -cos_raan * sin_argp - sin_raan * cos_argp * cos_i,
         sin_raan * sin_i],
        [sin_raan * cos_argp + cos_raan * sin_argp * cos_i,
         -sin_raan * sin_argp + cos_raan * cos_argp * cos_i,
         -cos_raan * sin_i],
        [sin_argp * sin_i,
         cos_argp * sin_i,
         cos_i],
    ])


def keplerian_to_eci(
    a: float, e: float, i: float,
    raan: float, argp: float, nu: float,
    mu: float = GM_EARTH,
) -> tuple[NDArray, NDArray]:
    """Convert classical Keplerian elements to an inertial state vector.

    Parameters
    ----------
    a : float — semi-major axis [km]
    e : float — eccentricity
    i : float — inclination [rad]
    raan : float — right ascension of ascending node [rad]
    argp : float — argument of perigee [rad]
    nu : float — true anomaly [rad]
    mu : float — gravitational parameter [km³/s²]

    Returns
    -------
    r_eci : (3,) ndarray — position [km]
    v_eci : (3,) ndarray — velocity [km/s]
    """
    p = a * (1.0 - e**2)               # semi-latus rectum
    r_mag = p / (1.0 + e * np.cos(nu))

    # Position & velocity in perifocal (PQW) frame
    r_pqw = r_mag * np.array([np.cos(nu), np.sin(nu), 0.0])
    v_pqw = np.sqrt(mu / p) * np.array([-np.sin(nu), e + np.cos(nu), 0.0])

    R = perifocal_to_eci_matrix(i, raan, argp)
    return R @ r_pqw, R @ v_pqw


def compute_mean_motion(a: float, mu: float = GM_EARTH) -> float:
    """Mean motion [rad/s] for semi-major axis a [km]."""
    return float(np.sqrt(mu / a**3))


def compute_orbital_period(a: float, mu: float = GM_EARTH) -> float:
    """Orbital period [s] for semi-major axis a [km]."""
    return float(2.0 * np.pi * np.sqrt(a**3 / mu))


