"""
skyorbit.utils — Constants & Vector Helpers
=============================================

Physical constants used throughout the package (km / s / day units) and the
small set of vector helpers shared by the orbit, ephemeris and sky-direction
modules.  All functions are pure NumPy.
"""

import numpy as np
from numpy.typing import NDArray

# ── Physical Constants ──────────────────────────────────────────────────────
GM_EARTH = 398_600.4418         # Earth gravitational parameter    [km³/s²]
R_EARTH = 6378.145              # Earth equatorial radius          [km]
J2 = 1.08263e-3                 # J2 zonal harmonic
C_KM_S = 299_792.458            # Speed of light                   [km/s]
AU_KM = 149_597_870.7           # Astronomical Unit                [km]
T_SUN = 4.925490947e-6          # GM_sun / c³                      [s]

SECONDS_PER_DAY = 86400.0
DAYS_PER_CENTURY = 36_525.0
J2000_JD = 2_451_545.0          # 2000-01-01T12:00:00 TT


# ── Vector Helpers ──────────────────────────────────────────────────────────

def normalize(v: NDArray) -> NDArray:
    """Return unit vector.  Works on single vectors or (N,3) arrays."""
    v = np.asarray(v, dtype=np.float64)
    if v.ndim == 1:
        mag = np.linalg.norm(v)
        if mag < 1e-15:
            raise ValueError("Cannot normalize a near-zero vector.")
        return v / mag
    elif v.ndim == 2:
        mag = np.linalg.norm(v, axis=1, keepdims=True)
        if np.any(mag < 1e-15):
            raise ValueError("Cannot normalize a near-zero vector.")
        return v / mag
    else:
        raise ValueError(f"Expected 1-D or 2-D array, got {v.ndim}-D.")


def rotation_matrix_axis_angle(axis: NDArray, angle: float) -> NDArray:
    """Rotation matrix via Rodrigues' formula (right-hand, active rotation).

    Parameters
    ----------
    axis : (3,) array — rotation axis (will be normalized internally)
    angle : float — rotation angle [rad]

    Returns
    -------
    R : (3,3) ndarray — rotation matrix
    """
    k = normalize(np.asarray(axis, dtype=np.float64))
    c, s = np.cos(angle), np.sin(angle)
    K = np.array([
        [0, -k[2], k[1]],
        [k[2], 0, -k[0]],
        [-k[1], k[0], 0],
    ])
    return np.eye(3) * c + (1.0 - c) * np.outer(k, k) + s * K


def wrap_two_pi(angle: float) -> float:
    """Wrap an angle [rad] into [0, 2π)."""
    return float(np.mod(angle, 2.0 * np.pi))


def wrap_pi(angle: float) -> float:
    """Wrap an angle [rad] into (−π, π]."""
    wrapped = np.mod(angle + np.pi, 2.0 * np.pi) - np.pi
    return float(np.pi if wrapped == -np.pi else wrapped)
