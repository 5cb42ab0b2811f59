"""
skyorbit.timing — Photon Arrival-Time Corrections
===================================================

The three corrections that refer a photon arrival time recorded at Earth
(in TT) to the solar-system barycentre (in TDB)::

    t_bary = t_TT + (TDB − TT) + Δ_travel − Δ_Shapiro

- **TDB − TT**: periodic relativistic term, ±1.7 ms with an annual period.
- **Travel time** (Rømer delay): projection of the barycentre→Earth vector on
  the source direction, divided by c.  Up to ~500 s.
- **Shapiro delay**: extra light time through the Sun's potential well,
  a few μs away from the Sun, up to ~120 μs at the solar limb.

Every function is pure; times may be ``JulianDate`` or float JD (TT), and
source directions a ``SkyDir`` or a (3,) unit vector in the equatorial frame.

Reference
---------
Fairhead, L. & Bretagnon, P. (1990). A&A 229, 240.
Kaplan, G.H. (2005). USNO Circular 179, eq. 2.6.
Lorimer, D.R. & Kramer, M. (2005). *Handbook of Pulsar Astronomy*, §8.
"""

import numpy as np
from numpy.typing import NDArray

from .utils import C_KM_S, T_SUN, J2000_JD, DAYS_PER_CENTURY, normalize
from .julian import TimeLike, as_jd
from .skydir import SkyDir
from .sun import R_SUN, sun_position_eci, earth_barycentric

# TDB − TT periodic terms: (amplitude [s], frequency [rad/century], phase [rad])
TDB_TERMS = (
    (0.001657, 628.3076, 6.2401),
    (0.000022, 575.3385, 4.2970),
    (0.000014, 1256.6152, 6.1969),
    (0.000005, 606.9777, 4.0212),
    (0.000005, 52.9691, 0.4444),
    (0.000002, 21.3299, 5.5431),
)
# Leading mixed-secular term: amplitude × T × sin(...)
TDB_T_TERM = (0.000010, 628.3076, 4.2490)


def _source_vector(source) -> NDArray:
    if isinstance(source, SkyDir):
        return source.dir
    return normalize(source)


def shapiro_delay(jd: TimeLike, source) -> float:
    """Solar Shapiro delay [s].

    ``Δ = −2 (GM☉/c³) ln((1 − cos ψ) / 2)`` with ψ the Earth-centred angle
    between the source and the Sun.  Zero for a source opposite the Sun,
    growing toward superior conjunction; ψ is not allowed below the solar
    limb.

    Parameters
    ----------
    jd : JulianDate or float — time of observation
    source : SkyDir or (3,) — source direction

    Returns
    -------
    delay : float — non-negative delay [s]
    """
    n = _source_vector(source)
    r_sun = sun_position_eci(jd)
    d_sun = np.linalg.norm(r_sun)
    cos_psi = np.clip(np.dot(n, r_sun) / d_sun, -1.0, 1.0)

    # Rays cannot pass inside the photosphere
    cos_limb = np.sqrt(1.0 - (R_SUN / d_sun) ** 2)
    cos_psi = min(cos_psi, cos_limb)

    return float(-2.0 * T_SUN * np.log((1.0 - cos_psi) / 2.0))


def travel_time(jd: TimeLike, source) -> float:
    """Light travel time [s] between the geocentre and the barycentre
    along the source direction.

    Positive when Earth lies on the source side of the barycentre, i.e. the
    photon reaches Earth first and the correction is added to arrival times.
    """
    n = _source_vector(source)
    return float(np.dot(earth_barycentric(jd), n) / C_KM_S)


def tdb_minus_tt(jd: TimeLike) -> float:
    """TDB − TT [s] from the truncated Fairhead–Bretagnon series.

    Parameters
    ----------
    jd : JulianDate or float — Julian Date in TT

    Returns
    -------
    correction : float — added to TT to obtain TDB [s], |value| < 2 ms
    """
    T = (as_jd(jd) - J2000_JD) / DAYS_PER_CENTURY
    total = sum(amp * np.sin(freq * T + ph) for amp, freq, ph in TDB_TERMS)
    amp, freq, ph = TDB_T_TERM
    total += amp * T * np.sin(freq * T + ph)
    return float(total)


def barycentric_offset(jd: TimeLike, source) -> float:
    """Total correction [s] taking a TT arrival time at the geocentre to a
    TDB arrival time at the barycentre."""
    return tdb_minus_tt(jd) + travel_time(jd, source) - shapiro_delay(jd, source)
