"""
skyorbit.sun — Solar-System Ephemeris
=======================================

Positions needed by the timing corrections, all in km in the ICRS
(J2000-aligned equatorial) frame, the frame of ``SkyDir`` directions:

- geocentric Sun position,
- heliocentric positions of the major planets,
- Sun and Earth positions relative to the solar-system barycentre (SSB).

Positions come from ``astropy.coordinates``.  The default ``'builtin'``
ephemeris (ERFA ``epv00`` for Earth and Sun, ``plan94`` for the planets)
needs no downloaded kernel; it places the geocentre to a few tens of km,
well under a millisecond of light time.  Any ephemeris name accepted by
``solar_system_ephemeris.set`` (e.g. ``'de440'``) may be passed instead.

Times are Julian Dates in TT.

Reference
---------
Bretagnon, P. & Francou, G. (1988). A&A 202, 309 (VSOP87, via ERFA epv00).
Simon, J.L. et al. (1994). A&A 282, 663 (planetary theory, via ERFA plan94).
"""

import numpy as np
from numpy.typing import NDArray
from astropy import units as u
from astropy.time import Time
from astropy.coordinates import get_body_barycentric, solar_system_ephemeris

from .utils import normalize
from .julian import TimeLike, as_jd

# ── Constants ───────────────────────────────────────────────────────────────
R_SUN = 696_000.0               # Solar radius [km]
EPHEMERIS = "builtin"

PLANETS = ("mercury", "venus", "earth", "mars",
           "jupiter", "saturn", "uranus", "neptune")


def _tt(jd: TimeLike) -> Time:
    # Split the day count so the fraction keeps full precision
    day = as_jd(jd)
    whole = np.floor(day)
    return Time(whole, day - whole, format="jd", scale="tt")


def _barycentric(body: str, jd: TimeLike, ephemeris: str) -> NDArray:
    with solar_system_ephemeris.set(ephemeris):
        pos = get_body_barycentric(body, _tt(jd))
    return pos.xyz.to(u.km).value


# ════════════════════════════════════════════════════════════════════════════
#  Solar Ephemeris
# ════════════════════════════════════════════════════════════════════════════

def sun_position_eci(jd: TimeLike, ephemeris: str = EPHEMERIS) -> NDArray:
    """Compute geocentric Sun position in the J2000 equatorial frame.

    Geometric position (no light-time or aberration correction).

    Parameters
    ----------
    jd : JulianDate or float — Julian Date (TT)
    ephemeris : str — astropy solar-system ephemeris name

    Returns
    -------
    r_sun : (3,) ndarray — Sun position vector [km]
    """
    with solar_system_ephemeris.set(ephemeris):
        t = _tt(jd)
        sun = get_body_barycentric("sun", t)
        earth = get_body_barycentric("earth", t)
    return (sun - earth).xyz.to(u.km).value


def sun_direction_eci(jd: TimeLike) -> NDArray:
    """Unit vector from Earth to Sun."""
    return normalize(sun_position_eci(jd))


def sun_distance(jd: TimeLike) -> float:
    """Earth-Sun distance [km]."""
    return float(np.linalg.norm(sun_position_eci(jd)))


# ════════════════════════════════════════════════════════════════════════════
#  Planets & Barycentre
# ════════════════════════════════════════════════════════════════════════════

def planet_heliocentric(name: str, jd: TimeLike, ephemeris: str = EPHEMERIS) -> NDArray:
    """Heliocentric position of a planet in the J2000 equatorial frame.

    Parameters
    ----------
    name : str — 'mercury' … 'neptune' (case-insensitive)
    jd : JulianDate or float — Julian Date (TT)
    ephemeris : str — astropy solar-system ephemeris name

    Returns
    -------
    r : (3,) ndarray — position [km]
    """
    body = name.lower()
    if body not in PLANETS:
        raise ValueError(f"Unknown planet {name!r}; expected one of {list(PLANETS)}")
    with solar_system_ephemeris.set(ephemeris):
        t = _tt(jd)
        planet = get_body_barycentric(body, t)
        sun = get_body_barycentric("sun", t)
    return (planet - sun).xyz.to(u.km).value


def sun_barycentric(jd: TimeLike, ephemeris: str = EPHEMERIS) -> NDArray:
    """Sun position relative to the solar-system barycentre [km].

    Dominated by Jupiter and Saturn; never more than ~2.2 solar radii.
    """
    return _barycentric("sun", jd, ephemeris)


def earth_barycentric(jd: TimeLike, ephemeris: str = EPHEMERIS) -> NDArray:
    """Earth (geocentre) position relative to the solar-system barycentre [km]."""
    return _barycentric("earth", jd, ephemeris)
