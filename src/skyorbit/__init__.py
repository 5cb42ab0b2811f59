"""
skyorbit — Satellite Orbit & Photon Timing Utilities
======================================================

A NumPy library for the astronomy a satellite event pipeline needs:
where the spacecraft is, and when a photon it recorded would have reached
the solar-system barycentre.

Components
----------

**Orbit** (``EarthOrbit``, ``OrbitElements``)
  - Perturbed Keplerian propagation of a low-Earth orbit: mean anomaly,
    ascending node and argument of perigee advance at J2 secular rates.
  - Position [km] in the inertial Earth-centred J2000 frame, and orbital
    phase since the last ascending-node crossing.

**Timing** (``shapiro_delay``, ``travel_time``, ``tdb_minus_tt``)::

    t_bary = t_TT + (TDB − TT) + Δ_travel − Δ_Shapiro

**Dates** (``JulianDate``)
  - Continuous day count ↔ Gregorian calendar, mission elapsed seconds.

**Sky** (``SkyDir``, ``SkyProj``, ``Quaternion``)
  - Equatorial / galactic directions, WCS image projections via astropy,
    rotation quaternions.

Units: km, s, days for time spans, degrees for sky coordinates and
inclination, radians for orbital angles.
"""

from .utils import (
    normalize,
    rotation_matrix_axis_angle,
    GM_EARTH,
    R_EARTH,
    J2,
    C_KM_S,
    AU_KM,
    T_SUN,
    SECONDS_PER_DAY,
    J2000_JD,
)

from .julian import (
    JulianDate,
    J2000,
    MISSION_START,
)

from .kepler import (
    KeplerConvergenceError,
    solve_kepler,
    eccentric_to_true_anomaly,
    kepler_correction,
    keplerian_to_eci,
    compute_mean_motion,
    compute_orbital_period,
)

from .orbits import (
    OrbitElements,
    EarthOrbit,
)

from .sun import (
    sun_position_eci,
    sun_direction_eci,
    planet_heliocentric,
    sun_barycentric,
    earth_barycentric,
)

from .timing import (
    shapiro_delay,
    travel_time,
    tdb_minus_tt,
    barycentric_offset,
)

from .skydir import (
    SkyDir,
    CoordSystem,
)

from .quaternion import Quaternion

from .skyproj import (
    SkyProj,
    ProjectionError,
)

__version__ = "1.0.0"
__all__ = [
    # ── Constants ──
    "GM_EARTH", "R_EARTH", "J2", "C_KM_S", "AU_KM", "T_SUN",
    "SECONDS_PER_DAY", "J2000_JD",
    # ── Dates ──
    "JulianDate", "J2000", "MISSION_START",
    # ── Kepler ──
    "KeplerConvergenceError", "solve_kepler", "eccentric_to_true_anomaly",
    "kepler_correction", "keplerian_to_eci",
    "compute_mean_motion", "compute_orbital_period",
    # ── Orbit model ──
    "OrbitElements", "EarthOrbit",
    # ── Ephemeris ──
    "sun_position_eci", "sun_direction_eci", "planet_heliocentric",
    "sun_barycentric", "earth_barycentric",
    # ── Timing corrections ──
    "shapiro_delay", "travel_time", "tdb_minus_tt", "barycentric_offset",
    # ── Sky ──
    "SkyDir", "CoordSystem", "Quaternion", "SkyProj", "ProjectionError",
    # ── Utilities ──
    "normalize", "rotation_matrix_axis_angle",
]
