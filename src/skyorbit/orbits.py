"""
skyorbit.orbits — Perturbed Keplerian Earth Orbit
===================================================

The ``EarthOrbit`` model: a near-circular low-Earth orbit whose mean
anomaly, ascending node and argument of perigee advance linearly in time at
the J2 secular rates.

Propagation
-----------
For a time t (Julian Date)::

    Δt = t − epoch                              [days]
    M  = M₀ + Ṁ Δt                              mean anomaly
    E  − e sin E = M                            Kepler's equation
    tan(ν/2) = √((1+e)/(1−e)) tan(E/2)          true anomaly
    r  = a (1 − e cos E)
    r_eci = R_z(Ω) R_x(i) R_z(ω) · (r cos ν, r sin ν, 0)

with Ω = Ω₀ + Ω̇ Δt and ω = ω₀ + ω̇ Δt.

Timing corrections (Shapiro delay, barycentric travel time, TDB − TT) are
exposed as methods for convenience and delegate to :mod:`skyorbit.timing`.

Reference
---------
Vallado, D.A. (2013). *Fundamentals of Astrodynamics*, 4th ed., §2.2, §9.6.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from .utils import GM_EARTH, R_EARTH, J2, SECONDS_PER_DAY, wrap_two_pi
from .julian import JulianDate, TimeLike, MISSION_START, as_jd
from .kepler import (
    solve_kepler, eccentric_to_true_anomaly,
    perifocal_to_eci_matrix, keplerian_to_eci, compute_mean_motion,
)
from .timing import shapiro_delay, travel_time, tdb_minus_tt

logger = logging.getLogger(__name__)


# ════════════════════════════════════════════════════════════════════════════
#  Earth Orbit Model
# ════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class OrbitElements:
    """Fixed orbital configuration of one satellite.

    Defaults describe the reference low-Earth orbit: 550 km altitude,
    25.6° inclination, nearly circular, with the mission start as epoch.
    Angles at epoch are zero, so the satellite crosses the ascending node
    at perigee at the epoch.
    """
    altitude: float = 550.0             # nominal altitude [km]
    inclination: float = 25.6           # [deg]
    eccentricity: float = 0.0006
    earth_radius: float = R_EARTH       # [km]
    gm: float = GM_EARTH                # [km³/s²]
    j2: float = J2
    epoch: JulianDate = MISSION_START

    # ── Angles at epoch [rad] ──
    mean_anomaly0: float = 0.0
    ascending_node0: float = 0.0
    arg_perigee0: float = 0.0

    def __post_init__(self):
        if not 0.0 <= self.eccentricity < 1.0:
            raise ValueError(f"Eccentricity must be in [0, 1), got {self.eccentricity}")
        if self.earth_radius <= 0.0:
            raise ValueError(f"Earth radius must be positive, got {self.earth_radius}")
        if self.earth_radius + self.altitude <= 0.0:
            raise ValueError(f"Semi-major axis must be positive, got altitude {self.altitude}")
        if not isinstance(self.epoch, JulianDate):
            object.__setattr__(self, "epoch", JulianDate(as_jd(self.epoch)))

    @property
    def semi_major_axis(self) -> float:
        """[km]"""
        return self.earth_radius + self.altitude


class EarthOrbit:
    """Position and timing model of an Earth satellite.

    All derived constants are computed once in the constructor; the model
    is immutable afterwards and safe to share between threads.

    Parameters
    ----------
    elements : OrbitElements or None — orbital configuration
        (default: the reference orbit)

    Examples
    --------
    >>> orbit = EarthOrbit()
    >>> r = orbit.position(orbit.date_from_seconds(3600.0))
    >>> round(float(np.linalg.norm(r)))  # doctest: +SKIP
    6928
    """

    def __init__(self, elements: Optional[OrbitElements] = None):
        self.elements = elements if elements is not None else OrbitElements()
        el = self.elements

        self._epoch = el.epoch.jd
        self._e = el.eccentricity
        self._incl = np.deg2rad(el.inclination)
        self._a = el.semi_major_axis

        # J2 secular rates (Brouwer), converted to [rad/day]
        n = compute_mean_motion(self._a, el.gm) * SECONDS_PER_DAY
        p = self._a * (1.0 - self._e**2)
        k = n * el.j2 * (el.earth_radius / p) ** 2
        sin2_i = np.sin(self._incl) ** 2

        self._dMdt = n + 1.5 * k * np.sqrt(1.0 - self._e**2) * (1.0 - 1.5 * sin2_i)
        self._dOmegadt = -1.5 * k * np.cos(self._incl)
        self._dwdt = 0.75 * k * (4.0 - 5.0 * sin2_i)

        self._M0 = el.mean_anomaly0
        self._Omega0 = el.ascending_node0
        self._w0 = el.arg_perigee0

        logger.debug(
            "EarthOrbit a=%.3f km e=%g i=%.3f deg: dM/dt=%.6f dOmega/dt=%.6f "
            "dw/dt=%.6f rad/day",
            self._a, self._e, el.inclination,
            self._dMdt, self._dOmegadt, self._dwdt,
        )

    def __repr__(self) -> str:
        return f"EarthOrbit({self.elements!r})"

    # ── Derived constants ──

    @property
    def inclination(self) -> float:
        """Orbit inclination [deg]."""
        return self.elements.inclination

    @property
    def eccentricity(self) -> float:
        return self._e

    @property
    def semi_major_axis(self) -> float:
        """[km]"""
        return self._a

    @property
    def epoch(self) -> JulianDate:
        return self.elements.epoch

    @property
    def mean_anomaly_rate(self) -> float:
        """[rad/day]"""
        return self._dMdt

    @property
    def ascending_node_rate(self) -> float:
        """[rad/day]"""
        return self._dOmegadt

    @property
    def arg_perigee_rate(self) -> float:
        """[rad/day]"""
        return self._dwdt

    @property
    def period(self) -> float:
        """Orbital period [days] from the mean-anomaly rate."""
        return 2.0 * np.pi / self._dMdt

    @property
    def nodal_period(self) -> float:
        """Time between ascending-node crossings [days]."""
        return 2.0 * np.pi / (self._dMdt + self._dwdt)

    # ── Propagation ──

    def elements_at(self, jd: TimeLike) -> dict:
        """Orbital angles and radius at a given time.

        Returns
        -------
        dict with keys: M, E, nu (anomalies), raan, argp [rad], r [km]
        """
        dt = as_jd(jd) - self._epoch
        M = wrap_two_pi(self._M0 + self._dMdt * dt)
        E = solve_kepler(M, self._e)
        return {
            "M": M,
            "E": E,
            "nu": wrap_two_pi(eccentric_to_true_anomaly(E, self._e)),
            "raan": wrap_two_pi(self._Omega0 + self._dOmegadt * dt),
            "argp": wrap_two_pi(self._w0 + self._dwdt * dt),
            "r": self._a * (1.0 - self._e * np.cos(E)),
        }

    def position(self, jd: TimeLike) -> NDArray:
        """Satellite position in inertial (Earth-centred J2000) coordinates.

        Parameters
        ----------
        jd : JulianDate or float — time of the calculation

        Returns
        -------
        r_eci : (3,) ndarray — position [km]
        """
        oe = self.elements_at(jd)
        r_orb = oe["r"] * np.array([np.cos(oe["nu"]), np.sin(oe["nu"]), 0.0])
        return perifocal_to_eci_matrix(self._incl, oe["raan"], oe["argp"]) @ r_orb

    def velocity(self, jd: TimeLike) -> NDArray:
        """Two-body inertial velocity [km/s] on the instantaneous ellipse."""
        oe = self.elements_at(jd)
        _, v = keplerian_to_eci(self._a, self._e, self._incl,
                                oe["raan"], oe["argp"], oe["nu"],
                                self.elements.gm)
        return v

    def phase(self, jd: TimeLike) -> float:
        """Orbital phase since the ascending node was passed, in [0, 1).

        The mean argument of latitude at epoch, M₀ + ω₀, advanced at the
        mean-anomaly rate, so the phase repeats every :attr:`period`.
        """
        dt = as_jd(jd) - self._epoch
        u = wrap_two_pi(self._M0 + self._w0 + self._dMdt * dt)
        frac = u / (2.0 * np.pi)
        return 0.0 if frac >= 1.0 else frac

    def date_from_seconds(self, seconds: float) -> JulianDate:
        """Julian Date for a number of elapsed seconds since the epoch."""
        return JulianDate.from_mission_seconds(seconds, self.epoch)

    # ── Timing corrections ──

    def calc_shapiro_delay(self, jd: TimeLike, source) -> float:
        """Shapiro delay [s] from the Sun's gravitational well.

        Parameters
        ----------
        jd : JulianDate or float — time of observation
        source : SkyDir or (3,) unit vector — source direction
        """
        return shapiro_delay(jd, source)

    def calc_travel_time(self, jd: TimeLike, source) -> float:
        """Light travel time [s] from Earth to the solar-system barycentre
        along the source direction; added to arrival times."""
        return travel_time(jd, source)

    def tdb_minus_tt(self, jd: TimeLike) -> float:
        """Correction [s] added to TT to obtain TDB."""
        return tdb_minus_tt(jd)
