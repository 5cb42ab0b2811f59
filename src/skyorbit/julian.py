"""
skyorbit.julian — Julian Date Value Type
==========================================

Julian dates are a continuous count of days and fractions since noon
Universal Time on January 1, 4713 BCE (Julian calendar).  ``JulianDate``
wraps that day count in an immutable, ordered value with explicit
constructors and accessors; there is no implicit conversion to ``float``.

Arithmetic
----------
- ``jd2 - jd1``        → float, difference in days
- ``jd ± days``        → JulianDate
- ``jd.seconds()``     → day count expressed in seconds

Reference
---------
Meeus, J. (1998). *Astronomical Algorithms*, 2nd ed., Ch. 7.
DAYCNV, IDL Astronomy User's Library (Gregorian conversion).
"""

import math
from dataclasses import dataclass
from typing import Optional, Union

from .utils import SECONDS_PER_DAY, DAYS_PER_CENTURY, J2000_JD


@dataclass(frozen=True, order=True)
class JulianDate:
    """Julian Date, stored as a float day count."""
    jd: float = J2000_JD

    # ── Constructors ──

    @classmethod
    def from_gregorian(cls, year: int, month: int, day: int,
                       hours: float = 0.0) -> "JulianDate":
        """Julian Date from a Gregorian calendar date and UT hours.

        Parameters
        ----------
        year, month, day : int — calendar date
        hours : float — time of day [h], may carry minutes/seconds as fraction
        """
        if month <= 2:
            year -= 1
            month += 12
        A = int(year / 100)
        B = 2 - A + int(A / 4)
        C = int(365.25 * year)
        if year < 0:
            C -= 1
        D = int(30.6001 * (month + 1))
        return cls(B + C + D + day + 1_720_994.5 + hours / 24.0)

    @classmethod
    def from_days(cls, days: float) -> "JulianDate":
        return cls(float(days))

    @classmethod
    def from_seconds(cls, seconds: float) -> "JulianDate":
        """Inverse of :meth:`seconds`: a day count given in seconds."""
        return cls(seconds / SECONDS_PER_DAY)

    @classmethod
    def from_mission_seconds(cls, seconds: float,
                             epoch: Optional["JulianDate"] = None) -> "JulianDate":
        """Date from mission elapsed seconds counted from ``epoch``."""
        epoch = MISSION_START if epoch is None else epoch
        return epoch + seconds / SECONDS_PER_DAY

    # ── Accessors ──

    @property
    def days(self) -> float:
        return self.jd

    def seconds(self) -> float:
        return self.jd * SECONDS_PER_DAY

    def days_since(self, other: "JulianDate") -> float:
        return self.jd - other.jd

    def days_since_epoch(self, epoch: Optional["JulianDate"] = None) -> float:
        """Days elapsed since ``epoch`` (J2000.0 by default)."""
        epoch = J2000 if epoch is None else epoch
        return self.days_since(epoch)

    def centuries_since_j2000(self) -> float:
        """Julian centuries since J2000.0."""
        return (self.jd - J2000_JD) / DAYS_PER_CENTURY

    # ── Arithmetic ──

    def __add__(self, days):
        if isinstance(days, JulianDate):
            return NotImplemented
        return JulianDate(self.jd + float(days))

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, JulianDate):
            return self.jd - other.jd
        return JulianDate(self.jd - float(other))

    # ── Calendar conversion ──

    def to_gregorian(self) -> tuple[int, int, int, float]:
        """Gregorian calendar date.

        Returns
        -------
        (year, month, day, hours) — hours is the UT fraction of the day [h]
        """
        jd = int(self.jd)
        frac = self.jd - jd + 0.5
        if frac >= 1.0:
            frac -= 1.0
            jd += 1

        hours = frac * 24.0
        l = jd + 68569
        n = 4 * l // 146097
        l = l - (146097 * n + 3) // 4
        yr = 4000 * (l + 1) // 1461001
        l = l - 1461 * yr // 4 + 31
        mn = 80 * l // 2447
        day = l - 2447 * mn // 80
        l = mn // 11
        mn = mn + 2 - 12 * l
        yr = 100 * (n - 49) + yr + l
        return yr, mn, day, hours

    def isoformat(self) -> str:
        """ISO-8601 style string ``YYYY-MM-DDThh:mm:ss.ffff``."""
        year, month, day, utc = self.to_gregorian()
        hour = int(math.floor(utc))
        minutes = 60.0 * (utc - hour)
        minute = int(math.floor(minutes))
        secs = 60.0 * (minutes - minute)
        second = int(math.floor(secs))
        sec_frac = int(math.floor((secs - second) * 10000))
        return (f"{year:04d}-{month:02d}-{day:02d}"
                f"T{hour:02d}:{minute:02d}:{second:02d}.{sec_frac:04d}")

    def __str__(self) -> str:
        return self.isoformat()


TimeLike = Union[JulianDate, float]

J2000 = JulianDate(J2000_JD)
MISSION_START = JulianDate.from_gregorian(2001, 1, 1, 0.0)   # JD 2451910.5


def as_jd(t: TimeLike) -> float:
    """Day count of a JulianDate or a plain float Julian Date."""
    if isinstance(t, JulianDate):
        return t.jd
    return float(t)
