"""
skyorbit.skydir — Absolute Sky Directions
===========================================

``SkyDir`` stores a direction as a unit vector in the J2000 equatorial frame
and exposes it in equatorial (ra, dec) or galactic (l, b) coordinates.
All sky coordinates are in degrees; angular separations are in radians.

Coordinate Systems
------------------
**EQUATORIAL** — fixed with respect to the J2000 mean equator and equinox.
**GALACTIC**   — IAU 1958 system, related to J2000 by the fixed rotation
``EQUATORIAL_TO_GALACTIC``.
"""

from enum import Enum

import numpy as np
from numpy.typing import NDArray

from .utils import normalize

# Rows are the galactic x, y, z axes expressed in J2000 equatorial coordinates
EQUATORIAL_TO_GALACTIC = np.array([
    [-0.0548755604162154, -0.8734370902348850, -0.4838350155487132],
    [+0.4941094278755837, -0.4448296299600112, +0.7469822444972189],
    [-0.8676661490190047, -0.1980763734312015, +0.4559837761750669],
])


class CoordSystem(Enum):
    GALACTIC = 0
    EQUATORIAL = 1


def _lonlat_to_vector(lon: float, lat: float) -> NDArray:
    lon_r, lat_r = np.deg2rad(lon), np.deg2rad(lat)
    return np.array([
        np.cos(lat_r) * np.cos(lon_r),
        np.cos(lat_r) * np.sin(lon_r),
        np.sin(lat_r),
    ])


def _vector_to_lonlat(v: NDArray) -> tuple[float, float]:
    lon = np.rad2deg(np.arctan2(v[1], v[0])) % 360.0
    lat = np.rad2deg(np.arcsin(np.clip(v[2], -1.0, 1.0)))
    return float(lon), float(lat)


class SkyDir:
    """Describe an absolute direction on the sky.

    Parameters
    ----------
    lon, lat : float — (ra, dec) or (l, b) [deg]
    coords : CoordSystem — system of ``lon`` / ``lat`` (default EQUATORIAL)
    """

    def __init__(self, lon: float = 0.0, lat: float = 0.0,
                 coords: CoordSystem = CoordSystem.EQUATORIAL):
        v = _lonlat_to_vector(lon, lat)
        if coords is CoordSystem.GALACTIC:
            v = EQUATORIAL_TO_GALACTIC.T @ v
        self._dir = v

    @classmethod
    def from_vector(cls, v: NDArray,
                    coords: CoordSystem = CoordSystem.EQUATORIAL) -> "SkyDir":
        """Direction along a (not necessarily unit) 3-vector.

        Raises ``ValueError`` for a zero vector.
        """
        u = normalize(v)
        if coords is CoordSystem.GALACTIC:
            u = EQUATORIAL_TO_GALACTIC.T @ u
        obj = cls.__new__(cls)
        obj._dir = u
        return obj

    @classmethod
    def from_pixel(cls, x: float, y: float, projection) -> "SkyDir":
        """Direction at image pixel (x, y) of a projection.

        When the projection is galactic the pixel is read as (l, b).
        """
        lon, lat = projection.pix2sph(x, y)
        coords = CoordSystem.GALACTIC if projection.is_galactic() else CoordSystem.EQUATORIAL
        return cls(lon, lat, coords)

    # ── Coordinates ──

    @property
    def dir(self) -> NDArray:
        """Unit vector in the equatorial frame."""
        return self._dir.copy()

    @property
    def ra(self) -> float:
        return _vector_to_lonlat(self._dir)[0]

    @property
    def dec(self) -> float:
        return _vector_to_lonlat(self._dir)[1]

    @property
    def l(self) -> float:
        return _vector_to_lonlat(EQUATORIAL_TO_GALACTIC @ self._dir)[0]

    @property
    def b(self) -> float:
        return _vector_to_lonlat(EQUATORIAL_TO_GALACTIC @ self._dir)[1]

    # ── Geometry ──

    def difference(self, other: "SkyDir") -> float:
        """Opening angle to another direction [rad].

        Uses the half-chord form, which stays accurate for tiny separations.
        """
        chord = np.linalg.norm(self._dir - other._dir)
        return float(2.0 * np.arcsin(min(chord / 2.0, 1.0)))

    def project(self, projection) -> tuple[float, float]:
        """Pixel coordinates (x, y) of this direction in a projection.

        A galactic projection is applied to (l, b) rather than (ra, dec).
        """
        if projection.is_galactic():
            return projection.sph2pix(self.l, self.b)
        return projection.sph2pix(self.ra, self.dec)

    def __repr__(self) -> str:
        return f"SkyDir(ra={self.ra:.6f}, dec={self.dec:.6f})"
