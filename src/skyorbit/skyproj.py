"""
skyorbit.skyproj — Sky ↔ Pixel Projections
============================================

A thin wrapper over ``astropy.wcs`` (wcslib) for two-axis celestial images.
It builds the WCS from the classic FITS keywords (CTYPE / CRPIX / CRVAL /
CDELT / CROTA2 / LONPOLE / LATPOLE), either directly or from an image
header, and maps sky coordinates in degrees to 1-based FITS pixel
coordinates and back.

Longitudes above 180° are wrapped to negative values before projecting;
deprojected longitudes are folded into [0, 360).
"""

import logging
from typing import Optional

import numpy as np
from astropy.io import fits
from astropy.wcs import WCS, WcsError

logger = logging.getLogger(__name__)

# FITS pixel convention: first pixel centre is at 1
_ORIGIN = 1


class ProjectionError(ValueError):
    """The projection could not be set up or a coordinate could not be mapped."""


class SkyProj:
    """World-coordinate projection for an image.

    Parameters
    ----------
    proj_name : str — three-letter projection code, e.g. 'CAR', 'AIT', 'TAN'
    crpix : (2,) — reference pixel (1-based)
    crval : (2,) — sky coordinates of the reference pixel [deg]
    cdelt : (2,) — pixel scale [deg/pixel]
    crota2 : float — image rotation [deg]
    galactic : bool — (l, b) axes instead of (ra, dec)
    lonpole, latpole : float or None — native pole overrides [deg]
    """

    def __init__(self, proj_name: str, crpix, crval, cdelt,
                 crota2: float = 0.0, galactic: bool = False,
                 lonpole: Optional[float] = None, latpole: Optional[float] = None):
        proj_name = str(proj_name).strip().upper()
        if len(proj_name) != 3:
            raise ProjectionError(f"Projection code must have three letters, got {proj_name!r}")
        w = WCS(naxis=2)
        w.wcs.ctype = [
            ("GLON-" if galactic else "RA---") + proj_name,
            ("GLAT-" if galactic else "DEC--") + proj_name,
        ]
        w.wcs.crpix = [float(c) for c in crpix]
        w.wcs.crval = [float(c) for c in crval]
        w.wcs.cdelt = [float(c) for c in cdelt]
        if lonpole is not None:
            w.wcs.lonpole = lonpole
        if latpole is not None:
            w.wcs.latpole = latpole
        # CROTA rotation instead of PC / CD matrices
        w.wcs.crota = [0.0, float(crota2)]
        self._wcs = w
        self._reset()

    @classmethod
    def from_fits(cls, path: str, extension=0) -> "SkyProj":
        """Projection described by the header of a FITS image HDU.

        Parameters
        ----------
        path : str — FITS file
        extension : int or str — HDU index or name
        """
        with fits.open(path) as hdul:
            header = hdul[extension].header.copy()
        logger.debug("Loaded WCS header from %s[%s]", path, extension)

        ctype = str(header.get("CTYPE1", ""))
        if ctype.startswith("RA"):
            galactic = False
        elif ctype.startswith("GLON"):
            galactic = True
        else:
            raise ProjectionError(
                f"Unrecognized coordinate system {ctype!r} in {path}[{extension}]"
            )
        proj_name = ctype[5:8] if len(ctype) >= 8 else ""
        if not proj_name.strip("-"):
            raise ProjectionError(f"Missing projection code in {ctype!r} in {path}[{extension}]")

        try:
            crpix = (header["CRPIX1"], header["CRPIX2"])
            crval = (header["CRVAL1"], header["CRVAL2"])
            cdelt = (header["CDELT1"], header["CDELT2"])
        except KeyError as ex:
            raise ProjectionError(f"Missing WCS keyword in {path}[{extension}]: {ex}") from ex

        return cls(proj_name, crpix, crval, cdelt,
                   crota2=header.get("CROTA2", 0.0),
                   galactic=galactic,
                   lonpole=header.get("LONPOLE"),
                   latpole=header.get("LATPOLE"))

    def _reset(self):
        try:
            self._wcs.wcs.set()
        except (WcsError, ValueError) as ex:
            raise ProjectionError(f"wcslib rejected projection {list(self._wcs.wcs.ctype)}: {ex}") from ex

    # ── Mapping ──

    def sph2pix(self, s1: float, s2: float) -> tuple[float, float]:
        """Project sky coordinates to pixels.

        Parameters
        ----------
        s1 : float — ra or l [deg]
        s2 : float — dec or b [deg]

        Returns
        -------
        (x, y) — pixel coordinates
        """
        if s1 > 180.0:
            s1 -= 360.0
        try:
            x, y = self._wcs.wcs_world2pix(np.array([[s1, s2]]), _ORIGIN)[0]
        except WcsError as ex:
            raise ProjectionError(f"Cannot project ({s1}, {s2}): {ex}") from ex
        if not (np.isfinite(x) and np.isfinite(y)):
            raise ProjectionError(f"Coordinates ({s1}, {s2}) are outside the projection")
        return float(x), float(y)

    def pix2sph(self, x1: float, x2: float) -> tuple[float, float]:
        """Deproject pixels to sky coordinates [deg]; longitude in [0, 360)."""
        try:
            s1, s2 = self._wcs.wcs_pix2world(np.array([[x1, x2]]), _ORIGIN)[0]
        except WcsError as ex:
            raise ProjectionError(f"Cannot deproject pixel ({x1}, {x2}): {ex}") from ex
        if not (np.isfinite(s1) and np.isfinite(s2)):
            raise ProjectionError(f"Pixel ({x1}, {x2}) is outside the projection")
        s1 = float(s1) % 360.0
        if s1 >= 360.0:
            s1 -= 360.0
        return s1, float(s2)

    def pix2pix(self, x1: float, x2: float, other: "SkyProj") -> tuple[float, float]:
        """Pixel in ``other`` re-expressed as a pixel of this projection."""
        s1, s2 = other.pix2sph(x1, x2)
        return self.sph2pix(s1, s2)

    # ── Settings ──

    def set_lonpole(self, lonpole: float):
        self._wcs.wcs.lonpole = lonpole
        self._reset()

    def set_latpole(self, latpole: float):
        self._wcs.wcs.latpole = latpole
        self._reset()

    def is_galactic(self) -> bool:
        return str(self._wcs.wcs.ctype[0]).startswith("GLON")

    @property
    def wcs(self) -> WCS:
        """The underlying astropy WCS."""
        return self._wcs
