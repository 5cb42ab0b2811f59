"""
skyorbit.quaternion — Rotation Quaternions
============================================

Quaternions stored as a vector part ``v`` and scalar part ``s``, implementing
multiplication and rotation of vectors.

Multiplication::

    (v, s)(v', s') = (v × v' + s v' + s' v,  s s' − v · v')

which is associative but not commutative.  A rotation by angle θ about unit
axis n is ``(sin(θ/2) n, cos(θ/2))`` and acts on a vector as ``q v q*``.
"""

import numpy as np
from numpy.typing import NDArray

from .utils import normalize


class Quaternion:
    """Quaternion with vector part and scalar part.

    The default is the identity rotation.
    """

    _NEAR_TOLERANCE = 1e-8

    # ndarray * Quaternion must dispatch to __rmul__
    __array_ufunc__ = None

    def __init__(self, vector: NDArray = (0.0, 0.0, 0.0), scalar: float = 1.0):
        self._v = np.asarray(vector, dtype=np.float64).reshape(3)
        self._s = float(scalar)

    # ── Construction ──

    @classmethod
    def from_axis_angle(cls, axis: NDArray, angle: float) -> "Quaternion":
        """Rotation by ``angle`` [rad] about ``axis``."""
        k = normalize(axis)
        return cls(np.sin(angle / 2.0) * k, np.cos(angle / 2.0))

    @classmethod
    def from_axes(cls, zhat: NDArray, xhat: NDArray) -> "Quaternion":
        """Rotation that carries the x and z axes onto ``xhat`` and ``zhat``.

        ``xhat`` and ``zhat`` are the x and z directions of the rotated
        object and should be orthogonal unit vectors.
        """
        z = normalize(zhat)
        x = normalize(xhat)
        y = np.cross(z, x)
        return cls.from_rotation(np.column_stack([x, y, z]))

    @classmethod
    def from_rotation(cls, R: NDArray) -> "Quaternion":
        """Quaternion equivalent to a 3×3 rotation matrix (Shepperd's method)."""
        R = np.asarray(R, dtype=np.float64)
        if R.shape != (3, 3):
            raise ValueError(f"Rotation matrix must be (3,3), got {R.shape}")
        trace = np.trace(R)
        if trace > 0.0:
            s = 2.0 * np.sqrt(1.0 + trace)
            w = 0.25 * s
            v = np.array([R[2, 1] - R[1, 2], R[0, 2] - R[2, 0], R[1, 0] - R[0, 1]]) / s
        elif R[0, 0] > R[1, 1] and R[0, 0] > R[2, 2]:
            s = 2.0 * np.sqrt(1.0 + R[0, 0] - R[1, 1] - R[2, 2])
            w = (R[2, 1] - R[1, 2]) / s
            v = np.array([0.25 * s, (R[0, 1] + R[1, 0]) / s, (R[0, 2] + R[2, 0]) / s])
        elif R[1, 1] > R[2, 2]:
            s = 2.0 * np.sqrt(1.0 + R[1, 1] - R[0, 0] - R[2, 2])
            w = (R[0, 2] - R[2, 0]) / s
            v = np.array([(R[0, 1] + R[1, 0]) / s, 0.25 * s, (R[1, 2] + R[2, 1]) / s])
        else:
            s = 2.0 * np.sqrt(1.0 + R[2, 2] - R[0, 0] - R[1, 1])
            w = (R[1, 0] - R[0, 1]) / s
            v = np.array([(R[0, 2] + R[2, 0]) / s, (R[1, 2] + R[2, 1]) / s, 0.25 * s])
        if w < 0.0:
            v, w = -v, -w
        return cls(v, w)

    @classmethod
    def parse(cls, line: str) -> "Quaternion":
        """Read ``x y z s`` from a single whitespace-separated line."""
        fields = line.split()
        if len(fields) < 4:
            raise ValueError(f"Expected 4 quaternion components, got {len(fields)}: {line!r}")
        try:
            x, y, z, s = (float(f) for f in fields[:4])
        except ValueError as ex:
            raise ValueError(f"Malformed quaternion line {line!r}") from ex
        return cls((x, y, z), s)

    # ── Access ──

    @property
    def vector(self) -> NDArray:
        return self._v.copy()

    @property
    def scalar(self) -> float:
        return self._s

    def norm(self) -> float:
        """Magnitude; 1 for rotations."""
        return float(np.sqrt(np.dot(self._v, self._v) + self._s**2))

    def conjugate(self) -> "Quaternion":
        return Quaternion(-self._v, self._s)

    def is_near(self, other: "Quaternion", tol: float = _NEAR_TOLERANCE) -> bool:
        """Approximately identical, component by component."""
        return bool(np.linalg.norm(self._v - other._v) + abs(self._s - other._s) < tol)

    # ── Algebra ──

    def __mul__(self, other):
        if isinstance(other, Quaternion):
            v2, s2 = other._v, other._s
        else:
            v2, s2 = np.asarray(other, dtype=np.float64).reshape(3), 0.0
        return Quaternion(
            np.cross(self._v, v2) + self._s * v2 + s2 * self._v,
            self._s * s2 - np.dot(self._v, v2),
        )

    def __rmul__(self, other):
        # vector * quaternion
        return Quaternion(other, 0.0) * self

    def rotate(self, v: NDArray) -> NDArray:
        """Rotate a vector: (q v q*).vector"""
        return (self * v * self.conjugate()).vector

    def rotation(self) -> NDArray:
        """Equivalent 3×3 rotation matrix."""
        x, y, z = self._v
        w = self._s
        return np.array([
            [1 - 2 * (y * y + z * z), 2 * (x * y - z * w), 2 * (x * z + y * w)],
            [2 * (x * y + z * w), 1 - 2 * (x * x + z * z), 2 * (y * z - x * w)],
            [2 * (x * z - y * w), 2 * (y * z + x * w), 1 - 2 * (x * x + y * y)],
        ])

    def power(self, t: float) -> "Quaternion":
        """Unit quaternion raised to a real power: rotation angle scaled by t."""
        sin_half = np.linalg.norm(self._v)
        if sin_half < 1e-15:
            return Quaternion()
        half = np.arctan2(sin_half, self._s)
        axis = self._v / sin_half
        return Quaternion(np.sin(t * half) * axis, np.cos(t * half))

    def interpolate(self, q1: "Quaternion", t: float) -> "Quaternion":
        """SLERP toward ``q1``: ``self`` at t=0, ``q1`` at t=1.

        Follows the shorter arc.
        """
        target = q1
        if np.dot(self._v, q1._v) + self._s * q1._s < 0.0:
            target = Quaternion(-q1._v, -q1._s)
        return self * (self.conjugate() * target).power(t)

    def __repr__(self) -> str:
        return f"Quaternion(vector={self._v.tolist()}, scalar={self._s})"
