"""Vector helpers, spherical coordinates, Fresnel term and local frames."""

from __future__ import annotations

import math

import numpy as np

from .common import EPSILON


def _vec(v) -> np.ndarray:
    return np.asarray(v, dtype=float)


def spherical_direction(theta: float, phi: float) -> np.ndarray:
    """Unit vector for the polar angle ``theta`` and azimuth ``phi``."""
    sin_theta, cos_theta = math.sin(theta), math.cos(theta)
    sin_phi, cos_phi = math.sin(phi), math.cos(phi)
    return np.array([sin_theta * cos_phi, sin_theta * sin_phi, cos_theta])


def spherical_coordinates(v) -> np.ndarray:
    """Return ``(theta, phi)`` of a unit vector, with ``phi`` in ``[0, 2*pi)``."""
    v = _vec(v)
    with np.errstate(invalid="ignore"):
        theta = float(np.arccos(v[2]))
    phi = math.atan2(v[1], v[0])
    if phi < 0:
        phi += 2 * math.pi
    return np.array([theta, phi])


def spherical_direction_in_frame(sin_theta, cos_theta, phi, x, y, z) -> np.ndarray:
    """Spherical direction expressed in the basis ``x``, ``y``, ``z``."""
    return (
        sin_theta * math.cos(phi) * _vec(x)
        + sin_theta * math.sin(phi) * _vec(y)
        + cos_theta * _vec(z)
    )


def coordinate_system(a) -> tuple[np.ndarray, np.ndarray]:
    """Complete the unit vector ``a`` to an orthonormal basis ``(b, c, a)``."""
    a = _vec(a)
    if abs(a[0]) > abs(a[1]):
        inv_len = 1.0 / math.sqrt(a[0] * a[0] + a[2] * a[2])
        c = np.array([a[2] * inv_len, 0.0, -a[0] * inv_len])
    else:
        inv_len = 1.0 / math.sqrt(a[1] * a[1] + a[2] * a[2])
        c = np.array([0.0, a[2] * inv_len, -a[1] * inv_len])
    b = np.cross(c, a)
    return b, c


def fresnel(cos_theta_i: float, ext_ior: float, int_ior: float) -> float:
    """Unpolarized Fresnel reflectance of a dielectric interface."""
    eta_i, eta_t = ext_ior, int_ior
    if ext_ior == int_ior:
        return 0.0
    if cos_theta_i < 0.0:
        eta_i, eta_t = eta_t, eta_i
        cos_theta_i = -cos_theta_i

    eta = eta_i / eta_t
    sin_theta_t_sqr = eta * eta * (1 - cos_theta_i * cos_theta_i)
    if sin_theta_t_sqr > 1.0:
        return 1.0  # total internal reflection

    cos_theta_t = math.sqrt(1.0 - sin_theta_t_sqr)
    rs = (eta_i * cos_theta_i - eta_t * cos_theta_t) / (eta_i * cos_theta_i + eta_t * cos_theta_t)
    rp = (eta_t * cos_theta_i - eta_i * cos_theta_t) / (eta_t * cos_theta_i + eta_i * cos_theta_t)
    return (rs * rs + rp * rp) / 2.0


def is_nan(w) -> bool:
    """True if any component is NaN."""
    return bool(np.isnan(_vec(w)).any())


def is_normalized(w) -> bool:
    """True if the vector has unit length within ``EPSILON``."""
    return abs(float(np.linalg.norm(_vec(w))) - 1.0) < EPSILON


class Frame:
    """Orthonormal frame ``(s, t, n)``; built from ``n`` alone if needed."""

    __slots__ = ("s", "t", "n")

    def __init__(self, n, s=None, t=None) -> None:
        self.n = _vec(n)
        if s is None or t is None:
            s, t = coordinate_system(self.n)
        self.s = _vec(s)
        self.t = _vec(t)

    def __repr__(self) -> str:
        return f"Frame(s={self.s.tolist()}, t={self.t.tolist()}, n={self.n.tolist()})"

    def to_local(self, v) -> np.ndarray:
        """Express a world-space vector in this frame."""
        v = _vec(v)
        return np.array([v @ self.s, v @ self.t, v @ self.n])

    def to_world(self, v) -> np.ndarray:
        """Express a frame-local vector in world space."""
        v = _vec(v)
        return self.s * v[0] + self.t * v[1] + self.n * v[2]

    @staticmethod
    def cos_theta(v) -> float:
        """Cosine of the angle to the frame normal of a local vector."""
        return float(v[2])