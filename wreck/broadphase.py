"""Bounding-sphere overlap queries over a :class:`~wreck.soa.SpheresSoA`.

Every query compares squared centre distances against the squared sum of
radii in single precision. Padding slots carry a NaN radius, so they never
report an overlap and need no separate handling.
"""

from __future__ import annotations

import numpy as np

from wreck.linalg import DTYPE
from wreck.soa import SpheresSoA
from wreck.sphere import Sphere


def _check_soa(value: object, name: str) -> SpheresSoA:
    if not isinstance(value, SpheresSoA):
        raise TypeError(f"{name} must be a SpheresSoA, got {type(value).__name__}")
    return value


def _check_sphere(value: object, name: str) -> Sphere:
    if not isinstance(value, Sphere):
        raise TypeError(f"{name} must be a Sphere, got {type(value).__name__}")
    return value


def _overlap_mask(soa: SpheresSoA, sphere: Sphere) -> np.ndarray:
    """Per-slot overlap test over the padded channels (padding is always False)."""
    cx, cy, cz = (DTYPE(c) for c in sphere.center)
    sr = DTYPE(sphere.radius)
    dx = cx - soa.x()
    dy = cy - soa.y()
    dz = cz - soa.z()
    dist_sq = dx * dx + dy * dy + dz * dz
    rsum = sr + soa.r()
    with np.errstate(invalid="ignore"):
        return dist_sq <= rsum * rsum


def any_collides_sphere(soa: SpheresSoA, sphere: Sphere) -> bool:
    """Return True if any sphere in ``soa`` overlaps or touches ``sphere``."""
    _check_soa(soa, "soa")
    _check_sphere(sphere, "sphere")
    if len(soa) == 0:
        return False
    return bool(_overlap_mask(soa, sphere).any())


def broadphase_collect(soa: SpheresSoA, query: Sphere) -> np.ndarray:
    """Return a boolean array with one entry per stored sphere, True where it overlaps ``query``."""
    _check_soa(soa, "soa")
    _check_sphere(query, "query")
    n = len(soa)
    if n == 0:
        return np.zeros(0, dtype=bool)
    return _overlap_mask(soa, query)[:n].copy()


def any_collides_soa(a: SpheresSoA, b: SpheresSoA) -> bool:
    """Return True if any sphere of ``a`` overlaps or touches any sphere of ``b``."""
    _check_soa(a, "a")
    _check_soa(b, "b")
    if len(a) == 0 or len(b) == 0:
        return False
    return any(_overlap_mask(b, sphere).any() for sphere in a)