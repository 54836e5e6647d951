"""Scalar geometry helpers shared by the shape tests."""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np

from wreck.linalg import DTYPE

ArrayLike = Union[np.ndarray, Sequence[float]]

_EPS = np.float32(np.finfo(np.float32).eps)


def _vec(value: ArrayLike, name: str) -> np.ndarray:
    arr = np.asarray(value, dtype=DTYPE)
    if arr.shape != (3,):
        raise ValueError(f"{name} must have shape (3,), got {arr.shape}")
    return arr


def _dot32(a: np.ndarray, b: np.ndarray) -> np.float32:
    return np.float32(a[0] * b[0] + a[1] * b[1] + a[2] * b[2])


def _clamp(value: np.float32, lo: np.float32, hi: np.float32) -> np.float32:
    return np.float32(min(max(value, lo), hi))


def dot(a: ArrayLike, b: ArrayLike) -> float:
    """Return the dot product of two 3-vectors in single precision."""
    return float(_dot32(_vec(a, "a"), _vec(b, "b")))


def clamped_line_segment_dist_sq(
    p1: ArrayLike,
    d1: ArrayLike,
    s_min: float,
    s_max: float,
    p2: ArrayLike,
    d2: ArrayLike,
) -> float:
    """Squared distance between ``p1 + s*d1`` (s in [s_min, s_max]) and ``p2 + t*d2`` (t in [0, 1])."""
    lo = np.float32(s_min)
    hi = np.float32(s_max)
    if not lo <= hi:
        raise ValueError("s_min must not be greater than s_max")
    a_p = _vec(p1, "p1")
    a_d = _vec(d1, "d1")
    b_p = _vec(p2, "p2")
    b_d = _vec(d2, "d2")

    zero = np.float32(0.0)
    one = np.float32(1.0)
    r = (a_p - b_p).astype(DTYPE)
    a = _dot32(a_d, a_d)
    e = _dot32(b_d, b_d)
    f = _dot32(b_d, r)

    if a <= _EPS and e <= _EPS:
        s = _clamp(zero, lo, hi)
        t = zero
    elif a <= _EPS:
        s = _clamp(zero, lo, hi)
        t = _clamp(np.float32(f / e), zero, one)
    else:
        c = _dot32(a_d, r)
        if e <= _EPS:
            t = zero
            s = _clamp(np.float32(-c / a), lo, hi)
        else:
            b = _dot32(a_d, b_d)
            denom = np.float32(a * e - b * b)
            if abs(denom) > _EPS:
                s = _clamp(np.float32((b * f - c * e) / denom), lo, hi)
            else:
                s = _clamp(zero, lo, hi)
            t = np.float32((b * s + f) / e)
            if t < zero:
                t = zero
                s = _clamp(np.float32(-c / a), lo, hi)
            elif t > one:
                t = one
                s = _clamp(np.float32((b - c) / a), lo, hi)

    closest1 = (a_p + a_d * s).astype(DTYPE)
    closest2 = (b_p + b_d * t).astype(DTYPE)
    diff = (closest1 - closest2).astype(DTYPE)
    return float(_dot32(diff, diff))