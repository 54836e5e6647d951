"""Small 3D linear-algebra helpers built on numpy (single precision)."""

from __future__ import annotations

import math
from typing import Sequence, Tuple, Union

import numpy as np

ArrayLike = Union[np.ndarray, Sequence[float]]

DTYPE = np.float32


def vec3(x: float, y: float, z: float) -> np.ndarray:
    """Return a 3-component single-precision vector."""
    return np.array([x, y, z], dtype=DTYPE)


def _as_vec3(value: ArrayLike, name: str) -> np.ndarray:
    arr = np.asarray(value, dtype=DTYPE)
    if arr.shape != (3,):
        raise ValueError(f"{name} must have shape (3,), got {arr.shape}")
    return arr


def _as_mat3(value: ArrayLike, name: str) -> np.ndarray:
    arr = np.asarray(value, dtype=DTYPE)
    if arr.shape != (3, 3):
        raise ValueError(f"{name} must have shape (3, 3), got {arr.shape}")
    return arr


def quat_from_axis_angle(axis: ArrayLike, angle: float) -> np.ndarray:
    """Return the unit quaternion ``(x, y, z, w)`` rotating by ``angle`` about ``axis``."""
    a = np.asarray(axis, dtype=np.float64)
    if a.shape != (3,):
        raise ValueError(f"axis must have shape (3,), got {a.shape}")
    norm = float(np.linalg.norm(a))
    if norm == 0.0 or not math.isfinite(norm):
        raise ValueError("axis must be a non-zero finite vector")
    a = a / norm
    half = 0.5 * angle
    s = math.sin(half)
    return np.array([a[0] * s, a[1] * s, a[2] * s, math.cos(half)], dtype=DTYPE)


def quat_to_mat3(quat: ArrayLike) -> np.ndarray:
    """Return the 3x3 rotation matrix (acting on column vectors) of a quaternion ``(x, y, z, w)``."""
    q = np.asarray(quat, dtype=np.float64)
    if q.shape != (4,):
        raise ValueError(f"quaternion must have shape (4,), got {q.shape}")
    norm = float(np.linalg.norm(q))
    if norm == 0.0 or not math.isfinite(norm):
        raise ValueError("quaternion must be non-zero and finite")
    x, y, z, w = q / norm
    x2, y2, z2 = x + x, y + y, z + z
    xx, xy, xz = x * x2, x * y2, x * z2
    yy, yz, zz = y * y2, y * z2, z * z2
    wx, wy, wz = w * x2, w * y2, w * z2
    x_axis = (1.0 - (yy + zz), xy + wz, xz - wy)
    y_axis = (xy - wz, 1.0 - (xx + zz), yz + wx)
    z_axis = (xz + wy, yz - wx, 1.0 - (xx + yy))
    return np.column_stack((x_axis, y_axis, z_axis)).astype(DTYPE)


def rotation_y(angle: float) -> np.ndarray:
    """Return the rotation matrix for ``angle`` radians about the Y axis."""
    c = math.cos(angle)
    s = math.sin(angle)
    return np.array(
        [[c, 0.0, s], [0.0, 1.0, 0.0], [-s, 0.0, c]],
        dtype=DTYPE,
    )


def apply_mat3(
    mat: ArrayLike, xs: ArrayLike, ys: ArrayLike, zs: ArrayLike
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Multiply ``mat`` with every point given as separate x, y and z channels."""
    m = _as_mat3(mat, "mat")
    x = np.asarray(xs, dtype=DTYPE)
    y = np.asarray(ys, dtype=DTYPE)
    z = np.asarray(zs, dtype=DTYPE)
    if not (x.shape == y.shape == z.shape):
        raise ValueError("x, y and z channels must have the same shape")
    nx = m[0, 0] * x + m[0, 1] * y + m[0, 2] * z
    ny = m[1, 0] * x + m[1, 1] * y + m[1, 2] * z
    nz = m[2, 0] * x + m[2, 1] * y + m[2, 2] * z
    return nx.astype(DTYPE), ny.astype(DTYPE), nz.astype(DTYPE)


class Affine:
    """A linear 3x3 map followed by a translation."""

    __slots__ = ("matrix", "translation")

    def __init__(self, matrix: ArrayLike, translation: ArrayLike) -> None:
        self.matrix = _as_mat3(matrix, "matrix").copy()
        self.translation = _as_vec3(translation, "translation").copy()

    @classmethod
    def from_rotation_translation(cls, quat: ArrayLike, translation: ArrayLike) -> "Affine":
        """Build a rigid transform from a rotation quaternion and a translation."""
        return cls(quat_to_mat3(quat), translation)

    def transform_point(self, point: ArrayLike) -> np.ndarray:
        """Apply the transform to a single point."""
        p = _as_vec3(point, "point")
        return (self.matrix @ p + self.translation).astype(DTYPE)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Affine):
            return NotImplemented
        return bool(
            np.array_equal(self.matrix, other.matrix)
            and np.array_equal(self.translation, other.translation)
        )

    def __repr__(self) -> str:
        return (
            f"Affine(matrix={self.matrix.tolist()}, "
            f"translation={self.translation.tolist()})"
        )