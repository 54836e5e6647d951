"""Sphere primitive."""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np

from wreck.linalg import DTYPE, Affine

ArrayLike = Union[np.ndarray, Sequence[float]]


def _fmt(value: float) -> str:
    text = str(np.float32(value))
    return text[:-2] if text.endswith(".0") else text


def _check_shape(value: ArrayLike, shape: tuple, name: str) -> np.ndarray:
    arr = np.asarray(value, dtype=DTYPE)
    if arr.shape != shape:
        raise ValueError(f"{name} must have shape {shape}, got {arr.shape}")
    return arr


class Sphere:
    """A sphere given by its centre and a non-negative radius."""

    __slots__ = ("center", "radius")

    def __init__(self, center: ArrayLike, radius: float) -> None:
        c = _check_shape(center, (3,), "center")
        if not radius >= 0.0:
            raise ValueError("Sphere radius must be non-negative")
        self.center = c.copy()
        self.radius = float(np.float32(radius))

    def diameter(self) -> float:
        """Return twice the radius."""
        return float(np.float32(self.radius) * np.float32(2.0))

    def scale(self, factor: float) -> None:
        """Scale the radius by ``factor`` in place."""
        self.radius = float(np.float32(self.radius) * np.float32(factor))

    def translate(self, offset: ArrayLike) -> None:
        """Move the centre by ``offset``."""
        off = _check_shape(offset, (3,), "offset")
        self.center = (self.center + off).astype(DTYPE)

    def rotate_mat(self, mat: ArrayLike) -> None:
        """Check ``mat`` is a 3x3 matrix; rotation about the centre leaves a sphere unchanged."""
        _check_shape(mat, (3, 3), "mat")

    def rotate_quat(self, quat: ArrayLike) -> None:
        """Check ``quat`` has four components; rotation about the centre leaves a sphere unchanged."""
        _check_shape(quat, (4,), "quat")

    def transform(self, affine: Affine) -> None:
        """Apply an affine transform to the centre; the radius is kept."""
        self.center = affine.transform_point(self.center)

    def broadphase(self) -> "Sphere":
        """Return the bounding sphere, which is a copy of this sphere."""
        return Sphere(self.center, self.radius)

    def collides(self, other: "Sphere") -> bool:
        """Return True if the two spheres overlap or touch."""
        if not isinstance(other, Sphere):
            raise TypeError(f"cannot test Sphere against {type(other).__name__}")
        d = (self.center - other.center).astype(DTYPE)
        dist_sq = np.float32(d[0] * d[0] + d[1] * d[1] + d[2] * d[2])
        rs = np.float32(self.radius) + np.float32(other.radius)
        return bool(dist_sq <= rs * rs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sphere):
            return NotImplemented
        return bool(np.array_equal(self.center, other.center)) and self.radius == other.radius

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Sphere(center={self.center.tolist()}, radius={self.radius})"

    def __str__(self) -> str:
        x, y, z = self.center
        return (
            f"Sphere(center: [{_fmt(x)}, {_fmt(y)}, {_fmt(z)}], "
            f"radius: {_fmt(self.radius)})"
        )