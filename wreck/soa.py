"""Structure-of-arrays storage for many spheres."""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence, Tuple, Union

import numpy as np

from wreck.linalg import DTYPE, Affine, apply_mat3, quat_to_mat3
from wreck.sphere import Sphere

ArrayLike = Union[np.ndarray, Sequence[float]]

PAD = 16


def _pad(n: int) -> int:
    return (n + PAD - 1) // PAD * PAD


def _readonly(view: np.ndarray) -> np.ndarray:
    view = view.view()
    view.flags.writeable = False
    return view


class SpheresSoA:
    """Spheres stored as separate x, y, z and radius channels.

    The channels live in one float32 buffer laid out as
    ``[x; padded][y; padded][z; padded][r; padded]``. Each channel is padded
    to a multiple of 16; padding slots hold a NaN radius, so every overlap
    comparison against them is false.
    """

    __slots__ = ("_buf", "_padded", "_len")

    def __init__(self) -> None:
        self._buf = np.zeros(0, dtype=DTYPE)
        self._padded = 0
        self._len = 0

    @classmethod
    def with_capacity(cls, cap: int) -> "SpheresSoA":
        """Return an empty store; ``cap`` is a size hint and must not be negative."""
        if cap < 0:
            raise ValueError("capacity must not be negative")
        return cls()

    @classmethod
    def _from_columns(
        cls, xs: Sequence[float], ys: Sequence[float], zs: Sequence[float], rs: Sequence[float]
    ) -> "SpheresSoA":
        n = len(xs)
        padded = _pad(n)
        buf = np.zeros(4 * padded, dtype=DTYPE)
        buf[:n] = xs
        buf[padded : padded + n] = ys
        buf[2 * padded : 2 * padded + n] = zs
        buf[3 * padded : 3 * padded + n] = rs
        buf[3 * padded + n : 4 * padded] = np.nan
        soa = cls()
        soa._buf = buf
        soa._padded = padded
        soa._len = n
        return soa

    @classmethod
    def from_slice(cls, spheres: Iterable[Sphere]) -> "SpheresSoA":
        """Build a store holding the given spheres in order."""
        items = list(spheres)
        return cls._from_columns(
            [float(s.center[0]) for s in items],
            [float(s.center[1]) for s in items],
            [float(s.center[2]) for s in items],
            [s.radius for s in items],
        )

    @classmethod
    def from_bounded(cls, items: Iterable[object]) -> "SpheresSoA":
        """Build a store holding the bounding sphere of each item."""
        return cls.from_slice(item.broadphase() for item in items)  # type: ignore[attr-defined]

    def x(self) -> np.ndarray:
        """Read-only view of the padded x channel."""
        return _readonly(self._buf[: self._padded])

    def y(self) -> np.ndarray:
        """Read-only view of the padded y channel."""
        return _readonly(self._buf[self._padded : 2 * self._padded])

    def z(self) -> np.ndarray:
        """Read-only view of the padded z channel."""
        return _readonly(self._buf[2 * self._padded : 3 * self._padded])

    def r(self) -> np.ndarray:
        """Read-only view of the padded radius channel."""
        return _readonly(self._buf[3 * self._padded : 4 * self._padded])

    def padded(self) -> int:
        """Return the padded channel length."""
        return self._padded

    def _channels(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        p = self._padded
        return (
            self._buf[:p],
            self._buf[p : 2 * p],
            self._buf[2 * p : 3 * p],
            self._buf[3 * p : 4 * p],
        )

    def __len__(self) -> int:
        return self._len

    def __getitem__(self, index: int) -> Sphere:
        i = index.__index__()
        if i < 0:
            i += self._len
        if not 0 <= i < self._len:
            raise IndexError("sphere index out of range")
        xs, ys, zs, rs = self._channels()
        return Sphere((xs[i], ys[i], zs[i]), float(rs[i]))

    def __iter__(self) -> Iterator[Sphere]:
        for i in range(self._len):
            yield self[i]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SpheresSoA):
            return NotImplemented
        return (
            self._len == other._len
            and self._padded == other._padded
            and bool(np.array_equal(self._buf, other._buf, equal_nan=True))
        )

    __hash__ = None  # type: ignore[assignment]

    def __copy__(self) -> "SpheresSoA":
        soa = SpheresSoA()
        soa.copy_from(self)
        return soa

    def __deepcopy__(self, memo: dict) -> "SpheresSoA":
        return self.__copy__()

    def push(self, sphere: Sphere) -> None:
        """Add one sphere at the end, growing the padding by 16 when full."""
        if not isinstance(sphere, Sphere):
            raise TypeError(f"expected Sphere, got {type(sphere).__name__}")
        if self._len == self._padded:
            self._grow()
        xs, ys, zs, rs = self._channels()
        n = self._len
        xs[n], ys[n], zs[n] = sphere.center
        rs[n] = sphere.radius
        self._len += 1

    def _grow(self) -> None:
        old = self._padded
        new = old + PAD
        buf = np.zeros(4 * new, dtype=DTYPE)
        for k in range(4):
            buf[k * new : k * new + old] = self._buf[k * old : (k + 1) * old]
        buf[3 * new + old : 4 * new] = np.nan
        self._buf = buf
        self._padded = new

    def _merge(self, other: "SpheresSoA") -> None:
        sl, ol = self._len, other._len
        new_len = sl + ol
        new_padded = _pad(new_len)
        buf = np.zeros(4 * new_padded, dtype=DTYPE)
        for k, (mine, theirs) in enumerate(zip(self._channels(), other._channels())):
            start = k * new_padded
            buf[start : start + sl] = mine[:sl]
            buf[start + sl : start + new_len] = theirs[:ol]
        buf[3 * new_padded + new_len : 4 * new_padded] = np.nan
        self._buf = buf
        self._padded = new_padded
        self._len = new_len

    def append(self, other: "SpheresSoA") -> None:
        """Move every sphere of ``other`` to the end of this store, leaving ``other`` empty."""
        if other._len == 0:
            return
        self._merge(other)
        other.clear()

    def extend_from(self, other: "SpheresSoA") -> None:
        """Copy every sphere of ``other`` to the end of this store."""
        if other._len == 0:
            return
        self._merge(other)

    def clear(self) -> None:
        """Remove all spheres, keeping the allocation."""
        rs = self._channels()[3]
        rs[: self._len] = np.nan
        self._len = 0

    def copy_from(self, other: "SpheresSoA") -> None:
        """Replace the contents of this store with a copy of ``other``."""
        self._buf = other._buf.copy()
        self._padded = other._padded
        self._len = other._len

    def translate(self, offset: ArrayLike) -> None:
        """Move every centre by ``offset``."""
        off = np.asarray(offset, dtype=DTYPE)
        if off.shape != (3,):
            raise ValueError(f"offset must have shape (3,), got {off.shape}")
        xs, ys, zs, _ = self._channels()
        xs += off[0]
        ys += off[1]
        zs += off[2]

    def rotate_mat(self, mat: ArrayLike) -> None:
        """Multiply every centre by the 3x3 matrix ``mat``."""
        xs, ys, zs, _ = self._channels()
        nx, ny, nz = apply_mat3(mat, xs, ys, zs)
        xs[:], ys[:], zs[:] = nx, ny, nz

    def rotate_quat(self, quat: ArrayLike) -> None:
        """Rotate every centre by the quaternion ``(x, y, z, w)``."""
        self.rotate_mat(quat_to_mat3(quat))

    def transform(self, affine: Affine) -> None:
        """Apply an affine transform to every centre."""
        xs, ys, zs, _ = self._channels()
        nx, ny, nz = apply_mat3(affine.matrix, xs, ys, zs)
        t = affine.translation
        xs[:] = nx + t[0]
        ys[:] = ny + t[1]
        zs[:] = nz + t[2]

    def scale(self, factor: float) -> None:
        """Scale every radius by ``factor``."""
        rs = self._channels()[3]
        rs *= np.float32(factor)

    def __repr__(self) -> str:
        return (
            f"SpheresSoA(x={self.x().tolist()}, y={self.y().tolist()}, "
            f"z={self.z().tolist()}, r={self.r().tolist()}, len={self._len})"
        )

    def __str__(self) -> str:
        return f"SpheresSoA(len: {self._len})"