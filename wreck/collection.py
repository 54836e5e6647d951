"""A list of shapes kept alongside their bounding spheres."""

from __future__ import annotations

import copy
from typing import Iterable, Iterator, Optional, Tuple

from wreck.broadphase import any_collides_sphere
from wreck.linalg import Affine, ArrayLike
from wreck.soa import SpheresSoA

_SHAPE_METHODS = ("broadphase", "translate", "rotate_mat", "rotate_quat", "transform", "scale")


def _require_shape(item: object) -> object:
    missing = [name for name in _SHAPE_METHODS if not callable(getattr(item, name, None))]
    if missing:
        raise TypeError(
            f"{type(item).__name__} cannot be stored: missing {', '.join(missing)}"
        )
    return item


def _require_bounded(shape: object) -> object:
    if not callable(getattr(shape, "broadphase", None)):
        raise TypeError(f"{type(shape).__name__} has no bounding sphere")
    return shape


class BroadCollection:
    """Shapes stored together with a structure-of-arrays of their bounding spheres.

    Queries first reject against the bounding spheres and only then run the
    exact test of the query shape against every stored item.
    """

    __slots__ = ("_items", "_broad")

    def __init__(self, items: Optional[Iterable[object]] = None) -> None:
        stored = [_require_shape(item) for item in (items or ())]
        self._items = stored
        self._broad = SpheresSoA.from_bounded(stored)

    def push(self, item: object) -> None:
        """Add one shape at the end."""
        _require_shape(item)
        self._broad.push(item.broadphase())  # type: ignore[attr-defined]
        self._items.append(item)

    def extend(self, items: Iterable[object]) -> None:
        """Add every shape of ``items`` at the end, in order."""
        for item in items:
            self.push(item)

    def append(self, other: "BroadCollection") -> None:
        """Move every shape of ``other`` to the end of this collection, leaving ``other`` empty."""
        if not isinstance(other, BroadCollection):
            raise TypeError(f"expected BroadCollection, got {type(other).__name__}")
        if other is self:
            raise ValueError("cannot append a collection to itself")
        self._items.extend(other._items)
        other._items = []
        self._broad.append(other._broad)

    def copy_from(self, other: "BroadCollection") -> None:
        """Replace the contents of this collection with a copy of ``other``."""
        if not isinstance(other, BroadCollection):
            raise TypeError(f"expected BroadCollection, got {type(other).__name__}")
        self._items = copy.deepcopy(other._items)
        self._broad.copy_from(other._broad)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[object]:
        return iter(self._items)

    def items(self) -> Tuple[object, ...]:
        """Return the stored shapes in insertion order."""
        return tuple(self._items)

    def collides(self, shape: object) -> bool:
        """Return True if ``shape`` collides with any stored shape.

        Rejects early when no bounding sphere overlaps the shape's bounding
        sphere; otherwise runs ``shape.collides(item)`` on the items.
        """
        _require_bounded(shape)
        if not any_collides_sphere(self._broad, shape.broadphase()):  # type: ignore[attr-defined]
            return False
        return any(shape.collides(item) for item in self._items)  # type: ignore[attr-defined]

    def collides_only_broadphase(self, shape: object) -> bool:
        """Return True if any stored bounding sphere overlaps the bounding sphere of ``shape``."""
        _require_bounded(shape)
        return any_collides_sphere(self._broad, shape.broadphase())  # type: ignore[attr-defined]

    def translate(self, offset: ArrayLike) -> None:
        """Move every shape by ``offset``."""
        for item in self._items:
            item.translate(offset)  # type: ignore[attr-defined]
        self._broad.translate(offset)

    def rotate_mat(self, mat: ArrayLike) -> None:
        """Rotate every shape about the origin by the 3x3 matrix ``mat``."""
        for item in self._items:
            item.rotate_mat(mat)  # type: ignore[attr-defined]
        self._broad.rotate_mat(mat)

    def rotate_quat(self, quat: ArrayLike) -> None:
        """Rotate every shape about the origin by the quaternion ``(x, y, z, w)``."""
        for item in self._items:
            item.rotate_quat(quat)  # type: ignore[attr-defined]
        self._broad.rotate_quat(quat)

    def transform(self, affine: Affine) -> None:
        """Apply an affine transform to every shape."""
        for item in self._items:
            item.transform(affine)  # type: ignore[attr-defined]
        self._broad.transform(affine)

    def scale(self, factor: float) -> None:
        """Scale every shape by ``factor``."""
        for item in self._items:
            item.scale(factor)  # type: ignore[attr-defined]
        self._broad.scale(factor)

    def __repr__(self) -> str:
        return f"BroadCollection({self._items!r})"

    def __str__(self) -> str:
        return f"BroadCollection(len: {len(self._items)})"