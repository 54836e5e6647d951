import math

import numpy as np
import pytest

from wreck.collection import BroadCollection
from wreck.linalg import Affine, quat_from_axis_angle, rotation_y
from wreck.sphere import Sphere


def _row(n, spacing=10.0, radius=0.5):
    return [Sphere((i * spacing, 0.0, 0.0), radius) for i in range(n)]


def test_empty_collection_never_collides():
    col = BroadCollection()
    assert len(col) == 0
    assert col.collides(Sphere((0, 0, 0), 100.0)) is False
    assert col.collides_only_broadphase(Sphere((0, 0, 0), 100.0)) is False


def test_collides_near_and_far():
    col = BroadCollection(_row(3))
    assert col.collides(Sphere((10.0, 0.0, 0.8), 0.5)) is True
    assert col.collides(Sphere((5.0, 0.0, 0.0), 0.5)) is False


def test_touching_counts_as_collision():
    col = BroadCollection([Sphere((0.0, 0.0, 0.0), 1.0)])
    assert col.collides(Sphere((2.0, 0.0, 0.0), 1.0)) is True


def test_broadphase_agrees_with_narrowphase_for_spheres():
    rng = np.random.default_rng(7)
    spheres = [Sphere(rng.uniform(-5, 5, 3), rng.uniform(0.1, 1.0)) for _ in range(40)]
    col = BroadCollection(spheres)
    for _ in range(50):
        q = Sphere(rng.uniform(-6, 6, 3), rng.uniform(0.1, 1.0))
        expected = any(q.collides(s) for s in spheres)
        assert col.collides(q) == expected
        assert col.collides_only_broadphase(q) == expected


def test_push_and_extend_keep_order_and_broadphase():
    col = BroadCollection()
    items = _row(20)
    col.push(items[0])
    col.extend(items[1:])
    assert len(col) == 20
    assert col.items() == tuple(items)
    assert list(col) == items
    assert col.collides(Sphere((190.0, 0.0, 0.0), 0.1)) is True


def test_append_moves_items_and_empties_other():
    a = BroadCollection(_row(3))
    b = BroadCollection([Sphere((0.0, 50.0, 0.0), 1.0)])
    a.append(b)
    assert len(a) == 4
    assert len(b) == 0
    assert a.collides(Sphere((0.0, 50.0, 0.0), 0.1)) is True
    assert b.collides(Sphere((0.0, 50.0, 0.0), 0.1)) is False


def test_append_self_rejected():
    col = BroadCollection(_row(2))
    with pytest.raises(ValueError):
        col.append(col)


def test_copy_from_is_independent():
    src = BroadCollection(_row(2))
    dst = BroadCollection([Sphere((100.0, 100.0, 100.0), 1.0)])
    dst.copy_from(src)
    assert dst.items() == src.items()
    src.translate((0.0, 30.0, 0.0))
    assert dst.collides(Sphere((0.0, 0.0, 0.0), 0.1)) is True
    assert src.collides(Sphere((0.0, 0.0, 0.0), 0.1)) is False
    assert dst.collides(Sphere((100.0, 100.0, 100.0), 0.1)) is False


def test_translate_moves_items_and_bounds():
    col = BroadCollection([Sphere((0.0, 0.0, 0.0), 0.5)])
    col.translate((3.0, 0.0, 0.0))
    assert np.allclose(col.items()[0].center, [3.0, 0.0, 0.0])
    assert col.collides_only_broadphase(Sphere((3.0, 0.0, 0.0), 0.1)) is True
    assert col.collides_only_broadphase(Sphere((0.0, 0.0, 0.0), 0.1)) is False


def test_rotate_mat_moves_centres_about_origin():
    col = BroadCollection([Sphere((1.0, 0.0, 0.0), 0.2)])
    col.rotate_mat(rotation_y(math.pi / 2))
    assert np.allclose(col.items()[0].center, [0.0, 0.0, -1.0], atol=1e-6)
    assert col.collides(Sphere((0.0, 0.0, -1.0), 0.1)) is True
    assert col.collides(Sphere((1.0, 0.0, 0.0), 0.1)) is False


def test_rotate_quat_matches_rotate_mat():
    a = BroadCollection(_row(5, spacing=1.5))
    b = BroadCollection(_row(5, spacing=1.5))
    a.rotate_quat(quat_from_axis_angle((0.0, 1.0, 0.0), 0.7))
    b.rotate_mat(rotation_y(0.7))
    for sa, sb in zip(a, b):
        assert np.allclose(sa.center, sb.center, atol=1e-5)
    probe = Sphere(a.items()[3].center, 0.05)
    assert b.collides(probe) is True


def test_transform_applies_affine():
    col = BroadCollection([Sphere((1.0, 0.0, 0.0), 0.2)])
    aff = Affine.from_rotation_translation(
        quat_from_axis_angle((0.0, 1.0, 0.0), math.pi / 2), (1.0, 2.0, 3.0)
    )
    col.transform(aff)
    expected = aff.transform_point((1.0, 0.0, 0.0))
    assert np.allclose(col.items()[0].center, expected, atol=1e-6)
    assert col.collides_only_broadphase(Sphere(expected, 0.01)) is True


def test_scale_grows_radii():
    col = BroadCollection([Sphere((0.0, 0.0, 0.0), 1.0)])
    q = Sphere((3.0, 0.0, 0.0), 0.5)
    assert col.collides(q) is False
    col.scale(3.0)
    assert col.items()[0].radius == pytest.approx(3.0)
    assert col.collides(q) is True
    assert col.collides_only_broadphase(q) is True


def test_str():
    assert str(BroadCollection(_row(3))) == "BroadCollection(len: 3)"


def test_push_rejects_non_shape():
    col = BroadCollection()
    with pytest.raises(TypeError):
        col.push(42)


def test_collides_rejects_unbounded_query():
    col = BroadCollection(_row(1))
    with pytest.raises(TypeError):
        col.collides("not a shape")