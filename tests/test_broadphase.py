import random

import numpy as np
import pytest

from wreck.broadphase import any_collides_soa, any_collides_sphere, broadphase_collect
from wreck.soa import SpheresSoA
from wreck.sphere import Sphere


def _random_spheres(seed, n):
    rng = random.Random(seed)
    return [
        Sphere(
            (rng.uniform(-5.0, 5.0), rng.uniform(-5.0, 5.0), rng.uniform(-5.0, 5.0)),
            rng.uniform(0.1, 1.0),
        )
        for _ in range(n)
    ]


def test_empty_store_never_collides():
    soa = SpheresSoA()
    query = Sphere((0.0, 0.0, 0.0), 100.0)
    assert any_collides_sphere(soa, query) is False
    assert broadphase_collect(soa, query).shape == (0,)
    assert any_collides_soa(soa, SpheresSoA.from_slice([query])) is False
    assert any_collides_soa(SpheresSoA.from_slice([query]), soa) is False


def test_touching_spheres_count_as_collision():
    soa = SpheresSoA.from_slice([Sphere((3.0, 0.0, 0.0), 2.0)])
    assert any_collides_sphere(soa, Sphere((0.0, 0.0, 0.0), 1.0))


def test_padding_slots_do_not_collide():
    # Padding centres sit at the origin; only the NaN radius keeps them out.
    soa = SpheresSoA.from_slice([Sphere((50.0, 50.0, 50.0), 1.0)])
    query = Sphere((0.0, 0.0, 0.0), 1.0)
    assert not any_collides_sphere(soa, query)
    assert not broadphase_collect(soa, query).any()


def test_cleared_store_does_not_collide():
    soa = SpheresSoA.from_slice([Sphere((0.0, 0.0, 0.0), 1.0)])
    query = Sphere((0.5, 0.0, 0.0), 1.0)
    assert any_collides_sphere(soa, query)
    soa.clear()
    assert not any_collides_sphere(soa, query)


@pytest.mark.parametrize("seed", [1, 7, 42])
@pytest.mark.parametrize("n", [1, 8, 16, 17, 40])
def test_collect_matches_pairwise_collides(seed, n):
    spheres = _random_spheres(seed, n)
    soa = SpheresSoA.from_slice(spheres)
    for query in _random_spheres(seed + 100, 10):
        mask = broadphase_collect(soa, query)
        assert mask.dtype == np.bool_
        assert mask.tolist() == [query.collides(s) for s in spheres]
        assert any_collides_sphere(soa, query) == bool(mask.any())


@pytest.mark.parametrize("seed", [3, 99])
def test_soa_vs_soa_matches_pairwise(seed):
    left = _random_spheres(seed, 12)
    right = _random_spheres(seed + 1, 20)
    expected = any(a.collides(b) for a in left for b in right)
    a = SpheresSoA.from_slice(left)
    b = SpheresSoA.from_slice(right)
    assert any_collides_soa(a, b) == expected
    assert any_collides_soa(b, a) == expected


def test_soa_vs_soa_disjoint_groups():
    a = SpheresSoA.from_slice([Sphere((0.0, 0.0, float(i)), 0.4) for i in range(5)])
    b = SpheresSoA.from_slice([Sphere((10.0, 0.0, float(i)), 0.4) for i in range(5)])
    assert not any_collides_soa(a, b)
    b.translate((-9.5, 0.0, 0.0))
    assert any_collides_soa(a, b)


def test_collect_follows_translation():
    spheres = _random_spheres(5, 20)
    soa = SpheresSoA.from_slice(spheres)
    offset = (1.0, -2.0, 0.5)
    soa.translate(offset)
    for s in spheres:
        s.translate(offset)
    query = Sphere((0.0, 0.0, 0.0), 3.0)
    assert broadphase_collect(soa, query).tolist() == [query.collides(s) for s in spheres]


def test_collect_returns_independent_array():
    soa = SpheresSoA.from_slice([Sphere((0.0, 0.0, 0.0), 1.0)])
    query = Sphere((0.0, 0.0, 0.0), 1.0)
    mask = broadphase_collect(soa, query)
    mask[0] = False
    assert broadphase_collect(soa, query).tolist() == [True]


def test_rejects_wrong_types():
    soa = SpheresSoA.from_slice([Sphere((0.0, 0.0, 0.0), 1.0)])
    with pytest.raises(TypeError):
        any_collides_sphere(soa, (0.0, 0.0, 0.0))
    with pytest.raises(TypeError):
        broadphase_collect([Sphere((0.0, 0.0, 0.0), 1.0)], Sphere((0.0, 0.0, 0.0), 1.0))
    with pytest.raises(TypeError):
        any_collides_soa(soa, [Sphere((0.0, 0.0, 0.0), 1.0)])