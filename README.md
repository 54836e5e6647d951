# wreck

Collision tests for spheres. Spheres are kept in a padded
structure-of-arrays store, and bounding-sphere overlap queries run over that
store as whole-array numpy operations. All arithmetic is single precision
(`float32`).

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `wreck.linalg`: small helpers.
  - `vec3(x, y, z)` returns a float32 vector.
  - `quat_from_axis_angle(axis, angle)` returns a unit quaternion
    `(x, y, z, w)`.
  - `quat_to_mat3(quat)` returns the rotation matrix of a quaternion,
    normalising the quaternion first.
  - `rotation_y(angle)` returns the rotation matrix about the Y axis.
  - `apply_mat3(mat, xs, ys, zs)` multiplies a 3x3 matrix with points that
    are given as separate channels.
  - `Affine(matrix, translation)` applies a 3x3 matrix followed by a
    translation. It offers `Affine.from_rotation_translation(quat,
    translation)` and `transform_point(point)`.
  Wrong shapes, a zero axis or a zero quaternion raise `ValueError`.
- `wreck.util`:
  - `dot(a, b)` is the dot product of two 3-vectors.
  - `clamped_line_segment_dist_sq(p1, d1, s_min, s_max, p2, d2)` returns the
    squared distance between the line `p1 + s*d1` with `s` clamped to
    `[s_min, s_max]` and the segment `p2 + t*d2` with `t` in `[0, 1]`. It
    raises `ValueError` if `s_min > s_max`.
- `wreck.sphere.Sphere(center, radius)`: a negative radius raises
  `ValueError`. A sphere has the following methods:
  - `diameter()`.
  - `scale(factor)` scales the radius.
  - `translate(offset)`.
  - `transform(affine)` moves the centre and keeps the radius.
  - `rotate_mat(mat)` and `rotate_quat(quat)` only check the argument's
    shape, because a sphere does not change under rotation about its centre.
  - `broadphase()` returns a copy of the sphere.
  - `collides(other)` reports overlap or touching with another `Sphere`.
    Any other type raises `TypeError`.
- `wreck.soa.SpheresSoA`: spheres stored as `x`, `y`, `z` and `r` channels in
  one float32 buffer.
  - Each channel is padded to a multiple of 16, and padding slots hold a NaN
    radius.
  - Build one with `SpheresSoA()`, `with_capacity(cap)`,
    `from_slice(spheres)` or `from_bounded(items)`. `from_bounded` stores
    `item.broadphase()` for each item.
  - The `x()`, `y()`, `z()` and `r()` methods return read-only views of the
    padded channels. `padded()` returns the padded length.
  - It supports `len()`, indexing, iteration and `==`.
  - `push`, `append`, `extend_from`, `clear` and `copy_from` change the
    contents. `append` moves the spheres out of the other store and leaves it
    empty.
  - `translate`, `rotate_mat`, `rotate_quat`, `transform` and `scale` apply
    to every sphere at once.
- `wreck.broadphase`: overlap queries against a `SpheresSoA`.
  - `any_collides_sphere(soa, sphere)` tests the store against one sphere.
  - `broadphase_collect(soa, query)` returns a boolean array with one entry
    per stored sphere.
  - `any_collides_soa(a, b)` tests every sphere of one store against every
    sphere of another.
- `wreck.collection.BroadCollection(items)`: a list of shapes stored together
  with their bounding spheres.
  - Each item must provide `broadphase`, `translate`, `rotate_mat`,
    `rotate_quat`, `transform` and `scale`. Otherwise `TypeError` is raised.
  - `collides(shape)` rejects early when no bounding sphere overlaps. After
    that it returns whether `shape.collides(item)` is true for any item.
  - `collides_only_broadphase(shape)` runs only the bounding-sphere test.
  - It also provides `push`, `extend`, `append`, `copy_from`, `items()`,
    iteration, `len()`, and the transforms that apply to every item.

## Example

```python
from wreck.linalg import vec3, Affine, quat_from_axis_angle
from wreck.sphere import Sphere
from wreck.soa import SpheresSoA
from wreck.broadphase import any_collides_sphere, broadphase_collect

spheres = SpheresSoA.from_slice([
    Sphere(vec3(0, 0, 0), 1.0),
    Sphere(vec3(5, 0, 0), 0.5),
])

query = Sphere(vec3(1.5, 0, 0), 0.6)
print(any_collides_sphere(spheres, query))   # True
print(broadphase_collect(spheres, query))    # [ True False]

spheres.translate(vec3(1, 2, 3))
spheres.transform(Affine.from_rotation_translation(
    quat_from_axis_angle(vec3(0, 1, 0), 0.5), vec3(1, 2, 3)))
spheres.scale(2.0)
```

## What it does not do

- `Sphere` is the only shape the package provides. There are no capsules,
  boxes, cylinders, planes, lines, polygons, polytopes or point clouds.
  - `BroadCollection` accepts any object with the methods listed above.
  - Exact tests between shapes other than spheres must come from those
    objects' own `collides` methods.
- There is no stretching or sweeping of shapes along a translation.
- There is no serialisation.
- There is no command-line tool.