import math

import numpy as np
import pytest

from lumentrace.bbox import BoundingBox, Ray


def unit_box():
    return BoundingBox([0.0, 0.0, 0.0], [1.0, 1.0, 1.0])


def test_default_box_is_invalid():
    box = BoundingBox()
    assert not box.is_valid()
    assert str(box) == "BoundingBox[invalid]"
    assert np.all(np.isinf(box.min))


def test_point_box():
    box = BoundingBox([1.0, 2.0, 3.0])
    assert box.is_point()
    assert not box.has_volume()
    assert box.contains([1.0, 2.0, 3.0])


def test_expand_by_point_from_invalid():
    box = BoundingBox()
    box.expand_by([1.0, -2.0, 3.0])
    assert box == BoundingBox([1.0, -2.0, 3.0])
    box.expand_by([-1.0, 4.0, 0.0])
    assert box.contains([1.0, -2.0, 3.0])
    assert box.contains([-1.0, 4.0, 0.0])
    assert box.is_valid()


def test_unit_cube_measures():
    box = unit_box()
    assert box.volume() == pytest.approx(1.0)
    assert box.surface_area() == pytest.approx(6.0)
    np.testing.assert_allclose(box.center(), [0.5, 0.5, 0.5])
    np.testing.assert_allclose(box.extents(), [1.0, 1.0, 1.0])


def test_two_dimensional_surface_is_perimeter():
    box = BoundingBox([0.0, 0.0], [2.0, 3.0])
    assert box.surface_area() == pytest.approx(2 * (2.0 + 3.0))
    assert box.volume() == pytest.approx(2.0 * 3.0)


def test_contains_strict_excludes_boundary():
    box = unit_box()
    assert box.contains([1.0, 0.5, 0.5])
    assert not box.contains([1.0, 0.5, 0.5], strict=True)
    inner = BoundingBox([0.2, 0.2, 0.2], [0.8, 0.8, 0.8])
    assert box.contains(inner, strict=True)
    assert not inner.contains(box)


def test_overlaps():
    box = unit_box()
    touching = BoundingBox([1.0, 0.0, 0.0], [2.0, 1.0, 1.0])
    assert box.overlaps(touching)
    assert not box.overlaps(touching, strict=True)
    far = BoundingBox([5.0, 5.0, 5.0], [6.0, 6.0, 6.0])
    assert not box.overlaps(far)


def test_distances():
    box = unit_box()
    assert box.squared_distance_to([0.5, 0.5, 0.5]) == 0.0
    assert box.squared_distance_to([3.0, 0.5, 0.5]) == pytest.approx((3.0 - 1.0) ** 2)
    p = [2.0, -1.0, 4.0]
    assert box.distance_to(p) == pytest.approx(math.sqrt(box.squared_distance_to(p)))
    other = BoundingBox([3.0, 0.0, 0.0], [4.0, 1.0, 1.0])
    assert box.distance_to(other) == pytest.approx(3.0 - 1.0)
    assert other.distance_to(box) == pytest.approx(box.distance_to(other))


def test_axes():
    box = BoundingBox([0.0, 0.0, 0.0], [1.0, 3.0, 2.0])
    assert box.major_axis() == 1
    assert box.largest_axis() == 1
    assert box.minor_axis() == 0
    cube = unit_box()
    assert cube.largest_axis() == 0
    assert cube.major_axis() == 0


def test_merge_contains_both():
    a = BoundingBox([0.0, 0.0, 0.0], [1.0, 1.0, 1.0])
    b = BoundingBox([-2.0, 0.5, 3.0], [-1.0, 2.0, 4.0])
    merged = BoundingBox.merge(a, b)
    assert merged.contains(a)
    assert merged.contains(b)
    expanded = BoundingBox(a.min, a.max)
    expanded.expand_by(b)
    assert expanded == merged


def test_clip_stays_inside_both():
    a = BoundingBox([0.0, 0.0, 0.0], [2.0, 2.0, 2.0])
    b = BoundingBox([1.0, -1.0, 1.0], [3.0, 1.0, 3.0])
    clipped = BoundingBox(a.min, a.max)
    clipped.clip(b)
    assert a.contains(clipped)
    assert b.contains(clipped)
    assert clipped.is_valid()


def test_clip_integer_box_keeps_integers():
    box = BoundingBox([-3, -2], [10, 12])
    box.clip(BoundingBox([0, 0], [7, 5]))
    assert box.min.tolist() == [0, 0]
    assert box.max.tolist() == [7, 5]


def test_reset_invalidates():
    box = unit_box()
    box.reset()
    assert not box.is_valid()
    assert box.dimension == 3


def test_corners_enumerate_all_combinations():
    box = BoundingBox([0.0, 10.0, 20.0], [1.0, 11.0, 21.0])
    corners = {tuple(box.corner(i).tolist()) for i in range(8)}
    assert len(corners) == 8
    assert tuple(box.corner(0).tolist()) == (0.0, 10.0, 20.0)
    assert tuple(box.corner(7).tolist()) == (1.0, 11.0, 21.0)
    assert all(box.contains(c) for c in corners)


def test_str_of_valid_box_mentions_bounds():
    text = str(BoundingBox([0.0, 1.0, 2.0], [3.0, 4.0, 5.0]))
    assert text.startswith("BoundingBox[min=")
    assert "max=" in text


def test_ray_at():
    ray = Ray([1.0, 0.0, 0.0], [0.0, 2.0, 0.0])
    np.testing.assert_allclose(ray.at(1.5), [1.0, 3.0, 0.0])


def test_ray_hits_box():
    box = BoundingBox([1.0, -1.0, -1.0], [3.0, 1.0, 1.0])
    ray = Ray([0.0, 0.0, 0.0], [1.0, 0.0, 0.0])
    assert box.ray_intersect(ray)
    near, far = box.ray_overlap(ray)
    assert near == pytest.approx(1.0)
    assert far == pytest.approx(3.0)


def test_ray_misses_box():
    box = BoundingBox([1.0, -1.0, -1.0], [3.0, 1.0, 1.0])
    ray = Ray([0.0, 5.0, 0.0], [1.0, 0.0, 0.0])
    assert not box.ray_intersect(ray)
    assert box.ray_overlap(ray) is None


def test_ray_pointing_away_misses():
    box = BoundingBox([1.0, -1.0, -1.0], [3.0, 1.0, 1.0])
    ray = Ray([0.0, 0.0, 0.0], [-1.0, 0.0, 0.0])
    assert not box.ray_intersect(ray)
    near, far = box.ray_overlap(ray)
    assert far < 0 and near <= far


def test_ray_segment_too_short():
    box = BoundingBox([1.0, -1.0, -1.0], [3.0, 1.0, 1.0])
    ray = Ray([0.0, 0.0, 0.0], [1.0, 0.0, 0.0], maxt=0.5)
    assert not box.ray_intersect(ray)


def test_ray_diagonal_hit():
    box = unit_box()
    ray = Ray([-1.0, -1.0, -1.0], [1.0, 1.0, 1.0])
    assert box.ray_intersect(ray)
    near, far = box.ray_overlap(ray)
    assert box.contains(ray.at(near))
    assert box.contains(ray.at(far))