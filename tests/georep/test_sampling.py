import numpy as np
import pytest
from shapely.geometry import Polygon as ShapelyPolygon, Point as ShapelyPoint

from georep.datastructures import Polygon
from georep.geometry import is_inside
from georep.sampling import sample_points_in_polygon
from tests.georep.helpers_oracle import square_polygon


def _thin_concave():
    # U shape: two arms joined at the bottom
    return Polygon.from_latlngs([
        (0.0, 0.0),
        (0.0, 10.0),
        (10.0, 10.0),
        (10.0, 9.0),
        (1.0, 9.0),
        (1.0, 1.0),
        (10.0, 1.0),
        (10.0, 0.0),
    ])


def test_sampling_points_inside_polygon():
    rng = np.random.default_rng(123)
    poly = _thin_concave()
    pts = sample_points_in_polygon(poly, 300, rng=rng)

    ref = ShapelyPolygon(poly.as_array())
    assert len(pts) == 300
    for p in pts:
        assert is_inside(p, poly)
        assert ref.contains(ShapelyPoint(p.lat, p.lng))


def test_sampling_zero_and_negative():
    rng = np.random.default_rng(0)
    assert sample_points_in_polygon(square_polygon(), 0, rng=rng) == []
    with pytest.raises(ValueError):
        sample_points_in_polygon(square_polygon(), -1, rng=rng)


def test_sampling_is_deterministic_with_seed():
    poly = square_polygon(10.0)

    a = sample_points_in_polygon(poly, 20, rng=np.random.default_rng(999))
    b = sample_points_in_polygon(poly, 20, rng=np.random.default_rng(999))

    assert a == b


def test_sampling_is_roughly_uniform_in_square():
    rng = np.random.default_rng(2024)
    n = 20000
    pts = sample_points_in_polygon(square_polygon(10.0), n, rng=rng)
    arr = np.array([[p.lat, p.lng] for p in pts])

    assert np.all(arr >= 0.0) and np.all(arr <= 10.0)
    # uniform on [0,10]: mean 5, std ~2.887
    assert np.allclose(arr.mean(axis=0), 5.0, atol=0.1)
    assert np.allclose(arr.std(axis=0), 10.0 / np.sqrt(12.0), atol=0.1)

    for axis in (0, 1):
        counts, _ = np.histogram(arr[:, axis], bins=10, range=(0.0, 10.0))
        # expected 2000 per bin, binomial sd ~42
        assert np.all(np.abs(counts - n / 10) < 250)


def test_sampling_covers_both_arms_of_concave_polygon():
    rng = np.random.default_rng(5)
    pts = sample_points_in_polygon(_thin_concave(), 500, rng=rng)

    lower_arm = [p for p in pts if p.lng < 1.0]
    upper_arm = [p for p in pts if p.lng > 9.0]
    assert lower_arm and upper_arm
