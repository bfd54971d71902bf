import numpy as np
from shapely.geometry import Polygon as ShapelyPolygon, Point as ShapelyPoint

from georep.datastructures import Point, Polygon
from georep.geometry import bounding_box, is_inside, points_inside
from tests.georep.helpers_oracle import square_polygon


def _l_shape():
    # 10x10 square with the upper-right 5x5 quadrant removed
    return Polygon.from_latlngs([
        (0.0, 0.0),
        (10.0, 0.0),
        (10.0, 5.0),
        (5.0, 5.0),
        (5.0, 10.0),
        (0.0, 10.0),
    ])


def test_is_inside_square():
    sq = square_polygon(10.0)
    assert is_inside(Point(5.0, 5.0), sq)
    assert is_inside(Point(0.1, 9.9), sq)
    assert not is_inside(Point(-0.1, 5.0), sq)
    assert not is_inside(Point(5.0, 10.1), sq)
    assert not is_inside(Point(50.0, 50.0), sq)


def test_is_inside_concave_notch():
    poly = _l_shape()
    assert is_inside(Point(2.0, 2.0), poly)
    assert is_inside(Point(8.0, 2.0), poly)
    assert is_inside(Point(2.0, 8.0), poly)
    # inside the bounding box, outside the polygon
    assert not is_inside(Point(8.0, 8.0), poly)


def test_points_inside_matches_shapely():
    poly = _l_shape()
    ref = ShapelyPolygon(poly.as_array())

    rng = np.random.default_rng(7)
    pts = rng.uniform(-2.0, 12.0, size=(2000, 2))

    got = points_inside(pts, poly)
    want = np.array([ref.contains(ShapelyPoint(float(p[0]), float(p[1]))) for p in pts])

    assert got.shape == (2000,)
    assert np.array_equal(got, want)


def test_points_inside_winding_does_not_matter():
    sq = square_polygon(10.0)
    reversed_sq = Polygon(tuple(reversed(sq.vertices)))
    pts = np.array([[5.0, 5.0], [11.0, 5.0], [9.9, 0.1]])

    assert np.array_equal(points_inside(pts, sq), points_inside(pts, reversed_sq))


def test_points_inside_empty_input():
    assert points_inside(np.zeros((0, 2)), square_polygon()).shape == (0,)


def test_bounding_box_extrema():
    tri = Polygon.from_latlngs([(1.0, 2.0), (5.0, -3.0), (-2.0, 7.0)])
    box = bounding_box(tri)

    assert box.min == Point(-2.0, -3.0)
    assert box.max == Point(5.0, 7.0)


def test_bounding_box_contains_every_vertex():
    poly = _l_shape()
    box = bounding_box(poly)

    assert box.min == Point(0.0, 0.0)
    assert box.max == Point(10.0, 10.0)
    for v in poly.vertices:
        assert box.min.lat <= v.lat <= box.max.lat
        assert box.min.lng <= v.lng <= box.max.lng
