import numpy as np
import pytest

from georep.datastructures import Point, Polygon
from georep.errors import GeorepError, InvalidPolygon


def test_polygon_needs_three_vertices():
    with pytest.raises(InvalidPolygon):
        Polygon.from_latlngs([(0.0, 0.0), (1.0, 1.0)])

    # still a ValueError for callers that only know the builtin
    with pytest.raises(ValueError):
        Polygon(())

    tri = Polygon.from_latlngs([(0, 0), (0, 1), (1, 0)])
    assert len(tri) == 3


def test_invalid_polygon_details():
    with pytest.raises(GeorepError) as exc:
        Polygon.from_latlngs([(0.0, 0.0)])
    assert exc.value.details == {"vertex_count": 1}


def test_polygon_as_array_is_lat_lng_rows():
    poly = Polygon.from_latlngs([(1.0, 2.0), (3.0, 4.0), (5.0, 6.0)])
    arr = poly.as_array()
    assert arr.shape == (3, 2)
    assert np.array_equal(arr[1], [3.0, 4.0])


def test_point_equality_is_exact():
    assert Point(1.0, 2.0) == Point(1.0, 2.0)
    assert Point(1.0, 2.0) != Point(1.0000001, 2.0)


def test_point_key_quantizes():
    a = Point(1.0000001, 2.0)
    b = Point(1.0000002, 2.0)

    assert a.key(6) == b.key(6)
    assert a.key(None) != b.key(None)
    assert a.key(None) == (1.0000001, 2.0)
    # default precision is 6 decimals
    assert a.key() == (1.0, 2.0)
