import numpy as np

from .datastructures import BoundingBox, Point, Polygon


def points_inside(points_latlng: np.ndarray, polygon: Polygon) -> np.ndarray:
    """
    Even-odd ray casting for many points at once.
    points_latlng: (N,2) rows of [lat, lng]
    returns: (N,) bool

    A ray is cast from each point along +lat and edge crossings are counted.
    Points lying exactly on an edge or vertex get whatever the parity gives them;
    with continuous sampling over detailed boundaries that case is negligible
    and deliberately left alone.
    """
    pts = np.asarray(points_latlng, dtype=np.float64).reshape(-1, 2)
    poly = polygon.as_array()

    # edge i runs from vertex j=i-1 to vertex i (wrapping)
    xi = poly[:, 0][None, :]
    yi = poly[:, 1][None, :]
    xj = np.roll(poly[:, 0], 1)[None, :]
    yj = np.roll(poly[:, 1], 1)[None, :]

    x = pts[:, 0][:, None]
    y = pts[:, 1][:, None]

    straddles = (yi > y) != (yj > y)
    with np.errstate(divide="ignore", invalid="ignore"):
        x_cross = (xj - xi) * (y - yi) / (yj - yi) + xi
    crossings = straddles & (x < x_cross)

    return (np.count_nonzero(crossings, axis=1) % 2) == 1


def is_inside(point: Point, polygon: Polygon) -> bool:
    return bool(points_inside(np.array([[point.lat, point.lng]]), polygon)[0])


def bounding_box(polygon: Polygon) -> BoundingBox:
    min_lat = min_lng = float("inf")
    max_lat = max_lng = float("-inf")

    for p in polygon.vertices:
        if p.lat < min_lat:
            min_lat = p.lat
        if p.lat > max_lat:
            max_lat = p.lat
        if p.lng < min_lng:
            min_lng = p.lng
        if p.lng > max_lng:
            max_lng = p.lng

    return BoundingBox(Point(min_lat, min_lng), Point(max_lat, max_lng))
