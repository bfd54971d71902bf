from __future__ import annotations

from typing import List

import numpy as np

from .datastructures import Point, Polygon
from .geometry import bounding_box, points_inside


def sample_points_in_polygon(
    polygon: Polygon,
    n: int,
    *,
    rng: np.random.Generator,
) -> List[Point]:
    """
    Uniform rejection sampling inside polygon.

    Candidates are drawn uniformly from the bounding box and kept only when inside.
    Expected draws per point = bbox area / polygon area, so thin or very concave
    shapes are slow. There is no cap on redraws here: a polygon with no interior
    never returns. Output is not de-duplicated.
    """
    if n < 0:
        raise ValueError("n must be >= 0")

    box = bounding_box(polygon)
    lo = np.array([box.min.lat, box.min.lng], dtype=np.float64)
    hi = np.array([box.max.lat, box.max.lng], dtype=np.float64)

    points: List[Point] = []
    while len(points) < n:
        need = n - len(points)
        cand = rng.uniform(lo, hi, size=(need, 2))
        keep = cand[points_inside(cand, polygon)]
        points.extend(Point(float(lat), float(lng)) for lat, lng in keep)

    return points
