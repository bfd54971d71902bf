from __future__ import annotations
from dataclasses import dataclass
import numpy as np
from typing import Iterable, Optional, Tuple

from .config import DEFAULT_DEDUPE_DECIMALS
from .errors import InvalidPolygon


@dataclass(frozen=True)
class Point:
    lat: float
    lng: float

    def key(self, decimals: Optional[int] = DEFAULT_DEDUPE_DECIMALS) -> Tuple[float, float]:
        """
        Identity used for de-duplication.
        decimals=None compares exact floats; otherwise both components are rounded first.
        """
        if decimals is None:
            return (self.lat, self.lng)
        return (round(self.lat, decimals), round(self.lng, decimals))


@dataclass(frozen=True)
class BoundingBox:
    min: Point
    max: Point


@dataclass(frozen=True)
class Polygon:
    """
    Simple polygon in (lat, lng) order.
    The last vertex connects back to the first; the closing vertex is not repeated.
    """
    vertices: Tuple[Point, ...]

    def __post_init__(self):
        if len(self.vertices) < 3:
            raise InvalidPolygon(
                f"polygon needs at least 3 vertices, got {len(self.vertices)}",
                {"vertex_count": len(self.vertices)},
            )

    @classmethod
    def from_latlngs(cls, coords: Iterable[Tuple[float, float]]) -> "Polygon":
        return cls(tuple(Point(float(lat), float(lng)) for lat, lng in coords))

    def as_array(self) -> np.ndarray:
        # (N,2) rows of [lat, lng]
        return np.array([[p.lat, p.lng] for p in self.vertices], dtype=np.float64)

    def __len__(self) -> int:
        return len(self.vertices)
