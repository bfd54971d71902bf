"""Fields consumed from the Roads and Street View metadata responses."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from georep.datastructures import Point


@dataclass(frozen=True)
class SnapToRoadsResponse:
    snapped_points: Tuple[Point, ...]

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "SnapToRoadsResponse":
        points = []
        for p in data.get("snappedPoints") or []:
            loc = p["location"]
            points.append(Point(float(loc["latitude"]), float(loc["longitude"])))
        return cls(tuple(points))

    def locations(self) -> List[Point]:
        return list(self.snapped_points)


@dataclass(frozen=True)
class MetadataResponse:
    status: str
    copyright: str = ""

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "MetadataResponse":
        return cls(
            status=data.get("status", ""),
            copyright=data.get("copyright", ""),
        )
