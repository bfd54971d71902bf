"""
Boundary lookup for first-order administrative subdivisions.

The backing dataset is a GeoJSON FeatureCollection such as Natural Earth's
``ne_10m_admin_1_states_provinces``, where each feature names its country in
``properties.admin`` and the subdivision in ``properties.name_en``.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from shapely.geometry import shape

from .datastructures import Point, Polygon
from .errors import BoundaryDataError, RegionNotFound

logger = logging.getLogger(__name__)


def _exterior_latlng(geometry: Dict[str, Any]) -> Optional[Polygon]:
    """
    Outer ring of a GeoJSON geometry as a (lat, lng) Polygon.

    MultiPolygon: only the first ring of the first part is used. Islands and
    other parts are ignored.
    Other geometry types: None.
    """
    geom = shape(geometry)
    if geom.is_empty:
        return None

    if geom.geom_type == "MultiPolygon":
        geom = geom.geoms[0]
    if geom.geom_type != "Polygon":
        return None

    # GeoJSON is (lng, lat); rings repeat the first vertex at the end
    coords = list(geom.exterior.coords)[:-1]
    return Polygon(tuple(Point(float(c[1]), float(c[0])) for c in coords))


class RegionLoader:
    """
    Resolves (country, subdivision) to a Polygon by exact match on two feature properties.
    The dataset is read on first use and kept for the lifetime of the loader.
    """

    def __init__(
        self,
        path: str | Path | None = None,
        *,
        country_field: str = "admin",
        name_field: str = "name_en",
    ) -> None:
        self.path = Path(path) if path is not None else None
        self.country_field = country_field
        self.name_field = name_field
        self._features: Optional[List[Dict[str, Any]]] = None
        self._cache: Dict[Tuple[str, str], Polygon] = {}

    @classmethod
    def from_features(cls, features: Sequence[Dict[str, Any]], **kwargs) -> "RegionLoader":
        loader = cls(None, **kwargs)
        loader._features = list(features)
        return loader

    @property
    def features(self) -> List[Dict[str, Any]]:
        if self._features is None:
            if self.path is None:
                raise ValueError("RegionLoader needs a path or in-memory features")
            logger.debug("Loading boundaries from %s", self.path)
            try:
                with self.path.open("r", encoding="utf-8") as f:
                    collection = json.load(f)
            except OSError as e:
                raise BoundaryDataError(
                    f"reading boundaries {self.path}: {e}", {"path": str(self.path)}
                ) from e
            except ValueError as e:
                raise BoundaryDataError(
                    f"parsing boundaries {self.path}: {e}", {"path": str(self.path)}
                ) from e
            if not isinstance(collection, dict):
                raise BoundaryDataError(
                    f"{self.path} is not a GeoJSON FeatureCollection", {"path": str(self.path)}
                )
            self._features = list(collection.get("features") or [])
            logger.info("Loaded %d boundary features from %s", len(self._features), self.path)
        return self._features

    def resolve(self, country: str, subdivision: str) -> Polygon:
        key = (country, subdivision)
        if key in self._cache:
            return self._cache[key]

        for feature in self.features:
            props = feature.get("properties") or {}
            if props.get(self.country_field) != country or props.get(self.name_field) != subdivision:
                continue

            geometry = feature.get("geometry")
            if not geometry:
                continue

            polygon = _exterior_latlng(geometry)
            if polygon is None:
                logger.debug(
                    "Skipping %s geometry for %s, %s", geometry.get("type"), subdivision, country
                )
                continue

            if geometry.get("type") == "MultiPolygon":
                logger.info(
                    "%s, %s is a MultiPolygon; using the first ring of its first part",
                    subdivision,
                    country,
                )
            self._cache[key] = polygon
            return polygon

        raise RegionNotFound(country, subdivision)
