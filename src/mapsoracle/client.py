"""Google Maps client used as the candidate validation oracle.

Snapping goes through the Roads API ``nearestRoads`` endpoint and coverage
checks through the Street View metadata endpoint. Metadata requests are free
of quota charges on Google's side but are still counted here, one increment
per request, so callers can report total usage.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

import requests

from georep import config
from georep.datastructures import Point
from georep.errors import OracleTransportError

from .counters import ApiCallCounter, CallCounter
from .types import MetadataResponse, SnapToRoadsResponse

logger = logging.getLogger(__name__)


class GoogleMapsClient:
    """Snap-to-road and Street View coverage checks.

    Every method issues exactly one HTTP request. Transport failures, non-200
    responses and unreadable bodies raise OracleTransportError; "no road
    nearby" and "no coverage" are ordinary return values.
    """

    def __init__(
        self,
        api_key: str,
        *,
        session: Optional[requests.Session] = None,
        counter: Optional[CallCounter] = None,
        timeout: float = config.REQUEST_TIMEOUT_S,
        roads_url: str = config.ROADS_API_URL,
        metadata_url: str = config.STREETVIEW_METADATA_URL,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Google Maps Platform key with Roads and Street View enabled.
            session: Optional requests session; a new one is created otherwise.
            counter: Receives one increment per request, keyed by endpoint.
            timeout: Per-request timeout in seconds.
            roads_url: nearestRoads endpoint.
            metadata_url: Street View metadata endpoint.
        """
        self.api_key = api_key
        self.session = session or requests.Session()
        self.counter = counter if counter is not None else ApiCallCounter()
        self.timeout = timeout
        self.roads_url = roads_url
        self.metadata_url = metadata_url

    @classmethod
    def from_env(
        cls,
        counter: Optional[CallCounter] = None,
        **kwargs: Any,
    ) -> "GoogleMapsClient":
        """Build a client from GOOGLE_MAPS_API_KEY."""
        key = config.GOOGLE_MAPS_API_KEY
        if not key:
            raise OracleTransportError(
                "google maps api key environment variable not set",
                {"variable": "GOOGLE_MAPS_API_KEY"},
            )
        return cls(key, counter=counter, **kwargs)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "GoogleMapsClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _get_json(self, endpoint: str, url: str, params: Dict[str, str]) -> Dict[str, Any]:
        self.counter.increment(endpoint)

        try:
            resp = self.session.get(
                url,
                params={**params, "key": self.api_key},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("%s request failed: %s", endpoint, e)
            raise OracleTransportError(
                f"executing {endpoint} request: {e}", {"endpoint": endpoint}
            ) from e

        if resp.status_code != 200:
            logger.warning("%s returned status %s", endpoint, resp.status_code)
            raise OracleTransportError(
                f"bad status from {endpoint} API: {resp.status_code}",
                {"endpoint": endpoint, "status": resp.status_code},
            )

        try:
            body = resp.json()
        except ValueError as e:
            raise OracleTransportError(
                f"unmarshaling {endpoint} response: {e}", {"endpoint": endpoint}
            ) from e
        if not isinstance(body, dict):
            raise OracleTransportError(
                f"unexpected {endpoint} response body", {"endpoint": endpoint}
            )
        return body

    def snap_to_reference(self, points: Sequence[Point]) -> List[Point]:
        """Snap points to their nearest road.

        Points more than about 300 m from a road are dropped by the API, so the
        result may be shorter than the input and may contain repeats. An empty
        list means nothing in the batch could be snapped.

        Args:
            points: At most SNAP_MAX_POINTS candidate points.

        Returns:
            Snapped (lat, lng) points in response order.
        """
        if len(points) > config.SNAP_MAX_POINTS:
            raise ValueError(
                f"at most {config.SNAP_MAX_POINTS} points can be snapped per request, got {len(points)}"
            )
        if not points:
            return []

        path = "|".join(f"{p.lat:f},{p.lng:f}" for p in points)
        body = self._get_json("SnapToRoads", self.roads_url, {"points": path})

        try:
            response = SnapToRoadsResponse.from_json(body)
        except (KeyError, TypeError, ValueError) as e:
            raise OracleTransportError(
                f"malformed SnapToRoads response: {e}", {"endpoint": "SnapToRoads"}
            ) from e
        return response.locations()

    def has_valid_coverage(self, point: Point) -> bool:
        """Whether official Google Street View imagery exists at point.

        ZERO_RESULTS and other non-OK statuses mean no coverage. Panoramas not
        copyrighted by Google are third-party uploads and are rejected too.
        """
        body = self._get_json(
            "Metadata",
            self.metadata_url,
            {"location": f"{point.lat:f},{point.lng:f}"},
        )
        try:
            metadata = MetadataResponse.from_json(body)
        except (KeyError, TypeError, ValueError) as e:
            raise OracleTransportError(
                f"malformed Metadata response: {e}", {"endpoint": "Metadata"}
            ) from e

        if metadata.status != "OK":
            return False
        return metadata.copyright == config.GOOGLE_COPYRIGHT
