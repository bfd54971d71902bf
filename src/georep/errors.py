"""
Exception hierarchy for location sampling.

Batch-level outcomes (a snap batch with no usable points, a point without
coverage) are not errors and never appear here.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class GeorepError(Exception):
    """Base exception for all georep errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidPolygon(GeorepError, ValueError):
    """Raised when a polygon is built from fewer than three vertices."""


class RegionNotFound(GeorepError, LookupError):
    """Raised when no boundary matches a (country, subdivision) pair."""

    def __init__(self, country: str, subdivision: str) -> None:
        super().__init__(
            f"subdivision {subdivision!r} likely does not exist in {country!r}",
            {"country": country, "subdivision": subdivision},
        )
        self.country = country
        self.subdivision = subdivision


class BoundaryDataError(GeorepError):
    """Raised when the boundary dataset cannot be read or parsed."""


class OracleTransportError(GeorepError):
    """Raised when an oracle request cannot be completed or understood."""


class ExhaustedRetries(GeorepError):
    """Raised when max_batches runs out before the target count is met."""

    def __init__(self, batches: int, accepted: int, target: int) -> None:
        super().__init__(
            f"found {accepted} of {target} locations after {batches} batches",
            {"batches": batches, "accepted": accepted, "target": target},
        )
        self.batches = batches
        self.accepted = accepted
        self.target = target
