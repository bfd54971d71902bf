"""Environment-backed configuration for georep.

Import constants from here rather than calling os.getenv elsewhere. Values in
a local .env file are loaded on import.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final, Optional

from dotenv import load_dotenv

load_dotenv()


# --- Google Maps ---
GOOGLE_MAPS_API_KEY: Final[Optional[str]] = os.getenv("GOOGLE_MAPS_API_KEY")
ROADS_API_URL: Final[str] = "https://roads.googleapis.com/v1/nearestRoads"
STREETVIEW_METADATA_URL: Final[str] = (
    "https://maps.googleapis.com/maps/api/streetview/metadata"
)
# Third-party panoramas carry their uploader's copyright instead.
GOOGLE_COPYRIGHT: Final[str] = "© Google"
REQUEST_TIMEOUT_S: Final[float] = float(os.getenv("GEOREP_REQUEST_TIMEOUT", "10"))

# nearestRoads rejects requests with more points than this
SNAP_MAX_POINTS: Final[int] = 100


# --- Boundaries ---
BOUNDARIES_PATH: Final[str] = os.getenv(
    "GEOREP_BOUNDARIES", "data/ne_10m_admin_1_states_provinces.json"
)


# --- Sampling ---
DEFAULT_BATCH_SIZE: Final[int] = 100
DEFAULT_DEDUPE_DECIMALS: Final[int] = 6


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    return int(raw)


@dataclass(frozen=True)
class SamplingConfig:
    """Tuning knobs for the sampling pipeline.

    Attributes:
        batch_size: Candidates drawn per round; at most one snap request's worth.
        max_batches: Stop with ExhaustedRetries after this many rounds. None
            keeps sampling until the target is met.
        dedupe_decimals: Precision used when comparing points. None compares
            exact floats.
    """

    batch_size: int = DEFAULT_BATCH_SIZE
    max_batches: Optional[int] = None
    dedupe_decimals: Optional[int] = DEFAULT_DEDUPE_DECIMALS

    def __post_init__(self) -> None:
        if not 1 <= self.batch_size <= SNAP_MAX_POINTS:
            raise ValueError(
                f"batch_size must be between 1 and {SNAP_MAX_POINTS}, got {self.batch_size}"
            )
        if self.max_batches is not None and self.max_batches < 1:
            raise ValueError(f"max_batches must be >= 1, got {self.max_batches}")
        if self.dedupe_decimals is not None and self.dedupe_decimals < 0:
            raise ValueError(
                f"dedupe_decimals must be >= 0, got {self.dedupe_decimals}"
            )

    @classmethod
    def from_env(cls) -> "SamplingConfig":
        """Build a config from GEOREP_* environment variables, falling back to defaults."""
        batch_size = _optional_int("GEOREP_BATCH_SIZE")
        decimals_raw = os.getenv("GEOREP_DEDUPE_DECIMALS", "").strip()
        if decimals_raw.lower() == "exact":
            decimals: Optional[int] = None
        elif decimals_raw:
            decimals = int(decimals_raw)
        else:
            decimals = DEFAULT_DEDUPE_DECIMALS
        return cls(
            batch_size=DEFAULT_BATCH_SIZE if batch_size is None else batch_size,
            max_batches=_optional_int("GEOREP_MAX_BATCHES"),
            dedupe_decimals=decimals,
        )


__all__ = [
    "GOOGLE_MAPS_API_KEY",
    "ROADS_API_URL",
    "STREETVIEW_METADATA_URL",
    "GOOGLE_COPYRIGHT",
    "REQUEST_TIMEOUT_S",
    "SNAP_MAX_POINTS",
    "BOUNDARIES_PATH",
    "DEFAULT_BATCH_SIZE",
    "DEFAULT_DEDUPE_DECIMALS",
    "SamplingConfig",
]
