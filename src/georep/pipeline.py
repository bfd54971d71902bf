"""
Location acquisition: sample, snap, de-duplicate, validate, repeat.

The pipeline keeps drawing candidate batches inside a region until it holds
exactly ``target_count`` distinct points that snapped to a reference location
and have imagery coverage. Oracle calls are issued one at a time so that no
coverage check is made once the target is reached.

Without ``SamplingConfig.max_batches`` the loop is unbounded: a region with
fewer valid locations than the target never finishes.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Protocol, Sequence, Set, Tuple

import numpy as np

from .config import DEFAULT_DEDUPE_DECIMALS, SamplingConfig
from .datastructures import Point, Polygon
from .errors import ExhaustedRetries
from .sampling import sample_points_in_polygon

logger = logging.getLogger(__name__)


class CandidateOracle(Protocol):
    def snap_to_reference(self, points: Sequence[Point]) -> List[Point]:
        """Canonical points for the batch; empty when nothing in the batch could be snapped."""
        ...

    def has_valid_coverage(self, point: Point) -> bool:
        ...


class RegionResolver(Protocol):
    def resolve(self, country: str, subdivision: str) -> Polygon:
        ...


@dataclass(frozen=True)
class Region:
    country: str
    subdivision: str

    def __str__(self) -> str:
        return f"{self.subdivision}, {self.country}"


class PipelineState(Enum):
    SAMPLING = "sampling"
    SNAPPING = "snapping"
    DEDUPING = "deduping"
    VALIDATING = "validating"
    DONE = "done"


def dedupe_points(
    points: Iterable[Point], *, decimals: Optional[int] = DEFAULT_DEDUPE_DECIMALS
) -> List[Point]:
    """
    Drop repeats, keeping the first occurrence and the input order.
    Points are compared on Point.key(decimals); decimals=None compares exact floats.
    """
    seen: Set[Tuple[float, float]] = set()
    unique: List[Point] = []
    for p in points:
        k = p.key(decimals)
        if k in seen:
            continue
        seen.add(k)
        unique.append(p)
    return unique


class SamplingPipeline:
    """
    One acquisition run for a single region.
    Accepted points only grow; the polygon is resolved once and reused.
    """

    def __init__(
        self,
        region: Region,
        target_count: int,
        oracle: CandidateOracle,
        *,
        regions: RegionResolver,
        rng: Optional[np.random.Generator] = None,
        config: Optional[SamplingConfig] = None,
    ) -> None:
        if target_count < 0:
            raise ValueError("target_count must be >= 0")
        self.region = region
        self.target_count = int(target_count)
        self.oracle = oracle
        self.regions = regions
        self.rng = rng if rng is not None else np.random.default_rng()
        self.config = config if config is not None else SamplingConfig()

        self.state = PipelineState.SAMPLING
        self.batches = 0
        self.accepted: List[Point] = []
        self._accepted_keys: Set[Tuple[float, float]] = set()
        self._polygon: Optional[Polygon] = None

    @property
    def done(self) -> bool:
        return len(self.accepted) == self.target_count

    def polygon(self) -> Polygon:
        if self._polygon is None:
            self._polygon = self.regions.resolve(self.region.country, self.region.subdivision)
        return self._polygon

    def _transition(self, state: PipelineState) -> None:
        logger.debug("%s: %s -> %s", self.region, self.state.value, state.value)
        self.state = state

    def _accept(self, point: Point) -> None:
        k = point.key(self.config.dedupe_decimals)
        if k in self._accepted_keys:
            return
        self._accepted_keys.add(k)
        self.accepted.append(point)
        logger.info("found valid location %d/%d", len(self.accepted), self.target_count)

    def step(self) -> None:
        """Run one sample/snap/dedupe/validate round."""
        polygon = self.polygon()
        max_batches = self.config.max_batches
        if max_batches is not None and self.batches >= max_batches:
            raise ExhaustedRetries(self.batches, len(self.accepted), self.target_count)

        self._transition(PipelineState.SAMPLING)
        batch = sample_points_in_polygon(polygon, self.config.batch_size, rng=self.rng)
        self.batches += 1
        logger.info("%s: batch %d, %d candidates", self.region, self.batches, len(batch))

        self._transition(PipelineState.SNAPPING)
        snapped = self.oracle.snap_to_reference(batch)
        if not snapped:
            # normal in regions with a sparse road network
            logger.info("%s: no reference points near batch %d", self.region, self.batches)
            self._transition(PipelineState.SAMPLING)
            return

        self._transition(PipelineState.DEDUPING)
        unique = dedupe_points(snapped, decimals=self.config.dedupe_decimals)
        logger.debug("%s: %d snapped, %d unique", self.region, len(snapped), len(unique))

        self._transition(PipelineState.VALIDATING)
        for point in unique:
            if self.done:
                break
            if point.key(self.config.dedupe_decimals) in self._accepted_keys:
                continue
            if self.oracle.has_valid_coverage(point):
                self._accept(point)
            else:
                logger.debug("no valid coverage at %.6f, %.6f", point.lat, point.lng)

        self._transition(PipelineState.DONE if self.done else PipelineState.SAMPLING)

    def run(self) -> List[Point]:
        # resolve first so an unknown region fails before any oracle call
        self.polygon()
        while not self.done:
            self.step()
        if self.state is not PipelineState.DONE:
            self._transition(PipelineState.DONE)
        return list(self.accepted)


def acquire_locations(
    region: Region,
    target_count: int,
    oracle: CandidateOracle,
    *,
    regions: RegionResolver,
    rng: Optional[np.random.Generator] = None,
    config: Optional[SamplingConfig] = None,
) -> List[Point]:
    """
    Collect exactly target_count distinct, snapped, covered points inside region.

    Raises RegionNotFound (before any oracle call), OracleTransportError from the
    oracle, or ExhaustedRetries when config.max_batches is set and runs out.
    Nothing is returned on failure.
    """
    pipeline = SamplingPipeline(
        region,
        target_count,
        oracle,
        regions=regions,
        rng=rng,
        config=config,
    )
    return pipeline.run()
