"""
Command line entry point.

Example:
  georep --country Brazil --subdivision Roraima --count 5 --max-batches 50
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

import numpy as np

from mapsoracle import ApiCallCounter, GoogleMapsClient

from . import config
from .errors import BoundaryDataError, ExhaustedRetries, OracleTransportError, RegionNotFound
from .pipeline import Region, SamplingPipeline
from .regions import RegionLoader

logger = logging.getLogger("georep")


def init_logging(level: str = "INFO") -> None:
    lvl = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=lvl,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_oracle(counter):
    return GoogleMapsClient.from_env(counter=counter)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        prog="georep",
        description="Find locations with Street View coverage inside a first-order subdivision.",
    )
    ap.add_argument("--country", required=True, help="country containing the subdivision")
    ap.add_argument("--subdivision", required=True, help="first-order subdivision within the country")
    ap.add_argument("--count", type=int, default=5, help="number of locations to find")
    ap.add_argument("--boundaries", default=config.BOUNDARIES_PATH, help="admin-1 GeoJSON file")
    ap.add_argument("--batch-size", type=int, default=None)
    ap.add_argument("--max-batches", type=int, default=None, help="give up after this many batches")
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--plot", default=None, help="write a PNG of the region and locations")
    ap.add_argument("--log-level", default="INFO")
    args = ap.parse_args(argv)
    if args.count < 0:
        ap.error("--count must be >= 0")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    init_logging(args.log_level)

    try:
        env = config.SamplingConfig.from_env()
        sampling = config.SamplingConfig(
            batch_size=args.batch_size if args.batch_size is not None else env.batch_size,
            max_batches=args.max_batches if args.max_batches is not None else env.max_batches,
            dedupe_decimals=env.dedupe_decimals,
        )
    except ValueError as e:
        logger.error("%s", e)
        return 2

    counter = ApiCallCounter()
    region = Region(args.country, args.subdivision)

    try:
        with build_oracle(counter) as oracle:
            pipeline = SamplingPipeline(
                region,
                args.count,
                oracle,
                regions=RegionLoader(args.boundaries),
                rng=np.random.default_rng(args.seed),
                config=sampling,
            )
            locations = pipeline.run()
    except (RegionNotFound, BoundaryDataError, ExhaustedRetries, OracleTransportError) as e:
        logger.error("getting locations in %s: %s", region, e.message)
        return 1
    finally:
        print(f"used {counter.total()} Google Maps API calls", file=sys.stderr)
        print(json.dumps(counter.as_dict(), indent="\t"), file=sys.stderr)

    print(json.dumps([[p.lat, p.lng] for p in locations]))

    if args.plot:
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        from .visualize import plot_region_samples

        ax = plot_region_samples(pipeline.polygon(), locations)
        ax.set_title(f"{region}: {len(locations)} locations")
        ax.figure.savefig(args.plot, dpi=150)
        plt.close(ax.figure)
        logger.info("wrote %s", args.plot)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
