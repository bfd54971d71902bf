from .datastructures import Point, Polygon, BoundingBox
from .errors import GeorepError, InvalidPolygon, RegionNotFound, BoundaryDataError, OracleTransportError, ExhaustedRetries
from .geometry import is_inside, points_inside, bounding_box
from .sampling import sample_points_in_polygon
from .regions import RegionLoader
from .config import SamplingConfig

__all__ = [
    "Point",
    "Polygon",
    "BoundingBox",
    "GeorepError",
    "InvalidPolygon",
    "RegionNotFound",
    "BoundaryDataError",
    "OracleTransportError",
    "ExhaustedRetries",
    "is_inside",
    "points_inside",
    "bounding_box",
    "sample_points_in_polygon",
    "RegionLoader",
    "SamplingConfig",
]

from .pipeline import CandidateOracle, PipelineState, Region, RegionResolver, SamplingPipeline, acquire_locations, dedupe_points

__all__ += [
    "CandidateOracle",
    "PipelineState",
    "Region",
    "RegionResolver",
    "SamplingPipeline",
    "acquire_locations",
    "dedupe_points",
]
