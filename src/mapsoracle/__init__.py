from .client import GoogleMapsClient
from .counters import ApiCallCounter, CallCounter
from .types import MetadataResponse, SnapToRoadsResponse

__all__ = [
    "GoogleMapsClient",
    "ApiCallCounter",
    "CallCounter",
    "MetadataResponse",
    "SnapToRoadsResponse",
]
