"""
Geocoding module for the geocodio client.

This module provides functionality for:
- Forward and reverse geocoding, single or batch
- Distance calculations and distance matrices (sync and as async jobs)
- Uploading, inspecting, downloading and deleting geocoding lists

Main classes:
- Geocodio: Client facade exposing every API operation
- ClientConfiguration: API key, hostname, version and timeout budgets
- Coordinate: Validated lat/lng value with optional id
- GeocodioTransport: requests-based transport

Errors:
- GeocodioError: Base exception for the client
- ValidationError: Malformed coordinates or enum values
- UploadFileNotFoundError: List upload source is missing
- RequestError: API answered with an error
- TransportError: No usable response (network, timeout)
"""

from .geocoding_client import Geocodio
from .geocoding_config import ClientConfiguration
from .geocoding_coordinate import Coordinate, looks_like_coordinate
from .geocoding_enums import (
    DistanceMode,
    DistanceOrderBy,
    DistanceSortOrder,
    DistanceUnits,
    GeocodeDirection,
)
from .geocoding_errors import (
    GeocodioError,
    RequestError,
    TransportError,
    UploadFileNotFoundError,
    ValidationError,
)
from .geocoding_formatter import (
    Address,
    Components,
    DistanceFilters,
    RequestDescription,
    build_query_string,
    is_single_query,
)
from .geocoding_transport import GeocodioTransport

__all__ = [
    # Main classes
    "Geocodio",
    "ClientConfiguration",
    "Coordinate",
    "GeocodioTransport",
    "DistanceFilters",
    "RequestDescription",

    # Query variants
    "Address",
    "Components",

    # Enums
    "DistanceMode",
    "DistanceOrderBy",
    "DistanceSortOrder",
    "DistanceUnits",
    "GeocodeDirection",

    # Helpers
    "looks_like_coordinate",
    "is_single_query",
    "build_query_string",

    # Errors
    "GeocodioError",
    "ValidationError",
    "UploadFileNotFoundError",
    "RequestError",
    "TransportError",
]
