"""
geocodio - Python client for the Geocodio geocoding API.

Example usage:
    from geocodio import Geocodio

    client = Geocodio(api_key="your_api_key")
    result = client.geocode("1109 N Highland St, Arlington VA")
"""

from .geocoding import (
    Address,
    ClientConfiguration,
    Components,
    Coordinate,
    DistanceFilters,
    DistanceMode,
    DistanceOrderBy,
    DistanceSortOrder,
    DistanceUnits,
    GeocodeDirection,
    Geocodio,
    GeocodioError,
    GeocodioTransport,
    RequestError,
    TransportError,
    UploadFileNotFoundError,
    ValidationError,
)
from .geocoding.geocoding_transport import SDK_VERSION

__all__ = [
    "Geocodio",
    "ClientConfiguration",
    "Coordinate",
    "GeocodioTransport",
    "DistanceFilters",
    "Address",
    "Components",
    "DistanceMode",
    "DistanceOrderBy",
    "DistanceSortOrder",
    "DistanceUnits",
    "GeocodeDirection",
    "GeocodioError",
    "ValidationError",
    "UploadFileNotFoundError",
    "RequestError",
    "TransportError",
]

__version__ = SDK_VERSION
