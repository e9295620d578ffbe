"""
Request construction for the geocoding client.

Turns the arguments of a client call into a RequestDescription: which
HTTP method and path to use, the query parameters, JSON body or
multipart parts, and the timeout budget. Nothing here touches the
network, so every validation failure surfaces before a request is sent.

The central rule is the single-vs-batch decision: the same geocode or
reverse call accepts one query or many, and the request shape (GET with
a querystring vs. POST with a JSON body) follows from the input alone.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import quote_plus, urlencode

from .geocoding_config import ClientConfiguration
from .geocoding_coordinate import Coordinate, format_number, looks_like_coordinate, parse_number
from .geocoding_enums import (
    DistanceMode,
    DistanceOrderBy,
    DistanceSortOrder,
    DistanceUnits,
    GeocodeDirection,
    coerce_enum,
)
from .geocoding_errors import ValidationError


# A mapping with any of these keys is a single component query
ADDRESS_COMPONENT_PARAMETERS = ("street", "city", "state", "postal_code", "country")

# Keys emitted literally and repeated, with commas left unescaped in the value
RAW_REPEATED_KEYS = ("destinations[]",)

DISTANCE_FILTER_FIELDS = (
    "max_results",
    "max_distance",
    "max_duration",
    "min_distance",
    "min_duration",
)


# ==================== QUERY VARIANTS ====================

@dataclass(frozen=True)
class Address:
    """A free-text address."""
    text: str


@dataclass(frozen=True)
class Components:
    """A structured address (street, city, state, postal_code, country)."""
    parts: Mapping[str, Any]


@dataclass(frozen=True)
class BatchQuery:
    """Many queries sent in one POST, either as a list or keyed by caller ids."""
    items: Union[List[Any], Dict[str, Any]]


Location = Union[Address, Coordinate]


# ==================== REQUEST DESCRIPTION ====================

@dataclass(frozen=True)
class MultipartPart:
    """One part of a multipart body. Path contents are read from disk."""
    name: str
    contents: Union[str, bytes, Path]
    filename: Optional[str] = None


@dataclass(frozen=True)
class RequestDescription:
    """
    Everything the transport needs to issue one request.

    The builders never set ``headers``; it carries transport-level extras
    for hand-built requests and overrides the default headers on conflict.
    """
    method: str
    path: str
    timeout_ms: int
    query: Dict[str, Any] = field(default_factory=dict)
    raw_query: Optional[str] = None
    json: Any = None
    multipart: Tuple[MultipartPart, ...] = ()
    headers: Dict[str, str] = field(default_factory=dict)
    stream: bool = False


@dataclass(frozen=True)
class DistanceFilters:
    """
    Optional filters for distance calculations.

    order_by and sort_order only mean something once a filter narrows the
    result set, so they are sent only when at least one filter is set.
    """
    max_results: Optional[int] = None
    max_distance: Optional[float] = None
    max_duration: Optional[int] = None
    min_distance: Optional[float] = None
    min_duration: Optional[int] = None
    order_by: Union[DistanceOrderBy, str] = DistanceOrderBy.DISTANCE
    sort_order: Union[DistanceSortOrder, str] = DistanceSortOrder.ASC

    def is_active(self) -> bool:
        """True when any filter field is set."""
        return any(getattr(self, name) is not None for name in DISTANCE_FILTER_FIELDS)

    def to_params(self, prefix: str = "") -> List[Tuple[str, Any]]:
        """
        Render the filters as ordered (key, value) pairs.

        Args:
            prefix: Key prefix ("distance_" for geocode/reverse parameters)

        Returns:
            Pairs for every set filter, followed by order_by and sort_order
            when the filters are active
        """
        pairs = [
            (f"{prefix}{name}", getattr(self, name))
            for name in DISTANCE_FILTER_FIELDS
            if getattr(self, name) is not None
        ]
        if pairs:
            pairs.append((f"{prefix}order_by", coerce_enum(DistanceOrderBy, self.order_by).value))
            pairs.append((f"{prefix}sort_order", coerce_enum(DistanceSortOrder, self.sort_order).value))
        return pairs


# ==================== CLASSIFICATION ====================

def is_single_query(query: Any) -> bool:
    """
    Decide whether a forward geocode query is a single query.

    A string is single. A mapping is single when it holds at least one
    address component key, however many other keys it has. Lists and
    tuples, and mappings without component keys, are batches.
    """
    if isinstance(query, Mapping):
        return any(key in ADDRESS_COMPONENT_PARAMETERS for key in query)
    return not isinstance(query, (list, tuple))


def classify_geocode_query(query: Any) -> Union[Address, Components, BatchQuery]:
    """
    Classify a forward geocode query.

    Raises:
        ValidationError: For unsupported input types or an empty batch
    """
    if isinstance(query, (Address, Components, BatchQuery)):
        return query

    if is_single_query(query):
        if isinstance(query, Mapping):
            return Components(dict(query))
        if isinstance(query, str):
            return Address(query)
        raise ValidationError(
            f"Unsupported geocode query type: {type(query).__name__}"
        )

    items = dict(query) if isinstance(query, Mapping) else list(query)
    if not items:
        raise ValidationError("Batch geocoding requires at least one query")
    return BatchQuery(items)


def is_single_reverse_query(query: Any) -> bool:
    """
    Decide whether a reverse geocode query is a single query.

    Strings and Coordinates are single, as is a sequence whose first
    element is a number ([lat, lng]). Anything else is a batch.
    """
    if isinstance(query, (str, Coordinate)):
        return True
    if isinstance(query, (list, tuple)) and query:
        return parse_number(query[0]) is not None
    return False


def format_reverse_query(query: Any) -> Any:
    """
    Normalize one reverse query for transmission.

    A Coordinate and a numeric [lat, lng] pair become "lat,lng"; other
    values pass through unchanged.
    """
    if isinstance(query, Coordinate):
        return query.to_query_string()

    if isinstance(query, (list, tuple)) and len(query) == 2:
        lat = parse_number(query[0])
        lng = parse_number(query[1])
        if lat is not None and lng is not None:
            return f"{format_number(lat)},{format_number(lng)}"

    return query


def classify_location(value: Any) -> Location:
    """
    Classify an origin/destination as a coordinate or an address.

    Strings are coordinates only when they look like one; everything
    else in string form is sent as an address.

    Raises:
        ValidationError: For malformed sequences or unsupported types
    """
    if isinstance(value, (Coordinate, Address)):
        return value
    if isinstance(value, str):
        if looks_like_coordinate(value):
            return Coordinate.from_string(value)
        return Address(value)
    if isinstance(value, (list, tuple)):
        return Coordinate.from_sequence(value)
    raise ValidationError(
        f"Unsupported location type: {type(value).__name__}"
    )


def format_location_as_string(value: Any) -> str:
    """
    Render a location for a query parameter.

    A string is validated and then sent exactly as given, so the
    caller's precision and id survive untouched.
    """
    location = classify_location(value)
    if isinstance(value, str):
        return value
    if isinstance(location, Coordinate):
        return location.to_query_string()
    return location.text


def format_location_as_object(value: Any) -> Union[str, Dict[str, Any]]:
    """Render a location for a JSON body: coordinates as objects, addresses as strings."""
    location = classify_location(value)
    if isinstance(location, Coordinate):
        return location.to_object()
    return location.text


def normalize_distance_mode(mode: Union[DistanceMode, str]) -> str:
    """Resolve the distance mode, sending the haversine alias as straightline."""
    resolved = coerce_enum(DistanceMode, mode)
    if resolved is DistanceMode.HAVERSINE:
        resolved = DistanceMode.STRAIGHTLINE
    return resolved.value


def normalize_distance_units(units: Union[DistanceUnits, str]) -> str:
    return coerce_enum(DistanceUnits, units).value


# ==================== QUERY STRINGS ====================

def build_query_string(pairs: Sequence[Tuple[str, Any]],
                       raw_keys: Sequence[str] = RAW_REPEATED_KEYS) -> str:
    """
    Build a query string from ordered (key, value) pairs.

    Pairs are form encoded, except keys listed in raw_keys: those are
    written literally (so "destinations[]" stays "destinations[]") and
    may repeat, and their values keep literal commas because the API
    splits "lat,lng,id" on them.

    Args:
        pairs: Ordered (key, value) pairs; None values are skipped
        raw_keys: Keys that bypass standard encoding

    Returns:
        Query string without the leading "?"
    """
    encoded = []
    for key, value in pairs:
        if value is None:
            continue
        if key in raw_keys:
            encoded.append(f"{key}={quote_plus(str(value)).replace('%2C', ',')}")
        else:
            encoded.append(urlencode({key: value}))
    return "&".join(encoded)


def _distance_params(destinations: Sequence[Any],
                     mode: Union[DistanceMode, str],
                     units: Union[DistanceUnits, str],
                     filters: Optional[DistanceFilters]) -> Dict[str, Any]:
    """Distance parameters appended to geocode/reverse queries."""
    if not destinations:
        return {}

    params: Dict[str, Any] = {
        "destinations[]": [format_location_as_string(d) for d in destinations],
        "distance_mode": normalize_distance_mode(mode),
        "distance_units": normalize_distance_units(units),
    }
    params.update((filters or DistanceFilters()).to_params(prefix="distance_"))
    return params


def _base_query(fields: Optional[Sequence[str]],
                limit: Optional[int],
                response_format: Optional[str]) -> Dict[str, Any]:
    params: Dict[str, Any] = {}
    if fields:
        params["fields"] = ",".join(fields)
    if limit is not None:
        params["limit"] = limit
    if response_format:
        params["format"] = response_format
    return params


# ==================== GEOCODING ====================

def build_geocode_request(query: Any,
                          config: ClientConfiguration,
                          fields: Optional[Sequence[str]] = None,
                          limit: Optional[int] = None,
                          response_format: Optional[str] = None,
                          destinations: Optional[Sequence[Any]] = None,
                          distance_mode: Union[DistanceMode, str] = DistanceMode.STRAIGHTLINE,
                          distance_units: Union[DistanceUnits, str] = DistanceUnits.MILES,
                          filters: Optional[DistanceFilters] = None) -> RequestDescription:
    """
    Build a forward geocoding request.

    Single queries become GET geocode with the address in "q" (or the
    components as individual parameters) under the single timeout.
    Batches become POST geocode with the queries as the JSON body under
    the batch timeout.
    """
    classified = classify_geocode_query(query)
    params = _base_query(fields, limit, response_format)
    params.update(_distance_params(destinations or [], distance_mode, distance_units, filters))

    if isinstance(classified, Address):
        params["q"] = classified.text
        return RequestDescription("GET", "geocode", config.single_timeout_ms, query=params)

    if isinstance(classified, Components):
        params.update(classified.parts)
        return RequestDescription("GET", "geocode", config.single_timeout_ms, query=params)

    return RequestDescription(
        "POST", "geocode", config.batch_timeout_ms, query=params, json=classified.items
    )


def build_reverse_request(query: Any,
                          config: ClientConfiguration,
                          fields: Optional[Sequence[str]] = None,
                          limit: Optional[int] = None,
                          response_format: Optional[str] = None,
                          destinations: Optional[Sequence[Any]] = None,
                          distance_mode: Union[DistanceMode, str] = DistanceMode.STRAIGHTLINE,
                          distance_units: Union[DistanceUnits, str] = DistanceUnits.MILES,
                          filters: Optional[DistanceFilters] = None) -> RequestDescription:
    """
    Build a reverse geocoding request.

    A single coordinate is sent as GET reverse?q=lat,lng. A batch is sent
    as POST reverse with every element normalized the same way.
    """
    params = _base_query(fields, limit, response_format)
    params.update(_distance_params(destinations or [], distance_mode, distance_units, filters))

    if is_single_reverse_query(query):
        params["q"] = format_reverse_query(query)
        return RequestDescription("GET", "reverse", config.single_timeout_ms, query=params)

    if isinstance(query, Mapping):
        body: Union[List[Any], Dict[str, Any]] = {
            key: format_reverse_query(value) for key, value in query.items()
        }
    elif isinstance(query, (list, tuple)):
        body = [format_reverse_query(item) for item in query]
    else:
        raise ValidationError(
            f"Unsupported reverse query type: {type(query).__name__}"
        )

    if not body:
        raise ValidationError("Batch reverse geocoding requires at least one query")

    return RequestDescription("POST", "reverse", config.batch_timeout_ms, query=params, json=body)


# ==================== DISTANCE ====================

def build_distance_request(origin: Any,
                           destinations: Sequence[Any],
                           timeout_ms: int,
                           mode: Union[DistanceMode, str] = DistanceMode.STRAIGHTLINE,
                           units: Union[DistanceUnits, str] = DistanceUnits.MILES,
                           filters: Optional[DistanceFilters] = None) -> RequestDescription:
    """
    Build GET distance from one origin to many destinations.

    The query string is assembled by hand: the API wants repeated
    "destinations[]=" keys rather than indexed ones, with the commas of
    "lat,lng,id" left unescaped.
    """
    pairs: List[Tuple[str, Any]] = [
        ("origin", format_location_as_string(origin)),
        ("mode", normalize_distance_mode(mode)),
        ("units", normalize_distance_units(units)),
    ]
    pairs.extend((filters or DistanceFilters()).to_params())
    pairs.extend(("destinations[]", format_location_as_string(d)) for d in destinations)

    return RequestDescription(
        "GET", "distance", timeout_ms, raw_query=build_query_string(pairs)
    )


def _distance_payload(origins: Sequence[Any],
                      destinations: Sequence[Any],
                      mode: Union[DistanceMode, str],
                      units: Union[DistanceUnits, str],
                      filters: Optional[DistanceFilters]) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "origins": _format_locations(origins),
        "destinations": _format_locations(destinations),
        "mode": normalize_distance_mode(mode),
        "units": normalize_distance_units(units),
    }
    payload.update((filters or DistanceFilters()).to_params())
    return payload


def _format_locations(locations: Any) -> Union[int, List[Union[str, Dict[str, Any]]]]:
    # An integer is the id of an uploaded list and is sent unchanged
    if isinstance(locations, int) and not isinstance(locations, bool):
        return locations
    return [format_location_as_object(location) for location in locations]


def build_distance_matrix_request(origins: Sequence[Any],
                                  destinations: Sequence[Any],
                                  timeout_ms: int,
                                  mode: Union[DistanceMode, str] = DistanceMode.STRAIGHTLINE,
                                  units: Union[DistanceUnits, str] = DistanceUnits.MILES,
                                  filters: Optional[DistanceFilters] = None) -> RequestDescription:
    """Build POST distance-matrix with origins and destinations as JSON."""
    if isinstance(origins, int) or isinstance(destinations, int):
        raise ValidationError(
            "List ids are only accepted by distance matrix jobs"
        )

    payload = _distance_payload(origins, destinations, mode, units, filters)
    return RequestDescription("POST", "distance-matrix", timeout_ms, json=payload)


def build_distance_job_request(name: str,
                               origins: Union[int, Sequence[Any]],
                               destinations: Union[int, Sequence[Any]],
                               timeout_ms: int,
                               mode: Union[DistanceMode, str] = DistanceMode.STRAIGHTLINE,
                               units: Union[DistanceUnits, str] = DistanceUnits.MILES,
                               filters: Optional[DistanceFilters] = None,
                               callback_url: Optional[str] = None) -> RequestDescription:
    """
    Build POST distance-jobs for an asynchronous distance matrix.

    Origins and destinations may each be an uploaded list id instead of
    a sequence of locations.
    """
    payload: Dict[str, Any] = {"name": name}
    payload.update(_distance_payload(origins, destinations, mode, units, filters))
    if callback_url is not None:
        payload["callback"] = callback_url

    return RequestDescription("POST", "distance-jobs", timeout_ms, json=payload)


# ==================== LISTS ====================

def build_list_upload_request(contents: Union[Path, str, bytes],
                              direction: Union[GeocodeDirection, str],
                              format_template: str,
                              timeout_ms: int,
                              callback_url: Optional[str] = None,
                              fields: Optional[Sequence[str]] = None,
                              filename: Optional[str] = None) -> RequestDescription:
    """
    Build POST lists as a multipart upload.

    Args:
        contents: A Path to read from disk, or the inline spreadsheet data
        direction: Whether the server geocodes forward or reverse
        format_template: Column template, e.g. "{{B}} {{C}} {{D}}"
        timeout_ms: Timeout budget
        callback_url: Optional webhook notified when processing completes
        fields: Optional data fields to append
        filename: Upload filename; defaults to the path's base name and is
                  required for inline data

    Raises:
        ValidationError: If no filename can be determined or the direction is invalid
    """
    resolved_direction = coerce_enum(GeocodeDirection, direction)

    upload_name = filename or (contents.name if isinstance(contents, Path) else None)
    if not upload_name:
        raise ValidationError("A filename is required when uploading inline list data")

    parts = [
        MultipartPart("file", contents, upload_name),
        MultipartPart("direction", resolved_direction.value),
        MultipartPart("format", format_template),
        MultipartPart("fields", ",".join(fields or [])),
        MultipartPart("callback", callback_url or ""),
    ]

    return RequestDescription(
        "POST",
        "lists",
        timeout_ms,
        multipart=tuple(part for part in parts if part.contents),
    )


def build_resource_request(method: str,
                           path: str,
                           timeout_ms: int,
                           query: Optional[Dict[str, Any]] = None,
                           stream: bool = False) -> RequestDescription:
    """Build a plain request against a list or job resource."""
    return RequestDescription(method, path, timeout_ms, query=dict(query or {}), stream=stream)
