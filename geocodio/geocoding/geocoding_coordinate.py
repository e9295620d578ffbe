"""
Coordinate value object for the geocoding client.

The API accepts coordinates in two shapes: comma-joined strings in query
parameters ("lat,lng" or "lat,lng,id") and structured objects in JSON
bodies. A Coordinate is validated once and can be rendered either way.
"""

import math
from dataclasses import dataclass
from decimal import Decimal
from numbers import Real
from typing import Any, Dict, Optional, Sequence, Union

from .geocoding_errors import ValidationError


def parse_number(value: Any) -> Optional[float]:
    """
    Return value as a finite float, or None if it is not numeric.

    Strings with digit separators ("1_000") and non-finite values
    ("nan", "inf") are not numbers here.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, Real):
        number = float(value)
    elif isinstance(value, str):
        if "_" in value:
            return None
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number):
        return None
    return number


def format_number(value: float) -> str:
    """Render a degree value in plain decimal notation: 38.0 -> "38", 1e-05 -> "0.00001"."""
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def _in_range(lat: float, lng: float) -> bool:
    return -90 <= lat <= 90 and -180 <= lng <= 180


@dataclass(frozen=True)
class Coordinate:
    """
    Immutable geographic coordinate with an optional identifier.

    The identifier lets callers match distance results back to the
    origin or destination they supplied.

    Attributes:
        lat: Latitude in degrees, within [-90, 90]
        lng: Longitude in degrees, within [-180, 180]
        id: Optional caller-supplied identifier
    """

    lat: float
    lng: float
    id: Optional[str] = None

    def __post_init__(self):
        """Validate coordinate types and ranges."""
        for name, value in (("Latitude", self.lat), ("Longitude", self.lng)):
            if parse_number(value) is None or isinstance(value, str):
                raise ValidationError(f"{name} must be a finite number, got {value!r}")

        if not -90 <= self.lat <= 90:
            raise ValidationError(
                f"Latitude must be between -90 and 90, got {self.lat}"
            )
        if not -180 <= self.lng <= 180:
            raise ValidationError(
                f"Longitude must be between -180 and 180, got {self.lng}"
            )

    @classmethod
    def from_value(cls, value: Union["Coordinate", str, Sequence[Any]]) -> "Coordinate":
        """
        Create a Coordinate from any supported input.

        Args:
            value: A Coordinate (returned as-is), a "lat,lng[,id]" string,
                   or a [lat, lng] / [lat, lng, id] sequence

        Returns:
            Coordinate instance

        Raises:
            ValidationError: If the input type or contents are invalid
        """
        if isinstance(value, Coordinate):
            return value
        if isinstance(value, str):
            return cls.from_string(value)
        if isinstance(value, (list, tuple)):
            return cls.from_sequence(value)
        raise ValidationError(
            f"Cannot build a coordinate from {type(value).__name__}"
        )

    @classmethod
    def from_string(cls, value: str) -> "Coordinate":
        """
        Create a Coordinate from "lat,lng" or "lat,lng,id".

        Raises:
            ValidationError: On fewer than two parts or non-numeric lat/lng
        """
        parts = value.split(",")
        if len(parts) < 2:
            raise ValidationError(
                "Invalid coordinate string format. Expected 'lat,lng' or "
                f"'lat,lng,id', got '{value}'"
            )

        raw_lat = parts[0].strip()
        raw_lng = parts[1].strip()
        lat = parse_number(raw_lat)
        lng = parse_number(raw_lng)
        if lat is None or lng is None:
            raise ValidationError(
                f"Coordinate values must be numeric. Got lat='{raw_lat}', lng='{raw_lng}'"
            )

        # Everything after the second comma is the id, commas included
        coord_id = None
        if len(parts) > 2 and ",".join(parts[2:]).strip():
            coord_id = ",".join(parts[2:]).strip()
        return cls(lat, lng, coord_id)

    @classmethod
    def from_sequence(cls, value: Sequence[Any]) -> "Coordinate":
        """
        Create a Coordinate from [lat, lng] or [lat, lng, id].

        A numeric id is coerced to a string.

        Raises:
            ValidationError: On short sequences, non-numeric lat/lng or a bad id
        """
        if len(value) < 2:
            raise ValidationError(
                "Invalid coordinate sequence. Expected [lat, lng] or [lat, lng, id]"
            )

        lat = parse_number(value[0])
        lng = parse_number(value[1])
        if lat is None or lng is None:
            raise ValidationError(
                f"Coordinate values must be numeric. Got lat='{value[0]}', lng='{value[1]}'"
            )

        coord_id = value[2] if len(value) > 2 else None
        if coord_id is not None:
            if isinstance(coord_id, bool) or not isinstance(coord_id, (str, Real)):
                raise ValidationError("Coordinate ID must be a string or numeric value")
            coord_id = str(coord_id)

        return cls(lat, lng, coord_id)

    def to_query_string(self) -> str:
        """Render as "lat,lng" or "lat,lng,id" for query parameters."""
        text = f"{format_number(self.lat)},{format_number(self.lng)}"
        if self.id is not None:
            text += f",{self.id}"
        return text

    def to_object(self) -> Dict[str, Any]:
        """Render as {"lat", "lng", "id"?} for JSON request bodies."""
        result: Dict[str, Any] = {"lat": self.lat, "lng": self.lng}
        if self.id is not None:
            result["id"] = self.id
        return result

    def __str__(self) -> str:
        return self.to_query_string()


def looks_like_coordinate(value: str) -> bool:
    """
    Check whether a string is a coordinate rather than a free-text address.

    A coordinate has at least two comma-separated parts, the first two
    numeric and within latitude/longitude range. "Springfield, 12" is an
    address; "38.9,-77.0,home" is a coordinate.
    """
    parts = value.split(",")
    if len(parts) < 2:
        return False

    lat = parse_number(parts[0])
    lng = parse_number(parts[1])
    if lat is None or lng is None:
        return False

    return _in_range(lat, lng)
