"""Closed sets of values accepted by the distance and list endpoints."""

from enum import Enum
from typing import Type, TypeVar, Union

from .geocoding_errors import ValidationError


class _ApiEnum(str, Enum):
    """String enum that matches its values case-insensitively."""

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None


class DistanceMode(_ApiEnum):
    DRIVING = "driving"
    STRAIGHTLINE = "straightline"
    HAVERSINE = "haversine"  # deprecated alias for straightline


class DistanceUnits(_ApiEnum):
    MILES = "miles"
    KILOMETERS = "kilometers"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str) and value.strip().lower() == "km":
            return cls.KILOMETERS
        return super()._missing_(value)


class DistanceOrderBy(_ApiEnum):
    DISTANCE = "distance"
    DURATION = "duration"


class DistanceSortOrder(_ApiEnum):
    ASC = "asc"
    DESC = "desc"


class GeocodeDirection(_ApiEnum):
    FORWARD = "forward"
    REVERSE = "reverse"


E = TypeVar("E", bound=_ApiEnum)


def coerce_enum(enum_cls: Type[E], value: Union[E, str]) -> E:
    """
    Resolve a member of enum_cls from a member or its string value.

    Raises:
        ValidationError: If the value is not one of the accepted values
    """
    try:
        return enum_cls(value)
    except ValueError:
        accepted = ", ".join(member.value for member in enum_cls)
        raise ValidationError(
            f"Invalid {enum_cls.__name__} '{value}'. Accepted values: {accepted}"
        )
