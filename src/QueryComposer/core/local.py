"""Geo-restriction: documents within a radius of a point."""

from __future__ import annotations

import math
from typing import Any, Sequence

from QueryComposer.core.errors import ConfigurationError
from QueryComposer.core.params import Params


class Local:
    """Center point and radius filter.

    The radius is always in miles.
    """

    def __init__(self, coordinates: Sequence[Any], miles: Any) -> None:
        if isinstance(coordinates, (str, bytes)) or not isinstance(coordinates, Sequence) or len(coordinates) != 2:
            raise ConfigurationError(f"coordinates must be a (latitude, longitude) pair, got {coordinates!r}")
        lat = _as_degrees(coordinates[0], "latitude", 90.0)
        lng = _as_degrees(coordinates[1], "longitude", 180.0)
        if isinstance(miles, bool) or not isinstance(miles, (int, float)) or not math.isfinite(miles) or miles <= 0:
            raise ConfigurationError(f"radius in miles must be a positive number, got {miles!r}")
        self.coordinates = (lat, lng)
        self.miles = float(miles)

    def to_params(self) -> Params:
        lat, lng = self.coordinates
        return {"lat": lat, "long": lng, "radius": self.miles, "qt": "geo"}

    def __repr__(self) -> str:
        return f"Local({self.coordinates!r}, miles={self.miles})"


def _as_degrees(value: Any, name: str, bound: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
    degrees = float(value)
    if not math.isfinite(degrees) or not -bound <= degrees <= bound:
        raise ConfigurationError(f"{name} must be within [-{bound:g}, {bound:g}], got {value!r}")
    return degrees
