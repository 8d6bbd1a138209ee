"""Spherical earth geodesy for survey legs.

Positions are (longitude, latitude) in degrees; bearings are degrees clockwise
from north; distances are meters.
"""

from __future__ import annotations

import math

from pydantic import BaseModel
from pydantic_extra_types.coordinate import Latitude  # noqa: TC002
from pydantic_extra_types.coordinate import Longitude  # noqa: TC002

from cavemap.constants import EARTH_RADIUS_M
from cavemap.constants import GEOJSON_COORDINATE_PRECISION


class GeoLocation(BaseModel):
    latitude: Latitude
    longitude: Longitude

    def as_tuple(
        self, precision: int = GEOJSON_COORDINATE_PRECISION
    ) -> tuple[float, float]:
        """(longitude, latitude), the RFC 7946 order, rounded to ``precision``."""
        return (
            round(self.longitude, precision),
            round(self.latitude, precision),
        )


def forward_position(
    longitude: float,
    latitude: float,
    azimuth: float,
    distance: float,
) -> tuple[float, float]:
    """Destination reached from a point along a bearing on a spherical earth.

    http://www.movable-type.co.uk/scripts/latlon.html (destination point)

    Args:
        longitude: Origin longitude in degrees
        latitude: Origin latitude in degrees
        azimuth: Bearing in degrees, 0 = north, clockwise
        distance: Distance in meters

    Returns:
        Tuple of (longitude, latitude) in degrees, longitude in [-180, 180)
    """
    phi1 = math.radians(latitude)
    lambda1 = math.radians(longitude)
    theta = math.radians(azimuth)
    delta = distance / EARTH_RADIUS_M

    phi2 = math.asin(
        math.sin(phi1) * math.cos(delta)
        + math.cos(phi1) * math.sin(delta) * math.cos(theta)
    )
    lambda2 = lambda1 + math.atan2(
        math.sin(theta) * math.sin(delta) * math.cos(phi1),
        math.cos(delta) - math.sin(phi1) * math.sin(phi2),
    )

    lon = math.degrees(lambda2)
    if not -180.0 <= lon < 180.0:
        lon = (lon + 540.0) % 360.0 - 180.0
    return lon, math.degrees(phi2)


def average_azimuth(first: float, second: float) -> float:
    """Bisector of two sightings of the same leg.

    When one reading sits in the north-west quadrant and the other in the
    north-east one, the bisector goes through north instead of south.
    """
    high, low = max(first, second), min(first, second)
    if 270 <= high < 360 and 0 <= low < 90:
        bisector = high + (360 - high + low) / 2
        if bisector >= 360:
            return bisector - 360
        return bisector
    return high - (high - low) / 2


def reverse_azimuth(azimuth: float) -> float:
    """Bearing of the same leg walked the other way."""
    if azimuth < 180:
        return azimuth + 180
    return azimuth - 180
