#!/usr/bin/env python3
"""
Geographic data types and distance calculations for track resampling.
"""

from datetime import datetime
from typing import NamedTuple
import math

# Mean Earth radius in meters
EARTH_RADIUS = 6371000.0


class TrackPoint(NamedTuple):
    """A single recorded GPS sample."""

    latitude: float
    longitude: float
    elevation: float
    time: datetime
    heart_rate: int = 0  # 0 when the recording has no heart rate


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the great circle distance between two coordinates.

    Args:
        lat1: Latitude of the first point in decimal degrees
        lon1: Longitude of the first point in decimal degrees
        lat2: Latitude of the second point in decimal degrees
        lon2: Longitude of the second point in decimal degrees

    Returns:
        Distance in meters along a sphere of radius EARTH_RADIUS
    """
    lat1, lon1 = math.radians(lat1), math.radians(lon1)
    lat2, lon2 = math.radians(lat2), math.radians(lon2)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    )

    # Rounding can push a slightly above 1 for antipodal points
    return 2 * EARTH_RADIUS * math.asin(math.sqrt(min(1.0, a)))


def spatial_distance(point1: TrackPoint, point2: TrackPoint) -> float:
    """
    Calculate the 3D distance between two track points.

    The great circle distance and the elevation difference are treated as
    the legs of a right triangle, which holds for the short gaps between
    consecutive GPS samples.

    Args:
        point1: First track point
        point2: Second track point

    Returns:
        Distance in meters
    """
    horizontal = haversine_distance(
        point1.latitude, point1.longitude, point2.latitude, point2.longitude
    )
    vertical = point2.elevation - point1.elevation
    return math.sqrt(horizontal**2 + vertical**2)
