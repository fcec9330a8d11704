#!/usr/bin/env python3
"""
Spherical trigonometry for great-circle tracks.

Distances, courses and cross-track error on a sphere of radius 6371 km. The
course and cross-track formulas follow Ed Williams' Aviation Formulary
(http://www.edwilliams.org/avform.htm).

Degenerate input (coincident track endpoints, antipodal points) never raises:
like IEEE arithmetic, the affected results come back as NaN.
"""

from typing import NamedTuple
import logging
import math

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0
EARTH_RADIUS_METERS = EARTH_RADIUS_KM * 1000

# Below this cos(latitude) the starting point is treated as a pole
POLE_COS_THRESHOLD = 0.00000000001


class GeoCoordinate(NamedTuple):
    """Represents a geographic coordinate with latitude and longitude."""

    latitude: float
    longitude: float


def degrees_to_radians(degrees: float) -> float:
    return math.pi * degrees / 180.0


def radians_to_degrees(radians: float) -> float:
    return radians * 180.0 / math.pi


def _asin(x: float) -> float:
    if not -1.0 <= x <= 1.0:
        return math.nan
    return math.asin(x)


def _acos(x: float) -> float:
    if not -1.0 <= x <= 1.0:
        return math.nan
    return math.acos(x)


def angular_distance(a: GeoCoordinate, b: GeoCoordinate) -> float:
    """
    Calculate the great-circle angle between two coordinates.

    Uses the haversine form of the distance formula, which stays accurate for
    short distances where the spherical law of cosines loses precision.

    Args:
        a: First coordinate
        b: Second coordinate

    Returns:
        Central angle in radians (multiply by a radius to get a length)
    """
    lat1 = degrees_to_radians(a.latitude)
    lon1 = degrees_to_radians(a.longitude)
    lat2 = degrees_to_radians(b.latitude)
    lon2 = degrees_to_radians(b.longitude)

    h = (
        math.sin((lat1 - lat2) / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin((lon1 - lon2) / 2) ** 2
    )

    return 2 * _asin(math.sqrt(h))


def initial_course(start: GeoCoordinate, end: GeoCoordinate) -> float:
    """
    Calculate the initial great-circle course from start towards end.

    This is the course convention the cross-track formula is written for. It
    is not interchangeable with bearing_to_north_radians.

    Args:
        start: Starting coordinate
        end: Destination coordinate

    Returns:
        Course in radians within [0, 2π]. A starting point at the north pole
        gives π and one at the south pole gives 2π. Coincident points give NaN.
    """
    lat1 = degrees_to_radians(start.latitude)
    lon1 = degrees_to_radians(start.longitude)
    lat2 = degrees_to_radians(end.latitude)
    lon2 = degrees_to_radians(end.longitude)

    # Starting point is a pole
    if math.cos(lat1) < POLE_COS_THRESHOLD:
        if lat1 > 0:
            return math.pi
        return 2 * math.pi

    d = angular_distance(start, end)

    denominator = math.sin(d) * math.cos(lat1)
    if denominator == 0:
        logger.debug(f"Course between coincident points {start} and {end} is undefined")
        return math.nan

    x = (math.sin(lat2) - math.sin(lat1) * math.cos(d)) / denominator

    if math.sin(lon2 - lon1) < 0:
        return _acos(x)
    return 2 * math.pi - _acos(x)


def bearing_to_north_radians(start: GeoCoordinate, end: GeoCoordinate) -> float:
    """
    Calculate the initial bearing from start to end, clockwise from north.

    Args:
        start: Starting coordinate
        end: Destination coordinate

    Returns:
        Bearing in radians, normalized to [0, 2π)
    """
    lat1 = degrees_to_radians(start.latitude)
    lon1 = degrees_to_radians(start.longitude)
    lat2 = degrees_to_radians(end.latitude)
    lon2 = degrees_to_radians(end.longitude)

    dlon = lon2 - lon1

    y = math.sin(dlon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)

    return (math.atan2(y, x) + 2 * math.pi) % (2 * math.pi)


def cross_track_error_meters(
    point: GeoCoordinate, track_start: GeoCoordinate, track_end: GeoCoordinate
) -> float:
    """
    Calculate the signed great-circle distance from point to a track.

    Args:
        point: Coordinate to measure
        track_start: First endpoint of the track
        track_end: Second endpoint of the track

    Returns:
        Distance in meters. Positive means the point is left of the track when
        facing from track_start to track_end, negative means right.
    """
    dist_ad = angular_distance(track_start, point)
    course_ad = initial_course(track_start, point)
    course_ab = initial_course(track_start, track_end)

    return _asin(math.sin(dist_ad) * math.sin(course_ad - course_ab)) * EARTH_RADIUS_METERS
