#!/usr/bin/env python3
"""
Crosstrack - where is the plane relative to the track?

This package computes great-circle distance, course and cross-track error on a
spherical Earth and classifies a position as left of, right of or on a track.
"""
import importlib.metadata

__version__ = importlib.metadata.version("crosstrack")

# Import main classes for public API
from .geometry import (
    EARTH_RADIUS_KM,
    EARTH_RADIUS_METERS,
    GeoCoordinate,
    angular_distance,
    bearing_to_north_radians,
    cross_track_error_meters,
    degrees_to_radians,
    initial_course,
    radians_to_degrees,
)
from .track import (
    DegenerateTrackError,
    LocationRelativeToTrack,
    Side,
    TrackInfo,
    classify,
    validate_track,
)
from .scene import PointType, TrackScene

__all__ = [
    "EARTH_RADIUS_KM",
    "EARTH_RADIUS_METERS",
    "GeoCoordinate",
    "angular_distance",
    "bearing_to_north_radians",
    "cross_track_error_meters",
    "degrees_to_radians",
    "initial_course",
    "radians_to_degrees",
    "DegenerateTrackError",
    "LocationRelativeToTrack",
    "Side",
    "TrackInfo",
    "classify",
    "validate_track",
    "PointType",
    "TrackScene",
]
