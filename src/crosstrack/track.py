#!/usr/bin/env python3
"""Classification of a position relative to a great-circle track."""

from typing import NamedTuple
from enum import Enum
import logging
import math

from .geometry import (
    EARTH_RADIUS_METERS,
    GeoCoordinate,
    angular_distance,
    bearing_to_north_radians,
    cross_track_error_meters,
)

logger = logging.getLogger(__name__)


class DegenerateTrackError(ValueError):
    """Raised in strict mode when a track has no length."""


class Side(Enum):
    """Enumeration for the side of a track a position is on."""

    LEFT = "left"
    RIGHT = "right"
    ON_LINE = "on line"

    def __str__(self) -> str:
        return self.value


class TrackInfo(NamedTuple):
    """Measurements of a track and of a position relative to it."""

    track_length: float  # Great-circle length of the track (in meters)
    track_angle_radians: float  # Bearing from track start to track end, [0, 2π)
    track_angle_degrees: float  # Same bearing in degrees, [0, 360)
    cross_track_meters: float  # Signed distance, positive is left of the track


class LocationRelativeToTrack(NamedTuple):
    """Which side of a track a position is on, with the supporting measurements."""

    side: Side
    info: TrackInfo

    @property
    def answer(self) -> str:
        """Human readable label for the side."""
        return self.side.value

    @classmethod
    def left(cls, info: TrackInfo) -> "LocationRelativeToTrack":
        return cls(Side.LEFT, info)

    @classmethod
    def right(cls, info: TrackInfo) -> "LocationRelativeToTrack":
        return cls(Side.RIGHT, info)

    @classmethod
    def on_line(cls, info: TrackInfo) -> "LocationRelativeToTrack":
        return cls(Side.ON_LINE, info)


def validate_track(track_start: GeoCoordinate, track_end: GeoCoordinate) -> None:
    """
    Check that a track has two distinct endpoints.

    Args:
        track_start: First endpoint of the track
        track_end: Second endpoint of the track

    Raises:
        DegenerateTrackError: If the endpoints coincide
    """
    if angular_distance(track_start, track_end) == 0:
        raise DegenerateTrackError(
            f"Track start and end coincide at ({track_start.latitude}, {track_start.longitude})"
        )


def classify(
    plane: GeoCoordinate,
    track_start: GeoCoordinate,
    track_end: GeoCoordinate,
    strict: bool = False,
) -> LocationRelativeToTrack:
    """
    Determine where a plane is relative to the track from track_start to track_end.

    The side is chosen from the exact sign of the cross-track distance, so
    ON_LINE is only reported when it is exactly zero (or NaN for a degenerate
    track).

    Args:
        plane: Position to classify
        track_start: First endpoint of the track
        track_end: Second endpoint of the track
        strict: Reject coincident track endpoints instead of returning NaN

    Returns:
        LocationRelativeToTrack carrying the track measurements

    Raises:
        DegenerateTrackError: If strict is set and the track has no length
    """
    if strict:
        validate_track(track_start, track_end)

    track_angle = bearing_to_north_radians(track_start, track_end)
    cross_track = cross_track_error_meters(plane, track_start, track_end)

    info = TrackInfo(
        track_length=angular_distance(track_start, track_end) * EARTH_RADIUS_METERS,
        track_angle_radians=track_angle,
        track_angle_degrees=track_angle * 180.0 / math.pi,
        cross_track_meters=cross_track,
    )

    if cross_track > 0:
        result = LocationRelativeToTrack.left(info)
    elif cross_track < 0:
        result = LocationRelativeToTrack.right(info)
    else:
        result = LocationRelativeToTrack.on_line(info)

    logger.debug(
        f"Plane ({plane.latitude}, {plane.longitude}) is {result.answer}: "
        f"cross track {cross_track} m, track length {info.track_length} m, "
        f"track angle {info.track_angle_degrees}°"
    )
    return result
