#!/usr/bin/env python3
"""
Text rendering of coordinates and classification results.
"""

import math

from .geometry import GeoCoordinate
from .scene import TrackScene
from .track import LocationRelativeToTrack

MAX_FRACTION_DIGITS = 7


def format_number(value: float, max_fraction_digits: int = MAX_FRACTION_DIGITS) -> str:
    """
    Format a number with at most max_fraction_digits digits after the point.

    Trailing zeros are dropped, "." is always the decimal separator and no
    grouping separators are used.

    Args:
        value: Number to format
        max_fraction_digits: Maximum digits after the decimal point

    Returns:
        Formatted string, "NaN" for NaN
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "-∞" if value < 0 else "+∞"

    text = f"{value:.{max_fraction_digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def format_degrees(value: float) -> str:
    return f"{value!r}°"


def format_coordinate(
    coordinate: GeoCoordinate, max_fraction_digits: int = MAX_FRACTION_DIGITS
) -> str:
    return (
        f"{format_number(coordinate.latitude, max_fraction_digits)}, "
        f"{format_number(coordinate.longitude, max_fraction_digits)}"
    )


def format_report(
    result: LocationRelativeToTrack, max_fraction_digits: int = MAX_FRACTION_DIGITS
) -> str:
    """
    Render a classification result the way the track screen shows it.

    Args:
        result: Classification to render
        max_fraction_digits: Maximum digits after the decimal point

    Returns:
        Multi-line report
    """
    info = result.info
    lines = [
        f"Track length: {format_number(info.track_length, max_fraction_digits)}m",
        f"Track angle (rad): {format_number(info.track_angle_radians, max_fraction_digits)}",
        f"Track angle (deg): {format_degrees(info.track_angle_degrees)}",
        f"Answer: {result.answer}",
        f"Cross track: {format_number(info.cross_track_meters, max_fraction_digits)}m",
    ]
    return "\n".join(lines)


def format_scene(scene: TrackScene, max_fraction_digits: int = MAX_FRACTION_DIGITS) -> str:
    lines = [
        f"Plane: {format_coordinate(scene.plane, max_fraction_digits)}",
        f"Track start: {format_coordinate(scene.track_start, max_fraction_digits)}",
        f"Track end: {format_coordinate(scene.track_end, max_fraction_digits)}",
    ]
    return "\n".join(lines)
