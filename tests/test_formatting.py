import math

from crosstrack.formatting import (
    format_coordinate,
    format_degrees,
    format_number,
    format_report,
    format_scene,
)
from crosstrack.geometry import GeoCoordinate
from crosstrack.scene import TrackScene
from crosstrack.track import LocationRelativeToTrack, TrackInfo


def test_format_number_rounds_to_seven_digits():
    assert format_number(2059.61234567891) == "2059.6123457"


def test_format_number_drops_trailing_zeros():
    assert format_number(1.5) == "1.5"
    assert format_number(2.0) == "2"
    assert format_number(0.0) == "0"


def test_format_number_has_no_grouping():
    assert format_number(1234567.25) == "1234567.25"


def test_format_number_negative_values():
    assert format_number(-12.3456789012) == "-12.3456789"
    assert format_number(-0.00000001) == "0"


def test_format_number_custom_digits():
    assert format_number(math.pi, 2) == "3.14"


def test_format_number_nan():
    assert format_number(math.nan) == "NaN"


def test_format_degrees_uses_full_precision():
    assert format_degrees(45.0) == "45.0°"
    assert format_degrees(36.1234567890123) == "36.1234567890123°"


def test_format_coordinate():
    assert format_coordinate(GeoCoordinate(39.55934984624357, -105.03045558929443)) == (
        "39.5593498, -105.0304556"
    )


def test_format_report():
    result = LocationRelativeToTrack.left(
        TrackInfo(
            track_length=2059.61234567891,
            track_angle_radians=0.5,
            track_angle_degrees=28.6478897565412,
            cross_track_meters=12.25,
        )
    )

    assert format_report(result).splitlines() == [
        "Track length: 2059.6123457m",
        "Track angle (rad): 0.5",
        "Track angle (deg): 28.6478897565412°",
        "Answer: left",
        "Cross track: 12.25m",
    ]


def test_format_scene():
    lines = format_scene(TrackScene.default()).splitlines()
    assert lines[0] == "Plane: 39.574266, -105.0162023"
    assert lines[1].startswith("Track start: 39.5593498")
    assert lines[2] == "Track end: 39.574266, -105.0162023"
