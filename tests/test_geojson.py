import json
import pytest

from crosstrack.geojson import (
    coords_to_polyline,
    scene_to_geojson,
    scene_to_geojson_string,
)
from crosstrack.geometry import GeoCoordinate
from crosstrack.scene import TrackScene


def test_feature_collection_layout():
    scene = TrackScene.default()
    collection = scene_to_geojson(scene)

    assert collection["type"] == "FeatureCollection"
    track, plane, end = collection["features"]

    assert track["geometry"]["type"] == "LineString"
    assert [list(c) for c in track["geometry"]["coordinates"]] == [
        [scene.track_start.longitude, scene.track_start.latitude],
        [scene.track_end.longitude, scene.track_end.latitude],
    ]
    assert track["properties"] == {
        "stroke": "#555555",
        "stroke-width": 2.1,
        "stroke-opacity": 1,
    }

    assert plane["geometry"]["type"] == "Point"
    assert list(plane["geometry"]["coordinates"]) == [scene.plane.longitude, scene.plane.latitude]
    assert plane["properties"]["marker-symbol"] == "airport"

    assert list(end["geometry"]["coordinates"]) == [
        scene.track_end.longitude,
        scene.track_end.latitude,
    ]
    assert end["properties"]["marker-symbol"] == "triangle-stroked"
    assert end["properties"]["it_is_end"] == ""


def test_geojson_string_is_valid_json():
    data = json.loads(scene_to_geojson_string(TrackScene.default()))
    assert len(data["features"]) == 3
    assert all(feature["type"] == "Feature" for feature in data["features"])


def test_coords_to_polyline_uses_lon_lat_order():
    line = coords_to_polyline([GeoCoordinate(10.0, 20.0), GeoCoordinate(11.0, 21.0)])
    assert list(line.coords) == [(20.0, 10.0), (21.0, 11.0)]


def test_coords_to_polyline_requires_two_points():
    with pytest.raises(ValueError):
        coords_to_polyline([GeoCoordinate(10.0, 20.0)])


def test_geojson_export_is_logged(caplog):
    import logging

    with caplog.at_level(logging.DEBUG, logger="crosstrack.geojson"):
        scene_to_geojson(TrackScene.default())
    assert "Exported scene as GeoJSON with 3 features" in [r.getMessage() for r in caplog.records]
