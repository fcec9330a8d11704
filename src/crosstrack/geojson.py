#!/usr/bin/env python3
"""
GeoJSON export of a track scene.

The output can be previewed at https://geojson.io/ and uses the simplestyle
properties that site understands.
"""

from typing import Any, Dict, List
import json
import logging
from shapely.geometry import LineString, Point, mapping

from .geometry import GeoCoordinate
from .scene import TrackScene

logger = logging.getLogger(__name__)

TRACK_STYLE = {
    "stroke": "#555555",
    "stroke-width": 2.1,
    "stroke-opacity": 1,
}

PLANE_STYLE = {
    "marker-color": "#7e7e7e",
    "marker-size": "medium",
    "marker-symbol": "airport",
}

TRACK_END_STYLE = {
    "marker-color": "#7e7e7e",
    "marker-size": "medium",
    "marker-symbol": "triangle-stroked",
    "it_is_end": "",
}


def coords_to_polyline(coords: List[GeoCoordinate]) -> LineString:
    """
    Convert a list of coordinates to a Shapely LineString in (lon, lat) order.

    Raises:
        ValueError: If coords has less than 2 points
    """
    if not coords or len(coords) < 2:
        raise ValueError("At least two positions are required to create a LineString.")
    return LineString([(coord.longitude, coord.latitude) for coord in coords])


def coord_to_point(coord: GeoCoordinate) -> Point:
    return Point(coord.longitude, coord.latitude)


def _feature(geometry: Any, properties: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": "Feature",
        "properties": dict(properties),
        "geometry": mapping(geometry),
    }


def scene_to_geojson(scene: TrackScene) -> Dict[str, Any]:
    """
    Build a GeoJSON FeatureCollection for a scene.

    Contains the track as a LineString, the plane as a Point and the track
    end as a second Point.

    Args:
        scene: Scene to export

    Returns:
        GeoJSON FeatureCollection as a dictionary
    """
    features = [
        _feature(coords_to_polyline([scene.track_start, scene.track_end]), TRACK_STYLE),
        _feature(coord_to_point(scene.plane), PLANE_STYLE),
        _feature(coord_to_point(scene.track_end), TRACK_END_STYLE),
    ]
    logger.debug(f"Exported scene as GeoJSON with {len(features)} features")
    return {"type": "FeatureCollection", "features": features}


def scene_to_geojson_string(scene: TrackScene, indent: int = 2) -> str:
    return json.dumps(scene_to_geojson(scene), indent=indent)
