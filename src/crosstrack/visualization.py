#!/usr/bin/env python3
"""
Track visualization using folium maps.
"""

from math import cos, radians
from typing import Tuple
import logging
import folium
from folium.template import Template

from .config import CrossTrackConfig
from .formatting import format_degrees, format_number
from .scene import TrackScene
from .track import LocationRelativeToTrack

logger = logging.getLogger(__name__)

TRACK_COLOR = "#2E86AB"


class TrackLegend(folium.MacroElement):
    """Legend showing the classification of the plane against the track."""

    def __init__(self, result: LocationRelativeToTrack, fraction_digits: int = 7):
        super().__init__()
        info = result.info
        self.answer = result.answer
        self.track_length = format_number(info.track_length, fraction_digits)
        self.track_angle_radians = format_number(info.track_angle_radians, fraction_digits)
        self.track_angle_degrees = format_degrees(info.track_angle_degrees)
        self.cross_track = format_number(info.cross_track_meters, fraction_digits)

        self._template = Template(
            """
        {% macro html(this, kwargs) %}
        <div id="track-legend" style="
            position: fixed;
            bottom: 50px;
            left: 50px;
            width: 260px;
            background-color: white;
            border: 2px solid grey;
            z-index: 9999;
            font-size: 13px;
            padding: 12px;
            font-family: Arial, sans-serif;
            border-radius: 5px;
            box-shadow: 0 2px 5px rgba(0,0,0,0.2);
            box-sizing: border-box;
        ">
            <b>Plane is {{ this.answer }}</b><br>
            <div style="margin: 4px 0; line-height: 1.3;">
                <span style="color: #2E86AB; font-weight: bold; font-size: 18px;">—</span>
                Track: {{ this.track_length }}m
            </div>
            <div style="margin: 4px 0; line-height: 1.3;">
                Track angle: {{ this.track_angle_radians }} rad ({{ this.track_angle_degrees }})
            </div>
            <div style="margin: 4px 0; line-height: 1.3;">
                Cross track: {{ this.cross_track }}m
            </div>
        </div>
        {% endmacro %}
        """
        )


def get_scene_bbox(
    scene: TrackScene, buffer: float = 0.0
) -> Tuple[float, float, float, float]:
    """
    Get bounding box around the three points of a scene, optionally with a buffer.

    Args:
        scene: Scene to bound
        buffer: Buffer distance in meters (default: 0.0)

    Returns:
        Tuple of (south, west, north, east) in decimal degrees
    """
    points = [scene.plane, scene.track_start, scene.track_end]
    min_lat = min(p.latitude for p in points)
    max_lat = max(p.latitude for p in points)
    min_lon = min(p.longitude for p in points)
    max_lon = max(p.longitude for p in points)

    # 1 degree latitude ≈ 111 km; longitude shrinks with latitude
    avg_lat = (min_lat + max_lat) / 2
    lat_buffer = buffer / 111000.0
    lon_scale = abs(cos(radians(avg_lat)))
    lon_buffer = buffer / (111000.0 * lon_scale) if lon_scale > 0 else 180.0

    return (
        max(-90.0, min_lat - lat_buffer),
        max(-180.0, min_lon - lon_buffer),
        min(90.0, max_lat + lat_buffer),
        min(180.0, max_lon + lon_buffer),
    )


def create_track_map(
    scene: TrackScene,
    result: LocationRelativeToTrack,
    output_filename: str,
    config: CrossTrackConfig,
    buffer: float = 100.0,
) -> None:
    """
    Create an interactive map showing the track and the plane, save as HTML.

    Args:
        scene: TrackScene with the plane and the track endpoints
        result: Classification of the plane against the track
        output_filename: Path where HTML map file should be saved
        config: CrossTrackConfig with display settings
        buffer: Margin around the points in meters
    """
    south, west, north, east = get_scene_bbox(scene, buffer)

    center_lat = (south + north) / 2
    center_lon = (west + east) / 2

    logger.debug(f"Creating map centered at ({center_lat:.4f}, {center_lon:.4f})")

    track_map = folium.Map(
        location=[center_lat, center_lon],
        tiles=None,
    )

    folium.TileLayer(
        tiles="CartoDB positron",
        attr=(
            "&copy; <a href='https://www.openstreetmap.org/copyright'>OpenStreetMap</a> "
            "contributors &copy; <a href='https://carto.com/attributions'>CARTO</a>"
        ),
        name="Standard",
        control=True,
        show=True,
    ).add_to(track_map)

    folium.TileLayer(
        tiles="https://server.arcgisonline.com/ArcGIS/rest/services/World_Imagery/MapServer/tile/{z}/{y}/{x}",
        attr=(
            "Tiles &copy; Esri &mdash; Source: Esri, i-cubed, USDA, USGS, AEX, GeoEye, "
            "Getmapping, Aerogrid, IGN, IGP, UPR-EGP, and the GIS User Community"
        ),
        name="Satellite",
        control=True,
        show=False,
    ).add_to(track_map)

    folium.LayerControl().add_to(track_map)

    info = result.info
    folium.PolyLine(
        [
            [scene.track_start.latitude, scene.track_start.longitude],
            [scene.track_end.latitude, scene.track_end.longitude],
        ],
        color=TRACK_COLOR,
        weight=3,
        opacity=0.8,
        popup=f"Track ({format_number(info.track_length, config.fraction_digits)}m)",
        z_index=1,
    ).add_to(track_map)

    folium.Marker(
        [scene.track_start.latitude, scene.track_start.longitude],
        popup="Track start",
        icon=folium.Icon(color="green", icon="play"),
    ).add_to(track_map)

    folium.Marker(
        [scene.track_end.latitude, scene.track_end.longitude],
        popup="Track end",
        icon=folium.Icon(color="red", icon="stop"),
    ).add_to(track_map)

    folium.Marker(
        [scene.plane.latitude, scene.plane.longitude],
        popup=folium.Popup(
            f"<b>Plane</b> ({result.answer})<br>"
            f"Cross track: {format_number(info.cross_track_meters, config.fraction_digits)}m",
            max_width=300,
        ),
        icon=folium.Icon(color="blue", icon="plane"),
    ).add_to(track_map)

    track_map.add_child(TrackLegend(result, config.fraction_digits))

    track_map.fit_bounds([[south, west], [north, east]])

    track_map.save(output_filename)

    logger.debug(f"Map saved to {output_filename} with plane {result.answer} of track")
