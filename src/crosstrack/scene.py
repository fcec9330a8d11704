#!/usr/bin/env python3
"""
The three draggable points of the track screen and their recomputation.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Iterator, Optional, TextIO, Tuple
import logging
import gpxpy
import gpxpy.gpx

from .geometry import GeoCoordinate
from .track import LocationRelativeToTrack, classify

logger = logging.getLogger(__name__)

DEFAULT_PLANE = GeoCoordinate(latitude=39.57426600071248, longitude=-105.01620233058928)
DEFAULT_TRACK_START = GeoCoordinate(latitude=39.55934984624357, longitude=-105.03045558929443)
DEFAULT_TRACK_END = GeoCoordinate(latitude=39.57426600071248, longitude=-105.01620233058928)


class PointType(Enum):
    """Enumeration for the points a user can move."""

    PLANE = "plane"
    TRACK_START = "trackStart"
    TRACK_END = "trackEnd"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> "PointType":
        """
        Look up a point type by name, ignoring case, spaces, dashes and underscores.

        Raises:
            ValueError: If name matches no point type
        """
        key = name.replace(" ", "").replace("-", "").replace("_", "").lower()
        for point_type in cls:
            if point_type.value.lower() == key:
                return point_type
        raise ValueError(f"Unknown point type: {name!r}")


_FIELDS = {
    PointType.PLANE: "plane",
    PointType.TRACK_START: "track_start",
    PointType.TRACK_END: "track_end",
}


@dataclass(frozen=True)
class TrackScene:
    """Current positions of the plane and of both track endpoints."""

    plane: GeoCoordinate
    track_start: GeoCoordinate
    track_end: GeoCoordinate

    @classmethod
    def default(cls) -> "TrackScene":
        return cls(DEFAULT_PLANE, DEFAULT_TRACK_START, DEFAULT_TRACK_END)

    def coordinate(self, point_type: PointType) -> GeoCoordinate:
        return getattr(self, _FIELDS[point_type])

    def move(self, point_type: PointType, coordinate: GeoCoordinate) -> "TrackScene":
        """Return a new scene with one point moved to coordinate."""
        logger.debug(
            f"Moving {point_type} to ({coordinate.latitude}, {coordinate.longitude})"
        )
        return replace(self, **{_FIELDS[point_type]: coordinate})

    def evaluate(self, strict: bool = False) -> LocationRelativeToTrack:
        """Classify the plane against the current track."""
        return classify(self.plane, self.track_start, self.track_end, strict=strict)

    def replay(
        self,
        moves: Iterable[Tuple[PointType, GeoCoordinate]],
        strict: bool = False,
    ) -> Iterator[Tuple["TrackScene", LocationRelativeToTrack]]:
        """
        Apply moves in order, recomputing after each one.

        Args:
            moves: Sequence of (point type, new coordinate) pairs
            strict: Passed through to evaluate()

        Yields:
            The scene after each move together with its classification
        """
        scene = self
        for point_type, coordinate in moves:
            scene = scene.move(point_type, coordinate)
            yield scene, scene.evaluate(strict=strict)

    @classmethod
    def from_gpx(cls, file_input: TextIO) -> "TrackScene":
        """
        Read the plane and the track endpoints from named GPX waypoints.

        Waypoints are matched by name (plane, trackStart / track start,
        trackEnd / track end), ignoring case.

        Args:
            file_input: File-like object containing GPX data

        Returns:
            TrackScene built from the waypoints

        Raises:
            ValueError: If any of the three waypoints is missing.
            gpxpy.gpx.GPXException: If GPX file is malformed.
        """
        gpx_data = gpxpy.parse(file_input)

        found = {}
        for waypoint in gpx_data.waypoints:
            if not waypoint.name:
                continue
            try:
                point_type = PointType.from_name(waypoint.name)
            except ValueError:
                logger.debug(f"Ignoring waypoint {waypoint.name!r}")
                continue
            if point_type in found:
                logger.warning(f"Duplicate {point_type} waypoint, using the first one")
                continue
            found[point_type] = GeoCoordinate(
                latitude=waypoint.latitude, longitude=waypoint.longitude
            )

        missing = [str(point_type) for point_type in PointType if point_type not in found]
        if missing:
            raise ValueError(f"GPX file is missing waypoints: {', '.join(missing)}")

        return cls(
            plane=found[PointType.PLANE],
            track_start=found[PointType.TRACK_START],
            track_end=found[PointType.TRACK_END],
        )

    @classmethod
    def from_file(cls, filename: str) -> "TrackScene":
        """
        Load the three points from a GPX file.

        Raises:
            FileNotFoundError: If file doesn't exist.
            ValueError: If any of the three waypoints is missing.
            gpxpy.gpx.GPXException: If GPX file is malformed.
        """
        logger.debug(f"Reading GPX file: {filename}")
        with open(filename, "r", encoding="utf-8") as f:
            return cls.from_gpx(f)

    def to_gpx(self, name: Optional[str] = None) -> str:
        """Serialize the scene as GPX waypoints readable by from_gpx()."""
        gpx_data = gpxpy.gpx.GPX()
        gpx_data.name = name
        for point_type in PointType:
            coordinate = self.coordinate(point_type)
            gpx_data.waypoints.append(
                gpxpy.gpx.GPXWaypoint(
                    latitude=coordinate.latitude,
                    longitude=coordinate.longitude,
                    name=point_type.value,
                )
            )
        return gpx_data.to_xml()
