from dataclasses import dataclass, field

from .geometry import GeoCoordinate
from .scene import DEFAULT_PLANE, DEFAULT_TRACK_END, DEFAULT_TRACK_START


@dataclass
class CrossTrackConfig:
    """Configuration for the crosstrack CLI."""

    plane: GeoCoordinate = field(default=DEFAULT_PLANE)
    track_start: GeoCoordinate = field(default=DEFAULT_TRACK_START)
    track_end: GeoCoordinate = field(default=DEFAULT_TRACK_END)
    strict: bool = False
    fraction_digits: int = 7
    log_level: str = "WARNING"
    metrics: bool = False
