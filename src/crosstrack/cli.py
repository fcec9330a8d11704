#!/usr/bin/env python3
"""
Cross-track calculator.
This script reports where a plane is relative to the great-circle track
between two points: which side it is on, how far off the track it is, and
the track's bearing and length. Points can be moved one after another to
watch the result change, and the scene can be exported as GeoJSON, GPX or an
interactive HTML map.

Requirements:
    pip install gpxpy folium shapely

"""

from typing import List, Optional, Tuple
import webbrowser
import argparse
import logging
import sys
import os
from gpxpy import gpx

from . import __version__
from . import visualization
from .config import CrossTrackConfig
from .file_utils import generate_output_filename
from .formatting import format_report, format_scene
from .geojson import scene_to_geojson_string
from .geometry import GeoCoordinate
from .metrics import collect_metrics, log_metrics
from .scene import PointType, TrackScene
from .track import DegenerateTrackError, LocationRelativeToTrack

# Configure logging
logger = logging.getLogger("crosstrack")


def parse_coordinate(text: str) -> GeoCoordinate:
    """
    Parse a "LAT,LON" string in decimal degrees.

    Raises:
        argparse.ArgumentTypeError: If the text is malformed or out of range
    """
    parts = text.split(",")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"expected LAT,LON but got {text!r}")
    try:
        latitude, longitude = float(parts[0]), float(parts[1])
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid coordinate {text!r}")
    if not -90.0 <= latitude <= 90.0:
        raise argparse.ArgumentTypeError(f"latitude {latitude} is outside [-90, 90]")
    if not -180.0 <= longitude <= 180.0:
        raise argparse.ArgumentTypeError(f"longitude {longitude} is outside [-180, 180]")
    return GeoCoordinate(latitude=latitude, longitude=longitude)


def parse_fraction_digits(text: str) -> int:
    """
    Parse a non-negative number of fraction digits.

    Raises:
        argparse.ArgumentTypeError: If the text is not an integer or is negative
    """
    try:
        digits = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid digit count {text!r}")
    if digits < 0:
        raise argparse.ArgumentTypeError(f"digit count {digits} must not be negative")
    return digits


def parse_move(text: str) -> Tuple[PointType, GeoCoordinate]:
    """
    Parse a "TYPE=LAT,LON" move, e.g. "plane=39.57,-105.01".

    Raises:
        argparse.ArgumentTypeError: If the text is malformed
    """
    name, sep, coordinate = text.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected TYPE=LAT,LON but got {text!r}")
    try:
        point_type = PointType.from_name(name.strip())
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))
    return point_type, parse_coordinate(coordinate)


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command-line argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="Cross-track calculator for a plane and a great-circle track",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "filename",
        type=str,
        nargs="?",
        help="GPX file with waypoints named plane, trackStart and trackEnd",
    )
    parser.add_argument(
        "--plane",
        type=parse_coordinate,
        default=None,
        metavar="LAT,LON",
        help="Plane position (default: from GPX file or built-in example)",
    )
    parser.add_argument(
        "--track-start",
        type=parse_coordinate,
        default=None,
        metavar="LAT,LON",
        help="Track start position",
    )
    parser.add_argument(
        "--track-end",
        type=parse_coordinate,
        default=None,
        metavar="LAT,LON",
        help="Track end position",
    )
    parser.add_argument(
        "--move",
        type=parse_move,
        action="append",
        default=[],
        metavar="TYPE=LAT,LON",
        help="Move a point (plane, trackStart, trackEnd) and recompute; may be repeated",
    )
    parser.add_argument(
        "--fraction-digits",
        type=parse_fraction_digits,
        default=7,
        help="Maximum digits after the decimal point in reports (default: 7)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on a zero-length track instead of reporting NaN",
    )
    parser.add_argument(
        "--geojson",
        action="store_true",
        help="Print the final scene as GeoJSON",
    )
    parser.add_argument(
        "--save-gpx",
        type=str,
        default=None,
        metavar="FILE",
        help="Save the final scene as GPX waypoints",
    )
    parser.add_argument(
        "--map",
        type=str,
        nargs="?",
        const="",
        default=None,
        metavar="FILE",
        help="Write an HTML map of the final scene (default name derived from input)",
    )
    parser.add_argument(
        "--no-open",
        action="store_true",
        help="Don't automatically open the HTML map in browser",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set logging level (default: WARNING)",
    )
    parser.add_argument(
        "--metrics",
        action="store_true",
        help="Output structured metrics after processing",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"crosstrack {__version__}",
    )
    return parser


def config_from_args(
    args: argparse.Namespace, base: Optional[TrackScene] = None
) -> CrossTrackConfig:
    """
    Build a CrossTrackConfig from parsed arguments.

    Coordinates given on the command line win over those of base, which in
    turn win over the built-in defaults.
    """
    base = base or TrackScene.default()
    return CrossTrackConfig(
        plane=args.plane or base.plane,
        track_start=args.track_start or base.track_start,
        track_end=args.track_end or base.track_end,
        strict=args.strict,
        fraction_digits=args.fraction_digits,
        log_level=args.log_level,
        metrics=args.metrics,
    )


def open_file_in_browser(filename: str) -> None:
    """
    Open the specified file in the default browser.

    Args:
        filename: Path to the file to open
    """
    abs_path = os.path.abspath(filename)
    try:
        webbrowser.open(f"file://{abs_path}")
        logger.debug(f"Opening {abs_path} in your default browser...")
    except Exception as e:
        logger.warning(f"Could not automatically open browser: {e}")
        logger.warning(f"Please manually open {abs_path}")


def setup_logging(args: argparse.Namespace) -> None:
    """Setup logging configuration."""
    if hasattr(sys.stdout, "reconfigure") and sys.stdout.encoding != "utf-8":
        try:
            sys.stdout.reconfigure(encoding="utf-8")
            if hasattr(sys.stderr, "reconfigure") and sys.stderr.encoding != "utf-8":
                sys.stderr.reconfigure(encoding="utf-8")
            logger.debug("Reconfigured stdout and stderr to UTF-8 encoding.")
        except Exception as e:
            logger.debug(f"Could not reconfigure stdout/stderr to UTF-8: {e}")
    level = getattr(logging, args.log_level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    # Configure the root logger so all modules inherit the configuration
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)


def print_result(
    scene: TrackScene, result: LocationRelativeToTrack, config: CrossTrackConfig
) -> None:
    print(format_scene(scene, config.fraction_digits))
    print(format_report(result, config.fraction_digits))


def load_base_scene(filename: Optional[str]) -> Optional[TrackScene]:
    """
    Load the starting scene from a GPX file, exiting on failure.
    """
    if not filename:
        return None
    try:
        return TrackScene.from_file(filename)
    except FileNotFoundError:
        logger.error(f"GPX file not found: {filename}")
        sys.exit(1)
    except PermissionError:
        logger.error(f"Cannot read GPX file (permission denied): {filename}")
        sys.exit(1)
    except gpx.GPXException as e:
        logger.error(f"Invalid GPX file: {e}")
        sys.exit(1)
    except ValueError as e:
        logger.error(f"Unusable GPX file {filename}: {e}")
        sys.exit(1)


def run(args: argparse.Namespace) -> List[LocationRelativeToTrack]:
    """
    Classify the scene described by args, replaying any moves.

    Returns:
        One classification per recomputation, the initial one first
    """
    config = config_from_args(args, load_base_scene(args.filename))
    scene = TrackScene(config.plane, config.track_start, config.track_end)

    results = []
    try:
        result = scene.evaluate(strict=config.strict)
        results.append(result)
        print_result(scene, result, config)

        for (point_type, _), (scene, result) in zip(
            args.move, scene.replay(args.move, strict=config.strict)
        ):
            results.append(result)
            print(f"--- Moved {point_type} ---")
            print_result(scene, result, config)
    except DegenerateTrackError as e:
        logger.error(f"Cannot classify: {e}")
        sys.exit(1)

    logger.info(f"Computed {len(results)} classification(s)")

    if args.geojson:
        print(scene_to_geojson_string(scene))

    if args.save_gpx:
        try:
            with open(args.save_gpx, "w", encoding="utf-8") as f:
                f.write(scene.to_gpx())
        except OSError as e:
            logger.error(f"Cannot write GPX file {args.save_gpx}: {e}")
            sys.exit(1)
        logger.debug(f"Scene saved to {args.save_gpx}")

    if args.map is not None:
        try:
            output_filename = args.map or generate_output_filename(args.filename)
        except (RuntimeError, ValueError) as e:
            logger.error(f"Failed to generate output filename: {e}")
            sys.exit(1)
        try:
            visualization.create_track_map(scene, result, output_filename, config)
        except Exception as e:
            logger.error(f"Failed to create map: {e}")
            sys.exit(1)
        if not args.no_open:
            open_file_in_browser(output_filename)

    log_metrics(collect_metrics(results), config)
    return results


def main():
    """
    Parses command-line arguments, classifies the plane against the track
    and writes any requested exports.
    """
    parser = create_argument_parser()
    args = parser.parse_args()

    setup_logging(args)

    run(args)


if __name__ == "__main__":
    main()
