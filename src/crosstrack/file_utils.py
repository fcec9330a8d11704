#!/usr/bin/env python3
"""
Filename utilities for generating map output filenames.
"""

from typing import Optional
import os
import logging

logger = logging.getLogger(__name__)

DEFAULT_BASE_NAME = "crosstrack"
MAX_ATTEMPTS = 180


def _reserve(candidate: str) -> bool:
    """Create candidate exclusively; False if it already exists."""
    try:
        with open(candidate, "x"):
            pass
        return True
    except FileExistsError:
        return False
    except (PermissionError, OSError) as e:
        logger.error(f"Cannot create file {candidate}: {e}")
        raise ValueError(f"Cannot create file: {e}")


def generate_output_filename(input_filename: Optional[str] = None) -> str:
    """
    Generates an output HTML filename and reserves it by creating an empty file.

    Strategy:
    1. Start from the input filename, or "crosstrack" when there is none
    2. If it ends with .gpx (case-insensitive), drop it
    3. Append " map.html"
    4. If file exists, try " (1).html", " (2).html", etc. up to 180 attempts

    Args:
        input_filename: Path to the input GPX file, if any

    Returns:
        Safe output filename that has been created as an empty file to reserve its name

    Raises:
        RuntimeError: If no available filename found after 180 attempts
        ValueError: If a filename cannot be created (e.g., due to permissions or an invalid name detected by the OS)
    """
    if input_filename:
        input_dir = os.path.dirname(input_filename)
        input_base = os.path.basename(input_filename)
    else:
        input_dir = ""
        input_base = DEFAULT_BASE_NAME

    if input_base.lower().endswith(".gpx"):
        input_base = input_base[:-4]

    base_output = input_base + " map"

    candidate = os.path.join(input_dir, base_output + ".html")
    if _reserve(candidate):
        return candidate

    for i in range(1, MAX_ATTEMPTS + 1):
        candidate = os.path.join(input_dir, f"{base_output} ({i}).html")
        if _reserve(candidate):
            return candidate

    logger.error(
        f"Could not find an available filename after {MAX_ATTEMPTS} attempts. "
        f"Please clean up your output directory or specify the map filename explicitly."
    )
    raise RuntimeError(f"No available filename found after {MAX_ATTEMPTS} attempts")
