"""
Module for collecting and logging metrics over a series of classifications.
"""

import collections
import logging
import math
from typing import Dict, Iterable, NamedTuple

from .config import CrossTrackConfig
from .track import LocationRelativeToTrack, Side

logger = logging.getLogger(__name__)


class CrossTrackMetrics(NamedTuple):
    """Container for classification metrics."""

    side_counts: Dict[str, int]
    max_abs_cross_track: float  # Largest |cross track| seen (in meters)
    nan_count: int


def collect_metrics(results: Iterable[LocationRelativeToTrack]) -> CrossTrackMetrics:
    """
    Collect metrics from a series of classifications.

    Args:
        results: Classifications, e.g. one per recomputation

    Returns:
        CrossTrackMetrics summarizing them
    """
    side_counts: Dict[str, int] = collections.defaultdict(int)
    max_abs_cross_track = 0.0
    nan_count = 0

    for result in results:
        side_counts["total"] += 1
        side_counts[result.side.value] += 1

        cross_track = result.info.cross_track_meters
        if math.isnan(cross_track):
            nan_count += 1
        else:
            max_abs_cross_track = max(max_abs_cross_track, abs(cross_track))

    return CrossTrackMetrics(
        side_counts=dict(side_counts),
        max_abs_cross_track=max_abs_cross_track,
        nan_count=nan_count,
    )


def log_metrics(metrics: CrossTrackMetrics, config: CrossTrackConfig) -> None:
    """
    Log collected metrics when enabled in the configuration.

    Args:
        metrics: CrossTrackMetrics to log
        config: CrossTrackConfig carrying the metrics flag
    """
    if not config.metrics:
        return

    logger.debug("=== CROSSTRACK_METRICS ===")
    logger.debug(f"total_recomputations={metrics.side_counts.get('total', 0)}")
    for side in Side:
        logger.debug(f"side[{side.name.lower()}]={metrics.side_counts.get(side.value, 0)}")
    logger.debug(f"max_abs_cross_track_meters={metrics.max_abs_cross_track}")
    logger.debug(f"nan_results={metrics.nan_count}")
    logger.debug("=== END_CROSSTRACK_METRICS ===")
