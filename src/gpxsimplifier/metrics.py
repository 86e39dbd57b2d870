#!/usr/bin/env python3
"""
Module for collecting and logging metrics related to a resampling run.
"""

import logging
from typing import NamedTuple

from .config import SimplifierConfig
from .resampler import Resampler
from .track import Track

logger = logging.getLogger(__name__)


class SimplifierMetrics(NamedTuple):
    """Container for run metrics data."""

    point_count: int
    segment_count: int
    record_count: int
    total_distance: float
    unreported_distance: float
    elapsed_minutes: float


def collect_metrics(
    track: Track, resampler: Resampler, record_count: int
) -> SimplifierMetrics:
    """
    Collect metrics once the resampler has consumed the whole track.

    Args:
        track: Track that was resampled
        resampler: Resampler after its pass over the track
        record_count: Number of records written to the report

    Returns:
        SimplifierMetrics containing all collected metrics
    """
    state = resampler.state
    if state is None:
        return SimplifierMetrics(
            point_count=len(track),
            segment_count=track.segment_count,
            record_count=record_count,
            total_distance=0.0,
            unreported_distance=0.0,
            elapsed_minutes=0.0,
        )

    start = track.first_point()
    elapsed = (state.last_point.time - start.time).total_seconds() / 60 if start else 0.0

    return SimplifierMetrics(
        point_count=len(track),
        segment_count=track.segment_count,
        record_count=record_count,
        total_distance=state.total_distance,
        unreported_distance=state.total_distance - state.last_emitted_distance,
        elapsed_minutes=elapsed,
    )


def log_metrics(metrics: SimplifierMetrics, config: SimplifierConfig) -> None:
    """
    Log detailed metrics after writing the report.

    Args:
        metrics: SimplifierMetrics collected from the run
        config: SimplifierConfig containing settings like the metrics flag
    """
    if not config.metrics:
        return

    logger.debug("=== GPXSIMPLIFIER_METRICS ===")
    logger.debug(f"track_points={metrics.point_count}")
    logger.debug(f"track_segments={metrics.segment_count}")
    logger.debug(f"interval_m={config.interval}")
    logger.debug(f"records_written={metrics.record_count}")
    logger.debug(f"total_distance_m={metrics.total_distance:.1f}")
    logger.debug(f"unreported_distance_m={metrics.unreported_distance:.1f}")
    logger.debug(f"elapsed_min={metrics.elapsed_minutes:.2f}")
    if metrics.total_distance > 0:
        logger.debug(
            f"average_pace_min_per_km={metrics.elapsed_minutes / (metrics.total_distance / 1000):.2f}"
        )
    logger.debug("=== END_GPXSIMPLIFIER_METRICS ===")
