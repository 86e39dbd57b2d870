#!/usr/bin/env python3
"""
Distance-based resampling of track points into report records.
"""

from dataclasses import dataclass
from datetime import datetime
from itertools import chain
from typing import Iterable, Iterator, NamedTuple, Optional
import logging
import math

from .geometry import TrackPoint, spatial_distance

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 200.0

# Stand-in for a zero elapsed time between two emissions (duplicate timestamps)
MIN_ELAPSED_MINUTES = 0.0001


class OutputRecord(NamedTuple):
    """One resampled row of the report."""

    distance: float  # Cumulative distance from track start (in meters)
    time: datetime  # Timestamp of the point that triggered the emission
    elevation: float  # Elevation at that point (in meters)
    heart_rate: int
    pace: float  # Minutes per kilometer since the previous emission


@dataclass
class ResamplerState:
    """Accumulator carried from one track point to the next."""

    total_distance: float
    last_emitted_distance: float
    last_emitted_time: datetime
    last_point: TrackPoint


class Resampler:
    """
    Emits an OutputRecord each time the distance travelled since the last
    emission reaches the interval.

    Distance accumulates over every pair of consecutive points, while pace is
    computed over the whole span since the previous emission. A Resampler
    makes a single forward pass; build a new one for each track.
    """

    def __init__(self, interval: float = DEFAULT_INTERVAL):
        """Initializes a Resampler.

        Args:
            interval: Distance in meters between emitted records

        Raises:
            ValueError: If interval is not a positive finite number.
        """
        if not math.isfinite(interval) or interval <= 0:
            raise ValueError(f"Interval must be a positive number of meters, got {interval}")
        self.interval = interval
        self._state: Optional[ResamplerState] = None

    @property
    def state(self) -> Optional[ResamplerState]:
        """Current accumulator, or None before the first point."""
        return self._state

    @property
    def is_initialized(self) -> bool:
        return self._state is not None

    @property
    def total_distance(self) -> float:
        """Cumulative 3D distance of all points consumed so far (in meters)."""
        if self._state is None:
            return 0.0
        return self._state.total_distance

    def add_point(self, point: TrackPoint) -> Optional[OutputRecord]:
        """
        Consume the next track point.

        Args:
            point: Next point of the track, in recording order

        Returns:
            OutputRecord if this point completed an interval, otherwise None
        """
        state = self._state
        if state is None:
            self._state = ResamplerState(
                total_distance=0.0,
                last_emitted_distance=0.0,
                last_emitted_time=point.time,
                last_point=point,
            )
            return None

        state.total_distance += spatial_distance(state.last_point, point)
        state.last_point = point

        segment_distance = state.total_distance - state.last_emitted_distance
        if segment_distance < self.interval:
            return None

        record = OutputRecord(
            distance=state.total_distance,
            time=point.time,
            elevation=point.elevation,
            heart_rate=point.heart_rate,
            pace=self._calculate_pace(segment_distance, state.last_emitted_time, point.time),
        )
        state.last_emitted_distance = state.total_distance
        state.last_emitted_time = point.time
        return record

    @staticmethod
    def _calculate_pace(distance: float, start: datetime, end: datetime) -> float:
        """
        Calculate pace in minutes per kilometer.

        The result is not clamped and becomes very large for near-stationary
        spans.
        """
        elapsed_minutes = (end - start).total_seconds() / 60
        if elapsed_minutes == 0:
            logger.debug(
                f"Zero elapsed time at {end.isoformat()}, using {MIN_ELAPSED_MINUTES} minutes"
            )
            elapsed_minutes = MIN_ELAPSED_MINUTES
        elif elapsed_minutes < 0:
            logger.warning(
                f"Timestamps go backwards between {start.isoformat()} and {end.isoformat()}"
            )

        speed = distance / (elapsed_minutes * 1000)  # km/min
        return 1 / speed

    def resample(self, points: Iterable[TrackPoint]) -> Iterator[OutputRecord]:
        """
        Lazily resample a sequence of track points.

        Args:
            points: Track points in recording order

        Yields:
            OutputRecord for each completed interval
        """
        for point in points:
            record = self.add_point(point)
            if record is not None:
                yield record

    def resample_segments(
        self, segments: Iterable[Iterable[TrackPoint]]
    ) -> Iterator[OutputRecord]:
        """Resample track segments as one continuous track."""
        return self.resample(chain.from_iterable(segments))


def resample(
    points: Iterable[TrackPoint], interval: float = DEFAULT_INTERVAL
) -> Iterator[OutputRecord]:
    """
    Resample track points with a fresh Resampler.

    Args:
        points: Track points in recording order
        interval: Distance in meters between emitted records

    Returns:
        Iterator over the emitted OutputRecords
    """
    return Resampler(interval).resample(points)
