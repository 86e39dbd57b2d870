#!/usr/bin/env python3
"""
Track data model and GPX loading.
"""

from datetime import timezone
from typing import Iterator, List, Optional, TextIO
import logging
import sys
import gpxpy
import gpxpy.gpx

from .geometry import TrackPoint

logger = logging.getLogger(__name__)


class TrackError(Exception):
    """Raised when a GPX file holds data that cannot be resampled."""

    pass


def _extract_heart_rate(point: gpxpy.gpx.GPXTrackPoint) -> int:
    """
    Read the heart rate from a Garmin TrackPointExtension, if present.

    Namespaces differ between devices (v1, v2, or none at all), so tags are
    matched on their local name.

    Returns:
        Heart rate in beats per minute, or 0 if the point has none
    """
    for extension in point.extensions:
        if not extension.tag.endswith("TrackPointExtension"):
            continue
        for child in extension:
            if child.tag.split("}")[-1] == "hr" and child.text:
                try:
                    return int(float(child.text.strip()))
                except ValueError as e:
                    raise TrackError(f"Invalid heart rate value: {child.text!r}") from e
    return 0


class Track:
    """A recorded activity made of one or more ordered segments."""

    def __init__(self, segments: List[List[TrackPoint]]):
        """Initializes a Track object.

        Args:
            segments: Lists of TrackPoints, one list per GPX track segment.
        """
        self.segments = segments

    @property
    def segment_count(self) -> int:
        return len(self.segments)

    @classmethod
    def from_gpx(cls, file_input: TextIO) -> "Track":
        """
        Parse GPX data into a track, keeping all tracks and segments in order.

        Args:
            file_input: File-like object containing GPX data

        Returns:
            Track with one entry per non-empty segment

        Raises:
            TrackError: If a track point has no timestamp.
            gpxpy.gpx.GPXException: If GPX file is malformed.
        """
        gpx_data = gpxpy.parse(file_input)

        segments = []
        for track in gpx_data.tracks:
            for segment in track.segments:
                points = []
                for point in segment.points:
                    if point.time is None:
                        raise TrackError(
                            f"Track point at ({point.latitude}, {point.longitude}) has no timestamp"
                        )
                    time = point.time
                    if time.tzinfo is None:
                        # Times without an offset are UTC, as in the report
                        time = time.replace(tzinfo=timezone.utc)
                    points.append(
                        TrackPoint(
                            latitude=point.latitude,
                            longitude=point.longitude,
                            elevation=point.elevation or 0.0,
                            time=time,
                            heart_rate=_extract_heart_rate(point),
                        )
                    )
                if points:
                    segments.append(points)

        track_data = cls(segments)
        if not track_data:
            logger.warning("No track points found in GPX file")

        logger.debug(
            f"Parsed {len(track_data)} track points in {track_data.segment_count} segments from GPX file"
        )
        return track_data

    @classmethod
    def from_file(cls, filename: str) -> "Track":
        """
        Load and parse a GPX file into a track.

        Args:
            filename: Path to GPX file, or "-" for stdin

        Returns:
            Track object representing the recorded activity

        Raises:
            TrackError: If a track point has no timestamp.
            FileNotFoundError: If file doesn't exist.
            PermissionError: If file can't be read.
            gpxpy.gpx.GPXException: If GPX file is malformed.
        """
        if filename == "-":
            logger.debug("Reading GPX data from stdin")
            return cls.from_gpx(sys.stdin)

        logger.debug(f"Reading GPX file: {filename}")
        with open(filename, "r", encoding="utf-8") as f:
            return cls.from_gpx(f)

    def first_point(self) -> Optional[TrackPoint]:
        """Return the first recorded point, or None for an empty track."""
        for point in self:
            return point
        return None

    def __len__(self) -> int:
        """Return number of track points across all segments."""
        return sum(len(segment) for segment in self.segments)

    def __iter__(self) -> Iterator[TrackPoint]:
        """Iterate over track points, segment after segment."""
        for segment in self.segments:
            yield from segment
