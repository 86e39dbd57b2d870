#!/usr/bin/env python3
"""
CSV report writing for resampled tracks.
"""

from datetime import datetime, timezone
from typing import Iterable, List
import csv
import logging
import sys

from .resampler import OutputRecord

logger = logging.getLogger(__name__)

CSV_HEADER = ["distance_m", "timestamp", "ele", "hr", "pace_min_per_km"]


def format_timestamp(timestamp: datetime) -> str:
    """
    Format a timestamp as an RFC 3339 instant with second precision.

    Naive timestamps are taken to be UTC, and UTC is written as "Z".
    """
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    text = timestamp.isoformat(timespec="seconds")
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


def format_record(record: OutputRecord) -> List[str]:
    """Convert an OutputRecord into the fields of one CSV row."""
    return [
        f"{record.distance:.1f}",
        format_timestamp(record.time),
        f"{record.elevation:.1f}",
        str(int(record.heart_rate)),
        f"{record.pace:.2f}",
    ]


def write_report(records: Iterable[OutputRecord], filename: str) -> int:
    """
    Write resampled records to a CSV file with a header row.

    Args:
        records: OutputRecords in emission order
        filename: Path of the CSV file to create, or "-" for stdout

    Returns:
        Number of data rows written

    Raises:
        OSError: If the file cannot be created or written.
    """
    if filename == "-":
        return _write_rows(records, sys.stdout)

    logger.debug(f"Writing CSV report: {filename}")
    with open(filename, "w", encoding="utf-8", newline="") as f:
        return _write_rows(records, f)


def _write_rows(records: Iterable[OutputRecord], output) -> int:
    writer = csv.writer(output)
    writer.writerow(CSV_HEADER)
    count = 0
    for record in records:
        writer.writerow(format_record(record))
        count += 1
    return count
