#!/usr/bin/env python3
"""
GPX Simplifier
This script reads a GPX activity, samples it every fixed number of meters
and writes cumulative distance, elevation, heart rate and pace to a CSV file.

Requirements:
    pip install gpxpy

"""

from typing import List, Optional
import argparse
import logging
import math
import sys
from gpxpy import gpx

from . import __version__
from .config import DEFAULT_OUTPUT, SimplifierConfig
from .metrics import collect_metrics, log_metrics
from .report import write_report
from .resampler import DEFAULT_INTERVAL, Resampler
from .track import Track, TrackError

# Configure logging
logger = logging.getLogger("gpxsimplifier")


def positive_float(value: str) -> float:
    """argparse type for strictly positive, finite numbers."""
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}")
    if not math.isfinite(number) or number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive number: {value!r}")
    return number


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command-line argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="Resample a GPX activity into a distance-sampled CSV with pace",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "filename",
        type=str,
        nargs="?",
        help="GPX file to process (use - for stdin)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=DEFAULT_OUTPUT,
        help=f"Output CSV file, or - for stdout (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "--interval",
        type=positive_float,
        default=DEFAULT_INTERVAL,
        help=f"Distance between output rows in meters (default: {DEFAULT_INTERVAL:g})",
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
        version=f"gpxsimplifier {__version__}",
    )
    return parser


def setup_logging(config: SimplifierConfig) -> None:
    """Setup logging configuration."""
    level = getattr(logging, config.log_level)

    # Create formatter
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
    )

    # Create console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    # Configure the root logger so all modules inherit the configuration
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)


def load_track(filename: str) -> Track:
    """
    Load the input track, logging and exiting on any input error.

    Args:
        filename: Path to the GPX file, or "-" for stdin

    Returns:
        Parsed Track
    """
    try:
        return Track.from_file(filename)
    except FileNotFoundError:
        logger.error(f"GPX file not found: {filename}")
    except PermissionError:
        logger.error(f"Cannot read GPX file (permission denied): {filename}")
    except OSError as e:
        logger.error(f"Cannot read GPX file {filename}: {e}")
    except gpx.GPXException as e:
        logger.error(f"Invalid GPX file: {e}")
    except TrackError as e:
        logger.error(f"Unusable GPX track: {e}")
    sys.exit(1)


def main(argv: Optional[List[str]] = None):
    """
    Parses command-line arguments, loads the GPX file,
    resamples the track and writes the CSV report.
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.filename:
        parser.print_help()
        sys.exit(1)

    try:
        config = SimplifierConfig.from_args(args)
    except ValueError as e:
        parser.error(str(e))

    # Setup logging
    setup_logging(config)

    track = load_track(args.filename)
    logger.info(
        f"Loaded GPX track with {len(track)} points in {track.segment_count} segments"
    )

    resampler = Resampler(config.interval)
    records = resampler.resample_segments(track.segments)

    try:
        record_count = write_report(records, config.output)
    except OSError as e:
        logger.error(f"Cannot write CSV file {config.output}: {e}")
        sys.exit(1)

    logger.info(
        f"Wrote {record_count} rows every {config.interval:g} m "
        f"({resampler.total_distance / 1000:.2f} km total)"
    )

    metrics = collect_metrics(track, resampler, record_count)
    log_metrics(metrics, config)

    if config.output != "-":
        print(f"Output written to {config.output}")


if __name__ == "__main__":
    main()
