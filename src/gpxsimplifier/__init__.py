#!/usr/bin/env python3
"""
GPX Simplifier - distance-sampled summaries of recorded GPS activities.

This package reads a GPX track, resamples it every fixed number of meters
and reports cumulative distance, elevation, heart rate and pace as CSV.
"""
import importlib.metadata

__version__ = importlib.metadata.version("gpxsimplifier")

# Import main classes for public API
from .geometry import TrackPoint, haversine_distance, spatial_distance
from .resampler import OutputRecord, Resampler, resample
from .track import Track, TrackError

__all__ = [
    "TrackPoint",
    "haversine_distance",
    "spatial_distance",
    "OutputRecord",
    "Resampler",
    "resample",
    "Track",
    "TrackError",
]
