#!/usr/bin/env python3
import argparse
import math
from dataclasses import dataclass

from .resampler import DEFAULT_INTERVAL

DEFAULT_OUTPUT = "output.csv"


@dataclass
class SimplifierConfig:
    """Configuration for the gpxsimplifier CLI."""

    interval: float = DEFAULT_INTERVAL
    output: str = DEFAULT_OUTPUT
    log_level: str = "WARNING"
    metrics: bool = False

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "SimplifierConfig":
        config = cls(
            interval=args.interval,
            output=args.output,
            log_level=args.log_level,
            metrics=args.metrics,
        )
        config.validate()
        return config

    def validate(self) -> None:
        """Raise ValueError if the settings cannot drive a resampling run."""
        if not math.isfinite(self.interval) or self.interval <= 0:
            raise ValueError(f"Interval must be a positive number of meters, got {self.interval}")
        if not self.output:
            raise ValueError("Output filename cannot be empty")
