"""
Detector error taxonomy.

Only ConfigurationError is meant to reach the caller (at construction time).
The others are raised inside a tick and converted into a TickStatus by the
strategy or the detector loop.
"""
from __future__ import annotations


class DetectorError(Exception):
    """Base class for every error raised by the detector."""


class SourceNotReady(DetectorError):
    """The video source produced no usable frame (yet)."""


class CalibrationIncomplete(DetectorError):
    """Thresholds were requested before the baseline window filled up."""


class DegenerateFrame(DetectorError):
    """A frame's dimensions differ from the stored previous frame."""

    def __init__(self, expected: tuple, got: tuple) -> None:
        super().__init__(f"frame size changed from {expected} to {got}")
        self.expected = expected
        self.got = got


class ConfigurationError(DetectorError, ValueError):
    """Invalid detector parameters. Raised before any sampling begins."""
