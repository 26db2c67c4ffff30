"""
Shared fixtures: synthetic frames and fake video sources. No camera needed.

Frames are 100x100 with border_margin=0 and sample_stride=1, so every pixel
is a sampled point and a ratio of 0.01 is exactly 100 changed pixels.
"""
from __future__ import annotations
from typing import Callable, Iterable, List, Optional

import numpy as np
import pytest

from core.config import DetectorConfig
from domain.models import Frame, MotionSample, Thresholds

SIZE = 100
GREY = 100
BRIGHT = 200


def blank(size: int = SIZE, value: int = GREY) -> np.ndarray:
    return np.full((size, size, 3), value, dtype=np.uint8)


def with_patch(base: np.ndarray, rows: slice, cols: slice, value: int = BRIGHT) -> np.ndarray:
    out = base.copy()
    out[rows, cols] = value
    return out


def noisy_pair(count: int = 50) -> List[np.ndarray]:
    """Two frames differing in `count` pixels of row 5 (outside the hand band)."""
    a = blank()
    b = with_patch(a, slice(5, 6), slice(30, 30 + count))
    return [a, b]


def as_frame(pixels: np.ndarray, timestamp: float = 0.0) -> Frame:
    return Frame(pixels=pixels, timestamp=timestamp)


class FakeSource:
    """read() walks a list of BGR frames; afterwards repeats the last one (or None)."""

    def __init__(
        self,
        frames: Iterable[Optional[np.ndarray]],
        repeat_last: bool = True,
        on_read: Optional[Callable[[int], None]] = None,
    ) -> None:
        self._frames = list(frames)
        self._repeat_last = repeat_last
        self._on_read = on_read
        self.reads = 0

    def read(self) -> Optional[np.ndarray]:
        index = self.reads
        self.reads += 1
        if self._on_read is not None:
            self._on_read(index)
        if index < len(self._frames):
            return self._frames[index]
        if self._repeat_last and self._frames:
            return self._frames[-1]
        return None


@pytest.fixture
def config() -> DetectorConfig:
    return DetectorConfig(border_margin=0, sample_stride=1, calibration_window=30)


@pytest.fixture
def thresholds() -> Thresholds:
    # baseline 0.005 → max(3b, .015), max(2b, .01), max(4b, .02)
    return Thresholds(baseline=0.005, significant_motion=0.015, hand_motion=0.01, wave=0.02)


def right_zone_sample(ratio: float = 0.05, sampled: int = 10000) -> MotionSample:
    count = int(round(ratio * sampled))
    return MotionSample.from_counts(
        active=count, sampled=sampled, left=0, right=count, center=0, edge=0,
    )
