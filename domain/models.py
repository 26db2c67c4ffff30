from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import time

import numpy as np

from domain.enums import DetectorState, GestureCategory, TickStatus


@dataclass
class Frame:
    """
    One downscaled RGB still pulled from the video source.
    Lives for a single tick; only the motion detector keeps the previous one.
    """
    pixels: np.ndarray                  # H x W x 3, uint8, RGB
    timestamp: float = field(default_factory=time.time)

    # ---- convenience accessors ----------------------------------------
    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height), used to detect resolution changes."""
        return (self.width, self.height)


@dataclass
class CalibrationState:
    """
    Motion ratios collected during the initial still period.
    The baseline only exists once the window is exactly full.
    """
    window_size: int
    samples: List[float] = field(default_factory=list)
    complete: bool = False

    @property
    def baseline(self) -> Optional[float]:
        if not self.complete:
            return None
        return sum(self.samples) / len(self.samples)

    @property
    def progress(self) -> float:
        return min(1.0, len(self.samples) / self.window_size)


@dataclass(frozen=True)
class MotionSample:
    """Per-tick motion aggregate. Every ratio is active points / sampled points."""
    motion_ratio: float = 0.0
    left_ratio: float = 0.0
    right_ratio: float = 0.0
    center_ratio: float = 0.0
    edge_ratio: float = 0.0
    active_count: int = 0
    sampled_count: int = 0
    left_count: int = 0
    right_count: int = 0
    center_count: int = 0
    edge_count: int = 0

    @classmethod
    def empty(cls, sampled_count: int = 0) -> "MotionSample":
        return cls(sampled_count=sampled_count)

    @classmethod
    def from_counts(
        cls,
        active: int,
        sampled: int,
        left: int,
        right: int,
        center: int,
        edge: int,
    ) -> "MotionSample":
        if sampled <= 0:
            return cls.empty()
        return cls(
            motion_ratio=active / sampled,
            left_ratio=left / sampled,
            right_ratio=right / sampled,
            center_ratio=center / sampled,
            edge_ratio=edge / sampled,
            active_count=active,
            sampled_count=sampled,
            left_count=left,
            right_count=right,
            center_count=center,
            edge_count=edge,
        )


@dataclass(frozen=True)
class Thresholds:
    """Adaptive thresholds derived from the learned baseline."""
    baseline: float
    significant_motion: float
    hand_motion: float
    wave: float


@dataclass(frozen=True)
class HandPresence:
    left: bool = False
    right: bool = False

    @property
    def any(self) -> bool:
        return self.left or self.right


@dataclass(frozen=True)
class GestureEvent:
    """
    Immutable classifier output.

    vocabulary_tokens are placeholders picked round-robin from a fixed word
    list; they carry no linguistic meaning. `held` marks a debounced repeat
    of the previous gesture on a tick without fresh motion.
    """
    category: GestureCategory
    confidence: float
    hand_presence: HandPresence = field(default_factory=HandPresence)
    vocabulary_tokens: Tuple[str, ...] = ()
    motion_ratio: float = 0.0
    timestamp: float = field(default_factory=time.time)
    held: bool = False

    @property
    def is_gesture(self) -> bool:
        return self.category is not GestureCategory.NONE

    @classmethod
    def none(cls, timestamp: float, confidence: float = 0.0) -> "GestureEvent":
        return cls(
            category=GestureCategory.NONE,
            confidence=confidence,
            timestamp=timestamp,
        )


@dataclass(frozen=True)
class StrategyResult:
    """What a detection strategy made of one frame."""
    status: TickStatus
    event: GestureEvent
    sample: Optional[MotionSample] = None


@dataclass(frozen=True)
class TickResult:
    """
    Everything one loop tick produced, handed to listeners.
    `frame` is transient: listeners may draw it but must not keep it.
    """
    status: TickStatus
    detector_state: DetectorState
    event: Optional[GestureEvent] = None
    sample: Optional[MotionSample] = None
    frame: Optional[Frame] = None
    message: str = ""


@dataclass(frozen=True)
class TokenSummary:
    """One distinct vocabulary token across a session."""
    token: str
    count: int
    first_seen: float
    last_seen: float
    best_confidence: float
