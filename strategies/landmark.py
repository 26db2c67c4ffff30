"""
LandmarkModelStrategy: optional strategy backed by a hand-landmark model.

Hand positions come from a tracker (MediaPipe Hands by default); per-hand
motion is the displacement of each hand's centroid between ticks. That motion
is folded into a MotionSample and classified by the same GestureClassifier as
the heuristic strategy, so the output contract is identical. Still no sign
recognition: categories describe hand activity only.
"""
from __future__ import annotations
from typing import Dict, Optional, Protocol

import numpy as np

from core.config import DetectorConfig
from core.gesture_classifier import GestureClassifier
from core.hand_tracker import HandsData, Landmark2D
from domain.enums import TickStatus
from domain.models import Frame, MotionSample, StrategyResult, Thresholds
from strategies.base import DetectionStrategy
from utils.imaging import centroid, clamp, displacement

# Resolution of the synthetic MotionSample built from landmark motion
_SAMPLE_POINTS = 1000


class LandmarkTracker(Protocol):
    def process(self, rgb: np.ndarray) -> HandsData:
        ...

    def release(self) -> None:
        ...


class LandmarkModelStrategy(DetectionStrategy):
    """
    Parameters
    ----------
    config : DetectorConfig
        Zone geometry (edge bands), threshold floors and classifier settings.
    tracker : LandmarkTracker, optional
        Defaults to core.hand_tracker.HandTracker (requires mediapipe).
    full_scale : float
        Centroid displacement (normalised image units per tick) that counts
        as 100 % motion for a hand.
    """

    NAME = "landmark-model"

    def __init__(
        self,
        config: DetectorConfig,
        tracker: Optional[LandmarkTracker] = None,
        full_scale: float = 0.25,
    ) -> None:
        if tracker is None:
            from core.hand_tracker import HandTracker
            tracker = HandTracker()

        self._cfg = config
        self._tracker = tracker
        self._full_scale = full_scale
        self._classifier = GestureClassifier(config)
        self._previous: Dict[str, Landmark2D] = {}
        # No ambient calibration: landmark motion is already noise-free enough
        # that the configured floors act as thresholds directly.
        self._thresholds = Thresholds(
            baseline=0.0,
            significant_motion=config.significant_floor,
            hand_motion=config.hand_floor,
            wave=config.wave_floor,
        )

    # ------------------------------------------------------------------
    def process(self, frame: Frame) -> StrategyResult:
        hands = self._tracker.process(frame.pixels)
        centers = {side: centroid(landmarks) for side, landmarks in hands.items() if landmarks}

        sample = self._sample(centers)
        self._previous = centers

        event = self._classifier.classify(sample, self._thresholds, frame.timestamp)
        return StrategyResult(status=TickStatus.OK, event=event, sample=sample)

    def reset(self) -> None:
        self._previous = {}
        self._classifier.reset()

    def close(self) -> None:
        self._tracker.release()

    # ------------------------------------------------------------------
    def _sample(self, centers: Dict[str, Landmark2D]) -> MotionSample:
        ratios = {"Left": 0.0, "Right": 0.0}
        edge = 0.0
        for side, center in centers.items():
            before = self._previous.get(side)
            if before is None:
                continue
            ratio = clamp(displacement(before, center) / self._full_scale, 0.0, 1.0)
            ratios[side] = ratio
            if center[0] < self._cfg.edge_left_max_x or center[0] > self._cfg.edge_right_min_x:
                edge += ratio

        total = clamp(ratios["Left"] + ratios["Right"], 0.0, 1.0)
        return MotionSample.from_counts(
            active=_points(total),
            sampled=_SAMPLE_POINTS,
            left=_points(ratios["Left"]),
            right=_points(ratios["Right"]),
            center=0,
            edge=_points(clamp(edge, 0.0, 1.0)),
        )


def _points(ratio: float) -> int:
    return int(round(ratio * _SAMPLE_POINTS))
