"""
GestureClassifier: turns a MotionSample plus calibrated thresholds into a
GestureEvent.

Categories are coarse motion classes, not signs. The vocabulary token attached
to two-hand events is picked round-robin from a fixed word list and is only a
placeholder for the user to replace.
"""
from __future__ import annotations
from dataclasses import replace
from typing import Optional, Tuple

from core.config import DetectorConfig
from core.debouncer import Debouncer
from domain.enums import GestureCategory
from domain.models import GestureEvent, HandPresence, MotionSample, Thresholds
from utils.imaging import clamp

# category -> (bonus, ceiling)
_CONFIDENCE_TABLE = {
    GestureCategory.WAVE:                 (0.5, 0.95),
    GestureCategory.TWO_HAND:             (0.4, 0.90),
    GestureCategory.SINGLE_HAND_DOMINANT: (0.3, 0.80),
    GestureCategory.GENERIC_HAND:         (0.2, 0.75),
    GestureCategory.BODY_MOVEMENT:        (0.0, 0.60),
}


class GestureClassifier:
    """
    Parameters
    ----------
    config : DetectorConfig
        Debounce window, decay, intensity/dominance factors and vocabulary.
    """

    def __init__(self, config: DetectorConfig) -> None:
        self._cfg = config
        self._debouncer = Debouncer(config.debounce_ticks)
        self._detections = 0
        self._last: Optional[GestureEvent] = None
        self._last_confidence = 0.0

    # ------------------------------------------------------------------
    def classify(
        self,
        sample: MotionSample,
        thresholds: Thresholds,
        timestamp: float,
    ) -> GestureEvent:
        significant = sample.motion_ratio > thresholds.significant_motion
        active = self._debouncer.update(significant)

        if significant:
            event = self._classify_fresh(sample, thresholds, timestamp)
            if event.is_gesture:
                self._last = event
                self._last_confidence = event.confidence
            return event

        since = self._debouncer.ticks_since_motion
        if active and self._last is not None:
            return replace(
                self._last,
                confidence=self._last_confidence * self._cfg.hold_decay ** since,
                vocabulary_tokens=(),
                motion_ratio=sample.motion_ratio,
                timestamp=timestamp,
                held=True,
            )

        self._last = None
        fade = max(0.0, 1.0 - since / self._cfg.decay_ticks)
        return GestureEvent.none(timestamp, confidence=self._last_confidence * fade)

    @property
    def detection_count(self) -> int:
        return self._detections

    @property
    def active(self) -> bool:
        return self._debouncer.active

    def reset(self) -> None:
        self._debouncer.reset()
        self._detections = 0
        self._last = None
        self._last_confidence = 0.0

    # ------------------------------------------------------------------
    def _classify_fresh(
        self,
        sample: MotionSample,
        thresholds: Thresholds,
        timestamp: float,
    ) -> GestureEvent:
        cfg = self._cfg
        left = sample.left_ratio > thresholds.hand_motion
        right = sample.right_ratio > thresholds.hand_motion
        both = left and right
        waving = sample.edge_ratio > thresholds.wave and (left or right)
        hands = HandPresence(left=left, right=right)

        tokens: Tuple[str, ...] = ()
        if waving:
            category = GestureCategory.WAVE
        elif both and sample.motion_ratio > cfg.two_hand_intensity * thresholds.significant_motion:
            category = GestureCategory.TWO_HAND
        elif self._dominant(sample, left, right):
            category = GestureCategory.SINGLE_HAND_DOMINANT
        elif left or right:
            category = GestureCategory.GENERIC_HAND
        elif sample.center_ratio > thresholds.hand_motion:
            category = GestureCategory.BODY_MOVEMENT
        else:
            return GestureEvent.none(timestamp)

        self._detections += 1
        if category is GestureCategory.TWO_HAND:
            vocabulary = cfg.vocabulary
            tokens = (vocabulary[self._detections % len(vocabulary)],)

        bonus, ceiling = _CONFIDENCE_TABLE[category]
        confidence = min(self._base_confidence(sample, thresholds) + bonus, ceiling)
        return GestureEvent(
            category=category,
            confidence=confidence,
            hand_presence=hands,
            vocabulary_tokens=tokens,
            motion_ratio=sample.motion_ratio,
            timestamp=timestamp,
        )

    def _dominant(self, sample: MotionSample, left: bool, right: bool) -> bool:
        ratio = self._cfg.dominance_ratio
        if left and sample.left_count > ratio * sample.right_count:
            return True
        if right and sample.right_count > ratio * sample.left_count:
            return True
        return False

    @staticmethod
    def _base_confidence(sample: MotionSample, thresholds: Thresholds) -> float:
        excess = (sample.motion_ratio - thresholds.baseline) / thresholds.significant_motion
        return clamp(0.2 + 0.3 * excess, 0.2, 0.9)
