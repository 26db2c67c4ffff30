"""
HeuristicMotionStrategy: frame differencing + baseline calibration + zone
classification. The default strategy; needs nothing but numpy.
"""
from __future__ import annotations
from typing import Optional

from core.calibrator import BaselineCalibrator
from core.config import DetectorConfig
from core.gesture_classifier import GestureClassifier
from core.motion_detector import MotionDetector
from domain.enums import TickStatus
from domain.errors import CalibrationIncomplete, DegenerateFrame
from domain.models import Frame, GestureEvent, StrategyResult
from strategies.base import DetectionStrategy


class HeuristicMotionStrategy(DetectionStrategy):
    """
    Pipeline per frame:

        MotionDetector → BaselineCalibrator (until complete) → GestureClassifier

    The first frame of a session has nothing to compare against; its zero
    motion ratio still counts as a calibration sample.
    """

    NAME = "heuristic-motion"

    def __init__(self, config: DetectorConfig) -> None:
        self._cfg = config
        self._motion = MotionDetector(config)
        self._calibrator = BaselineCalibrator(config)
        self._classifier = GestureClassifier(config)

    # ------------------------------------------------------------------
    def process(self, frame: Frame) -> StrategyResult:
        try:
            sample = self._motion.detect(frame)
        except DegenerateFrame:
            self._calibrator.reset()
            self._classifier.reset()
            return StrategyResult(
                status=TickStatus.DEGENERATE_FRAME,
                event=GestureEvent.none(frame.timestamp),
            )

        try:
            thresholds = self._calibrator.thresholds
        except CalibrationIncomplete:
            self._calibrator.add(sample.motion_ratio)
            return StrategyResult(
                status=TickStatus.CALIBRATING,
                event=GestureEvent.none(frame.timestamp),
                sample=sample,
            )

        event = self._classifier.classify(sample, thresholds, frame.timestamp)
        return StrategyResult(status=TickStatus.OK, event=event, sample=sample)

    def reset(self) -> None:
        self._motion.reset()
        self._calibrator.reset()
        self._classifier.reset()

    # ---- calibration accessors ----------------------------------------
    @property
    def calibrated(self) -> bool:
        return self._calibrator.complete

    @property
    def calibration_progress(self) -> float:
        return self._calibrator.progress

    @property
    def baseline(self) -> Optional[float]:
        return self._calibrator.baseline

    @property
    def calibrator(self) -> BaselineCalibrator:
        return self._calibrator

    @property
    def classifier(self) -> GestureClassifier:
        return self._classifier
