"""
BaselineCalibrator: learns the ambient motion noise of the camera/lighting
during the first ticks of a session and derives adaptive thresholds from it.
"""
from __future__ import annotations
from typing import Optional

from core.config import DetectorConfig
from domain.errors import CalibrationIncomplete
from domain.models import CalibrationState, Thresholds


class BaselineCalibrator:
    """
    Usage
    -----
    calibrator = BaselineCalibrator(config)
    if calibrator.add(sample.motion_ratio):
        thresholds = calibrator.thresholds

    Each threshold is max(baseline * multiplier, floor); the floors keep a
    perfectly still camera from producing zero thresholds.
    """

    def __init__(self, config: DetectorConfig) -> None:
        self._cfg = config
        self._state = CalibrationState(window_size=config.calibration_window)
        self._thresholds: Optional[Thresholds] = None

    # ------------------------------------------------------------------
    def add(self, motion_ratio: float) -> bool:
        """
        Feed one motion ratio. Ignored once calibration is complete.
        Returns True when calibration is (now) complete.
        """
        state = self._state
        if state.complete:
            return True

        state.samples.append(motion_ratio)
        if len(state.samples) >= state.window_size:
            state.complete = True
            self._thresholds = self._derive(state.baseline)
        return state.complete

    @property
    def thresholds(self) -> Thresholds:
        if self._thresholds is None:
            raise CalibrationIncomplete(
                f"{len(self._state.samples)}/{self._state.window_size} calibration samples"
            )
        return self._thresholds

    @property
    def complete(self) -> bool:
        return self._state.complete

    @property
    def baseline(self) -> Optional[float]:
        return self._state.baseline

    @property
    def progress(self) -> float:
        return self._state.progress

    @property
    def state(self) -> CalibrationState:
        return self._state

    def reset(self) -> None:
        """Discard everything learned; a fresh CalibrationState replaces the old one."""
        self._state = CalibrationState(window_size=self._cfg.calibration_window)
        self._thresholds = None

    # ------------------------------------------------------------------
    def _derive(self, baseline: float) -> Thresholds:
        cfg = self._cfg
        return Thresholds(
            baseline=baseline,
            significant_motion=max(baseline * cfg.significant_multiplier, cfg.significant_floor),
            hand_motion=max(baseline * cfg.hand_multiplier, cfg.hand_floor),
            wave=max(baseline * cfg.wave_multiplier, cfg.wave_floor),
        )
