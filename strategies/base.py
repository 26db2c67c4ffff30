"""
Abstract base class for all detection strategies.

Every strategy must:
  - implement process(frame) → StrategyResult
  - implement reset()
  - declare its NAME class attribute

Whatever a strategy looks at (pixel differences, hand landmarks, ...), it
reports through the same GestureEvent contract, so the detector loop, the
overlay and the transcript builder never change when the strategy does.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional

from domain.models import Frame, StrategyResult


class DetectionStrategy(ABC):
    """Base class for all detection strategies."""

    # Override in subclasses for logging / registration
    NAME: str = "UNNAMED_STRATEGY"

    @abstractmethod
    def process(self, frame: Frame) -> StrategyResult:
        """
        Analyse one sampled frame.

        Parameters
        ----------
        frame : Frame
            Downscaled RGB frame of the current tick.

        Returns
        -------
        StrategyResult
            Always carries an event; category NONE when nothing was detected
            or while the strategy is still calibrating.
        """

    @abstractmethod
    def reset(self) -> None:
        """
        Drop all per-session state (previous frame, calibration, counters).
        Called by the detector on start and restart.
        """

    @property
    def calibrated(self) -> bool:
        """Whether the strategy is past its warm-up phase."""
        return True

    @property
    def calibration_progress(self) -> float:
        return 1.0

    @property
    def baseline(self) -> Optional[float]:
        """Learned ambient level, for strategies that calibrate one."""
        return None

    def close(self) -> None:
        """Release model resources, if any."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.NAME!r}>"
