"""
OpenCVUI: live status/confidence overlay, isolated from detection logic.

The pipeline never calls cv2 drawing functions directly; it hands each
TickResult to this class.
"""
from __future__ import annotations
from typing import Optional

import cv2
import numpy as np

from app.config import AppConfig
from domain.enums import DetectorState, GestureCategory, TickStatus
from domain.models import TickResult

# BGR
_CATEGORY_COLORS = {
    GestureCategory.WAVE:                 (0,   255, 255),
    GestureCategory.TWO_HAND:             (0,   255,   0),
    GestureCategory.SINGLE_HAND_DOMINANT: (255, 200,   0),
    GestureCategory.GENERIC_HAND:         (255, 255,   0),
    GestureCategory.BODY_MOVEMENT:        (200, 120, 255),
    GestureCategory.NONE:                 (128, 128, 128),
}
_ZONE_COLOR = (90, 90, 90)
_DEFAULT_COLOR = (255, 255, 255)


class OpenCVUI:
    """Draws the overlay onto the sampled frame and shows it in a window."""

    def __init__(self, config: AppConfig, scale: float = 2.0) -> None:
        self._cfg   = config
        self._scale = scale
        self._last_label = "-"

    def render(self, result: TickResult, calibration_progress: float = 1.0) -> None:
        """Draw the latest tick. Ticks without a frame keep the previous image."""
        if result.frame is None:
            return

        frame = cv2.cvtColor(result.frame.pixels, cv2.COLOR_RGB2BGR)
        frame = cv2.resize(frame, None, fx=self._scale, fy=self._scale,
                           interpolation=cv2.INTER_LINEAR)
        self.draw(frame, result, calibration_progress)
        cv2.imshow(self._cfg.window_name, frame)

    def draw(self, frame: np.ndarray, result: TickResult, calibration_progress: float = 1.0) -> np.ndarray:
        """Draw overlays in place onto a BGR frame and return it."""
        h, w = frame.shape[:2]
        det = self._cfg.detector

        if self._cfg.show_zones:
            for x in (det.left_zone_max_x, det.right_zone_min_x):
                cv2.line(frame, (int(x * w), 0), (int(x * w), h), _ZONE_COLOR, 1)
            band_lo, band_hi = det.hand_band
            for y in (band_lo, band_hi):
                cv2.line(frame, (0, int(y * h)), (w, int(y * h)), _ZONE_COLOR, 1)

        if self._cfg.mirror:
            frame[:] = cv2.flip(frame, 1)

        # Status line
        if result.detector_state is DetectorState.CALIBRATING:
            status = f"Calibrating... {calibration_progress:.0%}  (hold still)"
            color = (0, 165, 255)
        elif result.status is TickStatus.SOURCE_NOT_READY:
            status, color = "Waiting for camera", (0, 0, 255)
        else:
            status, color = f"Detector: {result.detector_state.value}", (0, 255, 0)
        cv2.putText(frame, status, (12, 24), cv2.FONT_HERSHEY_SIMPLEX, 0.6, color, 2)

        # Current gesture + confidence
        event = result.event
        if event is not None and event.is_gesture:
            self._last_label = f"{event.category.value} ({event.confidence * 100:.0f}%)"
        elif event is not None and event.confidence == 0:
            self._last_label = "-"
        category = event.category if event is not None else GestureCategory.NONE
        cv2.putText(frame, f"Activity: {self._last_label}", (12, 52),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.6,
                    _CATEGORY_COLORS.get(category, _DEFAULT_COLOR), 2)

        if event is not None and event.vocabulary_tokens:
            cv2.putText(frame, f"Marker: {', '.join(event.vocabulary_tokens)} (placeholder)",
                        (12, 78), cv2.FONT_HERSHEY_SIMPLEX, 0.5, (200, 200, 200), 1)

        # Hand presence dots. After mirroring, the image's left zone is on screen right
        if event is not None:
            left_x, right_x = (w - 20, 20) if self._cfg.mirror else (20, w - 20)
            if event.hand_presence.left:
                cv2.circle(frame, (left_x, h // 2), 8, (0, 255, 0), -1)
            if event.hand_presence.right:
                cv2.circle(frame, (right_x, h // 2), 8, (0, 255, 0), -1)

        cv2.putText(frame, "Movement detection only - not a translation",
                    (12, h - 32), cv2.FONT_HERSHEY_SIMPLEX, 0.45, (200, 200, 200), 1)
        cv2.putText(frame, "ESC to quit, R to recalibrate",
                    (12, h - 12), cv2.FONT_HERSHEY_SIMPLEX, 0.45, _DEFAULT_COLOR, 1)
        return frame

    def poll_key(self) -> Optional[int]:
        """Pump the window event loop; returns the pressed key code, if any."""
        key = cv2.waitKey(1) & 0xFF
        return None if key == 0xFF else key

    def close(self) -> None:
        cv2.destroyAllWindows()
