"""
Camera: thin wrapper around OpenCV VideoCapture.
Only reads frames: no permissions, no recording, no pacing.
The detector loop owns the sampling rate.
"""
from __future__ import annotations
from typing import Optional, Union

import cv2
import numpy as np

from domain.errors import SourceNotReady


class Camera:
    """
    Parameters
    ----------
    device : int | str
        Camera index (0 = default webcam) or a path / URL to a video file.
    """

    def __init__(self, device: Union[int, str] = 0) -> None:
        self._device = device
        self._cap = cv2.VideoCapture(device)

        if not self._cap.isOpened():
            self._cap.release()
            raise SourceNotReady(f"Cannot open video source {device!r}")

    # ------------------------------------------------------------------
    def read(self) -> Optional[np.ndarray]:
        """Return the next BGR frame, or None when the capture has nothing yet."""
        ret, frame = self._cap.read()
        if not ret or frame is None or frame.size == 0:
            return None
        return frame

    def release(self) -> None:
        self._cap.release()

    def __enter__(self) -> "Camera":
        return self

    def __exit__(self, *_) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"<Camera device={self._device!r}>"
