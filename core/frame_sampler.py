"""
FrameSampler: pulls one downscaled RGB still from a live source per tick.

"Not ready" (no frame, zero-sized frame) is a normal state and yields None.
The sampler keeps no pixel buffers between calls.
"""
from __future__ import annotations
import time
from typing import Optional, Protocol

import cv2
import numpy as np

from domain.errors import SourceNotReady
from domain.models import Frame


class FrameSource(Protocol):
    """Anything with a read() returning a BGR frame or None (e.g. core.camera.Camera)."""

    def read(self) -> Optional[np.ndarray]:
        ...


class FrameSampler:
    """
    Parameters
    ----------
    source : FrameSource
        Live video source owned by an external collaborator.
    sample_width : int
        Target width of the downscaled frame. Smaller frames are not upscaled.
    """

    def __init__(self, source: FrameSource, sample_width: int = 320) -> None:
        self._source: Optional[FrameSource] = source
        self._sample_width = sample_width

    # ------------------------------------------------------------------
    def sample(self, timestamp: Optional[float] = None) -> Optional[Frame]:
        if self._source is None:
            return None

        try:
            raw = self._source.read()
        except SourceNotReady:
            return None

        if raw is None or raw.ndim not in (2, 3) or raw.shape[0] == 0 or raw.shape[1] == 0:
            return None
        if raw.ndim == 3 and raw.shape[2] != 3:
            return None

        h, w = raw.shape[:2]
        if w > self._sample_width:
            new_h = max(1, round(h * self._sample_width / w))
            raw = cv2.resize(raw, (self._sample_width, new_h), interpolation=cv2.INTER_AREA)

        code = cv2.COLOR_GRAY2RGB if raw.ndim == 2 else cv2.COLOR_BGR2RGB
        rgb = cv2.cvtColor(raw, code)
        return Frame(pixels=rgb, timestamp=time.time() if timestamp is None else timestamp)

    @property
    def has_source(self) -> bool:
        return self._source is not None

    def release(self) -> None:
        """Drop the source reference; the source itself is not closed."""
        self._source = None
