"""
MotionDetector: luminance frame differencing on a strided pixel grid.

Compares the current sampled frame against the previous one and reports the
share of sampled points whose luminance changed by more than the noise floor,
overall and per screen zone. Zones overlap; every ratio uses the total number
of sampled points as denominator.
"""
from __future__ import annotations
from typing import Dict, Optional, Tuple

import numpy as np

from core.config import DetectorConfig
from domain.errors import DegenerateFrame
from domain.models import Frame, MotionSample
from utils.imaging import luminance, sample_grid

ZoneMasks = Dict[str, np.ndarray]


class MotionDetector:
    """
    Stateful: keeps exactly one frame (the previous one) between calls.

    Parameters
    ----------
    config : DetectorConfig
        Grid margin / stride, noise floor and zone geometry.
    """

    def __init__(self, config: DetectorConfig) -> None:
        self._cfg = config
        self._previous: Optional[Frame] = None
        self._grid_cache: Optional[Tuple[Tuple[int, int], Tuple[np.ndarray, np.ndarray], ZoneMasks]] = None

    # ------------------------------------------------------------------
    def detect(self, frame: Frame) -> MotionSample:
        """
        Returns the MotionSample for `frame` and stores it as the new previous frame.

        Raises
        ------
        DegenerateFrame
            When the frame size differs from the previous frame. The previous
            reference is replaced by `frame` before raising, so the next tick
            compares against a frame of the new size.
        """
        previous = self._previous
        self._previous = frame

        if previous is None:
            return MotionSample.empty()

        if previous.pixels.shape != frame.pixels.shape:
            raise DegenerateFrame(previous.size, frame.size)

        (ys, xs), masks = self._grid(frame.height, frame.width)
        sampled = ys.size * xs.size
        if sampled == 0:
            return MotionSample.empty()

        index = np.ix_(ys, xs)
        current_luma = luminance(frame.pixels[index])
        previous_luma = luminance(previous.pixels[index])
        active = np.abs(current_luma - previous_luma) > self._cfg.noise_floor

        return MotionSample.from_counts(
            active=int(np.count_nonzero(active)),
            sampled=sampled,
            left=int(np.count_nonzero(active & masks["left"])),
            right=int(np.count_nonzero(active & masks["right"])),
            center=int(np.count_nonzero(active & masks["center"])),
            edge=int(np.count_nonzero(active & masks["edge"])),
        )

    @property
    def previous(self) -> Optional[Frame]:
        return self._previous

    def reset(self) -> None:
        self._previous = None

    # ------------------------------------------------------------------
    def _grid(self, height: int, width: int) -> Tuple[Tuple[np.ndarray, np.ndarray], ZoneMasks]:
        """Sample coordinates and zone masks for a frame size (cached per size)."""
        if self._grid_cache is not None and self._grid_cache[0] == (height, width):
            return self._grid_cache[1], self._grid_cache[2]

        cfg = self._cfg
        ys, xs = sample_grid(height, width, cfg.border_margin, cfg.sample_stride)
        nx = xs / width
        ny = ys / height

        band_lo, band_hi = cfg.hand_band
        in_band = (ny >= band_lo) & (ny <= band_hi)
        cx0, cy0, cx1, cy1 = cfg.center_box
        in_center_cols = (nx >= cx0) & (nx <= cx1)
        in_center_rows = (ny >= cy0) & (ny <= cy1)
        all_rows = np.ones_like(ny, dtype=bool)

        masks: ZoneMasks = {
            "left":   _zone(in_band, nx < cfg.left_zone_max_x),
            "right":  _zone(in_band, nx > cfg.right_zone_min_x),
            "center": _zone(in_center_rows, in_center_cols),
            "edge":   _zone(all_rows, (nx < cfg.edge_left_max_x) | (nx > cfg.edge_right_min_x)),
        }
        self._grid_cache = ((height, width), (ys, xs), masks)
        return (ys, xs), masks


def _zone(rows: np.ndarray, cols: np.ndarray) -> np.ndarray:
    """2-D boolean mask from a row selector and a column selector."""
    return rows[:, None] & cols[None, :]
