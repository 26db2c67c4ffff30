"""
Pure numeric helpers for the motion pipeline.
No imports from the rest of the project, safe to use anywhere.
"""
from __future__ import annotations
from typing import Sequence, Tuple

import numpy as np

# ITU-R BT.601 luma weights, RGB order
LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float32)

Point2D = Tuple[float, float]


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def luminance(rgb: np.ndarray) -> np.ndarray:
    """Per-pixel luminance of an (..., 3) RGB array, as float32."""
    return rgb.astype(np.float32) @ LUMA_WEIGHTS


def sample_grid(height: int, width: int, margin: int, stride: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Pixel coordinates of a strided grid that skips `margin` pixels on every side.

    Returns (ys, xs) as 1-D index arrays; either may be empty when the
    frame is smaller than twice the margin.
    """
    ys = np.arange(margin, height - margin, stride)
    xs = np.arange(margin, width - margin, stride)
    return ys, xs


def centroid(points: Sequence[Point2D]) -> Point2D:
    """Geometric centroid of a point list."""
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    n = len(points)
    return (sum(xs) / n, sum(ys) / n)


def displacement(a: Point2D, b: Point2D) -> float:
    """Euclidean distance between two 2D points."""
    return float(np.hypot(a[0] - b[0], a[1] - b[1]))
