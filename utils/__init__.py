"""
Numeric utilities for the detection pipeline
"""

from .imaging import clamp, luminance, sample_grid, centroid, displacement

__all__ = [
    'clamp',
    'luminance',
    'sample_grid',
    'centroid',
    'displacement',
]
