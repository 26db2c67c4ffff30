"""
DetectorConfig: every tunable of the detection pipeline in one place.

Validated in __post_init__ so a bad parameter fails at construction,
before the loop ever samples a frame.
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Tuple

from domain.errors import ConfigurationError

DEFAULT_VOCABULARY: Tuple[str, ...] = (
    "hello", "please", "thank you", "help",
    "problem", "important", "need", "complaint",
)


@dataclass(frozen=True)
class DetectorConfig:
    # ---- sampler -------------------------------------------------------
    sample_interval: float = 0.12       # seconds between ticks (~8 Hz)
    sample_width: int = 320             # downscaled frame width in pixels

    # ---- motion detector -----------------------------------------------
    border_margin: int = 6              # pixels skipped on every side
    sample_stride: int = 6              # sample every N-th pixel per axis
    noise_floor: float = 25.0           # luminance delta on a 0-255 scale

    # ---- zones (normalised coordinates) ---------------------------------
    left_zone_max_x: float = 0.35
    right_zone_min_x: float = 0.65
    hand_band: Tuple[float, float] = (0.15, 0.85)
    center_box: Tuple[float, float, float, float] = (0.35, 0.20, 0.65, 0.90)  # x0, y0, x1, y1
    edge_left_max_x: float = 0.25
    edge_right_min_x: float = 0.75

    # ---- calibration ---------------------------------------------------
    calibration_window: int = 30
    significant_multiplier: float = 3.0
    significant_floor: float = 0.015
    hand_multiplier: float = 2.0
    hand_floor: float = 0.01
    wave_multiplier: float = 4.0
    wave_floor: float = 0.02

    # ---- classifier ----------------------------------------------------
    debounce_ticks: int = 3             # K: ticks a gesture stays active
    decay_ticks: int = 10               # motionless ticks until confidence hits 0
    hold_decay: float = 0.85            # confidence factor per held tick
    two_hand_intensity: float = 2.0     # x significant threshold for two-hand
    dominance_ratio: float = 2.0        # zone count ratio for a dominant hand
    vocabulary: Tuple[str, ...] = field(default=DEFAULT_VOCABULARY)

    # ---- aggregator ----------------------------------------------------
    history_capacity: int = 150
    display_cutoff: float = 0.4
    log_cutoff: float = 0.6

    def __post_init__(self) -> None:
        self._require(self.sample_interval > 0, "sample_interval must be > 0")
        self._require(self.sample_width > 0, "sample_width must be > 0")
        self._require(self.border_margin >= 0, "border_margin must be >= 0")
        self._require(self.sample_stride >= 1, "sample_stride must be >= 1")
        self._require(0 <= self.noise_floor < 255, "noise_floor must be in [0, 255)")

        self._require_unit("left_zone_max_x", self.left_zone_max_x)
        self._require_unit("right_zone_min_x", self.right_zone_min_x)
        self._require_unit("edge_left_max_x", self.edge_left_max_x)
        self._require_unit("edge_right_min_x", self.edge_right_min_x)
        self._require_range("hand_band", self.hand_band)
        self._require(len(self.center_box) == 4, "center_box must be (x0, y0, x1, y1)")
        x0, y0, x1, y1 = self.center_box
        self._require_range("center_box x", (x0, x1))
        self._require_range("center_box y", (y0, y1))

        self._require(self.calibration_window >= 1, "calibration_window must be >= 1")
        for name in ("significant", "hand", "wave"):
            multiplier = getattr(self, f"{name}_multiplier")
            floor = getattr(self, f"{name}_floor")
            self._require(multiplier > 0, f"{name}_multiplier must be > 0, got {multiplier}")
            self._require(floor > 0, f"{name}_floor must be > 0, got {floor}")
        self._require(
            self.significant_multiplier >= 1,
            f"significant_multiplier must be >= 1, got {self.significant_multiplier}",
        )

        self._require(self.debounce_ticks >= 1, "debounce_ticks must be >= 1")
        self._require(self.decay_ticks >= 1, "decay_ticks must be >= 1")
        self._require(0 < self.hold_decay <= 1, "hold_decay must be in (0, 1]")
        self._require(self.two_hand_intensity > 0, "two_hand_intensity must be > 0")
        self._require(self.dominance_ratio >= 1, "dominance_ratio must be >= 1")
        self._require(len(self.vocabulary) > 0, "vocabulary must not be empty")

        self._require(self.history_capacity >= 1, "history_capacity must be >= 1")
        self._require_unit("display_cutoff", self.display_cutoff)
        self._require_unit("log_cutoff", self.log_cutoff)
        self._require(
            self.log_cutoff >= self.display_cutoff,
            "log_cutoff must not be below display_cutoff",
        )

    # ------------------------------------------------------------------
    def with_overrides(self, **changes) -> "DetectorConfig":
        """Copy with some fields replaced (validated again)."""
        return replace(self, **changes)

    @staticmethod
    def _require(condition: bool, message: str) -> None:
        if not condition:
            raise ConfigurationError(message)

    @classmethod
    def _require_unit(cls, name: str, value: float) -> None:
        cls._require(0.0 <= value <= 1.0, f"{name} must be in [0, 1], got {value}")

    @classmethod
    def _require_range(cls, name: str, bounds: Tuple[float, float]) -> None:
        cls._require(len(bounds) == 2, f"{name} must be a (low, high) pair")
        low, high = bounds
        cls._require(
            0.0 <= low < high <= 1.0,
            f"{name} must satisfy 0 <= low < high <= 1, got {bounds}",
        )


# Default instance: import and use directly, or override in tests.
default_detector_config = DetectorConfig()
