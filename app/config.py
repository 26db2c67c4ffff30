from __future__ import annotations
import argparse
from dataclasses import dataclass, field, replace
from typing import Optional, Sequence, Union

from core.config import DetectorConfig


@dataclass
class AppConfig:
    """
    Central configuration for the entry points.
    Detector tunables live in the nested DetectorConfig.
    """
    # ---- video source --------------------------------------------------
    camera_device: Union[int, str] = 0      # webcam index or video file path

    # ---- detection -----------------------------------------------------
    strategy: str = "heuristic-motion"
    detector: DetectorConfig = field(default_factory=DetectorConfig)

    # ---- overlay -------------------------------------------------------
    window_name: str = "Gesture Activity"
    mirror: bool = True
    show_zones: bool = True

    # ---- session -------------------------------------------------------
    print_template: bool = True             # print the transcript template on exit

    @classmethod
    def from_args(cls, argv: Optional[Sequence[str]] = None) -> "AppConfig":
        """Build a config from command-line flags; unset flags keep defaults."""
        parser = argparse.ArgumentParser(description="Camera hand-activity detector")
        parser.add_argument("--camera", default=None,
                            help="camera index or video file path (default: 0)")
        parser.add_argument("--strategy", default=None,
                            choices=["heuristic-motion", "landmark-model"])
        parser.add_argument("--interval", type=float, default=None,
                            help="seconds between samples")
        parser.add_argument("--width", type=int, default=None,
                            help="downscaled sample width in pixels")
        parser.add_argument("--calibration-window", type=int, default=None)
        parser.add_argument("--no-mirror", action="store_true")
        parser.add_argument("--no-template", action="store_true")
        args = parser.parse_args(argv)

        config = cls()
        if args.camera is not None:
            config.camera_device = int(args.camera) if args.camera.isdigit() else args.camera
        if args.strategy is not None:
            config.strategy = args.strategy

        overrides = {}
        if args.interval is not None:
            overrides["sample_interval"] = args.interval
        if args.width is not None:
            overrides["sample_width"] = args.width
        if args.calibration_window is not None:
            overrides["calibration_window"] = args.calibration_window
        if overrides:
            config.detector = replace(config.detector, **overrides)

        config.mirror = not args.no_mirror
        config.print_template = not args.no_template
        return config


# Default singleton: import and use directly, or override in tests.
default_config = AppConfig()
