"""
main.py: Application entry point.

Clean pipeline, no globals, no mixed concerns:

    Camera → FrameSampler → DetectionStrategy → TemporalAggregator
          → GestureEvent listeners → overlay / transcript template

The detector loop runs in the main thread (OpenCV windows want that) and
calls back into the overlay after every tick.
"""
from __future__ import annotations
import time
from typing import Optional, Sequence

from app.config import AppConfig
from app.ui import OpenCVUI
from core.camera import Camera
from core.detector import GestureDetector
from core.transcript import TranscriptTemplateBuilder
from domain.errors import DetectorError
from domain.models import GestureEvent, TickResult
from strategies import create_strategy

_KEY_ESC = 27


def build_detector(config: AppConfig) -> GestureDetector:
    """Wire a detector from the app config; fails fast on invalid parameters."""
    strategy = create_strategy(config.strategy, config.detector)
    detector = GestureDetector(config.detector, strategy=strategy)
    detector.add_status_listener(print)
    detector.add_event_listener(_print_event)
    return detector


def _print_event(event: GestureEvent) -> None:
    tokens = f" markers={list(event.vocabulary_tokens)}" if event.vocabulary_tokens else ""
    print(f"[EVENT] {event.category.value} ({event.confidence:.0%}){tokens}")


def run(config: AppConfig) -> Optional[str]:
    print("=" * 55)
    print("  HAND ACTIVITY DETECTOR: movement only, no translation")
    print("=" * 55)
    print(f"  Source   : {config.camera_device}")
    print(f"  Strategy : {config.strategy}")
    print(f"  Interval : {config.detector.sample_interval * 1000:.0f} ms")
    print("  Press ESC to quit, R to recalibrate")
    print("=" * 55 + "\n")

    try:
        detector = build_detector(config)
        camera = Camera(config.camera_device)
    except DetectorError as exc:
        print(f"[ERROR] {exc}")
        return None

    ui = OpenCVUI(config)
    started = time.time()

    def on_tick(result: TickResult) -> None:
        ui.render(result, detector.calibration_progress)
        key = ui.poll_key()
        if key == _KEY_ESC:
            detector.stop()
        elif key in (ord("r"), ord("R")):
            detector.restart()

    detector.add_listener(on_tick)

    try:
        detector.run(camera)
    except KeyboardInterrupt:
        detector.stop()
    finally:
        events = detector.history()
        detector.close()
        camera.release()
        ui.close()
        print("\n✓ Detector stopped cleanly")

    template = TranscriptTemplateBuilder(
        min_confidence=config.detector.display_cutoff,
        token_confidence=config.detector.log_cutoff,
    ).build(events, duration=time.time() - started)
    if config.print_template:
        print("\n" + template)
    return template


def main(argv: Optional[Sequence[str]] = None) -> None:
    run(AppConfig.from_args(argv))


if __name__ == "__main__":
    main()
