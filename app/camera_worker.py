"""
CameraWorker: runs the whole detection pipeline in a QThread and forwards
its output as Qt signals, so a Qt overlay never touches detector state.

Keeps processing fully separate from the GUI.
"""
from __future__ import annotations
import time
from typing import Optional

from PyQt6.QtCore import QThread, pyqtSignal

from app.config import AppConfig
from core.camera import Camera
from core.detector import GestureDetector
from core.frame_sampler import FrameSource
from core.transcript import TranscriptTemplateBuilder
from domain.enums import DetectorState
from domain.errors import DetectorError
from strategies import create_strategy


class CameraWorker(QThread):
    """
    QThread that runs the detection loop.

    Signals:
        tick_ready     : TickResult of every tick (status, state, event, sample)
        event_fired    : GestureEvent that made it into the history
        status_msg     : status line for a log panel
        template_ready : transcript template compiled when the loop ends
    """

    tick_ready     = pyqtSignal(object)     # TickResult
    event_fired    = pyqtSignal(object)     # GestureEvent
    status_msg     = pyqtSignal(str)
    template_ready = pyqtSignal(str)

    def __init__(
        self,
        config: AppConfig,
        source: Optional[FrameSource] = None,
        parent=None,
    ) -> None:
        super().__init__(parent)
        self._config = config
        self._source = source
        self._detector: Optional[GestureDetector] = None
        self._stop_pending = False

    # ------------------------------------------------------------------
    def run(self) -> None:
        """Main loop, runs in the worker thread."""
        cfg = self._config
        camera: Optional[Camera] = None

        try:
            detector = GestureDetector(
                cfg.detector, strategy=create_strategy(cfg.strategy, cfg.detector),
            )
            source = self._source
            if source is None:
                camera = Camera(cfg.camera_device)
                source = camera
        except DetectorError as exc:
            self.status_msg.emit(f"[ERROR] setup: {exc}")
            return

        detector.add_listener(self._on_tick)
        detector.add_event_listener(self.event_fired.emit)
        detector.add_status_listener(self.status_msg.emit)
        self._detector = detector

        self.status_msg.emit("✅ Detection started")
        started = time.time()
        try:
            if not self._stop_pending:
                detector.run(source)
        finally:
            events = detector.history()
            detector.close()
            if camera is not None:
                camera.release()

        template = TranscriptTemplateBuilder(
            min_confidence=cfg.detector.display_cutoff,
            token_confidence=cfg.detector.log_cutoff,
        ).build(events, duration=time.time() - started)
        self.template_ready.emit(template)
        self.status_msg.emit("🛑 Detection stopped")

    def _on_tick(self, result) -> None:
        self.tick_ready.emit(result)
        if self._stop_pending:
            self._detector.stop()

    # ------------------------------------------------------------------
    def request_stop(self) -> None:
        """Ask the loop to finish after its current tick; returns immediately."""
        self._stop_pending = True

    def recalibrate(self) -> None:
        """Restart calibration, e.g. when the user retakes a recording."""
        if self._detector is not None and self._detector.state is not DetectorState.IDLE:
            self._detector.restart()

    def stop(self) -> None:
        self.request_stop()
        self.wait(3000)  # wait up to 3 s for the loop to end

    @property
    def detector(self) -> Optional[GestureDetector]:
        return self._detector
