"""
GestureDetector: the single entry point for gesture detection.

    source → FrameSampler → DetectionStrategy → TemporalAggregator → listeners

State machine:

    IDLE ──open/start/run──▶ CALIBRATING ──baseline learned──▶ READY
      ▲                           ▲                              │
      └────────── stop ───────────┴──── restart / new size ──────┘

The loop is driven by a fixed-period timer, independent of the source's own
frame rate. Ticks never overlap; a tick requested while another one is still
running returns TickStatus.BUSY without touching any state. Per-session state
(previous frame, calibration window, counters) lives inside the strategy and
is reset on open and restart.
"""
from __future__ import annotations
import threading
import time
from typing import Callable, List, Optional, Tuple

from core.aggregator import TemporalAggregator
from core.config import DetectorConfig, default_detector_config
from core.frame_sampler import FrameSampler, FrameSource
from core.history import RecognitionHistory
from domain.enums import DetectorState, TickStatus
from domain.models import GestureEvent, TickResult
from strategies.base import DetectionStrategy
from strategies.heuristic import HeuristicMotionStrategy

TickListener = Callable[[TickResult], None]
EventListener = Callable[[GestureEvent], None]
StatusListener = Callable[[str], None]


class GestureDetector:
    """
    Usage
    -----
    detector = GestureDetector(config)
    detector.add_event_listener(overlay.on_event)
    detector.start(camera)          # background thread
    ...
    detector.stop()
    template = builder.build(detector.history())

    Parameters
    ----------
    config : DetectorConfig
    strategy : DetectionStrategy, optional
        Defaults to HeuristicMotionStrategy(config).
    aggregator : TemporalAggregator, optional
        Defaults to one with a history of config.history_capacity and the
        configured display/log cutoffs.
    """

    def __init__(
        self,
        config: DetectorConfig = default_detector_config,
        strategy: Optional[DetectionStrategy] = None,
        aggregator: Optional[TemporalAggregator] = None,
    ) -> None:
        self._cfg = config
        self._strategy = strategy if strategy is not None else HeuristicMotionStrategy(config)
        self._aggregator = aggregator if aggregator is not None else TemporalAggregator(
            RecognitionHistory(config.history_capacity),
            display_cutoff=config.display_cutoff,
            log_cutoff=config.log_cutoff,
        )

        self._state = DetectorState.IDLE
        self._sampler: Optional[FrameSampler] = None
        self._thread: Optional[threading.Thread] = None
        self._loop_thread: Optional[threading.Thread] = None
        self._tick_thread: Optional[threading.Thread] = None
        self._resetting_thread: Optional[threading.Thread] = None
        self._restart_pending = False
        self._looping = False
        self._loop_done = threading.Event()
        self._stop_requested = threading.Event()
        self._busy = threading.Lock()        # held for the duration of one tick
        self._control = threading.Lock()     # open / stop bookkeeping

        self._tick_listeners:   List[TickListener]   = []
        self._event_listeners:  List[EventListener]  = []
        self._status_listeners: List[StatusListener] = []

    # ---- lifecycle -----------------------------------------------------
    def open(self, source: FrameSource) -> None:
        """
        Attach `source` and begin a session without a timer loop.
        For callers that drive tick() from their own timer.
        """
        with self._control:
            self._open(source, looping=False)

    def start(self, source: FrameSource) -> None:
        """Begin sampling `source` on a background thread."""
        with self._control:
            self._open(source, looping=True)
            self._thread = threading.Thread(
                target=self._loop, name="gesture-detector", daemon=True,
            )
            self._thread.start()

    def run(self, source: FrameSource) -> None:
        """Run the sampling loop in the calling thread until stop() is called."""
        with self._control:
            self._open(source, looping=True)
        self._loop()

    def stop(self) -> None:
        """
        Cancel the pending timer wait and drop the source; no tick fires afterwards.

        From another thread this blocks until the loop has finished its
        current tick. From the loop thread itself (a listener, or the source
        during a tick) it only flags the loop, which tears down on exit.
        """
        with self._control:
            if self._sampler is None:
                return
            self._stop_requested.set()
            looping = self._looping
            thread = self._thread

        if looping:
            if self._loop_thread is threading.current_thread():
                return
            self._loop_done.wait()
            if thread is not None and thread is not threading.current_thread():
                thread.join()
            self._thread = None
            return

        if self._tick_thread is threading.current_thread():
            return                           # tick() tears down once it returns
        with self._busy:
            self._teardown()

    def restart(self) -> None:
        """
        Full per-session reset (e.g. the user retakes a recording); re-enters
        CALIBRATING. From inside a tick (an event or status listener, or the
        source) the reset is deferred until the tick has finished.
        """
        if self._sampler is None:
            raise RuntimeError("restart() requires an open detector")
        if threading.current_thread() in (self._tick_thread, self._resetting_thread):
            self._restart_pending = True
            return
        if not self._apply_restart():
            raise RuntimeError("restart() requires an open detector")

    def close(self) -> None:
        """stop() and release strategy resources (models, trackers)."""
        self.stop()
        self._strategy.close()

    def __enter__(self) -> "GestureDetector":
        return self

    def __exit__(self, *_) -> None:
        self.close()

    # ---- one sampling cycle -------------------------------------------
    def tick(self) -> TickResult:
        """
        Process exactly one sampling cycle synchronously.
        Normally called by the loop; exposed for callers that drive their own timer.
        """
        if self._stop_requested.is_set() or self._sampler is None:
            return TickResult(status=TickStatus.STOPPED, detector_state=self._state)

        if not self._busy.acquire(blocking=False):
            return TickResult(status=TickStatus.BUSY, detector_state=self._state)
        self._tick_thread = threading.current_thread()
        try:
            result = self._process()
        except Exception as exc:
            result = TickResult(
                status=TickStatus.ERROR,
                detector_state=self._state,
                message=f"{type(exc).__name__}: {exc}",
            )
            self._emit_status(f"[ERROR] tick failed: {result.message}")
        finally:
            self._tick_thread = None
            self._busy.release()

        self._notify(result)
        if self._restart_pending:
            self._restart_pending = False
            if not self._stop_requested.is_set():
                self._apply_restart()
        if self._stop_requested.is_set() and not self._looping:
            with self._control, self._busy:
                if self._sampler is not None:
                    self._teardown()
        return result

    # ---- listeners -----------------------------------------------------
    def add_listener(self, callback: TickListener) -> None:
        """Called with every TickResult (overlay, debug views)."""
        self._tick_listeners.append(callback)

    def add_event_listener(self, callback: EventListener) -> None:
        """Called with every gesture event that made it into the history."""
        self._event_listeners.append(callback)

    def add_status_listener(self, callback: StatusListener) -> None:
        """Called with human-readable status lines ([STATE], [CALIB], [WARN], ...)."""
        self._status_listeners.append(callback)

    # ---- read-only views -----------------------------------------------
    @property
    def state(self) -> DetectorState:
        return self._state

    @property
    def running(self) -> bool:
        return self._looping

    @property
    def calibrated(self) -> bool:
        return self._strategy.calibrated

    @property
    def calibration_progress(self) -> float:
        return self._strategy.calibration_progress

    @property
    def strategy(self) -> DetectionStrategy:
        return self._strategy

    @property
    def aggregator(self) -> TemporalAggregator:
        return self._aggregator

    @property
    def config(self) -> DetectorConfig:
        return self._cfg

    def history(self) -> Tuple[GestureEvent, ...]:
        """Immutable snapshot of the recognition history."""
        return self._aggregator.session_events()

    # ------------------------------------------------------------------
    def _open(self, source: FrameSource, looping: bool) -> None:
        if self._sampler is not None:
            raise RuntimeError("detector already open; call stop() first")
        self._stop_requested.clear()
        self._sampler = FrameSampler(source, self._cfg.sample_width)
        self._looping = looping
        if looping:
            self._loop_done.clear()
        self._reset_session()

    def _apply_restart(self) -> bool:
        """Reset under the tick lock. False when the source was dropped meanwhile."""
        with self._busy:
            if self._sampler is None:
                return False
            self._resetting_thread = threading.current_thread()
            try:
                self._reset_session()
            finally:
                self._resetting_thread = None
        self._emit_status("[CALIB] restarted, hold still while the baseline is learned")
        return True

    def _reset_session(self) -> None:
        self._restart_pending = False
        self._strategy.reset()
        self._aggregator.clear()
        self._set_state(
            DetectorState.READY if self._strategy.calibrated else DetectorState.CALIBRATING
        )

    def _teardown(self) -> None:
        if self._sampler is not None:
            self._sampler.release()
        self._sampler = None
        self._strategy.reset()
        self._restart_pending = False
        self._set_state(DetectorState.IDLE)

    def _loop(self) -> None:
        self._loop_thread = threading.current_thread()
        interval = self._cfg.sample_interval
        try:
            while not self._stop_requested.is_set():
                started = time.monotonic()
                self.tick()
                remaining = interval - (time.monotonic() - started)
                if self._stop_requested.wait(max(0.0, remaining)):
                    break
        finally:
            with self._busy:
                self._teardown()
            self._loop_thread = None
            self._looping = False
            self._loop_done.set()

    def _process(self) -> TickResult:
        sampler = self._sampler
        frame = sampler.sample() if sampler is not None else None
        if frame is None:
            return TickResult(status=TickStatus.SOURCE_NOT_READY, detector_state=self._state)

        outcome = self._strategy.process(frame)

        if outcome.status is TickStatus.DEGENERATE_FRAME:
            self._emit_status(
                f"[WARN] frame size changed to {frame.width}x{frame.height}, recalibrating"
            )
            self._set_state(DetectorState.CALIBRATING)
        elif self._state is DetectorState.CALIBRATING and self._strategy.calibrated:
            baseline = self._strategy.baseline
            if baseline is not None:
                self._emit_status(f"[CALIB] baseline motion learned: {baseline:.4f}")
            self._set_state(DetectorState.READY)

        event = outcome.event
        if outcome.status is TickStatus.OK and self._aggregator.ingest(event):
            for callback in list(self._event_listeners):
                self._call_listener(callback, event)

        return TickResult(
            status=outcome.status,
            detector_state=self._state,
            event=event,
            sample=outcome.sample,
            frame=frame,
        )

    def _set_state(self, new_state: DetectorState) -> None:
        if new_state is self._state:
            return
        old, self._state = self._state, new_state
        self._emit_status(f"[STATE] {old.value} → {new_state.value}")

    def _notify(self, result: TickResult) -> None:
        for callback in list(self._tick_listeners):
            self._call_listener(callback, result)

    def _call_listener(self, callback: Callable, payload) -> None:
        try:
            callback(payload)
        except Exception as exc:
            self._emit_status(f"[ERROR] listener {callback!r} failed: {exc}")

    def _emit_status(self, message: str) -> None:
        for callback in list(self._status_listeners):
            try:
                callback(message)
            except Exception as exc:
                print(f"[ERROR] status listener {callback!r} failed: {exc}")
