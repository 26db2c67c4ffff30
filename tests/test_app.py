import pytest

from app.config import AppConfig
from domain.errors import ConfigurationError
from conftest import FakeSource, blank


# ---- AppConfig.from_args -----------------------------------------------------
def test_from_args_defaults():
    config = AppConfig.from_args([])
    assert config.camera_device == 0
    assert config.strategy == "heuristic-motion"
    assert config.mirror and config.print_template
    assert config.detector.calibration_window == 30


def test_from_args_overrides_detector_tunables():
    config = AppConfig.from_args([
        "--camera", "clip.mp4", "--strategy", "landmark-model",
        "--interval", "0.1", "--calibration-window", "20", "--no-mirror",
    ])
    assert config.camera_device == "clip.mp4"
    assert config.strategy == "landmark-model"
    assert config.detector.sample_interval == 0.1
    assert config.detector.calibration_window == 20
    assert not config.mirror


def test_from_args_numeric_camera_index():
    assert AppConfig.from_args(["--camera", "2"]).camera_device == 2


def test_from_args_invalid_tunable_fails_fast():
    with pytest.raises(ConfigurationError):
        AppConfig.from_args(["--calibration-window", "0"])


# ---- CameraWorker --------------------------------------------------------------
@pytest.fixture(scope="module")
def qt_app():
    QtCore = pytest.importorskip("PyQt6.QtCore")
    return QtCore.QCoreApplication.instance() or QtCore.QCoreApplication([])


def test_worker_runs_pipeline_and_emits_template(qt_app):
    from app.camera_worker import CameraWorker

    config = AppConfig()
    config.detector = config.detector.with_overrides(sample_interval=0.005)

    def stop_after(index):
        if index == 4:
            worker.request_stop()

    worker = CameraWorker(config, source=FakeSource([blank()], on_read=stop_after))
    ticks, statuses, templates = [], [], []
    worker.tick_ready.connect(ticks.append)
    worker.status_msg.connect(statuses.append)
    worker.template_ready.connect(templates.append)

    worker.run()                        # synchronously, in this thread

    assert len(ticks) == 5
    assert any("[STATE] IDLE → CALIBRATING" in s for s in statuses)
    assert worker.detector.state.value == "IDLE"
    assert len(templates) == 1
    assert "No hand movement was detected" in templates[0]


def test_worker_reports_setup_errors(qt_app):
    from app.camera_worker import CameraWorker

    config = AppConfig(strategy="does-not-exist")
    worker = CameraWorker(config, source=FakeSource([blank()]))
    statuses, templates = [], []
    worker.status_msg.connect(statuses.append)
    worker.template_ready.connect(templates.append)

    worker.run()

    assert statuses and statuses[0].startswith("[ERROR] setup:")
    assert templates == []


# ---- overlay -------------------------------------------------------------------
def test_overlay_draws_in_place_without_a_window():
    from app.ui import OpenCVUI
    from domain.enums import DetectorState, GestureCategory, TickStatus
    from domain.models import GestureEvent, HandPresence, TickResult

    event = GestureEvent(
        GestureCategory.TWO_HAND, 0.8,
        hand_presence=HandPresence(left=True, right=True),
        vocabulary_tokens=("hello",),
    )
    result = TickResult(TickStatus.OK, DetectorState.READY, event=event)
    canvas = blank(size=200, value=0)

    out = OpenCVUI(AppConfig()).draw(canvas, result)
    assert out is canvas
    assert canvas.any()
