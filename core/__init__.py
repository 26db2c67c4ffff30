from core.aggregator import TemporalAggregator
from core.calibrator import BaselineCalibrator
from core.camera import Camera
from core.config import DetectorConfig, default_detector_config
from core.debouncer import Debouncer
from core.frame_sampler import FrameSampler
from core.gesture_classifier import GestureClassifier
from core.history import RecognitionHistory
from core.motion_detector import MotionDetector
from core.transcript import TranscriptTemplateBuilder

__all__ = [
    "Camera",
    "FrameSampler",
    "MotionDetector",
    "BaselineCalibrator",
    "Debouncer",
    "GestureClassifier",
    "RecognitionHistory",
    "TemporalAggregator",
    "TranscriptTemplateBuilder",
    "DetectorConfig",
    "default_detector_config",
]
