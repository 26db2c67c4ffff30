from enum import Enum


class GestureCategory(str, Enum):
    """Coarse gesture categories produced by the classifier."""
    NONE                 = "none"
    WAVE                 = "wave"
    TWO_HAND             = "two-hand"
    SINGLE_HAND_DOMINANT = "single-hand-dominant"
    GENERIC_HAND         = "generic-hand"
    BODY_MOVEMENT        = "body-movement"


class DetectorState(str, Enum):
    """Lifecycle of the detection loop."""
    IDLE        = "IDLE"
    CALIBRATING = "CALIBRATING"
    READY       = "READY"


class TickStatus(str, Enum):
    """Outcome of a single sampling tick."""
    OK               = "OK"
    CALIBRATING      = "CALIBRATING"
    SOURCE_NOT_READY = "SOURCE_NOT_READY"
    DEGENERATE_FRAME = "DEGENERATE_FRAME"
    BUSY             = "BUSY"
    STOPPED          = "STOPPED"
    ERROR            = "ERROR"
