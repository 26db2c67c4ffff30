import pytest

from core.config import DetectorConfig, default_detector_config
from domain.errors import ConfigurationError


def test_defaults_are_valid():
    cfg = DetectorConfig()
    assert cfg.calibration_window == 30
    assert cfg.debounce_ticks == 3
    assert 0.1 <= cfg.sample_interval <= 0.15
    assert default_detector_config == cfg


@pytest.mark.parametrize("field, value", [
    ("significant_multiplier", 0),
    ("significant_multiplier", 0.5),
    ("hand_multiplier", -2.0),
    ("wave_multiplier", 0.0),
    ("significant_floor", 0),
    ("hand_floor", -0.01),
    ("wave_floor", 0.0),
])
def test_bad_multiplier_or_floor_fails_fast(field, value):
    with pytest.raises(ConfigurationError):
        DetectorConfig(**{field: value})


@pytest.mark.parametrize("overrides", [
    {"calibration_window": 0},
    {"sample_interval": 0},
    {"sample_stride": 0},
    {"debounce_ticks": 0},
    {"history_capacity": 0},
    {"display_cutoff": 1.5},
    {"display_cutoff": 0.7, "log_cutoff": 0.6},
    {"vocabulary": ()},
    {"hand_band": (0.9, 0.1)},
    {"center_box": (0.35, 0.2, 0.65)},
])
def test_invalid_parameters_rejected(overrides):
    with pytest.raises(ConfigurationError):
        DetectorConfig(**overrides)


def test_configuration_error_is_a_value_error():
    with pytest.raises(ValueError):
        DetectorConfig(noise_floor=-1)


def test_with_overrides_revalidates():
    cfg = DetectorConfig()
    assert cfg.with_overrides(calibration_window=20).calibration_window == 20
    with pytest.raises(ConfigurationError):
        cfg.with_overrides(wave_floor=0)
