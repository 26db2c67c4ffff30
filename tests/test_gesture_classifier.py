import pytest

from core.config import DetectorConfig
from core.debouncer import Debouncer
from core.gesture_classifier import GestureClassifier
from domain.enums import GestureCategory
from domain.models import MotionSample
from conftest import right_zone_sample

QUIET = MotionSample.empty(sampled_count=10000)


def sample(active=0, left=0, right=0, center=0, edge=0, sampled=10000):
    return MotionSample.from_counts(active, sampled, left, right, center, edge)


# ---- debouncer ------------------------------------------------------------
def test_debouncer_starts_inactive_and_holds_for_window():
    debouncer = Debouncer(window=3)
    assert not debouncer.active
    assert debouncer.update(True)
    assert debouncer.update(False)
    assert debouncer.update(False)
    assert not debouncer.update(False)


# ---- categories -----------------------------------------------------------
def test_quiet_sample_is_none(config, thresholds):
    event = GestureClassifier(config).classify(QUIET, thresholds, timestamp=0.0)
    assert event.category is GestureCategory.NONE
    assert event.confidence == 0.0


def test_single_right_hand_is_dominant(config, thresholds):
    event = GestureClassifier(config).classify(right_zone_sample(0.05), thresholds, 1.0)
    assert event.category is GestureCategory.SINGLE_HAND_DOMINANT
    assert event.hand_presence.left is False
    assert event.hand_presence.right is True
    assert 0.5 <= event.confidence <= 0.8
    assert event.vocabulary_tokens == ()


def test_waving_takes_precedence(config, thresholds):
    s = sample(active=600, left=0, right=500, edge=400)
    event = GestureClassifier(config).classify(s, thresholds, 1.0)
    assert event.category is GestureCategory.WAVE
    assert event.confidence <= 0.95


def test_edge_motion_without_hands_is_not_a_wave(config, thresholds):
    s = sample(active=400, edge=400, center=0)
    event = GestureClassifier(config).classify(s, thresholds, 1.0)
    assert event.category is GestureCategory.NONE


def test_two_hands_with_intensity_get_a_placeholder_token(config, thresholds):
    s = sample(active=800, left=300, right=300, center=200)
    classifier = GestureClassifier(config)
    event = classifier.classify(s, thresholds, 1.0)
    assert event.category is GestureCategory.TWO_HAND
    assert event.hand_presence.left and event.hand_presence.right
    assert event.confidence <= 0.9
    assert event.vocabulary_tokens == (config.vocabulary[1],)


def test_two_hands_below_intensity_fall_through_to_generic(config, thresholds):
    # motion 0.025 > 0.015 but not > 2 x 0.015
    s = sample(active=250, left=120, right=130)
    event = GestureClassifier(config).classify(s, thresholds, 1.0)
    assert event.category is GestureCategory.GENERIC_HAND
    assert event.confidence <= 0.75


def test_torso_only_is_body_movement(config, thresholds):
    s = sample(active=300, center=300)
    event = GestureClassifier(config).classify(s, thresholds, 1.0)
    assert event.category is GestureCategory.BODY_MOVEMENT
    assert event.confidence <= 0.6
    assert event.vocabulary_tokens == ()


def test_vocabulary_is_round_robin_over_detections(config, thresholds):
    cfg = DetectorConfig(vocabulary=("a", "b", "c"), debounce_ticks=1)
    classifier = GestureClassifier(cfg)
    two_hands = sample(active=800, left=300, right=300)
    tokens = []
    for t in range(6):
        tokens.extend(classifier.classify(two_hands, thresholds, float(t)).vocabulary_tokens)
    assert tokens == ["b", "c", "a", "b", "c", "a"]
    assert classifier.detection_count == 6


def test_confidence_formula(config, thresholds):
    # motion just over threshold: base = 0.2 + 0.3 * (0.016 - 0.005) / 0.015 = 0.42
    event = GestureClassifier(config).classify(sample(active=160, center=160), thresholds, 1.0)
    assert event.confidence == pytest.approx(0.42)


# ---- debounce through the classifier --------------------------------------
def test_isolated_spike_stays_active_for_k_minus_one_ticks(config, thresholds):
    classifier = GestureClassifier(config)                # K = 3
    first = classifier.classify(right_zone_sample(0.05), thresholds, 0.0)
    assert first.category is GestureCategory.SINGLE_HAND_DOMINANT

    held = [classifier.classify(QUIET, thresholds, float(t)) for t in (1, 2)]
    for event in held:
        assert event.category is GestureCategory.SINGLE_HAND_DOMINANT
        assert event.held
        assert event.confidence < first.confidence

    after = classifier.classify(QUIET, thresholds, 3.0)
    assert after.category is GestureCategory.NONE
    assert not classifier.active


def test_none_confidence_decays_to_zero(config, thresholds):
    classifier = GestureClassifier(config)
    classifier.classify(right_zone_sample(0.05), thresholds, 0.0)
    confidences = [classifier.classify(QUIET, thresholds, float(t)).confidence
                   for t in range(1, config.decay_ticks + 2)]
    nones = confidences[config.debounce_ticks - 1:]
    assert all(a >= b for a, b in zip(nones, nones[1:]))
    assert confidences[-1] == 0.0


def test_reset_restarts_counters(config, thresholds):
    classifier = GestureClassifier(config)
    classifier.classify(sample(active=800, left=300, right=300), thresholds, 0.0)
    classifier.reset()
    assert classifier.detection_count == 0
    assert not classifier.active
