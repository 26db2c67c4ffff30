import pytest

from core.aggregator import TemporalAggregator
from core.history import RecognitionHistory
from domain.enums import GestureCategory
from domain.models import GestureEvent


def event(confidence, category=GestureCategory.TWO_HAND, tokens=("hello",), t=0.0, held=False):
    return GestureEvent(
        category=category,
        confidence=confidence,
        vocabulary_tokens=tokens,
        timestamp=t,
        held=held,
    )


# ---- history ---------------------------------------------------------------
def test_history_evicts_oldest_first():
    history = RecognitionHistory(capacity=3)
    events = [event(0.9, t=float(i)) for i in range(5)]
    for e in events:
        history.append(e)
    assert len(history) == 3
    assert history.snapshot() == tuple(events[2:])


def test_snapshot_is_immutable_and_detached():
    history = RecognitionHistory(capacity=10)
    history.append(event(0.9))
    snap = history.snapshot()
    assert isinstance(snap, tuple)
    history.append(event(0.8))
    assert len(snap) == 1
    assert len(list(history)) == 2


def test_clear_empties_history():
    history = RecognitionHistory(capacity=2)
    history.append(event(0.9))
    history.clear()
    assert len(history) == 0
    assert history.capacity == 2


# ---- aggregator -------------------------------------------------------------
@pytest.mark.parametrize("confidence, kept", [(0.3, False), (0.4, False), (0.41, True), (0.9, True)])
def test_display_cutoff(confidence, kept):
    aggregator = TemporalAggregator()
    assert aggregator.ingest(event(confidence)) is kept
    assert len(aggregator.session_events()) == int(kept)


def test_none_and_held_events_are_skipped():
    aggregator = TemporalAggregator()
    assert not aggregator.ingest(GestureEvent.none(0.0, confidence=0.9))
    assert not aggregator.ingest(event(0.9, held=True))
    assert aggregator.session_events() == ()


def test_tokens_only_from_events_above_log_cutoff():
    aggregator = TemporalAggregator(display_cutoff=0.4, log_cutoff=0.6)
    aggregator.ingest(event(0.5, tokens=("please",)))
    aggregator.ingest(event(0.7, tokens=("hello",)))
    aggregator.ingest(event(0.95, category=GestureCategory.WAVE, tokens=()))
    assert len(aggregator.session_events()) == 3
    assert len(aggregator.logged_events()) == 2
    assert aggregator.logged_tokens() == ["hello"]


def test_shared_history_and_clear():
    history = RecognitionHistory(capacity=5)
    aggregator = TemporalAggregator(history)
    aggregator.ingest(event(0.9))
    assert aggregator.history is history
    assert len(history) == 1
    aggregator.clear()
    assert len(history) == 0
