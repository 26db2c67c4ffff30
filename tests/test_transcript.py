import pytest

from core.transcript import (
    COMPLETION_PROMPT,
    DISCLAIMER,
    TranscriptTemplateBuilder,
    format_duration,
)
from domain.enums import GestureCategory
from domain.models import GestureEvent


def two_hand(token, t, confidence=0.8):
    return GestureEvent(
        category=GestureCategory.TWO_HAND,
        confidence=confidence,
        vocabulary_tokens=(token,),
        timestamp=t,
    )


@pytest.mark.parametrize("seconds, text", [(None, "unknown"), (0, "0:00"), (65.7, "1:05"), (600, "10:00")])
def test_format_duration(seconds, text):
    assert format_duration(seconds) == text


def test_repeats_within_window_are_consolidated():
    builder = TranscriptTemplateBuilder(consolidation_window=3.0)
    events = [two_hand("help", 10.0), two_hand("help", 11.0), two_hand("help", 15.0)]
    [summary] = builder.summarize(events)
    assert summary.token == "help"
    assert summary.count == 2
    assert summary.first_seen == 10.0
    assert summary.last_seen == 15.0


def test_tokens_below_log_cutoff_are_not_listed():
    builder = TranscriptTemplateBuilder(min_confidence=0.4, token_confidence=0.6)
    events = [two_hand("need", 1.0, confidence=0.5), two_hand("please", 2.0, confidence=0.7)]
    assert [s.token for s in builder.summarize(events)] == ["please"]


def test_summary_keeps_first_appearance_order_and_best_confidence():
    builder = TranscriptTemplateBuilder()
    events = [two_hand("b", 5.0, 0.7), two_hand("a", 1.0, 0.65), two_hand("b", 20.0, 0.9)]
    summaries = builder.summarize(events)
    assert [s.token for s in summaries] == ["a", "b"]
    assert summaries[1].best_confidence == 0.9


def test_build_lists_markers_and_disclaimer():
    builder = TranscriptTemplateBuilder()
    events = [
        two_hand("hello", 100.0),
        GestureEvent(GestureCategory.WAVE, 0.9, timestamp=102.0),
        two_hand("problem", 170.0),
    ]
    text = builder.build(events, duration=75.0)

    assert text.startswith("COMPLAINT TEMPLATE (manual completion required)")
    assert DISCLAIMER in text
    assert "- Duration: 1:15" in text
    assert "- Gesture events: 3" in text
    assert "- Movement types: two-hand x2, wave x1" in text
    assert "Placeholder markers (token: occurrences, first seen):" in text
    assert "- hello: 1 (at 0:00)" in text
    assert "- problem: 1 (at 1:10)" in text
    assert text.rstrip().endswith(COMPLETION_PROMPT)


def test_build_without_tokens_says_so():
    events = [GestureEvent(GestureCategory.BODY_MOVEMENT, 0.55, timestamp=1.0)]
    text = TranscriptTemplateBuilder().build(events)
    assert "No placeholder markers were recorded." in text
    assert "- Duration: unknown" in text


def test_empty_session_uses_fallback():
    events = [GestureEvent.none(1.0), GestureEvent(GestureCategory.WAVE, 0.3, timestamp=2.0)]
    text = TranscriptTemplateBuilder().build(events, duration=12)
    assert "No hand movement was detected clearly enough to summarise." in text
    assert "- Duration: 0:12" in text
    assert COMPLETION_PROMPT in text
