"""
TranscriptTemplateBuilder: compiles a session's gesture history into a
template the user completes by hand.

The detector never recognises signs, so the output says so explicitly: the
vocabulary tokens are listed as placeholder markers with counts and times,
never stitched into sentences that could pass for a translation.
"""
from __future__ import annotations
from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence

from domain.enums import GestureCategory
from domain.models import GestureEvent, TokenSummary

DISCLAIMER = (
    "This template was generated from hand-movement detection only. "
    "The markers below are placeholders, not a translation of what was signed."
)
COMPLETION_PROMPT = "Please describe your complaint in your own words:"


def format_duration(seconds: Optional[float]) -> str:
    """M:SS, or "unknown" when no duration is available."""
    if seconds is None:
        return "unknown"
    total = max(0, int(seconds))
    return f"{total // 60}:{total % 60:02d}"


class TranscriptTemplateBuilder:
    """
    Parameters
    ----------
    consolidation_window : float
        Repeats of the same token closer together than this (seconds) count
        as one occurrence.
    min_confidence : float
        Events at or below this confidence are ignored.
    token_confidence : float
        Only events above this confidence contribute vocabulary tokens
        (the aggregator's log cutoff).
    """

    def __init__(
        self,
        consolidation_window: float = 3.0,
        min_confidence: float = 0.4,
        token_confidence: float = 0.6,
    ) -> None:
        self._window = consolidation_window
        self._min_confidence = min_confidence
        self._token_confidence = max(token_confidence, min_confidence)

    # ------------------------------------------------------------------
    def summarize(self, events: Iterable[GestureEvent]) -> List[TokenSummary]:
        """Distinct tokens in order of first appearance."""
        order: List[str] = []
        stats: Dict[str, dict] = {}

        for event in self._usable(events):
            if event.confidence <= self._token_confidence:
                continue
            for token in event.vocabulary_tokens:
                entry = stats.get(token)
                if entry is None:
                    order.append(token)
                    stats[token] = {
                        "count": 1,
                        "first_seen": event.timestamp,
                        "last_seen": event.timestamp,
                        "best_confidence": event.confidence,
                    }
                    continue
                if event.timestamp - entry["last_seen"] >= self._window:
                    entry["count"] += 1
                entry["last_seen"] = event.timestamp
                entry["best_confidence"] = max(entry["best_confidence"], event.confidence)

        return [TokenSummary(token=token, **stats[token]) for token in order]

    def category_counts(self, events: Iterable[GestureEvent]) -> Dict[GestureCategory, int]:
        counts = Counter(e.category for e in self._usable(events) if e.is_gesture)
        return dict(counts)

    def build(self, events: Sequence[GestureEvent], duration: Optional[float] = None) -> str:
        usable = self._usable(events)
        if not usable:
            return self.fallback(duration)

        start = usable[0].timestamp
        counts = self.category_counts(usable)
        tokens = self.summarize(usable)
        average = sum(e.confidence for e in usable) / len(usable)

        lines = [
            "COMPLAINT TEMPLATE (manual completion required)",
            "",
            DISCLAIMER,
            "",
            "Recording details:",
            f"- Duration: {format_duration(duration)}",
            f"- Gesture events: {len(usable)}",
            f"- Average detection confidence: {average:.0%}",
        ]
        if counts:
            breakdown = ", ".join(
                f"{category.value} x{count}"
                for category, count in sorted(counts.items(), key=lambda item: -item[1])
            )
            lines.append(f"- Movement types: {breakdown}")

        lines.append("")
        if tokens:
            lines.append("Placeholder markers (token: occurrences, first seen):")
            for summary in tokens:
                lines.append(
                    f"- {summary.token}: {summary.count} "
                    f"(at {format_duration(summary.first_seen - start)})"
                )
        else:
            lines.append("No placeholder markers were recorded.")

        lines += ["", COMPLETION_PROMPT, ""]
        return "\n".join(lines)

    def fallback(self, duration: Optional[float] = None) -> str:
        """Template used when the session produced no usable gesture events."""
        return "\n".join([
            "COMPLAINT TEMPLATE (manual completion required)",
            "",
            "No hand movement was detected clearly enough to summarise.",
            "",
            "Recording details:",
            f"- Duration: {format_duration(duration)}",
            "- Recording method: sign language video",
            "",
            COMPLETION_PROMPT,
            "",
        ])

    # ------------------------------------------------------------------
    def _usable(self, events: Iterable[GestureEvent]) -> List[GestureEvent]:
        kept = [e for e in events if e.is_gesture and e.confidence > self._min_confidence]
        return sorted(kept, key=lambda e: e.timestamp)
