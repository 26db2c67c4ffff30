"""
TemporalAggregator: decides which classifier output is kept.

Two cutoffs:
  - display: events above it go into the RecognitionHistory (and the overlay log)
  - log:     events above it have their vocabulary tokens handed to the
             transcript-template builder
Held (debounced repeat) events never enter the history; they only keep the
live overlay steady.
"""
from __future__ import annotations
from typing import List, Optional, Tuple

from domain.models import GestureEvent
from core.history import RecognitionHistory


class TemporalAggregator:

    def __init__(
        self,
        history: Optional[RecognitionHistory] = None,
        display_cutoff: float = 0.4,
        log_cutoff: float = 0.6,
    ) -> None:
        self._history = history if history is not None else RecognitionHistory()
        self._display_cutoff = display_cutoff
        self._log_cutoff = log_cutoff

    # ------------------------------------------------------------------
    def ingest(self, event: GestureEvent) -> bool:
        """Append `event` if it qualifies. Returns True when it was appended."""
        if not event.is_gesture or event.held:
            return False
        if event.confidence <= self._display_cutoff:
            return False
        self._history.append(event)
        return True

    def logged_events(self) -> Tuple[GestureEvent, ...]:
        return tuple(e for e in self._history.snapshot() if e.confidence > self._log_cutoff)

    def logged_tokens(self) -> List[str]:
        """Vocabulary tokens of every event above the log cutoff, in order."""
        return [token for e in self.logged_events() for token in e.vocabulary_tokens]

    def session_events(self) -> Tuple[GestureEvent, ...]:
        return self._history.snapshot()

    @property
    def history(self) -> RecognitionHistory:
        return self._history

    @property
    def log_cutoff(self) -> float:
        return self._log_cutoff

    def clear(self) -> None:
        self._history.clear()
