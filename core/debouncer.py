"""
Debouncer: temporal filter that keeps a gesture "active" for a few ticks
after the last significant motion, so a single noisy frame neither starts
nor ends a gesture on its own.
"""
from __future__ import annotations


class Debouncer:
    """
    Counts ticks since the last significant motion.

    Parameters
    ----------
    window : int
        K: the gesture stays active while the counter is below K.
        With K=3 an isolated spike is active on its own tick and the
        K-1 ticks that follow.
    """

    def __init__(self, window: int = 3) -> None:
        self._window = window
        self._since_motion = window     # start inactive

    # ------------------------------------------------------------------
    def update(self, significant: bool) -> bool:
        """Feed one tick. Returns whether a gesture is active after it."""
        if significant:
            self._since_motion = 0
        else:
            self._since_motion += 1
        return self.active

    @property
    def active(self) -> bool:
        return self._since_motion < self._window

    @property
    def ticks_since_motion(self) -> int:
        return self._since_motion

    def reset(self) -> None:
        self._since_motion = self._window
