"""Per-key modification and duration statistics."""

from __future__ import annotations

from collections import deque


class KeyStatistics:
    """Tracks how often a key is modified and a sliding window of durations.

    The window keeps ``size + 2`` samples so that the smallest and largest
    can be dropped when averaging.
    """

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError("size must not be negative")
        self.window_size = size + 2
        self._durations: deque[int] = deque(maxlen=self.window_size)
        self._modify_count = 0

    @property
    def durations(self) -> list[int]:
        """The recorded durations, oldest first."""
        return list(self._durations)

    def add_duration(self, duration: int) -> None:
        """Record a duration, dropping the oldest one once the window is full."""
        self._durations.append(duration)

    def avg_duration(self) -> int:
        """Average of the window without its minimum and maximum.

        Returns 0 until the window is full.
        """
        if len(self._durations) < self.window_size:
            return 0
        samples = self._durations
        trimmed = sum(samples) - max(samples) - min(samples)
        return trimmed // (len(samples) - 2)

    def add_modify_count(self, count: int) -> None:
        """Add ``count`` modifications."""
        self._modify_count += count

    def modify_count(self) -> int:
        """Total number of modifications recorded."""
        return self._modify_count

    def __copy__(self) -> KeyStatistics:
        clone = KeyStatistics(self.window_size - 2)
        clone._durations.extend(self._durations)
        clone._modify_count = self._modify_count
        return clone

    def __repr__(self) -> str:
        return (
            f"KeyStatistics(window_size={self.window_size}, "
            f"durations={self.durations}, modify_count={self._modify_count})"
        )