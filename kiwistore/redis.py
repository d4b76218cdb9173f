"""A single storage instance and its in-memory bookkeeping caches."""

from __future__ import annotations

import copy
import re

from kiwistore.lru_cache import LRUCache
from kiwistore.options import StorageOptions
from kiwistore.statistics import KeyStatistics

_U64_MAX = (1 << 64) - 1
_UNSIGNED_RE = re.compile(r"\+?[0-9]+")

DEFAULT_STATISTICS_CAPACITY = 10000
DEFAULT_SCAN_CURSORS_CAPACITY = 5000
DEFAULT_SPOP_COUNTS_CAPACITY = 1000
DEFAULT_SMALL_COMPACTION_THRESHOLD = 5000
DEFAULT_SMALL_COMPACTION_DURATION_THRESHOLD = 10000
STATISTICS_WINDOW = 10


class KeyNotFoundError(LookupError):
    """Raised when a looked-up key is absent."""

    def __init__(self, key: str) -> None:
        super().__init__(f"key not found: {key!r}")
        self.key = key


def _lossy_text(value: bytes | str) -> str:
    if isinstance(value, str):
        return value
    return bytes(value).decode("utf-8", errors="replace")


def _parse_u64(text: str) -> int:
    """Parse an unsigned 64-bit integer, falling back to 0 on any error."""
    if not _UNSIGNED_RE.fullmatch(text):
        return 0
    value = int(text)
    return value if value <= _U64_MAX else 0


def _check_unsigned(name: str, value: int) -> None:
    if value < 0:
        raise ValueError(f"{name} must not be negative")


class Redis:
    """One storage instance: key statistics, scan cursors and compaction thresholds."""

    def __init__(self, index: int) -> None:
        self.index = index
        self.need_close = False
        self.is_starting = True
        self.statistics_store: LRUCache[str, KeyStatistics] = LRUCache(
            DEFAULT_STATISTICS_CAPACITY
        )
        self.scan_cursors_store: LRUCache[str, int] = LRUCache(
            DEFAULT_SCAN_CURSORS_CAPACITY
        )
        self.spop_counts_store: LRUCache[str, int] = LRUCache(
            DEFAULT_SPOP_COUNTS_CAPACITY
        )
        self.small_compaction_threshold = DEFAULT_SMALL_COMPACTION_THRESHOLD
        self.small_compaction_duration_threshold = (
            DEFAULT_SMALL_COMPACTION_DURATION_THRESHOLD
        )

    def apply_options(self, options: StorageOptions) -> None:
        """Take over the instance settings carried by ``options``."""
        self.small_compaction_threshold = options.small_compaction_threshold
        self.statistics_store.capacity = options.statistics_max_size
        self.is_starting = False

    def update_specific_key_statistics(self, tag: str, key: str, count: int) -> None:
        """Record ``count`` modifications of ``key`` of the type ``tag``."""
        if (
            self.statistics_store.capacity == 0
            or count == 0
            or self.small_compaction_threshold == 0
        ):
            return
        stats = self._current_statistics(tag + key)
        stats.add_modify_count(count)
        self._store_statistics(tag, key, stats)

    def update_specific_key_duration(self, tag: str, key: str, duration: int) -> None:
        """Record one operation on ``key`` of the type ``tag`` that took ``duration``."""
        if (
            self.statistics_store.capacity == 0
            or duration == 0
            or self.small_compaction_duration_threshold == 0
        ):
            return
        stats = self._current_statistics(tag + key)
        stats.add_duration(duration)
        self._store_statistics(tag, key, stats)

    def _current_statistics(self, lookup_key: str) -> KeyStatistics:
        existing = self.statistics_store.lookup(lookup_key)
        if existing is None:
            return KeyStatistics(STATISTICS_WINDOW)
        return copy.copy(existing)

    def _store_statistics(self, tag: str, key: str, stats: KeyStatistics) -> None:
        self.statistics_store.insert(tag + key, stats, 1)
        self._add_compact_key_task_if_needed(
            tag, key, stats.modify_count(), stats.avg_duration()
        )

    def _add_compact_key_task_if_needed(
        self, tag: str, key: str, total: int, duration: int
    ) -> None:
        if (
            total < self.small_compaction_threshold
            or duration < self.small_compaction_duration_threshold
        ):
            return
        # The key is due for compaction; its statistics start afresh.
        self.statistics_store.remove(tag + key)

    @staticmethod
    def _scan_index_key(
        tag: str, key: bytes | str, pattern: bytes | str, cursor: int
    ) -> str:
        return f"{tag}_{_lossy_text(key)}_{_lossy_text(pattern)}_{cursor}\0"

    def get_scan_start_point(
        self, tag: str, key: bytes | str, pattern: bytes | str, cursor: int
    ) -> str:
        """Return the stored start point for a scan, or raise KeyNotFoundError."""
        index_key = self._scan_index_key(tag, key, pattern, cursor)
        point = self.scan_cursors_store.lookup(index_key)
        if point is None:
            raise KeyNotFoundError(index_key)
        return str(point)

    def store_scan_next_point(
        self,
        tag: str,
        key: bytes | str,
        pattern: bytes | str,
        cursor: int,
        next_point: str,
    ) -> None:
        """Remember where a scan continues; an unparsable point is stored as 0."""
        index_key = self._scan_index_key(tag, key, pattern, cursor)
        self.scan_cursors_store.insert(index_key, _parse_u64(next_point), 1)

    def set_max_cache_statistic_keys(self, max_cache_statistic_keys: int) -> None:
        """Limit how many keys have statistics kept."""
        _check_unsigned("max_cache_statistic_keys", max_cache_statistic_keys)
        self.statistics_store.capacity = max_cache_statistic_keys

    def set_small_compaction_threshold(self, threshold: int) -> None:
        """Set the modification count that makes a key due for compaction."""
        _check_unsigned("threshold", threshold)
        self.small_compaction_threshold = threshold

    def set_small_compaction_duration_threshold(self, threshold: int) -> None:
        """Set the average duration that makes a key due for compaction."""
        _check_unsigned("threshold", threshold)
        self.small_compaction_duration_threshold = threshold