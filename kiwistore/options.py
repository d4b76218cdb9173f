"""Storage engine options."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

_U32_MAX = 0xFFFFFFFF
_I32_MIN = -(1 << 31)
_I32_MAX = (1 << 31) - 1


class ColumnFamilyType(enum.Enum):
    """Which column families an operation touches."""

    META = "meta"
    DATA = "data"
    META_AND_DATA = "meta_and_data"


def _default_engine_options() -> dict[str, Any]:
    return {
        "create_if_missing": True,
        "max_open_files": 10000,
        "write_buffer_size": 64 << 20,
        "max_write_buffer_number": 3,
        "target_file_size_base": 64 << 20,
        "level_compaction_dynamic_level_bytes": True,
    }


@dataclass
class StorageOptions:
    """Tunables for the storage engine and its instances."""

    options: dict[str, Any] = field(default_factory=_default_engine_options)
    block_cache_size: int = 8 << 30
    share_block_cache: bool = True
    statistics_max_size: int = 0
    small_compaction_threshold: int = 5000
    small_compaction_duration_threshold: int = 10000
    db_instance_num: int = 3
    db_id: int = 0
    raft_timeout_s: int = _U32_MAX
    max_gap: int = 1000
    mem_manager_size: int = 100_000_000

    def __post_init__(self) -> None:
        for name in (
            "block_cache_size",
            "statistics_max_size",
            "small_compaction_threshold",
            "small_compaction_duration_threshold",
            "db_instance_num",
            "mem_manager_size",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")
        if not 0 <= self.raft_timeout_s <= _U32_MAX:
            raise ValueError("raft_timeout_s must fit in an unsigned 32-bit integer")
        if not _I32_MIN <= self.db_id <= _I32_MAX:
            raise ValueError("db_id must fit in a signed 32-bit integer")