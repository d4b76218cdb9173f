"""Column family layout and engine property reporting."""

from __future__ import annotations

import enum
from typing import Mapping


class ColumnFamilyIndex(enum.IntEnum):
    """Positions of the column family handles."""

    META_CF = 0
    HASHES_DATA_CF = 1
    SETS_DATA_CF = 2
    LISTS_DATA_CF = 3
    ZSETS_DATA_CF = 4
    ZSETS_SCORE_CF = 5

    @property
    def cf_name(self) -> str:
        """Name of the column family in the engine."""
        return _CF_NAMES[self]


_CF_NAMES = {
    ColumnFamilyIndex.META_CF: "default",
    ColumnFamilyIndex.HASHES_DATA_CF: "hash_data_cf",
    ColumnFamilyIndex.SETS_DATA_CF: "set_data_cf",
    ColumnFamilyIndex.LISTS_DATA_CF: "list_data_cf",
    ColumnFamilyIndex.ZSETS_DATA_CF: "zset_data_cf",
    ColumnFamilyIndex.ZSETS_SCORE_CF: "zset_score_cf",
}

# Order in which column families are opened.
COLUMN_FAMILY_OPEN_ORDER = (
    ColumnFamilyIndex.META_CF,
    ColumnFamilyIndex.HASHES_DATA_CF,
    ColumnFamilyIndex.LISTS_DATA_CF,
    ColumnFamilyIndex.SETS_DATA_CF,
    ColumnFamilyIndex.ZSETS_DATA_CF,
    ColumnFamilyIndex.ZSETS_SCORE_CF,
)

# (engine property, reported metric), in report order.
ROCKSDB_INFO_PROPERTIES = (
    ("rocksdb.num-immutable-mem-table", "num_immutable_mem_table"),
    ("rocksdb.num-immutable-mem-table-flushed", "num_immutable_mem_table_flushed"),
    ("rocksdb.mem-table-flush-pending", "mem_table_flush_pending"),
    ("rocksdb.num-running-flushes", "num_running_flushes"),
    ("rocksdb.compaction-pending", "compaction_pending"),
    ("rocksdb.num-running-compactions", "num_running_compactions"),
    ("rocksdb.background-errors", "background_errors"),
    ("rocksdb.cur-size-active-mem-table", "cur_size_active_mem_table"),
    ("rocksdb.cur-size-all-mem-tables", "cur_size_all_mem_tables"),
    ("rocksdb.size-all-mem-tables", "size_all_mem_tables"),
    ("rocksdb.estimate-num-keys", "estimate_num_keys"),
    ("rocksdb.estimate-table-readers-mem", "estimate_table_readers_mem"),
    ("rocksdb.num-snapshots", "num_snapshots"),
    ("rocksdb.num-live-versions", "num_live_versions"),
    ("rocksdb.current-super-version-number", "current_super_version_number"),
    ("rocksdb.estimate-live-data-size", "estimate_live_data_size"),
    ("rocksdb.total-sst-files-size", "total_sst_files_size"),
    ("rocksdb.live-sst-files-size", "live_sst_files_size"),
    ("rocksdb.estimate-pending-compaction-bytes", "estimate_pending_compaction_bytes"),
    ("rocksdb.block-cache-capacity", "block_cache_capacity"),
    ("rocksdb.block-cache-usage", "block_cache_usage"),
    ("rocksdb.block-cache-pinned-usage", "block_cache_pinned_usage"),
    ("rocksdb.num-blob-files", "num_blob_files"),
    ("rocksdb.blob-stats", "blob_stats"),
    ("rocksdb.total-blob-file-size", "total_blob_file_size"),
    ("rocksdb.live-blob-file-size", "live_blob_file_size"),
)


def format_rocksdb_info(properties: Mapping[str, object] | None, prefix: str) -> str:
    """Render engine properties as an INFO section.

    ``properties`` maps engine property names to their values; properties
    that are absent are left out. With no properties at all (no open
    database) the result is empty.
    """
    if properties is None:
        return ""
    lines = [f"#{prefix}RocksDB\r\n"]
    lines.extend(
        f"{prefix}{metric}: {properties[name]}\r\n"
        for name, metric in ROCKSDB_INFO_PROPERTIES
        if name in properties
    )
    return "".join(lines)