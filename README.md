# kiwistore

kiwistore holds the in-memory parts of a storage engine for a Redis-compatible server.

- `kiwistore.lru_cache.LRUCache` is a least-recently-used cache. Each entry carries a *charge*. When the total charge goes above the capacity, the cache evicts entries, least recently used first. `size`, `usage` and `capacity` are properties. Assigning to `capacity` evicts at once whatever no longer fits. `items()` lists `(key, value)` pairs, most recently used first.
- `kiwistore.hyperloglog` provides the following:
  - `HyperLogLog`, a sketch with 2^14 six-bit registers. It offers `add`, `add_all`, `merge`, `count`, `register`, `to_bytes` and `from_bytes`. The last two work on the 12288-byte dense packed form.
  - `merged_count`, which estimates the size of the union of several sketches.
  - `murmurhash64a`, the 64-bit hash the sketch uses.
- `kiwistore.statistics.KeyStatistics` counts a key's modifications. It also keeps a sliding window of `size + 2` durations. `avg_duration()` gives the average of a full window with the smallest and largest samples left out, and gives 0 until the window is full.
- `kiwistore.columns` holds the following:
  - `ColumnFamilyIndex`, the column-family positions. Each member's `cf_name` gives the name of its family.
  - `COLUMN_FAMILY_OPEN_ORDER`.
  - `format_rocksdb_info(properties, prefix)`, which renders a mapping of engine property values as an INFO section.
- `kiwistore.options` holds the following:
  - `StorageOptions`, a dataclass of engine defaults. It raises `ValueError` for negative sizes, and for `raft_timeout_s` or `db_id` values that fall outside their integer range.
  - The `ColumnFamilyType` enum.
- `kiwistore.redis.Redis` does one instance's bookkeeping:
  - per-key statistics held in an `LRUCache`, with the compaction thresholds they are checked against;
  - memoised scan cursors;
  - `apply_options` and the threshold setters.

  `get_scan_start_point` raises `KeyNotFoundError` when no start point is stored.

## Installation

```
pip install .
```

With the test dependencies:

```
pip install .[test]
```

## Usage

```python
from kiwistore.lru_cache import LRUCache

cache = LRUCache(10)
cache.insert("k1", "v1", 4)
cache.insert("k2", "v2", 7)   # total charge 11 > 10: "k1" is evicted
assert cache.lookup("k1") is None
assert cache.lookup("k2") == "v2"
assert cache.usage == 7
cache.capacity = 5            # "k2" no longer fits and is evicted
assert len(cache) == 0
```

```python
from kiwistore.hyperloglog import HyperLogLog, merged_count

a = HyperLogLog()
a.add_all([b"apple", b"banana", b"cherry"])
b = HyperLogLog()
b.add_all([b"cherry", b"date"])
print(a.count())             # about 3
print(merged_count([a, b]))  # about 4

restored = HyperLogLog.from_bytes(a.to_bytes())
assert restored.count() == a.count()
```

```python
from kiwistore.redis import Redis, KeyNotFoundError

db = Redis(0)
db.store_scan_next_point("h", b"myhash", b"*", 0, "42")
assert db.get_scan_start_point("h", b"myhash", b"*", 0) == "42"
try:
    db.get_scan_start_point("h", b"myhash", b"*", 7)
except KeyNotFoundError:
    pass
```

## What this package does not do

- It does not store data on disk.
- It does not open or manage a database.
- It does not carry out data commands such as hashes, lists, sets, sorted sets or key deletion.
- It does not serve clients over the network.
- `StorageOptions.options` is a plain dictionary of engine settings. Nothing in the package applies it.
- `format_rocksdb_info` only formats property values that the caller supplies.
- `Redis` works out when a key is due for compaction, but it compacts nothing. It only resets that key's statistics.

## Running the tests

```
pytest
```