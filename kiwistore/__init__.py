"""In-memory storage-engine building blocks: LRU cache, HyperLogLog, key statistics, options."""

__version__ = "0.1.0"
__all__ = ["columns", "hyperloglog", "lru_cache", "options", "redis", "statistics"]