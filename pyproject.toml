[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kiwistore"
version = "0.1.0"
description = "In-memory storage-engine building blocks for a Redis-compatible server: LRU cache, HyperLogLog sketches, key statistics and options"
requires-python = ">=3.10"
dependencies = []
keywords = ["redis", "storage", "lru", "cache", "hyperloglog", "database"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Database Engines/Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["kiwistore"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
