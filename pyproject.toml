[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cachesim"
version = "0.1.0"
description = "Trace-driven set-associative cache simulator with FIFO, LRU and random replacement"
requires-python = ">=3.10"
dependencies = []
keywords = ["cache", "simulator", "computer-architecture", "lru", "fifo", "memory"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
cache_simulator = "cachesim.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["cachesim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
