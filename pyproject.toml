[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chunkwork"
version = "0.1.0"
description = "Chunked multi-threaded zlib archiving, a bounded blocking queue, and small concurrency and parallel-computation exercises"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "compression",
    "zlib",
    "archive",
    "chunks",
    "threads",
    "producer-consumer",
    "bounded-queue",
    "concurrency",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Archiving :: Compression",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
chunkwork-comp = "chunkwork.pipeline:main"
chunkwork-queuedemo = "chunkwork.queuedemo:main"
chunkwork-swap = "chunkwork.swap:main"
chunkwork-pi = "chunkwork.parallel:pi_main"

[tool.hatch.build.targets.wheel]
packages = ["chunkwork"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
