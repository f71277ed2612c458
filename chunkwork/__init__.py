"""Chunked zlib archiving with worker threads, plus concurrency exercises."""

__version__ = "0.1.0"