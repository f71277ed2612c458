"""Compression and decompression of chunks with zlib."""

from __future__ import annotations

import zlib

from .archive import Chunk


class CodecError(Exception):
    """Raised when chunk data cannot be compressed or decompressed."""


def compress_chunk(chunk: Chunk) -> Chunk:
    """Return a copy of ``chunk`` whose data is zlib-compressed at the best level."""
    try:
        data = zlib.compress(chunk.data, zlib.Z_BEST_COMPRESSION)
    except zlib.error as exc:
        raise CodecError(f"error compressing data: {exc}") from exc
    return Chunk(num=chunk.num, offset=chunk.offset, data=data)


def decompress_chunk(chunk: Chunk) -> Chunk:
    """Return a copy of ``chunk`` whose zlib-compressed data is expanded."""
    try:
        data = zlib.decompress(chunk.data)
    except zlib.error as exc:
        raise CodecError(f"error decompressing data: {exc}") from exc
    return Chunk(num=chunk.num, offset=chunk.offset, data=data)