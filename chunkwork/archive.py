"""A file that stores a sequence of numbered data chunks.

Layout: the magic ``CHUNK``, a little-endian 32-bit chunk count, then for
each chunk a header of three little-endian 32-bit integers (size, chunk
number, offset in the uncompressed file) followed by the chunk data.
"""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass
from typing import BinaryIO

import struct

MAGIC = b"CHUNK"
_COUNT = struct.Struct("<I")
_HEADER = struct.Struct("<iii")
_COUNT_POSITION = len(MAGIC)


class ArchiveError(Exception):
    """Raised when an archive cannot be created, opened or read."""


@dataclass(frozen=True)
class Chunk:
    """A numbered piece of data taken from ``offset`` in an input file."""

    num: int
    offset: int = 0
    data: bytes = b""

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class _Entry:
    archive_offset: int
    file_offset: int
    size: int


class ChunkArchive:
    """An open chunk archive; use :meth:`create` or :meth:`open` to get one."""

    def __init__(self, path: str | os.PathLike, handle: BinaryIO, count: int,
                 entries: dict[int, _Entry]) -> None:
        self.path = os.fspath(path)
        self._handle = handle
        self._count = count
        self._entries = entries
        self._lock = threading.Lock()

    @classmethod
    def create(cls, path: str | os.PathLike) -> ChunkArchive:
        """Create an empty archive at ``path``, replacing any existing file."""
        try:
            handle = open(path, "w+b")
        except OSError as exc:
            raise ArchiveError(f"could not create file {path}: {exc.strerror}") from exc
        handle.write(MAGIC + _COUNT.pack(0))
        handle.flush()
        return cls(path, handle, 0, {})

    @classmethod
    def open(cls, path: str | os.PathLike) -> ChunkArchive:
        """Open an existing archive for reading and appending."""
        try:
            handle = open(path, "r+b")
        except OSError as exc:
            raise ArchiveError(f"could not open file {path}: {exc.strerror}") from exc
        try:
            entries, count = cls._read_index(path, handle)
        except BaseException:
            handle.close()
            raise
        return cls(path, handle, count, entries)

    @staticmethod
    def _read_index(path, handle: BinaryIO) -> tuple[dict[int, _Entry], int]:
        magic = handle.read(len(MAGIC))
        if len(magic) < len(MAGIC):
            raise ArchiveError(f"could not read {path}")
        if magic != MAGIC:
            raise ArchiveError(f"{path} is not an archive file")
        raw = handle.read(_COUNT.size)
        if len(raw) < _COUNT.size:
            raise ArchiveError(f"could not read {path}")
        (count,) = _COUNT.unpack(raw)

        entries: dict[int, _Entry] = {}
        for _ in range(count):
            raw = handle.read(_HEADER.size)
            if len(raw) < _HEADER.size:
                raise ArchiveError(f"{path} is truncated")
            size, num, offset = _HEADER.unpack(raw)
            entries[num] = _Entry(handle.tell(), offset, size)
            handle.seek(size, os.SEEK_CUR)
        return entries, count

    @property
    def closed(self) -> bool:
        return self._handle.closed

    def close(self) -> None:
        """Close the underlying file."""
        self._handle.close()

    def add_chunk(self, chunk: Chunk) -> None:
        """Append ``chunk`` to the archive and update the stored count."""
        with self._lock:
            handle = self._handle
            handle.seek(0, os.SEEK_END)
            handle.write(_HEADER.pack(chunk.size, chunk.num, chunk.offset))
            self._entries[chunk.num] = _Entry(handle.tell(), chunk.offset, chunk.size)
            handle.write(chunk.data)
            self._count += 1
            handle.seek(_COUNT_POSITION)
            handle.write(_COUNT.pack(self._count))
            handle.flush()

    def get_chunk(self, num: int) -> Chunk:
        """Read chunk ``num``.

        A chunk that is not in the archive comes back empty with offset -1.
        """
        with self._lock:
            entry = self._entries.get(num)
            if entry is None:
                return Chunk(num=num, offset=-1, data=b"")
            self._handle.seek(entry.archive_offset)
            data = self._handle.read(entry.size)
        if len(data) < entry.size:
            raise ArchiveError(f"chunk {num} in {self.path} is truncated")
        return Chunk(num=num, offset=entry.file_offset, data=data)

    def __len__(self) -> int:
        return self._count

    def __enter__(self) -> ChunkArchive:
        return self

    def __exit__(self, *args) -> None:
        self.close()