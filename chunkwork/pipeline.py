"""Multi-threaded chunked compression and sequential decompression of files."""

from __future__ import annotations

import os
import sys
import threading

from .archive import ArchiveError, Chunk, ChunkArchive
from .codec import CodecError, compress_chunk, decompress_chunk
from .comp_options import USAGE, CompOptions, parse_comp_options
from .queue import BoundedQueue

_STOP = object()


def _run_compression(source, archive: ChunkArchive, count: int, options: CompOptions) -> None:
    inbox = BoundedQueue(options.queue_size)
    outbox = BoundedQueue(options.queue_size)

    def read() -> None:
        produced = 0
        try:
            for num in range(count):
                offset = source.tell()
                data = source.read(options.size)
                inbox.insert(Chunk(num=num, offset=offset, data=data))
                produced += 1
        except Exception as exc:
            for _ in range(count - produced):
                outbox.insert(exc)
        finally:
            for _ in range(options.num_threads):
                inbox.insert(_STOP)

    def work() -> None:
        while True:
            item = inbox.remove()
            if item is _STOP:
                return
            try:
                outbox.insert(compress_chunk(item))
            except Exception as exc:
                outbox.insert(exc)

    threads = [threading.Thread(target=read, name="chunk-reader")]
    threads += [
        threading.Thread(target=work, name=f"chunk-worker-{i}")
        for i in range(options.num_threads)
    ]
    for thread in threads:
        thread.start()

    failure: BaseException | None = None
    for _ in range(count):
        item = outbox.remove()
        if failure is not None:
            continue
        if isinstance(item, BaseException):
            failure = item
            continue
        try:
            archive.add_chunk(item)
        except Exception as exc:
            failure = exc

    for thread in threads:
        thread.join()
    if failure is not None:
        raise failure


def compress_file(options: CompOptions) -> str:
    """Compress ``options.file`` into a chunk archive and return its path.

    The archive is ``options.out_file`` or the input name with ``.ch`` added.
    """
    out_path = options.out_file or options.file + ".ch"
    with open(options.file, "rb") as source:
        total = os.fstat(source.fileno()).st_size
        count = -(-total // options.size)
        with ChunkArchive.create(out_path) as archive:
            _run_compression(source, archive, count, options)
    return out_path


def decompress_file(options: CompOptions) -> str:
    """Restore the file stored in the archive ``options.file``; return its path.

    The output is ``options.out_file`` or the archive name without its last
    three characters.
    """
    out_path = options.out_file or options.file[:-3]
    with ChunkArchive.open(options.file) as archive, open(out_path, "wb") as target:
        for num in range(len(archive)):
            chunk = decompress_chunk(archive.get_chunk(num))
            target.seek(chunk.offset)
            target.write(chunk.data)
    return out_path


def main(argv=None) -> int:
    """Run the compressor from the command line."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        options = parse_comp_options(args)
    except ValueError as exc:
        print(exc)
        print(USAGE, end="")
        return 2

    try:
        if options.compress:
            print("Starting compression process.")
            compress_file(options)
            print("Compression process completed.")
        else:
            decompress_file(options)
    except (OSError, ArchiveError, CodecError) as exc:
        print(exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())