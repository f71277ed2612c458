"""Command-line options of the chunk compressor."""

from __future__ import annotations

import getopt
import re
from dataclasses import dataclass

CHUNK_SIZE = 1024 * 1024
QUEUE_SIZE = 20
DEFAULT_THREADS = 3

USAGE = (
    "Usage:  comp [-c | -d] [OPTIONS] FILE\n"
    "Options:\n"
    "  -c,       --compress       compress FILE\n"
    "  -d,       --decompress     decompress FILE\n"
    "  -q n,     --queue_size=n   size of the work queue\n"
    "  -t n,     --threads=n      number of threads\n"
    "  -s n,     --size=n         size of each chunk\n"
    "  -o ofile, --out=ofile      name of the output file\n"
    "  -h,       --help           this message\n\n"
)

_SHORT_OPTIONS = "hcdq:t:o:s:"
_LONG_OPTIONS = [
    "threads=",
    "size=",
    "queue_size=",
    "compress=",
    "decompress=",
    "out=",
    "help",
]
_LEADING_INT = re.compile(r"\s*[+-]?\d+")


@dataclass
class CompOptions:
    """Settings for one compression or decompression run."""

    file: str
    compress: bool = True
    num_threads: int = DEFAULT_THREADS
    size: int = CHUNK_SIZE
    queue_size: int = QUEUE_SIZE
    out_file: str | None = None


def _leading_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group()) if match else 0


def _positive(text: str) -> int:
    value = _leading_int(text)
    if value <= 0:
        raise ValueError(f"'{text}': is not a valid integer")
    return value


def parse_comp_options(argv) -> CompOptions:
    """Parse ``argv`` (without the program name) into :class:`CompOptions`.

    Help, an unknown option or a missing FILE print the usage text and raise
    ``SystemExit(0)``; a bad number or extra arguments raise ``ValueError``.
    """
    try:
        opts, args = getopt.gnu_getopt(list(argv), _SHORT_OPTIONS, _LONG_OPTIONS)
    except getopt.GetoptError:
        print(USAGE, end="")
        raise SystemExit(0) from None

    settings: dict = {}
    for flag, value in opts:
        if flag in ("-t", "--threads"):
            settings["num_threads"] = _positive(value)
        elif flag in ("-s", "--size"):
            settings["size"] = _positive(value)
        elif flag in ("-q", "--queue_size"):
            settings["queue_size"] = _positive(value)
        elif flag in ("-c", "--compress"):
            settings["compress"] = True
        elif flag in ("-d", "--decompress"):
            settings["compress"] = False
        elif flag in ("-o", "--out"):
            settings["out_file"] = value
        elif flag in ("-h", "--help"):
            print(USAGE, end="")
            raise SystemExit(0)

    if not args:
        print(USAGE, end="")
        raise SystemExit(0)
    if len(args) > 1:
        listed = " ".join(f"'{arg}'" for arg in args)
        raise ValueError(f"Too many arguments: {listed}")
    return CompOptions(file=args[0], **settings)