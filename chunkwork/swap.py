"""Threads moving units between shared counters under per-slot locks.

Three kinds of worker repeatedly pick two distinct random slots, lock them
in index order to avoid deadlock, and move one unit from the first slot to
the second. A shared counter caps the total number of moves. Each move
keeps the grand total unchanged, so the final difference is always zero.
"""

from __future__ import annotations

import getopt
import random
import re
import sys
import threading
from dataclasses import dataclass
from enum import Enum

USAGE = (
    "Usage:  swap [OPTION]\n"
    "Options:\n"
    "  -t n, --threads=<n>: number of threads\n"
    "  -s n, --size=<n>: array size\n"
    "  -i n, --iterations=<n>: total number of iterations\n"
    "  -h, --help: this message\n\n"
)

_SHORT_OPTIONS = "ht:s:i:"
_LONG_OPTIONS = ["threads=", "size=", "iterations=", "help"]
_LEADING_INT = re.compile(r"\s*[+-]?\d+")


@dataclass
class SwapOptions:
    """Settings for one run of the counter-swapping workers."""

    num_threads: int = 4
    size: int = 10
    iterations: int = 100000


class _Move(Enum):
    """Which arrays a worker takes a unit from and gives it to."""

    DECREASE_INCREASE = ("decrease", "increase")
    INCREASE = ("increase", "increase")
    DECREASE = ("decrease", "decrease")


class Counters:
    """Two arrays of counters shared by all workers, with one lock per slot."""

    def __init__(self, size: int, total: int) -> None:
        if size <= 0:
            raise ValueError(f"counter array size must be positive, got {size}")
        self.size = size
        self.total = total
        self.increase = [0] * size
        self.decrease = [total] * size
        self.iterations_done = 0
        self._slot_locks = [threading.Lock() for _ in range(size)]
        self._iteration_lock = threading.Lock()

    def totals(self) -> tuple[int, int, int]:
        """Return (sum of increase, sum of decrease, drift from the start total)."""
        total_increase = sum(self.increase)
        total_decrease = sum(self.decrease)
        diff = self.total * self.size - (total_increase + total_decrease)
        return total_increase, total_decrease, diff

    def _claim_iteration(self, limit: int) -> bool:
        with self._iteration_lock:
            if self.iterations_done >= limit:
                return False
            self.iterations_done += 1
            return True

    def _pick_pair(self, rng: random.Random) -> tuple[int, int]:
        while True:
            pos = rng.randrange(self.size)
            pos2 = rng.randrange(self.size)
            if pos != pos2:
                return pos, pos2

    def _work(self, move: _Move, limit: int, rng: random.Random) -> None:
        source_name, target_name = move.value
        source = getattr(self, source_name)
        target = getattr(self, target_name)
        while True:
            pos, pos2 = self._pick_pair(rng)
            low, high = sorted((pos, pos2))
            with self._slot_locks[low], self._slot_locks[high]:
                if not self._claim_iteration(limit):
                    return
                source[pos] -= 1
                target[pos2] += 1


def _leading_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group()) if match else 0


def _positive(text: str) -> int:
    value = _leading_int(text)
    if value <= 0:
        raise ValueError(f"'{text}': is not an integer > 0")
    return value


def parse_swap_options(argv) -> SwapOptions:
    """Parse ``argv`` (without the program name) into :class:`SwapOptions`.

    Help or an unknown option print the usage text and raise
    ``SystemExit(0)``; a bad number or any positional argument raise
    ``ValueError``.
    """
    try:
        opts, args = getopt.gnu_getopt(list(argv), _SHORT_OPTIONS, _LONG_OPTIONS)
    except getopt.GetoptError:
        print(USAGE, end="")
        raise SystemExit(0) from None

    options = SwapOptions()
    for flag, value in opts:
        if flag in ("-t", "--threads"):
            options.num_threads = _positive(value)
        elif flag in ("-s", "--size"):
            options.size = _positive(value)
        elif flag in ("-i", "--iterations"):
            options.iterations = _leading_int(value)
        elif flag in ("-h", "--help"):
            print(USAGE, end="")
            raise SystemExit(0)

    if args:
        listed = " ".join(f"'{arg}'" for arg in args)
        raise ValueError(f"Too many arguments: {listed}")
    return options


def _start(counters: Counters, move: _Move, options: SwapOptions) -> list[threading.Thread]:
    threads = [
        threading.Thread(
            target=counters._work,
            args=(move, options.iterations, random.Random()),
            name=f"{move.name.lower()}-{i}",
        )
        for i in range(options.num_threads)
    ]
    for thread in threads:
        thread.start()
    return threads


def run_swap(options: SwapOptions) -> Counters:
    """Run all three kinds of worker to completion and return the counters."""
    if options.size < 2:
        raise ValueError(f"array size must be at least 2 to pick two slots, got {options.size}")
    counters = Counters(options.size, options.iterations)

    threads = _start(counters, _Move.INCREASE, options)
    print(f"creating {options.num_threads} threads")
    threads += _start(counters, _Move.DECREASE_INCREASE, options)
    print(f"creating {options.num_threads} threads")
    threads += _start(counters, _Move.DECREASE, options)

    for thread in threads:
        thread.join()
    return counters


def main(argv=None) -> int:
    """Run the counter-swapping workers from the command line."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        options = parse_swap_options(args)
        counters = run_swap(options)
    except ValueError as exc:
        print(exc)
        print(USAGE, end="")
        return 3
    total_increase, total_decrease, diff = counters.totals()
    print(f"Final: increasing {total_increase} decreasing {total_decrease} diff {diff}")
    return 0


if __name__ == "__main__":
    sys.exit(main())