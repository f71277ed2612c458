"""Data-parallel computations split across a fixed number of workers.

Each worker plays the part of one process of a group: it gets a rank in
``range(size)`` and handles only its share of the work. The results are
combined afterwards.
"""

from __future__ import annotations

import math
import sys
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

DEFAULT_WORKERS = 4

_PROMPT = "--Enter the number of intervals: (0 quits)--"


def _check_group(rank: int, size: int) -> None:
    if size <= 0:
        raise ValueError(f"group size must be positive, got {size}")
    if not 0 <= rank < size:
        raise ValueError(f"rank {rank} is outside a group of {size}")


def partial_pi_sum(intervals: int, rank: int, size: int) -> float:
    """Sum 4 / (1 + x**2) over the midpoints of this rank's intervals.

    Rank ``r`` of ``size`` takes intervals ``r + 1, r + 1 + size, ...`` up to
    ``intervals``. The sum is not yet scaled by the interval width.
    """
    _check_group(rank, size)
    if intervals <= 0:
        return 0.0
    width = 1.0 / intervals
    total = 0.0
    for i in range(rank + 1, intervals + 1, size):
        x = width * (i - 0.5)
        total += 4.0 / (1.0 + x * x)
    return total


def approximate_pi(intervals: int, workers: int) -> float:
    """Approximate pi by the midpoint rule with ``intervals`` steps on ``workers`` workers."""
    if intervals <= 0:
        raise ValueError(f"number of intervals must be positive, got {intervals}")
    if workers <= 0:
        raise ValueError(f"number of workers must be positive, got {workers}")
    with ThreadPoolExecutor(max_workers=workers) as pool:
        sums = list(pool.map(lambda rank: partial_pi_sum(intervals, rank, workers),
                             range(workers)))
    return flat_tree_reduce(sums, 0) / intervals


def binomial_broadcast_schedule(size: int, root: int) -> list[list[tuple[int, int]]]:
    """Return the rounds of a binomial-tree broadcast from ``root``.

    Each round is a list of ``(sender, receiver)`` pairs. In round ``k`` every
    rank that already holds the data (relative rank below ``2**k``) sends it
    to the rank ``2**k`` places further on, if that rank exists.
    """
    _check_group(root, size)
    rounds: list[list[tuple[int, int]]] = []
    reach = 1
    while reach < size:
        sends = [
            ((relative + root) % size, (relative + reach + root) % size)
            for relative in range(reach)
            if relative + reach < size
        ]
        rounds.append(sends)
        reach *= 2
    return rounds


def flat_tree_reduce(values: Sequence[float], root: int) -> float:
    """Sum the value of every rank at ``root``.

    ``values[r]`` is the contribution of rank ``r``. The root's own value is
    taken first, then the others in rank order.
    """
    _check_group(root, len(values))
    total = float(values[root])
    for rank, value in enumerate(values):
        if rank != root:
            total += value
    return total


def distribute_rows(n: int, size: int) -> tuple[int, int]:
    """Split ``n`` rows evenly over ``size`` ranks.

    Returns ``(rows_per_rank, padding_rows)``: when ``n`` does not divide
    evenly each rank gets one row more and the matrix is padded with
    ``padding_rows`` empty rows so all blocks are the same size.
    """
    if n < 0:
        raise ValueError(f"number of rows must not be negative, got {n}")
    if size <= 0:
        raise ValueError(f"group size must be positive, got {size}")
    rows_per_rank, remainder = divmod(n, size)
    if remainder:
        rows_per_rank += 1
    return rows_per_rank, size * rows_per_rank - n


def mat_vec(matrix: Sequence[Sequence[float]], vector: Sequence[float],
            workers: int) -> list[float]:
    """Multiply a square ``matrix`` by ``vector``, one block of rows per worker."""
    n = len(vector)
    if len(matrix) != n or any(len(row) != n for row in matrix):
        raise ValueError(f"matrix must be {n}x{n} to match the vector")
    rows_per_rank, padding = distribute_rows(n, workers)
    padded = [list(map(float, row)) for row in matrix]
    padded += [[0.0] * n for _ in range(padding)]
    blocks = [padded[rank * rows_per_rank:(rank + 1) * rows_per_rank]
              for rank in range(workers)]
    values = [float(v) for v in vector]

    def compute(block: list[list[float]]) -> list[float]:
        return [sum(a * b for a, b in zip(row, values)) for row in block]

    with ThreadPoolExecutor(max_workers=workers) as pool:
        gathered = [value for part in pool.map(compute, blocks) for value in part]
    return gathered[:n]


def pi_main(argv=None) -> int:
    """Read interval counts from standard input and print pi approximations.

    An optional argument gives the number of workers. Entering 0, or the end
    of input, stops the loop.
    """
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) > 1:
        print("Usage: pi [workers]")
        return 2
    try:
        workers = int(args[0]) if args else DEFAULT_WORKERS
        if workers <= 0:
            raise ValueError
    except ValueError:
        print(f"'{args[0]}': is not an integer > 0")
        return 2

    while True:
        print(_PROMPT)
        line = sys.stdin.readline()
        if not line:
            return 0
        try:
            intervals = int(line.strip())
        except ValueError:
            print(f"'{line.strip()}': is not a valid integer")
            return 1
        if intervals == 0:
            return 0
        if intervals < 0:
            print(f"'{intervals}': is not an integer > 0")
            continue
        pi = approximate_pi(intervals, workers)
        print(f"<> pi is approximately {pi:.16f}, Error is {abs(pi - math.pi):.16f} <>\n")


if __name__ == "__main__":
    sys.exit(pi_main())