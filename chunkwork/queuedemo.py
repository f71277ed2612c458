"""Exercise a bounded queue with pairs of inserting and removing threads."""

from __future__ import annotations

import re
import sys
import threading

from .queue import BoundedQueue

_LEADING_INT = re.compile(r"\s*[+-]?\d+")


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group()) if match else 0


def run_queue_demo(num_threads: int, queue_size: int) -> int:
    """Start ``num_threads`` threads, half inserting and half removing one item.

    Returns the number of items left in the queue once all threads finish.
    """
    if num_threads < 0 or num_threads % 2:
        raise ValueError(f"number of threads must be even and non-negative, got {num_threads}")
    queue = BoundedQueue(queue_size)
    threads: list[threading.Thread] = []
    for first in range(1, num_threads + 1, 2):
        print(f"Creating threads #{first} & #{first + 1}")
        producer = threading.Thread(target=queue.insert, args=(object(),))
        consumer = threading.Thread(target=queue.remove)
        producer.start()
        consumer.start()
        threads += [producer, consumer]
    for thread in threads:
        thread.join()
    return len(queue)


def main(argv=None) -> int:
    """Run the queue demo from the command line."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2:
        print("Error - Usage: queuedemo <number of threads> <size of queue>")
        return 1
    try:
        run_queue_demo(_atoi(args[0]), _atoi(args[1]))
    except ValueError as exc:
        print(exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())