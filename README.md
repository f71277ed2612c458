# chunkwork

Split a file into fixed-size chunks, compress them with zlib on several
worker threads, and store them in a single chunk archive that can be
restored later. The package also contains the pieces this is built from,
a bounded blocking queue and a chunk archive format, plus a few small
concurrency and parallel-computation exercises.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Compressing and decompressing files

```
chunkwork-comp [-c | -d] [OPTIONS] FILE
```

| Option | Meaning | Default |
| --- | --- | --- |
| `-c` | compress `FILE` | yes |
| `-d` | decompress `FILE` | |
| `-q n`, `--queue_size=n` | capacity of each work queue | 20 |
| `-t n`, `--threads=n` | number of compression threads | 3 |
| `-s n`, `--size=n` | chunk size in bytes | 1048576 |
| `-o ofile`, `--out=ofile` | name of the output file | see below |
| `-h`, `--help` | show the usage message | |

The long forms `--compress` and `--decompress` exist too, but they
require an argument, which is ignored (`--decompress=yes`). Written
without one, they are rejected like any other unknown option.

Numbers are read from their leading digits; a value that is not a
positive integer is reported as invalid and the command exits with
status 2. Help, an unknown option or a missing `FILE` print the usage
text and exit with status 0. Errors while reading or writing files are
printed and the command exits with status 1.

When compressing, the output defaults to `FILE.ch`. When decompressing,
the output defaults to `FILE` with its last three characters removed, so
`data.bin.ch` is restored to `data.bin`.

Compression runs as a pipeline: one thread reads the input into chunks
and places them on an input queue, the worker threads compress chunks
from that queue onto an output queue, and the calling thread writes the
compressed chunks into the archive. Each chunk records its position in
the original file, so decompression restores the data exactly even
though chunks may be stored in the order the workers finish them.
Decompression reads the chunks one after another on a single thread.

```
chunkwork-comp -t 4 -s 65536 big.log
chunkwork-comp -d big.log.ch -o restored.log
```

## Using the library

```python
from chunkwork.archive import Chunk, ChunkArchive
from chunkwork.codec import compress_chunk, decompress_chunk

with ChunkArchive.create("example.ch") as archive:
    chunk = Chunk(num=0, offset=0, data=b"hello " * 100)
    archive.add_chunk(compress_chunk(chunk))

with ChunkArchive.open("example.ch") as archive:
    restored = decompress_chunk(archive.get_chunk(0))
    print(len(archive), restored.size, restored.data[:6])
```

- `chunkwork.archive.ChunkArchive` stores numbered chunks. `create`
  replaces any existing file, `open` reads the index of an existing one,
  `add_chunk` appends a chunk and updates the stored count, and
  `get_chunk` reads one back; a chunk number that is not in the archive
  comes back as an empty chunk with offset -1. Problems with the file
  raise `ArchiveError`.
- `chunkwork.archive.Chunk` is a frozen dataclass with `num`, `offset`
  and `data`; its `size` property is the length of `data`.
- `chunkwork.codec.compress_chunk` and `decompress_chunk` return new
  chunks with zlib-compressed (best level) or expanded data and raise
  `CodecError` on bad input.
- `chunkwork.queue.BoundedQueue` is a fixed-capacity FIFO: `insert`
  blocks while the queue is full and `remove` blocks while it is empty;
  `len()` gives the number of items held.
- `chunkwork.pipeline.compress_file` and `decompress_file` run the whole
  job and return the output path. They take a
  `chunkwork.comp_options.CompOptions`, which
  `chunkwork.comp_options.parse_comp_options` builds from a list of
  command-line arguments.

## Exercises

### Queue demo

```
chunkwork-queuedemo <number of threads> <size of queue>
```

Starts pairs of threads on a shared `BoundedQueue`, one inserting and one
removing an element, and waits for them all to finish. The number of
threads must be even. `chunkwork.queuedemo.run_queue_demo` does the same
and returns the number of items left in the queue.

### Swap counters

```
chunkwork-swap [-t n] [-s n] [-i n]
```

Three groups of threads (`-t`, default 4 in each group) repeatedly move
one unit between two distinct, randomly chosen slots of two counter
arrays of size `-s` (default 10, at least 2), sharing a global budget of
`-i` moves (default 100000). Slots are locked in index order to avoid
deadlock. At the end the totals are printed together with their
difference from the starting sum, which is always 0.
`chunkwork.swap.run_swap` returns the `Counters`, whose `totals()` gives
the same three numbers.

### Pi approximation

```
chunkwork-pi [workers]
```

Reads numbers of intervals from standard input, approximates pi by the
midpoint rule split across `workers` threads (default 4), and prints the
result and its error. Entering 0, or the end of input, quits.

The module `chunkwork.parallel` also provides `approximate_pi`,
`partial_pi_sum`, a binomial-tree broadcast schedule
(`binomial_broadcast_schedule`), a flat-tree sum (`flat_tree_reduce`),
row distribution with padding (`distribute_rows`) and a row-partitioned
matrix–vector product (`mat_vec`).

## What the package does not do

The parallel exercises run as threads inside one Python process. There is
no message passing between separate processes or machines:
`binomial_broadcast_schedule` only lists who would send to whom, and
`flat_tree_reduce` sums values that are already in one list. The
matrix–vector product has no command of its own and does not time its
steps.