#!/usr/bin/env python3
"""
Generate a value file made of runs, for exercising runseq.py.

Arguments:
  num_runs         Number of runs
  mean_run         Mean run length in elements
  distinct         Number of distinct values to draw from
  [out_path]       Output file (default: runs.txt)

Consecutive runs always hold different values (when distinct > 1), so the
file bulk-builds into exactly num_runs runs.

Usage:
  python gen_runs.py 1000 64 10
  python gen_runs.py 100000 8 3 big.txt
"""

import array
import os
import random
import sys

# Flush the output buffer once it holds this many lines.
_FLUSH_LINES = 1_000_000


def _gen_lengths(rng, n, lo, hi):
    """Return an array.array('I') of n random run lengths in [lo, hi]."""
    return array.array('I', (rng.randint(lo, hi) for _ in range(n)))


def _gen_values(rng, n, distinct):
    """Return n values in [0, distinct) with no two neighbours equal."""
    values = array.array('I')
    prev = None
    for _ in range(n):
        v = rng.randrange(distinct)
        if v == prev and distinct > 1:
            v = (v + rng.randrange(1, distinct)) % distinct
        values.append(v)
        prev = v
    return values


def _write(lengths, values, out_path):
    """Write one element per line, buffering to keep memory bounded."""
    total = 0
    with open(out_path, 'w', encoding='utf-8') as f:
        buf = []
        for length, v in zip(lengths, values):
            buf.extend([f"{v}\n"] * length)
            total += length
            if len(buf) >= _FLUSH_LINES:
                f.write(''.join(buf))
                buf = []
        if buf:
            f.write(''.join(buf))
    return total


def main():
    if len(sys.argv) < 4:
        print(__doc__.strip(), file=sys.stderr)
        sys.exit(1)

    n        = int(sys.argv[1])
    mean_run = int(sys.argv[2])
    distinct = int(sys.argv[3])
    out_path = sys.argv[4] if len(sys.argv) > 4 else "runs.txt"

    if n < 0 or mean_run < 1 or distinct < 1:
        sys.exit("num_runs must be >= 0; mean_run and distinct must be >= 1")

    os.makedirs(os.path.dirname(os.path.abspath(out_path)), exist_ok=True)

    rng = random.Random(42)
    lo  = max(1, mean_run // 2)
    hi  = max(lo, mean_run * 3 // 2)

    lengths = _gen_lengths(rng, n, lo, hi)
    values  = _gen_values(rng, n, distinct)
    total   = _write(lengths, values, out_path)

    print(f"runs:       {n}")
    print(f"mean run:   {mean_run} elements")
    print(f"distinct:   {distinct} values")
    print(f"out:        {out_path}  ({total:,} elements)")


if __name__ == "__main__":
    main()
