#!/usr/bin/env python3
"""
Run-Compressed Sequences

A finite ordered sequence stored as a sorted collection of disjoint runs
[start, end), each holding one representative value.  After repeated range
assignments most of a sequence collapses into a few long runs, so memory and
operation cost follow the number of runs R rather than the number of
elements n.

Operations:
  - append         extend the tail run or start a new one
  - split          materialize a run boundary at an index
  - assign         overwrite a range with one value (amortized collapse)
  - map            transform representative values (whole / ranged)
  - fold, sum      aggregate over runs, weighted by run length
  - iterate        expand runs back into elements

Usage:
  python runseq.py info   <input>
  python runseq.py assign <input> <start> <stop> <value> <output>
  python runseq.py sum    <input> [--start N] [--stop N]
"""

import argparse
import copy
import sys
import time
from bisect import bisect_left, bisect_right
from dataclasses import dataclass, replace
from itertools import chain, groupby, repeat
from typing import Any, Callable, Iterable, Iterator, List, Optional, Tuple


# ============================================================================
# Runs
# ============================================================================

@dataclass(frozen=True)
class Run:
    """Half-open interval [start, end) of the sequence holding one value."""
    start: int
    end: int
    value: Any

    @property
    def length(self) -> int:
        return self.end - self.start

    def __repr__(self):
        return f"RUN([{self.start}, {self.end}), {self.value!r})"


Bounds = Tuple[int, int]


# ============================================================================
# Run-Compressed Sequence
#
# The run index is two parallel lists: _starts (sorted run starts, the
# search key) and _runs (the Run records).  The run containing index i is
# found by predecessor search on _starts:
#
#   k = bisect_right(_starts, i) - 1          =>  _runs[k].start <= i < _runs[k].end
#
# Run records are frozen.  Changing a bound or a value replaces the record
# at its slot, so the key list can never disagree with the records.
#
# Invariants after every public operation:
#   (1) runs partition [0, len) exactly
#   (2) runs are sorted by start and pairwise disjoint
#   (3) len == _runs[-1].end, or 0 when there are no runs
#   (4) adjacent runs MAY hold equal values; only append and bulk build
#       merge them
#
# Cost (R = run count): split and range normalization are O(log R)
# searches.  assign deletes every interior run with one slice assignment;
# each run is created once and deleted at most once, so the deletion work
# over a whole history of m assigns and n appends is O(n + m).
# ============================================================================

class RunSequence:
    """Sequence of values stored as runs of equal values.

    ``clone`` duplicates a value when split() cuts a run in two, so the two
    halves can diverge later.  It defaults to copy.copy; pass ``clone=None``
    to share values between halves (fine for immutable elements).
    """
    __slots__ = ('_starts', '_runs', '_len', 'clone')

    def __init__(self, values: Optional[Iterable[Any]] = None, *,
                 clone: Optional[Callable[[Any], Any]] = copy.copy):
        self._starts: List[int] = []
        self._runs: List[Run] = []
        self._len = 0
        self.clone = clone if clone is not None else _share
        if values is not None:
            self.extend(values)

    @classmethod
    def from_iterable(cls, values: Iterable[Any], *,
                      clone: Optional[Callable[[Any], Any]] = copy.copy
                      ) -> 'RunSequence':
        """Bulk-build a sequence in one pass over ``values``."""
        return cls(values, clone=clone)

    # ── size and inspection ──────────────────────────────────────────────

    def __len__(self) -> int:
        return self._len

    @property
    def run_count(self) -> int:
        return len(self._runs)

    def runs(self) -> Iterator[Run]:
        """Iterate over the runs in ascending start order."""
        return iter(self._runs)

    def __getitem__(self, index: int) -> Any:
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"sequence indices must be integers, "
                            f"not {type(index).__name__}")
        if not 0 <= index < self._len:
            raise IndexError(f"index {index} out of range for length {self._len}")
        return self._runs[bisect_right(self._starts, index) - 1].value

    def __eq__(self, other: object):
        if not isinstance(other, RunSequence):
            return NotImplemented
        return self._len == other._len and self._runs == other._runs

    __hash__ = None

    def __repr__(self):
        return f"RunSequence(len={self._len}, runs={self._runs!r})"

    # ── growth ───────────────────────────────────────────────────────────

    def append(self, value: Any) -> None:
        """Add one element at the end, extending the tail run if equal."""
        if self._runs and _same(self._runs[-1].value, value):
            last = self._runs[-1]
            self._runs[-1] = replace(last, end=last.end + 1)
        else:
            self._starts.append(self._len)
            self._runs.append(Run(self._len, self._len + 1, value))
        self._len += 1

    def extend(self, values: Iterable[Any]) -> None:
        """Bulk append.

        Consecutive equal elements become one run directly, and the first
        group merges into the tail run when equal, so the result matches
        repeated append() exactly.
        """
        if values is self:
            values = list(values)
        for value, group in groupby(values):
            count = sum(1 for _ in group)
            if self._runs and _same(self._runs[-1].value, value):
                last = self._runs[-1]
                self._runs[-1] = replace(last, end=last.end + count)
            else:
                self._starts.append(self._len)
                self._runs.append(Run(self._len, self._len + count, value))
            self._len += count

    # ── boundaries ───────────────────────────────────────────────────────

    def split(self, at: int) -> None:
        """Ensure a run starts exactly at index ``at``.

        Splits the run [l, r) containing ``at`` into [l, at) and [at, r);
        the right half receives a clone of the value.  Raises IndexError
        unless 0 <= at < len.
        """
        if isinstance(at, bool) or not isinstance(at, int):
            raise TypeError(f"split index must be an integer, "
                            f"not {type(at).__name__}")
        if not 0 <= at < self._len:
            raise IndexError(f"split index {at} out of range for length {self._len}")
        k = bisect_right(self._starts, at) - 1
        run = self._runs[k]
        if run.start == at:
            return
        self._runs[k] = replace(run, end=at)
        self._starts.insert(k + 1, at)
        self._runs.insert(k + 1, Run(at, run.end, self.clone(run.value)))

    def _normalize(self, key) -> Optional[Bounds]:
        """Canonical [l, r) for ``key``, or None when it selects nothing."""
        if key is None:
            start = stop = None
        elif isinstance(key, slice):
            if key.step not in (None, 1):
                raise ValueError(f"range step must be 1, got {key.step}")
            start, stop = key.start, key.stop
        elif isinstance(key, range):
            if key.step != 1:
                raise ValueError(f"range step must be 1, got {key.step}")
            start, stop = key.start, key.stop
        elif isinstance(key, tuple) and len(key) == 2:
            start, stop = key
        else:
            raise TypeError(f"expected slice, range or (start, stop), "
                            f"got {type(key).__name__}")
        for bound in (start, stop):
            if bound is not None and (isinstance(bound, bool)
                                      or not isinstance(bound, int)):
                raise TypeError(f"range bounds must be integers or None, "
                                f"not {type(bound).__name__}")
        l = 0 if start is None else start
        r = self._len if stop is None else stop
        if l < 0 or l >= r or r > self._len:
            return None
        return l, r

    def split_range(self, key=None) -> Optional[Bounds]:
        """Normalize ``key`` and materialize boundaries at both ends.

        ``key`` is None (everything), a slice or range with step 1, or a
        (start, stop) pair; None bounds are open.  Returns (l, r) with runs
        starting at l and at r (unless r == len), or None when the range
        is empty, inverted, negative or extends past the end.
        """
        bounds = self._normalize(key)
        if bounds is None:
            return None
        l, r = bounds
        self.split(l)
        if r < self._len:
            self.split(r)
        return bounds

    def _run_slice(self, l: int, r: int) -> Tuple[int, int]:
        """Index positions [i, j) of the runs covering [l, r).

        Both l and r must already be run boundaries (or r == len).
        """
        return bisect_left(self._starts, l), bisect_left(self._starts, r)

    # ── range overwrite ──────────────────────────────────────────────────

    def assign(self, value: Any, key=None) -> None:
        """Overwrite every element in ``key`` with ``value``.

        All runs inside the range collapse into a single run.  Empty or
        out-of-bounds ranges are ignored.
        """
        bounds = self.split_range(key)
        if bounds is None:
            return
        l, r = bounds
        i, j = self._run_slice(l, r)
        self._starts[i:j] = [l]
        self._runs[i:j] = [Run(l, r, value)]

    # ── transforms ───────────────────────────────────────────────────────

    def map(self, f: Callable[[Any], Any]) -> None:
        """Replace each run's value with f(value).

        f sees one representative per run, so it changes every element of
        that run at once.
        """
        self._map_slice(f, 0, len(self._runs))

    def map_over_range(self, f: Callable[[Any], Any], key=None) -> None:
        """map() restricted to the runs inside ``key``."""
        bounds = self.split_range(key)
        if bounds is None:
            return
        self._map_slice(f, *self._run_slice(*bounds))

    def _map_slice(self, f, i: int, j: int) -> None:
        for k in range(i, j):
            run = self._runs[k]
            self._runs[k] = replace(run, value=f(run.value))

    # ── aggregation ──────────────────────────────────────────────────────

    def fold(self, init: Any, f: Callable[[Any, int, Any], Any]) -> Any:
        """acc = f(acc, run_length, value) over all runs, left to right."""
        return _fold_runs(self._runs, init, f)

    def fold_over_range(self, init: Any, f: Callable[[Any, int, Any], Any],
                        key=None) -> Any:
        """fold() over the runs inside ``key``; ``init`` if it selects nothing."""
        bounds = self.split_range(key)
        if bounds is None:
            return init
        i, j = self._run_slice(*bounds)
        return _fold_runs(self._runs[i:j], init, f)

    def sum(self, zero: Any = 0,
            from_count: Optional[Callable[[int], Any]] = None) -> Any:
        """Σ run_length * value, starting from ``zero``.

        ``from_count`` converts a run length into the element type before
        multiplying (e.g. Decimal, Fraction, a checked fixed-width type).
        Its exceptions propagate; nothing is truncated.
        """
        return self.fold(zero, _weighted_add(from_count))

    def sum_over_range(self, key=None, zero: Any = 0,
                       from_count: Optional[Callable[[int], Any]] = None) -> Any:
        """sum() over the elements inside ``key``; ``zero`` if it selects nothing."""
        return self.fold_over_range(zero, _weighted_add(from_count), key)

    # ── expansion ────────────────────────────────────────────────────────

    def iterate(self) -> Iterator[Any]:
        """Lazily yield every element in index order."""
        return chain.from_iterable(repeat(run.value, run.length)
                                   for run in self._runs)

    __iter__ = iterate

    def to_list(self) -> List[Any]:
        return list(self.iterate())


def _share(value):
    return value


def _same(a, b) -> bool:
    # identity first, like list.count and itertools.groupby
    return a is b or a == b


def _fold_runs(runs: Iterable[Run], acc, f):
    for run in runs:
        acc = f(acc, run.length, run.value)
    return acc


def _weighted_add(from_count: Optional[Callable[[int], Any]]):
    if from_count is None:
        return lambda acc, n, value: acc + n * value
    return lambda acc, n, value: acc + from_count(n) * value


# ============================================================================
# Summaries
# ============================================================================

def run_summary(seq: RunSequence) -> dict:
    """Return summary statistics for a sequence's run structure."""
    lengths = [run.length for run in seq.runs()]
    n = len(seq)
    return {
        'length': n,
        'num_runs': len(lengths),
        'max_run': max(lengths, default=0),
        'mean_run': n / len(lengths) if lengths else 0,
        'compression': len(lengths) / n if n else 0,
    }


def _print_run_stats(seq: RunSequence) -> None:
    """Print run-length distribution to stderr (verbose mode)."""
    lengths = sorted(run.length for run in seq.runs())
    if not lengths:
        print("  runs: none", file=sys.stderr)
        return
    singletons = sum(1 for n in lengths if n == 1)
    median = lengths[len(lengths) // 2]
    print(f"  runs: {len(lengths)} regions, min={lengths[0]} "
          f"max={lengths[-1]} median={median} elements\n"
          f"  runs: {singletons} singletons "
          f"({singletons / len(lengths) * 100:.1f}%)",
          file=sys.stderr)


# ============================================================================
# File I/O helpers
# ============================================================================

PARSERS = {
    'int': int,
    'float': float,
    'str': str,
}


def _read_values(path: str, parse: Callable[[str], Any]) -> Iterator[Any]:
    """Yield parsed whitespace-separated tokens from a text file."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            for line in f:
                for tok in line.split():
                    try:
                        yield parse(tok)
                    except ValueError:
                        raise SystemExit(
                            f"error: {path}: invalid value {tok!r}") from None
    except OSError as e:
        raise SystemExit(f"error: {path}: {e.strerror}") from None
    except UnicodeDecodeError as e:
        raise SystemExit(f"error: {path}: not UTF-8 text ({e.reason})") from None


def _load(args) -> RunSequence:
    return RunSequence.from_iterable(_read_values(args.input, PARSERS[args.type]),
                                     clone=None)


# ============================================================================
# CLI
# ============================================================================

def cmd_info(args):
    t0 = time.time()
    seq = _load(args)
    elapsed = time.time() - t0

    stats = run_summary(seq)
    print(f"Input:        {args.input}")
    print(f"Length:       {stats['length']:,} elements")
    print(f"Runs:         {stats['num_runs']:,}")
    print(f"Compression:  {stats['compression']:.4f} (runs/elements)")
    print(f"Max run:      {stats['max_run']:,}")
    print(f"Mean run:     {stats['mean_run']:.1f}")
    if args.verbose:
        _print_run_stats(seq)
    print(f"Time:         {elapsed:.3f}s")


def cmd_assign(args):
    parse = PARSERS[args.type]
    try:
        value = parse(args.value)
    except ValueError:
        raise SystemExit(f"error: invalid value {args.value!r}") from None

    seq = _load(args)
    before = seq.run_count

    t0 = time.time()
    bounds = seq._normalize((args.start, args.stop))
    if bounds is None:
        print(f"warning: range [{args.start}, {args.stop}) is empty or out "
              f"of bounds for length {len(seq)}; nothing assigned",
              file=sys.stderr)
    else:
        seq.assign(value, bounds)
    elapsed = time.time() - t0

    with open(args.output, 'w', encoding='utf-8') as f:
        for v in seq:
            f.write(f"{v}\n")

    print(f"Input:        {args.input} ({len(seq):,} elements)")
    print(f"Assigned:     [{args.start}, {args.stop}) = {value!r}")
    print(f"Runs:         {before:,} -> {seq.run_count:,}")
    print(f"Output:       {args.output}")
    if args.verbose:
        _print_run_stats(seq)
    print(f"Time:         {elapsed:.3f}s")


def cmd_sum(args):
    seq = _load(args)
    try:
        total = seq.sum_over_range((args.start, args.stop))
    except TypeError:
        raise SystemExit(f"error: sum requires numeric values, "
                         f"got --type {args.type}") from None
    if args.verbose:
        _print_run_stats(seq)
    print(total)


def main():
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--type', choices=list(PARSERS), default='int',
                        help='Element type of the input tokens (default: int)')
    common.add_argument('--verbose', action='store_true',
                        help='Print run statistics to stderr')

    ap = argparse.ArgumentParser(
        description='Run-compressed sequences over whitespace-separated values')
    sub = ap.add_subparsers(dest='command')

    # info
    inf = sub.add_parser('info', parents=[common],
                         help='Show run statistics for a value file')
    inf.add_argument('input', help='Input value file')
    inf.set_defaults(func=cmd_info)

    # assign
    asg = sub.add_parser('assign', parents=[common],
                         help='Overwrite a range with one value')
    asg.add_argument('input', help='Input value file')
    asg.add_argument('start', type=int, help='First index (inclusive)')
    asg.add_argument('stop', type=int, help='Last index (exclusive)')
    asg.add_argument('value', help='Value to assign')
    asg.add_argument('output', help='Output value file (one per line)')
    asg.set_defaults(func=cmd_assign)

    # sum
    sm = sub.add_parser('sum', parents=[common],
                        help='Sum the elements of a range')
    sm.add_argument('input', help='Input value file')
    sm.add_argument('--start', type=int, default=None,
                    help='First index (default: 0)')
    sm.add_argument('--stop', type=int, default=None,
                    help='Index past the last one (default: length)')
    sm.set_defaults(func=cmd_sum)

    args = ap.parse_args()
    if args.command is None:
        ap.print_help()
        sys.exit(1)
    args.func(args)


# ============================================================================

if __name__ == '__main__':
    main()
