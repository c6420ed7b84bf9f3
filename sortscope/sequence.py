"""
Instrumented sequence and the frames taken from it.

A ``Sequence`` holds the values being sorted plus the two running counters and
the indices touched since the last frame. Algorithms mutate it directly and
call ``frame()`` whenever a unit of work is done.
"""

from typing import NamedTuple

import numpy as np

DTYPE = np.uint32


class Frame(NamedTuple):
    """Point-in-time snapshot handed to the renderer."""
    values: np.ndarray
    accessed: tuple
    comparisons: int
    swaps: int


def check_sorted(values) -> bool:
    """True if every element is at least as large as its predecessor."""
    last = values[0]
    for i in range(1, len(values)):
        if values[i] < last:
            return False
        last = values[i]
    return True


def _snapshot(values) -> np.ndarray:
    snap = np.array(values, dtype=DTYPE, copy=True)
    snap.setflags(write=False)
    return snap


class Sequence:
    __slots__ = ('values', 'comparisons', 'swaps', 'accessed', 'rng')

    def __init__(self, values, rng: np.random.Generator | None = None):
        self.values      = np.array(values, dtype=DTYPE, copy=True)
        if self.values.ndim != 1 or len(self.values) == 0:
            raise ValueError("a sequence needs at least one value")
        self.comparisons = 0
        self.swaps       = 0
        self.accessed    = []
        self.rng         = rng if rng is not None else np.random.default_rng()

    @classmethod
    def from_permutation(cls, count: int, rng: np.random.Generator | None = None):
        """Shuffled permutation of 1..count."""
        seq = cls(np.arange(1, count + 1), rng)
        seq.shuffle()
        return seq

    def __len__(self):
        return len(self.values)

    def __getitem__(self, i):
        return self.values[i]

    def __setitem__(self, i, value):
        self.values[i] = value

    def __repr__(self):
        return f"Sequence({self.tolist()!r})"

    def tolist(self) -> list:
        return self.values.tolist()

    def touch(self, *indices):
        n = len(self.values)
        for i in indices:
            if not 0 <= i < n:
                raise IndexError(f"accessed index {i} outside [0, {n})")
            self.accessed.append(int(i))

    def swap(self, i, j):
        v = self.values
        v[i], v[j] = v[j], v[i]
        self.swaps += 1

    def shuffle(self):
        # numpy's Generator.shuffle is an in-place Fisher-Yates
        self.rng.shuffle(self.values)

    def is_sorted(self) -> bool:
        return check_sorted(self.values)

    def frame(self, values=None) -> Frame:
        """Snapshot ``values`` (default: the live buffer) and clear the accessed set."""
        f = Frame(_snapshot(self.values if values is None else values),
                  tuple(self.accessed), self.comparisons, self.swaps)
        self.accessed.clear()
        return f
