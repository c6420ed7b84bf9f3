"""
Select an algorithm, drive it frame by frame, report the result.

``run_sort`` is the whole engine in one call::

    >>> from sortscope import Algorithm, SortConfig, run_sort
    >>> result = run_sort(SortConfig(Algorithm.BUBBLE, [3, 1, 2]))
    >>> result.values, result.swaps
    ([1, 2, 3], 2)

``emit`` receives every frame synchronously (it may block, e.g. to pace a
window), and ``should_stop`` is polled after each one.
"""

import logging
import operator
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, NamedTuple, Optional

import numpy as np

from . import algorithms as algo
from .sequence import DTYPE, Frame, Sequence

logger = logging.getLogger(__name__)

MIN_ELEMENTS = 2
MAX_ELEMENTS = 2 ** 16
MAX_VALUE = int(np.iinfo(DTYPE).max)

Emitter = Callable[[Frame], None]
StopCheck = Callable[[], bool]


class SortError(Exception):
    """Base class for everything the engine raises on purpose."""


class InvalidConfiguration(SortError, ValueError):
    """The configuration was rejected before any algorithm ran."""


class SortCancelled(SortError):
    """An external stop was requested at a frame boundary."""

    def __init__(self, frames: int):
        super().__init__(f"cancelled after {frames} frames")
        self.frames = frames


class Algorithm(Enum):
    # positions 0-6 are the classic numbering, the extras come after
    BUBBLE    = "bubble"
    SELECTION = "selection"
    INSERTION = "insertion"
    QUICKSORT = "quicksort"
    MERGESORT = "mergesort"
    HEAPSORT  = "heapsort"
    INTROSORT = "introsort"
    BOGO      = "bogo"
    SHELLSORT = "shellsort"

    @property
    def title(self) -> str:
        return _TITLES[self]

    @classmethod
    def parse(cls, value) -> "Algorithm":
        """Accept an ``Algorithm``, its name/value, or its position in the list."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        if text.isdigit():
            members = list(cls)
            if int(text) < len(members):
                return members[int(text)]
        for member in cls:
            if text in (member.value, member.name.lower()):
                return member
        raise InvalidConfiguration(f"unknown sorting algorithm: {value!r}")


_TITLES = {
    Algorithm.BUBBLE:    "bubble sort",
    Algorithm.SELECTION: "selection sort",
    Algorithm.INSERTION: "insertion sort",
    Algorithm.QUICKSORT: "quicksort",
    Algorithm.MERGESORT: "mergesort",
    Algorithm.HEAPSORT:  "heapsort",
    Algorithm.INTROSORT: "introsort",
    Algorithm.BOGO:      "bogo sort",
    Algorithm.SHELLSORT: "shellsort",
}


@dataclass
class SortConfig:
    algorithm: Algorithm
    values: list
    seed: Optional[int] = field(default=None, compare=False)

    @classmethod
    def shuffled(cls, algorithm, count: int, seed: Optional[int] = None) -> "SortConfig":
        """The conventional setup: 1..count in random order."""
        if not MIN_ELEMENTS <= count <= MAX_ELEMENTS:
            raise InvalidConfiguration(
                f"number of elements must be in [{MIN_ELEMENTS}, {MAX_ELEMENTS}], got {count}")
        seq = Sequence.from_permutation(count, np.random.default_rng(seed))
        return cls(Algorithm.parse(algorithm), seq.tolist(), seed)

    @property
    def count(self) -> int:
        return len(self.values)

    def validate(self) -> None:
        """Raise :class:`InvalidConfiguration` unless this can be run as is."""
        self.algorithm = Algorithm.parse(self.algorithm)
        n = len(self.values)
        if not MIN_ELEMENTS <= n <= MAX_ELEMENTS:
            raise InvalidConfiguration(
                f"number of elements must be in [{MIN_ELEMENTS}, {MAX_ELEMENTS}], got {n}")
        try:
            values = [operator.index(x) for x in self.values]
        except TypeError:
            raise InvalidConfiguration("values must be integers") from None
        if any(not 0 <= x <= MAX_VALUE for x in values):
            raise InvalidConfiguration(f"values must be unsigned and at most {MAX_VALUE}")
        if len(set(values)) != n:
            raise InvalidConfiguration("values must be distinct")


class Outcome(Enum):
    SORTED    = "sorted"
    UNSORTED  = "unsorted"
    CANCELLED = "cancelled"


class SortResult(NamedTuple):
    outcome: Outcome
    values: list
    comparisons: int
    swaps: int
    frames: int

    @property
    def sorted(self) -> bool:
        return self.outcome is Outcome.SORTED


def steps(seq: Sequence, algorithm: Algorithm):
    """Frame generator for ``algorithm`` over the whole of ``seq``."""
    n = len(seq)
    if algorithm is Algorithm.BOGO:      return algo.bogo_sort(seq)
    if algorithm is Algorithm.BUBBLE:    return algo.bubble_sort(seq)
    if algorithm is Algorithm.SELECTION: return algo.selection_sort(seq)
    if algorithm is Algorithm.INSERTION: return algo.insertion_sort(seq)
    if algorithm is Algorithm.QUICKSORT: return algo.quicksort(seq, 0, n - 1)
    if algorithm is Algorithm.MERGESORT: return algo.mergesort(seq)
    if algorithm is Algorithm.HEAPSORT:  return algo.heapsort(seq, 0, n)
    if algorithm is Algorithm.INTROSORT: return algo.introsort(seq, algo.introsort_depth(n), 0, n - 1)
    if algorithm is Algorithm.SHELLSORT: return algo.shellsort(seq)
    raise InvalidConfiguration(f"unknown sorting algorithm: {algorithm!r}")


def drive(frames, emit: Optional[Emitter] = None, should_stop: Optional[StopCheck] = None) -> int:
    """Hand every frame to ``emit``, polling ``should_stop`` after each one.

    Returns the number of frames. Raises :class:`SortCancelled` when a stop
    was requested; the generator is closed in either case.
    """
    count = 0
    try:
        for frame in frames:
            count += 1
            if emit is not None:
                emit(frame)
            if should_stop is not None and should_stop():
                raise SortCancelled(count)
    finally:
        frames.close()
    return count


def run_sort(config: SortConfig, emit: Optional[Emitter] = None,
             should_stop: Optional[StopCheck] = None) -> SortResult:
    """Run one sort from start to finish and report how it went."""
    config.validate()
    seq = Sequence(config.values, np.random.default_rng(config.seed))
    logger.debug("running %s on %d elements", config.algorithm.title, len(seq))

    try:
        count = drive(steps(seq, config.algorithm), emit, should_stop)
    except SortCancelled as ex:
        logger.info("%s cancelled after %d frames", config.algorithm.title, ex.frames)
        return SortResult(Outcome.CANCELLED, seq.tolist(), seq.comparisons, seq.swaps, ex.frames)

    # final frame shows the finished sequence with nothing highlighted
    seq.accessed.clear()
    if emit is not None:
        emit(seq.frame())
    count += 1

    outcome = Outcome.SORTED if seq.is_sorted() else Outcome.UNSORTED
    if outcome is Outcome.UNSORTED:
        logger.warning("%s finished but the sequence is not sorted", config.algorithm.title)
    logger.info("%s: %d comparisons, %d swaps, %d frames",
                config.algorithm.title, seq.comparisons, seq.swaps, count)
    return SortResult(outcome, seq.tolist(), seq.comparisons, seq.swaps, count)
