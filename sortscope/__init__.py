"""
sortscope: classical sorting algorithms that report every step.

Each algorithm runs over an instrumented :class:`Sequence` and yields a
:class:`Frame` (values, indices touched since the last frame, comparison and
swap counts) whenever it finishes a unit of work. :func:`run_sort` drives one
algorithm to completion, handing frames to an optional emitter and polling an
optional stop check in between.
"""

from .sequence import Frame, Sequence, check_sorted
from .runner import (
    Algorithm, InvalidConfiguration, Outcome, SortCancelled, SortConfig, SortError,
    SortResult, drive, run_sort, steps,
)

__all__ = [
    "Algorithm", "Frame", "InvalidConfiguration", "Outcome", "Sequence", "SortCancelled",
    "SortConfig", "SortError", "SortResult", "check_sorted", "drive", "run_sort", "steps",
]
