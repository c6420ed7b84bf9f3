"""
Sorting algorithms, instrumented.

Every algorithm is a generator over a :class:`~sortscope.sequence.Sequence`.
It mutates the sequence in place, keeps the comparison/swap counters and the
accessed set up to date, and yields a :class:`~sortscope.sequence.Frame` on
every "interesting" step. Whoever drives the generator decides what to do with
each frame (draw it, record it, drop it) and whether to resume.

Range arguments follow the conventions of each algorithm: quicksort,
partition and introsort take an inclusive ``[start, end]``, heapsort and
heapify take a half-open ``[start, end)``.
"""

import math

from .sequence import Sequence

# ============================================================
# ===================== SIMPLE SORTS =========================
# ============================================================

def bogo_sort(seq: Sequence):
    """Shuffle until sorted, averages O((n+1)!) shuffles."""
    while not seq.is_sorted():
        seq.shuffle()
        yield seq.frame()

def bubble_sort(seq: Sequence):
    v, n = seq.values, len(seq)
    done = False
    i = 0
    while i < n - 1 and not done:
        done = True
        for j in range(n - i - 1):
            if v[j] > v[j+1]:
                seq.swap(j, j+1)
                done = False
            seq.comparisons += 1
            seq.touch(j, j+1)
            yield seq.frame()
        i += 1

def selection_sort(seq: Sequence):
    v, n = seq.values, len(seq)
    for i in range(n - 1):
        lo = i
        for j in range(i+1, n):
            if v[j] < v[lo]: lo = j
            seq.comparisons += 1
            seq.touch(lo, j)
            yield seq.frame()
        if lo != i:
            seq.swap(lo, i)
            seq.touch(lo, i)
            yield seq.frame()

def insertion_sort(seq: Sequence):
    # shift-by-swap: every visit of the inner loop is one comparison and one swap
    v = seq.values
    for i in range(1, len(seq)):
        j = i
        while j > 0 and v[j-1] > v[j]:
            seq.comparisons += 1
            seq.swap(j, j-1)
            seq.touch(j, j-1)
            yield seq.frame()
            j -= 1

# ============================================================
# ======================== QUICKSORT =========================
# ============================================================

def partition(seq: Sequence, start: int, end: int):
    """Lomuto partition of ``[start, end]`` around a median-of-three pivot.

    Returns (as the generator's return value) the pivot's final index.
    """
    assert 0 <= start <= end < len(seq), f"bad range [{start}, {end}]"
    v = seq.values

    # leaves elems[start] <= elems[mid] <= elems[end]
    mid = (start + end) // 2
    if v[mid] < v[start]: seq.swap(start, mid)
    if v[end] < v[start]: seq.swap(start, end)
    if v[end] < v[mid]:   seq.swap(mid, end)
    seq.comparisons += 3
    pivot = v[end]

    i = start
    for j in range(start, end):
        seq.comparisons += 1
        if v[j] < pivot:
            seq.touch(i)
            if i != j: seq.swap(i, j)
            i += 1
        seq.touch(end, j)
        yield seq.frame()

    if i < end: seq.swap(i, end)
    seq.touch(i, end)
    yield seq.frame()
    return i

def quicksort(seq: Sequence, start: int, end: int):
    # left side is pushed last so it is finished before the right side starts,
    # same visiting order as the recursive form
    pending = [(start, end)]
    while pending:
        start, end = pending.pop()
        if start >= end:
            continue
        pivot = yield from partition(seq, start, end)
        pending.append((pivot + 1, end))
        if pivot > start:
            pending.append((start, pivot - 1))

# ============================================================
# ======================== MERGESORT =========================
# ============================================================

def mergesort(seq: Sequence):
    """Bottom-up mergesort: merge runs of width 1, 2, 4, ... into ``aux``."""
    n = len(seq)
    aux = seq.values.copy()
    width = 1
    while width < n:
        for left in range(0, n, 2 * width):
            right = min(left + width, n)
            end   = min(left + 2 * width, n)
            yield from merge(seq, left, right, end, aux)
        seq.values[:] = aux
        width *= 2

def merge(seq: Sequence, left: int, right: int, end: int, aux):
    """Merge ``[left, right)`` and ``[right, end)`` of the live buffer into ``aux``.

    Frames are taken against ``aux`` since that is where the new order builds up.
    """
    v = seq.values
    i, j = left, right
    for k in range(left, end):
        # exhausted cursors point one past their run and are not marked
        if i < right: seq.touch(i)
        if j < end:   seq.touch(j)
        seq.comparisons += 1
        if i < right and (j >= end or v[i] <= v[j]):
            aux[k] = v[i]; i += 1
        else:
            aux[k] = v[j]; j += 1
        seq.swaps += 1
        seq.touch(k)
        yield seq.frame(aux)

# ============================================================
# ======================== HEAPSORT ==========================
# ============================================================
#
# The heap lives in [start, end) with its root at ``start``; the usual
# 0-based child/parent arithmetic is shifted by ``start``.

def heap_parent(start: int, i: int) -> int:
    return start + (i - start - 1) // 2

def heap_left_child(start: int, i: int) -> int:
    return start + 2 * (i - start) + 1

def heap_right_child(start: int, i: int) -> int:
    return start + 2 * (i - start) + 2

def sift_down(seq: Sequence, start: int, root: int, last: int):
    """Sift ``root`` down a max-heap whose last index is ``last`` (inclusive)."""
    v = seq.values
    while heap_left_child(start, root) <= last:
        child = heap_left_child(start, root)
        right = heap_right_child(start, root)
        largest = root
        seq.touch(root)

        seq.comparisons += 1
        if v[largest] < v[child]: largest = child
        seq.comparisons += 1
        if right <= last and v[largest] < v[right]: largest = right
        if largest == root:
            return

        seq.swap(root, largest)
        root = largest
        seq.touch(root, child)
        if right <= last: seq.touch(right)
        yield seq.frame()

def heapify(seq: Sequence, start: int, end: int):
    for root in range(heap_parent(start, end - 1), start - 1, -1):
        yield from sift_down(seq, start, root, end - 1)

def heapsort(seq: Sequence, start: int, end: int):
    assert 0 <= start < end <= len(seq), f"bad range [{start}, {end})"
    yield from heapify(seq, start, end)
    last = end - 1
    while last > start:
        seq.swap(last, start)
        seq.touch(start, last)
        yield seq.frame()
        last -= 1
        yield from sift_down(seq, start, start, last)

# ============================================================
# ======================== INTROSORT =========================
# ============================================================

def introsort_depth(count: int) -> int:
    """Recursion budget for introsort: twice the floor of ln(count)."""
    return math.floor(math.log(count)) * 2

def introsort(seq: Sequence, max_depth: int, start: int, end: int):
    """Quicksort on ``[start, end]`` that falls back to heapsort once
    ``max_depth`` levels of partitioning have been spent."""
    pivot = yield from partition(seq, start, end)
    if end - start <= 1:
        return
    if max_depth == 0:
        yield from heapsort(seq, start, end + 1)
        return
    if pivot > start:
        yield from introsort(seq, max_depth - 1, start, pivot - 1)
    if pivot < end:
        yield from introsort(seq, max_depth - 1, pivot + 1, end)

# ============================================================
# ======================== SHELLSORT =========================
# ============================================================

def gap_sequence(count: int) -> list:
    """Descending gaps from the recurrence g' = ceil(2.25 g + 1), all below count // 2.

    Gap 1 is always kept so that the last pass is a plain insertion sort.
    """
    gaps = [1]
    gap = math.ceil(1 * 2.25 + 1)
    while gap < count // 2:
        gaps.append(gap)
        gap = math.ceil(gap * 2.25 + 1)
    gaps.reverse()
    return gaps

def shellsort(seq: Sequence):
    v, n = seq.values, len(seq)
    for gap in gap_sequence(n):
        for j in range(gap, n):
            held = v[j]
            seq.comparisons += 1
            k = j
            while k >= gap and v[k - gap] > held:
                seq.comparisons += 1
                v[k] = v[k - gap]
                seq.swaps += 1
                seq.touch(k, k - gap)
                yield seq.frame()
                k -= gap
            if k != j:
                v[k] = held
                seq.swaps += 1
            seq.touch(k)
            yield seq.frame()
