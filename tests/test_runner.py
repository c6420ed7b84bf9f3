import numpy as np
import pytest

import sortscope.runner as runner
from sortscope import (
    Algorithm, InvalidConfiguration, Outcome, Sequence, SortCancelled, SortConfig, drive, run_sort,
    steps,
)


@pytest.mark.parametrize("algorithm", [a for a in Algorithm if a is not Algorithm.BOGO])
def test_run_sort_every_algorithm(algorithm):
    frames = []
    config = SortConfig.shuffled(algorithm, 64, seed=7)
    original = list(config.values)
    result = run_sort(config, frames.append)
    assert result.outcome is Outcome.SORTED
    assert result.sorted
    assert result.values == sorted(original) == list(range(1, 65))
    assert result.frames == len(frames)
    # exactly one closing frame, showing the finished sequence
    assert frames[-1].values.tolist() == result.values
    assert frames[-1].accessed == ()
    assert (frames[-1].comparisons, frames[-1].swaps) == (result.comparisons, result.swaps)


def test_run_sort_bogo():
    result = run_sort(SortConfig(Algorithm.BOGO, [3, 1, 2], seed=11))
    assert result.sorted
    assert result.values == [1, 2, 3]
    assert (result.comparisons, result.swaps) == (0, 0)


def test_run_sort_without_emitter():
    result = run_sort(SortConfig(Algorithm.BUBBLE, [3, 1, 2]))
    assert result.values == [1, 2, 3]
    assert result.swaps == 2
    assert result.frames == 4


@pytest.mark.parametrize("algorithm", [a for a in Algorithm if a is not Algorithm.BOGO])
def test_run_sort_already_sorted(algorithm):
    result = run_sort(SortConfig(algorithm, [1, 2, 3, 4, 5]))
    assert result.sorted
    if algorithm in (Algorithm.BUBBLE, Algorithm.SELECTION, Algorithm.INSERTION,
                     Algorithm.QUICKSORT, Algorithm.SHELLSORT):
        assert result.swaps == 0


def test_run_sort_does_not_touch_config_values():
    config = SortConfig(Algorithm.HEAPSORT, [4, 3, 2, 1])
    run_sort(config)
    assert config.values == [4, 3, 2, 1]


def test_cancellation():
    emitted = []
    polls = []

    def should_stop():
        polls.append(1)
        return len(polls) >= 5

    result = run_sort(SortConfig.shuffled(Algorithm.BUBBLE, 30, seed=2), emitted.append, should_stop)
    assert result.outcome is Outcome.CANCELLED
    assert not result.sorted
    assert result.frames == 5
    assert len(emitted) == 5
    assert sorted(result.values) == list(range(1, 31))


def test_drive_raises_and_closes():
    closed = []

    def frames():
        try:
            while True:
                yield None
        finally:
            closed.append(True)

    with pytest.raises(SortCancelled) as info:
        drive(frames(), should_stop=lambda: True)
    assert info.value.frames == 1
    assert closed == [True]


def test_drive_counts_frames():
    seq = Sequence([3, 1, 2])
    assert drive(steps(seq, Algorithm.BUBBLE)) == 3
    assert seq.tolist() == [1, 2, 3]


def test_unsorted_outcome(monkeypatch):
    def nothing(seq, algorithm):
        return
        yield
    monkeypatch.setattr(runner, "steps", nothing)
    result = run_sort(SortConfig(Algorithm.QUICKSORT, [2, 1]))
    assert result.outcome is Outcome.UNSORTED
    assert result.values == [2, 1]
    assert result.frames == 1


@pytest.mark.parametrize("values", [[1], [], list(range(1, 2 ** 16 + 2))])
def test_rejects_bad_count(values):
    with pytest.raises(InvalidConfiguration):
        run_sort(SortConfig(Algorithm.BUBBLE, values))


def test_accepts_limits():
    SortConfig(Algorithm.BUBBLE, [1, 2]).validate()
    SortConfig(Algorithm.BUBBLE, list(range(1, 2 ** 16 + 1))).validate()


def test_rejects_bad_values():
    with pytest.raises(InvalidConfiguration):
        SortConfig(Algorithm.BUBBLE, [1, 2, 2]).validate()
    with pytest.raises(InvalidConfiguration):
        SortConfig(Algorithm.BUBBLE, [1, -2]).validate()
    with pytest.raises(InvalidConfiguration):
        SortConfig(Algorithm.BUBBLE, [1, 2 ** 32]).validate()


@pytest.mark.parametrize("values", [[2.7, 1.5], ["b", "a"], ["2", "1"], [2.0, 1.0]])
def test_rejects_non_integer_values(values):
    with pytest.raises(InvalidConfiguration):
        run_sort(SortConfig(Algorithm.BUBBLE, values))


def test_accepts_numpy_integers():
    result = run_sort(SortConfig(Algorithm.BUBBLE, list(np.array([3, 1, 2], dtype=np.int64))))
    assert result.values == [1, 2, 3]


def test_rejects_unknown_algorithm():
    with pytest.raises(InvalidConfiguration):
        SortConfig("stooge", [2, 1]).validate()
    # it is also a ValueError for callers that don't know the engine's types
    with pytest.raises(ValueError):
        Algorithm.parse("99")


def test_shuffled_config():
    a = SortConfig.shuffled("introsort", 100, seed=3)
    b = SortConfig.shuffled(Algorithm.INTROSORT, 100, seed=3)
    assert a == b
    assert a.algorithm is Algorithm.INTROSORT
    assert a.count == 100
    assert sorted(a.values) == list(range(1, 101))
    assert a.values == Sequence.from_permutation(100, np.random.default_rng(3)).tolist()
    with pytest.raises(InvalidConfiguration):
        SortConfig.shuffled(Algorithm.BUBBLE, 1)


def test_algorithm_parse():
    assert Algorithm.parse("0") is Algorithm.BUBBLE
    assert Algorithm.parse("3") is Algorithm.QUICKSORT
    assert Algorithm.parse(6) is Algorithm.INTROSORT
    assert Algorithm.parse("7") is Algorithm.BOGO
    assert Algorithm.parse("8") is Algorithm.SHELLSORT
    assert Algorithm.parse("MergeSort") is Algorithm.MERGESORT
    assert Algorithm.parse(" heapsort ") is Algorithm.HEAPSORT
    assert Algorithm.parse(Algorithm.SHELLSORT) is Algorithm.SHELLSORT
    assert Algorithm.QUICKSORT.title == "quicksort"
    assert Algorithm.BOGO.title == "bogo sort"


def test_frames_are_read_only():
    frames = []
    run_sort(SortConfig(Algorithm.INSERTION, [2, 1]), frames.append)
    with pytest.raises(ValueError):
        frames[0].values[0] = 5
    assert isinstance(frames[0].values, np.ndarray)
