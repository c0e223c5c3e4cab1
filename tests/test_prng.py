"""Tests for the seeded random stream."""

import numpy as np
import pytest


def test_known_sequence():
    from patternforge.prng import Prng
    rng = Prng(1)
    state = 1
    for _ in range(5):
        state = (state * 1103515245 + 12345) % 2**31
        assert rng.next() == state / 2**31


def test_same_seed_same_sequence():
    from patternforge.prng import Prng
    a, b = Prng(1234), Prng(1234)
    assert [a.next() for _ in range(100)] == [b.next() for _ in range(100)]


def test_range_is_half_open():
    from patternforge.prng import Prng
    rng = Prng(0)
    values = [rng.next() for _ in range(10000)]
    assert min(values) >= 0.0
    assert max(values) < 1.0


def test_uniformity_chi_square():
    from patternforge.prng import Prng
    rng = Prng(20240601)
    draws = np.array([rng.next() for _ in range(1_000_000)])
    counts, _ = np.histogram(draws, bins=100, range=(0.0, 1.0))
    expected = len(draws) / 100
    chi2 = ((counts - expected) ** 2 / expected).sum()
    # 99 degrees of freedom; 160 is far beyond the 99.9th percentile.
    assert chi2 < 160


def test_pick_frequencies():
    from patternforge.prng import Prng
    rng = Prng(77)
    items = ["a", "b", "c", "d", "e"]
    n = 100_000
    picks = [rng.pick(items) for _ in range(n)]
    for item in items:
        assert abs(picks.count(item) / n - 0.2) < 0.01


def test_pick_empty_raises():
    from patternforge.prng import Prng
    from patternforge.errors import InvalidParameter
    with pytest.raises(InvalidParameter):
        Prng(1).pick([])


def test_shuffle_is_permutation_and_consumes_one_draw_per_swap():
    from patternforge.prng import Prng
    items = list(range(10))
    rng = Prng(5)
    shuffled = rng.shuffle(items)
    assert sorted(shuffled) == items
    assert items == list(range(10))

    reference = Prng(5)
    for _ in range(9):
        reference.next()
    assert rng.state == reference.state


def test_uniform_and_randint_bounds():
    from patternforge.prng import Prng
    rng = Prng(3)
    for _ in range(1000):
        assert 2.0 <= rng.uniform(2.0, 5.0) < 5.0
        assert 0 <= rng.randint(7) < 7


def test_fork_is_independent_of_child_use():
    from patternforge.prng import Prng
    parent1, parent2 = Prng(9), Prng(9)
    child1 = parent1.fork(1)
    child2 = parent2.fork(1)
    for _ in range(50):
        child1.next()
    assert parent1.next() == parent2.next()
    assert child1.state != child2.state


def test_fork_salt_changes_stream():
    from patternforge.prng import Prng
    a = Prng(9).fork(1)
    b = Prng(9).fork(2)
    assert [a.next() for _ in range(3)] != [b.next() for _ in range(3)]
