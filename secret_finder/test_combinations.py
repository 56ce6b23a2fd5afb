import pytest
from itertools import combinations
from .combinations import generate_combinations, count_combinations, check_combination_budget
from .errors import TooManyCombinations


def test_small_example():
    assert list(generate_combinations("abcd", 2)) == [
        ("a", "b"), ("a", "c"), ("a", "d"), ("b", "c"), ("b", "d"), ("c", "d"),
    ]


# same subsets, in the same order, as itertools
@pytest.mark.parametrize("n, k", [(1, 1), (4, 2), (5, 3), (6, 6), (7, 4), (9, 2)])
def test_matches_itertools(n, k):
    assert list(generate_combinations(range(n), k)) == list(combinations(range(n), k))


def test_each_subset_exactly_once():
    result = list(generate_combinations(range(8), 3))
    assert len(result) == len(set(result)) == count_combinations(8, 3) == 56


def test_order_inside_subset_is_preserved():
    items = [5, 1, 4, 2]
    for subset in generate_combinations(items, 3):
        assert list(subset) == sorted(subset, key=items.index)


def test_not_enough_items():
    assert list(generate_combinations(range(2), 3)) == []
    assert list(generate_combinations([], 1)) == []
    assert count_combinations(2, 3) == 0


def test_zero_or_negative_k():
    assert list(generate_combinations(range(3), 0)) == []
    assert list(generate_combinations(range(3), -1)) == []
    assert count_combinations(3, -1) == 0


def test_generator_is_lazy():
    gen = generate_combinations(range(30), 15)
    assert next(gen) == tuple(range(15))


def test_budget():
    assert check_combination_budget(10, 3) == 120
    assert check_combination_budget(10, 3, 0) == 120
    assert check_combination_budget(10, 3, 120) == 120
    with pytest.raises(TooManyCombinations) as info:
        check_combination_budget(10, 3, 119)
    assert info.value.count == 120
    assert info.value.limit == 119
