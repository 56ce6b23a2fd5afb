from math import comb
from .errors import TooManyCombinations

# C(n, k) grows exponentially in n-k, this is only meant for a handful of shares.
# max_combinations is the opt-in guard for anything larger


def generate_combinations(items, k: int):
    """
    yields every size-k subset of items exactly once, as a tuple.
    elements keep their order from items, e.g (a, b, c), k=2 -> (a, b), (a, c), (b, c)
    """
    items = tuple(items)
    if k <= 0 or k > len(items):
        return

    current = []

    # include items[start], recurse, then exclude it and recurse
    def walk(start):
        if len(current) == k:
            yield tuple(current)
            return
        # not enough items left to fill the subset
        if len(items) - start < k - len(current):
            return
        current.append(items[start])
        yield from walk(start + 1)
        current.pop()
        yield from walk(start + 1)

    yield from walk(0)


def count_combinations(n: int, k: int) -> int:
    if k < 0 or n < k:
        return 0
    return comb(n, k)


def check_combination_budget(n: int, k: int, limit=None) -> int:
    """
    returns C(n, k), or raises TooManyCombinations if it is over limit.
    a limit of None or 0 means no limit
    """
    count = count_combinations(n, k)
    if limit and count > limit:
        raise TooManyCombinations(count, limit)
    return count
