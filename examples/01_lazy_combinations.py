"""Pick pairs out of an endless stream without materializing it."""

import itertools

from lazycomb import combinations


def readings():
    value = 0
    while True:
        yield value * value
        value += 1


pairs = combinations(readings(), 2)
for pair in itertools.islice(pairs, 5):
    print(pair)
print(f"pool holds {pairs.n} readings, bounds on the rest: {pairs.size_hint()}")
