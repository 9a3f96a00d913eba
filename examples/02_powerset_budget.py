"""Find the cheapest feature subsets that fit a budget, smallest subsets first."""

from lazycomb import EnumerationConfig, powerset

COSTS = {"cache": 3, "index": 5, "replica": 8, "audit": 2}

subsets = powerset(sorted(COSTS), config=EnumerationConfig(output="tuple"))
print(f"{subsets.size_hint()[1]} subsets to scan")
for subset in subsets:
    total = sum(COSTS[name] for name in subset)
    if 8 <= total <= 10:
        print(f"{subset}: {total}")
