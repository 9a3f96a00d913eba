"""Sweep a hyper-parameter grid; the last axis varies fastest."""

import numpy as np

from lazycomb import EnumerationConfig, multi_cartesian_product, multi_cartesian_product_map

learning_rates = [1e-3, 1e-2]
batch_sizes = range(16, 65, 16)


def seeds():
    # A factory lane: called again whenever the lane restarts.
    return iter((0, 1))


grid = multi_cartesian_product([learning_rates, batch_sizes, seeds])
print(f"{grid.count()} settings")
for lr, batch, seed in grid:
    print(f"lr={lr:g} batch={batch} seed={seed}")

arrays = multi_cartesian_product(
    [learning_rates, batch_sizes],
    config=EnumerationConfig(output="array", dtype="float64"),
)
print(np.stack(list(arrays)))

labels = multi_cartesian_product_map([learning_rates, batch_sizes], lambda w: f"{w[0]:g}/{w[1]}")
print(list(labels))
