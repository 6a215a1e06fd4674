"""
Assertion helpers shared by the latinsq tests.
"""

import numpy as np

from latinsq.grid.model import grid_key


def as_key_set(grids) -> set:
    """Compare search outputs as sets; result order is not meaningful."""
    return {grid_key(g) for g in grids}


def assert_latin(grid: np.ndarray) -> None:
    n = grid.shape[0]
    full = set(range(1, n + 1))
    for i in range(n):
        assert set(grid[i, :].tolist()) == full
        assert set(grid[:, i].tolist()) == full
