"""
Shared fixtures for latinsq tests.
"""

import numpy as np
import pytest


# ============================================================================
# Latin squares
# ============================================================================


@pytest.fixture
def klein4() -> np.ndarray:
    """Cayley table of the Klein four-group, symbols shifted to 1..4."""
    return np.array([[((i ^ j) + 1) for j in range(4)] for i in range(4)])


@pytest.fixture
def cyclic4() -> np.ndarray:
    """Cayley table of Z4, symbols shifted to 1..4."""
    return np.array([[((i + j) % 4) + 1 for j in range(4)] for i in range(4)])


@pytest.fixture
def cyclic3() -> np.ndarray:
    return np.array([[1, 2, 3], [2, 3, 1], [3, 1, 2]])


@pytest.fixture
def square3() -> np.ndarray:
    """Order-3 square whose diagonal is constant (rho = 2)."""
    return np.array([[1, 2, 3], [3, 1, 2], [2, 3, 1]])


# ============================================================================
# Partial squares
# ============================================================================


@pytest.fixture
def diagonal_2143() -> np.ndarray:
    """4x4 partial square with diagonal (2, 1, 4, 3) and nothing else."""
    return np.diag([2, 1, 4, 3])


@pytest.fixture
def diagonal_231() -> np.ndarray:
    """3x3 partial square with diagonal (2, 3, 1); it has a unique completion."""
    return np.diag([2, 3, 1])

