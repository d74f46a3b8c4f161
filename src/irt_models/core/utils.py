"""
Core utility functions shared across the IRT models package.
"""

import numpy as np
from numpy.random import Generator
from numpy.typing import ArrayLike, NDArray


def get_rng(seed: int | None = None) -> Generator:
    """
    Create a numpy random Generator with optional seed.

    Args:
        seed: Random seed for reproducibility. If None, uses entropy.

    Returns:
        A numpy random Generator instance.
    """
    return np.random.default_rng(seed)


def as_theta_array(theta: ArrayLike) -> NDArray[np.float64]:
    """
    Convert a scalar or sequence of ability values to a 1D float array.

    Args:
        theta: A single ability value or any array-like of values.

    Returns:
        Array of shape (n_theta,).
    """
    result: NDArray[np.float64] = np.atleast_1d(
        np.asarray(theta, dtype=np.float64)
    ).ravel()
    return result
