"""
Item characteristic curves and information functions over a theta grid.
"""

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from irt_models.core.utils import as_theta_array
from irt_models.irt.base import ItemResponseModel


@dataclass
class ItemCurves:
    """Category probabilities, expected score and information per theta."""

    theta: NDArray[np.float64]
    probabilities: NDArray[np.float64]  # (n_theta, n_categories)
    expected_value: NDArray[np.float64]
    information: NDArray[np.float64]


def compute_item_curves(
    model: ItemResponseModel, theta: ArrayLike
) -> ItemCurves:
    """
    Evaluate an item over a grid of ability values.

    Args:
        model: Item response model.
        theta: Ability values, shape (n_theta,).

    Returns:
        ItemCurves with arrays aligned on theta.
    """
    theta_arr = as_theta_array(theta)
    return ItemCurves(
        theta=theta_arr,
        probabilities=model.category_probabilities(theta_arr),
        expected_value=model.expected_values(theta_arr),
        information=model.item_information(theta_arr),
    )


def compute_test_information(
    models: Sequence[ItemResponseModel], theta: ArrayLike
) -> NDArray[np.float64]:
    """
    Test information: the sum of item information over items.

    Args:
        models: Items on the test form.
        theta: Ability values, shape (n_theta,).

    Returns:
        Test information, shape (n_theta,).
    """
    theta_arr = as_theta_array(theta)
    total = np.zeros(len(theta_arr), dtype=np.float64)
    for model in models:
        total += model.item_information(theta_arr)
    return total
