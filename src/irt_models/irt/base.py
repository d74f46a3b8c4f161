"""
Abstract base for item response models.

Every item model variant shares the category bookkeeping (contiguous
categories starting at MIN_CATEGORY), the score weights used for expected
scores and information, and the fixed flag that excludes an item from
re-estimation. Parameters a variant does not have are reported through
capability flags; calling their accessors raises UnsupportedParameterError.
"""

from abc import ABC, abstractmethod
from typing import ClassVar

import numpy as np
from numpy.typing import ArrayLike, NDArray

from irt_models.core.constants import MIN_CATEGORY
from irt_models.irt.enums import IrmType
from irt_models.irt.errors import UnsupportedParameterError


def default_score_weights(n_categories: int) -> NDArray[np.float64]:
    """Score weights equal to the category index, 0..M-1."""
    return np.arange(n_categories, dtype=np.float64)


class ItemResponseModel(ABC):
    """Abstract Base Class for single-item response models."""

    has_guessing_parameter: ClassVar[bool] = False
    has_free_step_parameters: ClassVar[bool] = False

    def __init__(self, n_categories: int) -> None:
        self._n_categories = n_categories
        self._score_weights = default_score_weights(n_categories)
        self.is_fixed = False

    @property
    @abstractmethod
    def model_type(self) -> IrmType: ...

    @property
    @abstractmethod
    def n_parameters(self) -> int:
        """Number of free item parameters."""
        ...

    @abstractmethod
    def category_probabilities(self, theta: ArrayLike) -> NDArray[np.float64]:
        """
        Compute probabilities for all categories at given theta values.

        Args:
            theta: Ability value or values, shape (n_theta,).

        Returns:
            Probabilities, shape (n_theta, n_categories).
        """
        ...

    @abstractmethod
    def probability(self, theta: float, category: int) -> float: ...

    @abstractmethod
    def deriv_theta(self, theta: float) -> float:
        """First derivative of the expected score with respect to theta."""
        ...

    @abstractmethod
    def item_information(self, theta: ArrayLike) -> NDArray[np.float64]:
        """Item information at given theta values, shape (n_theta,)."""
        ...

    @abstractmethod
    def scale(self, intercept: float, slope: float) -> None: ...

    @abstractmethod
    def accept_all_proposal_values(self) -> None: ...

    @property
    def n_categories(self) -> int:
        """Number of response categories (M)."""
        return self._n_categories

    @property
    def min_category(self) -> int:
        return MIN_CATEGORY

    @property
    def max_category(self) -> int:
        return MIN_CATEGORY + self._n_categories - 1

    def in_category_range(self, category: int) -> bool:
        return self.min_category <= category <= self.max_category

    @property
    def score_weights(self) -> NDArray[np.float64]:
        return self._score_weights.copy()

    @score_weights.setter
    def score_weights(self, weights: ArrayLike) -> None:
        weights_arr = np.asarray(weights, dtype=np.float64)
        if weights_arr.shape != (self._n_categories,):
            raise ValueError(
                f"score_weights must have length {self._n_categories}, "
                f"got shape {weights_arr.shape}"
            )
        self._score_weights = weights_arr.copy()

    def expected_values(self, theta: ArrayLike) -> NDArray[np.float64]:
        """
        Expected item score at given theta values.

        E(theta) = sum_k w_k * P(k | theta)

        Args:
            theta: Ability value or values.

        Returns:
            Expected scores, shape (n_theta,).
        """
        probs = self.category_probabilities(theta)
        result: NDArray[np.float64] = probs @ self._score_weights
        return result

    def expected_value(self, theta: float) -> float:
        return float(self.expected_values(theta)[0])

    def item_information_at(self, theta: float) -> float:
        return float(self.item_information(theta)[0])

    # Parameters that only some variants have

    @property
    def guessing(self) -> float:
        """Lower asymptote. Zero for models without a guessing parameter."""
        return 0.0

    def set_guessing(self, guessing: float) -> None:
        raise UnsupportedParameterError("set_guessing", self.model_type)

    def set_proposal_guessing(self, guessing: float) -> None:
        raise UnsupportedParameterError(
            "set_proposal_guessing", self.model_type
        )

    def get_guessing_std_error(self) -> float:
        raise UnsupportedParameterError(
            "get_guessing_std_error", self.model_type
        )

    def set_guessing_std_error(self, std_error: float) -> None:
        raise UnsupportedParameterError(
            "set_guessing_std_error", self.model_type
        )

    def set_step_parameters(self, steps: ArrayLike) -> None:
        raise UnsupportedParameterError(
            "set_step_parameters", self.model_type
        )

    def get_step_std_errors(self) -> tuple[float, ...]:
        raise UnsupportedParameterError(
            "get_step_std_errors", self.model_type
        )

    def set_step_std_errors(self, std_errors: ArrayLike) -> None:
        raise UnsupportedParameterError(
            "set_step_std_errors", self.model_type
        )
