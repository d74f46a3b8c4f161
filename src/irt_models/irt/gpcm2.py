"""
Generalized Partial Credit Model, PARSCALE parameterization (GPCM2).

For an item with M ordered categories there is one discrimination (a), one
difficulty (b) and M-1 thresholds (t). The cumulative log-odds are

    Z_0 = D * a * (theta - b)
    Z_k = Z_{k-1} + D * a * (theta - b + t_k),    k = 1, ..., M-1

and the category response function is

    P(X = k | theta) = exp(Z_k) / sum_j exp(Z_j)

Thresholds combine with the difficulty into Muraki (1992) step parameters
b_k = b - t_k. This differs from Linacre's decomposition of partial credit
steps.
"""

import logging
from collections.abc import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from irt_models.core.settings import get_settings
from irt_models.core.utils import as_theta_array
from irt_models.irt.accumulators import Incrementable
from irt_models.irt.base import ItemResponseModel
from irt_models.irt.enums import IrmType
from irt_models.irt.linking import (
    LinkingCoefficients,
    backward_transform,
    forward_transform,
)
from irt_models.irt.parameters import GPCM2Parameters

logger = logging.getLogger(__name__)


class GPCM2Model(ItemResponseModel):
    """
    GPCM2 item with working and proposal parameter snapshots.

    An external estimator stages values with the set_proposal_* methods and
    commits them with accept_all_proposal_values(). Items marked as fixed
    ignore the commit. Setting a working value directly, or scaling,
    resets the proposal snapshot to the new working values.

    Threshold vectors set after construction must keep length M-1; this is
    not checked.
    """

    def __init__(
        self,
        discrimination: float,
        difficulty: float,
        thresholds: Sequence[float],
        scaling_constant: float | None = None,
    ) -> None:
        """
        Args:
            discrimination: Slope parameter (a).
            difficulty: Location parameter (b).
            thresholds: M-1 threshold parameters for an item with M
                categories.
            scaling_constant: Scaling constant D, fixed for the lifetime of
                the item. Defaults to the configured value (1.7).
        """
        parameters = GPCM2Parameters(
            discrimination=discrimination,
            difficulty=difficulty,
            thresholds=tuple(thresholds),
        )
        super().__init__(n_categories=parameters.n_categories)
        if scaling_constant is None:
            scaling_constant = get_settings().scaling_constant
        self._scaling_constant = float(scaling_constant)

        self._parameters = parameters
        self._proposal = parameters
        self._discrimination_std_error = 0.0
        self._difficulty_std_error = 0.0
        self._threshold_std_errors = (0.0,) * parameters.n_thresholds

    @property
    def model_type(self) -> IrmType:
        return IrmType.GPCM2

    @property
    def n_parameters(self) -> int:
        return self.n_thresholds + 2

    @property
    def n_thresholds(self) -> int:
        """Number of thresholds (M-1)."""
        return self._n_categories - 1

    @property
    def scaling_constant(self) -> float:
        return self._scaling_constant

    ########################################################
    # Probability engine
    ########################################################

    def _log_numerators(
        self, theta: NDArray[np.float64]
    ) -> NDArray[np.float64]:
        """
        Cumulative log-odds Z_k for every category.

        The base term D*a*(theta-b) starts the sum for every category and
        one threshold term is added per step, left to right.

        Args:
            theta: Ability values, shape (n_theta,).

        Returns:
            Log numerators, shape (n_theta, n_categories).
        """
        scaled_a = self._scaling_constant * self._parameters.discrimination
        b = self._parameters.difficulty
        thresholds = np.array(self._parameters.thresholds, dtype=np.float64)

        base = scaled_a * (theta - b)
        steps = scaled_a * (
            theta[:, np.newaxis] - b + thresholds[np.newaxis, :]
        )
        terms = np.column_stack([base, steps])
        result: NDArray[np.float64] = np.cumsum(terms, axis=1)
        return result

    def _numerators(self, theta: NDArray[np.float64]) -> NDArray[np.float64]:
        # Evaluated directly, without shifting by the maximum
        result: NDArray[np.float64] = np.exp(self._log_numerators(theta))
        return result

    def category_probabilities(self, theta: ArrayLike) -> NDArray[np.float64]:
        """
        Compute GPCM2 probabilities for all categories at given theta values.

        Args:
            theta: Ability value or values, shape (n_theta,).

        Returns:
            Probabilities, shape (n_theta, n_categories).
        """
        numer = self._numerators(as_theta_array(theta))
        probs: NDArray[np.float64] = numer / np.sum(
            numer, axis=1, keepdims=True
        )
        return probs

    def probability(self, theta: float, category: int) -> float:
        """
        Probability of a response in category at theta.

        Categories outside [min_category, max_category] have probability 0.
        """
        if not self.in_category_range(category):
            return 0.0
        probs = self.category_probabilities(theta)
        return float(probs[0, category - self.min_category])

    ########################################################
    # Derived quantities
    ########################################################

    def deriv_theta(self, theta: float) -> float:
        """
        First derivative of the expected score with respect to theta.

        Uses dZ_k/dtheta = D*a*(k+1) together with the score weights:

            deriv = sum_k w_k * (D*n_k*(k+1)*a / d1 - n_k*x1 / d1^2)

        where n_k = exp(Z_k), d1 = sum_k n_k and x1 = sum_k D*a*(k+1)*n_k.
        """
        d = self._scaling_constant
        a = self._parameters.discrimination
        numer = self._numerators(as_theta_array(theta))[0]
        step_count = np.arange(1, len(numer) + 1, dtype=np.float64)

        d1 = float(np.sum(numer))
        d2 = d1 * d1
        x1 = float(np.sum(d * numer * step_count * a))

        p1 = (d * numer * step_count * a) / d1
        p2 = (numer * x1) / d2
        return float(np.sum(self._score_weights * (p1 - p2)))

    def item_information(self, theta: ArrayLike) -> NDArray[np.float64]:
        """
        Item information at given theta values.

        I(theta) = D^2 * a^2 * (sum_k w_k^2 P_k - (sum_k w_k P_k)^2)

        Args:
            theta: Ability value or values.

        Returns:
            Information, shape (n_theta,).
        """
        d = self._scaling_constant
        a2 = self._parameters.discrimination**2
        probs = self.category_probabilities(theta)
        weights = self._score_weights

        sum1 = probs @ (weights * weights)
        sum2 = probs @ weights
        info: NDArray[np.float64] = d * d * a2 * (sum1 - sum2**2)
        return info

    ########################################################
    # Calibration support
    ########################################################

    def increment_mean_sigma(
        self, mean: Incrementable, sd: Incrementable
    ) -> None:
        """Push every step parameter b - t_k into both accumulators."""
        for step in self._parameters.step_parameters:
            mean.increment(step)
            sd.increment(step)

    def increment_mean_mean(
        self,
        mean_discrimination: Incrementable,
        mean_difficulty: Incrementable,
    ) -> None:
        """Push the discrimination and every step parameter b - t_k."""
        mean_discrimination.increment(self._parameters.discrimination)
        for step in self._parameters.step_parameters:
            mean_difficulty.increment(step)

    ########################################################
    # Linking
    ########################################################

    def scale(self, intercept: float, slope: float) -> None:
        """
        Permanently rescale working parameters and their standard errors.

        a /= slope, b = b*slope + intercept, t *= slope. Standard errors of
        all three are multiplied by slope. The proposal is reset to the
        scaled values.
        """
        coefficients = LinkingCoefficients(intercept=intercept, slope=slope)
        self._set_working(
            backward_transform(self._parameters, coefficients)
        )
        self._discrimination_std_error *= slope
        self._difficulty_std_error *= slope
        self._threshold_std_errors = tuple(
            se * slope for se in self._threshold_std_errors
        )
        logger.debug(
            f"Scaled item with intercept={intercept}, slope={slope}: {self}"
        )

    def _linked_probability(
        self, theta: float, category: int, parameters: GPCM2Parameters
    ) -> float:
        """
        Category probability under transformed parameters.

        Z_0 = 0 and Z_k = sum_{v=1..k} D*a*(theta - (b - t_v)). The base
        term of the working-scale formula is omitted; it cancels in the
        ratio.
        """
        scaled_a = self._scaling_constant * parameters.discrimination
        thresholds = np.array(parameters.thresholds, dtype=np.float64)
        terms = scaled_a * (theta - (parameters.difficulty - thresholds))
        numer = np.exp(np.concatenate(([0.0], np.cumsum(terms))))
        return float(numer[category - self.min_category] / np.sum(numer))

    def _linked_expected_value(
        self, theta: float, parameters: GPCM2Parameters
    ) -> float:
        """Weighted sum of linked probabilities, category 0 excluded."""
        ev = 0.0
        for k in range(1, self._n_categories):
            category = self.min_category + k
            ev += self._score_weights[k] * self._linked_probability(
                theta, category, parameters
            )
        return float(ev)

    def t_star_probability(
        self, theta: float, category: int, intercept: float, slope: float
    ) -> float:
        """
        Probability of a response after the backward (new to old form)
        transformation of the item parameters, as described in Kim and
        Kolen.

        Args:
            theta: Ability value.
            category: Item response.
            intercept: Intercept of the linear transformation.
            slope: Slope of the linear transformation.

        Returns:
            Probability of a response in category, 0 when out of range.
        """
        if not self.in_category_range(category):
            return 0.0
        coefficients = LinkingCoefficients(intercept=intercept, slope=slope)
        linked = backward_transform(self._parameters, coefficients)
        return self._linked_probability(theta, category, linked)

    def t_star_expected_value(
        self, theta: float, intercept: float, slope: float
    ) -> float:
        """Expected score over categories 1..M-1 after backward transform."""
        coefficients = LinkingCoefficients(intercept=intercept, slope=slope)
        linked = backward_transform(self._parameters, coefficients)
        return self._linked_expected_value(theta, linked)

    def t_sharp_probability(
        self, theta: float, category: int, intercept: float, slope: float
    ) -> float:
        """
        Probability of a response after the forward (old to new form)
        transformation of the item parameters.
        """
        if not self.in_category_range(category):
            return 0.0
        coefficients = LinkingCoefficients(intercept=intercept, slope=slope)
        linked = forward_transform(self._parameters, coefficients)
        return self._linked_probability(theta, category, linked)

    def t_sharp_expected_value(
        self, theta: float, intercept: float, slope: float
    ) -> float:
        """Expected score over categories 1..M-1 after forward transform."""
        coefficients = LinkingCoefficients(intercept=intercept, slope=slope)
        linked = forward_transform(self._parameters, coefficients)
        return self._linked_expected_value(theta, linked)

    ########################################################
    # Parameter accessors
    ########################################################

    @property
    def parameters(self) -> GPCM2Parameters:
        """Working parameter snapshot."""
        return self._parameters

    @property
    def proposal(self) -> GPCM2Parameters:
        """Proposal parameter snapshot."""
        return self._proposal

    @property
    def discrimination(self) -> float:
        return self._parameters.discrimination

    @discrimination.setter
    def discrimination(self, discrimination: float) -> None:
        self._set_working(
            self._parameters.model_copy(
                update={"discrimination": float(discrimination)}
            )
        )

    @property
    def difficulty(self) -> float:
        return self._parameters.difficulty

    @difficulty.setter
    def difficulty(self, difficulty: float) -> None:
        self._set_working(
            self._parameters.model_copy(
                update={"difficulty": float(difficulty)}
            )
        )

    @property
    def thresholds(self) -> tuple[float, ...]:
        return self._parameters.thresholds

    @thresholds.setter
    def thresholds(self, thresholds: Sequence[float]) -> None:
        self._set_working(
            self._parameters.model_copy(
                update={"thresholds": tuple(float(t) for t in thresholds)}
            )
        )

    @property
    def step_parameters(self) -> tuple[float, ...]:
        """Step parameters b - t_k."""
        return self._parameters.step_parameters

    @property
    def discrimination_std_error(self) -> float:
        return self._discrimination_std_error

    @discrimination_std_error.setter
    def discrimination_std_error(self, std_error: float) -> None:
        self._discrimination_std_error = float(std_error)

    @property
    def difficulty_std_error(self) -> float:
        return self._difficulty_std_error

    @difficulty_std_error.setter
    def difficulty_std_error(self, std_error: float) -> None:
        self._difficulty_std_error = float(std_error)

    @property
    def threshold_std_errors(self) -> tuple[float, ...]:
        return self._threshold_std_errors

    @threshold_std_errors.setter
    def threshold_std_errors(self, std_errors: Sequence[float]) -> None:
        self._threshold_std_errors = tuple(float(se) for se in std_errors)

    ########################################################
    # Proposal protocol
    ########################################################

    @property
    def proposal_discrimination(self) -> float:
        return self._proposal.discrimination

    @property
    def proposal_difficulty(self) -> float:
        return self._proposal.difficulty

    @property
    def proposal_thresholds(self) -> tuple[float, ...]:
        return self._proposal.thresholds

    def set_proposal_discrimination(self, discrimination: float) -> None:
        self._proposal = self._proposal.model_copy(
            update={"discrimination": float(discrimination)}
        )

    def set_proposal_difficulty(self, difficulty: float) -> None:
        self._proposal = self._proposal.model_copy(
            update={"difficulty": float(difficulty)}
        )

    def set_proposal_thresholds(self, thresholds: Sequence[float]) -> None:
        """Stage a copy of the supplied thresholds."""
        self._proposal = self._proposal.model_copy(
            update={"thresholds": tuple(float(t) for t in thresholds)}
        )

    def _set_working(self, parameters: GPCM2Parameters) -> None:
        # Unstaged proposal values follow the working values
        self._parameters = parameters
        self._proposal = parameters

    def accept_all_proposal_values(self) -> None:
        """Commit proposal values unless the item is fixed."""
        if self.is_fixed:
            logger.debug(f"Item is fixed, proposal ignored: {self}")
            return
        self._parameters = self._proposal

    def __str__(self) -> str:
        values = [self.discrimination, self.difficulty, *self.step_parameters]
        return "[" + ", ".join(str(v) for v in values) + "]"

    def __repr__(self) -> str:
        return (
            f"GPCM2Model(discrimination={self.discrimination}, "
            f"difficulty={self.difficulty}, thresholds={self.thresholds}, "
            f"scaling_constant={self.scaling_constant})"
        )
