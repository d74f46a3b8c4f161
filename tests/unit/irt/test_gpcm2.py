"""
Tests for the GPCM2 item model.

Cumulative log-odds: Z_0 = D*a*(θ-b), Z_k = Z_{k-1} + D*a*(θ-b+t_k).
"""

import math

import numpy as np
import pytest

from irt_models.irt import GPCM2Model, IrmType, UnsupportedParameterError


def make_item() -> GPCM2Model:
    """Three category item with symmetric thresholds."""
    return GPCM2Model(
        discrimination=1.2,
        difficulty=0.0,
        thresholds=[-0.5, 0.5],
        scaling_constant=1.7,
    )


ITEMS = [
    GPCM2Model(1.2, 0.0, [-0.5, 0.5], 1.7),
    GPCM2Model(0.8, -0.4, [0.3], 1.7),
    GPCM2Model(1.5, 0.7, [-1.0, 0.2, 0.9], 1.0),
    GPCM2Model(0.5, 1.2, [1.1, 0.4, -0.3, -1.2], 1.7),
]


class TestProbabilities:
    """Tests for GPCM2Model.probability and category_probabilities."""

    def test_concrete_three_category_item(self) -> None:
        """Check the worked example against the closed form."""
        item = make_item()

        # Z = [0, -1.02, 0] at theta = 0
        e = math.exp(-1.02)
        expected = [1.0 / (2.0 + e), e / (2.0 + e), 1.0 / (2.0 + e)]

        probs = [item.probability(0.0, k) for k in range(3)]
        np.testing.assert_allclose(probs, expected, rtol=1e-12)
        assert sum(probs) == pytest.approx(1.0, abs=1e-9)
        assert probs[0] == pytest.approx(probs[2])

    @pytest.mark.parametrize("item", ITEMS)
    def test_probabilities_sum_to_one(self, item: GPCM2Model) -> None:
        """Probabilities must sum to 1 across all categories."""
        for theta in np.linspace(-4.0, 4.0, 17):
            total = sum(
                item.probability(theta, k)
                for k in range(item.min_category, item.max_category + 1)
            )
            assert total == pytest.approx(1.0, abs=1e-9), (
                f"Probs don't sum to 1 at θ={theta}"
            )

    def test_out_of_range_category_is_zero(self) -> None:
        item = make_item()

        assert item.min_category == 0
        assert item.max_category == 2
        assert item.probability(0.3, -1) == 0.0
        assert item.probability(0.3, 3) == 0.0
        assert item.probability(0.3, 100) == 0.0

    def test_batch_probabilities_shape(self) -> None:
        """Batch computation should return correct shape."""
        item = ITEMS[2]
        theta = np.array([-2.0, 0.0, 0.2, 2.0], dtype=np.float64)

        probs = item.category_probabilities(theta)

        assert probs.shape == (4, 4)
        np.testing.assert_allclose(probs.sum(axis=1), 1.0, rtol=1e-12)

    def test_batch_matches_scalar(self) -> None:
        item = ITEMS[3]
        theta = np.array([-1.5, 0.25, 2.0])

        probs = item.category_probabilities(theta)

        for i, theta_value in enumerate(theta):
            for k in range(item.n_categories):
                assert probs[i, k] == pytest.approx(
                    item.probability(theta_value, k), rel=1e-12
                )

    def test_high_ability_prefers_top_category(self) -> None:
        item = ITEMS[2]
        probs = item.category_probabilities(4.0)[0]
        assert int(np.argmax(probs)) == item.max_category


class TestDerivedQuantities:
    """Tests for expected value, derivative and information."""

    def test_expected_value_symmetric_item(self) -> None:
        """Symmetric thresholds around b give E(X) = 1 at θ = b."""
        item = make_item()
        assert item.expected_value(0.0) == pytest.approx(1.0)

    def test_expected_value_matches_weighted_sum(self) -> None:
        item = ITEMS[2]
        theta = 0.35

        expected = sum(k * item.probability(theta, k) for k in range(4))

        assert item.expected_value(theta) == pytest.approx(expected)

    def test_information_concrete_item(self) -> None:
        item = make_item()
        p = [item.probability(0.0, k) for k in range(3)]
        sum1 = p[1] + 4.0 * p[2]
        sum2 = p[1] + 2.0 * p[2]

        expected = 1.7**2 * 1.2**2 * (sum1 - sum2**2)

        assert item.item_information_at(0.0) == pytest.approx(expected)

    @pytest.mark.parametrize("item", ITEMS)
    def test_information_non_negative(self, item: GPCM2Model) -> None:
        theta = np.linspace(-4.0, 4.0, 33)
        info = item.item_information(theta)
        assert np.all(info >= 0.0)
        for theta_value in theta:
            assert item.item_information_at(theta_value) >= 0.0

    @pytest.mark.parametrize("item", ITEMS)
    def test_deriv_theta_matches_finite_difference(
        self, item: GPCM2Model
    ) -> None:
        """deriv_theta is the slope of the expected score curve."""
        h = 1e-5
        for theta in [-2.0, -0.5, 0.0, 0.7, 1.8]:
            numeric = (
                item.expected_value(theta + h) - item.expected_value(theta - h)
            ) / (2 * h)
            assert item.deriv_theta(theta) == pytest.approx(
                numeric, rel=1e-5, abs=1e-8
            )

    def test_deriv_theta_uses_score_weights(self) -> None:
        item = make_item()
        item.score_weights = [0.0, 0.0, 0.0]
        assert item.deriv_theta(0.4) == pytest.approx(0.0)

        item.score_weights = [0.0, 2.0, 4.0]
        doubled = item.deriv_theta(0.4)
        item.score_weights = [0.0, 1.0, 2.0]
        assert doubled == pytest.approx(2.0 * item.deriv_theta(0.4))

    def test_custom_score_weights_change_expected_value(self) -> None:
        item = make_item()
        item.score_weights = [1.0, 1.0, 1.0]
        assert item.expected_value(-1.3) == pytest.approx(1.0)

    def test_score_weights_wrong_length_raises(self) -> None:
        item = make_item()
        with pytest.raises(ValueError, match="score_weights"):
            item.score_weights = [0.0, 1.0]

    def test_default_score_weights_are_category_indices(self) -> None:
        item = ITEMS[3]
        np.testing.assert_array_equal(item.score_weights, [0, 1, 2, 3, 4])


class TestScale:
    """Tests for GPCM2Model.scale."""

    def test_scale_transforms_parameters_and_std_errors(self) -> None:
        item = GPCM2Model(1.2, 0.3, [-0.5, 0.5], 1.7)
        item.discrimination_std_error = 0.1
        item.difficulty_std_error = 0.2
        item.threshold_std_errors = [0.05, 0.07]

        item.scale(intercept=0.5, slope=2.0)

        assert item.discrimination == pytest.approx(0.6)
        assert item.difficulty == pytest.approx(1.1)
        assert item.thresholds == pytest.approx((-1.0, 1.0))
        assert item.discrimination_std_error == pytest.approx(0.2)
        assert item.difficulty_std_error == pytest.approx(0.4)
        assert item.threshold_std_errors == pytest.approx((0.1, 0.14))

    @pytest.mark.parametrize("item_idx", range(len(ITEMS)))
    def test_scale_invariance(self, item_idx: int) -> None:
        """P'(θ*slope + intercept) equals P(θ) after scaling."""
        original = ITEMS[item_idx]
        scaled = GPCM2Model(
            original.discrimination,
            original.difficulty,
            original.thresholds,
            original.scaling_constant,
        )
        intercept, slope = -0.4, 1.3

        scaled.scale(intercept, slope)

        for theta in [-2.0, 0.0, 1.5]:
            np.testing.assert_allclose(
                scaled.category_probabilities(theta * slope + intercept),
                original.category_probabilities(theta),
                rtol=1e-10,
            )

    def test_scale_resets_proposal_to_scaled_values(self) -> None:
        item = make_item()
        item.scale(1.0, 2.0)
        assert item.proposal_discrimination == pytest.approx(0.6)
        assert item.proposal_difficulty == pytest.approx(1.0)
        assert item.proposal_thresholds == pytest.approx((-1.0, 1.0))

    def test_partial_proposal_after_scale_keeps_scaling(self) -> None:
        """Accepting a staged difficulty must not revert the other values."""
        item = GPCM2Model(1.2, 0.3, [-0.5, 0.5], 1.7)
        item.scale(0.5, 2.0)

        item.set_proposal_difficulty(item.difficulty + 0.1)
        item.accept_all_proposal_values()

        assert item.discrimination == pytest.approx(0.6)
        assert item.difficulty == pytest.approx(1.2)
        assert item.thresholds == pytest.approx((-1.0, 1.0))


class TestAccessors:
    """Tests for parameter accessors and bookkeeping."""

    def test_bookkeeping(self) -> None:
        item = make_item()

        assert item.n_categories == 3
        assert item.n_thresholds == 2
        assert item.n_parameters == 4
        assert item.n_parameters == item.n_thresholds + 2
        assert item.model_type == IrmType.GPCM2
        assert item.scaling_constant == 1.7
        assert item.is_fixed is False

    def test_step_parameters(self) -> None:
        item = GPCM2Model(1.0, 0.2, [-0.5, 0.5], 1.7)
        assert item.step_parameters == pytest.approx((0.7, -0.3))

    def test_str_lists_discrimination_difficulty_and_steps(self) -> None:
        item = make_item()
        assert str(item) == "[1.2, 0.0, 0.5, -0.5]"

    def test_setters_replace_working_values(self) -> None:
        item = make_item()

        item.discrimination = 0.9
        item.difficulty = -0.2
        item.thresholds = [-0.1, 0.3]

        assert item.parameters.discrimination == 0.9
        assert item.parameters.difficulty == -0.2
        assert item.parameters.thresholds == (-0.1, 0.3)

    def test_std_errors_default_to_zero(self) -> None:
        item = make_item()
        assert item.discrimination_std_error == 0.0
        assert item.difficulty_std_error == 0.0
        assert item.threshold_std_errors == (0.0, 0.0)

    def test_requires_at_least_one_threshold(self) -> None:
        with pytest.raises(ValueError, match="at least 1 threshold"):
            GPCM2Model(1.0, 0.0, [], 1.7)


class TestProposalProtocol:
    """Tests for staging and accepting proposal values."""

    def test_proposal_starts_at_construction_values(self) -> None:
        item = make_item()
        assert item.proposal == item.parameters

    def test_accept_copies_proposals(self) -> None:
        item = make_item()
        item.set_proposal_discrimination(1.4)
        item.set_proposal_difficulty(0.25)
        item.set_proposal_thresholds([-0.7, 0.6])

        # Working values unchanged until accepted
        assert item.discrimination == 1.2

        item.accept_all_proposal_values()

        assert item.discrimination == 1.4
        assert item.difficulty == 0.25
        assert item.thresholds == (-0.7, 0.6)

    def test_proposal_thresholds_stage_supplied_values(self) -> None:
        item = make_item()
        new_thresholds = [-0.8, 0.9]

        item.set_proposal_thresholds(new_thresholds)
        new_thresholds[0] = 99.0

        assert item.proposal_thresholds == (-0.8, 0.9)
        assert item.thresholds == (-0.5, 0.5)

    def test_accept_without_staging_keeps_edited_values(self) -> None:
        item = make_item()
        item.discrimination = 0.9
        item.difficulty = -0.2
        item.thresholds = [-0.1, 0.3]

        item.accept_all_proposal_values()

        assert item.discrimination == 0.9
        assert item.difficulty == -0.2
        assert item.thresholds == (-0.1, 0.3)

    def test_staged_field_survives_setter_on_other_field(self) -> None:
        item = make_item()
        item.discrimination = 0.9
        item.set_proposal_difficulty(0.4)

        item.accept_all_proposal_values()

        assert item.discrimination == 0.9
        assert item.difficulty == 0.4

    def test_fixed_item_ignores_proposals(self) -> None:
        item = make_item()
        item.is_fixed = True
        item.set_proposal_discrimination(2.0)
        item.set_proposal_difficulty(1.0)
        item.set_proposal_thresholds([0.1, 0.2])

        item.accept_all_proposal_values()

        assert item.discrimination == 1.2
        assert item.difficulty == 0.0
        assert item.thresholds == (-0.5, 0.5)


class TestUnsupportedParameters:
    """GPCM2 has no guessing parameter and no free step parameters."""

    def test_guessing_is_zero(self) -> None:
        item = make_item()
        assert item.guessing == 0.0
        assert item.has_guessing_parameter is False
        assert item.has_free_step_parameters is False

    @pytest.mark.parametrize(
        ("method", "args"),
        [
            ("set_guessing", (0.2,)),
            ("set_proposal_guessing", (0.2,)),
            ("get_guessing_std_error", ()),
            ("set_guessing_std_error", (0.01,)),
            ("set_step_parameters", ([0.1, 0.2],)),
            ("get_step_std_errors", ()),
            ("set_step_std_errors", ([0.1, 0.2],)),
        ],
    )
    def test_unsupported_operations_raise(
        self, method: str, args: tuple[object, ...]
    ) -> None:
        for item in ITEMS:
            with pytest.raises(UnsupportedParameterError) as exc_info:
                getattr(item, method)(*args)
            assert isinstance(exc_info.value, NotImplementedError)
            assert exc_info.value.operation == method
            assert exc_info.value.model_type == IrmType.GPCM2
