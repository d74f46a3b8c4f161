"""
GPCM2 item parameter representation.

Parameters are held in immutable snapshots. An item keeps one snapshot for
its working values and one for the values proposed by an external
estimator; committing a proposal swaps the snapshot instead of mutating
shared arrays.
"""

from pydantic import BaseModel, ConfigDict, model_validator


class GPCM2Parameters(BaseModel):
    """
    Parameters for one item under the GPCM2 model.

    Attributes:
        discrimination: Slope parameter (a).
        difficulty: Location parameter (b).
        thresholds: Threshold parameters (t_1, ..., t_{M-1}) for an item
            with M ordered categories.
    """

    model_config = ConfigDict(frozen=True)

    discrimination: float
    difficulty: float
    thresholds: tuple[float, ...]

    @model_validator(mode="after")
    def _validate_num_thresholds(self) -> "GPCM2Parameters":
        # Need at least 2 categories, i.e. one threshold
        if len(self.thresholds) < 1:
            raise ValueError(
                f"Must have at least 1 threshold (2 categories), "
                f"got {len(self.thresholds)}"
            )
        return self

    @property
    def n_thresholds(self) -> int:
        """Number of thresholds (M-1)."""
        return len(self.thresholds)

    @property
    def n_categories(self) -> int:
        """Number of response categories (M)."""
        return len(self.thresholds) + 1

    @property
    def step_parameters(self) -> tuple[float, ...]:
        """Muraki step parameters b_k = b - t_k."""
        return tuple(self.difficulty - t for t in self.thresholds)
