"""
Linear scale transformations used when linking two test forms.

Linking places item parameters calibrated on a new form (X) onto the scale
of an old form (Y) with theta_Y = slope * theta_X + intercept. Following Kim
and Kolen, the backward transformation ("t-star") moves parameters from the
new form to the old form scale and the forward transformation ("t-sharp")
moves them from the old form to the new form scale. The two are inverses.
"""

from pydantic import BaseModel, ConfigDict, field_validator

from irt_models.irt.parameters import GPCM2Parameters


class LinkingCoefficients(BaseModel):
    """
    Coefficients of a linear scale transformation.

    Attributes:
        intercept: Additive constant of the transformation.
        slope: Multiplicative constant of the transformation. Must be
            non-zero.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    intercept: float = 0.0
    slope: float = 1.0

    @field_validator("slope")
    @classmethod
    def _validate_slope_nonzero(cls, slope: float) -> float:
        if slope == 0.0:
            raise ValueError("slope must be non-zero")
        return slope


def backward_transform(
    parameters: GPCM2Parameters, coefficients: LinkingCoefficients
) -> GPCM2Parameters:
    """
    Transform parameters from the new form scale to the old form scale.

    a* = a / slope, b* = b * slope + intercept, t* = t * slope.
    """
    slope = coefficients.slope
    return GPCM2Parameters(
        discrimination=parameters.discrimination / slope,
        difficulty=parameters.difficulty * slope + coefficients.intercept,
        thresholds=tuple(t * slope for t in parameters.thresholds),
    )


def forward_transform(
    parameters: GPCM2Parameters, coefficients: LinkingCoefficients
) -> GPCM2Parameters:
    """
    Transform parameters from the old form scale to the new form scale.

    a# = a * slope, b# = (b - intercept) / slope, t# = t / slope.
    """
    slope = coefficients.slope
    return GPCM2Parameters(
        discrimination=parameters.discrimination * slope,
        difficulty=(parameters.difficulty - coefficients.intercept) / slope,
        thresholds=tuple(t / slope for t in parameters.thresholds),
    )
