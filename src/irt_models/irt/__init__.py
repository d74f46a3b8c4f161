"""
IRT (Item Response Theory) module.

This module provides:
- The GPCM2 item model (Generalized Partial Credit Model, PARSCALE form)
- Linear scale transformations for linking test forms
- Running accumulators for item bank statistics
- Item curves, test information and response sampling
"""

from irt_models.irt.accumulators import (
    Incrementable,
    RunningMean,
    RunningStandardDeviation,
)
from irt_models.irt.base import ItemResponseModel
from irt_models.irt.curves import (
    ItemCurves,
    compute_item_curves,
    compute_test_information,
)
from irt_models.irt.enums import IrmType
from irt_models.irt.errors import UnsupportedParameterError
from irt_models.irt.gpcm2 import GPCM2Model
from irt_models.irt.linking import (
    LinkingCoefficients,
    backward_transform,
    forward_transform,
)
from irt_models.irt.parameters import GPCM2Parameters
from irt_models.irt.sampling import sample_response, sample_responses_batch

__all__ = [
    "GPCM2Model",
    "GPCM2Parameters",
    "Incrementable",
    "IrmType",
    "ItemCurves",
    "ItemResponseModel",
    "LinkingCoefficients",
    "RunningMean",
    "RunningStandardDeviation",
    "UnsupportedParameterError",
    "backward_transform",
    "compute_item_curves",
    "compute_test_information",
    "forward_transform",
    "sample_response",
    "sample_responses_batch",
]
