"""
Core shared settings and utilities for the IRT models package.

This module provides foundational components used by the item response
models, the curve utilities and the sampling layer.
"""

from irt_models.core.settings import ModelSettings, get_settings
from irt_models.core.utils import as_theta_array, get_rng

__all__ = [
    "ModelSettings",
    "as_theta_array",
    "get_rng",
    "get_settings",
]
