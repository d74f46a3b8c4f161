"""
Response sampling for item response models.

Samples categories given abilities and items, for simulation studies with
known item parameters.
"""

from collections.abc import Sequence

import numpy as np
from numpy.random import Generator
from numpy.typing import NDArray

from irt_models.core.utils import get_rng
from irt_models.irt.base import ItemResponseModel


def sample_response(
    ability: float,
    model: ItemResponseModel,
    rng: Generator | None = None,
) -> int:
    """
    Sample a single response given ability and an item.

    Args:
        ability: Candidate's latent ability.
        model: Item response model.
        rng: Random number generator.

    Returns:
        Sampled category in [min_category, max_category].
    """
    if rng is None:
        rng = get_rng()

    probs = model.category_probabilities(ability)[0]
    sampled = int(rng.choice(model.n_categories, p=probs))
    return model.min_category + sampled


def sample_responses_batch(
    abilities: NDArray[np.float64],
    models: Sequence[ItemResponseModel],
    rng: Generator | None = None,
) -> NDArray[np.int8]:
    """
    Sample responses for all candidates and items.

    Uses vectorized probability computation and sampling for efficiency.

    Args:
        abilities: Array of shape (n_candidates,) with ability values.
        models: Item response models, one per item.
        rng: Random number generator.

    Returns:
        Array of shape (n_candidates, n_items) with sampled categories.
    """
    if rng is None:
        rng = get_rng()

    n_candidates = len(abilities)
    n_items = len(models)

    responses = np.empty((n_candidates, n_items), dtype=np.int8)

    for j, model in enumerate(models):
        # Compute probabilities for all candidates at once
        probs = model.category_probabilities(abilities)

        # Vectorized sampling using cumulative probabilities
        cumprobs = np.cumsum(probs, axis=1)
        u = rng.random(n_candidates)

        # Find the category index where cumulative probability exceeds u
        sampled = np.minimum(
            (cumprobs < u[:, np.newaxis]).sum(axis=1), model.n_categories - 1
        )
        responses[:, j] = sampled + model.min_category

    return responses
