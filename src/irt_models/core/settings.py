from functools import lru_cache

from pydantic_settings import BaseSettings

from irt_models.core.constants import (
    DEFAULT_SCALING_CONSTANT,
    IRT_MODELS_ENV_PREFIX,
)


class ModelSettings(BaseSettings):
    model_config = {"env_prefix": IRT_MODELS_ENV_PREFIX}

    scaling_constant: float = DEFAULT_SCALING_CONSTANT
    log_level: str = "INFO"


@lru_cache(maxsize=1)
def get_settings() -> ModelSettings:
    """Settings read once from the environment."""
    return ModelSettings()
