# Scaling constant that brings the logistic metric close to the normal ogive
DEFAULT_SCALING_CONSTANT = 1.7

# Lowest response category of a polytomous item
MIN_CATEGORY = 0

IRT_MODELS_ENV_PREFIX = "IRT_MODELS_"
