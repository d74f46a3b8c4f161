import logging
import sys

from irt_models.core.settings import get_settings

# 1. Set up a handler and formatter for console output.
# This handler will be used by all loggers that don't have their own handlers.
console_handler = logging.StreamHandler(sys.stdout)
console_handler.setLevel(logging.DEBUG)
formatter = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
console_handler.setFormatter(formatter)

# 2. Get the root logger and set its level from settings.
# All package and script loggers inherit from the root logger.
root_logger = logging.getLogger()
root_logger.setLevel(get_settings().log_level.upper())
root_logger.addHandler(console_handler)
