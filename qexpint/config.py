"""JAX and logging configuration module.

Imported by the package before anything touches JAX so that the drive
derivatives are computed in 64-bit precision.
"""

import logging
import os

from jax import config

config.update("jax_enable_x64", True)


def setup_logging() -> None:
    """Configure logging from the QEXPINT_LOG_LEVEL environment variable.

    Examples:
        # Default (WARNING level)
        python script.py

        # Per-step evaluation and construction details
        QEXPINT_LOG_LEVEL=DEBUG python script.py
    """
    level_name = os.environ.get("QEXPINT_LOG_LEVEL", "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)

    logging.basicConfig(
        level=level,
        format="%(name)s - %(levelname)s - %(message)s",
    )


setup_logging()
