"""Logging configuration for the outline core and its CLI.

The package disables its own loguru records on import so that embedding
applications see nothing unless they opt in; the CLI opts in here.
"""

import sys

from loguru import logger


def configure_logging(*, verbose: bool = False) -> None:
    """Route bulletpoints records to stderr at INFO, or DEBUG when verbose.

    DEBUG includes every action the mutation engine declined to apply.
    """
    logger.remove()
    logger.enable("bulletpoints")
    level = "DEBUG" if verbose else "INFO"
    logger.add(sys.stderr, level=level, format="{level.icon} {message}")
