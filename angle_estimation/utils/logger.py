"""
Logging utilities for angle_estimation.

Library modules log through ``logging.getLogger(__name__)`` and never
install handlers. Applications call :func:`setup_logger` once to get
console output.
"""

import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "angle_estimation"

console = Console()


def setup_logger(
    name: str = ROOT_LOGGER,
    level: str = "INFO",
    use_rich: bool = True,
) -> logging.Logger:
    """
    Setup logger with consistent formatting.

    Args:
        name: Logger name
        level: Logging level name, e.g. "DEBUG"
        use_rich: Whether to use rich console formatting

    Returns:
        logger: Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))
    # Skip if already configured
    if logger.handlers:
        return logger

    if use_rich:
        handler = RichHandler(
            console=console,
            show_time=True,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    else:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )

    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger below the package namespace.

    Args:
        name: Logger name, defaults to the package root logger

    Returns:
        logger: Logger instance
    """
    if name is None:
        name = ROOT_LOGGER
    return logging.getLogger(name)
