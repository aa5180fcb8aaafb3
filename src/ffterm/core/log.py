"""
Logging setup backed by rich.

The library only ever logs under the ``ffterm`` logger; handlers
are attached here when an application opts in via configure().
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .config import LoggingConfig

LOGGER_NAME = "ffterm"
FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Marks handlers installed by setup_logging so re-configuring replaces them
_HANDLER_FLAG = "_ffterm_handler"


def setup_logging(
    config: Optional[LoggingConfig] = None,
    console: Optional[Console] = None,
) -> logging.Logger:
    """
    Attach rich (and optionally file) handlers to the ffterm logger.

    Args:
        config: Logging configuration, defaults to LoggingConfig()
        console: Console for the rich handler, defaults to a stderr console

    Returns:
        The configured ``ffterm`` logger
    """
    config = config or LoggingConfig()
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(config.level)

    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_FLAG, False):
            logger.removeHandler(handler)
            handler.close()

    rich_handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=config.rich_tracebacks,
    )
    rich_handler.setFormatter(logging.Formatter("%(message)s"))
    setattr(rich_handler, _HANDLER_FLAG, True)
    logger.addHandler(rich_handler)

    if config.file:
        file_handler = logging.FileHandler(config.file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        setattr(file_handler, _HANDLER_FLAG, True)
        logger.addHandler(file_handler)

    return logger
