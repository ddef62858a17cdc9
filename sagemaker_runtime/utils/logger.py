"""Logging for the SageMaker Runtime client.

Library modules only call `get_logger()`; handlers are attached by the
application (here, the CLI) through `setup_logger`.
"""

import logging
import sys
from typing import Optional, TextIO

from sagemaker_runtime.utils import config

LOGGER_NAME = "sagemaker_runtime"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logger(
    level: Optional[int | str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Attach a stream handler to the package logger and set its level.

    Args:
        level: int or level name such as "DEBUG". Defaults to
            SAGEMAKER_RUNTIME_LOG_LEVEL (INFO when unset).
        stream: Where records go. Defaults to stderr so stdout stays free
            for inference output.

    Calling it again changes the level but never adds a second handler.
    """
    log = logging.getLogger(LOGGER_NAME)
    log.setLevel(level if level is not None else config.log_level())
    if not log.handlers:
        h = logging.StreamHandler(stream or sys.stderr)
        h.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        log.addHandler(h)
    return log


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """The package logger, or a child of it for `name`."""
    if name:
        return logging.getLogger(f"{LOGGER_NAME}.{name}")
    return logging.getLogger(LOGGER_NAME)
