"""
Tests for the package logger setup.
"""

from __future__ import annotations

import io
import logging

import pytest

from sagemaker_runtime.utils.logger import LOGGER_NAME, get_logger, setup_logger


@pytest.fixture
def package_logger():
    log = logging.getLogger(LOGGER_NAME)
    saved = (log.level, list(log.handlers))
    log.handlers = []
    yield log
    log.setLevel(saved[0])
    log.handlers = saved[1]


def test_level_from_environment(package_logger: logging.Logger, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SAGEMAKER_RUNTIME_LOG_LEVEL", "warning")
    setup_logger(stream=io.StringIO())
    assert package_logger.level == logging.WARNING


def test_single_handler_and_level_update(package_logger: logging.Logger) -> None:
    stream = io.StringIO()
    setup_logger(level="INFO", stream=stream)
    setup_logger(level="DEBUG", stream=io.StringIO())
    assert len(package_logger.handlers) == 1
    assert package_logger.level == logging.DEBUG

    get_logger("client").debug("attempt %d", 1)
    line = stream.getvalue()
    assert "| DEBUG | sagemaker_runtime.client | attempt 1" in line


def test_get_logger_children() -> None:
    assert get_logger().name == LOGGER_NAME
    assert get_logger("dispatch").name == "sagemaker_runtime.dispatch"
