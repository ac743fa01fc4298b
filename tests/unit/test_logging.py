"""Unit tests for logging.py"""

import logging

from sitepub.logging import configure_logging, get_logger


def test_get_logger_is_namespaced():
    assert get_logger("pipeline").name == "sitepub.pipeline"
    assert get_logger().name == "sitepub"


def test_configure_logging_levels():
    assert configure_logging().level == logging.INFO
    assert configure_logging(verbose=True).level == logging.DEBUG


def test_configure_logging_does_not_stack_handlers():
    configure_logging()
    logger = configure_logging()
    assert len(logger.handlers) == 1


def test_configure_logging_writes_to_stderr(capsys):
    configure_logging()
    get_logger("pipeline").info("Rendered x")
    assert "INFO sitepub.pipeline: Rendered x" in capsys.readouterr().err
