from __future__ import annotations

import logging
from io import StringIO

import pytest

from manroland_parser.logging.init import (
    LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    reset_logging,
    set_debug,
    setup_logging,
)


@pytest.fixture(autouse=True)
def _fresh_logger():
    reset_logging()
    yield
    reset_logging()


def test_setup_logging_creates_logger_with_labeled_formatter():
    logger = setup_logging()

    assert logger.name == "manroland_parser"
    assert logger.level == logging.INFO
    assert logger.propagate is False
    assert len(logger.handlers) == 1
    handler = logger.handlers[0]
    assert isinstance(handler, logging.StreamHandler)
    assert isinstance(handler.formatter, LabeledFormatter)


def test_logging_labeled_prefixes():
    out = StringIO()
    logger = setup_logging(stream=out)

    logger.debug("Test debug message")
    logger.info("Test info message")
    logger.warning("Test warning message")
    logger.error("Test error message")
    logger.log(SUMMARY_LEVEL, "Test summary message")

    lines = out.getvalue().strip().split("\n")
    assert lines == [
        "INFO Test info message",
        "WARN Test warning message",
        "ERROR Test error message",
        "SUMMARY Test summary message",
    ]
    assert logging.getLevelName(SUMMARY_LEVEL) == "SUMMARY"


def test_exception_traceback_follows_message():
    out = StringIO()
    logger = setup_logging(stream=out)
    try:
        raise ValueError("bad cell")
    except ValueError:
        logger.exception("parse failed")

    lines = out.getvalue().splitlines()
    assert lines[0] == "ERROR parse failed"
    assert lines[1].startswith("Traceback")
    assert lines[-1] == "ValueError: bad cell"


def test_setup_logging_idempotent():
    first = StringIO()
    logger1 = setup_logging(stream=first)
    logger2 = setup_logging(level=logging.DEBUG, stream=StringIO())
    assert logger1 is logger2
    assert len(logger1.handlers) == 1
    assert logger1.level == logging.INFO

    logger2.info("once")
    assert first.getvalue() == "INFO once\n"


def test_library_modules_log_through_package_logger():
    out = StringIO()
    logger = setup_logging(stream=out)
    set_debug(logger)
    logging.getLogger("manroland_parser.services.parser").debug("found headers")
    assert out.getvalue() == "DEBUG found headers\n"


def test_reset_logging_detaches_labeled_handler_only():
    logger = logging.getLogger(LOGGER_NAME)
    foreign = logging.NullHandler()
    logger.addHandler(foreign)
    try:
        setup_logging(stream=StringIO())
        reset_logging()
        assert logger.handlers == [foreign]
        assert logger.propagate is True
        assert logger.level == logging.NOTSET
    finally:
        logger.removeHandler(foreign)
