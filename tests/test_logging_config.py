"""Tests for logging setup."""

import io
import logging

import pytest

from utils.logging_config import ColoredFormatter, get_logger, level_from_flags, setup_logging


def test_get_logger_nests_under_application_logger():
    assert get_logger('processors.scanner').name == 'vidsearch.processors.scanner'
    assert get_logger('vidsearch.core').name == 'vidsearch.core'
    assert get_logger().name == 'vidsearch'


@pytest.mark.parametrize("verbose, debug, expected", [
    (False, False, logging.WARNING),
    (True, False, logging.INFO),
    (False, True, logging.DEBUG),
    (True, True, logging.DEBUG),
])
def test_level_from_flags(verbose, debug, expected):
    assert level_from_flags(verbose, debug) == expected


def test_console_output_goes_to_given_stream():
    stream = io.StringIO()
    setup_logging(logging.INFO, stream=stream)
    get_logger('processors.scanner').info("Found 3 subtitle files")
    get_logger('processors.scanner').debug("hidden")
    assert stream.getvalue() == "INFO: Found 3 subtitle files\n"


def test_log_file_receives_messages(tmp_path):
    log_file = tmp_path / 'logs' / 'run.log'
    app_logger = setup_logging(logging.INFO, log_file=log_file, stream=io.StringIO())
    get_logger('tests').warning("scan started")
    for handler in app_logger.handlers:
        handler.flush()
    line = log_file.read_text(encoding='utf-8')
    assert "vidsearch.tests WARNING: scan started" in line


def test_setup_logging_replaces_handlers():
    setup_logging(stream=io.StringIO())
    app_logger = setup_logging(stream=io.StringIO())
    assert len(app_logger.handlers) == 1


def test_colored_formatter_leaves_record_untouched():
    record = logging.LogRecord('vidsearch', logging.ERROR, __file__, 1, "boom", None, None)
    formatted = ColoredFormatter('%(levelname)s: %(message)s').format(record)
    assert formatted == "\033[31mERROR\033[0m: boom"
    assert record.levelname == "ERROR"
