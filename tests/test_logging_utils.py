"""Tests for the package logging setup."""

import io
import logging
import sys
from pathlib import Path

import pytest

from diff2html.logging_utils import PACKAGE_LOGGER, configure_logging


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


class TestConfigureLogging:
    def test_repeated_calls_keep_one_handler(self):
        configure_logging(logging.INFO)
        logger = configure_logging(logging.DEBUG)
        assert logger.name == PACKAGE_LOGGER
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_root_logger_untouched(self):
        root = logging.getLogger()
        before = list(root.handlers)
        configure_logging(logging.INFO)
        assert root.handlers == before

    def test_follows_current_stderr(self, monkeypatch):
        configure_logging(logging.INFO)
        captured = io.StringIO()
        monkeypatch.setattr(sys, "stderr", captured)
        logging.getLogger("diff2html.cli").info("hello")
        assert captured.getvalue() == "INFO: hello\n"

    def test_level_filters_records(self, monkeypatch):
        configure_logging(logging.WARNING)
        captured = io.StringIO()
        monkeypatch.setattr(sys, "stderr", captured)
        logging.getLogger("diff2html.git.adapter").info("quiet")
        assert captured.getvalue() == ""

    def test_trace_format_names_logger(self, monkeypatch):
        configure_logging(logging.DEBUG, trace_mode=True)
        captured = io.StringIO()
        monkeypatch.setattr(sys, "stderr", captured)
        logging.getLogger("diff2html.git.diff_parser").debug("step")
        assert "[DEBUG] [diff2html.git.diff_parser] step" in captured.getvalue()

    def test_log_file(self, tmp_path: Path, monkeypatch):
        monkeypatch.setattr(sys, "stderr", io.StringIO())
        log_path = tmp_path / "run.log"
        logger = configure_logging(logging.INFO, log_file=str(log_path))
        assert len(logger.handlers) == 2
        logging.getLogger("diff2html.cli").info("written")
        text = log_path.read_text(encoding="utf-8")
        assert "Logging to file" in text
        assert "INFO: written" in text

    def test_unwritable_log_file_warns(self, tmp_path: Path, monkeypatch):
        captured = io.StringIO()
        monkeypatch.setattr(sys, "stderr", captured)
        logger = configure_logging(logging.INFO, log_file=str(tmp_path / "missing" / "run.log"))
        assert len(logger.handlers) == 1
        assert "Could not create log file" in captured.getvalue()
