"""Tests for logging setup."""

import logging

from grit.logging_config import get_logger, setup_logging


class TestSetupLogging:
    """Test setup_logging levels and handlers."""

    def test_levels(self):
        assert setup_logging().level == logging.WARNING
        assert setup_logging(verbose=True).level == logging.DEBUG
        assert setup_logging(quiet=True).level == logging.ERROR
        assert setup_logging(verbose=True, quiet=True).level == logging.ERROR

    def test_repeated_setup_does_not_stack_handlers(self):
        setup_logging()
        logger = setup_logging()
        assert len(logger.handlers) == 1

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "grit.log"
        setup_logging(verbose=True, log_file=str(log_file))
        get_logger("grit.tests").debug("blamed %s", "a.py")
        for handler in logging.getLogger("grit").handlers:
            handler.flush()
        assert "blamed a.py" in log_file.read_text()
        setup_logging()


class TestGetLogger:
    """Test logger naming."""

    def test_prefixes_foreign_names(self):
        assert get_logger("analysis").name == "grit.analysis"

    def test_keeps_grit_names(self):
        assert get_logger("grit.analysis.blame").name == "grit.analysis.blame"

    def test_root(self):
        assert get_logger().name == "grit"
