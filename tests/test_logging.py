"""
Tests for logging setup.
"""

import logging

from uplugingen.core.observability.logging_config import (
    PACKAGE_LOGGER,
    parse_level,
    resolve_level,
    setup_logging,
)


class TestParseLevel:
    def test_names(self):
        assert parse_level("debug") == logging.DEBUG
        assert parse_level("ERROR") == logging.ERROR

    def test_fallback(self):
        assert parse_level(None) == logging.WARNING
        assert parse_level("") == logging.WARNING
        assert parse_level("chatty") == logging.WARNING


class TestResolveLevel:
    def test_flags_win_over_environment(self):
        env = {"UPLUGINGEN_LOG_LEVEL": "ERROR"}
        assert resolve_level(debug=True, environ=env) == "DEBUG"
        assert resolve_level(verbose=True, environ=env) == "INFO"
        assert resolve_level(quiet=True, environ={}) == "ERROR"

    def test_environment_then_default(self):
        assert resolve_level(environ={"UPLUGINGEN_LOG_LEVEL": "INFO"}) == "INFO"
        assert resolve_level(environ={}) == "WARNING"


class TestSetupLogging:
    def test_library_default_is_silent(self):
        """Without setup, the package logger only carries a NullHandler."""
        logger = logging.getLogger(PACKAGE_LOGGER)
        assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)

    def test_console_level(self):
        logger = setup_logging("INFO")
        assert logger.name == "uplugingen"
        assert logger.level == logging.INFO
        assert logger.propagate is False
        assert len(logger.handlers) == 1
        assert logger.handlers[0].level == logging.INFO

    def test_repeated_setup_replaces_handlers(self):
        setup_logging("INFO")
        logger = setup_logging("DEBUG")
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG

    def test_root_logger_untouched(self):
        root = logging.getLogger()
        before = list(root.handlers)
        setup_logging("DEBUG")
        assert root.handlers == before

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "uplugingen.log"
        logger = setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2

        logging.getLogger("uplugingen.core.services.file_writer").debug("to file only")
        for h in logger.handlers:
            h.flush()
        assert "to file only" in log_file.read_text(encoding="utf-8")
