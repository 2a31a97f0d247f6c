#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for logging setup and warning capture."""

import logging

import pytest

from html2anf.logging_utils import collect_warnings, configure_logging


@pytest.fixture(autouse=True)
def restore_loggers():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    names = ("html2anf", "httpx", "httpcore")
    levels = {name: logging.getLogger(name).level for name in names}
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, saved in levels.items():
        logging.getLogger(name).setLevel(saved)


@pytest.mark.unit
class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_package_level_follows_requested_level(self):
        package_logger = configure_logging("DEBUG")

        assert package_logger.name == "html2anf"
        assert package_logger.level == logging.DEBUG
        assert logging.getLogger("html2anf.layouts").isEnabledFor(logging.DEBUG)

    def test_http_client_is_quiet_by_default(self):
        configure_logging("INFO")

        assert logging.getLogger("httpx").level == logging.WARNING
        assert not logging.getLogger("httpx").isEnabledFor(logging.INFO)

    def test_trace_mode_lets_http_client_through(self):
        configure_logging("DEBUG", trace_mode=True)

        assert logging.getLogger("httpx").isEnabledFor(logging.DEBUG)

    def test_single_console_handler(self):
        configure_logging("INFO")
        configure_logging("INFO")

        assert len(logging.getLogger().handlers) == 1

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "run.log"

        configure_logging("INFO", log_file=str(log_file))
        logging.getLogger("html2anf.api").info("hello")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "hello" in log_file.read_text(encoding="utf-8")

    def test_unwritable_log_file_is_not_fatal(self, tmp_path):
        configure_logging("INFO", log_file=str(tmp_path / "missing" / "run.log"))

        assert len(logging.getLogger().handlers) == 1


@pytest.mark.unit
class TestCollectWarnings:
    """Tests for collect_warnings."""

    def test_collects_package_warnings_only(self):
        with collect_warnings() as collected:
            logging.getLogger("html2anf.layouts").warning("divergent layout")
            logging.getLogger("html2anf.layouts").info("not collected")
            logging.getLogger("someone.else").warning("not ours")

        assert collected.messages == ["divergent layout"]

    def test_handler_removed_on_exit(self):
        with collect_warnings():
            pass

        assert logging.getLogger("html2anf").handlers == []
