"""
Unit tests for the logging setup.
"""

import logging

import pytest

from user_orders_api.app.core.logging_config import setup_logging


class TestSetupLogging:
    """Tests for setup_logging."""

    @pytest.fixture
    def bare_root(self):
        """Root logger without handlers, restored afterwards."""
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        root.handlers = []
        yield root
        for handler in root.handlers:
            handler.close()
        root.handlers = saved_handlers
        root.setLevel(saved_level)

    def test_handlers_installed_once(self, bare_root):
        setup_logging("INFO")
        setup_logging("INFO")

        assert len(bare_root.handlers) == 1

    def test_level_follows_latest_call(self, bare_root):
        setup_logging("INFO")
        setup_logging("debug")

        assert bare_root.level == logging.DEBUG

    def test_unknown_level_means_info(self, bare_root):
        setup_logging("chatty")

        assert bare_root.level == logging.INFO

    def test_file_handler(self, bare_root, tmp_path):
        logfile = tmp_path / "api.log"
        setup_logging("INFO", str(logfile))

        logging.getLogger("user_orders_api.test").info("hello file")
        for handler in bare_root.handlers:
            handler.flush()

        assert len(bare_root.handlers) == 2
        assert "[INFO] user_orders_api.test: hello file" in logfile.read_text(encoding="utf-8")
