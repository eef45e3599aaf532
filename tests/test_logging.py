"""
Tests for the crawler logging setup.
"""

import logging

from mailbox_crawler.utils.logging import LOG_FILE_NAME, close_logging, get_logger, setup_logging


class TestLogging:
    """Tests for handler setup and teardown."""

    def test_child_loggers_share_namespace(self):
        assert get_logger().name == "mailbox_crawler"
        assert get_logger("mailbox_crawler.external.pool").name == "mailbox_crawler.external.pool"
        assert get_logger("tools").name == "mailbox_crawler.tools"

    def test_setup_writes_log_next_to_output(self, tmp_path):
        output_dir = tmp_path / "result"
        try:
            log_file = setup_logging(output_dir)
            get_logger("external.pool").info("lookups per credential: [3]")
        finally:
            close_logging()

        assert log_file == output_dir / LOG_FILE_NAME
        assert "lookups per credential: [3]" in log_file.read_text(encoding="utf-8")

    def test_repeated_setup_keeps_one_handler_pair(self, tmp_path):
        try:
            setup_logging(tmp_path)
            setup_logging(tmp_path, verbose=True)
            handlers = list(get_logger().handlers)
        finally:
            close_logging()

        assert len(handlers) == 2
        console = next(h for h in handlers if not isinstance(h, logging.FileHandler))
        assert console.level == logging.DEBUG
        assert get_logger().handlers == []
