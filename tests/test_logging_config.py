"""
Tests for logging setup and credential redaction.
"""

import logging
import os
import sys
import tempfile
import unittest
from logging.handlers import RotatingFileHandler
from unittest.mock import patch

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from utils.logging_config import (
    ColourFormatter,
    PlainFormatter,
    SystemdFormatter,
    get_logger,
    redact,
    setup_logging,
)


class TestSetupLogging(unittest.TestCase):
    """Test setup_logging."""

    def tearDown(self):
        root = logging.getLogger()
        for handler in list(root.handlers):
            handler.close()
            root.removeHandler(handler)

    def test_console_only(self):
        """Test the default console handler and level."""
        with patch.dict(os.environ, {}, clear=True):
            root = setup_logging("DEBUG")

        self.assertEqual(root.level, logging.DEBUG)
        self.assertEqual(len(root.handlers), 1)
        self.assertIsInstance(root.handlers[0].formatter, ColourFormatter)

    def test_plain_console(self):
        """Test that NO_COLOR switches to the plain formatter."""
        with patch.dict(os.environ, {"NO_COLOR": "1"}, clear=True):
            root = setup_logging()
        self.assertIsInstance(root.handlers[0].formatter, PlainFormatter)

    def test_systemd_console(self):
        """Test the journal formatter under systemd."""
        with patch.dict(os.environ, {"JOURNAL_STREAM": "8:1234"}, clear=True):
            root = setup_logging()
        self.assertIsInstance(root.handlers[0].formatter, SystemdFormatter)

    def test_unknown_level_falls_back(self):
        """Test that an unknown level name means INFO."""
        root = setup_logging("CHATTY")
        self.assertEqual(root.level, logging.INFO)

    def test_file_logging(self):
        """Test that file logging creates the directory and a rotating handler."""
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "logs", "dalle.log")
            root = setup_logging("INFO", log_to_file=True, log_file_path=path)

            file_handlers = [h for h in root.handlers if isinstance(h, RotatingFileHandler)]
            self.assertEqual(len(file_handlers), 1)
            get_logger("dalle.test").info("hello file")
            file_handlers[0].flush()
            with open(path) as f:
                self.assertIn("hello file", f.read())
            self.tearDown()


class TestRedact(unittest.TestCase):
    """Test credential redaction."""

    def test_redacts_secret(self):
        """Test that every occurrence is masked."""
        self.assertEqual(redact("key sk-1 and sk-1", "sk-1"), "key [REDACTED] and [REDACTED]")

    def test_empty_inputs(self):
        """Test that empty text or secret is returned unchanged."""
        self.assertEqual(redact("plain", ""), "plain")
        self.assertEqual(redact("", "sk-1"), "")
        self.assertIsNone(redact(None, "sk-1"))


if __name__ == '__main__':
    unittest.main()
