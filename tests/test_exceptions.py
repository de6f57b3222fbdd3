"""
Tests for status classification.
"""

import unittest
import sys
import os

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dalle.exceptions import (
    STATUS_ERRORS,
    DalleError,
    RateLimitError,
    StatusError,
    UnauthorizedError,
    UnknownStatusError,
    error_for_status,
    raise_for_status,
)


class TestStatusTable(unittest.TestCase):
    """Test the status code table."""

    def test_listed_codes(self):
        """Test that exactly the documented codes have their own class."""
        self.assertEqual(sorted(STATUS_ERRORS), [400, 401, 403, 404, 429, 500, 502, 503, 504])

    def test_classes_are_distinct(self):
        """Test that no two codes share an exception class."""
        classes = list(STATUS_ERRORS.values())
        self.assertEqual(len(set(classes)), len(classes))
        self.assertNotIn(UnknownStatusError, classes)

    def test_hierarchy(self):
        """Test that every status error is a DalleError."""
        for error_class in list(STATUS_ERRORS.values()) + [UnknownStatusError]:
            self.assertTrue(issubclass(error_class, StatusError))
            self.assertTrue(issubclass(error_class, DalleError))

    def test_error_for_status(self):
        """Test class lookup with fallback."""
        self.assertIs(error_for_status(429), RateLimitError)
        self.assertIs(error_for_status(418), UnknownStatusError)


class TestRaiseForStatus(unittest.TestCase):
    """Test raise_for_status."""

    def test_200_passes(self):
        """Test that only 200 is success."""
        self.assertIsNone(raise_for_status(200, "{}"))

    def test_message_without_detail(self):
        """Test the fixed message when the body has nothing useful."""
        with self.assertRaises(UnauthorizedError) as cm:
            raise_for_status(401, "")
        self.assertEqual(str(cm.exception), "unauthorized")
        self.assertIsNone(cm.exception.detail)
        self.assertEqual(cm.exception.status_code, 401)

    def test_string_error_detail(self):
        """Test bodies whose error field is a plain string."""
        with self.assertRaises(StatusError) as cm:
            raise_for_status(500, '{"error": "boom"}')
        self.assertEqual(cm.exception.detail, "boom")

    def test_non_json_body(self):
        """Test that HTML error pages keep the body but no detail."""
        with self.assertRaises(StatusError) as cm:
            raise_for_status(502, "<html>Bad Gateway</html>")
        self.assertEqual(cm.exception.body, "<html>Bad Gateway</html>")
        self.assertIsNone(cm.exception.detail)
        self.assertEqual(str(cm.exception), "bad gateway")


if __name__ == '__main__':
    unittest.main()
