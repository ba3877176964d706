"""Unit tests for custom exception types."""

import unittest
import sys
import os

# Add parent directory to path for imports
parent_dir = os.path.dirname(os.path.dirname(os.path.dirname(os.path.realpath(__file__))))
sys.path.append(parent_dir)

from gcelib.exceptions import (
    GceLibError,
    MalformedIdentifierError,
    UnsupportedLoadBalancerError,
    ConfigurationError,
)


class TestGceLibError(unittest.TestCase):
    """Test base GceLibError exception class."""

    def test_basic_error_message(self):
        error = GceLibError("Test error message")
        self.assertEqual(error.message, "Test error message")
        self.assertEqual(error.context, {})
        self.assertEqual(str(error), "Test error message")

    def test_error_with_context(self):
        context = {"url": "zones/us-central1-f", "expected": "4 segments"}
        error = GceLibError("Server group url malformed.", context=context)

        self.assertEqual(error.context, context)
        self.assertIn("url=zones/us-central1-f", str(error))
        self.assertIn("expected=4 segments", str(error))

    def test_error_inheritance(self):
        self.assertIsInstance(GceLibError("Test"), Exception)


class TestSubclasses(unittest.TestCase):
    """Test that every gcelib error can be caught through the base class."""

    def test_subclasses_share_base(self):
        for cls in (MalformedIdentifierError, UnsupportedLoadBalancerError, ConfigurationError):
            error = cls("boom", context={"key": "value"})
            self.assertIsInstance(error, GceLibError)
            self.assertEqual(str(error), "boom (context: key=value)")


if __name__ == "__main__":
    unittest.main()
