#!/usr/bin/env python3
"""
Tests for configuration loading
"""

import importlib
import unittest
import sys
import os
from unittest.mock import patch

# Add the project root to the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import config

CONFIG_VARS = (
    "DALLE_API_KEY",
    "DALLE_BASE_URL",
    "DALLE_USER_AGENT",
    "DALLE_TIMEOUT",
    "LOG_LEVEL",
    "LOG_TO_FILE",
    "LOG_FILE_PATH",
)


class TestConfig(unittest.TestCase):
    """Test cases for configuration loading"""

    def tearDown(self):
        importlib.reload(config)

    def reload_with(self, **env):
        clean = {key: value for key, value in os.environ.items() if key not in CONFIG_VARS}
        clean.update(env)
        with patch.dict(os.environ, clean, clear=True), patch("dotenv.load_dotenv"):
            return importlib.reload(config)

    def test_defaults(self):
        """Test default values when nothing is set"""
        cfg = self.reload_with()

        self.assertIsNone(cfg.DALLE_API_KEY)
        self.assertEqual(cfg.DALLE_BASE_URL, "https://api.openai.com/v1/images")
        self.assertEqual(cfg.DALLE_USER_AGENT, "dalle-python")
        self.assertEqual(cfg.DALLE_TIMEOUT, 30.0)
        self.assertEqual(cfg.LOG_LEVEL, "INFO")
        self.assertFalse(cfg.LOG_TO_FILE)

    def test_environment_overrides(self):
        """Test that environment variables override defaults"""
        cfg = self.reload_with(
            DALLE_API_KEY="sk-env",
            DALLE_BASE_URL="http://localhost:8080/v1/images",
            DALLE_TIMEOUT="5.5",
            LOG_TO_FILE="TRUE",
        )

        self.assertEqual(cfg.DALLE_API_KEY, "sk-env")
        self.assertEqual(cfg.DALLE_BASE_URL, "http://localhost:8080/v1/images")
        self.assertEqual(cfg.DALLE_TIMEOUT, 5.5)
        self.assertTrue(cfg.LOG_TO_FILE)

    def test_config_values(self):
        """Test that config values have expected types"""
        self.assertIsInstance(config.DALLE_BASE_URL, str)
        self.assertIsInstance(config.DALLE_USER_AGENT, str)
        self.assertIsInstance(config.DALLE_TIMEOUT, float)
        self.assertTrue(config.DALLE_BASE_URL.startswith("http"))


if __name__ == '__main__':
    unittest.main()
