import os
import unittest
from unittest.mock import patch

from deccalc.config import DEFAULT_LOG_DIR, DEFAULT_PRECISION, MAX_PRECISION, get_settings


class TestGetSettings(unittest.TestCase):
    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = get_settings()
        self.assertEqual(settings.precision, DEFAULT_PRECISION)
        self.assertEqual(settings.log_dir, DEFAULT_LOG_DIR)

    def test_environment(self):
        env = {"DECCALC_PRECISION": "30", "DECCALC_LOG_DIR": "/tmp/deccalc"}
        with patch.dict(os.environ, env, clear=True):
            settings = get_settings()
        self.assertEqual(settings.precision, 30)
        self.assertEqual(settings.log_dir, "/tmp/deccalc")

    def test_explicit_values_override_environment(self):
        with patch.dict(os.environ, {"DECCALC_PRECISION": "30"}, clear=True):
            settings = get_settings(precision=8, log_dir="out")
        self.assertEqual(settings.precision, 8)
        self.assertEqual(settings.log_dir, "out")

    def test_invalid_environment_precision(self):
        for raw in ("abc", "0", "-4", "5000"):
            with patch.dict(os.environ, {"DECCALC_PRECISION": raw}, clear=True):
                with self.assertRaises(ValueError):
                    get_settings()

    def test_invalid_explicit_precision(self):
        with self.assertRaises(ValueError):
            get_settings(precision=0)

    def test_precision_upper_limit(self):
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(get_settings(precision=MAX_PRECISION).precision, MAX_PRECISION)
            with self.assertRaises(ValueError) as ctx:
                get_settings(precision=MAX_PRECISION + 1)
        self.assertIn("between 1 and 1000", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
