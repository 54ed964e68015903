import os
import unittest
from unittest import mock

from pydantic import ValidationError

from core.config import Settings

class TestSettings(unittest.TestCase):
    def test_defaults(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)
        self.assertEqual(settings.default_voltage, 220)
        self.assertEqual(settings.default_phase_max_amps, 63)
        self.assertEqual(settings.default_total_ports, 12)
        self.assertEqual(settings.breaker_warning_percent, 80)

    def test_environment_override(self):
        env = {"LIGHTLOAD_DEFAULT_VOLTAGE": "127", "LIGHTLOAD_LOG_LEVEL": "debug"}
        with mock.patch.dict(os.environ, env, clear=True):
            settings = Settings(_env_file=None)
        self.assertEqual(settings.default_voltage, 127)
        self.assertEqual(settings.log_level, "DEBUG")

    def test_invalid_values(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ValidationError):
                Settings(_env_file=None, default_phase_max_amps=0)
            with self.assertRaises(ValidationError):
                Settings(_env_file=None, default_total_ports=0)
            with self.assertRaises(ValidationError):
                Settings(_env_file=None, breaker_warning_percent=120)

if __name__ == '__main__':
    unittest.main()
