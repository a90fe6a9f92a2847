import unittest
from unittest import mock

from app.core.config import DEFAULT_MODEL, ConfigurationError, get_settings


class TestGetSettings(unittest.TestCase):
    def test_missing_api_key_raises(self) -> None:
        with mock.patch.dict("os.environ", {}, clear=True):
            with self.assertLogs("app.core.config", level="CRITICAL"):
                with self.assertRaises(ConfigurationError):
                    get_settings(env_file=None)

    def test_empty_api_key_raises(self) -> None:
        with mock.patch.dict("os.environ", {"OPENAI_API_KEY": ""}, clear=True):
            with self.assertRaises(ConfigurationError):
                get_settings(env_file=None)

    def test_defaults(self) -> None:
        with mock.patch.dict("os.environ", {"OPENAI_API_KEY": "sk-test"}, clear=True):
            settings = get_settings(env_file=None)
        self.assertEqual(settings.openai_api_key, "sk-test")
        self.assertEqual(settings.llm_model, DEFAULT_MODEL)
        self.assertEqual(settings.llm_temperature, 0.0)
        self.assertEqual(settings.log_level, "INFO")

    def test_overrides(self) -> None:
        env = {
            "OPENAI_API_KEY": "sk-test",
            "LLM_MODEL": "gpt-4o-mini",
            "LLM_TEMPERATURE": "0.7",
            "LOG_LEVEL": "debug",
        }
        with mock.patch.dict("os.environ", env, clear=True):
            settings = get_settings(env_file=None)
        self.assertEqual(settings.llm_model, "gpt-4o-mini")
        self.assertEqual(settings.llm_temperature, 0.7)
        self.assertEqual(settings.log_level, "DEBUG")

    def test_bad_temperature_raises(self) -> None:
        env = {"OPENAI_API_KEY": "sk-test", "LLM_TEMPERATURE": "warm"}
        with mock.patch.dict("os.environ", env, clear=True):
            with self.assertRaises(ConfigurationError):
                get_settings(env_file=None)


if __name__ == "__main__":
    unittest.main()
