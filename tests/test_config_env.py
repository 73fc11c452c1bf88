import os
import unittest
from unittest.mock import patch

from notifix import config
from notifix.errors import ConfigurationError


class ConfigEnvTests(unittest.TestCase):
    def test_defaults_without_environment(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            with patch("notifix.config.load_dotenv") as load_dotenv:
                settings = config.get_settings()

        load_dotenv.assert_called_once()
        self.assertEqual(settings.counter_names, config.DEFAULT_COUNTER_NAMES)
        self.assertEqual(settings.refresh_interval_ms, 10_000)
        self.assertEqual(settings.immediate_refresh_delay_ms, 10)
        self.assertEqual(settings.worker_pool_size, 10)
        self.assertEqual(settings.api_token, "local-dev-token")
        self.assertEqual(settings.http.endpoints, {})

    def test_environment_overrides(self) -> None:
        env = {
            "NOTIFIX_COUNTER_NAMES": "alfrescoCount, emailCount",
            "NOTIFIX_REFRESH_INTERVAL_MS": "30000",
            "NOTIFIX_WORKER_POOL_SIZE": "3",
            "NOTIFIX_API_TOKEN": "secret",
            "NOTIFIX_COUNTER_ENDPOINTS": (
                "alfrescoCount=http://docs.test/{user}/count,emailCount=http://mail.test/{user}"
            ),
            "NOTIFIX_HTTP_TIMEOUT_S": "1.5",
        }
        with patch.dict(os.environ, env, clear=True):
            with patch("notifix.config.load_dotenv"):
                settings = config.get_settings()

        self.assertEqual(settings.counter_names, ("alfrescoCount", "emailCount"))
        self.assertEqual(settings.refresh_interval_ms, 30_000)
        self.assertEqual(settings.worker_pool_size, 3)
        self.assertEqual(settings.api_token, "secret")
        self.assertEqual(
            settings.http.endpoints,
            {
                "alfrescoCount": "http://docs.test/{user}/count",
                "emailCount": "http://mail.test/{user}",
            },
        )
        self.assertEqual(settings.http.timeout_s, 1.5)

    def test_keyword_overrides_win(self) -> None:
        with patch.dict(os.environ, {"NOTIFIX_WORKER_POOL_SIZE": "3"}, clear=True):
            with patch("notifix.config.load_dotenv"):
                settings = config.get_settings(worker_pool_size=7)

        self.assertEqual(settings.worker_pool_size, 7)

    def test_unknown_keyword_override_is_rejected(self) -> None:
        with patch("notifix.config.load_dotenv"):
            with self.assertRaises(TypeError):
                config.get_settings(pool=3)

    def test_invalid_integer_raises_configuration_error(self) -> None:
        with patch.dict(os.environ, {"NOTIFIX_CACHE_TTL_MS": "soon"}, clear=True):
            with patch("notifix.config.load_dotenv"):
                with self.assertRaises(ConfigurationError):
                    config.get_settings()

    def test_malformed_endpoint_raises_configuration_error(self) -> None:
        with patch.dict(os.environ, {"NOTIFIX_COUNTER_ENDPOINTS": "alfrescoCount"}, clear=True):
            with patch("notifix.config.load_dotenv"):
                with self.assertRaises(ConfigurationError):
                    config.get_settings()


if __name__ == "__main__":
    unittest.main()
