import os
import unittest
from unittest import mock

from pydantic import ValidationError

from week1_mongodb.connect_db import (
    DEFAULT_COLLECTION_NAME,
    DEFAULT_DB_NAME,
    PLACEHOLDER_URI,
    Settings,
    get_client,
    get_database,
)

ENV_VARS = ["MONGODB_URI", "DB_NAME", "COLLECTION_NAME", "MONGODB_TIMEOUT_MS", "MONGODB_TLS_INSECURE"]


def clean_env(**values):
    env = {k: v for k, v in os.environ.items() if k not in ENV_VARS}
    env.update(values)
    return mock.patch.dict(os.environ, env, clear=True)


class TestSettings(unittest.TestCase):
    def test_defaults(self):
        with clean_env():
            settings = Settings.from_env()
        self.assertEqual(settings.mongodb_uri, PLACEHOLDER_URI)
        self.assertEqual(settings.db_name, DEFAULT_DB_NAME)
        self.assertEqual(settings.collection_name, DEFAULT_COLLECTION_NAME)
        self.assertIsNone(settings.server_selection_timeout_ms)
        self.assertFalse(settings.tls_allow_invalid_certificates)

    def test_environment_overrides(self):
        with clean_env(
            MONGODB_URI="mongodb://localhost:27017",
            DB_NAME="bookstore_dev",
            MONGODB_TIMEOUT_MS="2500",
            MONGODB_TLS_INSECURE="true",
        ):
            settings = Settings.from_env()
        self.assertEqual(settings.mongodb_uri, "mongodb://localhost:27017")
        self.assertEqual(settings.db_name, "bookstore_dev")
        self.assertEqual(settings.collection_name, "books")
        self.assertEqual(settings.server_selection_timeout_ms, 2500)
        self.assertTrue(settings.tls_allow_invalid_certificates)

    def test_empty_variable_falls_back_to_default(self):
        with clean_env(MONGODB_URI=""):
            self.assertEqual(Settings.from_env().mongodb_uri, PLACEHOLDER_URI)

    def test_bad_timeout(self):
        with clean_env(MONGODB_TIMEOUT_MS="-1"):
            with self.assertRaises(ValidationError):
                Settings.from_env()


class TestGetClient(unittest.TestCase):
    @mock.patch("week1_mongodb.connect_db.MongoClient")
    def test_driver_defaults_when_unset(self, client_cls):
        get_client(Settings(mongodb_uri="mongodb://localhost:27017"))
        client_cls.assert_called_once_with("mongodb://localhost:27017")

    @mock.patch("week1_mongodb.connect_db.MongoClient")
    def test_passes_configured_options(self, client_cls):
        settings = Settings(
            mongodb_uri="mongodb://localhost:27017",
            server_selection_timeout_ms=5000,
            tls_allow_invalid_certificates=True,
        )
        get_client(settings)
        client_cls.assert_called_once_with(
            "mongodb://localhost:27017",
            serverSelectionTimeoutMS=5000,
            tlsAllowInvalidCertificates=True,
        )


class TestGetDatabase(unittest.TestCase):
    def test_pings_and_returns_database(self):
        client = mock.MagicMock()
        db = get_database(Settings(db_name="shop"), client)
        client.admin.command.assert_called_once_with("ping")
        self.assertIs(db, client["shop"])

    def test_ping_failure_is_reraised(self):
        client = mock.MagicMock()
        client.admin.command.side_effect = RuntimeError("no server")
        with self.assertRaises(RuntimeError):
            get_database(Settings(), client)


if __name__ == "__main__":
    unittest.main()
