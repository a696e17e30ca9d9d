import io
import os
import unittest
from contextlib import redirect_stdout
from unittest import mock

import mongomock
from pymongo.errors import ConfigurationError, OperationFailure, ServerSelectionTimeoutError

from week1_mongodb.connect_db import Settings
from week1_mongodb.insert_books import insert_books
from week1_mongodb.models import ExecutionStats
from week1_mongodb.run_queries import main, run_all_queries

FAKE_STATS = ExecutionStats(docs_examined=1, n_returned=1, stages=["FETCH", "IXSCAN"], index_name="title_1")


class TestRunAllQueries(unittest.TestCase):
    def setUp(self):
        self.settings = Settings(mongodb_uri="mongodb://localhost:27017")
        self.client = mongomock.MongoClient()
        self.collection = self.client[self.settings.db_name][self.settings.collection_name]

    def run_queries(self, **kwargs):
        out = io.StringIO()
        with redirect_stdout(out):
            ok = run_all_queries(self.settings, self.client, **kwargs)
        return ok, out.getvalue()

    @mock.patch("week1_mongodb.run_queries.explain_query", return_value=FAKE_STATS)
    def test_full_run_on_seeded_collection(self, explain):
        insert_books(self.collection)
        with mock.patch.object(self.client, "close", wraps=self.client.close) as close:
            ok, output = self.run_queries()

        self.assertTrue(ok)
        close.assert_called_once()
        for heading in ("BASIC CRUD", "ADVANCED QUERIES", "AGGREGATION PIPELINES", "INDEXING"):
            self.assertIn(heading, output)
        self.assertIn("New price: $14.99", output)
        self.assertIn("George Orwell: 2 books", output)
        self.assertIn("1840s: 1 book(s)", output)
        self.assertIn("Using index: YES", output)
        self.assertIn("ALL QUERIES COMPLETED SUCCESSFULLY", output)
        self.assertTrue(output.rstrip().endswith("MongoDB connection closed"))
        self.assertEqual(explain.call_count, 2)

        # the deleted book is back and the new indexes exist
        self.assertEqual(self.collection.count_documents({"title": "Wuthering Heights"}), 1)
        self.assertEqual(self.collection.count_documents({}), 12)
        self.assertIn("author_1_published_year_1", self.collection.index_information())

    @mock.patch("week1_mongodb.run_queries.explain_query", return_value=FAKE_STATS)
    def test_seed_flag_loads_sample_books(self, explain):
        ok, output = self.run_queries(seed=True)
        self.assertTrue(ok)
        self.assertIn("Inserted 12 book(s)", output)
        self.assertEqual(self.collection.count_documents({}), 12)

    def test_section_error_is_reported_and_connection_closed(self):
        insert_books(self.collection)
        error = OperationFailure("unknown group operator '$avgg'")
        with mock.patch("week1_mongodb.run_queries.average_price_by_genre", side_effect=error), \
                mock.patch.object(self.client, "close") as close:
            ok, output = self.run_queries()

        self.assertFalse(ok)
        close.assert_called_once()
        self.assertIn("Error occurred during aggregation pipelines", output)
        self.assertNotIn("INDEXING", output)
        self.assertIn("MongoDB connection closed", output)

    def test_connection_error_still_closes(self):
        client = mock.MagicMock()
        client.admin.command.side_effect = ServerSelectionTimeoutError("timed out")
        out = io.StringIO()
        with redirect_stdout(out):
            ok = run_all_queries(self.settings, client)
        self.assertFalse(ok)
        client.close.assert_called_once()
        self.assertIn("Error occurred during connecting", out.getvalue())

    @mock.patch("week1_mongodb.run_queries.get_client", side_effect=ConfigurationError("bad SRV record"))
    def test_client_creation_failure(self, get_client):
        out = io.StringIO()
        with redirect_stdout(out):
            ok = run_all_queries(self.settings)
        self.assertFalse(ok)
        self.assertIn("Failed to create MongoDB client: bad SRV record", out.getvalue())

    def test_malformed_uri_is_reported(self):
        out = io.StringIO()
        with redirect_stdout(out):
            ok = run_all_queries(Settings(mongodb_uri="mongodb://localhost:notaport"))
        self.assertFalse(ok)
        self.assertIn("❌ Failed to create MongoDB client", out.getvalue())

    def test_invalid_environment_setting_is_reported(self):
        out = io.StringIO()
        with mock.patch.dict(os.environ, {"MONGODB_TIMEOUT_MS": "abc"}), redirect_stdout(out):
            ok = run_all_queries()
        self.assertFalse(ok)
        self.assertIn("❌ Failed to create MongoDB client", out.getvalue())
        self.assertIn("server_selection_timeout_ms", out.getvalue())


class TestMain(unittest.TestCase):
    @mock.patch("week1_mongodb.run_queries.run_all_queries")
    def test_seed_argument(self, run_all):
        main(["--seed"])
        run_all.assert_called_once_with(seed=True)

    @mock.patch("week1_mongodb.run_queries.run_all_queries")
    def test_no_arguments(self, run_all):
        main([])
        run_all.assert_called_once_with(seed=False)


if __name__ == "__main__":
    unittest.main()
