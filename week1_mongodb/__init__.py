"""week1_mongodb package initializer

This file makes the `week1_mongodb` directory a regular Python package so
the bookstore query runner can be started with
`python -m week1_mongodb.run_queries` from the project root, and so the
tests can import its modules from any working directory.

The modules run in this order during a full assignment run:
connect_db -> create_collections -> insert_books -> run_queries.
"""

__all__ = [
    "advanced",
    "aggregation",
    "connect_db",
    "create_collections",
    "crud",
    "indexing",
    "insert_books",
    "models",
    "run_queries",
    "schema",
]
