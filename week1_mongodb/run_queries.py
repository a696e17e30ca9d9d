"""run_queries.py

Runs the week 1 bookstore queries in a fixed order against the `books`
collection and prints every result:

  1. basic CRUD operations
  2. advanced queries (compound filter, projection, sorting, pagination)
  3. aggregation pipelines
  4. indexing and explain()

Each call finishes before the next one starts. Any error is printed once
with the section it came from, and the client is always closed.

Usage:
    python -m week1_mongodb.run_queries            # query the existing data
    python -m week1_mongodb.run_queries --seed     # reload the sample books first
"""
from __future__ import annotations

import argparse
from typing import Optional

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.errors import PyMongoError

from week1_mongodb.advanced import (
    DEFAULT_PAGE_SIZE,
    find_in_stock_published_after,
    find_page,
    find_sorted_by_price,
    find_with_projection,
)
from week1_mongodb.aggregation import author_with_most_books, average_price_by_genre, books_by_decade
from week1_mongodb.connect_db import Settings, get_client
from week1_mongodb.crud import (
    delete_book_by_title,
    find_book_by_title,
    find_books_by_author,
    find_books_by_genre,
    find_books_published_after,
    insert_book,
    update_book_price,
)
from week1_mongodb.indexing import create_author_year_index, create_title_index, explain_query, list_indexes
from week1_mongodb.insert_books import SAMPLE_BOOKS, insert_books
from week1_mongodb.models import Book, ExecutionStats


RESTORED_BOOK = Book(
    title="Wuthering Heights",
    author="Emily Brontë",
    genre="Gothic Fiction",
    published_year=1847,
    price=9.99,
    in_stock=True,
    pages=342,
    publisher="Thomas Cautley Newby",
)


def banner(title: str):
    print("=" * 56)
    print(f"  {title}")
    print("=" * 56 + "\n")


def run_crud_operations(collection):
    banner("TASK 2: BASIC CRUD OPERATIONS")

    print('1. Find all books in the "Fiction" genre:')
    books = find_books_by_genre(collection, "Fiction")
    print(f"   Found {len(books)} books: {[b['title'] for b in books]}")

    print("\n2. Find all books published after 1950:")
    books = find_books_published_after(collection, 1950)
    titles = [f"{b['title']} ({b['published_year']})" for b in books]
    print(f"   Found {len(books)} books: {titles}")

    print('\n3. Find all books by "George Orwell":')
    books = find_books_by_author(collection, "George Orwell")
    print(f"   Found {len(books)} books: {[b['title'] for b in books]}")

    print('\n4. Update price of "To Kill a Mockingbird" to $14.99:')
    modified = update_book_price(collection, "To Kill a Mockingbird", 14.99)
    print(f"   Updated {modified} document(s)")
    updated = find_book_by_title(collection, "To Kill a Mockingbird")
    if updated:
        print(f"   New price: ${updated['price']}")
    else:
        print("   ⚠️ Book not found")

    print(f'\n5. Deleting "{RESTORED_BOOK.title}" (will be restored):')
    deleted = delete_book_by_title(collection, RESTORED_BOOK.title)
    print(f"   Deleted {deleted} document(s)")
    insert_book(collection, RESTORED_BOOK)
    print("   (Book restored for further queries)")


def run_advanced_queries(collection):
    banner("TASK 3: ADVANCED QUERIES")

    print("1. Find books in stock AND published after 2010:")
    books = find_in_stock_published_after(collection, 2010)
    print(f"   Found {len(books)} books: {[b['title'] for b in books]}")

    print("\n2. Find all books with projection (title, author, price only):")
    print("   First 3 books:")
    for book in find_with_projection(collection, ("title", "author", "price"), limit=3):
        print(f"   - {book.get('title')} by {book.get('author')}: ${book.get('price')}")

    print("\n3. Books sorted by price (ascending):")
    print("   Top 5 cheapest books:")
    for book in find_sorted_by_price(collection, ASCENDING, limit=5):
        print(f"   - {book.get('title')}: ${book.get('price')}")

    print("\n4. Books sorted by price (descending):")
    print("   Top 5 most expensive books:")
    for book in find_sorted_by_price(collection, DESCENDING, limit=5):
        print(f"   - {book.get('title')}: ${book.get('price')}")

    print(f"\n5. Pagination example ({DEFAULT_PAGE_SIZE} books per page):")
    for page in (1, 2):
        print(f"   Page {page}:")
        for idx, book in enumerate(find_page(collection, page), start=1):
            print(f"   {idx}. {book.get('title')}")


def run_aggregations(collection):
    banner("TASK 4: AGGREGATION PIPELINES")

    print("1. Average price of books by genre:")
    for genre in average_price_by_genre(collection):
        print(f"   {genre['_id']}: ${genre['averagePrice']:.2f} ({genre['count']} books)")

    print("\n2. Author with the most books:")
    top = author_with_most_books(collection)
    if top:
        print(f"   {top['_id']}: {top['bookCount']} books")
        print(f"   Books: {', '.join(top['books'])}")

    print("\n3. Books grouped by publication decade:")
    for decade in books_by_decade(collection):
        print(f"   {decade.label}: {decade.count} book(s)")
        print(f"      -> {', '.join(decade.books)}")


def print_execution_stats(stats: ExecutionStats):
    print("   Execution Stats:")
    print(f"   - Documents examined: {stats.docs_examined}")
    print(f"   - Documents returned: {stats.n_returned}")
    print(f"   - Top stage: {stats.top_stage}")
    if stats.uses_index:
        print(f"   - Using index: YES ✅ ({stats.index_name})")
    else:
        print("   - Using index: NO")


def run_indexing(collection):
    banner("TASK 5: INDEXING & PERFORMANCE")

    print('1. Creating index on "title" field...')
    print(f"   ✅ Index created: {create_title_index(collection)}")

    print('\n2. Creating compound index on "author" and "published_year"...')
    print(f"   ✅ Index created: {create_author_year_index(collection)}")

    print(f'\n3. All indexes on "{collection.name}" collection:')
    for name, key in list_indexes(collection).items():
        print(f"   - {name}: {key}")

    print("\n4. Performance analysis using explain():\n")
    print('   Query: Find books by title "1984"')
    print_execution_stats(explain_query(collection, {"title": "1984"}))

    print('\n   Query: Find books by author "J.R.R. Tolkien" published after 1950')
    print_execution_stats(
        explain_query(collection, {"author": "J.R.R. Tolkien", "published_year": {"$gt": 1950}})
    )


SECTIONS = [
    ("CRUD operations", run_crud_operations),
    ("advanced queries", run_advanced_queries),
    ("aggregation pipelines", run_aggregations),
    ("indexing", run_indexing),
]


def run_all_queries(
    settings: Optional[Settings] = None,
    client: Optional[MongoClient] = None,
    seed: bool = False,
) -> bool:
    """Run every section in order; returns True when all of them completed."""
    try:
        settings = settings or Settings.from_env()
        if client is None:
            client = get_client(settings)
    except (PyMongoError, ValueError) as e:
        # pydantic ValidationError and pymongo URI parse errors are ValueErrors
        print(f"❌ Failed to create MongoDB client: {e}")
        return False

    step = "connecting"
    try:
        client.admin.command("ping")
        print("✅ Connected to MongoDB server\n")
        collection = client[settings.db_name][settings.collection_name]

        if seed:
            step = "seeding"
            insert_books(collection, SAMPLE_BOOKS)
            print()

        for step, section in SECTIONS:
            section(collection)
            print()

        banner("✅ ALL QUERIES COMPLETED SUCCESSFULLY!")
        return True
    except Exception as e:
        print(f"❌ Error occurred during {step}: {e}")
        return False
    finally:
        client.close()
        print("✅ MongoDB connection closed")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run the week 1 bookstore MongoDB queries")
    parser.add_argument("--seed", action="store_true", help="reload the sample books before querying")
    args = parser.parse_args(argv)
    run_all_queries(seed=args.seed)


if __name__ == "__main__":
    main()
