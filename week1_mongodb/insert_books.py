"""insert_books.py

Loads the sample bookstore collection that the week 1 queries are written
against. Every document is checked with `validate_book` before anything is
written, so a typo in the data below never leaves a half-loaded collection.

Usage:
    python -m week1_mongodb.insert_books
"""
from typing import Iterable, List, Optional

from week1_mongodb.connect_db import Settings, get_database
from week1_mongodb.models import Book
from week1_mongodb.schema import validate_book


SAMPLE_BOOKS: List[Book] = [
    Book(title="To Kill a Mockingbird", author="Harper Lee", genre="Fiction", published_year=1960,
         price=12.99, in_stock=True, pages=336, publisher="J. B. Lippincott & Co."),
    Book(title="1984", author="George Orwell", genre="Dystopian", published_year=1949,
         price=10.99, in_stock=True, pages=328, publisher="Secker & Warburg"),
    Book(title="The Great Gatsby", author="F. Scott Fitzgerald", genre="Fiction", published_year=1925,
         price=9.99, in_stock=True, pages=180, publisher="Charles Scribner's Sons"),
    Book(title="Brave New World", author="Aldous Huxley", genre="Dystopian", published_year=1932,
         price=11.50, in_stock=False, pages=311, publisher="Chatto & Windus"),
    Book(title="The Hobbit", author="J.R.R. Tolkien", genre="Fantasy", published_year=1937,
         price=14.99, in_stock=True, pages=310, publisher="George Allen & Unwin"),
    Book(title="The Catcher in the Rye", author="J.D. Salinger", genre="Fiction", published_year=1951,
         price=8.99, in_stock=True, pages=224, publisher="Little, Brown and Co."),
    Book(title="Pride and Prejudice", author="Jane Austen", genre="Romance", published_year=1813,
         price=7.99, in_stock=True, pages=432, publisher="T. Egerton"),
    Book(title="The Lord of the Rings", author="J.R.R. Tolkien", genre="Fantasy", published_year=1954,
         price=19.99, in_stock=True, pages=1178, publisher="Allen & Unwin"),
    Book(title="Animal Farm", author="George Orwell", genre="Political Satire", published_year=1945,
         price=8.50, in_stock=False, pages=112, publisher="Secker & Warburg"),
    Book(title="The Alchemist", author="Paulo Coelho", genre="Fiction", published_year=1988,
         price=10.99, in_stock=True, pages=197, publisher="HarperOne"),
    Book(title="Moby Dick", author="Herman Melville", genre="Adventure", published_year=1851,
         price=12.50, in_stock=False, pages=635, publisher="Harper & Brothers"),
    Book(title="Wuthering Heights", author="Emily Brontë", genre="Gothic Fiction", published_year=1847,
         price=9.99, in_stock=True, pages=342, publisher="Thomas Cautley Newby"),
]


def insert_books(collection, books: Optional[Iterable[Book]] = None, reset: bool = True) -> int:
    """Insert `books` (the sample set by default) and return how many were written.

    With `reset` the collection is emptied first; indexes and the validator
    are left in place.
    """
    docs = [book.model_dump() for book in (SAMPLE_BOOKS if books is None else books)]
    for doc in docs:
        validate_book(doc)

    if reset:
        existing = collection.count_documents({})
        if existing:
            collection.delete_many({})
            print(f"⚠️ Removed {existing} existing document(s) from '{collection.name}'.")

    if not docs:
        return 0
    result = collection.insert_many(docs)
    print(f"✅ Inserted {len(result.inserted_ids)} book(s) into '{collection.name}'.")
    return len(result.inserted_ids)


def main():
    settings = Settings.from_env()
    db = get_database(settings)
    try:
        insert_books(db[settings.collection_name])
    finally:
        db.client.close()


if __name__ == "__main__":
    main()
