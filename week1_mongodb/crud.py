# crud.py - basic CRUD operations on the books collection
from typing import Any, Dict, List, Optional

from week1_mongodb.models import Book
from week1_mongodb.schema import validate_book


def find_books_by_genre(collection, genre: str) -> List[Dict[str, Any]]:
    return list(collection.find({"genre": genre}))


def find_books_published_after(collection, year: int) -> List[Dict[str, Any]]:
    return list(collection.find({"published_year": {"$gt": year}}))


def find_books_by_author(collection, author: str) -> List[Dict[str, Any]]:
    return list(collection.find({"author": author}))


def find_book_by_title(collection, title: str) -> Optional[Dict[str, Any]]:
    return collection.find_one({"title": title})


def update_book_price(collection, title: str, price: float) -> int:
    """Set the price of the first book matching `title`.

    Returns the modified count: 0 when nothing matched or the price was
    already `price`.
    """
    result = collection.update_one({"title": title}, {"$set": {"price": price}})
    return result.modified_count


def delete_book_by_title(collection, title: str) -> int:
    result = collection.delete_one({"title": title})
    return result.deleted_count


def insert_book(collection, book: Book):
    doc = book.model_dump()
    validate_book(doc)
    result = collection.insert_one(doc)
    return result.inserted_id
