# advanced.py - compound filters, projection, sorting and pagination
from typing import Any, Dict, Iterable, List, Optional

from pymongo import ASCENDING

DEFAULT_PAGE_SIZE = 5


def find_in_stock_published_after(collection, year: int) -> List[Dict[str, Any]]:
    # several keys in one filter document are ANDed by the server
    return list(collection.find({"in_stock": True, "published_year": {"$gt": year}}))


def build_projection(fields: Iterable[str]) -> Dict[str, int]:
    """Allow-list projection; `_id` is dropped unless it is asked for."""
    projection = {field: 1 for field in fields}
    if "_id" not in projection:
        projection["_id"] = 0
    return projection


def find_with_projection(collection, fields: Iterable[str], limit: Optional[int] = None) -> List[Dict[str, Any]]:
    cursor = collection.find({}, build_projection(fields)).sort([("title", ASCENDING), ("_id", ASCENDING)])
    if limit:
        cursor = cursor.limit(limit)
    return list(cursor)


def find_sorted_by_price(
    collection,
    direction: int = ASCENDING,
    limit: Optional[int] = None,
    fields: Iterable[str] = ("title", "price"),
) -> List[Dict[str, Any]]:
    if direction not in (1, -1):
        raise ValueError(f"sort direction must be 1 or -1, got {direction!r}")
    # equal prices fall back to title order so the listing is repeatable
    cursor = collection.find({}, build_projection(fields)).sort(
        [("price", direction), ("title", ASCENDING), ("_id", ASCENDING)]
    )
    if limit:
        cursor = cursor.limit(limit)
    return list(cursor)


def find_page(
    collection,
    page: int,
    page_size: int = DEFAULT_PAGE_SIZE,
    fields: Iterable[str] = ("title",),
) -> List[Dict[str, Any]]:
    """Return 1-based `page` of the collection ordered by title.

    Pages are plain skip/limit offsets, so writes between two calls can
    shift documents across page boundaries.
    """
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    cursor = (
        collection.find({}, build_projection(fields))
        .sort([("title", ASCENDING), ("_id", ASCENDING)])
        .skip((page - 1) * page_size)
        .limit(page_size)
    )
    return list(cursor)
