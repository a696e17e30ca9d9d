# aggregation.py - aggregation pipelines over the books collection
from typing import Any, Dict, List, Optional

from week1_mongodb.models import DecadeGroup

_DECADE_KEY = {"$floor": {"$divide": ["$published_year", 10]}}


def average_price_by_genre_pipeline() -> List[Dict[str, Any]]:
    return [
        {
            "$group": {
                "_id": "$genre",
                "averagePrice": {"$avg": "$price"},
                "count": {"$sum": 1},
            }
        },
        {"$sort": {"averagePrice": -1, "_id": 1}},
    ]


def author_with_most_books_pipeline() -> List[Dict[str, Any]]:
    return [
        {
            "$group": {
                "_id": "$author",
                "bookCount": {"$sum": 1},
                "books": {"$push": "$title"},
            }
        },
        # ties go to the alphabetically first author
        {"$sort": {"bookCount": -1, "_id": 1}},
        {"$limit": 1},
    ]


def books_by_decade_pipeline() -> List[Dict[str, Any]]:
    return [
        {
            "$group": {
                "_id": _DECADE_KEY,
                "decadeStart": {"$first": {"$multiply": [_DECADE_KEY, 10]}},
                "count": {"$sum": 1},
                "books": {"$push": "$title"},
            }
        },
        {"$sort": {"_id": 1}},
    ]


def average_price_by_genre(collection) -> List[Dict[str, Any]]:
    return list(collection.aggregate(average_price_by_genre_pipeline()))


def author_with_most_books(collection) -> Optional[Dict[str, Any]]:
    groups = list(collection.aggregate(author_with_most_books_pipeline()))
    return groups[0] if groups else None


def books_by_decade(collection) -> List[DecadeGroup]:
    groups = []
    for group in collection.aggregate(books_by_decade_pipeline()):
        # $floor/$multiply come back as doubles for double input
        start = int(group["decadeStart"])
        groups.append(
            DecadeGroup(
                decade=start,
                label=f"{start}s",
                count=group["count"],
                books=group["books"],
            )
        )
    return groups
