# indexing.py - index creation and query plan inspection
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from pymongo import ASCENDING

from week1_mongodb.models import ExecutionStats

TITLE_INDEX: List[Tuple[str, int]] = [("title", ASCENDING)]
AUTHOR_YEAR_INDEX: List[Tuple[str, int]] = [("author", ASCENDING), ("published_year", ASCENDING)]


def create_index(collection, keys: Sequence[Tuple[str, int]]) -> str:
    """Create an index on `keys` and return its name.

    The server treats an identical spec as a no-op, so calling this again
    returns the same name.
    """
    return collection.create_index(list(keys))


def create_title_index(collection) -> str:
    return create_index(collection, TITLE_INDEX)


def create_author_year_index(collection) -> str:
    return create_index(collection, AUTHOR_YEAR_INDEX)


def list_indexes(collection) -> Dict[str, Dict[str, Any]]:
    return {index["name"]: dict(index["key"]) for index in collection.list_indexes()}


def _iter_stages(stage: Optional[Mapping[str, Any]]) -> Iterator[Mapping[str, Any]]:
    """Yield every stage of an execution tree, parents before children.

    Covers single-input stages, every branch of OR / SORT_MERGE plans and
    the per-shard trees of sharded (SINGLE_SHARD / SHARD_MERGE) plans.
    """
    if not stage:
        return
    yield stage
    children = []
    if "inputStage" in stage:
        children.append(stage["inputStage"])
    children.extend(stage.get("inputStages") or [])
    children.extend(shard.get("executionStages") for shard in stage.get("shards") or [])
    for child in children:
        yield from _iter_stages(child)


def parse_explain(explain: Mapping[str, Any]) -> ExecutionStats:
    stats = explain.get("executionStats", {})
    stage_docs = list(_iter_stages(stats.get("executionStages")))
    index_name = next((s["indexName"] for s in stage_docs if "indexName" in s), None)
    return ExecutionStats(
        docs_examined=stats.get("totalDocsExamined", 0),
        keys_examined=stats.get("totalKeysExamined", 0),
        n_returned=stats.get("nReturned", 0),
        execution_time_ms=stats.get("executionTimeMillis", 0),
        stages=[s["stage"] for s in stage_docs if "stage" in s],
        index_name=index_name,
    )


def explain_query(collection, query: Dict[str, Any]) -> ExecutionStats:
    explain = collection.database.command(
        "explain",
        {"find": collection.name, "filter": query},
        verbosity="executionStats",
    )
    return parse_explain(explain)
