from typing import List, Optional

from pydantic import BaseModel, Field


class Book(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    author: str = Field(min_length=1, max_length=255)
    genre: str = Field(min_length=1, max_length=64)
    published_year: int
    price: float = Field(ge=0)
    in_stock: bool = True
    pages: int = Field(ge=1)
    publisher: str = Field(min_length=1, max_length=255)


class ExecutionStats(BaseModel):
    """Summary of an `explain` run in `executionStats` verbosity."""

    docs_examined: int = 0
    keys_examined: int = 0
    n_returned: int = 0
    execution_time_ms: int = 0
    # Stage names from the top of the winning plan down, e.g. ["FETCH", "IXSCAN"]
    stages: List[str] = Field(default_factory=list)
    index_name: Optional[str] = None

    @property
    def top_stage(self) -> Optional[str]:
        return self.stages[0] if self.stages else None

    @property
    def uses_index(self) -> bool:
        return bool(self.stages) and "COLLSCAN" not in self.stages


class DecadeGroup(BaseModel):
    decade: int
    label: str
    count: int
    books: List[str] = Field(default_factory=list)
