"""PageSearch Memory Executor - In-Memory Search Backend.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations
from typing import Callable, List, Optional, Union

from pagesearch_core.backend.executor import SearchExecutor
from pagesearch_core.backend.results import ResultSet
from pagesearch_core.query.model import Query


class MemoryExecutor(SearchExecutor):
    """Executor answering every query with a fixed or computed result set.

    Executed queries are recorded in ``queries``.
    """

    def __init__(
        self,
        results: Union[ResultSet, Callable[[Query], ResultSet], None] = None,
        connected: bool = True,
    ):
        self._results = results
        self.connected = connected
        self.queries: List[Query] = []

    def is_connected(self) -> bool:
        return self.connected

    def execute(self, query: Query) -> ResultSet:
        self.queries.append(query)
        if callable(self._results):
            return self._results(query)
        return self._results or ResultSet.empty()

    @property
    def last_query(self) -> Optional[Query]:
        return self.queries[-1] if self.queries else None

    def clear(self) -> None:
        self.queries.clear()


__all__ = ["MemoryExecutor"]
