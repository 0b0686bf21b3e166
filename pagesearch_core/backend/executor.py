"""PageSearch Search Executor - Abstract Backend Interface.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations
from abc import ABC, abstractmethod

from pagesearch_core.backend.results import ResultSet
from pagesearch_core.query.model import Query


class SearchExecutor(ABC):
    """Abstract search backend.

    Sends a compiled query and returns the backend's response. Timeouts
    and retries are the executor's concern.
    """

    @abstractmethod
    def is_connected(self) -> bool:
        pass

    @abstractmethod
    def execute(self, query: Query) -> ResultSet:
        pass

    def close(self) -> None:
        pass


__all__ = ["SearchExecutor"]
