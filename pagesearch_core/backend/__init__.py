"""PageSearch Backend Components.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from pagesearch_core.backend.results import ResultSet, FacetCount
from pagesearch_core.backend.executor import SearchExecutor
from pagesearch_core.backend.memory import MemoryExecutor

__all__ = ["ResultSet", "FacetCount", "SearchExecutor", "MemoryExecutor"]
