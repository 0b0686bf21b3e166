"""PageSearch Result Set - Backend Search Response.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Generator, Iterable, List, Mapping, Tuple, Union


@dataclass(frozen=True)
class FacetCount:
    """A facet term with its document count."""

    term: str
    count: int = 0


@dataclass
class ResultSet:
    """Search response from the backend.

    Attributes:
        documents: Matching documents in result order
        total: Total number of matching documents
        facets: Facet name to term counts, in backend order
    """

    documents: List[Dict[str, Any]] = field(default_factory=list)
    total: int = 0
    facets: Dict[str, List[FacetCount]] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.documents)

    def __iter__(self) -> Generator[Dict[str, Any], None, None]:
        yield from self.documents

    def facet(self, name: str) -> List[FacetCount]:
        return list(self.facets.get(name, []))

    @classmethod
    def empty(cls) -> "ResultSet":
        return cls()

    @classmethod
    def from_counts(
        cls,
        documents: Iterable[Dict[str, Any]] = (),
        total: int = None,
        facets: Mapping[str, Iterable[Union[FacetCount, Tuple[str, int]]]] = None,
    ) -> "ResultSet":
        """Build a result set from plain ``(term, count)`` facet pairs."""
        documents = list(documents)
        converted: Dict[str, List[FacetCount]] = {}
        for name, counts in (facets or {}).items():
            converted[name] = [
                c if isinstance(c, FacetCount) else FacetCount(term=str(c[0]), count=int(c[1]))
                for c in counts
            ]
        return cls(
            documents=documents,
            total=len(documents) if total is None else total,
            facets=converted,
        )


__all__ = ["ResultSet", "FacetCount"]
