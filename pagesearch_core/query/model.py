"""PageSearch Query Model - Compiled Backend Query.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from pagesearch_core.config.page import GeoPoint
from pagesearch_core.schema.mapper import SCORE_FIELD

DISTANCE_SORT_FIELD = "geodist()"


def format_number(value: float) -> str:
    return f"{value:g}"


@dataclass(frozen=True)
class FilterClause:
    """A conjunctive filter clause.

    Multiple values match if any of them does; ``raw`` clauses are passed
    to the backend untouched.
    """

    field: Optional[str] = None
    values: Tuple[str, ...] = ()
    raw: Optional[str] = None

    def to_string(self) -> str:
        if self.raw is not None:
            return self.raw
        if len(self.values) == 1:
            return f"{self.field}:{self.values[0]}"
        return f"{self.field}:({' OR '.join(self.values)})"


@dataclass(frozen=True)
class SortClause:
    """Sort on a backend field; ``source`` is the logical field it came from."""

    field: str = SCORE_FIELD
    direction: str = "desc"
    source: str = SCORE_FIELD

    def to_string(self) -> str:
        return f"{self.field} {self.direction}"


@dataclass(frozen=True)
class GeoRestriction:
    """Restrict results to within a radius of a point."""

    field: str
    centre: GeoPoint
    radius: float

    def to_filter(self) -> str:
        return "{!geofilt}"

    def to_params(self) -> Dict[str, str]:
        return {
            "pt": self.centre.lat_lon(),
            "sfield": self.field,
            "d": format_number(self.radius),
        }


@dataclass(frozen=True)
class Query:
    """An immutable, backend-agnostic search query.

    Attributes:
        term: Free-text term as entered
        q: Main query expression rendered by the query builder
        parser: Name of the query builder strategy that rendered ``q``
        types: Content types the query is restricted to
        sort: Sort on a selectable field or relevance
        filters: AND filter clauses in the order they were added
        query_fields: Backend fields the term targets
        field_boosts: Backend field to positive relevance weight
        match_boosts: Raw ``field:value`` expression to weight
        field_filters: Whitelisted filter names applied
        geo: Radius restriction, if any
        geo_sort: Distance sort direction overriding ``sort``, if any
        facet_fields: Backend fields to facet on
        facet_queries: Facet query expression to display label
        facet_limit: Maximum terms per facet field
        facet_min_count: Minimum count for a facet term
        return_fields: Fields requested back
        offset: Pagination offset
        limit: Page size
        extra_params: Additional backend parameters
    """

    term: Optional[str] = None
    q: str = "*:*"
    parser: str = "standard"
    types: Tuple[str, ...] = ()
    sort: SortClause = SortClause()
    filters: Tuple[FilterClause, ...] = ()
    query_fields: Tuple[str, ...] = ()
    field_boosts: Tuple[Tuple[str, float], ...] = ()
    match_boosts: Tuple[Tuple[str, float], ...] = ()
    field_filters: Tuple[str, ...] = ()
    geo: Optional[GeoRestriction] = None
    geo_sort: Optional[str] = None
    facet_fields: Tuple[str, ...] = ()
    facet_queries: Tuple[Tuple[str, str], ...] = ()
    facet_limit: int = 10
    facet_min_count: int = 1
    return_fields: str = "*,score"
    offset: int = 0
    limit: int = 10
    extra_params: Tuple[Tuple[str, Any], ...] = ()

    @property
    def boost_map(self) -> Dict[str, float]:
        return dict(self.field_boosts)

    @property
    def facet_query_map(self) -> Dict[str, str]:
        return dict(self.facet_queries)

    def filter_queries(self) -> List[str]:
        clauses = [clause.to_string() for clause in self.filters]
        if self.geo is not None:
            clauses.append(self.geo.to_filter())
        return clauses

    def sort_string(self) -> str:
        if self.geo_sort:
            return f"{DISTANCE_SORT_FIELD} {self.geo_sort}"
        return self.sort.to_string()

    def to_params(self) -> Dict[str, Any]:
        """Render backend request parameters."""
        params: Dict[str, Any] = {
            "q": self.q,
            "fq": self.filter_queries(),
            "sort": self.sort_string(),
            "facet": "true",
            "facet.field": list(self.facet_fields),
            "facet.limit": self.facet_limit,
            "facet.mincount": self.facet_min_count,
            "fl": self.return_fields,
            "start": self.offset,
            "rows": self.limit,
        }
        if self.facet_queries:
            params["facet.query"] = [expression for expression, _ in self.facet_queries]
        if self.geo is not None:
            params.update(self.geo.to_params())
        for name, value in self.extra_params:
            params[name] = list(value) if isinstance(value, tuple) else value
        return params


__all__ = [
    "Query",
    "FilterClause",
    "SortClause",
    "GeoRestriction",
    "DISTANCE_SORT_FIELD",
    "format_number",
]
