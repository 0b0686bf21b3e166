"""PageSearch Query Builder - Fluent Query Construction.

Builders collect query directives through a fluent interface and freeze
them into a ``Query``. Each builder strategy renders the main query
expression in its own syntax; a page selects its strategy by name.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Type, Union

from pagesearch_core.config.page import GeoPoint
from pagesearch_core.query.boosting import FieldBooster
from pagesearch_core.query.model import (
    FilterClause,
    GeoRestriction,
    Query,
    SortClause,
    format_number,
)
from pagesearch_core.query.request import MATCH_ALL
from pagesearch_core.schema.mapper import SCORE_FIELD

logger = logging.getLogger(__name__)

MATCH_ALL_QUERY = "*:*"


def _frozen(value: Any) -> Any:
    # Multi-valued parameters are held as tuples.
    if isinstance(value, (list, set, frozenset)):
        return tuple(value)
    return value


class QueryBuilder:
    """Fluent query builder rendering standard Lucene syntax.

    The term is searched in every target field, and match boosts become
    optional clauses next to the required main clause so they only affect
    ranking.
    """

    name = "standard"
    title = "Standard query"

    def __init__(self):
        """Initialize query builder."""
        self._term: Optional[str] = None
        self._types: Tuple[str, ...] = ()
        self._filters: List[FilterClause] = []
        self._field_filters: List[str] = []
        self._query_fields: List[str] = []
        self._booster = FieldBooster()
        self._match_boosts: List[Tuple[str, float]] = []
        self._sort = SortClause()
        self._geo: Optional[GeoRestriction] = None
        self._geo_sort: Optional[str] = None
        self._facet_fields: List[str] = []
        self._facet_queries: Dict[str, str] = {}
        self._facet_limit = 10
        self._facet_min_count = 1
        self._return_fields = "*,score"
        self._offset = 0
        self._limit = 10
        self._params: Dict[str, Any] = {}

    @property
    def term(self) -> Optional[str]:
        return self._term

    @property
    def filters(self) -> List[FilterClause]:
        return list(self._filters)

    @property
    def geo(self) -> Optional[GeoRestriction]:
        return self._geo

    def base_query(self, term: Optional[str]) -> "QueryBuilder":
        """Set the free-text term.

        Args:
            term: Term as entered by the user

        Returns:
            Self for chaining
        """
        self._term = term
        return self

    def restrict_types(self, types: Iterable[str]) -> "QueryBuilder":
        self._types = tuple(types)
        return self

    def and_with(self, field: str, value: Union[Any, Iterable[Any]]) -> "QueryBuilder":
        """Add a conjunctive clause on a field.

        Args:
            field: Backend field name
            value: A value, or several values of which any may match

        Returns:
            Self for chaining
        """
        if isinstance(value, (list, tuple, set, frozenset)):
            values = tuple(str(v) for v in value)
        else:
            values = (str(value),)
        if values:
            self._filters.append(FilterClause(field=field, values=values))
        return self

    def add_filter(self, clause: str, name: Optional[str] = None) -> "QueryBuilder":
        """Add a raw filter clause that does not affect scoring.

        Args:
            clause: Backend filter expression
            name: Whitelist name the clause was selected by

        Returns:
            Self for chaining
        """
        self._filters.append(FilterClause(raw=clause))
        if name is not None:
            self._field_filters.append(name)
        return self

    def query_fields(self, fields: Iterable[str]) -> "QueryBuilder":
        self._query_fields = list(fields)
        return self

    def boost(self, boosts: Union[FieldBooster, Mapping[str, float]]) -> "QueryBuilder":
        """Set field boosts; non-positive weights are discarded."""
        if not isinstance(boosts, FieldBooster):
            boosts = FieldBooster(boosts)
        self._booster = boosts
        return self

    def boost_field_values(self, boosts: Mapping[str, float]) -> "QueryBuilder":
        """Boost documents matching raw ``field:value`` expressions."""
        self._match_boosts = list(boosts.items())
        return self

    def sort_by(
        self,
        field: str,
        direction: str = "desc",
        source: Optional[str] = None,
    ) -> "QueryBuilder":
        """Set sort clause.

        Args:
            field: Backend field to sort by
            direction: asc or desc
            source: Logical field the backend field was resolved from

        Returns:
            Self for chaining
        """
        self._sort = SortClause(field=field, direction=direction, source=source or field)
        return self

    def restrict_near_point(self, centre: GeoPoint, field: str, radius: float) -> "QueryBuilder":
        self._geo = GeoRestriction(field=field, centre=centre, radius=radius)
        return self

    def sort_by_distance(self, direction: str) -> "QueryBuilder":
        """Sort by distance from the restriction centre, overriding ``sort_by``."""
        self._geo_sort = direction
        return self

    def facets(
        self,
        fields: Iterable[str],
        limit: int = 10,
        min_count: int = 1,
        queries: Optional[Mapping[str, str]] = None,
    ) -> "QueryBuilder":
        self._facet_fields = list(fields)
        self._facet_limit = limit
        self._facet_min_count = min_count
        self._facet_queries = dict(queries or {})
        return self

    def return_fields(self, fields: str) -> "QueryBuilder":
        self._return_fields = fields
        return self

    def page(self, offset: int, limit: int) -> "QueryBuilder":
        """Set pagination.

        Args:
            offset: Starting offset
            limit: Number of results

        Returns:
            Self for chaining
        """
        self._offset = offset
        self._limit = limit
        return self

    def param(self, name: str, value: Any) -> "QueryBuilder":
        """Set an additional backend parameter."""
        self._params[name] = value
        return self

    def _is_match_all(self) -> bool:
        return not self._term or self._term.strip() in ("", MATCH_ALL, MATCH_ALL_QUERY)

    def _field_expression(self, field: str) -> str:
        expression = f"{field}:({self._term})"
        if field in self._booster.field_boosts:
            expression += f"^{format_number(self._booster.get_boost(field))}"
        return expression

    def render_query(self) -> str:
        """Render the main query expression."""
        if self._is_match_all():
            main = MATCH_ALL_QUERY
        elif self._query_fields:
            main = "(" + " OR ".join(self._field_expression(f) for f in self._query_fields) + ")"
        else:
            main = self._term

        if not self._match_boosts:
            return main
        optional = " ".join(f"{expr}^{format_number(weight)}" for expr, weight in self._match_boosts)
        return f"+({main}) {optional}"

    def render_params(self) -> Dict[str, Any]:
        """Parser-specific parameters accompanying the main expression."""
        return {}

    def build(self) -> Query:
        """Freeze the collected directives.

        Returns:
            Immutable query
        """
        params = self.render_params()
        params.update(self._params)
        return Query(
            term=self._term,
            q=self.render_query(),
            parser=self.name,
            types=self._types,
            sort=self._sort,
            filters=tuple(self._filters),
            query_fields=tuple(self._query_fields),
            field_boosts=self._booster.items(),
            match_boosts=tuple(self._match_boosts),
            field_filters=tuple(self._field_filters),
            geo=self._geo,
            geo_sort=self._geo_sort if self._geo is not None else None,
            facet_fields=tuple(self._facet_fields),
            facet_queries=tuple(self._facet_queries.items()),
            facet_limit=self._facet_limit,
            facet_min_count=self._facet_min_count,
            return_fields=self._return_fields,
            offset=self._offset,
            limit=self._limit,
            extra_params=tuple((name, _frozen(value)) for name, value in params.items()),
        )


class DismaxQueryBuilder(QueryBuilder):
    """Query builder for the extended DisMax parser.

    The term is passed as entered; target fields and their boosts go into
    ``qf`` and match boosts into ``bq``.
    """

    name = "dismax"
    title = "Extended DisMax query"

    def render_query(self) -> str:
        if self._is_match_all():
            return MATCH_ALL_QUERY
        return self._term

    def render_params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {"defType": "edismax"}
        fields = self._query_fields or [f for f, _ in self._booster.items()]
        if fields:
            params["qf"] = " ".join(self._booster.apply(f) for f in fields)
        if self._match_boosts:
            params["bq"] = tuple(f"{expr}^{format_number(weight)}" for expr, weight in self._match_boosts)
        return params


QUERY_BUILDERS: Dict[str, Type[QueryBuilder]] = {
    QueryBuilder.name: QueryBuilder,
    DismaxQueryBuilder.name: DismaxQueryBuilder,
}


def register_query_builder(builder_class: Type[QueryBuilder]) -> None:
    QUERY_BUILDERS[builder_class.name] = builder_class


def query_builders() -> Dict[str, str]:
    """Available builder strategies, name to title."""
    return {name: cls.title for name, cls in QUERY_BUILDERS.items()}


def get_query_builder(name: Optional[str] = None) -> QueryBuilder:
    """Create a builder for a strategy name, falling back to standard."""
    if not name:
        return QueryBuilder()
    builder_class = QUERY_BUILDERS.get(name)
    if builder_class is None:
        logger.warning(f"Unknown query builder {name}, using {QueryBuilder.name}")
        return QueryBuilder()
    return builder_class()


__all__ = [
    "QueryBuilder",
    "DismaxQueryBuilder",
    "QUERY_BUILDERS",
    "register_query_builder",
    "query_builders",
    "get_query_builder",
    "MATCH_ALL_QUERY",
]
