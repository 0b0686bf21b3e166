"""PageSearch Query Compiler - Configuration and Request to Query.

The compiler merges a page's search configuration with the parameters of
a single request into one immutable ``Query``. It performs no I/O and
holds no per-request state, so one compiler can serve every request.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional, Sequence

from pagesearch_core.config.page import SearchConfiguration, SortDirection
from pagesearch_core.config.resolver import ConfigurationResolver
from pagesearch_core.config.settings import SearchSettings
from pagesearch_core.query.boosting import FieldBooster
from pagesearch_core.query.builder import QueryBuilder, get_query_builder
from pagesearch_core.query.geo import GeoSearchStrategy, NoopGeoSearch
from pagesearch_core.query.model import Query
from pagesearch_core.query.request import SearchRequest
from pagesearch_core.schema.mapper import SCORE_FIELD, FieldNameMapper

logger = logging.getLogger(__name__)

BuilderHook = Callable[[QueryBuilder], None]


class QueryCompiler:
    """Compiles search configuration and request parameters into a query.

    Example:
        >>> compiler = QueryCompiler(FieldNameMapper(registry))
        >>> query = compiler.compile(config, SearchRequest(search="hello"))
        >>> query.to_params()["q"]
        'hello'
    """

    def __init__(
        self,
        mapper: FieldNameMapper,
        settings: Optional[SearchSettings] = None,
        geo_strategy: Optional[GeoSearchStrategy] = None,
        builder_hooks: Iterable[BuilderHook] = (),
    ):
        """Initialize compiler.

        Args:
            mapper: Field name mapper for the backend schema
            settings: Global search defaults
            geo_strategy: Geo restriction hook used when no centre is configured
            builder_hooks: Callables given the builder before the query is frozen
        """
        self.mapper = mapper
        self.settings = settings or SearchSettings()
        self.geo_strategy = geo_strategy or NoopGeoSearch()
        self.builder_hooks: List[BuilderHook] = list(builder_hooks)

    def compile(self, config: SearchConfiguration, request: SearchRequest) -> Query:
        """Compile a query.

        Args:
            config: Search page configuration
            request: Parameters of the current request

        Returns:
            Immutable query ready for the backend
        """
        resolver = ConfigurationResolver(config, self.mapper, self.settings)
        builder = get_query_builder(config.query_type)

        if request.search is not None:
            builder.base_query(request.search)

        types = resolver.resolve_types(request)
        fields = self.mapper.selectable_fields(types)

        sort_by = request.sort_by or config.sort_by
        if sort_by not in fields:
            if sort_by:
                logger.debug(f"Sort field {sort_by} not selectable for {types}, sorting by score")
            sort_by = SCORE_FIELD
        direction = self._sort_direction(config, request)

        sort_field = sort_by
        if types:
            builder.restrict_types(types)
            builder.and_with(self.settings.type_field, types)
            sort_field = self.mapper.sort_field_name(sort_by, types)
        if not sort_field:
            sort_by = sort_field = SCORE_FIELD

        if config.search_trees:
            builder.and_with(self.settings.parents_field, config.search_trees)

        for facet_name, value in request.selections():
            builder.and_with(facet_name, value)

        builder.sort_by(sort_field, direction, source=sort_by)

        if config.search_on_fields:
            builder.query_fields(self._map_fields(config.search_on_fields, types))

        if config.boost_fields:
            builder.boost(FieldBooster.compose(
                config.boost_fields,
                lambda name: self.mapper.resolve(name, types),
            ))

        if config.boost_match_fields:
            builder.boost_field_values(config.boost_match_fields)

        for name, clause in resolver.field_filters(request):
            builder.add_filter(clause, name=name)

        if config.geo_restriction_field:
            self._apply_geo(builder, config, request, types)

        builder.facets(
            resolver.facet_fields(),
            limit=self.settings.facet_limit,
            min_count=config.min_facet_count or 1,
            queries=resolver.query_facets(),
        )
        builder.return_fields(self.settings.return_fields)

        offset = request.start if request.start is not None else 0
        if request.limit is not None:
            limit = request.limit
        else:
            limit = config.results_per_page or self.settings.default_page_size
        builder.page(offset, limit)

        for hook in self.builder_hooks:
            hook(builder)

        query = builder.build()
        logger.debug(
            f"Compiled query q={query.q!r} filters={len(query.filters)} "
            f"sort={query.sort_string()!r} types={list(types)}"
        )
        return query

    def _sort_direction(self, config: SearchConfiguration, request: SearchRequest) -> str:
        if request.sort_dir is not None:
            requested = SortDirection.parse(request.sort_dir)
            return requested.backend if requested else "desc"
        return config.sort_dir.backend if config.sort_dir else "desc"

    def _map_fields(self, names: Iterable[str], types: Sequence[str]) -> List[str]:
        mapped: List[str] = []
        for name in names:
            physical = self.mapper.resolve(name, types)
            # Some fields are not declared by the types being searched.
            if physical is None:
                logger.debug(f"Dropping search field {name} not declared by {list(types)}")
                continue
            if physical not in mapped:
                mapped.append(physical)
        return mapped

    def _geo_field(self, name: str, types: Sequence[str]) -> Optional[str]:
        field_type = self.mapper.field_type(name, types)
        if field_type is None or not self.mapper.is_geo_type(field_type):
            return None
        return self.mapper.resolve(name, types)

    def _apply_geo(
        self,
        builder: QueryBuilder,
        config: SearchConfiguration,
        request: SearchRequest,
        types: Sequence[str],
    ) -> None:
        mapped_field = self._geo_field(config.geo_restriction_field, types)
        radius = config.geo_radius or self.settings.default_geo_radius
        centre = config.geo_centre

        if centre is None:
            self.geo_strategy.update_geo_search(builder, request.search, mapped_field, radius)
        elif mapped_field:
            builder.restrict_near_point(centre, mapped_field, radius)
            if config.distance_sort:
                builder.sort_by_distance(config.distance_sort)
        else:
            logger.debug(f"Geo field {config.geo_restriction_field} not mapped, skipping restriction")


__all__ = ["QueryCompiler", "BuilderHook"]
