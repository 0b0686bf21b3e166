"""PageSearch Engine - Request-Scoped Search Page.

The SearchPage class is the primary interface for a single search request,
coordinating query compilation, backend execution and facet navigation.
It memoizes the compiled query and the result set, so rendering a search
box and rendering results separately never compiles or executes twice.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import urlsplit

from pagesearch_core.backend.executor import SearchExecutor
from pagesearch_core.backend.results import ResultSet
from pagesearch_core.config.page import SearchConfiguration
from pagesearch_core.config.resolver import ConfigurationResolver
from pagesearch_core.config.settings import SearchSettings
from pagesearch_core.errors import QueryStringError
from pagesearch_core.facets.navigator import Crumb, FacetGroup, FacetNavigator, FacetTerm
from pagesearch_core.query.compiler import BuilderHook, QueryCompiler
from pagesearch_core.query.geo import GeoSearchStrategy
from pagesearch_core.query.model import Query
from pagesearch_core.query.params import canonical_query
from pagesearch_core.query.request import SearchRequest
from pagesearch_core.schema.mapper import FieldNameMapper

logger = logging.getLogger(__name__)


@dataclass
class SearchResults:
    """Search results prepared for display.

    Attributes:
        results: Documents of the current page
        total_results: Total matching documents, None without a query
        query: Term as entered
        title: Search page title
        default_listing: Whether this is the initial match-all listing
    """

    results: List[Dict[str, Any]] = field(default_factory=list)
    total_results: Optional[int] = None
    query: str = ""
    title: str = ""
    default_listing: bool = False


class SearchPage:
    """Search state of one request against one search page."""

    def __init__(
        self,
        config: SearchConfiguration,
        request: SearchRequest,
        executor: SearchExecutor,
        mapper: FieldNameMapper,
        settings: Optional[SearchSettings] = None,
        geo_strategy: Optional[GeoSearchStrategy] = None,
        builder_hooks: Iterable[BuilderHook] = (),
        link_base: str = "",
        listing: bool = False,
    ):
        """Initialize search page.

        Args:
            config: Search page configuration
            request: Parameters of the current request
            executor: Search backend
            mapper: Field name mapper for the backend schema
            settings: Global search defaults
            geo_strategy: Geo restriction hook used when no centre is configured
            builder_hooks: Callables given the builder before the query is frozen
            link_base: Link of the results page, prefixed to facet links
            listing: Show the initial listing if the page is configured for one
        """
        self.config = config
        self.settings = settings or SearchSettings()
        self.executor = executor
        self.mapper = mapper
        self.default_listing = listing and config.start_with_listing
        self.request = request.as_listing(config) if self.default_listing else request

        self.compiler = QueryCompiler(mapper, self.settings, geo_strategy, builder_hooks)
        self.resolver = ConfigurationResolver(config, mapper, self.settings)
        self.navigator = FacetNavigator(self.settings.filter_param, link_base)

        self._query: Optional[Query] = None
        self._result_set: Optional[ResultSet] = None
        self._facets: Optional[List[FacetGroup]] = None

    def get_query(self) -> Optional[Query]:
        """Get the query for this request, compiling it on first use.

        Returns:
            Compiled query, or None if the backend is not connected
        """
        if self._query is not None:
            return self._query

        if not self.executor.is_connected():
            logger.warning("Search backend not connected, no query compiled")
            return None

        self._query = self.compiler.compile(self.config, self.request)
        return self._query

    def result_set(self) -> ResultSet:
        """Execute the query on first use and return the backend response."""
        if self._result_set is not None:
            return self._result_set

        query = self.get_query()
        if query is None:
            return ResultSet.empty()

        start_time = time.time()
        self._result_set = self.executor.execute(query)
        took_ms = (time.time() - start_time) * 1000
        logger.info(f"Search returned {self._result_set.total} results in {took_ms:.1f}ms")
        return self._result_set

    @property
    def total_results(self) -> Optional[int]:
        if self.get_query() is None:
            return None
        return self.result_set().total

    def results(self) -> SearchResults:
        result_set = self.result_set()
        return SearchResults(
            results=list(result_set.documents),
            total_results=self.total_results,
            query=self.request.search or "",
            title=self.config.title,
            default_listing=self.default_listing,
        )

    def active_facets(self) -> Dict[str, List[str]]:
        return self.request.active_facets

    def search_query(self) -> str:
        """Canonical query string of the current request.

        Raises:
            QueryStringError: If the request URI cannot be parsed
        """
        uri = self.request.request_uri
        if not uri and self.request.query_string:
            uri = "?" + self.request.query_string
        try:
            parts = urlsplit(uri)
        except ValueError as e:
            raise QueryStringError(uri, e) from e
        return canonical_query(parts.query)

    def all_facets(self) -> List[FacetGroup]:
        """All facet groups of the result set, computed once."""
        if self._facets is not None:
            return self._facets
        if self.get_query() is None:
            return []

        self._facets = self.navigator.all_facets(
            self.result_set(),
            self.resolver.facet_label_mapping(),
            self.search_query(),
            self.resolver.query_facets(),
        )
        return self._facets

    def current_facets(self, term: Optional[str] = None) -> List[Any]:
        """Terms of one facet, or every facet group when no term is given."""
        if term is None:
            return self.all_facets()
        if self.get_query() is None:
            return []
        terms: List[FacetTerm] = self.navigator.terms_for(
            self.result_set(),
            term,
            self.search_query(),
            self.resolver.query_facets(),
        )
        return terms

    def facet_crumbs(self) -> List[Crumb]:
        active = self.active_facets()
        if not active:
            return []
        return self.navigator.crumbs(active, self.search_query(), self.request.selection_keys())

    def searchable_types(self) -> List[str]:
        return self.resolver.searchable_types(self.settings.default_type)

    def selectable_fields(self) -> Dict[str, str]:
        return self.mapper.selectable_fields(self.searchable_types())

    def geo_selectable_fields(self) -> Dict[str, str]:
        return self.mapper.geo_selectable_fields(self.searchable_types())

    def search_type_options(self) -> Dict[str, str]:
        """Type choices for a search form.

        Registered types by name, followed by the configured additional
        types, which override a registered type of the same name.
        """
        options = {name: name for name in sorted(self.mapper.registry.type_names())}
        options.update(self.settings.additional_search_types)
        return options

    def sort_options(self) -> Dict[str, str]:
        """Sort choices for a search form."""
        options = {"": "Any"}
        options.update(self.selectable_fields())
        return options


__all__ = ["SearchPage", "SearchResults"]
