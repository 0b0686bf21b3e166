"""PageSearch - Search Page Query Compiler for BlackRoad OS.

Compiles a search page's configuration and the parameters of a request
into a backend-agnostic query, and turns the faceted response back into
drill-down and crumb links.

Architecture:
┌─────────────────────────────────────────────────────────────────────────────┐
│                            PageSearch Request                               │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                             │
│   ┌─────────────────────────────────────────────────────────────────────┐   │
│   │                        Compile Pipeline                             │   │
│   │  ┌────────────┐  ┌────────────┐  ┌────────────┐  ┌────────────┐    │   │
│   │  │  Resolve   │→ │  Compile   │→ │  Execute   │→ │  Navigate  │    │   │
│   │  │   Config   │  │   Query    │  │ (backend)  │  │   Facets   │    │   │
│   │  └────────────┘  └────────────┘  └────────────┘  └────────────┘    │   │
│   └─────────────────────────────────────────────────────────────────────┘   │
│                                                                             │
│   ┌─────────────────────────────────────────────────────────────────────┐   │
│   │                        Schema Layer                                 │   │
│   │  ┌────────────┐  ┌────────────┐  ┌────────────┐                    │   │
│   │  │   Schema   │  │ Field Name │  │  Geo Field │                    │   │
│   │  │  Registry  │  │   Mapper   │  │  Discovery │                    │   │
│   │  └────────────┘  └────────────┘  └────────────┘                    │   │
│   └─────────────────────────────────────────────────────────────────────┘   │
│                                                                             │
└─────────────────────────────────────────────────────────────────────────────┘

Key Features:
- Type-aware resolution of logical field names to backend fields
- Whitelist-constrained request filters
- Positive-only field boosts and match-value boosts
- Geo radius restriction with a pluggable fallback strategy
- Standard and extended DisMax query builder strategies
- Facet drill-down and crumb links with stable query strings
- Per-request memoization of the query and result set

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

__version__ = "1.0.0"
__author__ = "BlackRoad OS"
__license__ = "Proprietary"

# Core
from pagesearch_core.engine import SearchPage, SearchResults
from pagesearch_core.errors import PageSearchError, ConfigurationError, QueryStringError

# Configuration
from pagesearch_core.config import (
    SearchSettings,
    SearchConfiguration,
    SortDirection,
    GeoPoint,
    ConfigurationResolver,
)

# Schema
from pagesearch_core.schema import (
    SchemaRegistry,
    InMemorySchemaRegistry,
    FieldNameMapper,
    FieldSpec,
    SCORE_FIELD,
)

# Query
from pagesearch_core.query import (
    SearchRequest,
    Query,
    FilterClause,
    SortClause,
    GeoRestriction,
    FieldBooster,
    QueryBuilder,
    DismaxQueryBuilder,
    get_query_builder,
    query_builders,
    GeoSearchStrategy,
    NoopGeoSearch,
    QueryCompiler,
)

# Backend
from pagesearch_core.backend import ResultSet, FacetCount, SearchExecutor, MemoryExecutor

# Facets
from pagesearch_core.facets import FacetNavigator, FacetGroup, FacetTerm, Crumb

__all__ = [
    # Version
    "__version__",
    "__author__",
    "__license__",
    # Core
    "SearchPage",
    "SearchResults",
    "PageSearchError",
    "ConfigurationError",
    "QueryStringError",
    # Configuration
    "SearchSettings",
    "SearchConfiguration",
    "SortDirection",
    "GeoPoint",
    "ConfigurationResolver",
    # Schema
    "SchemaRegistry",
    "InMemorySchemaRegistry",
    "FieldNameMapper",
    "FieldSpec",
    "SCORE_FIELD",
    # Query
    "SearchRequest",
    "Query",
    "FilterClause",
    "SortClause",
    "GeoRestriction",
    "FieldBooster",
    "QueryBuilder",
    "DismaxQueryBuilder",
    "get_query_builder",
    "query_builders",
    "GeoSearchStrategy",
    "NoopGeoSearch",
    "QueryCompiler",
    # Backend
    "ResultSet",
    "FacetCount",
    "SearchExecutor",
    "MemoryExecutor",
    # Facets
    "FacetNavigator",
    "FacetGroup",
    "FacetTerm",
    "Crumb",
]
