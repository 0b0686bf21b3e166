"""PageSearch Query Components.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from pagesearch_core.query.params import (
    parse_query,
    build_query,
    canonical_query,
    encode_pair,
)
from pagesearch_core.query.request import SearchRequest, MATCH_ALL
from pagesearch_core.query.model import (
    Query,
    FilterClause,
    SortClause,
    GeoRestriction,
)
from pagesearch_core.query.boosting import FieldBooster
from pagesearch_core.query.builder import (
    QueryBuilder,
    DismaxQueryBuilder,
    get_query_builder,
    query_builders,
    register_query_builder,
)
from pagesearch_core.query.geo import GeoSearchStrategy, NoopGeoSearch
from pagesearch_core.query.compiler import QueryCompiler

__all__ = [
    "parse_query",
    "build_query",
    "canonical_query",
    "encode_pair",
    "SearchRequest",
    "MATCH_ALL",
    "Query",
    "FilterClause",
    "SortClause",
    "GeoRestriction",
    "FieldBooster",
    "QueryBuilder",
    "DismaxQueryBuilder",
    "get_query_builder",
    "query_builders",
    "register_query_builder",
    "GeoSearchStrategy",
    "NoopGeoSearch",
    "QueryCompiler",
]
