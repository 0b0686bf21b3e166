"""Shared fixtures for PageSearch tests."""
from __future__ import annotations

import pytest

from pagesearch_core import (
    FieldNameMapper,
    InMemorySchemaRegistry,
    MemoryExecutor,
    QueryCompiler,
    ResultSet,
    SearchConfiguration,
    SearchSettings,
)

SCHEMA = {
    "Page": {
        "Title": "Varchar",
        "Content": "HTMLText",
    },
    "Article": {
        "Title": "Varchar",
        "Summary": "Text",
        "Category": "Varchar",
        "Rating": "Int",
        "Tags": "MultiValueField",
        "Location": "GeoPoint",
    },
    "Event": {
        "Title": "Varchar",
        "Starts": "Datetime",
        "Venue": "GeoPoint",
    },
}


@pytest.fixture
def registry():
    return InMemorySchemaRegistry(SCHEMA)


@pytest.fixture
def mapper(registry):
    return FieldNameMapper(registry)


@pytest.fixture
def settings():
    return SearchSettings(default_facets=["Tags_ms"])


@pytest.fixture
def compiler(mapper, settings):
    return QueryCompiler(mapper, settings)


@pytest.fixture
def article_config():
    return SearchConfiguration(title="Articles", search_types=("Article",))


@pytest.fixture
def facet_results():
    return ResultSet.from_counts(
        documents=[{"ID": 1, "Title": "Red shoes"}, {"ID": 2, "Title": "Blue hat"}],
        total=2,
        facets={
            "Category_t": [("shoes", 4), ("hats", 2)],
            "Tags_ms": [("sale", 3)],
        },
    )


@pytest.fixture
def executor(facet_results):
    return MemoryExecutor(facet_results)
