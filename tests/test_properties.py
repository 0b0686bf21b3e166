"""Property-based tests for compiler and navigation invariants."""
from __future__ import annotations

from hypothesis import given, settings as hypothesis_settings, strategies as st

from pagesearch_core import (
    FacetNavigator,
    FieldNameMapper,
    InMemorySchemaRegistry,
    QueryCompiler,
    SearchConfiguration,
    SearchRequest,
)
from pagesearch_core.facets import add_filter
from pagesearch_core.query import canonical_query, parse_query

FIELD_TYPES = ["Varchar", "Text", "Int", "Float", "Boolean", "Datetime", "Enum", "GeoPoint"]

names = st.text(alphabet="ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz", min_size=1, max_size=8)
schemas = st.dictionaries(
    st.sampled_from(["Page", "Article", "Event"]),
    st.dictionaries(names, st.sampled_from(FIELD_TYPES), max_size=6),
    min_size=1,
)
values = st.text(alphabet="abc xyz&=%+\"'[]", min_size=1, max_size=10)


@given(schema=schemas)
def test_geo_fields_partition_selectable_fields(schema):
    mapper = FieldNameMapper(InMemorySchemaRegistry(schema))
    types = list(schema)
    plain = set(mapper.selectable_fields(types))
    every = set(mapper.selectable_fields(types, exclude_geo=False))
    geo = set(mapper.geo_selectable_fields(types))
    assert not plain & geo
    assert plain | geo == every


@given(schema=schemas, sort_by=st.one_of(st.none(), names, st.just("score")))
def test_sort_is_selectable_or_score(schema, sort_by):
    mapper = FieldNameMapper(InMemorySchemaRegistry(schema))
    config = SearchConfiguration(search_types=tuple(schema))
    query = QueryCompiler(mapper).compile(config, SearchRequest(sort_by=sort_by))
    assert query.sort.source in mapper.selectable_fields(list(schema))
    assert query.sort.field


@given(
    whitelist=st.dictionaries(names, st.just("A:1"), max_size=4),
    requested=st.lists(names, max_size=6),
)
def test_field_filters_subset_of_whitelist(whitelist, requested):
    mapper = FieldNameMapper(InMemorySchemaRegistry())
    config = SearchConfiguration(filter_fields=whitelist)
    query = QueryCompiler(mapper).compile(config, SearchRequest(field_filters=tuple(requested)))
    assert set(query.field_filters) <= set(whitelist)
    assert len(set(query.field_filters)) == len(query.field_filters)


@given(boosts=st.dictionaries(st.sampled_from(["Title", "Content", "Missing"]), st.floats(-5, 5)))
def test_only_positive_boosts_survive(boosts):
    mapper = FieldNameMapper(InMemorySchemaRegistry({"Page": {"Title": "Varchar", "Content": "Text"}}))
    config = SearchConfiguration(search_types=("Page",), boost_fields=boosts)
    query = QueryCompiler(mapper).compile(config, SearchRequest(search="x"))
    assert all(weight > 0 for weight in query.boost_map.values())
    assert set(query.boost_map) <= {"Title_t", "Content_t"}


@hypothesis_settings(max_examples=50)
@given(existing=st.lists(values, max_size=3), value=values)
def test_added_selection_round_trips_to_crumb(existing, value):
    query_string = "Search=x"
    for item in existing:
        query_string = add_filter(query_string, "filter", "c", item)
    query_string = add_filter(query_string, "filter", "c", value)

    selections = parse_query(query_string)["filter"]["c"]
    assert selections[-1] == value

    navigator = FacetNavigator()
    crumbs = navigator.crumbs({"c": selections}, canonical_query(query_string))
    removed = parse_query(crumbs[-1].remove_query)
    assert removed.get("filter", {}).get("c", []) == selections[:-1]
    assert removed["Search"] == "x"
