"""Unit tests for query compilation."""
from __future__ import annotations

from pagesearch_core import (
    FilterClause,
    GeoPoint,
    GeoSearchStrategy,
    QueryCompiler,
    SearchConfiguration,
    SearchRequest,
    SortDirection,
)


class RecordingGeoSearch(GeoSearchStrategy):
    def __init__(self):
        self.calls = []

    def update_geo_search(self, builder, term, mapped_field, radius):
        self.calls.append((term, mapped_field, radius))
        if mapped_field:
            builder.restrict_near_point(GeoPoint(1, 2), mapped_field, radius)


class TestBasicCompilation:
    def test_term_with_single_type(self, compiler, article_config):
        query = compiler.compile(article_config, SearchRequest(search="hello"))
        assert query.q == "hello"
        assert query.sort_string() == "score desc"
        assert query.filters[0] == FilterClause("ClassNameHierarchy_ms", ("Article",))
        assert query.types == ("Article",)

    def test_no_term_matches_all(self, compiler, article_config):
        query = compiler.compile(article_config, SearchRequest())
        assert query.term is None
        assert query.q == "*:*"

    def test_no_types_no_type_filter(self, compiler):
        query = compiler.compile(SearchConfiguration(), SearchRequest(search="x"))
        assert query.filters == ()
        assert query.types == ()

    def test_defaults(self, compiler, article_config):
        params = compiler.compile(article_config, SearchRequest()).to_params()
        assert params["start"] == 0
        assert params["rows"] == 10
        assert params["fl"] == "*,score"
        assert params["facet.field"] == ["Tags_ms"]
        assert params["facet.mincount"] == 1

    def test_query_type_selects_builder(self, compiler):
        config = SearchConfiguration(query_type="dismax", search_on_fields=("Title",))
        query = compiler.compile(config, SearchRequest(search="x"))
        assert query.parser == "dismax"
        assert query.to_params()["defType"] == "edismax"


class TestTypes:
    def test_type_override(self, compiler):
        config = SearchConfiguration(search_types=("Article", "Event"))
        query = compiler.compile(config, SearchRequest(search_type="Event"))
        assert query.filters[0].values == ("Event",)

    def test_unknown_override_ignored(self, compiler):
        config = SearchConfiguration(search_types=("Article", "Event"))
        query = compiler.compile(config, SearchRequest(search_type="Secret"))
        assert query.filters[0].values == ("Article", "Event")

    def test_search_trees(self, compiler, article_config):
        config = SearchConfiguration(search_types=("Article",), search_trees=("4", "7"))
        query = compiler.compile(config, SearchRequest())
        assert query.filters[1].to_string() == "ParentsHierarchy_ms:(4 OR 7)"


class TestSort:
    def test_text_field_sorts_on_string_copy(self, compiler, article_config):
        query = compiler.compile(article_config, SearchRequest(sort_by="Title", sort_dir="Ascending"))
        assert query.sort_string() == "Title_s asc"
        assert query.sort.source == "Title"

    def test_unselectable_sort_falls_back_to_score(self, compiler, article_config):
        query = compiler.compile(article_config, SearchRequest(sort_by="Bogus"))
        assert query.sort_string() == "score desc"
        assert query.sort.source == "score"

    def test_geo_field_cannot_sort(self, compiler, article_config):
        query = compiler.compile(article_config, SearchRequest(sort_by="Location"))
        assert query.sort.field == "score"

    def test_config_sort(self, compiler):
        config = SearchConfiguration(
            search_types=("Article",),
            sort_by="Rating",
            sort_dir=SortDirection.ASCENDING,
        )
        assert compiler.compile(config, SearchRequest()).sort_string() == "Rating_i asc"

    def test_invalid_request_direction(self, compiler):
        config = SearchConfiguration(search_types=("Article",), sort_dir=SortDirection.ASCENDING)
        query = compiler.compile(config, SearchRequest(sort_by="Rating", sort_dir="Sideways"))
        assert query.sort.direction == "desc"

    def test_sort_without_types_uses_default_type(self, compiler):
        query = compiler.compile(SearchConfiguration(), SearchRequest(sort_by="Title"))
        assert query.types == ("Page",)
        assert query.sort_string() == "Title_s desc"

    def test_system_field_sort(self, compiler, article_config):
        query = compiler.compile(article_config, SearchRequest(sort_by="Created"))
        assert query.sort_string() == "Created_dt desc"


class TestFacetSelections:
    def test_each_selection_is_a_clause(self, compiler, article_config):
        request = SearchRequest(filters={"Category_t": ("shoes", "sale")})
        clauses = [c.to_string() for c in compiler.compile(article_config, request).filters]
        assert clauses == [
            "ClassNameHierarchy_ms:Article",
            "Category_t:shoes",
            "Category_t:sale",
        ]

    def test_facet_fields_and_queries(self, compiler):
        config = SearchConfiguration(
            search_types=("Article",),
            facet_fields=("Category",),
            facet_queries={"Top rated": "Rating_i:[4 TO *]"},
            min_facet_count=3,
        )
        query = compiler.compile(config, SearchRequest())
        assert query.facet_fields == ("Category_t",)
        assert query.facet_query_map == {"Rating_i:[4 TO *]": "Top rated"}
        assert query.facet_min_count == 3


class TestRelevance:
    def test_query_fields_mapped(self, compiler, article_config):
        config = SearchConfiguration(search_types=("Article",), search_on_fields=("Title", "Nope", "Summary"))
        query = compiler.compile(config, SearchRequest(search="hi"))
        assert query.query_fields == ("Title_t", "Summary_t")
        assert query.q == "(Title_t:(hi) OR Summary_t:(hi))"

    def test_only_positive_boosts(self, compiler):
        config = SearchConfiguration(search_types=("Page",), boost_fields={"Title": 3, "Content": 0})
        query = compiler.compile(config, SearchRequest(search="hello"))
        assert query.boost_map == {"Title_t": 3.0}

    def test_match_boosts(self, compiler, article_config):
        config = SearchConfiguration(search_types=("Article",), boost_match_fields={"Category_t:news": 2})
        query = compiler.compile(config, SearchRequest(search="hi"))
        assert query.q == "+(hi) Category_t:news^2"


class TestFieldFilters:
    def test_whitelisted_filter(self, compiler):
        config = SearchConfiguration(
            search_types=("Article",),
            filter_fields={"rated": "Rating_i:[3 TO *]"},
        )
        query = compiler.compile(config, SearchRequest(field_filters=("rated", "drop")))
        assert query.filter_queries()[-1] == "Rating_i:[3 TO *]"
        assert query.field_filters == ("rated",)

    def test_nothing_whitelisted(self, compiler, article_config):
        query = compiler.compile(article_config, SearchRequest(field_filters=("x",)))
        assert query.field_filters == ()


class TestGeo:
    def test_centre_restricts_and_sorts(self, compiler):
        config = SearchConfiguration(
            search_types=("Article",),
            geo_restriction_field="Location",
            geo_centre=GeoPoint(-41.29, 174.78),
            distance_sort="desc",
        )
        params = compiler.compile(config, SearchRequest()).to_params()
        assert params["sort"] == "geodist() desc"
        assert params["pt"] == "-41.29,174.78"
        assert params["sfield"] == "Location_p"
        assert params["d"] == "5"
        assert "{!geofilt}" in params["fq"]

    def test_configured_radius(self, compiler):
        config = SearchConfiguration(
            search_types=("Article",),
            geo_restriction_field="Location",
            geo_centre=GeoPoint(0, 0),
            geo_radius=12.5,
        )
        query = compiler.compile(config, SearchRequest())
        assert query.geo.radius == 12.5
        assert query.sort_string() == "score desc"

    def test_non_geo_field_skipped(self, compiler):
        config = SearchConfiguration(
            search_types=("Article",),
            geo_restriction_field="Title",
            geo_centre=GeoPoint(0, 0),
        )
        assert compiler.compile(config, SearchRequest()).geo is None

    def test_no_centre_delegates(self, mapper, settings):
        strategy = RecordingGeoSearch()
        compiler = QueryCompiler(mapper, settings, geo_strategy=strategy)
        config = SearchConfiguration(search_types=("Event",), geo_restriction_field="Venue")
        query = compiler.compile(config, SearchRequest(search="wellington"))
        assert strategy.calls == [("wellington", "Venue_p", 5.0)]
        assert query.geo.field == "Venue_p"

    def test_strategy_called_with_unmapped_field(self, mapper, settings):
        strategy = RecordingGeoSearch()
        compiler = QueryCompiler(mapper, settings, geo_strategy=strategy)
        config = SearchConfiguration(search_types=("Page",), geo_restriction_field="Venue")
        query = compiler.compile(config, SearchRequest())
        assert strategy.calls == [(None, None, 5.0)]
        assert query.geo is None

    def test_no_restriction_field(self, mapper, settings):
        strategy = RecordingGeoSearch()
        compiler = QueryCompiler(mapper, settings, geo_strategy=strategy)
        compiler.compile(SearchConfiguration(search_types=("Event",)), SearchRequest())
        assert strategy.calls == []


class TestPagination:
    def test_request_paging(self, compiler, article_config):
        query = compiler.compile(article_config, SearchRequest(start=30, limit=15))
        assert (query.offset, query.limit) == (30, 15)

    def test_page_size_from_config(self, compiler):
        config = SearchConfiguration(search_types=("Article",), results_per_page=25)
        assert compiler.compile(config, SearchRequest()).limit == 25


class TestBuilderHooks:
    def test_hooks_run_before_build(self, mapper, settings, article_config):
        compiler = QueryCompiler(mapper, settings, builder_hooks=[lambda b: b.param("hl", "on")])
        query = compiler.compile(article_config, SearchRequest())
        assert query.to_params()["hl"] == "on"


class TestIdempotence:
    def test_same_input_same_query(self, compiler):
        config = SearchConfiguration(
            search_types=("Article",),
            search_on_fields=("Title",),
            boost_fields={"Title": 2},
            facet_fields=("Category",),
        )
        request = SearchRequest(search="hi", filters={"Category_t": ("shoes",)})
        assert compiler.compile(config, request) == compiler.compile(config, request)
