"""Integration tests for the request-scoped search page."""
from __future__ import annotations

import pytest

from pagesearch_core import (
    MemoryExecutor,
    QueryStringError,
    SearchConfiguration,
    SearchPage,
    SearchRequest,
    SearchSettings,
    SortDirection,
)


@pytest.fixture
def make_page(mapper, settings, executor, article_config):
    def factory(request=None, config=None, **kwargs):
        kwargs.setdefault("executor", executor)
        return SearchPage(
            config or article_config,
            request or SearchRequest(),
            mapper=mapper,
            settings=settings,
            **kwargs,
        )
    return factory


class TestQueryMemoization:
    def test_query_compiled_once(self, make_page):
        page = make_page(SearchRequest(search="hello"))
        assert page.get_query() is page.get_query()
        assert page.get_query().q == "hello"

    def test_executed_once(self, make_page, executor):
        page = make_page(SearchRequest(search="hello"))
        page.results()
        page.all_facets()
        page.current_facets("Category_t")
        assert page.total_results == 2
        assert len(executor.queries) == 1
        assert executor.last_query is page.get_query()

    def test_results(self, make_page):
        results = make_page(SearchRequest(search="hello")).results()
        assert results.total_results == 2
        assert results.title == "Articles"
        assert results.query == "hello"
        assert [d["ID"] for d in results.results] == [1, 2]
        assert not results.default_listing


class TestDisconnected:
    def test_no_query_without_backend(self, make_page, facet_results):
        executor = MemoryExecutor(facet_results, connected=False)
        page = make_page(SearchRequest(search="hello"), executor=executor)
        assert page.get_query() is None
        assert page.total_results is None
        assert page.all_facets() == []
        assert page.current_facets("Category_t") == []
        assert len(page.result_set()) == 0
        assert executor.queries == []

    def test_crumbs_still_available(self, make_page, facet_results):
        executor = MemoryExecutor(facet_results, connected=False)
        request = SearchRequest.from_query_string("Search=x&filter[category][]=shoes")
        crumbs = make_page(request, executor=executor).facet_crumbs()
        assert [c.remove_query for c in crumbs] == ["Search=x"]


class TestListing:
    def test_initial_listing(self, make_page):
        config = SearchConfiguration(
            title="Latest",
            search_types=("Article",),
            start_with_listing=True,
            sort_by="Created",
            sort_dir=SortDirection.DESCENDING,
        )
        page = make_page(config=config, listing=True)
        assert page.default_listing
        assert page.get_query().q == "*:*"
        assert page.get_query().sort_string() == "Created_dt desc"
        assert page.results().default_listing

    def test_listing_needs_config(self, make_page):
        page = make_page(SearchRequest(search="x"), listing=True)
        assert not page.default_listing
        assert page.get_query().q == "x"


class TestFacets:
    def test_all_facets_use_labels_and_links(self, make_page):
        config = SearchConfiguration(
            search_types=("Article",),
            facet_fields=("Category",),
            facet_mapping={"Category": "Category"},
        )
        request = SearchRequest.from_query_string("Search=x", path="/search")
        groups = make_page(request, config=config, link_base="/search").all_facets()
        assert groups[0].title == "Category"
        assert groups[0].terms[0].search_link == "/search?Search=x&filter[Category_t][]=shoes"

    def test_all_facets_cached(self, make_page):
        page = make_page(SearchRequest(search="x"))
        assert page.all_facets() is page.all_facets()

    def test_current_facets_without_term(self, make_page):
        page = make_page(SearchRequest(search="x"))
        assert page.current_facets() == page.all_facets()

    def test_active_facets_and_crumbs(self, make_page):
        request = SearchRequest.from_query_string(
            "Search=x&filter[Category_t][]=shoes&filter[Category_t][]=sale"
        )
        page = make_page(request)
        assert page.active_facets() == {"Category_t": ["shoes", "sale"]}
        crumbs = page.facet_crumbs()
        assert [c.remove_query for c in crumbs] == [
            "Search=x&filter%5BCategory_t%5D%5B1%5D=sale",
            "Search=x&filter%5BCategory_t%5D%5B0%5D=shoes",
        ]

    def test_crumb_after_empty_selection(self, make_page):
        request = SearchRequest.from_query_string("Search=x&filter[c][]=&filter[c][]=shoes")
        crumbs = make_page(request).facet_crumbs()
        assert [c.remove_query for c in crumbs] == ["Search=x&filter%5Bc%5D%5B0%5D="]

    def test_no_crumbs_without_selection(self, make_page):
        assert make_page(SearchRequest(search="x")).facet_crumbs() == []


class TestSearchQuery:
    def test_canonical_from_uri(self, make_page):
        request = SearchRequest.from_query_string("Search=a b&filter[c][]=d", path="/search")
        assert make_page(request).search_query() == "Search=a+b&filter%5Bc%5D%5B0%5D=d"

    def test_malformed_uri(self, make_page):
        request = SearchRequest(search="x", request_uri="http://[::1/search?Search=x")
        with pytest.raises(QueryStringError):
            make_page(request).search_query()

    def test_empty_request(self, make_page):
        assert make_page(SearchRequest()).search_query() == ""


class TestFieldOptions:
    def test_sort_options(self, make_page):
        options = make_page().sort_options()
        assert list(options)[0] == ""
        assert options[""] == "Any"
        assert "Title" in options
        assert "Location" not in options

    def test_search_type_options(self, mapper, executor, article_config):
        settings = SearchSettings(additional_search_types={"File": "Files", "Page": "Pages"})
        page = SearchPage(article_config, SearchRequest(), executor, mapper, settings)
        assert page.search_type_options() == {
            "Article": "Article",
            "Event": "Event",
            "Page": "Pages",
            "File": "Files",
        }

    def test_search_type_options_without_extras(self, make_page):
        assert make_page().search_type_options() == {
            "Article": "Article",
            "Event": "Event",
            "Page": "Page",
        }

    def test_geo_selectable_fields(self, make_page):
        assert make_page().geo_selectable_fields() == {"Location": "Location"}

    def test_searchable_types_default(self, make_page):
        page = make_page(config=SearchConfiguration())
        assert page.searchable_types() == ["Page"]
