"""PageSearch Facet Navigator - Drill-Down and Crumb Links.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Generator, List, Mapping, Optional, Sequence, Union

from pagesearch_core.backend.results import ResultSet
from pagesearch_core.facets.links import add_filter, link, quoted, remove_filter


@dataclass
class FacetTerm:
    """A facet term with links adding it to the active selection."""

    name: str
    query: str
    count: int = 0
    filter_query: str = ""
    quoted_filter_query: str = ""
    search_link: str = ""
    quoted_search_link: str = ""


@dataclass
class FacetGroup:
    """Terms of one facet field under a display title."""

    name: str
    title: str
    terms: List[FacetTerm] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.terms)

    def __iter__(self) -> Generator[FacetTerm, None, None]:
        yield from self.terms


@dataclass
class Crumb:
    """An active facet selection with a link removing it."""

    name: str
    facet: str
    index: Union[int, str, None]
    remove_query: str = ""
    remove_link: str = ""

    @property
    def value(self) -> str:
        return self.name


class FacetNavigator:
    """Turns backend facet counts into navigation links."""

    def __init__(self, filter_param: str = "filter", link_base: str = ""):
        """Initialize navigator.

        Args:
            filter_param: Request parameter carrying facet selections
            link_base: Link of the results page, prefixed to every link
        """
        self.filter_param = filter_param
        self.link_base = link_base

    def all_facets(
        self,
        result_set: Optional[ResultSet],
        label_mapping: Optional[Mapping[str, str]] = None,
        query_string: str = "",
        query_facets: Optional[Mapping[str, str]] = None,
    ) -> List[FacetGroup]:
        """One group per facet in the result set, in result order."""
        if result_set is None:
            return []
        mapping = label_mapping or {}
        return [
            FacetGroup(
                name=name,
                title=mapping.get(name, name),
                terms=self.terms_for(result_set, name, query_string, query_facets),
            )
            for name in result_set.facets
        ]

    def terms_for(
        self,
        result_set: Optional[ResultSet],
        facet_name: str,
        query_string: str = "",
        query_facets: Optional[Mapping[str, str]] = None,
    ) -> List[FacetTerm]:
        """Terms of one facet with add-filter links.

        Args:
            result_set: Backend response
            facet_name: Facet field or facet query name
            query_string: Current canonical query string
            query_facets: Facet query expression to display label

        Returns:
            Terms in backend order; empty for an unknown facet
        """
        if result_set is None:
            return []
        labels = query_facets or {}
        terms = []
        for count in result_set.facet(facet_name):
            filter_query = add_filter(query_string, self.filter_param, facet_name, count.term)
            quoted_query = add_filter(query_string, self.filter_param, facet_name, quoted(count.term))
            terms.append(FacetTerm(
                name=labels.get(count.term, count.term),
                query=count.term,
                count=count.count,
                filter_query=filter_query,
                quoted_filter_query=quoted_query,
                search_link=link(self.link_base, filter_query),
                quoted_search_link=link(self.link_base, quoted_query),
            ))
        return terms

    def crumbs(
        self,
        active_selections: Mapping[str, Sequence[str]],
        query_string: str = "",
        selection_keys: Optional[Mapping[str, Sequence[Union[int, str, None]]]] = None,
    ) -> List[Crumb]:
        """One crumb per active selection, each linking to its removal.

        Args:
            active_selections: Facet name to selected values
            query_string: Current canonical query string
            selection_keys: Facet name to the parameter key of each value;
                values are taken to be numbered from 0 when absent

        Returns:
            Crumbs in selection order
        """
        crumbs = []
        for facet_name, values in active_selections.items():
            keys = list((selection_keys or {}).get(facet_name, ()))
            if len(keys) != len(values):
                keys = list(range(len(values)))
            for index, value in zip(keys, values):
                remove_query = remove_filter(query_string, self.filter_param, facet_name, index, value)
                crumbs.append(Crumb(
                    name=value,
                    facet=facet_name,
                    index=index,
                    remove_query=remove_query,
                    remove_link=link(self.link_base, remove_query),
                ))
        return crumbs


__all__ = ["FacetNavigator", "FacetGroup", "FacetTerm", "Crumb"]
