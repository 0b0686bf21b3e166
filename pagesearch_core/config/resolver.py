"""PageSearch Configuration Resolver - Configuration Directives.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from pagesearch_core.config.page import SearchConfiguration
from pagesearch_core.config.settings import SearchSettings
from pagesearch_core.schema.mapper import FieldNameMapper

if TYPE_CHECKING:
    from pagesearch_core.query.request import SearchRequest

logger = logging.getLogger(__name__)


class ConfigurationResolver:
    """Derives compiler directives from a page configuration."""

    def __init__(
        self,
        config: SearchConfiguration,
        mapper: FieldNameMapper,
        settings: Optional[SearchSettings] = None,
    ):
        self.config = config
        self.mapper = mapper
        self.settings = settings or SearchSettings()

    def searchable_types(self, default: Optional[str] = None) -> List[str]:
        """Types the page searches within, or ``[default]`` when none are set."""
        types = list(self.config.search_types)
        if not types and default:
            types = [default]
        return types

    def resolve_types(self, request: "SearchRequest") -> List[str]:
        """Resolve the type set for a request.

        A requested type wins only when it is one of the configured types.
        When no type is known but a sort field is requested, the default
        type is used so the sort field has something to resolve against.
        """
        types = self.searchable_types()
        if request.search_type:
            if request.search_type in types:
                types = [request.search_type]
            else:
                logger.debug(f"Ignoring search type {request.search_type} not in {types}")

        sort_by = request.sort_by or self.config.sort_by
        if not types and sort_by:
            types = [self.settings.default_type]
        return types

    def facet_fields(self) -> List[str]:
        """Backend facet fields, falling back to the global defaults."""
        if not self.config.facet_fields:
            return list(self.settings.default_facets)

        types = self.searchable_types(self.settings.default_type)
        fields = []
        for name in self.config.facet_fields:
            physical = self.mapper.resolve(name, types)
            if physical is None:
                logger.debug(f"Dropping unresolvable facet field {name}")
                continue
            fields.append(physical)
        return fields

    def facet_label_mapping(self) -> Dict[str, str]:
        """Backend facet field name to display title."""
        types = self.searchable_types(self.settings.default_type)
        mapping = {}
        for name, label in self.config.facet_mapping.items():
            physical = self.mapper.resolve(name, types) or name
            mapping[physical] = label
        return mapping

    def query_facets(self) -> Dict[str, str]:
        """Facet query expression to display label."""
        return {expression: label for label, expression in self.config.facet_queries.items()}

    def field_filters(self, request: "SearchRequest") -> List[Tuple[str, str]]:
        """Requested filters that are on the configured whitelist.

        Returns:
            ``(name, clause)`` pairs in request order
        """
        whitelist = self.config.filter_fields
        selected: List[Tuple[str, str]] = []
        seen = set()
        for name in request.field_filters:
            if name in seen:
                continue
            seen.add(name)
            if name not in whitelist:
                logger.debug(f"Rejected filter {name}: not whitelisted")
                continue
            clause = whitelist[name].strip() or name
            selected.append((name, clause))
        return selected


__all__ = ["ConfigurationResolver"]
