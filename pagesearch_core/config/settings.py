"""PageSearch Settings - Process-Wide Search Defaults.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class SearchSettings:
    """Search defaults shared by every search page.

    Attributes:
        default_facets: Facet fields used when a page configures none
        facet_limit: Maximum terms returned per facet field
        default_page_size: Results per page when neither request nor page sets one
        default_geo_radius: Radius used for geo restriction when unset
        default_type: Type resolved against when no type is configured
        filter_param: Request parameter carrying active facet selections
        type_field: Backend field holding a document's type hierarchy
        parents_field: Backend field holding a document's ancestor ids
        return_fields: Fields requested back from the backend
        additional_search_types: Extra selectable types, name to label
    """

    default_facets: List[str] = field(default_factory=list)
    facet_limit: int = 10
    default_page_size: int = 10
    default_geo_radius: float = 5.0
    default_type: str = "Page"
    filter_param: str = "filter"
    type_field: str = "ClassNameHierarchy_ms"
    parents_field: str = "ParentsHierarchy_ms"
    return_fields: str = "*,score"
    additional_search_types: Dict[str, str] = field(default_factory=dict)


__all__ = ["SearchSettings"]
