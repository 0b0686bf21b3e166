"""PageSearch Facet Navigation Components.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from pagesearch_core.facets.navigator import (
    FacetNavigator,
    FacetGroup,
    FacetTerm,
    Crumb,
)
from pagesearch_core.facets.links import add_filter, remove_filter

__all__ = [
    "FacetNavigator",
    "FacetGroup",
    "FacetTerm",
    "Crumb",
    "add_filter",
    "remove_filter",
]
