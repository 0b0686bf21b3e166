"""PageSearch Configuration Components.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from pagesearch_core.config.settings import SearchSettings
from pagesearch_core.config.page import SearchConfiguration, SortDirection, GeoPoint
from pagesearch_core.config.resolver import ConfigurationResolver

__all__ = [
    "SearchSettings",
    "SearchConfiguration",
    "SortDirection",
    "GeoPoint",
    "ConfigurationResolver",
]
