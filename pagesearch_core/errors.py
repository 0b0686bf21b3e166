"""PageSearch Errors.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations


class PageSearchError(Exception):
    """Base class for PageSearch errors."""


class ConfigurationError(PageSearchError, ValueError):
    """A stored search configuration could not be normalized."""

    def __init__(self, field_name: str, message: str):
        super().__init__(f"{field_name}: {message}")
        self.field_name = field_name


class QueryStringError(PageSearchError, ValueError):
    """The current request URL cannot be parsed for link construction."""

    def __init__(self, uri: str, cause: Exception = None):
        super().__init__(f"Can't parse URL: {uri}")
        self.uri = uri
        if cause is not None:
            self.__cause__ = cause


__all__ = ["PageSearchError", "ConfigurationError", "QueryStringError"]
