"""PageSearch Schema Components.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from pagesearch_core.schema.registry import SchemaRegistry, InMemorySchemaRegistry
from pagesearch_core.schema.mapper import (
    FieldNameMapper,
    FieldSpec,
    SCORE_FIELD,
    GEO_POINT_TYPE,
)

__all__ = [
    "SchemaRegistry",
    "InMemorySchemaRegistry",
    "FieldNameMapper",
    "FieldSpec",
    "SCORE_FIELD",
    "GEO_POINT_TYPE",
]
