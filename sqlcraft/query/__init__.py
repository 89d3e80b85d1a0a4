"""
Query building module for sqlcraft.

This module generates SQL fragments (projection, filter predicates, ordering
and paging) from tagged entity objects.
"""

from .escape import escape_sql, quote_literal
from .fragment import QueryFragment
from .predicates import (
    DEFAULT_IGNORED,
    BuildStatus,
    FieldDiagnostic,
    PredicateResult,
    append_predicates,
    is_blank,
)
from .builder import (
    build_projection,
    build_count,
    append_order,
    append_paging,
    build_select,
    SelectBuildResult,
)

__all__ = [
    "escape_sql",
    "quote_literal",
    "QueryFragment",
    "DEFAULT_IGNORED",
    "BuildStatus",
    "FieldDiagnostic",
    "PredicateResult",
    "append_predicates",
    "is_blank",
    "build_projection",
    "build_count",
    "append_order",
    "append_paging",
    "build_select",
    "SelectBuildResult",
]
