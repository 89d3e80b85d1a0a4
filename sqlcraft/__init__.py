"""
sqlcraft: build SQL query fragments from tagged entity objects.
"""

from .entities import (
    PageCondition,
    between,
    bind_entity,
    entity,
    in_,
    like,
    transient,
)
from .database import Dialect
from .query import (
    QueryFragment,
    append_order,
    append_paging,
    append_predicates,
    build_count,
    build_projection,
    build_select,
    escape_sql,
)
from .naming import to_column

__version__ = "1.0.0"

__all__ = [
    "PageCondition",
    "between",
    "bind_entity",
    "entity",
    "in_",
    "like",
    "transient",
    "Dialect",
    "QueryFragment",
    "append_order",
    "append_paging",
    "append_predicates",
    "build_count",
    "build_projection",
    "build_select",
    "escape_sql",
    "to_column",
]
