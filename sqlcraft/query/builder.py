from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..database import Dialect
from ..entities.schema import EntitySchema, schema_of, sortable_names
from ..errors import EmptyProjectionError, SchemaError
from ..naming import to_column
from .fragment import QueryFragment
from .predicates import BuildStatus, FieldDiagnostic, append_predicates

log = logging.getLogger("sqlcraft.query")

# Always-true anchor so every filter can be appended as ' and ...'
_ANCHOR = " where '1' = '1' "


def _require_table(entity: Any, schema: EntitySchema) -> str:
    if not schema.table:
        name = entity.__name__ if isinstance(entity, type) else type(entity).__name__
        raise SchemaError(f"{name} has no table name")
    return schema.table


# -----------------------------------------------------------------------------
# SELECT ... FROM
# -----------------------------------------------------------------------------
def build_projection(entity: Any, *ignore_properties: str) -> QueryFragment:
    """
    Start a query for entity (instance or class):

        select id ,user_name from t_user where '1' = '1'

    Transient fields and ignore_properties are left out of the column list.
    Raises SchemaError if entity is unregistered or has no table, and
    EmptyProjectionError if no column is left to select.
    """
    schema = schema_of(entity)
    ignored = set(ignore_properties)

    sql = QueryFragment("select ")
    columns = 0
    for fd in schema.fields:
        if fd.transient or fd.name in ignored:
            continue
        sql.append(f"{fd.column} ,")
        columns += 1

    if columns == 0:
        raise EmptyProjectionError(f"No columns left to select from {schema.table or '?'}")
    table = _require_table(entity, schema)

    # drop the trailing comma, keep the space before it
    text = sql.text[:-1]
    return QueryFragment(text).append(f"from {table}{_ANCHOR}")


def build_count(entity: Any) -> QueryFragment:
    schema = schema_of(entity)
    table = _require_table(entity, schema)
    return QueryFragment(f"select count(*) from {table}{_ANCHOR}")


# -----------------------------------------------------------------------------
# ORDER BY / paging
# -----------------------------------------------------------------------------
def append_order(sort_spec: Any, fragment: QueryFragment) -> bool:
    """
    Append ' order by <col> asc|desc' when sort_spec.sidx names one of the
    non-transient properties declared on sort_spec's own type. Anything else
    is dropped, so sidx can never smuggle an expression (or a column that is
    not selected, such as rows or password) into the statement.
    Returns True when a clause was appended.
    """
    sidx = getattr(sort_spec, "sidx", None)
    sord = getattr(sort_spec, "sord", None)
    if not isinstance(sidx, str) or not sidx.strip():
        return False

    if sidx not in sortable_names(sort_spec):
        log.warning("Rejected sort field %r for %s", sidx, type(sort_spec).__name__)
        return False

    direction = " desc" if isinstance(sord, str) and sord.lower() == "desc" else " asc"
    fragment.append(f" order by {to_column(sidx)}{direction}")
    return True


def append_paging(page_condition: Any, fragment: QueryFragment, dialect: Dialect) -> bool:
    """
    Append the dialect's row-limiting clause for the 1-based page and the
    page size in rows. Nothing is appended when rows is not positive.
    """
    rows = getattr(page_condition, "rows", None)
    page = getattr(page_condition, "page", None)
    if rows is None or isinstance(rows, bool) or int(rows) <= 0:
        return False
    rows = int(rows)
    page = max(int(page or 1), 1)
    fragment.append(dialect.page_clause((page - 1) * rows, rows))
    return True


# -----------------------------------------------------------------------------
# Full statement
# -----------------------------------------------------------------------------
@dataclass
class SelectBuildResult:
    sql: str
    count_sql: Optional[str] = None
    diagnostics: List[FieldDiagnostic] = field(default_factory=list)

    @property
    def status(self) -> BuildStatus:
        return BuildStatus.PARTIAL if self.diagnostics else BuildStatus.OK

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sql": self.sql,
            "countSql": self.count_sql,
            "status": self.status.value,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }


def build_select(
    view: Any,
    *ignore_properties: str,
    dialect: Dialect,
    include_count: bool = False,
    paginate: bool = True,
) -> SelectBuildResult:
    """
    Compose projection, predicates, order and paging for a populated view
    object (an entity that also carries page/rows/sidx/sord).
    - the count mirror shares the predicates but has no order or paging
    """
    sql = build_projection(view, *ignore_properties)
    preds = append_predicates(view, sql, *ignore_properties, dialect=dialect)
    append_order(view, sql)
    if paginate:
        append_paging(view, sql, dialect)

    count_sql = None
    if include_count:
        count_sql = build_count(view).extend(preds.clauses).text

    return SelectBuildResult(sql=sql.text, count_sql=count_sql, diagnostics=preds.diagnostics)


__all__ = [
    "build_projection",
    "build_count",
    "append_order",
    "append_paging",
    "build_select",
    "SelectBuildResult",
]
