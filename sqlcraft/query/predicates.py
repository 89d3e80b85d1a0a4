from __future__ import annotations
import datetime as dt
import logging
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Callable, List, Optional

from ..database import Dialect, format_date
from ..entities.schema import Between, EntitySchema, FieldDescriptor, In, Like, schema_of
from ..errors import PredicateBuildError, SqlCraftError
from .escape import escape_sql, quote_literal
from .fragment import QueryFragment

log = logging.getLogger("sqlcraft.query")

# Paging/sorting parameters bound onto view objects; never filter columns.
DEFAULT_IGNORED = ("class", "pageable", "page", "rows", "sidx", "sord")

# Per-field failures that are reported instead of aborting the whole build.
_FIELD_ERRORS = (SqlCraftError, ValueError, TypeError, AttributeError)


class BuildStatus(str, Enum):
    OK = "ok"
    PARTIAL = "partial"


@dataclass(frozen=True)
class FieldDiagnostic:
    field: str
    message: str

    def to_dict(self):
        return {"field": self.field, "message": self.message}


@dataclass
class PredicateResult:
    clauses: List[str] = field(default_factory=list)
    diagnostics: List[FieldDiagnostic] = field(default_factory=list)

    @property
    def status(self) -> BuildStatus:
        return BuildStatus.PARTIAL if self.diagnostics else BuildStatus.OK

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    def raise_for_status(self) -> None:
        if self.diagnostics:
            raise PredicateBuildError(self.diagnostics)


def is_blank(value: Any) -> bool:
    """
    None, '' and empty collections are blank. 0 and False are values.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        return len(value) == 0
    return False


def _scalar_text(value: Any) -> str:
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        raise ValueError("collection value needs an in marker")
    if isinstance(value, dt.date):
        return format_date(value)
    return str(value)


def _date_text(value: Any) -> str:
    if isinstance(value, dt.date):
        return format_date(value)
    if isinstance(value, str):
        return escape_sql(value)
    raise TypeError(f"range bound is not a date: {value!r}")


def _numeric_literal(value: Any) -> str:
    if isinstance(value, bool):
        raise TypeError(f"range bound is not a number: {value!r}")
    try:
        d = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"range bound is not a number: {value!r}") from None
    if not d.is_finite():
        raise ValueError(f"range bound is not finite: {value!r}")
    return str(d)


def _range_clauses(
    obj: Any,
    fd: FieldDescriptor,
    tag: Between,
    dialect: Callable[[], Dialect],
) -> List[str]:
    lo = getattr(obj, tag.min)
    hi = getattr(obj, tag.max)
    col = fd.column
    out: List[str] = []

    if fd.kind.is_temporal:
        d = dialect()
        for op, bound in ((">", lo), ("<", hi)):
            if not is_blank(bound):
                out.append(f" and {col} {op} {d.date_literal(_date_text(bound))}")
    elif fd.kind.is_numeric:
        for op, bound in ((">", lo), ("<", hi)):
            if not is_blank(bound):
                out.append(f" and {col} {op} {_numeric_literal(bound)}")
    else:
        log.debug("No range semantics for %s of type %s", fd.name, fd.kind.value)
    return out


def _in_clauses(obj: Any, fd: FieldDescriptor, tag: In) -> List[str]:
    values = getattr(obj, tag.values)
    if is_blank(values):
        return []
    if isinstance(values, (str, bytes)):
        raise TypeError(f"in values field {tag.values} must hold a list, got a string")
    items = ",".join(quote_literal(v) for v in values)
    return [f" and {fd.column} in ({items})"]


def field_clauses(obj: Any, fd: FieldDescriptor, dialect: Callable[[], Dialect]) -> List[str]:
    """
    All predicates one field contributes, in order. Either the whole list is
    returned or an exception is raised; nothing is half-built.
    """
    value = fd.value_of(obj)
    tag = fd.tag

    if not is_blank(value):
        text = escape_sql(_scalar_text(value))
        if isinstance(tag, Like):
            return [f" and {fd.column} like '%{text}%'"]
        return [f" and {fd.column} = '{text}'"]

    if isinstance(tag, Between):
        return _range_clauses(obj, fd, tag, dialect)
    if isinstance(tag, In):
        return _in_clauses(obj, fd, tag)
    return []


def _dialect_resolver(dialect: Optional[Dialect]) -> Callable[[], Dialect]:
    def resolve() -> Dialect:
        if dialect is not None:
            return dialect
        # Imported here so that building predicates with an explicit dialect
        # never touches environment configuration.
        from ..settings import active_dialect
        return active_dialect()

    return resolve


def append_predicates(
    entity: Any,
    fragment: QueryFragment,
    *ignore_properties: str,
    dialect: Optional[Dialect] = None,
) -> PredicateResult:
    """
    Append ' and ...' conditions for every populated field of entity.

    - plain field with a value    -> col = 'value'
    - like-tagged field           -> col like '%value%'
    - between marker (no value)   -> col > lower / col < upper, per bound present
    - in marker (no value)        -> col in ('a','b')

    A field whose predicates cannot be built is skipped and reported in the
    result's diagnostics; the other fields still contribute.
    Raises SchemaError when entity is not a registered entity type.
    """
    schema: EntitySchema = schema_of(entity)
    ignored = set(DEFAULT_IGNORED) | set(ignore_properties)
    resolve = _dialect_resolver(dialect)
    result = PredicateResult()

    for fd in schema.fields:
        if fd.transient or fd.name in ignored:
            continue
        try:
            clauses = field_clauses(entity, fd, resolve)
        except _FIELD_ERRORS as e:
            log.error("Predicate for %s.%s failed: %s", type(entity).__name__, fd.name, e, exc_info=True)
            result.diagnostics.append(FieldDiagnostic(fd.name, str(e)))
            continue
        fragment.extend(clauses)
        result.clauses.extend(clauses)

    return result


__all__ = [
    "DEFAULT_IGNORED",
    "BuildStatus",
    "FieldDiagnostic",
    "PredicateResult",
    "is_blank",
    "field_clauses",
    "append_predicates",
]
