"""
Request binding: populate an entity instance from a criteria payload.

Keys may be the property names themselves ('userName') or their column form
('user_name'). Values are coerced to the field's kind; blank strings become
None so the predicate builder sees them as absent.
"""

from __future__ import annotations
import datetime as dt
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar

from ..errors import BindingError
from ..naming import to_column
from .schema import FieldDescriptor, FieldKind, schema_of

T = TypeVar("T")


def _normalize_list(raw: Any) -> List[str]:
    """
    Accepts either a comma-delimited string or a sequence; returns a list of strings.
    """
    if isinstance(raw, str):
        return [s.strip() for s in raw.split(",") if s.strip() != ""]
    return [str(x) for x in raw]


def _coerce(fd: FieldDescriptor, raw: Any) -> Any:
    if raw is None:
        return None
    if isinstance(raw, str) and raw.strip() == "" and fd.kind is not FieldKind.TEXT:
        return None

    k = fd.kind
    try:
        if k is FieldKind.TEXT:
            if isinstance(raw, (list, tuple, set, dict)):
                raise TypeError("text field given a collection")
            return str(raw)
        if k is FieldKind.INTEGER:
            if isinstance(raw, bool):
                raise ValueError("boolean is not an integer")
            # int() would truncate 9.5 to 9 and move a range bound
            if isinstance(raw, float) and not raw.is_integer():
                raise ValueError("not an integral number")
            if isinstance(raw, Decimal) and raw != raw.to_integral_value():
                raise ValueError("not an integral number")
            return int(raw)
        if k is FieldKind.NUMBER:
            return Decimal(str(raw))
        if k is FieldKind.DATETIME:
            if isinstance(raw, dt.datetime):
                return raw
            if isinstance(raw, dt.date):
                return dt.datetime(raw.year, raw.month, raw.day)
            return dt.datetime.fromisoformat(str(raw).strip())
        if k is FieldKind.DATE:
            if isinstance(raw, dt.datetime):
                return raw.date()
            if isinstance(raw, dt.date):
                return raw
            return dt.datetime.fromisoformat(str(raw).strip()).date()
        if k is FieldKind.LIST:
            return _normalize_list(raw)
    except (ValueError, TypeError, InvalidOperation) as e:
        raise BindingError(f"Bad value for {fd.name} ({k.value}): {raw!r}") from e
    return raw


def _resolve_key(key: str, by_name: Dict[str, FieldDescriptor], by_column: Dict[str, FieldDescriptor]) -> Optional[FieldDescriptor]:
    fd = by_name.get(key)
    if fd is None:
        fd = by_column.get(to_column(key))
    return fd


def bind_entity(cls: Type[T], payload: Optional[Mapping[str, Any]]) -> T:
    schema = schema_of(cls)
    by_name = {f.name: f for f in schema.fields}
    by_column = {f.column: f for f in schema.fields}

    values: Dict[str, Any] = {}
    for key, raw in (payload or {}).items():
        fd = _resolve_key(str(key), by_name, by_column)
        if fd is None:
            raise BindingError(f"Unknown property for {cls.__name__}: {key}")
        values[fd.name] = _coerce(fd, raw)
    return cls(**values)
