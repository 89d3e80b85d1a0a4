# Entity schema: field tags, descriptor tables and the @entity decorator.
from __future__ import annotations
import dataclasses
import datetime as dt
import typing
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from ..errors import EntityDefinitionError, SchemaError
from ..naming import to_column

# Key under which a field's tag lives in dataclasses.field(metadata=...)
TAG_KEY = "sqlcraft"

SCHEMA_ATTR = "__sqlcraft_schema__"

# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Plain:
    """Equality predicate when the field has a value."""


@dataclass(frozen=True)
class Transient:
    """Never projected, never filtered on."""


@dataclass(frozen=True)
class Like:
    """Pattern-match predicate (like '%value%') when the field has a value."""


@dataclass(frozen=True)
class Between:
    """
    Range marker. The marker's own value is not used; the bounds come from the
    two named companion fields.
    """
    min: str
    max: str


@dataclass(frozen=True)
class In:
    """Set-membership marker; the values come from the named list field."""
    values: str


Tag = Union[Plain, Transient, Like, Between, In]


def transient(default: Any = None) -> Any:
    return field(default=default, metadata={TAG_KEY: Transient()})


def like(default: Any = None) -> Any:
    return field(default=default, metadata={TAG_KEY: Like()})


def between(min: str, max: str, default: Any = None) -> Any:
    return field(default=default, metadata={TAG_KEY: Between(min, max)})


def in_(values: str, default: Any = None) -> Any:
    return field(default=default, metadata={TAG_KEY: In(values)})


# ---------------------------------------------------------------------------
# Field descriptors
# ---------------------------------------------------------------------------


class FieldKind(str, Enum):
    TEXT = "text"
    INTEGER = "integer"
    NUMBER = "number"
    DATE = "date"
    DATETIME = "datetime"
    LIST = "list"
    OTHER = "other"

    @property
    def is_temporal(self) -> bool:
        return self in (FieldKind.DATE, FieldKind.DATETIME)

    @property
    def is_numeric(self) -> bool:
        return self in (FieldKind.INTEGER, FieldKind.NUMBER)


def _unwrap_optional(tp: Any) -> Any:
    if typing.get_origin(tp) is Union:
        args = [a for a in typing.get_args(tp) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp


def kind_of(tp: Any) -> FieldKind:
    """Bucket a field annotation into the kinds the predicate builder knows."""
    tp = _unwrap_optional(tp)
    origin = typing.get_origin(tp)
    if origin in (list, tuple, set, frozenset) or tp in (list, tuple):
        return FieldKind.LIST
    if not isinstance(tp, type):
        return FieldKind.OTHER
    # datetime subclasses date, bool subclasses int: order matters
    if issubclass(tp, dt.datetime):
        return FieldKind.DATETIME
    if issubclass(tp, dt.date):
        return FieldKind.DATE
    if issubclass(tp, bool):
        return FieldKind.OTHER
    if issubclass(tp, int):
        return FieldKind.INTEGER
    if issubclass(tp, (float, Decimal)):
        return FieldKind.NUMBER
    if issubclass(tp, str):
        return FieldKind.TEXT
    return FieldKind.OTHER


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    column: str
    kind: FieldKind
    tag: Tag = Plain()

    @property
    def transient(self) -> bool:
        return isinstance(self.tag, Transient)

    def value_of(self, obj: Any) -> Any:
        return getattr(obj, self.name)


@dataclass(frozen=True)
class EntitySchema:
    table: Optional[str]
    fields: Tuple[FieldDescriptor, ...]

    def get(self, name: str) -> FieldDescriptor:
        for f in self.fields:
            if f.name == name:
                return f
        raise KeyError(name)

    @property
    def names(self) -> List[str]:
        return [f.name for f in self.fields]

    def to_dict(self) -> Dict[str, Any]:
        out = []
        for f in self.fields:
            item: Dict[str, Any] = {"name": f.name, "column": f.column, "type": f.kind.value}
            if not isinstance(f.tag, Plain):
                item["tag"] = type(f.tag).__name__.lower()
            out.append(item)
        return {"table": self.table, "fields": out}


def _describe(cls: type) -> Tuple[FieldDescriptor, ...]:
    try:
        hints = typing.get_type_hints(cls)
    except NameError as e:
        raise EntityDefinitionError(f"{cls.__name__}: unresolved annotation ({e})") from e

    out: List[FieldDescriptor] = []
    for f in dataclasses.fields(cls):
        tag = f.metadata.get(TAG_KEY, Plain())
        out.append(
            FieldDescriptor(
                name=f.name,
                column=to_column(f.name),
                kind=kind_of(hints.get(f.name, f.type)),
                tag=tag,
            )
        )
    return tuple(out)


def _check_companions(cls: type, fields: Tuple[FieldDescriptor, ...]) -> Tuple[FieldDescriptor, ...]:
    """
    Verify every between/in companion exists. Companions only carry operands
    for their marker, so they come back tagged Transient.
    """
    by_name = {f.name: f for f in fields}
    companions: set[str] = set()
    for f in fields:
        if isinstance(f.tag, Between):
            for ref in (f.tag.min, f.tag.max):
                if ref not in by_name:
                    raise EntityDefinitionError(
                        f"{cls.__name__}.{f.name}: between bound field {ref!r} does not exist"
                    )
                companions.add(ref)
        elif isinstance(f.tag, In):
            ref = by_name.get(f.tag.values)
            if ref is None:
                raise EntityDefinitionError(
                    f"{cls.__name__}.{f.name}: in values field {f.tag.values!r} does not exist"
                )
            if ref.kind is not FieldKind.LIST:
                raise EntityDefinitionError(
                    f"{cls.__name__}.{f.name}: in values field {f.tag.values!r} must be a list"
                )
            companions.add(ref.name)

    out: List[FieldDescriptor] = []
    for f in fields:
        if f.name in companions and not f.transient:
            if not isinstance(f.tag, Plain):
                raise EntityDefinitionError(
                    f"{cls.__name__}.{f.name}: a companion field cannot carry its own tag"
                )
            f = dataclasses.replace(f, tag=Transient())
        out.append(f)
    return tuple(out)


def entity(table: Optional[str] = None):
    """
    Class decorator: turn cls into a dataclass (if it is not one yet) and
    attach its field descriptor table.

        @entity(table="t_user")
        class User:
            id: Optional[str] = None
            userName: Optional[str] = like()
    """
    def wrap(cls: type) -> type:
        # a subclass of a dataclass still needs its own fields collected
        if "__dataclass_fields__" not in cls.__dict__:
            cls = dataclass(cls)
        fields = _check_companions(cls, _describe(cls))
        setattr(cls, SCHEMA_ATTR, EntitySchema(table=table, fields=fields))
        return cls

    return wrap


def schema_of(obj: Any) -> EntitySchema:
    cls = obj if isinstance(obj, type) else type(obj)
    schema = cls.__dict__.get(SCHEMA_ATTR)
    if schema is None:
        raise SchemaError(f"{cls.__name__} is not a registered entity (missing @entity)")
    return schema


def sortable_names(obj: Any) -> List[str]:
    """
    Property names a sort field may refer to. For an entity these are its
    non-transient fields; for any other type, its declared properties less
    the dataclass fields tagged transient.
    """
    cls = obj if isinstance(obj, type) else type(obj)
    schema = cls.__dict__.get(SCHEMA_ATTR)
    if schema is not None:
        return [f.name for f in schema.fields if not f.transient]
    if dataclasses.is_dataclass(cls):
        return [
            f.name
            for f in dataclasses.fields(cls)
            if not isinstance(f.metadata.get(TAG_KEY), Transient) and not f.name.startswith("_")
        ]
    return property_names(cls)


def property_names(obj: Any) -> List[str]:
    """
    Public property names declared on obj's type: dataclass fields, or the
    model fields of a pydantic model.
    """
    cls = obj if isinstance(obj, type) else type(obj)
    if dataclasses.is_dataclass(cls):
        names = [f.name for f in dataclasses.fields(cls)]
    else:
        names = list(getattr(cls, "model_fields", {}) or {})
    return [n for n in names if not n.startswith("_")]


# ---------------------------------------------------------------------------
# Paging / sorting
# ---------------------------------------------------------------------------


@dataclass
class PageCondition:
    """
    Paging and sort parameters bound from the request (page, rows, sidx, sord).
    Query view classes inherit from it so the sort field whitelist also covers
    the entity's own properties.
    """
    page: Optional[int] = transient(1)
    rows: Optional[int] = transient(10)
    sidx: Optional[str] = transient()
    sord: Optional[str] = transient()


__all__ = [
    "TAG_KEY",
    "Plain",
    "Transient",
    "Like",
    "Between",
    "In",
    "Tag",
    "transient",
    "like",
    "between",
    "in_",
    "FieldKind",
    "kind_of",
    "FieldDescriptor",
    "EntitySchema",
    "entity",
    "schema_of",
    "property_names",
    "sortable_names",
    "PageCondition",
]
