"""
Entity declarations for sqlcraft.

This module provides the field tags, the per-type field descriptor table and
request binding for entities.
"""

from .schema import (
    Plain,
    Transient,
    Like,
    Between,
    In,
    Tag,
    transient,
    like,
    between,
    in_,
    FieldKind,
    FieldDescriptor,
    EntitySchema,
    entity,
    schema_of,
    property_names,
    sortable_names,
    PageCondition,
)
from .binding import bind_entity

__all__ = [
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
    "FieldDescriptor",
    "EntitySchema",
    "entity",
    "schema_of",
    "property_names",
    "sortable_names",
    "PageCondition",
    "bind_entity",
]
