import os
from typing import Any, Mapping

from ..entities.schema import EntitySchema
from ..naming import to_column
from ..query import DEFAULT_IGNORED

MAX_ROWS = int(os.getenv("MAX_ROWS", "1000"))


def _known(name: str, schema: EntitySchema) -> bool:
    return name in schema.names or to_column(name) in {f.column for f in schema.fields}


def _assert_criteria_allowed(entity: str, criteria: Mapping[str, Any], schema: EntitySchema) -> None:
    for key in criteria or {}:
        if key in DEFAULT_IGNORED:
            raise ValueError(f"Paging parameter {key} must not be sent as a criterion")
        if not _known(key, schema):
            raise ValueError(f"Criterion not allowed for {entity}: {key}")


def _assert_ignored_allowed(entity: str, ignore: list[str], schema: EntitySchema) -> None:
    for name in ignore or []:
        if name not in schema.names:
            raise ValueError(f"Ignored property not defined on {entity}: {name}")


def _cap_rows(rows: int | None, cap: int = MAX_ROWS) -> int:
    if not rows or rows <= 0:
        return min(10, cap)
    return min(rows, cap)
