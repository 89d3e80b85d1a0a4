import dataclasses
import datetime as dt
import json
import keyword
import logging
import time
import typing as t
from decimal import Decimal
from pathlib import Path

import jsonschema
import yaml

from ..entities.schema import (
    PageCondition,
    between,
    entity,
    in_,
    like,
    schema_of,
    transient,
)
from ..errors import EntityDefinitionError, RegistryError
from ..naming import to_camel

log = logging.getLogger("sqlcraft.registry")

_TYPES: dict[str, t.Any] = {
    "text": t.Optional[str],
    "integer": t.Optional[int],
    "number": t.Optional[Decimal],
    "date": t.Optional[dt.date],
    "datetime": t.Optional[dt.datetime],
    "list": t.Optional[t.List[str]],
}

ENTITIES_SCHEMA: dict[str, t.Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Entity definitions",
    "type": "object",
    "required": ["entities"],
    "properties": {
        "entities": {
            "type": "object",
            "additionalProperties": {"$ref": "#/$defs/Entity"},
        },
    },
    "$defs": {
        "Entity": {
            "type": "object",
            "additionalProperties": False,
            "required": ["table", "fields"],
            "properties": {
                "table": {"type": "string", "minLength": 1},
                "fields": {"type": "array", "minItems": 1, "items": {"$ref": "#/$defs/Field"}},
            },
        },
        "Field": {
            "type": "object",
            "additionalProperties": False,
            "required": ["name"],
            "properties": {
                "name": {"type": "string", "pattern": "^[A-Za-z_][A-Za-z0-9_]*$"},
                "type": {"type": "string", "enum": list(_TYPES)},
                "tag": {
                    "oneOf": [
                        {"type": "string", "enum": ["plain", "like", "transient"]},
                        {
                            "type": "object",
                            "additionalProperties": False,
                            "required": ["between"],
                            "properties": {
                                "between": {
                                    "type": "array",
                                    "items": {"type": "string"},
                                    "minItems": 2,
                                    "maxItems": 2,
                                },
                            },
                        },
                        {
                            "type": "object",
                            "additionalProperties": False,
                            "required": ["in"],
                            "properties": {"in": {"type": "string"}},
                        },
                    ]
                },
            },
        },
    },
}

_RESERVED = {f.name for f in dataclasses.fields(PageCondition)}


def _field_spec(spec: dict[str, t.Any]) -> tuple[str, t.Any, t.Any]:
    name = spec["name"]
    if keyword.iskeyword(name) or name in _RESERVED:
        raise EntityDefinitionError(f"Field name not allowed: {name}")
    typ = _TYPES[spec.get("type", "text")]
    tag = spec.get("tag", "plain")
    if tag == "like":
        default = like()
    elif tag == "transient":
        default = transient()
    elif isinstance(tag, dict) and "between" in tag:
        default = between(*tag["between"])
    elif isinstance(tag, dict) and "in" in tag:
        default = in_(tag["in"])
    else:
        default = dataclasses.field(default=None)
    return name, typ, default


def make_entity(name: str, cfg: dict[str, t.Any]) -> type:
    """
    Build a query view class for one configured entity: a dataclass with the
    configured fields on top of PageCondition, registered with @entity.
    """
    cls_name = to_camel(name)
    cls_name = cls_name[:1].upper() + cls_name[1:] + "Query"
    fields = [_field_spec(f) for f in cfg["fields"]]
    cls = dataclasses.make_dataclass(cls_name, fields, bases=(PageCondition,))
    return entity(table=cfg["table"])(cls)


def load_config(path: Path) -> dict[str, t.Any]:
    if not path.exists():
        raise RegistryError(f"Entity definition file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        try:
            if path.suffix.lower() in (".yaml", ".yml"):
                cfg = yaml.safe_load(f)
            else:
                cfg = json.load(f)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise RegistryError(f"Cannot parse entity definitions in {path}: {e}") from e
    try:
        jsonschema.validate(instance=cfg, schema=ENTITIES_SCHEMA)
    except jsonschema.ValidationError as e:
        raise RegistryError(f"Bad entity definitions in {path}: {e.message}") from e
    return cfg


class Registry:
    def __init__(self, path: Path):
        self.path = Path(path)
        self.entities: dict[str, type] = {}
        self.loaded_at: str | None = None

    def load(self) -> None:
        cfg = load_config(self.path)
        built: dict[str, type] = {}
        for name, meta in cfg["entities"].items():
            try:
                built[name] = make_entity(name, meta)
            except EntityDefinitionError as e:
                raise RegistryError(f"Bad entity {name}: {e}") from e
        self.entities = built
        self.loaded_at = time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())
        log.info("Loaded %d entities from %s", len(built), self.path)

    def ensure_entity(self, name: str) -> type:
        if name not in self.entities:
            raise KeyError(f"Unknown entity: {name}")
        return self.entities[name]

    def refresh_all(self) -> dict[str, str]:
        """Re-read the definitions file and rebuild every entity."""
        self.load()
        return {name: f"ok ({len(schema_of(cls).fields)} fields)" for name, cls in self.entities.items()}
