from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import Body, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from . import settings
from .database import dialect_from_driver
from .entities import bind_entity, schema_of
from .errors import BindingError, DialectError, RegistryError, SchemaError
from .query import build_select
from .registry import Registry
from .validation import (
    MAX_ROWS,
    _assert_criteria_allowed,
    _assert_ignored_allowed,
    _cap_rows,
)

log = logging.getLogger("sqlcraft.api")

app = FastAPI(title="sqlcraft query builder", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=True,
)

REG = Registry(settings.ENTITIES_FILE)


class SqlRequest(BaseModel):
    """Criteria for one generated statement."""

    entity: str
    criteria: Dict[str, Any] = Field(default_factory=dict)
    sidx: Optional[str] = None
    sord: Optional[str] = None
    page: int = 1
    rows: int = 10
    ignore: List[str] = Field(default_factory=list)
    include_count: bool = False
    # Driver class name or dialect name; defaults to the configured one
    dialect: Optional[str] = None


@app.on_event("startup")
def _startup():
    settings.configure_logging()
    REG.load()


@app.get("/healthz")
def health():
    try:
        dialect = settings.active_dialect().value
        return {"ok": True, "entities": list(REG.entities.keys()), "dialect": dialect}
    except DialectError as e:
        return {
            "ok": False,
            "entities": list(REG.entities.keys()),
            "dialect": None,
            "error": str(e),
        }


@app.post("/sql")
def build_query(req: SqlRequest = Body(..., description="Entity criteria")):
    """
    Return the SELECT statement (and optionally its COUNT mirror) for the
    given criteria. The statement is not executed.
    """
    try:
        cls = REG.ensure_entity(req.entity)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))

    schema = schema_of(cls)
    try:
        _assert_criteria_allowed(req.entity, req.criteria, schema)
        _assert_ignored_allowed(req.entity, req.ignore, schema)
        view = bind_entity(cls, req.criteria)
        view.page = max(req.page, 1)
        view.rows = _cap_rows(req.rows)
        view.sidx = req.sidx
        view.sord = req.sord
        dialect = dialect_from_driver(req.dialect) if req.dialect else settings.active_dialect()
    except (ValueError, BindingError, DialectError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        res = build_select(view, *req.ignore, dialect=dialect, include_count=req.include_count)
    except SchemaError as e:
        raise HTTPException(status_code=422, detail=str(e))

    if res.diagnostics:
        log.warning("Partial build for %s: %d field(s) skipped", req.entity, len(res.diagnostics))

    return {
        **res.to_dict(),
        "table": schema.table,
        "dialect": dialect.value,
        "rowsApplied": view.rows,
        "maxRows": MAX_ROWS,
    }


@app.get("/entities")
def list_entities(include_fields: bool = True):
    """List configured entities with their table and (optionally) fields."""
    out = []
    for name, cls in REG.entities.items():
        schema = schema_of(cls).to_dict()
        item: Dict[str, Any] = {"entity": name, "table": schema["table"]}
        if include_fields:
            item["fields"] = schema["fields"]
        out.append(item)
    return {"entities": out, "loadedAt": REG.loaded_at}


@app.post("/reload")
def reload_registry():
    try:
        summary = REG.refresh_all()
        return {"reloaded": summary}
    except RegistryError as e:
        raise HTTPException(status_code=500, detail=str(e))
