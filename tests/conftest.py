"""Shared test fixtures for sqlcraft."""

import textwrap
from pathlib import Path

import pytest

from sqlcraft import settings
from sqlcraft.query import QueryFragment

ENTITIES_YAML = textwrap.dedent(
    """
    entities:
      user:
        table: t_user
        fields:
          - {name: userId, type: text}
          - {name: userName, type: text, tag: like}
          - {name: createTime, type: datetime, tag: {between: [createTimeStart, createTimeEnd]}}
          - {name: createTimeStart, type: datetime}
          - {name: createTimeEnd, type: datetime}
          - {name: userType, type: text, tag: {in: userTypes}}
          - {name: userTypes, type: list}
          - {name: password, type: text, tag: transient}
      menu:
        table: t_menu
        fields:
          - {name: menuId}
          - {name: sortWeight, type: integer, tag: {between: [minSortWeight, maxSortWeight]}}
          - {name: minSortWeight, type: integer}
          - {name: maxSortWeight, type: integer}
    """
)


@pytest.fixture
def fragment() -> QueryFragment:
    return QueryFragment()


@pytest.fixture
def entities_file(tmp_path: Path) -> Path:
    path = tmp_path / "entities.yaml"
    path.write_text(ENTITIES_YAML, encoding="utf-8")
    return path


@pytest.fixture
def driver(monkeypatch):
    """Set DATASOURCE_DRIVER_CLASS_NAME and reset the cached dialect."""

    def set_driver(name: str) -> None:
        monkeypatch.setenv("DATASOURCE_DRIVER_CLASS_NAME", name)
        settings.active_dialect.cache_clear()

    yield set_driver
    settings.active_dialect.cache_clear()
