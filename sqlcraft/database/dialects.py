from __future__ import annotations
import datetime as dt
from enum import Enum

from ..errors import DialectError

# Python-side rendering of every date bound; each dialect's parse format below
# must describe this same layout.
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class Dialect(str, Enum):
    MYSQL = "mysql"
    POSTGRESQL = "postgresql"
    ORACLE = "oracle"

    def date_literal(self, value: str) -> str:
        """
        Wrap an already-escaped 'YYYY-MM-DD HH:MM:SS' string in the dialect's
        string-to-timestamp conversion.
        """
        if self is Dialect.MYSQL:
            return f"str_to_date( '{value}','%Y-%m-%d %H:%i:%s')"
        if self is Dialect.POSTGRESQL:
            return f"cast('{value}' as timestamp)"
        if self is Dialect.ORACLE:
            return f"to_date( '{value}','yyyy-mm-dd hh24:mi:ss')"
        raise AssertionError(f"no date literal for {self!r}")

    def page_clause(self, offset: int, rows: int) -> str:
        if self is Dialect.ORACLE:
            return f" offset {offset} rows fetch next {rows} rows only"
        return f" limit {rows} offset {offset}"


# Substrings are matched against the lower-cased driver class name.
_DRIVER_MARKERS = (
    ("com.mysql", Dialect.MYSQL),
    ("org.postgresql", Dialect.POSTGRESQL),
    ("oracle.jdbc", Dialect.ORACLE),
)


def dialect_from_driver(driver_class_name: str) -> Dialect:
    """
    Pick the dialect for a driver class name such as 'com.mysql.cj.jdbc.Driver',
    'org.postgresql.Driver' or 'oracle.jdbc.OracleDriver'. A bare dialect name
    ('postgresql') is accepted too.
    """
    u = (driver_class_name or "").strip().lower()
    if not u:
        raise DialectError("No database driver class name configured")
    for marker, dialect in _DRIVER_MARKERS:
        if marker in u:
            return dialect
    try:
        return Dialect(u)
    except ValueError:
        raise DialectError(f"Unsupported database driver: {driver_class_name!r}") from None


def format_date(value: dt.date) -> str:
    if not isinstance(value, dt.datetime):
        value = dt.datetime(value.year, value.month, value.day)
    return value.strftime(DATE_FORMAT)
