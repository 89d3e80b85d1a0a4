"""
Database dialect support for sqlcraft.

This module maps the configured JDBC-style driver class name to a SQL dialect
and renders dialect-specific literals.
"""

from .dialects import (
    Dialect,
    dialect_from_driver,
    DATE_FORMAT,
    format_date,
)

__all__ = [
    "Dialect",
    "dialect_from_driver",
    "DATE_FORMAT",
    "format_date",
]
