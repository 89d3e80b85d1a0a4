"""
Naming helpers for sqlcraft.

This module maps entity property names onto column names and back.
"""

from .case import (
    to_column,
    to_camel,
)

__all__ = [
    "to_column",
    "to_camel",
]
