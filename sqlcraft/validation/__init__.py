"""
Validation module for sqlcraft.

This module checks request payloads before they are bound onto entities.
"""

from .rules import (
    MAX_ROWS,
    _assert_criteria_allowed,
    _assert_ignored_allowed,
    _cap_rows,
)

__all__ = [
    "MAX_ROWS",
    "_assert_criteria_allowed",
    "_assert_ignored_allowed",
    "_cap_rows",
]
