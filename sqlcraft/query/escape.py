from __future__ import annotations
from typing import Optional

# Characters that get a backslash in front of them. Single quotes are doubled
# instead, since every value is interpolated inside '...'.
_BACKSLASHED = {'"', "\\"}


def escape_sql(value: Optional[str]) -> Optional[str]:
    """
    Escape a value for interpolation inside a single-quoted SQL literal.
    None stays None so callers can tell 'not set' from ''.
    """
    if value is None:
        return None
    out: list[str] = []
    for ch in str(value):
        if ch == "'":
            out.append("''")
        elif ch in _BACKSLASHED:
            out.append("\\")
            out.append(ch)
        else:
            out.append(ch)
    return "".join(out)


def quote_literal(value: object) -> str:
    """Render value as an escaped, single-quoted SQL string literal."""
    return f"'{escape_sql(str(value))}'"
