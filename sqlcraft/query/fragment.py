from __future__ import annotations
from typing import List


class QueryFragment:
    """
    Mutable buffer of partially assembled SQL text.

    Owned by one caller for one build; builders append to it and never keep a
    reference after they return.
    """

    def __init__(self, text: str = ""):
        self._parts: List[str] = [text] if text else []

    def append(self, text: str) -> "QueryFragment":
        if text:
            self._parts.append(text)
        return self

    def extend(self, texts) -> "QueryFragment":
        for t in texts:
            self.append(t)
        return self

    @property
    def text(self) -> str:
        return "".join(self._parts)

    def __str__(self) -> str:
        return self.text

    def __len__(self) -> int:
        return sum(len(p) for p in self._parts)

    def __eq__(self, other) -> bool:
        if isinstance(other, QueryFragment):
            return self.text == other.text
        if isinstance(other, str):
            return self.text == other
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"QueryFragment({self.text!r})"
