from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .category import Category

"""Table and NormalizedCell domain models.

A Table is the reader's output: ordered headers (question identity = position)
and respondent rows aligned positionally to them.
"""

__all__ = [
    "Table",
    "CellKind",
    "NormalizedCell",
]


@dataclass(frozen=True)
class Table:
    """Rectangular survey table (row 1 of the file = headers).

    Every row holds exactly ``len(headers)`` cells; the reader pads and
    truncates, callers never have to.
    """
    headers: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]
    source: str = ""  # ファイル名 (診断用)

    @property
    def width(self) -> int:
        return len(self.headers)

    @property
    def row_count(self) -> int:
        return len(self.rows)


class CellKind(Enum):
    CATEGORY = "category"
    EMPTY = "empty"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class NormalizedCell:
    """A raw cell resolved against the vocabulary.

    ``text`` keeps the trimmed original so unrecognized values can be reported.
    """
    kind: CellKind
    text: str = ""
    category: Category | None = None

    @property
    def is_category(self) -> bool:
        return self.kind is CellKind.CATEGORY

    @classmethod
    def empty(cls) -> NormalizedCell:
        return cls(kind=CellKind.EMPTY)

    @classmethod
    def of(cls, category: Category, text: str) -> NormalizedCell:
        return cls(kind=CellKind.CATEGORY, text=text, category=category)

    @classmethod
    def unrecognized(cls, text: str) -> NormalizedCell:
        return cls(kind=CellKind.UNRECOGNIZED, text=text)
