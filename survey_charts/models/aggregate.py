from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .category import Category

"""Aggregation result models.

QuestionCounts holds one question's tally; AggregateResult is the ordered,
index-aligned collection for a whole file. Both are immutable once built.
"""

__all__ = [
    "QuestionCounts",
    "SkippedCell",
    "AggregateResult",
]


@dataclass(frozen=True)
class QuestionCounts:
    """Per-question tally of respondents per Category.

    Every Category is present as a key (zero if nobody chose it).
    Empty and unrecognized cells are tracked separately and never folded
    into a category.
    """
    header: str
    counts: Mapping[Category, int]
    empty: int = 0
    unrecognized: int = 0

    def __post_init__(self) -> None:
        # 読み取り専用ビューに差し替え (呼び出し側の dict を共有しない)
        object.__setattr__(self, "counts", MappingProxyType(dict(self.counts)))

    def __getitem__(self, category: Category) -> int:
        return self.counts[category]

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    @property
    def skipped(self) -> int:
        return self.empty + self.unrecognized


@dataclass(frozen=True)
class SkippedCell:
    """Diagnostic for a cell that did not resolve to a Category."""
    row: int  # 1-based data row (1 = first respondent)
    column: int  # 0-based column index
    header: str
    value: str


@dataclass(frozen=True)
class AggregateResult:
    headers: tuple[str, ...]
    questions: tuple[QuestionCounts, ...]
    unrecognized_cells: tuple[SkippedCell, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.questions)

    @property
    def total_answers(self) -> int:
        return sum(q.total for q in self.questions)

    @property
    def skipped_cells(self) -> int:
        return sum(q.skipped for q in self.questions)

    def category_total(self, category: Category) -> int:
        """Sum of one category's count across all questions."""
        return sum(q[category] for q in self.questions)
