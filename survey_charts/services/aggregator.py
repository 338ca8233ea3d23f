from __future__ import annotations

import logging

from ..errors import NoValidAnswersError
from ..models.aggregate import AggregateResult, QuestionCounts, SkippedCell
from ..models.category import Category, Vocabulary
from ..models.table import CellKind, Table
from .normalizer import normalize

"""Answer aggregator: per-question category counts for a validated Table."""

__all__ = [
    "aggregate",
]

logger = logging.getLogger(__name__)


def aggregate(table: Table, vocabulary: Vocabulary | None = None) -> AggregateResult:
    """Count, per column, how many respondents chose each Category.

    Empty and unrecognized cells are skipped (never counted, never raised).
    Unrecognized ones are kept as SkippedCell diagnostics.

    Raises:
        NoValidAnswersError: the grand total over all questions is zero
    """
    counters: list[dict[Category, int]] = [{c: 0 for c in Category} for _ in table.headers]
    empty = [0] * table.width
    unrecognized = [0] * table.width
    skipped: list[SkippedCell] = []

    for row_number, row in enumerate(table.rows, start=1):
        for column, raw in enumerate(row[: table.width]):
            cell = normalize(raw, vocabulary)
            if cell.category is not None:
                counters[column][cell.category] += 1
            elif cell.kind is CellKind.EMPTY:
                empty[column] += 1
            else:
                unrecognized[column] += 1
                skipped.append(
                    SkippedCell(row=row_number, column=column, header=table.headers[column], value=cell.text)
                )

    questions = tuple(
        QuestionCounts(
            header=header,
            counts=counters[i],
            empty=empty[i],
            unrecognized=unrecognized[i],
        )
        for i, header in enumerate(table.headers)
    )
    result = AggregateResult(
        headers=tuple(table.headers), questions=questions, unrecognized_cells=tuple(skipped)
    )

    if skipped:
        logger.debug(f"{table.source or 'input'}: {len(skipped)} unrecognized cell(s) skipped")
    if result.total_answers == 0:
        name = table.source or "input"
        if skipped:
            first = skipped[0]
            raise NoValidAnswersError(
                f"{name}: no valid answers (first unrecognized value {first.value!r} "
                f"at row {first.row}, column '{first.header}')",
                row=first.row,
                column=first.column,
                header=first.header,
                value=first.value,
            )
        raise NoValidAnswersError(f"{name}: no valid answers, all {table.row_count} row(s) blank")
    return result
