from __future__ import annotations

import logging

from ..errors import EmptyInputError, NoHeadersError, NoRecognizedAnswersError
from ..models.category import Vocabulary
from ..models.table import Table
from .normalizer import normalize

"""Table validator.

Rejects structurally or semantically empty tables before aggregation.
Blank headers are removed together with their column in every row, so the
remaining headers stay aligned with their data.
"""

__all__ = [
    "validate",
    "drop_blank_columns",
]

logger = logging.getLogger(__name__)


def drop_blank_columns(table: Table) -> Table:
    keep = [i for i, h in enumerate(table.headers) if h.strip()]
    if len(keep) == table.width:
        return table
    dropped = table.width - len(keep)
    logger.debug(f"{table.source or 'input'}: dropping {dropped} column(s) with blank header")
    return Table(
        headers=tuple(table.headers[i] for i in keep),
        rows=tuple(tuple(row[i] for i in keep) for row in table.rows),
        source=table.source,
    )


def validate(table: Table, vocabulary: Vocabulary | None = None) -> Table:
    """Validate a Table and return it with blank-header columns removed.

    Raises:
        EmptyInputError: no headers or no rows
        NoHeadersError: every header is blank
        NoRecognizedAnswersError: not a single cell maps to a category
    """
    name = table.source or "input"
    if not table.headers or not table.rows:
        raise EmptyInputError(f"{name}: headers={table.width} rows={table.row_count}")
    if not any(h.strip() for h in table.headers):
        raise NoHeadersError(f"{name}: all {table.width} header(s) are blank")

    filtered = drop_blank_columns(table)

    first_unrecognized: tuple[int, int, str] | None = None
    for row_number, row in enumerate(filtered.rows, start=1):
        for column, raw in enumerate(row):
            cell = normalize(raw, vocabulary)
            if cell.is_category:
                return filtered
            if first_unrecognized is None and cell.text:
                first_unrecognized = (row_number, column, cell.text)

    if first_unrecognized is None:
        raise NoRecognizedAnswersError(f"{name}: every answer cell is blank")
    row_number, column, value = first_unrecognized
    raise NoRecognizedAnswersError(
        f"{name}: no cell matches a known answer (first value: {value!r} "
        f"at row {row_number}, column '{filtered.headers[column]}')",
        row=row_number,
        column=column,
        header=filtered.headers[column],
        value=value,
    )
