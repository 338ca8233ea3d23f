from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

from ..errors import PipelineError

"""ErrorRecord model for the diagnostics log.

One JSON object per line with a fixed key set:
{timestamp, file, row, column, error_type, message, value}.
``row`` / ``column`` are -1 for file-level errors where no cell applies.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured diagnostic record.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Survey file name
        row: 1-based data row number (-1 = file-level)
        column: Header of the affected column ("" = file-level)
        error_type: Classification in UPPER_SNAKE_CASE
        message: Full diagnostic message
        value: Offending raw cell text ("" when not applicable)
    """
    timestamp: str  # ISO8601 UTC
    file: str
    row: int
    column: str
    error_type: str  # UPPER_SNAKE
    message: str
    value: str = ""

    @staticmethod
    def create(
        file: str, row: int, column: str, error_type: str, message: str, value: str = ""
    ) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            row=row,
            column=column,
            error_type=error_type,
            message=message,
            value=value,
        )

    @staticmethod
    def from_error(file: str, error: PipelineError) -> ErrorRecord:
        """Build a record from a PipelineError (column = header name when known)."""
        column = ""
        if error.header is not None:
            column = error.header
        elif error.column >= 0:
            column = str(error.column)
        return ErrorRecord.create(
            file=file,
            row=error.row,
            column=column,
            error_type=error.error_type,
            message=error.detail,
            value=error.value or "",
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
