from __future__ import annotations

"""Pipeline error hierarchy.

Every failure a single survey file can hit is a ``PipelineError``. Each one
carries a short ``user_message`` for the end user and optional diagnostics
(row / column / raw value) that go to the JSON Lines error log instead.
"""

__all__ = [
    "PipelineError",
    "UnsupportedFormatError",
    "MalformedInputError",
    "EmptyInputError",
    "NoHeadersError",
    "NoUsableAnswersError",
    "NoRecognizedAnswersError",
    "NoValidAnswersError",
    "RenderFailureError",
]


class PipelineError(Exception):
    """Base class for recoverable, user-facing pipeline failures.

    Attributes:
        error_type: Classification in UPPER_SNAKE_CASE (used in the error log)
        user_message: Short message suitable for showing to the end user
        row: 1-based data row number, -1 when unknown / file-level
        column: 0-based column index, -1 when unknown
        header: Header of that column, if known
        value: Offending raw cell text, if any
    """

    error_type = "PIPELINE_ERROR"
    default_message = "The file could not be processed."

    def __init__(
        self,
        detail: str | None = None,
        *,
        user_message: str | None = None,
        row: int = -1,
        column: int = -1,
        header: str | None = None,
        value: str | None = None,
    ) -> None:
        self.user_message = user_message or self.default_message
        self.detail = detail or self.user_message
        self.row = row
        self.column = column
        self.header = header
        self.value = value
        super().__init__(self.detail)


class UnsupportedFormatError(PipelineError):
    error_type = "UNSUPPORTED_FORMAT"
    default_message = "Unsupported file format. Please select a CSV or XLSX file."


class MalformedInputError(PipelineError):
    error_type = "MALFORMED_INPUT"
    default_message = "The file needs a header row and at least one answer row."


class EmptyInputError(PipelineError):
    error_type = "EMPTY_INPUT"
    default_message = "The file contains no questions or no answers."


class NoHeadersError(PipelineError):
    error_type = "NO_HEADERS"
    default_message = "The header row is empty."


class NoUsableAnswersError(PipelineError):
    """Raised when no cell in the whole file maps to an answer category."""

    error_type = "NO_USABLE_ANSWERS"
    default_message = "No recognized answers were found in the file."


class NoRecognizedAnswersError(NoUsableAnswersError):
    error_type = "NO_RECOGNIZED_ANSWERS"


class NoValidAnswersError(NoUsableAnswersError):
    error_type = "NO_VALID_ANSWERS"


class RenderFailureError(PipelineError):
    error_type = "RENDER_FAILURE"
    default_message = "The chart could not be drawn."
