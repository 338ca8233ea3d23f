from __future__ import annotations

import csv
import io
import logging
from pathlib import Path

import pandas as pd

from ..errors import MalformedInputError, PipelineError, UnsupportedFormatError
from ..models.table import Table
from .cells import cell_text

"""Tabular reader: survey export -> Table.

Row 1 is the header row (one question per column); every later row is one
respondent. Two input modes:
- delimited text (.csv): parsed with pandas (python engine, all cells as str)
- workbook (.xlsx / .xls): first sheet only, via pandas.ExcelFile

Both modes pad short rows with "" and cut rows longer than the header.
"""

__all__ = [
    "TEXT_SUFFIXES",
    "WORKBOOK_SUFFIXES",
    "SUPPORTED_SUFFIXES",
    "read_file",
    "read_delimited_text",
    "read_workbook",
    "grid_to_table",
]

logger = logging.getLogger(__name__)

TEXT_SUFFIXES = frozenset({".csv"})
WORKBOOK_SUFFIXES = frozenset({".xlsx", ".xls"})
SUPPORTED_SUFFIXES = TEXT_SUFFIXES | WORKBOOK_SUFFIXES

_PARSE_ERRORS = (pd.errors.ParserError, pd.errors.EmptyDataError, ValueError)


def read_file(path: Path, delimiter: str = ",") -> Table:
    """Read a survey export, dispatching on the (case-insensitive) extension.

    Raises:
        UnsupportedFormatError: extension is not .csv / .xlsx / .xls (checked
            before the file is opened)
        MalformedInputError: unreadable, undecodable or too-short input
    """
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise UnsupportedFormatError(f"unsupported extension {suffix or '<none>'!r}: {path.name}")
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise MalformedInputError(
            f"cannot read {path}: {e}", user_message="The file could not be read."
        ) from e

    if suffix in TEXT_SUFFIXES:
        try:
            text = raw.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise MalformedInputError(
                f"{path.name}: not valid UTF-8 text ({e})",
                user_message="Error processing CSV file. Please check the file format.",
            ) from e
        return read_delimited_text(text, delimiter, source=path.name)
    return read_workbook(raw, source=path.name)


def read_delimited_text(text: str, delimiter: str = ",", *, source: str = "") -> Table:
    """Parse delimited text into a Table.

    Line endings are normalized and blank lines dropped before parsing. Each
    remaining line is exactly one row: quoted fields may hold the delimiter,
    but when quotes are unbalanced and would merge lines the text is re-read
    with quote handling off (quote pairs are then stripped per cell). A row
    with more fields than the header line keeps only the first header-width
    fields.
    """
    name = source or "input"
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    lines = [line for line in normalized.split("\n") if line.strip()]
    if len(lines) < 2:
        raise MalformedInputError(
            f"{name}: need a header line and at least one data line, "
            f"found {len(lines)} non-blank line(s)",
            row=-1,
        )

    try:
        df = _parse_lines(lines, delimiter, csv.QUOTE_MINIMAL, name)
    except _PARSE_ERRORS as e:
        logger.debug(f"{name}: quote-aware parse failed ({e})")
        df = None
    if df is None or len(df) != len(lines):
        logger.warning(f"{name}: unbalanced quotes, reading {len(lines)} line(s) without quote handling")
        try:
            df = _parse_lines(lines, delimiter, csv.QUOTE_NONE, name)
        except _PARSE_ERRORS as e:
            raise MalformedInputError(
                f"{name}: cannot parse delimited text: {e}",
                user_message="Error processing CSV file. Please check the file format.",
            ) from e
    return grid_to_table(df, source=source, spreadsheet=False)


def _parse_lines(lines: list[str], delimiter: str, quoting: int, name: str) -> pd.DataFrame:
    options = dict(
        sep=delimiter,
        header=None,
        dtype=str,
        keep_default_na=False,  # "None" / "NA" are answers, not missing values
        skipinitialspace=True,
        engine="python",
        quoting=quoting,
    )
    # ヘッダ行も同じ設定で読んで列数を決める
    width = pd.read_csv(io.StringIO(lines[0]), **options).shape[1]

    def _cut_extra_fields(fields: list[str]) -> list[str]:
        logger.debug(f"{name}: row has {len(fields)} fields, keeping {width}")
        return fields[:width]

    return pd.read_csv(io.StringIO("\n".join(lines)), on_bad_lines=_cut_extra_fields, **options)


def read_workbook(data: bytes | Path, *, source: str = "") -> Table:
    """Read the first sheet of an .xlsx / .xls workbook into a Table."""
    buffer = io.BytesIO(data) if isinstance(data, (bytes, bytearray)) else data
    try:
        with pd.ExcelFile(buffer) as xls:
            if not xls.sheet_names:
                raise MalformedInputError(f"{source or 'workbook'}: no sheets")
            first_sheet = xls.sheet_names[0]
            # ヘッダなしで生読み (1行目をヘッダとして後で適用)
            df = xls.parse(first_sheet, header=None, dtype=object, keep_default_na=False)
    except PipelineError:
        raise
    except Exception as e:  # openpyxl / xlrd / zipfile raise a wide variety here
        raise MalformedInputError(
            f"{source or 'workbook'}: cannot read workbook: {e}",
            user_message="Error processing XLSX file. Please check the file format.",
        ) from e
    logger.debug(f"{source or 'workbook'}: sheet '{first_sheet}' shape={df.shape}")
    return grid_to_table(df, source=source, spreadsheet=True)


def grid_to_table(df: pd.DataFrame, *, source: str = "", spreadsheet: bool = False) -> Table:
    """Turn a raw header-less grid into a Table using row 1 as headers.

    Steps:
    1. Stringify + trim header cells (spreadsheet: drop empty trailing slots)
    2. Reject when no non-empty header exists
    3. Stringify + trim data cells; spreadsheet rows that are all blank are skipped
    4. Pad / cut every row to the header width
    5. Reject when no data row remains
    """
    name = source or "input"
    if df.shape[0] < 2:
        raise MalformedInputError(f"{name}: need a header row and at least one data row", row=-1)

    headers = [cell_text(v) for v in df.iloc[0].tolist()]
    if spreadsheet:
        while headers and headers[-1] == "":
            headers.pop()
    if not any(headers):
        raise MalformedInputError(
            f"{name}: header row has no non-empty cells", user_message="The header row is empty."
        )
    width = len(headers)

    rows: list[tuple[str, ...]] = []
    for raw in df.iloc[1:].itertuples(index=False, name=None):
        cells = [cell_text(v) for v in raw]
        if spreadsheet and not any(cells):
            continue
        if len(cells) < width:
            cells.extend([""] * (width - len(cells)))
        rows.append(tuple(cells[:width]))

    if not rows:
        raise MalformedInputError(f"{name}: header row only, no data rows", row=-1)
    return Table(headers=tuple(headers), rows=tuple(rows), source=source)
