from __future__ import annotations

from typing import Any

import pandas as pd

"""Cell text helpers shared by the reader and the normalizer."""

__all__ = [
    "cell_text",
    "strip_quote_pair",
]

_QUOTES = ('"', "'", "“”", "‘’")


def strip_quote_pair(text: str) -> str:
    """Remove one matching pair of surrounding quotes, then re-trim."""
    if len(text) >= 2:
        for quote in _QUOTES:
            opening, closing = (quote, quote) if len(quote) == 1 else (quote[0], quote[1])
            if text.startswith(opening) and text.endswith(closing):
                return text[1:-1].strip()
    return text


def cell_text(value: Any) -> str:
    """Stringify a raw grid value: None/NaN -> "", 3.0 -> "3", trimmed, unquoted."""
    if value is None:
        return ""
    if isinstance(value, float):
        if pd.isna(value):
            return ""
        if value.is_integer():
            value = int(value)
    elif not isinstance(value, str) and pd.isna(value) is True:
        # pd.NaT / pd.NA
        return ""
    return strip_quote_pair(str(value).strip())
