from __future__ import annotations

import logging

from ..config.loader import default_vocabulary
from ..models.category import Vocabulary
from ..models.table import NormalizedCell
from ..reader.cells import strip_quote_pair

"""Answer normalizer: raw cell text -> NormalizedCell.

Pure function of the text and the vocabulary; never looks at row or column
position. Unrecognized text is not an error, callers decide what to do.
"""

__all__ = [
    "normalize",
    "normalize_text",
]

logger = logging.getLogger(__name__)


def normalize(raw: object, vocabulary: Vocabulary | None = None) -> NormalizedCell:
    """Resolve one raw cell.

    Order:
    1. trim + strip one surrounding quote pair; empty -> EMPTY
    2. case-insensitive synonym / label lookup
    3. exact canonical label
    4. otherwise UNRECOGNIZED carrying the trimmed text
    """
    vocab = vocabulary or default_vocabulary()
    text = strip_quote_pair(("" if raw is None else str(raw)).strip())
    if not text:
        return NormalizedCell.empty()

    category = vocab.match(text)
    if category is None:
        category = vocab.canonical(text)
    if category is not None:
        return NormalizedCell.of(category, text)

    logger.debug(f"unrecognized answer: {text!r}")
    return NormalizedCell.unrecognized(text)


def normalize_text(raw: object, vocabulary: Vocabulary | None = None) -> str:
    """Normalize to a display string: canonical label, "" or the trimmed text."""
    vocab = vocabulary or default_vocabulary()
    cell = normalize(raw, vocab)
    if cell.category is not None:
        return vocab.label(cell.category)
    return cell.text
