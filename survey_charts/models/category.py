from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

"""Answer categories and the vocabulary that names them.

The member set of ``Category`` is closed; only labels and synonyms vary per
deployment (see survey_charts/config/defaults.yml).
"""

__all__ = [
    "Category",
    "Vocabulary",
]


class Category(Enum):
    """Ordinal motivation levels, in display order (highest first)."""
    HIGHLY = "highly"
    MODERATELY = "moderately"
    SLIGHTLY = "slightly"
    NOT = "not"

    @classmethod
    def from_key(cls, key: str) -> Category:
        """Resolve a config key such as ``"highly"`` (case-insensitive)."""
        try:
            return cls(str(key).strip().lower())
        except ValueError as e:
            raise ValueError(f"unknown category key: {key!r}") from e


@dataclass(frozen=True)
class Vocabulary:
    """Canonical labels plus a case-insensitive synonym table.

    ``lookup`` is the full lower-cased phrase -> Category table and always
    contains every canonical label. Use ``Vocabulary.build`` rather than the
    constructor.
    """
    labels: Mapping[Category, str]
    lookup: Mapping[str, Category] = field(default_factory=dict)

    @classmethod
    def build(
        cls, labels: Mapping[Category, str], synonyms: Mapping[str, Category] | None = None
    ) -> Vocabulary:
        missing = [c.name for c in Category if not str(labels.get(c, "")).strip()]
        if missing:
            raise ValueError(f"categories without label: {missing}")
        clean_labels = {c: str(labels[c]).strip() for c in Category}
        table: dict[str, Category] = {}
        for phrase, category in (synonyms or {}).items():
            key = str(phrase).strip().lower()
            if key:
                table[key] = category
        # canonical labels win over any conflicting synonym
        for category, label in clean_labels.items():
            table[label.lower()] = category
        return cls(labels=MappingProxyType(clean_labels), lookup=MappingProxyType(table))

    def label(self, category: Category) -> str:
        return self.labels[category]

    def canonical(self, text: str) -> Category | None:
        """Exact (case-sensitive) canonical label match."""
        for category, label in self.labels.items():
            if label == text:
                return category
        return None

    def match(self, text: str) -> Category | None:
        """Case-insensitive synonym / label match on already trimmed text."""
        return self.lookup.get(text.lower())
