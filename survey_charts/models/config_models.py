from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from .category import Category, Vocabulary

"""Config dataclasses for the survey chart tool.

These are built by survey_charts/config/loader.py after YAML parsing and
schema validation; everything downstream only sees these typed objects.
"""

__all__ = [
    "ChartConfig",
    "AppConfig",
]

DEFAULT_COLORS: dict[Category, str] = {
    Category.HIGHLY: "#4caf50",
    Category.MODERATELY: "#ffeb3b",
    Category.SLIGHTLY: "#ff9800",
    Category.NOT: "#f44336",
}


@dataclass(frozen=True)
class ChartConfig:
    """Display settings used by the projector and renderer."""
    max_label_length: int = 30  # ラベルがこれを超えたら省略
    fallback_label: str = "Question {index}"  # blank header -> 1-based index
    bar_title: str = "Employee Motivation Factors"
    pie_title: str = "Overall Response Distribution"
    min_label_percentage: float = 5.0  # pie slices at or below this get no % label
    colors: Mapping[Category, str] = field(default_factory=lambda: dict(DEFAULT_COLORS))

    def color(self, category: Category) -> str:
        return self.colors.get(category, DEFAULT_COLORS[category])


@dataclass(frozen=True)
class AppConfig:
    """Root configuration object."""
    vocabulary: Vocabulary
    chart: ChartConfig = field(default_factory=ChartConfig)
    delimiter: str = ","
    source_directory: str = "./data"  # CLI default input directory
    output_directory: str = "./charts"
