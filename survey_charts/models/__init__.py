"""Domain models for the survey chart tool."""

from .aggregate import AggregateResult, QuestionCounts, SkippedCell
from .category import Category, Vocabulary
from .chart_spec import ChartSpec, ChartView, Series
from .config_models import AppConfig, ChartConfig
from .table import CellKind, NormalizedCell, Table

__all__ = [
    # Vocabulary
    "Category",
    "Vocabulary",
    # Pipeline data
    "Table",
    "CellKind",
    "NormalizedCell",
    "QuestionCounts",
    "SkippedCell",
    "AggregateResult",
    # Chart description
    "ChartView",
    "Series",
    "ChartSpec",
    # Configuration
    "AppConfig",
    "ChartConfig",
]
