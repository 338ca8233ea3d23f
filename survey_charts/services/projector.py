from __future__ import annotations

from collections.abc import Sequence

from ..config.loader import default_config
from ..models.aggregate import AggregateResult
from ..models.category import Category, Vocabulary
from ..models.chart_spec import ChartSpec, ChartView, Series
from ..models.config_models import ChartConfig

"""Chart data projector: AggregateResult -> ChartSpec.

Bar view: one series per category, values index-aligned to the questions.
Pie view: one series, one slice per category (summed over all questions).
"""

__all__ = [
    "project",
    "truncate_label",
]


def truncate_label(header: str, index: int, chart: ChartConfig | None = None) -> str:
    """Display label for a question header.

    Headers longer than ``max_label_length`` keep ``max_label_length - 3``
    characters plus "..."; blank headers fall back to "Question {index}"
    (1-based).
    """
    chart = chart or default_config().chart
    text = header.strip()
    if not text:
        return chart.fallback_label.format(index=index + 1)
    if len(text) > chart.max_label_length:
        return text[: chart.max_label_length - 3] + "..."
    return text


def project(
    headers: Sequence[str],
    result: AggregateResult,
    view: ChartView | str,
    chart: ChartConfig | None = None,
    vocabulary: Vocabulary | None = None,
) -> ChartSpec:
    """Build the ChartSpec for ``view``.

    An all-zero projection is returned as-is; check ``ChartSpec.has_data``
    before drawing.
    """
    view = ChartView.parse(view)
    if len(headers) != len(result.questions):
        raise ValueError(
            f"headers ({len(headers)}) and aggregate questions ({len(result.questions)}) differ"
        )
    defaults = default_config()
    chart = chart or defaults.chart
    vocab = vocabulary or defaults.vocabulary

    if view is ChartView.BAR:
        return _project_bar(headers, result, chart, vocab)
    if view is ChartView.PIE:
        return _project_pie(result, chart, vocab)
    raise ValueError(f"unhandled chart view: {view}")


def _project_bar(
    headers: Sequence[str], result: AggregateResult, chart: ChartConfig, vocab: Vocabulary
) -> ChartSpec:
    series = tuple(
        Series(
            name=vocab.label(category),
            values=tuple(q[category] for q in result.questions),
            colors=(chart.color(category),),
        )
        for category in Category
    )
    return ChartSpec(
        view=ChartView.BAR,
        title=chart.bar_title,
        labels=tuple(truncate_label(h, i, chart) for i, h in enumerate(headers)),
        series=series,
    )


def _project_pie(result: AggregateResult, chart: ChartConfig, vocab: Vocabulary) -> ChartSpec:
    totals = tuple(result.category_total(category) for category in Category)
    return ChartSpec(
        view=ChartView.PIE,
        title=chart.pie_title,
        labels=tuple(vocab.label(category) for category in Category),
        series=(
            Series(
                name=chart.pie_title,
                values=totals,
                colors=tuple(chart.color(category) for category in Category),
            ),
        ),
        hidden=tuple(total == 0 for total in totals),
    )
