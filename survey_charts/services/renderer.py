from __future__ import annotations

import logging
from pathlib import Path

import matplotlib

matplotlib.use("Agg")  # headless; must precede pyplot import

import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.ticker import MaxNLocator  # noqa: E402

from ..errors import RenderFailureError  # noqa: E402
from ..models.chart_spec import ChartSpec, ChartView  # noqa: E402
from ..models.config_models import ChartConfig  # noqa: E402

"""Matplotlib renderer: ChartSpec -> image file.

Thin adapter; all numbers come from the ChartSpec. Bar view is a horizontal
stacked bar chart (questions on the y axis), pie view shows the overall
category distribution.
"""

__all__ = [
    "render_chart",
]

logger = logging.getLogger(__name__)

# bar segments narrower than this share of the widest bar get no count label
MIN_SEGMENT_LABEL_SHARE = 0.05


def render_chart(spec: ChartSpec, output_path: Path, chart: ChartConfig | None = None) -> Path:
    """Draw ``spec`` and write it to ``output_path`` (format from the suffix).

    Raises:
        RenderFailureError: spec has no data, or matplotlib failed
    """
    if not spec.has_data:
        raise RenderFailureError(
            f"{output_path.name}: chart spec has no data", user_message="There is no data to chart."
        )
    chart = chart or ChartConfig()
    fig = None
    try:
        if spec.view is ChartView.BAR:
            fig = _draw_bar(spec)
        else:
            fig = _draw_pie(spec, chart)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output_path, bbox_inches="tight")
    except Exception as e:
        raise RenderFailureError(f"{output_path.name}: {type(e).__name__}: {e}") from e
    finally:
        if fig is not None:
            plt.close(fig)
    logger.debug(f"chart written: {output_path}")
    return output_path


def _draw_bar(spec: ChartSpec):
    n = len(spec.labels)
    fig, ax = plt.subplots(figsize=(10, max(3.0, 0.5 * n + 1.5)))
    positions = list(range(n))
    lefts = [0] * n
    row_totals = [sum(s.values[i] for s in spec.series) for i in range(n)]
    widest = max(row_totals, default=0) or 1

    for series in spec.series:
        color = series.colors[0] if series.colors else None
        ax.barh(positions, series.values, left=lefts, color=color, edgecolor=color, label=series.name)
        for i, value in enumerate(series.values):
            if value > 0 and value / widest >= MIN_SEGMENT_LABEL_SHARE:
                ax.text(
                    lefts[i] + value / 2, i, str(value),
                    ha="center", va="center", color="white", fontweight="bold", fontsize=9,
                )
            lefts[i] += value

    ax.set_yticks(positions)
    ax.set_yticklabels(spec.labels)
    ax.invert_yaxis()
    ax.xaxis.set_major_locator(MaxNLocator(integer=True))
    ax.xaxis.tick_top()
    ax.set_title(spec.title, pad=20, fontsize=16)
    ax.legend(loc="center left", bbox_to_anchor=(1.02, 0.5), frameon=False)
    return fig


def _draw_pie(spec: ChartSpec, chart: ChartConfig):
    series = spec.series[0]
    pcts = spec.percentages()
    visible = [i for i, v in enumerate(series.values) if v > 0 and pcts[i] > 0]
    entries = spec.legend_entries()

    fig, ax = plt.subplots(figsize=(9, 6))
    wedges, _texts, autotexts = ax.pie(
        [series.values[i] for i in visible],
        colors=[series.colors[i] for i in visible] if series.colors else None,
        autopct=lambda pct: f"{pct:.1f}%" if pct > chart.min_label_percentage else "",
        pctdistance=0.6,
        startangle=90,
        counterclock=False,
        wedgeprops={"edgecolor": "white", "linewidth": 1},
    )
    for text in autotexts:
        text.set_color("white")
        text.set_fontweight("bold")
    ax.axis("equal")
    ax.set_title(spec.title, pad=20, fontsize=16)
    ax.legend(
        wedges, [entries[i] for i in visible],
        loc="center left", bbox_to_anchor=(1.0, 0.5), frameon=False,
    )
    return fig
