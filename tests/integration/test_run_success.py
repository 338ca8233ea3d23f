from __future__ import annotations

import re
from pathlib import Path

import pytest

from survey_charts.cli import main as cli_main
from survey_charts.models.category import Category
from survey_charts.models.chart_spec import ChartView
from survey_charts.services.session import ChartSession

"""Integration test: successful multi-file run (CSV + XLSX).

End-to-end CLI execution over real files: one chart per file, SUMMARY line
totals matching the per-file INFO lines, diagnostics log only for
unrecognized cells.
"""

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


@pytest.mark.parametrize("view", ["bar", "pie"])
def test_run_success_writes_one_chart_per_file(
    survey_files: list[Path], write_config: Path, temp_workdir: Path, capsys, view: str
):
    code = cli_main(["--view", view])
    out = capsys.readouterr().out

    assert code == 0
    for stem in ("team_a", "team_b"):
        chart = temp_workdir / "charts" / f"{stem}-{view}.png"
        assert chart.read_bytes()[:8] == PNG_MAGIC

    assert "INFO team_a.csv: questions=2 answers=4 skipped_cells=0" in out
    assert "INFO team_b.xlsx: questions=3 answers=7 skipped_cells=2" in out
    assert "WARN team_b.xlsx: 1 unrecognized answer(s) skipped" in out

    per_file = [int(n) for n in re.findall(r"^INFO \S+: questions=\d+ answers=(\d+)", out, re.M)]
    m = re.search(r"^SUMMARY files=2/2 success=2 failed=0 answers=(\d+) skipped_cells=2 ", out, re.M)
    assert m is not None, out
    assert int(m.group(1)) == sum(per_file) == 11

    logs = list((temp_workdir / "logs").glob("errors-*.log"))
    assert len(logs) == 1


def test_run_with_custom_vocabulary_and_delimiter(temp_workdir: Path, capsys):
    (temp_workdir / "config" / "charts.yml").write_text(
        "delimiter: ';'\n"
        "categories:\n"
        "  highly: Very important\n"
        "  moderately: Important\n"
        "  slightly: Somewhat important\n"
        "  not: Unimportant\n"
        "synonyms:\n"
        "  vi: highly\n",
        encoding="utf-8",
    )
    (temp_workdir / "data" / "priorities.csv").write_text(
        "Pay;Culture\nVI;Unimportant\nImportant;  vi \n", encoding="utf-8"
    )

    code = cli_main(["--no-render"])
    out = capsys.readouterr().out
    assert code == 0
    assert "SUMMARY files=1/1 success=1 failed=0 answers=4 skipped_cells=0" in out


def test_session_pipeline_on_workbook(survey_files: list[Path]):
    session = ChartSession()
    bar = session.load_file(survey_files[1])
    assert bar.labels == ("Salary", "Recognition", "Growth")
    by_name = {s.name: s.values for s in bar.series}
    assert by_name["Highly motivating"] == (1, 1, 1)
    assert by_name["Not motivating"] == (2, 0, 0)

    pie = session.change_view(ChartView.PIE)
    assert pie is not None
    assert sum(pie.series[0].values) == session.loaded.result.total_answers == 7
    assert session.loaded.result.category_total(Category.MODERATELY) == 1
