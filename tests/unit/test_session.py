from __future__ import annotations
from pathlib import Path

import pytest

from survey_charts.config.loader import default_config
from survey_charts.errors import NoRecognizedAnswersError, UnsupportedFormatError
from survey_charts.models.chart_spec import ChartView
from survey_charts.services.pipeline import run_pipeline
from survey_charts.services.session import ChartSession


@pytest.fixture()
def scenario_a_file(temp_workdir: Path, scenario_a_csv: str) -> Path:
    p = temp_workdir / "data" / "scenario_a.csv"
    p.write_text(scenario_a_csv, encoding="utf-8")
    return p


def test_run_pipeline_returns_validated_table(scenario_a_file: Path):
    loaded = run_pipeline(scenario_a_file, default_config())
    assert loaded.source == scenario_a_file
    assert loaded.headers == ("Q1", "Q2")
    assert loaded.result.total_answers == 4


def test_change_view_before_load_returns_none():
    session = ChartSession()
    assert session.change_view("pie") is None
    assert session.view is ChartView.PIE
    assert session.loaded is None


def test_load_then_toggle_view(scenario_a_file: Path):
    session = ChartSession()
    bar = session.load_file(scenario_a_file)
    assert bar.view is ChartView.BAR
    assert len(bar.series) == 4

    pie = session.change_view(ChartView.PIE)
    assert pie is not None
    assert pie.view is ChartView.PIE
    assert sum(pie.series[0].values) == 4

    # toggling back reprojects the same held result
    again = session.change_view("bar")
    assert again == bar


def test_load_file_with_explicit_view(scenario_a_file: Path):
    session = ChartSession(view="bar")
    spec = session.load_file(scenario_a_file, view="pie")
    assert spec.view is ChartView.PIE
    assert session.view is ChartView.PIE


def test_failed_load_keeps_previous_result(temp_workdir: Path, scenario_a_file: Path):
    session = ChartSession()
    session.load_file(scenario_a_file)
    before = session.loaded

    bad = temp_workdir / "data" / "bad.csv"
    bad.write_text("Q1,Q2\nyes,no\n", encoding="utf-8")
    with pytest.raises(NoRecognizedAnswersError):
        session.load_file(bad)
    assert session.loaded is before

    with pytest.raises(UnsupportedFormatError):
        session.load_file(temp_workdir / "data" / "notes.txt")
    assert session.loaded is before


def test_clear_drops_loaded_result(scenario_a_file: Path):
    session = ChartSession()
    session.load_file(scenario_a_file)
    session.clear()
    assert session.loaded is None
    assert session.change_view("pie") is None


def test_session_uses_configured_labels(temp_workdir: Path, scenario_a_file: Path, write_config):
    from survey_charts.config.loader import load_config

    cfg = load_config(temp_workdir / "config" / "charts.yml")
    spec = ChartSession(cfg).load_file(scenario_a_file)
    assert spec.title == "Team Motivation"
