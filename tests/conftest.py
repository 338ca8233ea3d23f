# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pandas as pd
import pytest

from survey_charts.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("SURVEY_CHARTS_CONFIG", raising=False)
        yield p


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
output_directory: ./charts
synonyms:
  super: highly
  meh: slightly
chart:
  max_label_length: 20
  bar_title: Team Motivation
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "charts.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def scenario_a_csv() -> str:
    return (
        "Q1,Q2\n"
        "Highly motivating,Not motivating\n"
        "Moderately motivating,Highly motivating\n"
    )


def make_workbook(path: Path, rows: list[list[object]], sheets: dict[str, list[list[object]]] | None = None) -> Path:
    """Write ``rows`` as the first sheet (no pandas header / index), plus optional extra sheets."""
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name="Responses", header=False, index=False)
        for name, extra in (sheets or {}).items():
            pd.DataFrame(extra).to_excel(writer, sheet_name=name, header=False, index=False)
    return path


@pytest.fixture()
def survey_files(temp_workdir: Path, scenario_a_csv: str) -> list[Path]:
    data = temp_workdir / "data"
    csv_path = data / "team_a.csv"
    csv_path.write_text(scenario_a_csv, encoding="utf-8")
    xlsx_path = make_workbook(
        data / "team_b.xlsx",
        [
            ["Salary", "Recognition", "Growth"],
            ["high", "bardzo motywuje", "Slightly motivating"],
            ["Not motivating", "moderate", None],
            ["nie motywuje", "maybe?", "Highly motivating"],
        ],
    )
    return [csv_path, xlsx_path]


@pytest.fixture()
def workbook_factory():
    return make_workbook
