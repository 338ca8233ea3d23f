from __future__ import annotations

from pathlib import Path

from survey_charts.cli import main as cli_main

"""Exit code contract tests: 0 all success, 2 partial failure, 1 fatal startup."""


def test_exit_code_fatal_startup(temp_workdir: Path, capsys):
    # 設定ファイルが壊れている → exit 1
    (temp_workdir / "config" / "charts.yml").write_text("chart: {bogus: 1}\n", encoding="utf-8")
    code = cli_main([])
    assert code == 1
    assert "ERROR config:" in capsys.readouterr().out


def test_exit_code_all_success(survey_files: list[Path], capsys):
    code = cli_main(["--no-render"])
    out = capsys.readouterr().out
    assert code == 0
    assert "SUMMARY files=2/2 success=2 failed=0" in out


def test_exit_code_partial_failure(survey_files: list[Path], temp_workdir: Path, capsys):
    (temp_workdir / "data" / "empty.csv").write_text("", encoding="utf-8")
    code = cli_main(["--no-render"])
    out = capsys.readouterr().out
    assert code == 2
    assert "SUMMARY files=3/3 success=2 failed=1" in out


def test_exit_code_all_files_failed_is_partial(temp_workdir: Path, capsys):
    # every file failing still reports through the SUMMARY line with exit 2
    (temp_workdir / "data" / "a.csv").write_text("Q1\nyes\n", encoding="utf-8")
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 2
    assert "ERROR a.csv: No recognized answers were found in the file." in out
    assert "SUMMARY files=1/1 success=0 failed=1" in out
