from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from survey_charts.config.loader import ConfigError, load_config, resolve_config_path
from survey_charts.errors import PipelineError
from survey_charts.logging.init import log_summary, set_debug, setup_logging
from survey_charts.models.chart_spec import ChartView
from survey_charts.reader.tabular import read_file
from survey_charts.services.normalizer import normalize_text
from survey_charts.services.orchestrator import ProcessingError, process_files, scan_survey_files
from survey_charts.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, then the config (--config > $SURVEY_CHARTS_CONFIG > config/charts.yml > defaults)
- Collect the files (positional args, or every survey file in source_directory)
- Run the pipeline per file, write one chart per file, print the SUMMARY line
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

INSPECT_SAMPLE_ROWS = 3


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env via python-dotenv; values in .env take priority over the process env."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="survey-charts",
        description="Tally Likert-style survey answers per question and chart them",
    )
    p.add_argument("files", nargs="*", type=Path, help="Survey exports (.csv, .xlsx, .xls)")
    p.add_argument("--view", choices=[v.value for v in ChartView], default=ChartView.BAR.value,
                   help="Chart type (default: bar)")
    p.add_argument("--config", type=Path, default=None, help="YAML config file")
    p.add_argument("--output-dir", type=Path, default=None, help="Directory for chart images")
    p.add_argument("--no-render", action="store_true", help="Aggregate only, do not draw charts")
    p.add_argument("--inspect-data", action="store_true",
                   help="Print headers & first normalized rows then exit")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _inspect_data(paths: list[Path], cfg) -> int:
    if not paths:
        print("inspect: no survey files")
        return EXIT_SUCCESS_ALL
    for path in paths:
        print(f"FILE: {path.name}")
        try:
            table = read_file(path, delimiter=cfg.delimiter)
        except PipelineError as e:
            print(f"  read_error: {e.detail}")
            continue
        print(f"  headers={list(table.headers)} rows={table.row_count}")
        for row in table.rows[:INSPECT_SAMPLE_ROWS]:
            print("    ", [normalize_text(cell, cfg.vocabulary) for cell in row])
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # NOTE: [] はそのまま使う (None のときだけ sys.argv を読む)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        set_debug(True)
        logger.debug("debug mode enabled")

    _load_env_file(Path(".env"), override=True)
    try:
        cfg = load_config(resolve_config_path(args.config))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.files:
        paths = list(args.files)
    else:
        directory = Path(cfg.source_directory)
        try:
            paths = scan_survey_files(directory)
        except ProcessingError as e:
            logger.error(str(e))
            return EXIT_FATAL
        logger.info(f"Processing files from: {directory}")

    if args.inspect_data:
        return _inspect_data(paths, cfg)

    result = process_files(
        paths,
        cfg,
        view=args.view,
        output_dir=args.output_dir,
        render=not args.no_render,
    )

    summary_line = render_summary_line(result.total_files, result)
    # log_summary adds the "SUMMARY " prefix itself
    log_summary(summary_line.removeprefix("SUMMARY "))

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
