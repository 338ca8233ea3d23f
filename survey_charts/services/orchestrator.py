from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

from ..errors import PipelineError, RenderFailureError
from ..logging.error_log import ErrorLogBuffer
from ..models.chart_spec import ChartView
from ..models.config_models import AppConfig
from ..models.error_record import ErrorRecord
from ..models.processing_result import FileStat, FileStatus, ProcessingResult
from ..reader.tabular import SUPPORTED_SUFFIXES
from .progress import ProgressTracker
from .renderer import render_chart
from .session import ChartSession

"""Batch orchestration over several survey files.

Each file gets its own ChartSession and pipeline run. A failing file is
reported (console + error log) and the run continues with the next one.
The error log is flushed once at the end.
"""

__all__ = [
    "ProcessingError",
    "scan_survey_files",
    "chart_output_path",
    "process_files",
]

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Fatal error that prevents the batch from starting."""


def scan_survey_files(directory: Path) -> list[Path]:
    """List .csv / .xlsx / .xls files in ``directory`` (non-recursive, sorted).

    Raises:
        ProcessingError: If the directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"path is not a directory: {directory}")
    try:
        return sorted(
            p for p in directory.iterdir()
            if p.is_file() and p.suffix.lower() in SUPPORTED_SUFFIXES and not p.name.startswith("~$")
        )
    except OSError as e:
        raise ProcessingError(f"error reading directory {directory}: {e}") from e


def chart_output_path(output_dir: Path, source: Path, view: ChartView) -> Path:
    return output_dir / f"{source.stem}-{view.value}.png"


def process_files(
    paths: Sequence[Path],
    config: AppConfig,
    view: ChartView | str = ChartView.BAR,
    output_dir: Path | None = None,
    *,
    render: bool = True,
    error_log: ErrorLogBuffer | None = None,
) -> ProcessingResult:
    """Run the pipeline for every file and (optionally) write one chart per file.

    Returns:
        ProcessingResult with per-file stats and totals for the SUMMARY line
    """
    start_time = datetime.now(UTC)
    view = ChartView.parse(view)
    output_dir = output_dir or Path(config.output_directory)
    error_log = error_log if error_log is not None else ErrorLogBuffer()

    file_stats: list[FileStat] = []
    success_count = 0
    failed_count = 0
    total_answers = 0
    total_skipped = 0

    with ProgressTracker(len(paths)) as progress:
        for path in paths:
            progress.start_file(path)
            stat = _process_single_file(path, config, view, output_dir, render, error_log)
            file_stats.append(stat)
            if stat.status is FileStatus.SUCCESS:
                success_count += 1
                total_answers += stat.answers
                total_skipped += stat.skipped_cells
            else:
                failed_count += 1
            progress.finish_file(success=success_count, failed=failed_count)

    log_path = None
    try:
        log_path = error_log.flush()
    except OSError as e:
        logger.warning(f"could not write error log: {e}")
    if log_path is not None:
        logger.info(f"diagnostics written to {log_path}")

    end_time = datetime.now(UTC)
    return ProcessingResult(
        success_files=success_count,
        failed_files=failed_count,
        total_answers=total_answers,
        skipped_cells=total_skipped,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
        error_log_path=log_path,
    )


def _failed(path: Path, error: PipelineError, error_log: ErrorLogBuffer, elapsed: float) -> FileStat:
    logger.error(f"{path.name}: {error.user_message}")
    logger.debug(f"{path.name}: {error.detail}")
    error_log.append(ErrorRecord.from_error(path.name, error))
    return FileStat(
        file_name=path.name,
        status=FileStatus.FAILED,
        elapsed_seconds=elapsed,
        error_type=error.error_type,
        error=error.user_message,
    )


def _process_single_file(
    path: Path,
    config: AppConfig,
    view: ChartView,
    output_dir: Path,
    render: bool,
    error_log: ErrorLogBuffer,
) -> FileStat:
    file_start = datetime.now(UTC)

    def elapsed() -> float:
        return (datetime.now(UTC) - file_start).total_seconds()

    session = ChartSession(config, view)
    try:
        spec = session.load_file(path)
    except PipelineError as e:
        return _failed(path, e, error_log, elapsed())

    result = session.loaded.result  # type: ignore[union-attr]  # set by load_file

    unrecognized = result.unrecognized_cells
    for cell in unrecognized:
        error_log.append(
            ErrorRecord.create(
                file=path.name,
                row=cell.row,
                column=cell.header,
                error_type="UNRECOGNIZED_ANSWER",
                message="value does not match any answer category",
                value=cell.value,
            )
        )
    if unrecognized:
        logger.warning(f"{path.name}: {len(unrecognized)} unrecognized answer(s) skipped")

    chart_path: Path | None = None
    if not spec.has_data:
        logger.info(f"{path.name}: nothing to chart")
    elif render:
        try:
            chart_path = render_chart(spec, chart_output_path(output_dir, path, view), config.chart)
        except RenderFailureError as e:
            return _failed(path, e, error_log, elapsed())

    logger.info(
        f"{path.name}: questions={len(result)} answers={result.total_answers} "
        f"skipped_cells={result.skipped_cells}"
        + (f" chart={chart_path}" if chart_path is not None else "")
    )
    return FileStat(
        file_name=path.name,
        status=FileStatus.SUCCESS,
        answers=result.total_answers,
        skipped_cells=result.skipped_cells,
        elapsed_seconds=elapsed(),
        chart_path=chart_path,
    )
