from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

"""Batch processing result models.

FileStat is the per-file outcome, ProcessingResult the aggregated metrics
behind the SUMMARY line.
"""

__all__ = [
    "FileStatus",
    "FileStat",
    "ProcessingResult",
]


class FileStatus(Enum):
    """Outcome of one survey file: pending -> (success | failed)."""
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class FileStat:
    file_name: str
    status: FileStatus
    answers: int = 0  # 集計された回答数
    skipped_cells: int = 0  # empty + unrecognized
    elapsed_seconds: float = 0.0
    chart_path: Path | None = None
    error_type: str | None = None
    error: str | None = None  # user-facing failure message


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results of a batch run."""
    success_files: int
    failed_files: int
    total_answers: int
    skipped_cells: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None
    error_log_path: Path | None = None

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files
