from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ..config.loader import default_config
from ..models.aggregate import AggregateResult
from ..models.config_models import AppConfig
from ..models.table import Table
from ..reader.tabular import read_file
from .aggregator import aggregate
from .validator import validate

"""Single-file pipeline: read -> validate -> aggregate.

Synchronous, no shared state. Raises a PipelineError subclass on failure.
"""

__all__ = [
    "PipelineResult",
    "run_pipeline",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    source: Path
    table: Table  # validated (blank-header columns removed)
    result: AggregateResult

    @property
    def headers(self) -> tuple[str, ...]:
        return self.table.headers


def run_pipeline(path: Path, config: AppConfig | None = None) -> PipelineResult:
    config = config or default_config()
    table = read_file(path, delimiter=config.delimiter)
    logger.debug(f"{path.name}: read {table.width} question(s), {table.row_count} row(s)")
    table = validate(table, config.vocabulary)
    result = aggregate(table, config.vocabulary)
    logger.debug(
        f"{path.name}: answers={result.total_answers} skipped_cells={result.skipped_cells}"
    )
    return PipelineResult(source=path, table=table, result=result)
