from __future__ import annotations

import logging
from pathlib import Path

from ..config.loader import default_config
from ..models.chart_spec import ChartSpec, ChartView
from ..models.config_models import AppConfig
from .pipeline import PipelineResult, run_pipeline
from .projector import project

"""Chart session: owns the most recently loaded survey.

The slot is replaced by a single assignment after a load fully succeeds, so a
view change never sees a half-updated result and a failed load keeps the
previous one.
"""

__all__ = [
    "ChartSession",
]

logger = logging.getLogger(__name__)


class ChartSession:
    """Holds the last PipelineResult and the current view."""

    def __init__(self, config: AppConfig | None = None, view: ChartView | str = ChartView.BAR) -> None:
        self.config = config or default_config()
        self.view = ChartView.parse(view)
        self._loaded: PipelineResult | None = None

    @property
    def loaded(self) -> PipelineResult | None:
        return self._loaded

    def load_file(self, path: Path, view: ChartView | str | None = None) -> ChartSpec:
        """Run the pipeline for ``path`` and project it under the current view.

        Raises:
            PipelineError: on any read / validation / aggregation failure
                (the previously loaded result is left untouched)
        """
        loaded = run_pipeline(path, self.config)
        if view is not None:
            self.view = ChartView.parse(view)
        spec = self._project(loaded, self.view)
        self._loaded = loaded
        logger.debug(f"session: loaded {path.name}")
        return spec

    def change_view(self, view: ChartView | str) -> ChartSpec | None:
        """Re-project the held result; None when nothing is loaded yet."""
        self.view = ChartView.parse(view)
        loaded = self._loaded
        if loaded is None:
            logger.debug("session: view changed with no survey loaded")
            return None
        return self._project(loaded, self.view)

    def clear(self) -> None:
        self._loaded = None

    def _project(self, loaded: PipelineResult, view: ChartView) -> ChartSpec:
        return project(
            loaded.headers,
            loaded.result,
            view,
            chart=self.config.chart,
            vocabulary=self.config.vocabulary,
        )
