from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Sequence

from stats_primer.config.settings import SummarySettings
from stats_primer.core.errors import InvalidField, NonNumericValue
from stats_primer.core.models import Record
from stats_primer.summary.statistics import coerce_numeric

logger = logging.getLogger(__name__)


class BasePlotter:
    """Shared figure setup and file output for the plotters."""

    def __init__(self, settings: SummarySettings | None = None) -> None:
        self.settings = settings or SummarySettings()

    def _new_figure(self) -> tuple[Any, Any]:
        import matplotlib.pyplot as plt

        return plt.subplots(figsize=(self.settings.figure_width, self.settings.figure_height))

    def _save(self, fig: Any, output_dir: Path, figure_id: str) -> Path:
        import matplotlib.pyplot as plt

        output_dir.mkdir(parents=True, exist_ok=True)
        figure_path = output_dir / f"{figure_id}.{self.settings.figure_format}"
        fig.tight_layout()
        fig.savefig(figure_path, dpi=self.settings.figure_dpi)
        plt.close(fig)
        logger.info("Saved figure %s", figure_path)
        return figure_path

    def _numbers(self, records: Sequence[Record], field_name: str) -> list[float]:
        values: list[float] = []
        for index, record in enumerate(records):
            if field_name not in record:
                raise InvalidField(field_name, index)
            try:
                values.append(coerce_numeric(record[field_name]))
            except ValueError as exc:
                raise NonNumericValue(field_name, index, record[field_name]) from exc
        return values
