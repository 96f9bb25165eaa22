from __future__ import annotations

from pathlib import Path
from typing import Any

from stats_primer.config.settings import SummarySettings
from stats_primer.core.models import FigureArtifact
from stats_primer.data.splitter import DataSplitter, as_records
from stats_primer.plotting.base import BasePlotter


class HistogramPlotter(BasePlotter):
    """Histogram of one numeric field."""

    def run(self, table: Any, value_field: str, output_dir: Path) -> list[FigureArtifact]:
        values = self._numbers(as_records(table), value_field)

        fig, ax = self._new_figure()
        ax.hist(values, bins=self.settings.histogram_bins, color="steelblue", edgecolor="black")
        ax.set_title(f"Histogram of {value_field}")
        ax.set_xlabel(value_field)
        ax.set_ylabel("Frequency")
        figure_id = f"histogram_{value_field}"
        figure_path = self._save(fig, output_dir, figure_id)

        return [
            FigureArtifact(
                figure_id=figure_id,
                path=figure_path,
                title=f"Histogram of {value_field}",
                caption=f"Distribution of {value_field} in {self.settings.histogram_bins} bins.",
                section="distribution",
                tags=["histogram"],
            )
        ]


class BoxPlotter(BasePlotter):
    """One box per group, in first-appearance order."""

    def __init__(
        self,
        settings: SummarySettings | None = None,
        splitter: DataSplitter | None = None,
    ) -> None:
        super().__init__(settings)
        self.splitter = splitter or DataSplitter()

    def run(
        self,
        table: Any,
        group_field: str,
        value_field: str,
        output_dir: Path,
    ) -> list[FigureArtifact]:
        partitions = self.splitter.split(table, group_field)
        labels = [str(key) for key in partitions]
        series = [self._numbers(rows, value_field) for rows in partitions.values()]

        fig, ax = self._new_figure()
        ax.boxplot(series)
        ax.set_xticks(range(1, len(labels) + 1))
        ax.set_xticklabels(labels)
        ax.set_title(f"{value_field} by {group_field}")
        ax.set_xlabel(group_field)
        ax.set_ylabel(value_field)
        figure_id = f"boxplot_{value_field}_by_{group_field}"
        figure_path = self._save(fig, output_dir, figure_id)

        return [
            FigureArtifact(
                figure_id=figure_id,
                path=figure_path,
                title=f"{value_field} by {group_field}",
                caption="Median, quartiles and whiskers of each group.",
                section="distribution",
                tags=["boxplot", "grouped"],
            )
        ]
