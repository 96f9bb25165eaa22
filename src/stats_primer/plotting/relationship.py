from __future__ import annotations

from pathlib import Path
from typing import Any

from stats_primer.config.settings import SummarySettings
from stats_primer.core.models import FigureArtifact
from stats_primer.data.splitter import DataSplitter, as_records
from stats_primer.plotting.base import BasePlotter


class ScatterPlotter(BasePlotter):
    """Scatter of two numeric fields, optionally colored by group."""

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
        x_field: str,
        y_field: str,
        output_dir: Path,
        group_field: str | None = None,
    ) -> list[FigureArtifact]:
        fig, ax = self._new_figure()
        if group_field is None:
            records = as_records(table)
            ax.scatter(self._numbers(records, x_field), self._numbers(records, y_field), alpha=0.7)
        else:
            for key, rows in self.splitter.split(table, group_field).items():
                ax.scatter(
                    self._numbers(rows, x_field),
                    self._numbers(rows, y_field),
                    alpha=0.7,
                    label=str(key),
                )
            ax.legend(title=group_field)
        ax.set_title(f"{y_field} vs {x_field}")
        ax.set_xlabel(x_field)
        ax.set_ylabel(y_field)
        figure_id = f"scatter_{y_field}_vs_{x_field}"
        figure_path = self._save(fig, output_dir, figure_id)

        return [
            FigureArtifact(
                figure_id=figure_id,
                path=figure_path,
                title=f"{y_field} vs {x_field}",
                caption="Each point is one record.",
                section="relationship",
                tags=["scatter"] if group_field is None else ["scatter", "grouped"],
            )
        ]


class LinePlotter(BasePlotter):
    """One line per group, drawn in first-appearance order of the group labels."""

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
        x_field: str,
        y_field: str,
        group_field: str,
        output_dir: Path,
    ) -> list[FigureArtifact]:
        fig, ax = self._new_figure()
        for key, rows in self.splitter.split(table, group_field).items():
            points = sorted(zip(self._numbers(rows, x_field), self._numbers(rows, y_field)))
            ax.plot(
                [x for x, _ in points],
                [y for _, y in points],
                marker="o",
                label=str(key),
            )
        ax.legend(title=group_field)
        ax.set_title(f"{y_field} over {x_field} by {group_field}")
        ax.set_xlabel(x_field)
        ax.set_ylabel(y_field)
        figure_id = f"lines_{y_field}_by_{group_field}"
        figure_path = self._save(fig, output_dir, figure_id)

        return [
            FigureArtifact(
                figure_id=figure_id,
                path=figure_path,
                title=f"{y_field} over {x_field} by {group_field}",
                caption=f"Points sorted by {x_field} within each group.",
                section="relationship",
                tags=["line", "grouped"],
            )
        ]
