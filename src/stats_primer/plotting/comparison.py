from __future__ import annotations

import math
from pathlib import Path
from typing import Sequence

from stats_primer.core.models import FigureArtifact, GroupSummary
from stats_primer.plotting.base import BasePlotter


class BarPlotter(BasePlotter):
    """Bar plot of group means with one standard deviation error bars."""

    def run(
        self,
        summaries: Sequence[GroupSummary],
        value_field: str,
        output_dir: Path,
    ) -> list[FigureArtifact]:
        if not summaries:
            return []

        labels = [str(summary.group) for summary in summaries]
        means = [summary.mean for summary in summaries]
        # NaN std (singleton group) draws no error bar.
        errors = [0.0 if math.isnan(summary.std) else summary.std for summary in summaries]

        fig, ax = self._new_figure()
        ax.bar(labels, means, yerr=errors, capsize=6, color="lightgray", edgecolor="black")
        ax.set_title(f"Mean {value_field} by group")
        ax.set_xlabel("Group")
        ax.set_ylabel(f"Mean {value_field}")
        figure_id = f"bar_mean_{value_field}"
        figure_path = self._save(fig, output_dir, figure_id)

        return [
            FigureArtifact(
                figure_id=figure_id,
                path=figure_path,
                title=f"Mean {value_field} by group",
                caption="Bars show group means; error bars span one sample standard deviation.",
                section="comparison",
                tags=["bar", "error-bars"],
            )
        ]
