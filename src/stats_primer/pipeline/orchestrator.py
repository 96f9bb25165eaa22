from __future__ import annotations

import logging

from stats_primer.checks.health import DataHealthChecker
from stats_primer.config.settings import SummarySettings
from stats_primer.core.models import Record, RunResult, SummaryRequest
from stats_primer.data.loader import DataLoader
from stats_primer.pipeline.context import PipelineContext
from stats_primer.plotting.comparison import BarPlotter
from stats_primer.plotting.distribution import BoxPlotter, HistogramPlotter
from stats_primer.plotting.figure_registry import FigureRegistry
from stats_primer.plotting.relationship import LinePlotter, ScatterPlotter
from stats_primer.reporting.table_builder import TableBuilder
from stats_primer.summary.summarizer import GroupedSummarizer

logger = logging.getLogger(__name__)


class PipelineOrchestrator:
    """Run load, health check, summaries, tables and figures for one request."""

    def __init__(
        self,
        loader: DataLoader | None = None,
        health_checker: DataHealthChecker | None = None,
    ) -> None:
        self.loader = loader or DataLoader()
        self.health_checker = health_checker or DataHealthChecker()

    def settings_for(self, request: SummaryRequest) -> SummarySettings:
        return SummarySettings.from_yaml(request.settings_path).with_overrides(request.overrides)

    def run(self, request: SummaryRequest, records: list[Record] | None = None) -> RunResult:
        """Run the pipeline; ``records`` skips loading ``request.source`` when already read."""
        context = PipelineContext(request=request, settings=self.settings_for(request))
        request.output_dir.mkdir(parents=True, exist_ok=True)

        context.records = records if records is not None else self.loader.resolve(request.source)
        health = self.health_checker.run(context.records, request.value_field, request.group_field)
        context.add_validation("health", health)

        if not health.passed:
            logger.warning("Health checks failed; skipping summaries and figures.")
            return RunResult(request=request, health=health, flags=context.flags)

        summarizer = GroupedSummarizer(settings=context.settings)
        context.overall = summarizer.describe(context.records, request.value_field)
        if request.group_field is not None:
            context.summaries = summarizer.summarize(
                context.records,
                request.group_field,
                request.value_field,
            )

        if request.run_plots:
            registry = self._plot(context)
            context.add_figures(registry.all())

        if request.run_tables:
            partial = RunResult(
                request=request,
                health=health,
                summaries=context.summaries,
                overall=context.overall,
                figures=context.figures,
                flags=context.flags,
            )
            tables, table_flags = TableBuilder(context.settings).build(
                partial,
                request.output_dir,
                formats=context.settings.table_formats,
            )
            for artifact in tables:
                context.add_table(artifact)
            context.flags.extend(table_flags)

        return RunResult(
            request=request,
            health=health,
            summaries=context.summaries,
            overall=context.overall,
            figures=context.figures,
            tables=context.tables,
            flags=context.flags,
        )

    def _plot(self, context: PipelineContext) -> FigureRegistry:
        request = context.request
        settings = context.settings
        plots_dir = request.output_dir / "figures"
        registry = FigureRegistry()

        registry.register(HistogramPlotter(settings).run(context.records, request.value_field, plots_dir))
        if request.group_field is not None:
            registry.register(
                BoxPlotter(settings).run(
                    context.records,
                    request.group_field,
                    request.value_field,
                    plots_dir,
                )
            )
            registry.register(BarPlotter(settings).run(context.summaries, request.value_field, plots_dir))
        if request.x_field is not None:
            registry.register(
                ScatterPlotter(settings).run(
                    context.records,
                    request.x_field,
                    request.value_field,
                    plots_dir,
                    group_field=request.group_field,
                )
            )
            if request.group_field is not None:
                registry.register(
                    LinePlotter(settings).run(
                        context.records,
                        request.x_field,
                        request.value_field,
                        request.group_field,
                        plots_dir,
                    )
                )
        return registry
