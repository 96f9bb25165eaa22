from __future__ import annotations

import argparse
import json
import logging
import math
from dataclasses import asdict
from pathlib import Path
from typing import Any

from stats_primer.checks.health import DataHealthChecker
from stats_primer.cli.help_text import EXPLANATIONS
from stats_primer.config.settings import SummarySettings
from stats_primer.core.errors import SummaryError
from stats_primer.core.models import GroupSummary, SummaryRequest
from stats_primer.data.examples import list_examples
from stats_primer.data.loader import DataLoader
from stats_primer.pipeline.orchestrator import PipelineOrchestrator
from stats_primer.summary.summarizer import GroupedSummarizer

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stats-primer",
        description="Descriptive statistics and plots for small tables.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging verbosity on stderr.",
    )
    subparsers = parser.add_subparsers(dest="command")

    datasets = subparsers.add_parser("datasets", help="List built-in example datasets.")
    datasets.add_argument("--explain", action="store_true", help="Show method context.")

    ingest = subparsers.add_parser("ingest", help="Read a dataset and report dimensions.")
    ingest.add_argument("input", type=str, help="Path to input dataset or example:<name>.")
    ingest.add_argument("--explain", action="store_true", help="Show method context.")

    describe = subparsers.add_parser("describe", help="Summarize one numeric field.")
    _add_summary_arguments(describe, require_group=False)

    summarize = subparsers.add_parser("summarize", help="Summarize a numeric field per group.")
    _add_summary_arguments(summarize, require_group=True)

    health = subparsers.add_parser("check-health", help="Run data health checks.")
    _add_summary_arguments(health, require_group=False)

    plot = subparsers.add_parser("plot", help="Generate figures for a field.")
    _add_summary_arguments(plot, require_group=False)
    _add_output_arguments(plot)

    run_all = subparsers.add_parser("run-all", help="Execute checks, summaries, tables and plots.")
    _add_summary_arguments(run_all, require_group=False)
    _add_output_arguments(run_all)
    run_all.add_argument("--no-tables", action="store_true", help="Disable CSV table output.")
    run_all.add_argument("--no-plots", action="store_true", help="Disable figure output.")

    return parser


def _add_summary_arguments(parser: argparse.ArgumentParser, require_group: bool) -> None:
    parser.add_argument("input", type=str, help="Path to input dataset or example:<name>.")
    parser.add_argument("--value", type=str, required=True, help="Numeric field to summarize.")
    parser.add_argument(
        "--group",
        type=str,
        required=require_group,
        default=None,
        help="Categorical field that partitions the records.",
    )
    parser.add_argument("--settings", type=str, help="Path to settings YAML.")
    parser.add_argument(
        "--singleton-std",
        choices=["nan", "error"],
        default=None,
        help="Standard deviation of one-record groups: NaN or an error.",
    )
    parser.add_argument("--explain", action="store_true", help="Show method context.")


def _add_output_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--output-dir",
        type=str,
        default="output/stats_primer",
        help="Directory for figures and tables.",
    )
    parser.add_argument("--x", type=str, default=None, help="Numeric x-axis field for scatter and line plots.")
    parser.add_argument("--format", choices=["png", "pdf"], default=None, help="Figure file format.")
    parser.add_argument("--dpi", type=int, default=None, help="Figure resolution.")
    parser.add_argument("--bins", type=int, default=None, help="Histogram bin count.")


def _overrides(args: argparse.Namespace) -> dict[str, Any]:
    return {
        "singleton_std": args.singleton_std,
        "figure_format": getattr(args, "format", None),
        "figure_dpi": getattr(args, "dpi", None),
        "histogram_bins": getattr(args, "bins", None),
    }


def _build_request(
    args: argparse.Namespace,
    *,
    run_plots: bool = True,
    run_tables: bool = True,
) -> SummaryRequest:
    return SummaryRequest(
        source=args.input,
        output_dir=Path(args.output_dir),
        value_field=args.value,
        group_field=args.group,
        x_field=args.x,
        settings_path=Path(args.settings) if args.settings else None,
        run_plots=run_plots,
        run_tables=run_tables,
        overrides=_overrides(args),
    )


def _summary_payload(summary: GroupSummary) -> dict[str, Any]:
    payload = asdict(summary)
    return {
        key: None if isinstance(value, float) and math.isnan(value) else value
        for key, value in payload.items()
    }


def _print_json(payload: dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2, default=str))


def _print_explain(command: str | None) -> bool:
    if not command:
        return False
    explanation = EXPLANATIONS.get(command)
    if explanation is None:
        return False
    print(explanation)
    if command == "check-health":
        print(DataHealthChecker().describe())
    return True


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 1

    if args.explain:
        _print_explain(args.command)
        return 0

    if args.command == "datasets":
        _print_json({"datasets": list_examples()})
        return 0

    loader = DataLoader()
    try:
        records = loader.resolve(args.input)
    except (FileNotFoundError, KeyError, ValueError) as exc:
        logger.error("Could not load %s: %s", args.input, exc)
        return 1

    if args.command == "ingest":
        field_names = list(records[0].keys()) if records else []
        _print_json({"rows": len(records), "columns": len(field_names), "column_names": field_names})
        return 0

    if args.command == "check-health":
        result = DataHealthChecker().run(records, args.value, args.group)
        _print_json(
            {
                "passed": result.passed,
                "summary": result.summary,
                "flags": [asdict(flag) for flag in result.flags],
                "metrics": result.metrics,
            }
        )
        return 0 if result.passed else 1

    settings_path = Path(args.settings) if args.settings else None
    try:
        settings = SummarySettings.from_yaml(settings_path).with_overrides(_overrides(args))
    except (FileNotFoundError, ValueError) as exc:
        logger.error("Invalid settings: %s", exc)
        _print_json({"error": type(exc).__name__, "message": str(exc)})
        return 1

    try:
        summarizer = GroupedSummarizer(settings=settings)

        if args.command == "describe":
            summary = summarizer.describe(records, args.value)
            _print_json({"value_field": args.value, "summary": _summary_payload(summary)})
            return 0

        if args.command == "summarize":
            summaries = summarizer.summarize(records, args.group, args.value)
            _print_json(
                {
                    "group_field": args.group,
                    "value_field": args.value,
                    "groups": [_summary_payload(summary) for summary in summaries],
                }
            )
            return 0

        request = _build_request(
            args,
            run_plots=not getattr(args, "no_plots", False),
            run_tables=args.command == "run-all" and not args.no_tables,
        )
        run_result = PipelineOrchestrator(loader=loader).run(request, records=records)
    except SummaryError as exc:
        logger.error("%s", exc)
        _print_json({"error": type(exc).__name__, "message": str(exc)})
        return 2

    _print_json(
        {
            "health_passed": run_result.health.passed if run_result.health else None,
            "overall": _summary_payload(run_result.overall) if run_result.overall else None,
            "groups": [_summary_payload(summary) for summary in run_result.summaries],
            "figures": [str(figure.path) for figure in run_result.figures],
            "tables": [str(table.path) for table in run_result.tables],
            "flag_count": len(run_result.flags),
        }
    )
    if run_result.health is not None and not run_result.health.passed:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
