from __future__ import annotations

import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Sequence

import pandas as pd

from stats_primer.config.settings import SummarySettings
from stats_primer.core.models import Flag, GroupSummary, RunResult, TableArtifact

logger = logging.getLogger(__name__)

STATISTIC_COLUMNS = ["minimum", "q1", "median", "mean", "q3", "maximum", "std"]


def summary_frame(summaries: Sequence[GroupSummary]) -> pd.DataFrame:
    """One row per group, columns in GroupSummary field order."""
    columns = ["group", "count", *STATISTIC_COLUMNS]
    return pd.DataFrame([asdict(summary) for summary in summaries], columns=columns)


class TableBuilder:
    """Write summary tables to CSV with per-column number formats."""

    DEFAULT_TABLE_IDS = ["group_summaries", "overall_summary", "flags"]

    def __init__(self, settings: SummarySettings | None = None) -> None:
        self.settings = settings or SummarySettings()

    def build(
        self,
        run_result: RunResult,
        output_dir: Path,
        formats: dict[str, dict[str, Any]] | None = None,
        preview_rows: int = 20,
    ) -> tuple[list[TableArtifact], list[Flag]]:
        tables_dir = output_dir / "tables"
        tables_dir.mkdir(parents=True, exist_ok=True)

        artifacts: list[TableArtifact] = []
        flags: list[Flag] = []
        for table_id in self.DEFAULT_TABLE_IDS:
            frame, title, source = self._default_table(table_id, run_result)
            if frame is None:
                continue
            format_spec = (formats or {}).get(table_id, self._default_format(frame))
            formatted, format_flags = self._apply_column_formats(frame, format_spec, table_id)
            flags.extend(format_flags)
            artifacts.append(
                self._write_table(
                    frame=formatted,
                    table_id=table_id,
                    title=title,
                    source=source,
                    tables_dir=tables_dir,
                    preview_rows=preview_rows,
                )
            )
        return artifacts, flags

    def _default_table(
        self,
        table_id: str,
        run_result: RunResult,
    ) -> tuple[pd.DataFrame | None, str, str]:
        if table_id == "group_summaries":
            if not run_result.summaries:
                return None, "", ""
            return summary_frame(run_result.summaries), "Group Summaries", "summaries"

        if table_id == "overall_summary":
            if run_result.overall is None:
                return None, "", ""
            return summary_frame([run_result.overall]), "Overall Summary", "overall"

        if table_id == "flags":
            if not run_result.flags:
                return None, "", ""
            return pd.DataFrame([asdict(flag) for flag in run_result.flags]), "Flags", "flags"

        raise KeyError(f"Unknown table id: {table_id}")

    def _default_format(self, frame: pd.DataFrame) -> dict[str, Any]:
        rule = f"decimal:{self.settings.table_decimals}"
        return {column: rule for column in STATISTIC_COLUMNS if column in frame.columns}

    def _parse_format_rule(self, rule: Any) -> tuple[str | None, dict[str, Any]]:
        if isinstance(rule, str):
            raw = rule.strip()
            if not raw:
                return None, {}
            if ":" in raw:
                prefix, suffix = raw.split(":", 1)
                prefix = prefix.strip().lower()
                suffix = suffix.strip()
                if suffix.isdigit():
                    return prefix, {"decimals": int(suffix)}
                return prefix, {}
            return raw.lower(), {}
        if isinstance(rule, dict):
            kind = str(rule.get("type", "")).strip().lower()
            options = dict(rule)
            options.pop("type", None)
            return (kind if kind else None), options
        return None, {}

    def _format_number(self, value: Any, kind: str, options: dict[str, Any]) -> str:
        null_value = str(options.get("null", "NaN"))
        if pd.isna(value):
            return null_value
        try:
            number = float(value)
        except (TypeError, ValueError):
            return str(value)

        decimals = int(options.get("decimals", 2))
        if kind == "decimal":
            return f"{number:.{decimals}f}"
        if kind == "integer":
            return f"{int(round(number)):d}"
        if kind == "scientific":
            return f"{number:.{decimals}e}"
        return str(value)

    def _apply_column_formats(
        self,
        frame: pd.DataFrame,
        format_spec: Any,
        table_id: str,
    ) -> tuple[pd.DataFrame, list[Flag]]:
        if not isinstance(format_spec, dict) or not format_spec:
            return frame, []

        flags: list[Flag] = []
        output = frame.copy()
        for column_name, rule in format_spec.items():
            if column_name not in output.columns:
                flags.append(
                    Flag(
                        code="table_format_column_missing",
                        message=(
                            f"Table '{table_id}' format rule references missing column '{column_name}'."
                        ),
                        severity="WARN",
                        stage="tables",
                    )
                )
                continue

            kind, options = self._parse_format_rule(rule)
            if kind not in {"decimal", "integer", "scientific"}:
                flags.append(
                    Flag(
                        code="table_format_type_unknown",
                        message=(
                            f"Table '{table_id}' has unknown format type '{kind}' "
                            f"for column '{column_name}'."
                        ),
                        severity="WARN",
                        stage="tables",
                    )
                )
                continue

            output[column_name] = output[column_name].map(
                lambda value, k=kind, opt=options: self._format_number(value, k, opt)
            )
        return output, flags

    def _write_table(
        self,
        frame: pd.DataFrame,
        table_id: str,
        title: str,
        source: str,
        tables_dir: Path,
        preview_rows: int,
    ) -> TableArtifact:
        csv_path = tables_dir / f"{table_id}.csv"
        frame.to_csv(csv_path, index=False)
        logger.info("Wrote table %s (%d rows)", csv_path, len(frame))
        return TableArtifact(
            table_id=table_id,
            path=csv_path,
            title=title,
            source=source,
            columns=[str(col) for col in frame.columns],
            row_count=int(len(frame)),
            preview_rows=frame.head(preview_rows).to_dict("records"),
        )
