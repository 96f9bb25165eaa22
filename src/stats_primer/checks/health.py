from __future__ import annotations

from typing import Any

from stats_primer.checks.base import BaseCheck
from stats_primer.core.models import Flag, ValidationResult
from stats_primer.data.splitter import as_records
from stats_primer.summary.statistics import coerce_numeric


class DataHealthChecker(BaseCheck):
    name = "data-health"
    assumptions = [
        "Requested fields exist in every record.",
        "Value field entries are finite numbers.",
        "Groups with a single record have no standard deviation.",
    ]

    def run(self, table: Any, value_field: str, group_field: str | None = None) -> ValidationResult:
        records = as_records(table)
        flags: list[Flag] = []
        required_fields = [value_field] if group_field is None else [group_field, value_field]

        row_count = len(records)
        if row_count == 0:
            flags.append(
                Flag(
                    code="empty_table",
                    message="Dataset has zero rows.",
                    severity="ERROR",
                    stage="health",
                    recommendation="Provide a non-empty dataset.",
                )
            )

        missing_rows: dict[str, int] = {}
        for record in records:
            for name in required_fields:
                if name not in record:
                    missing_rows[name] = missing_rows.get(name, 0) + 1
        for name, count in missing_rows.items():
            flags.append(
                Flag(
                    code="missing_field",
                    message=f"Field '{name}' is missing from {count} of {row_count} records.",
                    severity="ERROR",
                    stage="health",
                    variables=[name],
                    recommendation="Check the field name against the dataset columns.",
                )
            )

        bad_values: list[str] = []
        for index, record in enumerate(records):
            if value_field not in record:
                continue
            try:
                coerce_numeric(record[value_field])
            except ValueError:
                bad_values.append(f"[{index}]={record[value_field]!r}")
        if bad_values:
            preview = ", ".join(bad_values[:10])
            if len(bad_values) > 10:
                preview = f"{preview}, ..."
            flags.append(
                Flag(
                    code="non_numeric_values",
                    message=f"Field '{value_field}' has non-numeric entries: {preview}",
                    severity="ERROR",
                    stage="health",
                    variables=[value_field],
                    recommendation="Choose a numeric value field or clean the listed rows.",
                )
            )

        group_counts: dict[Any, int] = {}
        if group_field is not None and group_field not in missing_rows:
            for record in records:
                key = record[group_field]
                group_counts[key] = group_counts.get(key, 0) + 1
            singletons = [str(key) for key, count in group_counts.items() if count < 2]
            if singletons:
                flags.append(
                    Flag(
                        code="singleton_groups",
                        message=(
                            "Some groups have a single record and report NaN standard deviation: "
                            f"{', '.join(singletons)}"
                        ),
                        severity="WARN",
                        stage="health",
                        variables=[group_field],
                    )
                )

        passed = all(flag.severity != "ERROR" for flag in flags)
        return ValidationResult(
            name=self.name,
            passed=passed,
            summary="Health checks completed.",
            flags=flags,
            metrics={
                "row_count": row_count,
                "group_count": len(group_counts),
                "non_numeric_count": len(bad_values),
            },
            assumptions=list(self.assumptions),
        )
