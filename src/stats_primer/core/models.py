from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Hashable, Literal, Mapping

Severity = Literal["INFO", "WARN", "ERROR"]
SingletonStdPolicy = Literal["nan", "error"]

Record = Mapping[str, Any]

ALL_GROUP = "ALL"


@dataclass
class Flag:
    code: str
    message: str
    severity: Severity = "WARN"
    stage: str = "unknown"
    variables: list[str] = field(default_factory=list)
    recommendation: str | None = None


@dataclass
class ValidationResult:
    name: str
    passed: bool
    summary: str = ""
    flags: list[Flag] = field(default_factory=list)
    metrics: dict[str, Any] = field(default_factory=dict)
    assumptions: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class GroupSummary:
    """Descriptive statistics of one numeric field within one group."""

    group: Hashable
    count: int
    minimum: float
    q1: float
    median: float
    mean: float
    q3: float
    maximum: float
    std: float


@dataclass
class SummaryRequest:
    source: str
    output_dir: Path
    value_field: str
    group_field: str | None = None
    x_field: str | None = None
    settings_path: Path | None = None
    run_plots: bool = True
    run_tables: bool = True
    overrides: dict[str, Any] = field(default_factory=dict)


@dataclass
class FigureArtifact:
    figure_id: str
    path: Path
    title: str
    caption: str
    section: str
    tags: list[str] = field(default_factory=list)


@dataclass
class TableArtifact:
    table_id: str
    path: Path
    title: str
    source: str
    columns: list[str] = field(default_factory=list)
    row_count: int = 0
    preview_rows: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class RunResult:
    request: SummaryRequest
    health: ValidationResult | None = None
    summaries: list[GroupSummary] = field(default_factory=list)
    overall: GroupSummary | None = None
    figures: list[FigureArtifact] = field(default_factory=list)
    tables: list[TableArtifact] = field(default_factory=list)
    flags: list[Flag] = field(default_factory=list)
