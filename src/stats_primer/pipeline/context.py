from __future__ import annotations

from dataclasses import dataclass, field

from stats_primer.config.settings import SummarySettings
from stats_primer.core.models import (
    FigureArtifact,
    Flag,
    GroupSummary,
    Record,
    SummaryRequest,
    TableArtifact,
    ValidationResult,
)


@dataclass
class PipelineContext:
    request: SummaryRequest
    settings: SummarySettings = field(default_factory=SummarySettings)
    records: list[Record] = field(default_factory=list)
    validations: dict[str, ValidationResult] = field(default_factory=dict)
    summaries: list[GroupSummary] = field(default_factory=list)
    overall: GroupSummary | None = None
    figures: list[FigureArtifact] = field(default_factory=list)
    tables: list[TableArtifact] = field(default_factory=list)
    flags: list[Flag] = field(default_factory=list)

    def add_validation(self, key: str, result: ValidationResult) -> None:
        self.validations[key] = result
        self.flags.extend(result.flags)

    def add_figures(self, artifacts: list[FigureArtifact]) -> None:
        self.figures.extend(artifacts)

    def add_table(self, artifact: TableArtifact) -> None:
        self.tables.append(artifact)
