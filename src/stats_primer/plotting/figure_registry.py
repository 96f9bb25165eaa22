from __future__ import annotations

from dataclasses import dataclass, field

from stats_primer.core.models import FigureArtifact


@dataclass
class FigureRegistry:
    figures: list[FigureArtifact] = field(default_factory=list)

    def register(self, figures: list[FigureArtifact]) -> None:
        self.figures.extend(figures)

    def all(self) -> list[FigureArtifact]:
        return list(self.figures)
