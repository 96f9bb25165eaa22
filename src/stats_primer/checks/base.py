from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from stats_primer.core.models import ValidationResult


class BaseCheck(ABC):
    name = "base-check"
    assumptions: list[str] = []

    @abstractmethod
    def run(self, table: Any, value_field: str, group_field: str | None = None) -> ValidationResult:
        raise NotImplementedError

    def describe(self) -> str:
        lines = [f"Check: {self.name}", "Assumptions:"]
        lines.extend(f"- {entry}" for entry in self.assumptions)
        return "\n".join(lines)
