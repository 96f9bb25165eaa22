from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Literal

import yaml

from stats_primer.core.models import SingletonStdPolicy

SINGLETON_STD_POLICIES = {"nan", "error"}
FIGURE_FORMATS = {"png", "pdf"}


@dataclass
class SummarySettings:
    singleton_std: SingletonStdPolicy = "nan"
    figure_dpi: int = 150
    figure_format: Literal["png", "pdf"] = "png"
    figure_width: float = 8.0
    figure_height: float = 5.0
    histogram_bins: int = 10
    table_decimals: int = 3
    table_formats: dict[str, dict[str, Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.singleton_std not in SINGLETON_STD_POLICIES:
            raise ValueError(
                f"singleton_std must be one of {sorted(SINGLETON_STD_POLICIES)}, got {self.singleton_std!r}"
            )
        if self.figure_format not in FIGURE_FORMATS:
            raise ValueError(
                f"figure_format must be one of {sorted(FIGURE_FORMATS)}, got {self.figure_format!r}"
            )
        for name in ("figure_dpi", "histogram_bins"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        if not isinstance(self.table_formats, dict):
            raise ValueError("table_formats must map table ids to column format rules")

    @classmethod
    def from_yaml(cls, path: Path | None) -> "SummarySettings":
        if path is None:
            return cls()
        if not path.exists():
            raise FileNotFoundError(f"Settings file not found: {path}")

        with path.open("r", encoding="utf-8") as handle:
            try:
                payload = yaml.safe_load(handle) or {}
            except yaml.YAMLError as exc:
                raise ValueError(f"Settings file is not valid YAML: {path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise ValueError(f"Settings file must contain a mapping: {path}")
        try:
            return cls(**payload)
        except TypeError as exc:
            raise ValueError(f"Invalid settings in {path}: {exc}") from exc

    def with_overrides(self, overrides: dict[str, Any]) -> "SummarySettings":
        known = {item.name for item in fields(self)}
        unknown = sorted(key for key in overrides if key not in known)
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(unknown)}")
        return replace(self, **{key: value for key, value in overrides.items() if value is not None})
