from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from stats_primer.core.models import Record
from stats_primer.data.examples import load_example

logger = logging.getLogger(__name__)

EXAMPLE_PREFIX = "example:"


class DataLoader:
    """Read tabular datasets from disk or from the built-in examples."""

    def load_frame(self, path: Path) -> Any:
        import pandas as pd

        if not path.exists():
            raise FileNotFoundError(f"Input dataset not found: {path}")

        suffix = path.suffix.lower()
        if suffix == ".csv":
            frame = pd.read_csv(path)
        elif suffix in {".parquet", ".pq"}:
            frame = pd.read_parquet(path)
        elif suffix in {".xlsx", ".xls"}:
            frame = pd.read_excel(path)
        else:
            raise ValueError(f"Unsupported dataset extension: {suffix}")

        logger.info("Loaded %d rows x %d columns from %s", frame.shape[0], frame.shape[1], path)
        return frame

    def load(self, path: Path) -> list[Record]:
        return self.load_frame(path).to_dict("records")

    def resolve(self, source: str) -> list[Record]:
        """Load ``example:<name>`` from the built-ins, anything else as a file path."""
        if source.startswith(EXAMPLE_PREFIX):
            name = source[len(EXAMPLE_PREFIX):]
            logger.info("Using built-in example dataset '%s'", name)
            return load_example(name)
        return self.load(Path(source))
