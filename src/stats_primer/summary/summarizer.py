from __future__ import annotations

import logging
import math
from typing import Any, Hashable, Sequence

from stats_primer.config.settings import SummarySettings
from stats_primer.core.errors import EmptyInput, InsufficientSamples, InvalidField, NonNumericValue
from stats_primer.core.models import ALL_GROUP, GroupSummary, Record
from stats_primer.data.splitter import DataSplitter, as_records
from stats_primer.summary.statistics import coerce_numeric, mean, percentile, sample_std

logger = logging.getLogger(__name__)


class GroupedSummarizer:
    """Compute per-group descriptive statistics of one numeric field."""

    def __init__(
        self,
        settings: SummarySettings | None = None,
        splitter: DataSplitter | None = None,
    ) -> None:
        self.settings = settings or SummarySettings()
        self.splitter = splitter or DataSplitter()

    def summarize(self, table: Any, group_field: str, value_field: str) -> list[GroupSummary]:
        records = as_records(table)
        if not records:
            raise EmptyInput()

        positions = self._record_positions(records)
        partitions = self.splitter.split(records, group_field)
        summaries = [
            self._summarize_group(key, rows, value_field, positions)
            for key, rows in partitions.items()
        ]
        logger.debug(
            "Summarized %d records of '%s' into %d groups by '%s'",
            len(records),
            value_field,
            len(summaries),
            group_field,
        )
        return summaries

    def describe(self, table: Any, value_field: str) -> GroupSummary:
        records = as_records(table)
        if not records:
            raise EmptyInput()
        return self._summarize_group(ALL_GROUP, records, value_field, self._record_positions(records))

    def _record_positions(self, records: Sequence[Record]) -> dict[int, int]:
        return {id(record): index for index, record in enumerate(records)}

    def _values(
        self,
        rows: Sequence[Record],
        value_field: str,
        positions: dict[int, int],
    ) -> list[float]:
        values: list[float] = []
        for record in rows:
            row_index = positions.get(id(record), -1)
            if value_field not in record:
                raise InvalidField(value_field, row_index)
            try:
                values.append(coerce_numeric(record[value_field]))
            except ValueError as exc:
                raise NonNumericValue(value_field, row_index, record[value_field]) from exc
        return values

    def _summarize_group(
        self,
        key: Hashable,
        rows: Sequence[Record],
        value_field: str,
        positions: dict[int, int],
    ) -> GroupSummary:
        values = sorted(self._values(rows, value_field, positions))
        count = len(values)
        std = sample_std(values)
        if math.isnan(std) and self.settings.singleton_std == "error":
            raise InsufficientSamples(key, count)

        return GroupSummary(
            group=key,
            count=count,
            minimum=values[0],
            q1=percentile(values, 0.25),
            median=percentile(values, 0.5),
            mean=mean(values),
            q3=percentile(values, 0.75),
            maximum=values[-1],
            std=std,
        )
