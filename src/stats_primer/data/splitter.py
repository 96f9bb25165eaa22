from __future__ import annotations

from typing import Any, Hashable

from stats_primer.core.errors import InvalidField
from stats_primer.core.models import ALL_GROUP, Record


def as_records(table: Any) -> list[Record]:
    """Return the rows of ``table`` as a list, converting DataFrames to records."""
    if hasattr(table, "to_dict") and hasattr(table, "columns"):
        return table.to_dict("records")
    return list(table)


class DataSplitter:
    """Partition records by a group field in first-appearance order."""

    def split(self, table: Any, group_field: str | None) -> dict[Hashable, list[Record]]:
        records = as_records(table)
        if group_field is None:
            return {ALL_GROUP: records}

        split_data: dict[Hashable, list[Record]] = {}
        for index, record in enumerate(records):
            if group_field not in record:
                raise InvalidField(group_field, index)
            split_data.setdefault(record[group_field], []).append(record)
        return split_data
