"""
Errors raised while summarizing a table.
"""
from __future__ import annotations

from typing import Any


class SummaryError(ValueError):
    """Base error for summary computations"""


class InvalidField(SummaryError):
    """A requested field is absent from a record"""

    def __init__(self, field_name: str, row_index: int) -> None:
        self.field_name = field_name
        self.row_index = row_index
        super().__init__(f"Field '{field_name}' is missing from record {row_index}.")


class NonNumericValue(SummaryError):
    """A value field entry cannot be read as a finite number"""

    def __init__(self, field_name: str, row_index: int, value: Any) -> None:
        self.field_name = field_name
        self.row_index = row_index
        self.value = value
        super().__init__(
            f"Field '{field_name}' in record {row_index} is not numeric: {value!r}."
        )


class EmptyInput(SummaryError):
    """The table has zero records"""

    def __init__(self) -> None:
        super().__init__("Cannot summarize an empty table.")


class InsufficientSamples(SummaryError):
    """A group has fewer than two records and a standard deviation was required"""

    def __init__(self, group: Any, count: int) -> None:
        self.group = group
        self.count = count
        super().__init__(
            f"Group {group!r} has {count} record(s); standard deviation needs at least 2."
        )
