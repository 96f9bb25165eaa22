from __future__ import annotations

import math

import numpy as np
import pandas as pd
import pytest

from stats_primer.config.settings import SummarySettings
from stats_primer.core.errors import EmptyInput, InsufficientSamples, InvalidField, NonNumericValue
from stats_primer.data.examples import load_example
from stats_primer.summary.summarizer import GroupedSummarizer


def _scenario_table() -> list[dict[str, object]]:
    return [
        {"g": "A", "v": 1},
        {"g": "A", "v": 2},
        {"g": "A", "v": 3},
        {"g": "B", "v": 10},
    ]


def test_summarize_matches_worked_example() -> None:
    group_a, group_b = GroupedSummarizer().summarize(_scenario_table(), "g", "v")

    assert group_a.group == "A"
    assert group_a.count == 3
    assert group_a.minimum == 1
    assert group_a.median == 2
    assert group_a.mean == 2
    assert group_a.maximum == 3
    assert group_a.std == pytest.approx(1.0)

    assert group_b.group == "B"
    assert group_b.count == 1
    assert group_b.minimum == group_b.maximum == group_b.mean == group_b.median == 10
    assert group_b.q1 == group_b.q3 == 10
    assert math.isnan(group_b.std)


def test_groups_follow_first_appearance_order_and_partition_input() -> None:
    table = [
        {"site": "north", "y": 3.0},
        {"site": "south", "y": 1.0},
        {"site": "north", "y": 4.0},
        {"site": "east", "y": 2.0},
        {"site": "south", "y": 5.0},
    ]

    summaries = GroupedSummarizer().summarize(table, "site", "y")

    assert [summary.group for summary in summaries] == ["north", "south", "east"]
    assert sum(summary.count for summary in summaries) == len(table)


def test_order_statistics_are_monotone_and_std_non_negative() -> None:
    for summary in GroupedSummarizer().summarize(load_example("plant_growth"), "group", "weight"):
        assert summary.minimum <= summary.q1 <= summary.median <= summary.q3 <= summary.maximum
        assert summary.std >= 0


def test_quartiles_match_numpy_linear_percentiles() -> None:
    records = load_example("orange_trees")
    summaries = GroupedSummarizer().summarize(records, "tree", "circumference")

    for summary in summaries:
        values = [row["circumference"] for row in records if row["tree"] == summary.group]
        assert summary.q1 == pytest.approx(np.percentile(values, 25))
        assert summary.median == pytest.approx(np.percentile(values, 50))
        assert summary.q3 == pytest.approx(np.percentile(values, 75))
        assert summary.std == pytest.approx(np.std(values, ddof=1))


def test_summarize_accepts_dataframe_and_matches_pandas_groupby() -> None:
    frame = pd.DataFrame(load_example("plant_growth"))
    summaries = GroupedSummarizer().summarize(frame, "group", "weight")
    expected = frame.groupby("group", sort=False)["weight"].agg(["mean", "std", "median"])

    for summary in summaries:
        assert summary.mean == pytest.approx(expected.loc[summary.group, "mean"])
        assert summary.std == pytest.approx(expected.loc[summary.group, "std"])
        assert summary.median == pytest.approx(expected.loc[summary.group, "median"])


def test_numeric_strings_are_accepted() -> None:
    table = [{"g": "A", "v": "1.5"}, {"g": "A", "v": " 2.5 "}]

    (summary,) = GroupedSummarizer().summarize(table, "g", "v")

    assert summary.mean == pytest.approx(2.0)


def test_describe_reports_whole_field_under_all_key() -> None:
    summary = GroupedSummarizer().describe(_scenario_table(), "v")

    assert summary.group == "ALL"
    assert summary.count == 4
    assert summary.median == pytest.approx(2.5)
    assert summary.q1 == pytest.approx(1.75)
    assert summary.q3 == pytest.approx(4.75)


def test_empty_table_raises_empty_input() -> None:
    with pytest.raises(EmptyInput):
        GroupedSummarizer().summarize([], "g", "v")
    with pytest.raises(EmptyInput):
        GroupedSummarizer().describe([], "v")


def test_missing_value_field_raises_invalid_field() -> None:
    table = [{"g": "A", "v": 1}, {"g": "A"}]

    with pytest.raises(InvalidField) as excinfo:
        GroupedSummarizer().summarize(table, "g", "v")

    assert excinfo.value.field_name == "v"
    assert excinfo.value.row_index == 1


def test_missing_group_field_raises_invalid_field() -> None:
    table = [{"g": "A", "v": 1}, {"v": 2}]

    with pytest.raises(InvalidField) as excinfo:
        GroupedSummarizer().summarize(table, "g", "v")

    assert excinfo.value.field_name == "g"


@pytest.mark.parametrize("bad_value", ["abc", None, True, float("nan"), [1]])
def test_non_numeric_values_raise(bad_value: object) -> None:
    table = [{"g": "A", "v": 1}, {"g": "A", "v": bad_value}]

    with pytest.raises(NonNumericValue) as excinfo:
        GroupedSummarizer().summarize(table, "g", "v")

    assert excinfo.value.row_index == 1


def test_singleton_group_raises_under_error_policy() -> None:
    summarizer = GroupedSummarizer(settings=SummarySettings(singleton_std="error"))

    with pytest.raises(InsufficientSamples) as excinfo:
        summarizer.summarize(_scenario_table(), "g", "v")

    assert excinfo.value.group == "B"
    assert excinfo.value.count == 1


def test_summarize_is_idempotent_and_leaves_input_untouched() -> None:
    table = _scenario_table()
    snapshot = [dict(row) for row in table]
    summarizer = GroupedSummarizer()

    first = summarizer.summarize(table, "g", "v")
    second = summarizer.summarize(table, "g", "v")

    assert [summary.group for summary in first] == [summary.group for summary in second]
    assert first[0] == second[0]
    assert first[1].count == second[1].count
    assert table == snapshot


def test_huge_finite_values_summarize_without_overflow() -> None:
    table = [{"g": "A", "v": 1e308}, {"g": "A", "v": 1e308}, {"g": "B", "v": 1e200}, {"g": "B", "v": -1e200}]

    group_a, group_b = GroupedSummarizer().summarize(table, "g", "v")

    assert group_a.mean == pytest.approx(1e308)
    assert group_a.std == 0.0
    assert group_b.mean == 0.0
    assert group_b.std == pytest.approx(math.sqrt(2) * 1e200)
    assert group_b.median == 0.0


def test_integer_beyond_float_range_raises_non_numeric_value() -> None:
    with pytest.raises(NonNumericValue) as excinfo:
        GroupedSummarizer().summarize([{"g": "A", "v": 10**400}], "g", "v")

    assert excinfo.value.row_index == 0
