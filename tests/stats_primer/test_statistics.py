from __future__ import annotations

import math

import numpy as np
import pytest

from stats_primer.summary.statistics import coerce_numeric, mean, percentile, sample_std


def test_percentile_interpolates_between_order_statistics() -> None:
    values = [1.0, 2.0, 4.0, 8.0]

    assert percentile(values, 0.0) == 1.0
    assert percentile(values, 0.25) == pytest.approx(1.75)
    assert percentile(values, 0.5) == pytest.approx(3.0)
    assert percentile(values, 0.75) == pytest.approx(5.0)
    assert percentile(values, 1.0) == 8.0


def test_percentile_agrees_with_numpy_default_method() -> None:
    rng = np.random.default_rng(11)
    values = sorted(rng.normal(10, 3, size=37).tolist())

    for fraction in (0.1, 0.25, 0.5, 0.75, 0.9):
        assert percentile(values, fraction) == pytest.approx(np.percentile(values, fraction * 100))


def test_percentile_rejects_out_of_range_fraction() -> None:
    with pytest.raises(ValueError):
        percentile([1.0, 2.0], 1.5)


def test_sample_std_uses_n_minus_one_and_nan_for_single_value() -> None:
    assert sample_std([2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0]) == pytest.approx(2.138089935)
    assert math.isnan(sample_std([3.0]))
    assert mean([1.0, 2.0, 6.0]) == pytest.approx(3.0)


def test_coerce_numeric_accepts_numbers_and_numeric_text() -> None:
    assert coerce_numeric(3) == 3.0
    assert coerce_numeric(np.float64(2.5)) == 2.5
    assert coerce_numeric(np.int64(7)) == 7.0
    assert coerce_numeric("4.25") == 4.25

    for bad in (False, "n/a", None, float("inf")):
        with pytest.raises(ValueError):
            coerce_numeric(bad)


def test_coerce_numeric_rejects_integers_beyond_float_range() -> None:
    with pytest.raises(ValueError):
        coerce_numeric(10**400)


def test_mean_of_values_near_float_max_stays_finite() -> None:
    assert mean([1e308, 1e308]) == pytest.approx(1e308)


def test_sample_std_of_large_opposite_values_does_not_overflow() -> None:
    assert sample_std([1e200, -1e200]) == pytest.approx(math.sqrt(2) * 1e200)
    assert sample_std([4.0, 4.0, 4.0]) == 0.0
