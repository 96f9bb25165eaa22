from __future__ import annotations

import math
from numbers import Real
from typing import Any, Sequence


def coerce_numeric(value: Any) -> float:
    """Read ``value`` as a finite float or raise ``ValueError``.

    Booleans are rejected even though ``bool`` is a ``Real`` subclass; a column
    of True/False is categorical for summary purposes.
    """
    if isinstance(value, bool):
        raise ValueError(f"Boolean value is not numeric: {value!r}")
    if not isinstance(value, (Real, str)):
        raise ValueError(f"Unsupported value type: {type(value).__name__}")
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except OverflowError as exc:
        raise ValueError(f"Value is out of float range: {value!r}") from exc

    if not math.isfinite(number):
        raise ValueError(f"Value is not finite: {value!r}")
    return number


def mean(values: Sequence[float]) -> float:
    if not values:
        raise ValueError("mean requires at least one value")
    count = len(values)
    return math.fsum(value / count for value in values)


def sample_std(values: Sequence[float]) -> float:
    """Standard deviation with divisor n - 1; NaN for fewer than two values."""
    count = len(values)
    if count < 2:
        return float("nan")
    center = mean(values)
    deviations = [value - center for value in values]
    # Scaled by the largest deviation so squaring stays within float range.
    scale = max(abs(deviation) for deviation in deviations)
    if scale == 0.0:
        return 0.0
    if not math.isfinite(scale):
        return float("inf")
    squared = math.fsum((deviation / scale) ** 2 for deviation in deviations)
    return scale * math.sqrt(squared / (count - 1))


def percentile(sorted_values: Sequence[float], fraction: float) -> float:
    """Linear interpolation between order statistics at rank ``(n - 1) * fraction``."""
    if not sorted_values:
        raise ValueError("percentile requires at least one value")
    if not 0.0 <= fraction <= 1.0:
        raise ValueError(f"fraction must be within [0, 1], got {fraction}")

    position = (len(sorted_values) - 1) * fraction
    lower = math.floor(position)
    upper = math.ceil(position)
    low_value = sorted_values[lower]
    high_value = sorted_values[upper]
    weight = position - lower
    spread = high_value - low_value
    if math.isfinite(spread):
        return low_value + weight * spread
    return (1.0 - weight) * low_value + weight * high_value
