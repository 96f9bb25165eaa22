"""Small built-in datasets used by the walkthrough commands."""

from __future__ import annotations

from stats_primer.core.models import Record

_PLANT_WEIGHTS = {
    "ctrl": [4.17, 5.58, 5.18, 6.11, 4.50, 4.61, 5.17, 4.53, 5.33, 5.14],
    "trt1": [4.81, 4.17, 4.41, 3.59, 5.87, 3.83, 6.03, 4.89, 4.32, 4.69],
    "trt2": [6.31, 5.12, 5.54, 5.50, 5.37, 5.29, 4.92, 6.15, 5.80, 5.26],
}

_ORANGE_AGES = [118, 484, 664, 1004, 1231, 1372, 1582]
_ORANGE_CIRCUMFERENCE = {
    "1": [30, 58, 87, 115, 120, 142, 145],
    "2": [33, 69, 111, 156, 172, 203, 203],
    "3": [30, 51, 75, 108, 115, 139, 140],
    "4": [32, 62, 112, 167, 179, 209, 214],
    "5": [30, 49, 81, 125, 142, 174, 177],
}


def _plant_growth() -> list[Record]:
    return [
        {"weight": weight, "group": group}
        for group, weights in _PLANT_WEIGHTS.items()
        for weight in weights
    ]


def _orange_trees() -> list[Record]:
    return [
        {"tree": tree, "age": age, "circumference": circumference}
        for tree, sizes in _ORANGE_CIRCUMFERENCE.items()
        for age, circumference in zip(_ORANGE_AGES, sizes)
    ]


EXAMPLES = {
    "plant_growth": (_plant_growth, "Dried plant weight under a control and two treatments."),
    "orange_trees": (_orange_trees, "Trunk circumference of five orange trees by age in days."),
}


def list_examples() -> dict[str, str]:
    return {name: description for name, (_, description) in EXAMPLES.items()}


def load_example(name: str) -> list[Record]:
    try:
        factory, _ = EXAMPLES[name]
    except KeyError:
        known = ", ".join(sorted(EXAMPLES))
        raise KeyError(f"Unknown example dataset '{name}'. Available: {known}") from None
    return factory()
