import decimal
from decimal import Decimal

import pytest

from utils import (
    floor_to_ndp,
    round_half_ceiling,
    round_half_up,
    round_to_step,
    to_decimal,
)


@pytest.mark.parametrize(
    ("number", "expected"),
    [
        (9.7, Decimal("9.7")),
        (12, Decimal("12")),
        ("11.35", Decimal("11.35")),
        (Decimal("0.1"), Decimal("0.1")),
    ],
)
def test_to_decimal(number, expected):
    assert to_decimal(number) == expected


@pytest.mark.parametrize(
    ("number", "dp", "expected"),
    [
        (Decimal("2.5"), 0, Decimal("3")),
        (Decimal("-2.5"), 0, Decimal("-3")),
        (Decimal("9.75"), 1, Decimal("9.8")),
        (Decimal("9.74"), 1, Decimal("9.7")),
    ],
)
def test_round_half_up(number, dp, expected):
    assert round_half_up(number, dp) == expected


@pytest.mark.parametrize(
    ("number", "dp", "expected"),
    [
        (Decimal("2.5"), 0, Decimal("3")),
        (Decimal("-2.5"), 0, Decimal("-2")),
        (Decimal("-2.51"), 0, Decimal("-3")),
        (Decimal("-0.05"), 1, Decimal("0")),
        (Decimal("-0.15"), 1, Decimal("-0.1")),
        (Decimal("9.75"), 1, Decimal("9.8")),
    ],
)
def test_round_half_ceiling(number, dp, expected):
    assert round_half_ceiling(number, dp) == expected


@pytest.mark.parametrize(
    ("number", "steps", "rounding", "expected"),
    [
        (Decimal("7.3"), 2, decimal.ROUND_FLOOR, Decimal("7")),
        (Decimal("7.3"), 2, decimal.ROUND_CEILING, Decimal("7.5")),
        (Decimal("9.75"), 10, decimal.ROUND_FLOOR, Decimal("9.7")),
        (Decimal("9.75"), 10, decimal.ROUND_CEILING, Decimal("9.8")),
        (Decimal("8"), 10, decimal.ROUND_CEILING, Decimal("8")),
    ],
)
def test_round_to_step(number, steps, rounding, expected):
    assert round_to_step(number, steps, rounding) == expected


def test_floor_to_ndp():
    assert floor_to_ndp(Decimal("12.349"), 2) == Decimal("12.34")
    assert floor_to_ndp(12.349, 2) == 12.34
