import decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import TypeVar

    T = TypeVar("T", decimal.Decimal, float, str, int)


def to_decimal(number: "decimal.Decimal | float | int | str") -> decimal.Decimal:
    if isinstance(number, decimal.Decimal):
        return number
    # Going through str keeps 9.7 as 9.7 instead of its binary expansion.
    return decimal.Decimal(str(number))


def floor_to_ndp(number: "T", dp: int) -> "T":
    with decimal.localcontext() as ctx:
        ctx.rounding = decimal.ROUND_FLOOR
        return type(number)(round(decimal.Decimal(number), dp))


def round_half_up(number: "decimal.Decimal | float | int", dp: int = 0) -> decimal.Decimal:
    return to_decimal(number).quantize(
        decimal.Decimal(1).scaleb(-dp), rounding=decimal.ROUND_HALF_UP
    )


def round_half_ceiling(
    number: "decimal.Decimal | float | int", dp: int = 0
) -> decimal.Decimal:
    """Round to ``dp`` places with halves going towards positive infinity.

    ``round_half_ceiling(Decimal("-2.5"))`` is ``Decimal("-2")`` where
    ``round_half_up`` gives ``Decimal("-3")``.
    """
    unit = decimal.Decimal(1).scaleb(-dp)
    return (to_decimal(number) + unit / 2).quantize(unit, rounding=decimal.ROUND_FLOOR)


def round_to_step(
    number: "decimal.Decimal | float | int",
    steps_per_unit: int,
    rounding: str = decimal.ROUND_FLOOR,
) -> decimal.Decimal:
    """Round ``number`` to a multiple of ``1 / steps_per_unit``.

    ``round_to_step(Decimal("7.3"), 2)`` is ``Decimal("7")`` and
    ``round_to_step(Decimal("7.3"), 2, decimal.ROUND_CEILING)`` is
    ``Decimal("7.5")``.
    """
    scaled = (to_decimal(number) * steps_per_unit).to_integral_value(rounding=rounding)
    return scaled / steps_per_unit
