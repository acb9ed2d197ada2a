from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Union

from num2words import num2words

ZERO = Decimal("0")


def to_amount(value: Any) -> Decimal:
    """
    Coerce a stored amount to Decimal; None, NaN, infinities and garbage become 0.

    Aggregations call this on every row so one bad amount never breaks a report.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value))
        except (InvalidOperation, ValueError):
            return ZERO
    if not amount.is_finite():
        return ZERO
    return amount


def amount_to_words(amount: Union[Decimal, float, int]) -> str:
    """Spell out a rupiah amount (e.g. 500000 -> 'Lima Ratus Ribu Rupiah')."""
    amount_int = int(to_amount(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    words = num2words(amount_int, lang="id").title()
    return f"{words} Rupiah"
