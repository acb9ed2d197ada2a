"""Display formatting for money and dates (id-ID conventions, rupiah without decimals).

Every value that reaches a user (API labels, CSV/XLSX/HTML/PDF exports) goes
through these helpers so that all surfaces render amounts and dates the same way.
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from src.core.config import settings
from src.shared.utils.money import to_amount

MONTH_NAMES = (
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
)
MONTH_LABELS = ("Jan", "Feb", "Mar", "Apr", "Mei", "Jun", "Jul", "Agu", "Sep", "Okt", "Nov", "Des")
WEEKDAY_NAMES = ("Senin", "Selasa", "Rabu", "Kamis", "Jumat", "Sabtu", "Minggu")

PAYMENT_STATUS_LABELS = {
    "paid": "Lunas",
    "pending": "Pending",
    "overdue": "Terlambat",
}


def _group_thousands(value: int) -> str:
    # id-ID uses "." as thousands separator
    return f"{value:,}".replace(",", ".")


def format_currency(value: Any, symbol: str | None = None) -> str:
    """
    Render an amount in rupiah with zero fractional digits.

    Examples:
        >>> format_currency(500000)
        'Rp 500.000'
        >>> format_currency(None)
        'Rp 0'
    """
    symbol = symbol if symbol is not None else settings.currency_symbol
    amount = to_amount(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    if amount < 0:
        return f"-{symbol} {_group_thousands(abs(int(amount)))}"
    return f"{symbol} {_group_thousands(int(amount))}"


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def format_date(value: date | datetime | None) -> str:
    """Short id-ID date: 19/10/2026."""
    if value is None:
        return ""
    d = _as_date(value)
    return f"{d.day}/{d.month}/{d.year}"


def format_date_long(value: date | datetime | None) -> str:
    """Long id-ID date with weekday: Senin, 19 Oktober 2026."""
    if value is None:
        return ""
    d = _as_date(value)
    return f"{WEEKDAY_NAMES[d.weekday()]}, {d.day} {MONTH_NAMES[d.month - 1]} {d.year}"


def format_time(value: datetime | None) -> str:
    """Clock time as id-ID renders it: 09.30."""
    if value is None:
        return ""
    return f"{value.hour:02d}.{value.minute:02d}"


def month_label(year: int, month: int) -> str:
    return f"{MONTH_LABELS[month - 1]} {year}"


def payment_status_label(status: str | None) -> str:
    if not status:
        return "Unknown"
    return PAYMENT_STATUS_LABELS.get(status, "Unknown")
