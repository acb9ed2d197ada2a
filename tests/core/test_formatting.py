from datetime import date, datetime
from decimal import Decimal

from src.shared.utils.formatting import (
    format_currency,
    format_date,
    format_date_long,
    format_time,
    month_label,
    payment_status_label,
)


class TestFormatCurrency:
    def test_thousands_separator_without_decimals(self):
        assert format_currency(500000) == "Rp 500.000"
        assert format_currency(Decimal("1250000.00")) == "Rp 1.250.000"
        assert format_currency(0) == "Rp 0"

    def test_half_up_rounding(self):
        assert format_currency(Decimal("999.5")) == "Rp 1.000"
        assert format_currency(Decimal("999.4")) == "Rp 999"

    def test_negative(self):
        assert format_currency(-1000) == "-Rp 1.000"

    def test_missing_amounts(self):
        assert format_currency(None) == "Rp 0"
        assert format_currency(float("nan")) == "Rp 0"

    def test_custom_symbol(self):
        assert format_currency(1500, symbol="IDR") == "IDR 1.500"


class TestFormatDates:
    def test_short_date(self):
        assert format_date(date(2026, 10, 19)) == "19/10/2026"
        assert format_date(datetime(2026, 3, 5, 9, 30)) == "5/3/2026"
        assert format_date(None) == ""

    def test_long_date(self):
        assert format_date_long(date(2026, 10, 19)) == "Senin, 19 Oktober 2026"
        assert format_date_long(date(2026, 10, 25)) == "Minggu, 25 Oktober 2026"

    def test_time(self):
        assert format_time(datetime(2026, 10, 19, 9, 30)) == "09.30"
        assert format_time(None) == ""

    def test_month_label(self):
        assert month_label(2026, 10) == "Okt 2026"
        assert month_label(2027, 1) == "Jan 2027"


class TestPaymentStatusLabel:
    def test_known_statuses(self):
        assert payment_status_label("paid") == "Lunas"
        assert payment_status_label("pending") == "Pending"
        assert payment_status_label("overdue") == "Terlambat"

    def test_unknown_status(self):
        assert payment_status_label(None) == "Unknown"
        assert payment_status_label("refunded") == "Unknown"
