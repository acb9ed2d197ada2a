from decimal import Decimal

from src.shared.utils.money import amount_to_words, to_amount


class TestToAmount:
    def test_numbers(self):
        assert to_amount(500000) == Decimal("500000")
        assert to_amount("300000.50") == Decimal("300000.50")
        assert to_amount(Decimal("200000")) == Decimal("200000")

    def test_unusable_values_count_as_zero(self):
        assert to_amount(None) == Decimal("0")
        assert to_amount(float("nan")) == Decimal("0")
        assert to_amount(float("inf")) == Decimal("0")
        assert to_amount(Decimal("NaN")) == Decimal("0")
        assert to_amount("abc") == Decimal("0")
        assert to_amount(True) == Decimal("0")


class TestAmountToWords:
    def test_rupiah_suffix(self):
        words = amount_to_words(500000)
        assert words.endswith(" Rupiah")
        assert words.lower().startswith("lima ratus ribu")
