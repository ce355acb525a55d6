"""Tests for the Money value object."""

import pytest
from protean.exceptions import ValidationError

from storefront.shared.money import Money


class TestMoneyConstruction:
    def test_of_rounds_to_two_decimals(self):
        money = Money.of(10.006)
        assert money.amount == 10.01
        assert money.currency == "USD"

    def test_of_normalises_currency_code(self):
        assert Money.of(5, " eur ").currency == "EUR"

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Money.of(-1)
        assert "amount" in exc.value.messages

    def test_missing_amount_rejected(self):
        with pytest.raises(ValidationError):
            Money.of(None)

    def test_unsupported_currency_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Money.of(10, "XYZ")
        assert "currency" in exc.value.messages

    def test_zero(self):
        assert Money.zero("GBP").is_zero()
        assert Money.zero("GBP").currency == "GBP"


class TestMoneyArithmetic:
    def test_add_same_currency(self):
        assert (Money.of(10.10) + Money.of(0.20)).amount == 10.30

    def test_add_different_currencies_rejected(self):
        with pytest.raises(ValidationError):
            Money.of(10, "USD") + Money.of(10, "EUR")

    def test_subtract(self):
        assert (Money.of(10) - Money.of(2.5)).amount == 7.5

    def test_subtract_below_zero_rejected(self):
        with pytest.raises(ValidationError):
            Money.of(1) - Money.of(2)

    def test_multiply_by_quantity(self):
        assert (Money.of(19.99) * 3).amount == 59.97
        assert (3 * Money.of(19.99)).amount == 59.97

    def test_negative_multiplier_rejected(self):
        with pytest.raises(ValidationError):
            Money.of(5) * -1

    def test_comparison(self):
        assert Money.of(5) < Money.of(6)
        assert Money.of(6) >= Money.of(6)

    def test_comparison_across_currencies_rejected(self):
        with pytest.raises(ValidationError):
            Money.of(5, "USD") < Money.of(6, "EUR")

    def test_adding_non_money_raises_type_error(self):
        with pytest.raises(TypeError):
            Money.of(5) + 5

    def test_str(self):
        assert str(Money.of(3.5, "EUR")) == "3.50 EUR"
