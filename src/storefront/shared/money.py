"""Money value object for monetary amounts with currency."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Float, String

from storefront.domain import storefront

DEFAULT_CURRENCY = "USD"

VALID_CURRENCIES = frozenset(
    {
        "USD",
        "EUR",
        "GBP",
        "JPY",
        "CAD",
        "AUD",
        "CHF",
        "CNY",
        "INR",
        "MXN",
        "BRL",
        "KRW",
        "SGD",
        "HKD",
        "NOK",
        "SEK",
        "DKK",
        "NZD",
        "ZAR",
        "TWD",
    }
)


@storefront.value_object
class Money:
    """Value object representing a monetary amount with currency.

    Arithmetic and ordering are only defined between amounts of the same
    currency. Use ``Money.of`` to build instances from raw input: it rounds to
    two decimal places and normalises the currency code.
    """

    amount: Float(required=True, min_value=0.0)
    currency: String(max_length=3, default=DEFAULT_CURRENCY)

    @invariant.post
    def currency_must_be_valid_iso_4217(self):
        if self.currency not in VALID_CURRENCIES:
            raise ValidationError({"currency": [f"Unsupported currency: {self.currency}"]})

    @classmethod
    def of(cls, amount, currency=DEFAULT_CURRENCY):
        if amount is None:
            raise ValidationError({"amount": ["Amount is required"]})
        if float(amount) < 0:
            raise ValidationError({"amount": ["Amount cannot be negative"]})
        code = (currency or DEFAULT_CURRENCY).strip().upper()
        return cls(amount=round(float(amount), 2), currency=code)

    @classmethod
    def zero(cls, currency=DEFAULT_CURRENCY):
        return cls.of(0, currency)

    def _require_same_currency(self, other, operation):
        if not isinstance(other, Money):
            raise TypeError(f"Cannot {operation} Money and {type(other).__name__}")
        if self.currency != other.currency:
            raise ValidationError(
                {"currency": [f"Cannot {operation} different currencies: {self.currency} and {other.currency}"]}
            )

    def __add__(self, other):
        self._require_same_currency(other, "add")
        return Money.of(self.amount + other.amount, self.currency)

    def __sub__(self, other):
        self._require_same_currency(other, "subtract")
        result = round(self.amount - other.amount, 2)
        if result < 0:
            raise ValidationError({"amount": ["Subtraction would result in a negative amount"]})
        return Money.of(result, self.currency)

    def __mul__(self, multiplier):
        if not isinstance(multiplier, int | float) or isinstance(multiplier, bool):
            return NotImplemented
        if multiplier < 0:
            raise ValidationError({"amount": ["Multiplier cannot be negative"]})
        return Money.of(self.amount * multiplier, self.currency)

    __rmul__ = __mul__

    def __lt__(self, other):
        self._require_same_currency(other, "compare")
        return self.amount < other.amount

    def __le__(self, other):
        self._require_same_currency(other, "compare")
        return self.amount <= other.amount

    def __gt__(self, other):
        self._require_same_currency(other, "compare")
        return self.amount > other.amount

    def __ge__(self, other):
        self._require_same_currency(other, "compare")
        return self.amount >= other.amount

    def is_zero(self) -> bool:
        return self.amount == 0

    def __str__(self):
        return f"{self.amount:.2f} {self.currency}"
