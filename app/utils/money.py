# app/utils/money.py
"""
Fixed-point currency values.

Every amount in the engine is a ``Money`` wrapping a ``Decimal``. Values keep
full precision through the arithmetic and are rounded to cents only when
rendered with ``to_display()``.
"""
import re
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Iterable, Union

from app.core.exceptions import InvalidAmount

CENT = Decimal("0.01")
HUNDRED = Decimal(100)

# Stored amounts are Numeric(12, 2)
MAX_INTEGER_DIGITS = 10

_AMOUNT_RE = re.compile(r"^([0-9]+)(\.[0-9]+)?$")

Number = Union["Money", Decimal, int, str]


def to_decimal(value: Number) -> Decimal:
    """Coerce an exact numeric value to ``Decimal``. Floats are refused."""
    if isinstance(value, Money):
        return value.amount
    if isinstance(value, bool) or isinstance(value, float):
        raise InvalidAmount(f"Refusing inexact value {value!r}; pass a str or Decimal")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(value)
        except (InvalidOperation, TypeError, ValueError):
            raise InvalidAmount(f"Not a number: {value!r}")
    if not result.is_finite():
        raise InvalidAmount(f"Not a finite number: {value!r}")
    return result


def check_percentage(value: Number) -> Decimal:
    """Return ``value`` as a Decimal, raising ``InvalidAmount`` outside 0..100."""
    pct = to_decimal(value)
    if pct < 0 or pct > HUNDRED:
        raise InvalidAmount(f"Percentage must be between 0 and 100, got {pct}")
    return pct


@dataclass(frozen=True, order=True)
class Money:
    amount: Decimal

    def __post_init__(self):
        # Normalise ints/strings handed to the constructor directly
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", to_decimal(self.amount))

    # ── construction ────────────────────────────────────────────────────────
    @classmethod
    def parse(cls, text: str) -> "Money":
        """
        Parse user input such as ``"1234.5"``.

        Accepts non-negative plain decimals with at most two significant
        fractional digits (``"1.500"`` is fine, ``"1.505"`` is not) and at
        most ``MAX_INTEGER_DIGITS`` digits before the point.
        """
        if not isinstance(text, str):
            raise InvalidAmount(f"Expected a string amount, got {type(text).__name__}")
        cleaned = text.strip()
        match = _AMOUNT_RE.match(cleaned)
        if not match:
            raise InvalidAmount(f"Invalid amount: {text!r}")
        if len(match.group(1).lstrip("0")) > MAX_INTEGER_DIGITS:
            raise InvalidAmount(f"Amount is too large: {text!r}")
        value = Decimal(cleaned)
        try:
            rounded = value.quantize(CENT)
        except InvalidOperation:
            raise InvalidAmount(f"Invalid amount: {text!r}") from None
        if value != rounded:
            raise InvalidAmount(f"Amount has more than two decimal places: {text!r}")
        return cls(value)

    @classmethod
    def of(cls, value: Number) -> "Money":
        if isinstance(value, Money):
            return value
        return cls(to_decimal(value))

    @classmethod
    def zero(cls) -> "Money":
        return cls(Decimal(0))

    @classmethod
    def sum(cls, values: Iterable[Number]) -> "Money":
        total = Decimal(0)
        for value in values:
            total += to_decimal(value)
        return cls(total)

    # ── arithmetic ──────────────────────────────────────────────────────────
    def add(self, other: Number) -> "Money":
        return Money(self.amount + to_decimal(other))

    def subtract(self, other: Number) -> "Money":
        # No clamping: negative results represent overage / deficit
        return Money(self.amount - to_decimal(other))

    def multiply_by_percentage(self, percentage: Number) -> "Money":
        pct = check_percentage(percentage)
        return Money(self.amount * pct / HUNDRED)

    def __add__(self, other):
        if not isinstance(other, (Money, Decimal, int)):
            return NotImplemented
        return self.add(other)

    __radd__ = __add__

    def __sub__(self, other):
        if not isinstance(other, (Money, Decimal, int)):
            return NotImplemented
        return self.subtract(other)

    def __neg__(self) -> "Money":
        return Money(-self.amount)

    # ── queries ─────────────────────────────────────────────────────────────
    def is_zero(self) -> bool:
        return self.amount == 0

    def is_negative(self) -> bool:
        return self.amount < 0

    def is_positive(self) -> bool:
        return self.amount > 0

    def floor_zero(self) -> "Money":
        """``max(0, self)``."""
        return self if self.amount > 0 else Money.zero()

    # ── rendering ───────────────────────────────────────────────────────────
    def to_display(self) -> str:
        rounded = self.amount.quantize(CENT, rounding=ROUND_HALF_UP)
        if rounded == 0:
            rounded = abs(rounded)  # avoid "-0.00"
        return f"{rounded:f}"

    def __str__(self) -> str:
        return self.to_display()

    def __repr__(self) -> str:
        return f"Money('{self.amount}')"
