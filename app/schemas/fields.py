# app/schemas/fields.py
from decimal import Decimal
from typing import Annotated

from pydantic import AfterValidator, BeforeValidator

from app.utils.money import Money, check_percentage


def _parse_amount(value) -> Decimal:
    # Every incoming money value goes through Money.parse so the API and the
    # engine agree on what a well-formed amount is.
    if isinstance(value, Money):
        return value.amount
    if isinstance(value, Decimal):
        value = format(value, "f")
    return Money.parse(str(value)).amount


def _parse_percentage(value) -> Decimal:
    # Same format as amounts (stored as Numeric(5, 2)), then 0..100
    return check_percentage(_parse_amount(value))


def _require_positive(value: Decimal) -> Decimal:
    if value <= 0:
        raise ValueError("Amount must be greater than zero")
    return value


# Non-negative amount with at most two significant decimal places
Amount = Annotated[Decimal, BeforeValidator(_parse_amount)]

# Same, but strictly greater than zero
PositiveAmount = Annotated[Decimal, BeforeValidator(_parse_amount), AfterValidator(_require_positive)]

# 0..100 inclusive, at most two significant decimal places
Percentage = Annotated[Decimal, BeforeValidator(_parse_percentage)]
