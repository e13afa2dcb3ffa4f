# app/core/exceptions.py
"""
Error kinds raised by the budgeting engine and the persistence layer.

The HTTP layer maps each kind to a status code in app/main.py.
"""


class BudgetError(Exception):
    """Base class for every budgeting error."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class InvalidAmount(BudgetError, ValueError):
    """Malformed or out-of-range numeric input."""


class NotApplicable(BudgetError, ArithmeticError):
    """A ratio or projection is undefined because its denominator is zero."""


DivisionByZero = NotApplicable


class NotFound(BudgetError, LookupError):
    """A referenced entity does not exist (or is not visible to the user)."""


class ConcurrencyConflict(BudgetError):
    """A conditional write lost the race; the caller should retry."""
