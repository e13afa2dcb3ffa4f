# app/models/__init__.py
# Import every model so relationship() string targets resolve no matter
# which module is imported first.
from .user import User  # noqa: F401
from .budget import Budget  # noqa: F401
from .category import Category  # noqa: F401
from .transaction import Transaction  # noqa: F401
from .goal import Goal  # noqa: F401

__all__ = ["User", "Budget", "Category", "Transaction", "Goal"]
