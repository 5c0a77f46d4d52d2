from .models import Currency, Sale, Expense, Ledger
from .errors import ValidationError, PersistenceError, FxUnavailableError

__all__ = [
    "Currency",
    "Sale",
    "Expense",
    "Ledger",
    "ValidationError",
    "PersistenceError",
    "FxUnavailableError",
]
