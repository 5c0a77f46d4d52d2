from .add_view import AddView
from .sales_view import SalesView
from .expenses_view import ExpensesView

__all__ = ["AddView", "SalesView", "ExpensesView"]
