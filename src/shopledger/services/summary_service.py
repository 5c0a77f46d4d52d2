from __future__ import annotations

from dataclasses import dataclass

from shopledger.domain.models import Expense, Ledger, Sale
from shopledger.domain.money import normalize


@dataclass(frozen=True)
class LedgerSummary:
    """Totals in base currency.

    profit = income - total_cost - expense_total
    """

    income: float
    total_cost: float
    expense_total: float

    @property
    def gross_profit(self) -> float:
        return self.income - self.total_cost

    @property
    def profit(self) -> float:
        return self.income - self.total_cost - self.expense_total


def sale_total(sale: Sale, rate: float) -> float:
    return normalize(sale.sell_price, sale.currency, rate) * sale.quantity


def sale_cost(sale: Sale, rate: float) -> float:
    return normalize(sale.buy_price, sale.currency, rate) * sale.quantity


def expense_total(expense: Expense, rate: float) -> float:
    return normalize(expense.amount, expense.currency, rate)


def summarize(ledger: Ledger) -> LedgerSummary:
    rate = ledger.exchange_rate
    return LedgerSummary(
        income=sum((sale_total(s, rate) for s in ledger.sales), 0.0),
        total_cost=sum((sale_cost(s, rate) for s in ledger.sales), 0.0),
        expense_total=sum((expense_total(e, rate) for e in ledger.expenses), 0.0),
    )
