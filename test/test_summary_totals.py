from datetime import datetime
from pathlib import Path

from conftest import open_service
from shopledger.domain.models import Currency, Expense, Ledger, Sale
from shopledger.services.summary_service import sale_cost, sale_total, summarize


def _sale(sell, qty=1, buy=0.0, currency=Currency.BASE):
    return Sale(id=f"s-{sell}-{qty}", name="Item", quantity=qty, buy_price=buy, sell_price=sell,
                currency=currency, created_at=datetime(2024, 1, 1))


def test_expense_total_matches_single_rent_expense(tmp_path: Path):
    _store, ledger = open_service(tmp_path)
    ledger.add_expense(note="Rent", amount="200000")

    summary = summarize(ledger.ledger)

    assert summary.expense_total == 200000
    assert summary.income == 0
    assert summary.profit == -200000


def test_foreign_sale_contributes_price_times_rate_times_quantity(tmp_path: Path):
    _store, ledger = open_service(tmp_path)
    ledger.set_exchange_rate(12000)
    ledger.add_sale(name="Cola", sell_price="10", currency=Currency.FOREIGN, quantity="2")

    assert summarize(ledger.ledger).income == 240000


def test_profit_subtracts_cost_of_goods_and_expenses():
    ledger = Ledger(
        sales=[
            _sale(5000, qty=3, buy=3000),
            _sale(2, qty=1, buy=1, currency=Currency.FOREIGN),
        ],
        expenses=[
            Expense(id="e1", note="Rent", amount=1000, currency=Currency.BASE, created_at=datetime(2024, 1, 1)),
            Expense(id="e2", note="Ads", amount=1, currency=Currency.FOREIGN, created_at=datetime(2024, 1, 1)),
        ],
        exchange_rate=10000,
    )

    summary = summarize(ledger)

    assert summary.income == 15000 + 20000
    assert summary.total_cost == 9000 + 10000
    assert summary.expense_total == 1000 + 10000
    assert summary.gross_profit == 16000
    assert summary.profit == 5000


def test_totals_follow_the_current_rate():
    ledger = Ledger(sales=[_sale(1, qty=2, buy=0.5, currency=Currency.FOREIGN)], exchange_rate=100)
    assert summarize(ledger).income == 200

    ledger.exchange_rate = 300
    assert summarize(ledger).income == 600
    assert sale_total(ledger.sales[0], 300) == 600
    assert sale_cost(ledger.sales[0], 300) == 300


def test_empty_ledger_sums_to_zero():
    summary = summarize(Ledger())

    assert summary.income == 0.0
    assert summary.total_cost == 0.0
    assert summary.expense_total == 0.0
    assert summary.profit == 0.0
