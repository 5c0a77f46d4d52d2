from __future__ import annotations

import json
import logging
import secrets
from datetime import datetime
from typing import Iterable, Optional

from shopledger.domain.errors import ValidationError
from shopledger.domain.models import DEFAULT_RATE, Currency, Expense, Ledger, Sale
from shopledger.domain.money import parse_lenient_number
from shopledger.repositories.contracts import KeyValueStore

log = logging.getLogger("shopledger.ledger")

SALES_KEY = "products"
EXPENSES_KEY = "expenses"
RATE_KEY = "rate"


def new_record_id(now: Optional[datetime] = None) -> str:
    """Millisecond timestamp plus a random tiebreaker; collisions are possible and not checked."""
    now = now or datetime.now()
    return f"{int(now.timestamp() * 1000)}-{secrets.token_hex(3)}"


def clamp_rate(value: object) -> float:
    return max(1.0, parse_lenient_number(value) or 1.0)


def _parse_time(value: object, fallback: datetime) -> datetime:
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return fallback
    return fallback


def _lenient_currency(value: object) -> Currency:
    try:
        return Currency.parse(value)
    except ValidationError:
        return Currency.BASE


def _quantity(value: object) -> int:
    qty = int(parse_lenient_number(value))
    return qty if qty >= 1 else 1


def sale_from_row(row: dict, loaded_at: datetime) -> Sale:
    name = str(row.get("name") or "").strip()
    price = parse_lenient_number(row.get("sellPrice"))
    if not name or price <= 0:
        raise ValidationError("Stored sale needs a name and a sell price > 0.")
    return Sale(
        id=str(row["id"]),
        name=name,
        quantity=_quantity(row.get("qty")),
        buy_price=max(0.0, parse_lenient_number(row.get("buyPrice"))),
        sell_price=price,
        currency=_lenient_currency(row.get("currency")),
        created_at=_parse_time(row.get("time"), loaded_at),
    )


def expense_from_row(row: dict, loaded_at: datetime) -> Expense:
    note = str(row.get("note") or "").strip()
    amount = parse_lenient_number(row.get("amount"))
    if not note or amount <= 0:
        raise ValidationError("Stored expense needs a note and an amount > 0.")
    return Expense(
        id=str(row["id"]),
        note=note,
        amount=amount,
        currency=_lenient_currency(row.get("currency")),
        created_at=_parse_time(row.get("time"), loaded_at),
    )


def _read_json(store: KeyValueStore, key: str):
    raw = store.get(key)
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except ValueError as e:
        log.warning("stored_value_unreadable key=%s error=%s", key, e)
        return None


def _read_rows(store: KeyValueStore, key: str, parse) -> list:
    data = _read_json(store, key)
    if data is None:
        return []
    if not isinstance(data, list):
        log.warning("stored_value_not_a_list key=%s", key)
        return []

    loaded_at = datetime.now()
    out = []
    for row in data:
        if not isinstance(row, dict) or row.get("id") is None:
            log.warning("stored_row_skipped key=%s row=%r", key, row)
            continue
        try:
            out.append(parse(row, loaded_at))
        except ValidationError as e:
            log.warning("stored_row_skipped key=%s id=%s error=%s", key, row.get("id"), e)
    return out


def load_ledger(store: KeyValueStore, default_rate: float = DEFAULT_RATE) -> Ledger:
    sales = _read_rows(store, SALES_KEY, sale_from_row)
    expenses = _read_rows(store, EXPENSES_KEY, expense_from_row)

    stored_rate = _read_json(store, RATE_KEY)
    rate = clamp_rate(stored_rate) if stored_rate is not None else clamp_rate(default_rate)

    log.info("ledger_loaded sales=%s expenses=%s rate=%.2f", len(sales), len(expenses), rate)
    return Ledger(sales=sales, expenses=expenses, exchange_rate=rate)


class LedgerService:
    def __init__(self, store: KeyValueStore, ledger: Ledger):
        self.store = store
        self.ledger = ledger

    @classmethod
    def open(cls, store: KeyValueStore, default_rate: float = DEFAULT_RATE) -> "LedgerService":
        return cls(store, load_ledger(store, default_rate))

    def sales(self) -> list[Sale]:
        return list(self.ledger.sales)

    def expenses(self) -> list[Expense]:
        return list(self.ledger.expenses)

    # ---------- Persistence ----------
    def _write(self, key: str, value) -> None:
        self.store.set(key, json.dumps(value, ensure_ascii=False))

    def _write_rows(self, key: str, records: Iterable) -> None:
        self._write(key, [r.as_row() for r in records])

    # ---------- Sales ----------
    def add_sale(
        self,
        name: str,
        quantity: object = "",
        buy_price: object = "",
        sell_price: object = "",
        currency: object = Currency.BASE,
    ) -> Sale:
        name = (name or "").strip()
        price = parse_lenient_number(sell_price)
        if not name:
            raise ValidationError("Product name is required.")
        if price <= 0:
            raise ValidationError("Sell price must be > 0.")
        cost = parse_lenient_number(buy_price)
        if cost < 0:
            raise ValidationError("Buy price must be >= 0.")
        cur = Currency.parse(currency)

        now = datetime.now()
        sale = Sale(
            id=new_record_id(now),
            name=name,
            quantity=_quantity(quantity),
            buy_price=cost,
            sell_price=price,
            currency=cur,
            created_at=now,
        )
        updated = [sale, *self.ledger.sales]
        self._write_rows(SALES_KEY, updated)
        self.ledger.sales = updated
        log.info("sale_added id=%s qty=%s sell=%.2f currency=%s", sale.id, sale.quantity, sale.sell_price, cur.value)
        return sale

    def remove_sale(self, sale_id: str) -> bool:
        """Remove a sale the user has already confirmed deleting."""
        updated, removed = _without_first(self.ledger.sales, sale_id)
        self._write_rows(SALES_KEY, updated)
        self.ledger.sales = updated
        log.info("sale_removed id=%s found=%s", sale_id, removed)
        return removed

    # ---------- Expenses ----------
    def add_expense(self, note: str, amount: object = "", currency: object = Currency.BASE) -> Expense:
        note = (note or "").strip()
        value = parse_lenient_number(amount)
        if not note:
            raise ValidationError("Expense note is required.")
        if value <= 0:
            raise ValidationError("Amount must be > 0.")
        cur = Currency.parse(currency)

        now = datetime.now()
        expense = Expense(id=new_record_id(now), note=note, amount=value, currency=cur, created_at=now)
        updated = [expense, *self.ledger.expenses]
        self._write_rows(EXPENSES_KEY, updated)
        self.ledger.expenses = updated
        log.info("expense_added id=%s amount=%.2f currency=%s", expense.id, expense.amount, cur.value)
        return expense

    def remove_expense(self, expense_id: str) -> bool:
        """Remove an expense the user has already confirmed deleting."""
        updated, removed = _without_first(self.ledger.expenses, expense_id)
        self._write_rows(EXPENSES_KEY, updated)
        self.ledger.expenses = updated
        log.info("expense_removed id=%s found=%s", expense_id, removed)
        return removed

    # ---------- Rate / display ----------
    def set_exchange_rate(self, value: object) -> float:
        rate = clamp_rate(value)
        self._write(RATE_KEY, rate)
        self.ledger.exchange_rate = rate
        log.info("rate_set rate=%.2f", rate)
        return rate

    def set_display_currency(self, value: object) -> Currency:
        cur = Currency.parse(value)
        self.ledger.display_currency = cur
        return cur


def _without_first(records: list, record_id: str) -> tuple[list, bool]:
    for i, r in enumerate(records):
        if r.id == str(record_id):
            return records[:i] + records[i + 1:], True
    return list(records), False
