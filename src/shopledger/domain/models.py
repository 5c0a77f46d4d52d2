from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List

from shopledger.domain.errors import ValidationError

DEFAULT_RATE = 12700.0


class Currency(str, Enum):
    BASE = "UZS"
    FOREIGN = "USD"

    @property
    def label(self) -> str:
        return "so'm" if self is Currency.BASE else "$"

    @classmethod
    def parse(cls, value: object) -> "Currency":
        """Accept a Currency, its code or its display label; blank means BASE."""
        if isinstance(value, cls):
            return value
        text = "" if value is None else str(value).strip()
        if not text:
            return cls.BASE
        for c in cls:
            if text.upper() == c.value or text == c.label:
                return c
        raise ValidationError(f"Unknown currency: {value}")


@dataclass(frozen=True)
class Sale:
    id: str
    name: str
    quantity: int
    buy_price: float
    sell_price: float
    currency: Currency
    created_at: datetime

    def as_row(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "qty": self.quantity,
            "buyPrice": self.buy_price,
            "sellPrice": self.sell_price,
            "currency": self.currency.value,
            "time": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class Expense:
    id: str
    note: str
    amount: float
    currency: Currency
    created_at: datetime

    def as_row(self) -> dict:
        return {
            "id": self.id,
            "note": self.note,
            "amount": self.amount,
            "currency": self.currency.value,
            "time": self.created_at.isoformat(),
        }


@dataclass
class Ledger:
    """Session state: both record lists are kept newest first."""

    sales: List[Sale] = field(default_factory=list)
    expenses: List[Expense] = field(default_factory=list)
    exchange_rate: float = DEFAULT_RATE
    display_currency: Currency = Currency.BASE
