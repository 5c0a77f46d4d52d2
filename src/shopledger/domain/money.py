from __future__ import annotations

import math

from shopledger.domain.models import Currency


def parse_lenient_number(value: object) -> float:
    """Coerce form or stored input to a float; anything unusable becomes 0.0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        num = float(value)
    else:
        text = str(value).strip()
        if not text:
            return 0.0
        try:
            num = float(text)
        except ValueError:
            return 0.0
    if not math.isfinite(num):
        return 0.0
    return num


def normalize(amount: object, currency: Currency, rate: float) -> float:
    num = parse_lenient_number(amount)
    if currency is Currency.BASE:
        return num
    return num * rate


def _round_half_away(num: float) -> int:
    return int(math.copysign(math.floor(abs(num) + 0.5), num))


def format_amount(base_amount: object, display_currency: Currency, rate: float) -> str:
    num = parse_lenient_number(base_amount)
    if display_currency is Currency.FOREIGN:
        rate = max(1.0, parse_lenient_number(rate))
        # + 0.0 drops the sign of a rounded negative zero
        return f"{Currency.FOREIGN.label}{round(num / rate, 2) + 0.0:.2f}"
    return f"{_round_half_away(num):,} {Currency.BASE.label}"
