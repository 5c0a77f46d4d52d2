import math

import pytest

from shopledger.domain.errors import ValidationError
from shopledger.domain.models import Currency
from shopledger.domain.money import format_amount, normalize, parse_lenient_number


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("5000", 5000.0),
        (" 12.5 ", 12.5),
        (7, 7.0),
        ("", 0.0),
        ("   ", 0.0),
        (None, 0.0),
        ("abc", 0.0),
        (True, 0.0),
        ("nan", 0.0),
        (math.inf, 0.0),
    ],
)
def test_parse_lenient_number(raw, expected):
    assert parse_lenient_number(raw) == expected


def test_normalize_base_is_identity_and_foreign_multiplies_by_rate():
    assert normalize(150.0, Currency.BASE, 12700) == 150.0
    assert normalize(10, Currency.FOREIGN, 12000) == 120000.0
    assert normalize("oops", Currency.FOREIGN, 12000) == 0.0


def test_format_amount_base_groups_thousands_and_rounds():
    assert format_amount(1234567, Currency.BASE, 12700) == "1,234,567 so'm"
    assert format_amount(2.5, Currency.BASE, 12700) == "3 so'm"
    assert format_amount(-2.5, Currency.BASE, 12700) == "-3 so'm"
    assert format_amount("not a number", Currency.BASE, 12700) == "0 so'm"


def test_format_amount_foreign_divides_by_rate():
    assert format_amount(127000, Currency.FOREIGN, 12700) == "$10.00"
    assert format_amount(-38100, Currency.FOREIGN, 12700) == "$-3.00"
    assert format_amount(-1, Currency.FOREIGN, 12700) == "$0.00"
    assert format_amount(100, Currency.FOREIGN, 0) == "$100.00"


def test_currency_parse_accepts_codes_and_labels():
    assert Currency.parse("usd") is Currency.FOREIGN
    assert Currency.parse("$") is Currency.FOREIGN
    assert Currency.parse("so'm") is Currency.BASE
    assert Currency.parse("") is Currency.BASE
    assert Currency.parse(None) is Currency.BASE
    with pytest.raises(ValidationError, match="Unknown currency"):
        Currency.parse("EUR")
