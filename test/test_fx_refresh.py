import json
from pathlib import Path

import pytest
import requests

from conftest import open_service
from shopledger.config import LedgerSettings
from shopledger.domain.errors import FxUnavailableError
from shopledger.services.fx_service import FxService


def _fx(ledger):
    return FxService(ledger, LedgerSettings(fx_urls=("https://primary.test", "https://fallback.test")))


def test_refresh_rate_applies_fetched_rate(tmp_path: Path):
    store, ledger = open_service(tmp_path)
    fx = _fx(ledger)
    fx._fetch_json = lambda _url: {"date": "2024-05-01", "usd": {"uzs": 12650.5}}  # type: ignore[attr-defined]

    assert fx.refresh_rate() == 12650.5
    assert ledger.ledger.exchange_rate == 12650.5
    assert json.loads(store.get("rate")) == 12650.5


def test_refresh_rate_uses_fallback_source(tmp_path: Path):
    _store, ledger = open_service(tmp_path)
    fx = _fx(ledger)
    calls = []

    def fetch(url: str):
        calls.append(url)
        if url == "https://primary.test":
            raise requests.RequestException("network down")
        return {"usd": {"uzs": "12800"}}

    fx._fetch_json = fetch  # type: ignore[attr-defined]

    assert fx.refresh_rate() == 12800.0
    assert calls == ["https://primary.test", "https://fallback.test"]


def test_refresh_rate_keeps_manual_rate_when_all_sources_fail(tmp_path: Path):
    _store, ledger = open_service(tmp_path)
    ledger.set_exchange_rate(12345)
    fx = _fx(ledger)

    def fail(_url: str):
        raise requests.RequestException("network down")

    fx._fetch_json = fail  # type: ignore[attr-defined]

    with pytest.raises(FxUnavailableError, match="network down"):
        fx.refresh_rate()
    assert ledger.ledger.exchange_rate == 12345.0


@pytest.mark.parametrize(
    "payload",
    [
        {"usd": {"eur": 0.9}},
        {"usd": {"uzs": 0}},
        {"usd": {"uzs": "n/a"}},
        json.loads('{"usd": {"uzs": NaN}}'),
        json.loads('{"usd": {"uzs": Infinity}}'),
        json.loads('{"usd": {"uzs": -Infinity}}'),
    ],
)
def test_refresh_rate_rejects_malformed_payloads(tmp_path: Path, payload):
    _store, ledger = open_service(tmp_path)
    fx = _fx(ledger)
    fx._fetch_json = lambda _url: payload  # type: ignore[attr-defined]

    with pytest.raises(FxUnavailableError):
        fx.refresh_rate()
    assert ledger.ledger.exchange_rate == 12700.0
