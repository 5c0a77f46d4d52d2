from __future__ import annotations

import logging
import math

import requests

from shopledger.config import LedgerSettings
from shopledger.domain.errors import FxUnavailableError

log = logging.getLogger("shopledger.fx")


class FxService:
    def __init__(self, ledger_service, settings: LedgerSettings | None = None):
        self.ledger = ledger_service
        self.settings = settings or LedgerSettings()

    def _fetch_json(self, url: str) -> dict:
        r = requests.get(url, timeout=self.settings.fx_timeout)
        r.raise_for_status()
        return r.json()

    def _extract_usd_uzs(self, data: dict) -> float:
        # common structure: {"date":"YYYY-MM-DD","usd":{"uzs":12650.3, ...}}
        if "usd" in data and isinstance(data["usd"], dict):
            v = data["usd"].get("uzs")
            if v is not None:
                return self._validate_rate(v)

        raise FxUnavailableError(f"FX API response missing UZS rate. Raw: {data}")

    def _validate_rate(self, value: object) -> float:
        rate = float(value)
        if not math.isfinite(rate) or rate <= 0:
            raise FxUnavailableError(f"FX rate must be a finite number > 0. Received: {rate}")
        return rate

    def fetch_rate(self) -> float:
        last_err = None
        for url in self.settings.fx_urls:
            try:
                data = self._fetch_json(url)
                return self._extract_usd_uzs(data)
            except (requests.RequestException, ValueError, TypeError, FxUnavailableError) as e:
                last_err = e
                log.warning("fx_source_failed url=%s error=%s", url, e)

        raise FxUnavailableError(f"FX fetch failed; keeping the manual rate. Last error: {last_err}")

    def refresh_rate(self) -> float:
        fetched = self.fetch_rate()
        rate = self.ledger.set_exchange_rate(fetched)
        log.info("fx_refreshed fetched=%.4f applied=%.2f", fetched, rate)
        return rate
