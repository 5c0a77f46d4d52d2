from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os
import sys

from shopledger.domain.models import DEFAULT_RATE
from shopledger.domain.money import parse_lenient_number


FX_PRIMARY_URL = "https://cdn.jsdelivr.net/npm/@fawazahmed0/currency-api@latest/v1/currencies/usd.json"
FX_FALLBACK_URL = "https://latest.currency-api.pages.dev/v1/currencies/usd.json"


@dataclass(frozen=True)
class AppPaths:
    base_dir: Path
    db_path: Path
    logs_dir: Path


@dataclass(frozen=True)
class LedgerSettings:
    default_rate: float = DEFAULT_RATE
    fx_urls: tuple[str, ...] = (FX_PRIMARY_URL, FX_FALLBACK_URL)
    fx_timeout: float = 10.0


def _windows_appdata() -> Path:
    return Path(os.environ.get("APPDATA", str(Path.home() / "AppData" / "Roaming")))


def _mac_app_support() -> Path:
    return Path.home() / "Library" / "Application Support"


def get_app_paths(app_name: str = "ShopLedger") -> AppPaths:
    if sys.platform.startswith("win"):
        base = _windows_appdata() / app_name
    elif sys.platform == "darwin":
        base = _mac_app_support() / app_name
    else:
        base = Path.home() / f".{app_name.lower()}"

    logs = base / "logs"
    db = base / "ledger.db"

    base.mkdir(parents=True, exist_ok=True)
    logs.mkdir(parents=True, exist_ok=True)

    return AppPaths(base_dir=base, db_path=db, logs_dir=logs)


def load_settings(env: dict | None = None) -> LedgerSettings:
    env = os.environ if env is None else env
    defaults = LedgerSettings()

    rate = defaults.default_rate
    raw_rate = env.get("SHOPLEDGER_DEFAULT_RATE")
    if raw_rate:
        rate = max(1.0, parse_lenient_number(raw_rate) or 1.0)

    urls = defaults.fx_urls
    custom_url = (env.get("SHOPLEDGER_FX_URL") or "").strip()
    if custom_url:
        urls = (custom_url, *urls[1:])

    return LedgerSettings(default_rate=rate, fx_urls=urls, fx_timeout=defaults.fx_timeout)
