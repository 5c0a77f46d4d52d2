from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from shopledger.config import LedgerSettings
from shopledger.repositories.sqlite_repo import SqliteKeyValueStore
from shopledger.services.fx_service import FxService
from shopledger.services.ledger_service import LedgerService
from shopledger.services.reporting_service import ReportingService


@dataclass(frozen=True)
class AppContainer:
    store: SqliteKeyValueStore
    ledger: LedgerService
    fx: FxService
    reporting: ReportingService


def build_container(db_path: Path | str, settings: LedgerSettings | None = None) -> AppContainer:
    settings = settings or LedgerSettings()

    store = SqliteKeyValueStore(db_path)
    store.init_db()

    ledger = LedgerService.open(store, default_rate=settings.default_rate)
    fx = FxService(ledger, settings)
    reporting = ReportingService()

    return AppContainer(store=store, ledger=ledger, fx=fx, reporting=reporting)
