import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def open_service(tmp_path: Path, name: str = "ledger.db"):
    from shopledger.repositories.sqlite_repo import SqliteKeyValueStore
    from shopledger.services.ledger_service import LedgerService

    store = SqliteKeyValueStore(tmp_path / name)
    store.init_db()
    return store, LedgerService.open(store)
