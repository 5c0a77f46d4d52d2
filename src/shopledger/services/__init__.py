from .ledger_service import LedgerService, load_ledger
from .summary_service import LedgerSummary, summarize
from .fx_service import FxService
from .reporting_service import ReportingService

__all__ = [
    "LedgerService",
    "load_ledger",
    "LedgerSummary",
    "summarize",
    "FxService",
    "ReportingService",
]
