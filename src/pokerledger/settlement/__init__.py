from .service import LedgerReport, LedgerStatus, build_ledger_report, build_ledger_report_from_rows, round_half_up
from .solver import settle

__all__ = [
    "LedgerReport",
    "LedgerStatus",
    "build_ledger_report",
    "build_ledger_report_from_rows",
    "round_half_up",
    "settle",
]
