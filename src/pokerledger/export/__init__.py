"""Ledger export utilities (CSV downloads, CLI tables)."""

from .tables import (
    LedgerExportError,
    format_money,
    format_total_net,
    report_transfers_csv,
    totals_table,
    totals_to_csv,
    transfer_hint,
    transfers_table,
    transfers_to_csv,
)

__all__ = [
    "LedgerExportError",
    "format_money",
    "format_total_net",
    "report_transfers_csv",
    "totals_table",
    "totals_to_csv",
    "transfer_hint",
    "transfers_table",
    "transfers_to_csv",
]
