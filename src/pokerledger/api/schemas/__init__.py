"""Pydantic models for API I/O."""

from .ledger import LedgerReportResponse, PlayerTotalResponse, TransferResponse

__all__ = [
    "LedgerReportResponse",
    "PlayerTotalResponse",
    "TransferResponse",
]
