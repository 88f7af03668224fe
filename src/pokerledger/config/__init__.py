"""Configuration helpers for ledger columns and settlement tolerance."""

from .ledger import (
    DEFAULT_COLUMNS,
    NICKNAME_SEPARATOR,
    SETTLEMENT_TOLERANCE,
    UNKNOWN_NICKNAME,
    LedgerColumns,
    settlement_tolerance,
)

__all__ = [
    "DEFAULT_COLUMNS",
    "LedgerColumns",
    "NICKNAME_SEPARATOR",
    "SETTLEMENT_TOLERANCE",
    "UNKNOWN_NICKNAME",
    "settlement_tolerance",
]
