"""Poker session ledger aggregation and settlement."""

from pokerledger.models import PlayerRecord, Transfer
from pokerledger.settlement import LedgerReport, build_ledger_report, settle

__all__ = ["LedgerReport", "PlayerRecord", "Transfer", "build_ledger_report", "settle"]
