"""End-to-end ledger processing: parse, aggregate, check balance, settle."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Literal, Optional, Sequence, Tuple

from pokerledger.config import DEFAULT_COLUMNS, LedgerColumns, settlement_tolerance
from pokerledger.ingest import MissingColumnsError, aggregate_rows, parse_tabular, resolve_columns
from pokerledger.models import PlayerRecord, Row, Transfer

from .solver import settle


logger = logging.getLogger(__name__)

LedgerStatus = Literal["balanced", "unbalanced", "empty", "missing_columns"]

EMPTY_MESSAGE = "No data rows found in the CSV."
UNBALANCED_MESSAGE = "Total net is not zero; check the ledger for data-entry errors before settling."


def round_half_up(value: float) -> Optional[int]:
    """Round half up; ``None`` when ``value`` is infinite or NaN."""

    if not math.isfinite(value):
        return None
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class LedgerReport:
    status: LedgerStatus
    players: Tuple[PlayerRecord, ...] = ()
    transfers: Tuple[Transfer, ...] = ()
    total_net: float = 0.0
    rounded_total_net: Optional[int] = 0
    row_count: int = 0
    player_count: int = 0
    missing_columns: Tuple[str, ...] = field(default_factory=tuple)
    message: Optional[str] = None

    @property
    def balanced(self) -> bool:
        return self.status == "balanced"

    @property
    def summary(self) -> str:
        return f"{self.player_count} players, {self.row_count} rows"


def build_ledger_report_from_rows(
    rows: Sequence[Row],
    *,
    columns: LedgerColumns = DEFAULT_COLUMNS,
    tolerance: Optional[float] = None,
) -> LedgerReport:
    """Aggregate ``rows`` (header first) and settle them when the ledger balances."""

    if len(rows) <= 1:
        logger.info("Ledger has no data rows")
        return LedgerReport(status="empty", message=EMPTY_MESSAGE)

    header, data_rows = rows[0], rows[1:]
    try:
        indices = resolve_columns(header, columns)
    except MissingColumnsError as exc:
        logger.info("Ledger header is missing %s", ", ".join(exc.missing))
        return LedgerReport(
            status="missing_columns",
            row_count=len(data_rows),
            missing_columns=exc.missing,
            message=str(exc),
        )

    players = aggregate_rows(data_rows, indices)
    total_net = sum(player.net for player in players)
    rounded_total = round_half_up(total_net)

    transfers: List[Transfer] = []
    if rounded_total == 0:
        status: LedgerStatus = "balanced"
        message = None
        transfers = settle(players, tolerance=settlement_tolerance() if tolerance is None else tolerance)
    else:
        status = "unbalanced"
        message = UNBALANCED_MESSAGE
        logger.warning("Ledger total net is %s; transfers disabled", total_net if rounded_total is None else rounded_total)

    logger.info(
        "Processed %s rows into %s players and %s transfers (total net %.2f)",
        len(data_rows),
        len(players),
        len(transfers),
        total_net,
    )
    return LedgerReport(
        status=status,
        players=tuple(players),
        transfers=tuple(transfers),
        total_net=total_net,
        rounded_total_net=rounded_total,
        row_count=len(data_rows),
        player_count=len(players),
        message=message,
    )


def build_ledger_report(
    text: str,
    *,
    columns: LedgerColumns = DEFAULT_COLUMNS,
    tolerance: Optional[float] = None,
) -> LedgerReport:
    return build_ledger_report_from_rows(parse_tabular(text), columns=columns, tolerance=tolerance)
