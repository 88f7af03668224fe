"""Aggregate parsed ledger rows into one record per player."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from pokerledger.config import DEFAULT_COLUMNS, NICKNAME_SEPARATOR, UNKNOWN_NICKNAME, LedgerColumns
from pokerledger.models import PlayerRecord, Row

from .numeric import to_number


logger = logging.getLogger(__name__)


class MissingColumnsError(ValueError):
    """Raised when the ledger header lacks one of the required columns."""

    def __init__(self, missing: Sequence[str], required: Sequence[str]):
        self.missing = tuple(missing)
        self.required = tuple(required)
        super().__init__(f"Missing required columns: {', '.join(self.required)}.")


@dataclass(frozen=True)
class ColumnIndices:
    player_id: int
    nickname: int
    net: int


@dataclass
class _PlayerTally:
    player_id: str
    # dict keys keep insertion order, giving an ordered set of names.
    nicknames: Dict[str, None] = field(default_factory=dict)
    net: float = 0.0

    def finalize(self) -> PlayerRecord:
        names = tuple(name for name in self.nicknames if name)
        return PlayerRecord(
            player_id=self.player_id,
            nickname=format_nicknames(names),
            nicknames=names,
            net=self.net,
        )


def format_nicknames(names: Sequence[str]) -> str:
    present = [name for name in names if name]
    if not present:
        return UNKNOWN_NICKNAME
    return NICKNAME_SEPARATOR.join(present)


def resolve_columns(header: Row, columns: LedgerColumns = DEFAULT_COLUMNS) -> ColumnIndices:
    """Locate the required columns by exact (case-sensitive) header name."""

    names = [value.strip() for value in header]

    def find(name: str) -> Optional[int]:
        return names.index(name) if name in names else None

    player_id = find(columns.player_id)
    nickname = find(columns.nickname)
    net = find(columns.net)
    missing = [
        name
        for name, position in (
            (columns.nickname, nickname),
            (columns.player_id, player_id),
            (columns.net, net),
        )
        if position is None
    ]
    if missing:
        raise MissingColumnsError(missing, columns.required())
    return ColumnIndices(player_id=player_id, nickname=nickname, net=net)


def _cell(row: Row, index: int) -> Optional[str]:
    return row[index] if index < len(row) else None


def _is_blank(row: Row) -> bool:
    return all(not value.strip() for value in row)


def aggregate_rows(rows: Sequence[Row], indices: ColumnIndices) -> List[PlayerRecord]:
    """Sum net results per player id and rank players by net, highest first.

    ``rows`` must not include the header. Blank rows and rows without a
    player id are skipped; unreadable nets count as zero.
    """

    tallies: Dict[str, _PlayerTally] = {}
    for line_number, row in enumerate(rows, start=2):
        if _is_blank(row):
            continue
        player_id = (_cell(row, indices.player_id) or "").strip()
        if not player_id:
            logger.debug("Skipping row %s without a player id", line_number)
            continue
        nickname = (_cell(row, indices.nickname) or "").strip() or UNKNOWN_NICKNAME
        net = to_number(_cell(row, indices.net))

        tally = tallies.get(player_id)
        if tally is None:
            tally = tallies[player_id] = _PlayerTally(player_id=player_id)
        tally.net += net
        tally.nicknames.setdefault(nickname, None)

    records = [tally.finalize() for tally in tallies.values()]
    # sorted() is stable, so equal nets keep first-seen order.
    return sorted(records, key=lambda record: record.net, reverse=True)
