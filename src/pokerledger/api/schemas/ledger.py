from __future__ import annotations

import math
from typing import List, Literal

from pydantic import BaseModel, Field

from pokerledger.models import PlayerRecord, Transfer
from pokerledger.settlement import LedgerReport


class PlayerTotalResponse(BaseModel):
    player_id: str
    nickname: str
    nicknames: List[str]
    net: float | None

    @classmethod
    def from_record(cls, record: PlayerRecord) -> "PlayerTotalResponse":
        return cls(
            player_id=record.player_id,
            nickname=record.nickname,
            nicknames=list(record.nicknames),
            net=record.net if math.isfinite(record.net) else None,
        )


class TransferResponse(BaseModel):
    from_player_id: str
    from_nickname: str
    to_player_id: str
    to_nickname: str
    amount: float = Field(..., gt=0.0)

    @classmethod
    def from_transfer(cls, transfer: Transfer) -> "TransferResponse":
        return cls(
            from_player_id=transfer.debtor.player_id,
            from_nickname=transfer.debtor.nickname,
            to_player_id=transfer.creditor.player_id,
            to_nickname=transfer.creditor.nickname,
            amount=transfer.amount,
        )


class LedgerReportResponse(BaseModel):
    status: Literal["balanced", "unbalanced", "empty", "missing_columns"]
    balanced: bool
    message: str | None = None
    total_net: float | None
    rounded_total_net: int | None
    row_count: int
    player_count: int
    players: List[PlayerTotalResponse] = Field(default_factory=list)
    transfers: List[TransferResponse] = Field(default_factory=list)

    @classmethod
    def from_report(cls, report: LedgerReport) -> "LedgerReportResponse":
        return cls(
            status=report.status,
            balanced=report.balanced,
            message=report.message,
            total_net=report.total_net if math.isfinite(report.total_net) else None,
            rounded_total_net=report.rounded_total_net,
            row_count=report.row_count,
            player_count=report.player_count,
            players=[PlayerTotalResponse.from_record(player) for player in report.players],
            transfers=[TransferResponse.from_transfer(transfer) for transfer in report.transfers],
        )
