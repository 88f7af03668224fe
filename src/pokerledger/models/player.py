"""Canonical ledger models shared across ingestion and settlement layers."""

from __future__ import annotations

from typing import Tuple

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


Row = Tuple[str, ...]


class PlayerRecord(BaseModel):
    """Aggregated session result for one player identifier."""

    player_id: str = Field(..., min_length=1)
    nickname: str
    nicknames: Tuple[str, ...] = ()
    net: float = 0.0

    model_config = ConfigDict(frozen=True)


class Transfer(BaseModel):
    """Payment from a player who owes money to a player who is owed money."""

    debtor: PlayerRecord
    creditor: PlayerRecord
    amount: float = Field(..., gt=0.0)

    model_config = ConfigDict(frozen=True)
