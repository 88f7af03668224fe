"""Greedy debt settlement between players with opposite net results."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from pokerledger.config import SETTLEMENT_TOLERANCE
from pokerledger.models import PlayerRecord, Transfer


logger = logging.getLogger(__name__)


@dataclass
class _Balance:
    player: PlayerRecord
    remaining: float


def settle(players: Sequence[PlayerRecord], *, tolerance: Optional[float] = None) -> List[Transfer]:
    """Return transfers that bring every player's net to zero.

    Largest creditors are matched against largest debtors first. The result
    has at most ``creditors + debtors - 1`` transfers; it is deterministic
    but not guaranteed to be the smallest possible set. Callers are expected
    to pass a balanced ledger; leftover imbalance is dropped. A tolerance
    that is not positive raises ``ValueError``.
    """

    threshold = SETTLEMENT_TOLERANCE if tolerance is None else tolerance
    if not threshold > 0:
        raise ValueError(f"tolerance must be positive, got {threshold!r}")
    creditors = [_Balance(player, player.net) for player in players if player.net > 0]
    debtors = [_Balance(player, player.net) for player in players if player.net < 0]
    creditors.sort(key=lambda balance: balance.remaining, reverse=True)
    debtors.sort(key=lambda balance: balance.remaining)

    transfers: List[Transfer] = []
    debtor_idx = 0
    creditor_idx = 0
    while debtor_idx < len(debtors) and creditor_idx < len(creditors):
        debtor = debtors[debtor_idx]
        creditor = creditors[creditor_idx]

        amount = min(creditor.remaining, -debtor.remaining)
        if amount > 0:
            transfers.append(Transfer(debtor=debtor.player, creditor=creditor.player, amount=amount))
            debtor.remaining += amount
            creditor.remaining -= amount

        if abs(debtor.remaining) < threshold:
            debtor_idx += 1
        if abs(creditor.remaining) < threshold:
            creditor_idx += 1

    residual = sum(balance.remaining for balance in creditors[creditor_idx:]) + sum(
        balance.remaining for balance in debtors[debtor_idx:]
    )
    if abs(residual) >= threshold:
        logger.warning("Settlement left %.4f unassigned; ledger is not balanced", residual)
    return transfers
