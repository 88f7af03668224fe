"""Ledger column names and settlement constants."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from typing import Dict, Mapping, Tuple


logger = logging.getLogger(__name__)

SETTLEMENT_TOLERANCE = 1e-4
UNKNOWN_NICKNAME = "Unknown"
NICKNAME_SEPARATOR = ", "

_TOLERANCE_ENV = "POKERLEDGER_TOLERANCE"


@dataclass(frozen=True)
class LedgerColumns:
    """Header names of the three columns every ledger must carry."""

    player_id: str = "player_id"
    nickname: str = "player_nickname"
    net: str = "net"

    def required(self) -> Tuple[str, ...]:
        # Order matches the message shown when headers are missing.
        return (self.nickname, self.player_id, self.net)

    def as_mapping(self) -> Dict[str, str]:
        return {field.name: getattr(self, field.name) for field in fields(self)}

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str] | None) -> "LedgerColumns":
        """Build columns from a ``{"player_id": ..., "nickname": ..., "net": ...}`` mapping.

        Unknown keys raise ``KeyError`` and non-string header names raise
        ``ValueError``; blank values fall back to the defaults.
        """

        if not mapping:
            return DEFAULT_COLUMNS
        if not isinstance(mapping, Mapping):
            raise ValueError("Ledger columns must be a mapping of column keys to header names")
        known = {field.name for field in fields(cls)}
        unknown = sorted(set(mapping) - known)
        if unknown:
            raise KeyError(f"Unknown ledger column keys: {', '.join(unknown)}")
        invalid = sorted(key for key, value in mapping.items() if value is not None and not isinstance(value, str))
        if invalid:
            raise ValueError(f"Ledger column header names must be strings: {', '.join(invalid)}")
        overrides = {key: value.strip() for key, value in mapping.items() if value and value.strip()}
        return cls(**overrides)


DEFAULT_COLUMNS = LedgerColumns()


def settlement_tolerance() -> float:
    """Return the solver tolerance, honouring ``POKERLEDGER_TOLERANCE`` when set."""

    raw = os.getenv(_TOLERANCE_ENV)
    if raw is None:
        return SETTLEMENT_TOLERANCE
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %g", _TOLERANCE_ENV, raw, SETTLEMENT_TOLERANCE)
        return SETTLEMENT_TOLERANCE
    if value <= 0:
        logger.warning("Non-positive %s=%s ignored; using default %g", _TOLERANCE_ENV, raw, SETTLEMENT_TOLERANCE)
        return SETTLEMENT_TOLERANCE
    return value
