"""Persist and load CLI column profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

from pokerledger.config import LedgerColumns


@dataclass
class ColumnProfile:
    columns: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path) -> "ColumnProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        columns = data.get("columns", {}) if isinstance(data, dict) else None
        if not isinstance(columns, dict):
            raise ValueError(f"Column profile {path} must hold a \"columns\" object")
        return cls(columns=columns)

    def save(self, path: Path) -> None:
        payload = {"columns": self.columns}
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def to_columns(self) -> LedgerColumns:
        return LedgerColumns.from_mapping(self.columns)
