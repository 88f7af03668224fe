"""Input adapters that turn raw ledger text into player records."""

from .ledger import (
    ColumnIndices,
    MissingColumnsError,
    aggregate_rows,
    format_nicknames,
    resolve_columns,
)
from .numeric import to_number
from .tabular import load_ledger_csv, parse_tabular, read_ledger_text

__all__ = [
    "ColumnIndices",
    "MissingColumnsError",
    "aggregate_rows",
    "format_nicknames",
    "load_ledger_csv",
    "parse_tabular",
    "read_ledger_text",
    "resolve_columns",
    "to_number",
]
