"""Quote-aware splitter for comma-separated ledger exports."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from pokerledger.models import Row


logger = logging.getLogger(__name__)

_QUOTE = '"'
_DELIMITER = ","


def parse_tabular(text: str) -> List[Row]:
    """Split ``text`` into rows of string fields.

    Double quotes toggle quoting, ``""`` inside quotes is a literal quote and
    ``\\n``, ``\\r\\n`` or a bare ``\\r`` end a row unless quoted. Malformed
    quoting never raises; the scanner keeps whatever boundaries it found.
    """

    rows: List[Row] = []
    current_row: List[str] = []
    current_value: List[str] = []
    in_quotes = False

    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        next_char = text[index + 1] if index + 1 < length else ""

        if char == _QUOTE:
            if in_quotes and next_char == _QUOTE:
                current_value.append(_QUOTE)
                index += 1
            else:
                in_quotes = not in_quotes
        elif char == _DELIMITER and not in_quotes:
            current_row.append("".join(current_value))
            current_value = []
        elif char in "\r\n" and not in_quotes:
            if char == "\r" and next_char == "\n":
                index += 1
            current_row.append("".join(current_value))
            rows.append(tuple(current_row))
            current_row = []
            current_value = []
        else:
            current_value.append(char)
        index += 1

    if current_value or current_row:
        current_row.append("".join(current_value))
        rows.append(tuple(current_row))

    if in_quotes:
        logger.debug("Input ended inside a quoted field; kept best-effort split")
    return rows


def read_ledger_text(path: Path) -> str:
    # utf-8-sig drops the byte-order mark spreadsheet exports like to prepend.
    return path.read_text(encoding="utf-8-sig")


def load_ledger_csv(path: Path) -> List[Row]:
    return parse_tabular(read_ledger_text(path))
