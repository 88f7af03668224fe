"""Tolerant number parsing for ledger cells."""

from __future__ import annotations

import logging
import math
from typing import Any


logger = logging.getLogger(__name__)


def to_number(raw: Any) -> float:
    """Coerce a ledger cell to a float, falling back to ``0.0``.

    ``None``, blanks and anything that is not a finite decimal after removing
    thousands separators become zero.
    """

    if raw is None:
        return 0.0
    text = str(raw).replace(",", "").strip()
    if not text or "_" in text:
        return 0.0
    try:
        value = float(text)
    except ValueError:
        logger.debug("Non-numeric value %r coerced to 0", raw)
        return 0.0
    if not math.isfinite(value):
        logger.debug("Non-finite value %r coerced to 0", raw)
        return 0.0
    return value
