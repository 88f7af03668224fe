"""Domain models."""

from .player import PlayerRecord, Row, Transfer

__all__ = ["PlayerRecord", "Row", "Transfer"]
