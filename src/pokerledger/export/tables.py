"""Text and CSV renderings of a processed ledger."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Iterable, Sequence

from pokerledger.models import PlayerRecord, Transfer
from pokerledger.settlement import LedgerReport, round_half_up


TOTALS_HEADER = ("player_nickname", "player_id", "net")
TRANSFERS_HEADER = ("from", "from_id", "to", "to_id", "amount")


class LedgerExportError(RuntimeError):
    """Raised when a ledger cannot be exported in the requested form."""


def format_money(value: float) -> str:
    rounded = round_half_up(value)
    if rounded is None:
        return str(value)
    return f"{rounded:,}"


def format_total_net(report: LedgerReport) -> str:
    if report.rounded_total_net == 0:
        return "Total net: 0 (balanced)"
    return f"Total net: {format_money(report.total_net)} (unbalanced, transfers disabled)"


def transfer_hint(transfers: Sequence[Transfer]) -> str:
    if not transfers:
        return "Everyone is settled already."
    return f"{len(transfers)} transfers required."


def _to_csv(header: Sequence[str], rows: Iterable[Sequence[object]]) -> str:
    buffer = StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(header)
    writer.writerows(rows)
    return buffer.getvalue()


def totals_to_csv(players: Sequence[PlayerRecord]) -> str:
    return _to_csv(
        TOTALS_HEADER,
        ((player.nickname, player.player_id, f"{player.net:.2f}") for player in players),
    )


def transfers_to_csv(transfers: Sequence[Transfer]) -> str:
    return _to_csv(
        TRANSFERS_HEADER,
        (
            (
                transfer.debtor.nickname,
                transfer.debtor.player_id,
                transfer.creditor.nickname,
                transfer.creditor.player_id,
                f"{transfer.amount:.2f}",
            )
            for transfer in transfers
        ),
    )


def report_transfers_csv(report: LedgerReport) -> str:
    """Transfers CSV for a report, refusing ledgers that did not balance."""

    if not report.balanced:
        raise LedgerExportError(report.message or f"Ledger status is {report.status}; no transfers to export")
    return transfers_to_csv(report.transfers)


def render_table(header: Sequence[str], rows: Sequence[Sequence[str]], *, numeric_last: bool = True) -> str:
    """Plain-text table with padded columns, used by the CLI."""

    widths = [len(title) for title in header]
    for row in rows:
        for idx, value in enumerate(row):
            widths[idx] = max(widths[idx], len(value))

    def line(values: Sequence[str]) -> str:
        cells = []
        for idx, value in enumerate(values):
            if numeric_last and idx == len(values) - 1:
                cells.append(value.rjust(widths[idx]))
            else:
                cells.append(value.ljust(widths[idx]))
        return "  ".join(cells).rstrip()

    lines = [line(header), "  ".join("-" * width for width in widths)]
    lines.extend(line(row) for row in rows)
    return "\n".join(lines)


def totals_table(players: Sequence[PlayerRecord]) -> str:
    if not players:
        return "No players found."
    return render_table(
        ("Player", "ID", "Net"),
        [(player.nickname, player.player_id, format_money(player.net)) for player in players],
    )


def transfers_table(transfers: Sequence[Transfer]) -> str:
    if not transfers:
        return "No transfers needed."
    return render_table(
        ("From", "To", "Amount"),
        [
            (transfer.debtor.nickname, transfer.creditor.nickname, format_money(transfer.amount))
            for transfer in transfers
        ],
    )
