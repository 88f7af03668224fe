"""Command-line interface for settling a poker session ledger."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Sequence

from pokerledger.config import LedgerColumns
from pokerledger.config_loader import ColumnProfile
from pokerledger.export import (
    format_total_net,
    report_transfers_csv,
    totals_table,
    totals_to_csv,
    transfer_hint,
    transfers_table,
)
from pokerledger.ingest import read_ledger_text
from pokerledger.settlement import LedgerReport, build_ledger_report


EXIT_UNBALANCED = 1
EXIT_INVALID_INPUT = 2


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Aggregate a poker ledger and compute settlement transfers")
    parser.add_argument("ledger", type=Path, help="Path to ledger CSV")
    parser.add_argument("--player-id-column", default=None, help="Header of the player id column")
    parser.add_argument("--nickname-column", default=None, help="Header of the player nickname column")
    parser.add_argument("--net-column", default=None, help="Header of the net result column")
    parser.add_argument("--load-profile", type=Path, help="Load column profile JSON", default=None)
    parser.add_argument("--save-profile", type=Path, help="Save column profile JSON", default=None)
    parser.add_argument("--totals-out", type=Path, default=None, help="Write per-player totals CSV")
    parser.add_argument("--transfers-out", type=Path, default=None, help="Write settlement transfers CSV")
    parser.add_argument("--json", dest="json_out", type=Path, default=None, help="Write full report JSON")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _column_overrides(args: argparse.Namespace) -> dict[str, str]:
    overrides = {
        "player_id": args.player_id_column,
        "nickname": args.nickname_column,
        "net": args.net_column,
    }
    return {key: value for key, value in overrides.items() if value}


def report_to_payload(report: LedgerReport) -> dict:
    return {
        "status": report.status,
        "message": report.message,
        "total_net": report.total_net,
        "rounded_total_net": report.rounded_total_net,
        "row_count": report.row_count,
        "player_count": report.player_count,
        "missing_columns": list(report.missing_columns),
        "players": [player.model_dump(mode="json") for player in report.players],
        "transfers": [
            {
                "from": transfer.debtor.player_id,
                "to": transfer.creditor.player_id,
                "amount": transfer.amount,
            }
            for transfer in report.transfers
        ],
    }


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    column_mapping = _column_overrides(args)
    try:
        if args.load_profile:
            profile = ColumnProfile.load(args.load_profile)
            column_mapping = profile.columns | column_mapping
        columns = LedgerColumns.from_mapping(column_mapping)
    except (KeyError, ValueError) as exc:
        print(f"Invalid column profile: {exc.args[0]}")
        return EXIT_INVALID_INPUT

    if args.save_profile:
        ColumnProfile(columns.as_mapping()).save(args.save_profile)
        print(f"Saved column profile to {args.save_profile}")

    report = build_ledger_report(read_ledger_text(args.ledger), columns=columns)

    if args.json_out:
        args.json_out.write_text(json.dumps(report_to_payload(report), indent=2), encoding="utf-8")
        print(f"Wrote report to {args.json_out}")

    if report.status in {"empty", "missing_columns"}:
        print(report.message)
        return EXIT_INVALID_INPUT

    print(totals_table(report.players))
    print()
    if report.balanced:
        print(transfers_table(report.transfers))
        print(transfer_hint(report.transfers))
    else:
        print("Transfers disabled. Fix the CSV total net first.")
    print()
    print(report.summary)
    print(format_total_net(report))

    if args.totals_out:
        args.totals_out.write_text(totals_to_csv(report.players), encoding="utf-8")
        print(f"Wrote totals to {args.totals_out}")
    if args.transfers_out and report.balanced:
        args.transfers_out.write_text(report_transfers_csv(report), encoding="utf-8")
        print(f"Wrote transfers to {args.transfers_out}")

    return 0 if report.balanced else EXIT_UNBALANCED


if __name__ == "__main__":
    raise SystemExit(main())
