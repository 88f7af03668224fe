"""Lightweight REST client for the pokerledger API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def build_columns(raw: str) -> str | None:
    if not raw:
        return None
    try:
        json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid columns JSON: {exc}") from exc
    return raw


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the pokerledger REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("ledger", type=Path, help="Ledger CSV")
    parser.add_argument("--columns", default="", help="JSON mapping of ledger column headers")
    parser.add_argument("--transfers-csv", type=Path, help="Download transfers CSV to this path")
    args = parser.parse_args()

    columns = build_columns(args.columns)
    data = {"columns": columns} if columns else {}
    files = {"ledger": (args.ledger.name, args.ledger.read_bytes(), "text/csv")}

    with httpx.Client(base_url=args.base_url) as client:
        if args.transfers_csv:
            resp = client.post("/settle/transfers.csv", files=files, data=data)
            if resp.status_code >= 400:
                raise SystemExit(f"Request failed ({resp.status_code}): {resp.text}")
            args.transfers_csv.write_text(resp.text, encoding="utf-8")
            print(f"Saved transfers to {args.transfers_csv}")
            return

        resp = client.post("/settle", files=files, data=data)
        if resp.status_code >= 400:
            raise SystemExit(f"Request failed ({resp.status_code}): {resp.text}")
        payload = resp.json()

    print(f"Status: {payload['status']} ({payload['player_count']} players, {payload['row_count']} rows)")
    for player in payload["players"]:
        print(f"  {player['nickname']} [{player['player_id']}]: {player['net']:.2f}")
    for transfer in payload["transfers"]:
        print(f"  {transfer['from_nickname']} -> {transfer['to_nickname']}: {transfer['amount']:.2f}")
    if payload.get("message"):
        print(payload["message"])


if __name__ == "__main__":
    main()
