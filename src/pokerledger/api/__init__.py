"""REST API for the poker ledger settlement service."""

from __future__ import annotations

import json
import logging
import os

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import Response

from pokerledger.api.schemas import LedgerReportResponse
from pokerledger.config import DEFAULT_COLUMNS, LedgerColumns
from pokerledger.export import LedgerExportError, report_transfers_csv, totals_to_csv
from pokerledger.settlement import LedgerReport, build_ledger_report


logger = logging.getLogger(__name__)


def _parse_columns(columns_str: str | None) -> LedgerColumns:
    if not columns_str:
        return DEFAULT_COLUMNS
    try:
        mapping = json.loads(columns_str)
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid columns JSON: {exc}") from exc
    if not isinstance(mapping, dict):
        raise HTTPException(status_code=400, detail="columns must be a JSON object")
    try:
        return LedgerColumns.from_mapping(mapping)
    except (KeyError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=str(exc.args[0])) from exc


async def _read_ledger(upload: UploadFile) -> str:
    contents = await upload.read()
    if not contents:
        raise HTTPException(status_code=400, detail="ledger file is empty")
    try:
        return contents.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise HTTPException(status_code=400, detail="ledger file must be UTF-8 text") from exc


async def _process(upload: UploadFile, columns: str | None) -> LedgerReport:
    parsed_columns = _parse_columns(columns)
    text = await _read_ledger(upload)
    report = build_ledger_report(text, columns=parsed_columns)
    if report.status == "missing_columns":
        raise HTTPException(status_code=400, detail=report.message)
    return report


def _csv_response(body: str, filename: str) -> Response:
    return Response(
        content=body,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def create_app() -> FastAPI:
    app = FastAPI(title="pokerledger")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/settle", response_model=LedgerReportResponse)
    async def settle_ledger(
        ledger: UploadFile = File(...),
        columns: str | None = Form(None),
    ) -> LedgerReportResponse:
        report = await _process(ledger, columns)
        logger.info("Settled %s (%s)", ledger.filename, report.status)
        return LedgerReportResponse.from_report(report)

    @app.post("/settle/totals.csv")
    async def totals_csv(
        ledger: UploadFile = File(...),
        columns: str | None = Form(None),
    ) -> Response:
        report = await _process(ledger, columns)
        if report.status == "empty":
            raise HTTPException(status_code=400, detail=report.message)
        return _csv_response(totals_to_csv(report.players), "poker-totals.csv")

    @app.post("/settle/transfers.csv")
    async def transfers_csv(
        ledger: UploadFile = File(...),
        columns: str | None = Form(None),
    ) -> Response:
        report = await _process(ledger, columns)
        try:
            body = report_transfers_csv(report)
        except LedgerExportError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return _csv_response(body, "poker-transfers.csv")

    return app


def run() -> None:
    """Serve the API with uvicorn (host/port from ``POKERLEDGER_HOST``/``POKERLEDGER_PORT``)."""

    import uvicorn

    host = os.getenv("POKERLEDGER_HOST", "127.0.0.1")
    try:
        port = int(os.getenv("POKERLEDGER_PORT", "8000"))
    except ValueError:
        logger.warning("Invalid POKERLEDGER_PORT; using 8000")
        port = 8000
    uvicorn.run(create_app(), host=host, port=port)
