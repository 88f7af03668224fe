import json

import pytest
from httpx import ASGITransport, AsyncClient

from pokerledger.api import create_app


@pytest.fixture
async def client():
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client


def _sample_ledger() -> str:
    return """player_nickname,player_id,net
"Doe, John",p1,"1,200"
Jane,p2,-700
Max,p3,-500
Johnny,p1,-100
Sam,p4,100
"""


def _files(text: str) -> dict:
    return {"ledger": ("ledger.csv", text.encode("utf-8"), "text/csv")}


async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


async def test_settle_endpoint(client: AsyncClient):
    resp = await client.post("/settle", files=_files(_sample_ledger()))
    assert resp.status_code == 200
    payload = resp.json()

    assert payload["status"] == "balanced"
    assert payload["balanced"] is True
    assert payload["player_count"] == 4
    assert payload["row_count"] == 5
    assert payload["players"][0]["player_id"] == "p1"
    assert payload["players"][0]["nickname"] == "Doe, John, Johnny"
    assert payload["players"][0]["net"] == pytest.approx(1100)
    assert [(t["from_player_id"], t["to_player_id"], t["amount"]) for t in payload["transfers"]] == [
        ("p2", "p1", 700),
        ("p3", "p1", 400),
        ("p3", "p4", 100),
    ]


async def test_settle_unbalanced(client: AsyncClient):
    text = "player_nickname,player_id,net\nA,a,60\nB,b,-50\n"
    resp = await client.post("/settle", files=_files(text))
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["status"] == "unbalanced"
    assert payload["rounded_total_net"] == 10
    assert payload["transfers"] == []


async def test_settle_missing_columns(client: AsyncClient):
    resp = await client.post("/settle", files=_files("player_nickname,player_id\nA,a\n"))
    assert resp.status_code == 400
    assert "Missing required columns" in resp.json()["detail"]


async def test_settle_empty_upload(client: AsyncClient):
    resp = await client.post("/settle", files=_files(""))
    assert resp.status_code == 400


async def test_settle_header_only(client: AsyncClient):
    resp = await client.post("/settle", files=_files("player_nickname,player_id,net\n"))
    assert resp.status_code == 200
    assert resp.json()["status"] == "empty"
    assert resp.json()["message"] == "No data rows found in the CSV."


async def test_settle_custom_columns(client: AsyncClient):
    text = "Name,ID,Result\nAlice,p1,5\nBob,p2,-5\n"
    columns = json.dumps({"player_id": "ID", "nickname": "Name", "net": "Result"})
    resp = await client.post("/settle", files=_files(text), data={"columns": columns})
    assert resp.status_code == 200
    assert len(resp.json()["transfers"]) == 1


async def test_settle_invalid_columns_json(client: AsyncClient):
    resp = await client.post("/settle", files=_files(_sample_ledger()), data={"columns": "{oops"})
    assert resp.status_code == 400
    assert "Invalid columns JSON" in resp.json()["detail"]


async def test_transfers_csv_download(client: AsyncClient):
    resp = await client.post("/settle/transfers.csv", files=_files(_sample_ledger()))
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert "poker-transfers.csv" in resp.headers["content-disposition"]
    lines = resp.text.strip().splitlines()
    assert lines[0] == "from,from_id,to,to_id,amount"
    assert lines[1] == 'Jane,p2,"Doe, John, Johnny",p1,700.00'


async def test_transfers_csv_refused_when_unbalanced(client: AsyncClient):
    text = "player_nickname,player_id,net\nA,a,60\nB,b,-50\n"
    resp = await client.post("/settle/transfers.csv", files=_files(text))
    assert resp.status_code == 409


async def test_totals_csv_download(client: AsyncClient):
    resp = await client.post("/settle/totals.csv", files=_files(_sample_ledger()))
    assert resp.status_code == 200
    lines = resp.text.strip().splitlines()
    assert lines[0] == "player_nickname,player_id,net"
    assert len(lines) == 5


async def test_settle_non_string_column_header(client: AsyncClient):
    resp = await client.post("/settle", files=_files(_sample_ledger()), data={"columns": json.dumps({"net": 5})})
    assert resp.status_code == 400
    assert "must be strings" in resp.json()["detail"]


async def test_settle_overflowing_ledger(client: AsyncClient):
    text = "player_nickname,player_id,net\nA,a,1e308\nB,b,1e308\n"
    resp = await client.post("/settle", files=_files(text))
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["status"] == "unbalanced"
    assert payload["total_net"] is None
    assert payload["rounded_total_net"] is None
