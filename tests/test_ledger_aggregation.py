import pytest

from pokerledger.config import LedgerColumns
from pokerledger.ingest import ColumnIndices, MissingColumnsError, aggregate_rows, resolve_columns


HEADER = ("player_nickname", "player_id", "net")
INDICES = ColumnIndices(player_id=1, nickname=0, net=2)


def test_resolve_columns_any_order_and_trimmed():
    indices = resolve_columns((" net", "extra", "player_id ", "player_nickname"))
    assert indices == ColumnIndices(player_id=2, nickname=3, net=0)


def test_resolve_columns_is_case_sensitive():
    with pytest.raises(MissingColumnsError) as excinfo:
        resolve_columns(("Player_Nickname", "player_id", "net"))
    assert excinfo.value.missing == ("player_nickname",)


def test_resolve_columns_reports_all_missing():
    with pytest.raises(MissingColumnsError) as excinfo:
        resolve_columns(("player_id",))
    assert excinfo.value.missing == ("player_nickname", "net")
    assert str(excinfo.value) == "Missing required columns: player_nickname, player_id, net."


def test_resolve_columns_with_custom_names():
    columns = LedgerColumns(player_id="id", nickname="name", net="result")
    indices = resolve_columns(("result", "name", "id"), columns)
    assert indices == ColumnIndices(player_id=2, nickname=1, net=0)


def test_duplicate_ids_merge_nets_and_names():
    rows = [("Alice", "p1", "10"), ("Al", "p1", "-5")]

    records = aggregate_rows(rows, INDICES)

    assert len(records) == 1
    assert records[0].player_id == "p1"
    assert records[0].net == pytest.approx(5.0)
    assert records[0].nickname == "Alice, Al"
    assert records[0].nicknames == ("Alice", "Al")


def test_duplicate_names_collapse():
    rows = [("Bob", "p2", "1"), ("Bob", "p2", "2"), ("Bobby", "p2", "3"), ("Bob", "p2", "4")]

    records = aggregate_rows(rows, INDICES)
    assert records[0].nickname == "Bob, Bobby"
    assert records[0].net == pytest.approx(10.0)


def test_blank_and_idless_rows_are_skipped():
    rows = [
        ("", "", ""),
        ("  ", " ", "\t"),
        ("",),
        ("Ghost", "  ", "500"),
        ("Alice", "p1", "20"),
    ]

    records = aggregate_rows(rows, INDICES)
    assert [record.player_id for record in records] == ["p1"]
    assert records[0].net == pytest.approx(20.0)


def test_short_rows_default_missing_cells():
    records = aggregate_rows([("Alice", "p1")], INDICES)
    assert records[0].net == 0.0
    assert records[0].nickname == "Alice"


def test_blank_nickname_becomes_unknown():
    records = aggregate_rows([("  ", "p9", "3")], INDICES)
    assert records[0].nickname == "Unknown"


def test_noisy_net_counts_as_zero_and_commas_are_stripped():
    rows = [("Alice", "p1", "oops"), ("Alice", "p1", "1,500")]
    records = aggregate_rows(rows, INDICES)
    assert records[0].net == pytest.approx(1500.0)


def test_sorted_by_net_descending_with_stable_ties():
    rows = [
        ("A", "a", "-10"),
        ("B", "b", "5"),
        ("C", "c", "5"),
        ("D", "d", "20"),
        ("E", "e", "-20"),
    ]

    records = aggregate_rows(rows, INDICES)
    assert [record.player_id for record in records] == ["d", "b", "c", "a", "e"]


def test_net_sum_independent_of_row_order():
    rows = [("A", "a", "1.5"), ("B", "b", "-3"), ("A", "a", "2.25"), ("B", "b", "-0.75")]
    forward = {record.player_id: record.net for record in aggregate_rows(rows, INDICES)}
    backward = {record.player_id: record.net for record in aggregate_rows(list(reversed(rows)), INDICES)}

    assert forward == pytest.approx(backward)
    assert forward["a"] == pytest.approx(3.75)
