"""Access modes and indexed reads."""

import pytest

from csv_table import AccessMode, CSVReader, Row, Table


def test_headers(table: Table) -> None:
    assert table.headers() == ["Name", "Value"]
    assert Table([]).headers() == []
    assert Table([], headers=["A", "B"]).headers() == ["A", "B"]


def test_headers_come_from_first_row() -> None:
    table = Table([Row(["A", "B"], ["1", "2"])], headers=["X"])
    assert table.headers() == ["A", "B"]


def test_headers_are_a_copy_while_empty() -> None:
    table = Table([], headers=["A"])
    table.headers().append("B")
    assert table.headers() == ["A"]


def test_size(table: Table) -> None:
    assert len(table) == 3
    assert table.size == 3
    assert not table.empty
    assert Table([]).empty


def test_default_mode(table: Table) -> None:
    assert table.mode is AccessMode.MIXED


@pytest.mark.parametrize(
    "switch,mode",
    [("by_row", AccessMode.ROW), ("by_col", AccessMode.COLUMN), ("by_col_or_row", AccessMode.MIXED)],
)
def test_inplace_switch_returns_same_table(table: Table, switch: str, mode: AccessMode) -> None:
    if mode is AccessMode.ROW:
        table.by_col(inplace=True)
    else:
        table.by_row(inplace=True)
    result = getattr(table, switch)(inplace=True)
    assert result is table
    assert table.mode is mode


@pytest.mark.parametrize("switch", ["by_row", "by_col", "by_col_or_row"])
def test_copy_switch_leaves_original_mode(table: Table, switch: str) -> None:
    table.by_row(inplace=True)
    copy = getattr(table, switch)()
    assert copy is not table
    assert table.mode is AccessMode.ROW
    assert copy == table


def test_copy_switch_shares_rows_not_storage(table: Table) -> None:
    copy = table.by_col()
    assert copy.by_row(inplace=True)[0] is table[0]

    copy.append(["qux", "3"])
    assert len(table) == 3

    # rows are shared, so field edits show through both tables
    copy[0]["Value"] = "changed"
    assert table[0]["Value"] == "changed"


def test_copy_switch_keeps_fallback_headers() -> None:
    assert Table([], headers=["A"]).by_col().headers() == ["A"]


def test_row_mode_lookup(source: str) -> None:
    table = CSVReader().parse(source)
    assert table.headers() == ["Name", "Value"]
    table.by_row(inplace=True)
    assert table[1].to_dict() == {"Name": "bar", "Value": "1"}
    assert table[-1].to_dict() == {"Name": "baz", "Value": "2"}
    assert table[4] is None
    assert table[3] is None


def test_row_mode_rejects_names(table: Table) -> None:
    with pytest.raises(TypeError):
        table.by_row()["Name"]


def test_column_mode_lookup(source: str) -> None:
    table = CSVReader().parse(source).by_col(inplace=True)
    assert table[0] == ["foo", "bar", "baz"]
    assert table[-1] == ["0", "1", "2"]
    assert table[10] == [None, None, None]
    assert table["Value"] == ["0", "1", "2"]


def test_column_mode_range(table: Table) -> None:
    assert table.by_col()[0:1] == [["foo"], ["bar"], ["baz"]]


def test_mixed_mode_lookup(table: Table) -> None:
    assert table[0]["Name"] == "foo"
    assert table["Name"] == ["foo", "bar", "baz"]
    assert table["Missing"] == [None, None, None]
    assert [row["Name"] for row in table[0:2]] == ["foo", "bar"]
    assert table[range(1, 3)] == table[1:]
    assert table[3:] == []
    assert table[4:] is None


def test_absent_slots_read_as_none(table: Table) -> None:
    table[4] = ["qux", "4"]
    assert table[3] is None
    assert table["Name"] == ["foo", "bar", "baz", None, "qux"]


def test_repr(table: Table) -> None:
    assert repr(table) == "<Table mode:col_or_row row_count:4>"
    assert repr(table.by_col()) == "<Table mode:col row_count:4>"
    assert repr(Table([])) == "<Table mode:col_or_row row_count:1>"
