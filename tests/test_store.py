import pytest

from csv_table import Row
from csv_table.store import HeaderRegistry, RowStore


@pytest.fixture
def rows() -> list[Row]:
    return [Row(["A"], [str(i)]) for i in range(3)]


def test_get_and_ranges(rows: list[Row]) -> None:
    store = RowStore(rows)
    assert store.get(-1) is rows[2]
    assert store.get(3) is None
    assert store.get_range(slice(1, None)) == rows[1:]
    assert store.get_range(slice(3, None)) == []
    assert store.get_range(slice(4, None)) is None


def test_set_pads_with_absent_slots(rows: list[Row]) -> None:
    store = RowStore(rows)
    extra = Row(["A"], ["x"])
    store.set(5, extra)
    assert len(store) == 6
    assert store.get(3) is None
    assert store.get(4) is None
    assert store.get(5) is extra


def test_set_negative(rows: list[Row]) -> None:
    store = RowStore(rows)
    replacement = Row(["A"], ["x"])
    store.set(-1, replacement)
    assert store.get(2) is replacement
    with pytest.raises(IndexError):
        store.set(-4, replacement)


def test_set_range(rows: list[Row]) -> None:
    store = RowStore(rows)
    new = Row(["A"], ["x"])
    store.set_range(slice(0, 2), [new])
    assert list(store) == [new, rows[2]]
    store.set_range(slice(4, None), [new])
    assert list(store) == [new, rows[2], None, None, new]


def test_insert_append_delete(rows: list[Row]) -> None:
    store = RowStore(rows)
    first = Row(["A"], ["first"])
    store.insert(0, first)
    store.append(Row(["A"], ["last"]))
    assert store.first() is first
    assert len(store) == 5
    assert store.delete_at(0) is first
    assert store.delete_at(10) is None
    assert store.delete_range(slice(0, 2)) == rows[:2]
    assert store.delete_range(slice(9, None)) is None
    assert len(store) == 2


def test_delete_if_keeps_order(rows: list[Row]) -> None:
    store = RowStore(rows)
    assert store.delete_if(lambda row: row["A"] == "1") == 1
    assert list(store) == [rows[0], rows[2]]


def test_values_at(rows: list[Row]) -> None:
    store = RowStore(rows)
    assert store.values_at(0, -1) == [rows[0], rows[2]]
    assert store.values_at(slice(1, 5)) == [rows[1], rows[2], None, None]
    assert store.values_at(7) == [None]
    assert store.values_at(slice(5, 7)) == [None, None]
    assert store.values_at(range(3, 5), 0) == [None, None, rows[0]]


def test_copy_shares_rows(rows: list[Row]) -> None:
    store = RowStore(rows)
    copy = store.copy()
    copy.append(Row(["A"], ["x"]))
    assert len(store) == 3
    assert copy.get(0) is store.get(0)
    assert copy != store
    assert RowStore(rows) == store
    assert store == rows


def test_empty() -> None:
    store = RowStore()
    assert store.empty
    assert store.first() is None


def test_header_registry() -> None:
    headers = HeaderRegistry(["A", "B", "A"])
    assert headers.get(-1) == "A"
    assert headers.get(5) is None
    assert headers.index("B") == 1
    assert headers.index("Z") is None
    assert headers.append_if_absent("B") == 1
    assert headers.append_if_absent("C") == 3
    assert headers.claim("B") == 1
    assert headers.claim("D") == 4
    assert headers.copy() == ["A", "B", "A", "C", "D"]

    assert headers.remove("A") == "A"
    assert headers.remove("Z") is None
    assert list(headers) == ["B", "C", "D"]
    assert headers.delete_at(-1) == "D"
    assert headers.delete_at(7) is None
    headers.set(0, "b")
    assert headers.copy() == ["b", "C"]
    assert len(headers) == 2
