from pathlib import Path

import pytest

from csv_table import CSVCache, NoOpCache, ParquetCache, Row, Table, TableCache


@pytest.fixture(params=[CSVCache, ParquetCache])
def cache(request: pytest.FixtureRequest, tmp_path: Path) -> TableCache:
    return request.param(cache_root=tmp_path / "cache")


def test_save_and_load(cache: TableCache, table: Table) -> None:
    table.append(Row(["Name", "Value"], ["qux", None]))
    target = cache.save("run-1", {"people": table})
    assert (target / f"people{cache.EXT}").is_file()

    loaded = cache.load("run-1")
    assert loaded is not None
    assert loaded["people"] == table
    assert loaded["people"].headers() == ["Name", "Value"]


def test_load_keeps_leading_zeros(cache: TableCache) -> None:
    table = Table([Row(["Id"], ["007"])])
    cache.save(None, {"ids": table})
    assert cache.load(None)["ids"]["Id"] == ["007"]


def test_load_selected_columns(cache: TableCache, table: Table) -> None:
    cache.save("run-1", {"people": table})
    loaded = cache.load("run-1", columns=["Name"])
    assert loaded["people"].headers() == ["Name"]
    assert loaded["people"]["Name"] == ["foo", "bar", "baz"]


def test_load_missing_scope(cache: TableCache) -> None:
    assert cache.load("nothing-here") is None


def test_scopes_and_delete(cache: TableCache, table: Table) -> None:
    cache.save("a", {"t": table})
    cache.save("b", {"t": table})
    assert sorted(cache.list_scopes()) == ["a", "b"]
    cache.delete("a")
    assert cache.list_scopes() == ["b"]
    cache.delete("missing")


def test_noop_cache(table: Table) -> None:
    cache = NoOpCache()
    assert cache.save("x", {"t": table}) == Path()
    assert cache.load("x") is None
    assert cache.list_scopes() == []
    cache.delete("x")


def test_csv_cache_table_without_headers(tmp_path: Path, table: Table) -> None:
    cache = CSVCache(cache_root=tmp_path)
    cache.save("s", {"blank": Table([]), "people": table})
    loaded = cache.load("s")
    assert loaded["blank"].empty
    assert loaded["blank"].headers() == []
    assert loaded["people"] == table
