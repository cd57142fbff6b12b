from __future__ import annotations

import logging
import shutil
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from pathlib import Path

import pyarrow as pa
import pyarrow.csv as pcsv
import pyarrow.parquet as pq

from csv_table.logs import context
from csv_table.row import Row
from csv_table.table import Table

__all__ = [
    "TableCache",
    "ParquetCache",
    "NoOpCache",
    "CSVCache",
]

DEFAULT_ROOT: str = ".table_cache"

logger = logging.getLogger(__name__)


def _from_arrow(data: pa.Table) -> Table:
    headers = list(data.column_names)
    columns = [data.column(i).to_pylist() for i in range(data.num_columns)]
    return Table([Row(headers, list(fields)) for fields in zip(*columns)], headers=headers)


class TableCache(ABC):
    """Abstract snapshot store for named tables."""

    EXT = ""

    def __init__(self, cache_root: Path | str | None = None) -> None:
        # default to .table_cache in the working directory
        self.root = Path(cache_root).expanduser().resolve() if cache_root else Path.cwd() / DEFAULT_ROOT
        self.root.mkdir(parents=True, exist_ok=True)

    @abstractmethod
    def save(self, scope: str | None, tables: Mapping[str, Table]) -> Path:
        """Save a mapping of name→Table under the given scope."""
        ...

    @abstractmethod
    def load(self, scope: str | None, columns: Sequence[str] | None = None) -> Mapping[str, Table] | None:
        """Load all cached tables under the given scope."""
        ...

    def delete(self, scope: str | None) -> None:
        """Delete all cached tables under the given scope."""
        target = (self.root / scope) if scope else self.root
        if not target.exists():
            return
        if scope is None:
            for path in target.glob(f"*{self.EXT}"):
                if path.is_file():
                    path.unlink(missing_ok=True)
        else:
            shutil.rmtree(target, ignore_errors=True)

    def list_scopes(self) -> Sequence[str]:
        """List all available scopes (subdirectories under the cache root)."""
        return [p.name for p in self.root.iterdir() if p.is_dir()]

    def _scope_dir(self, scope: str | None, *, create: bool = False) -> Path:
        """Return path to the scope directory.
        If *create* is True, the directory is created (mkdir -p)."""
        path = self.root if scope is None else self.root / scope
        if create:
            path.mkdir(parents=True, exist_ok=True)
        return path


class NoOpCache(TableCache):
    """Dummy cache – performs no operations."""

    def __init__(self, cache_root: Path | str | None = None) -> None:
        self.root = Path()

    def save(self, scope: str | None, tables: Mapping[str, Table]) -> Path:
        return Path()

    def load(self, scope: str | None, columns: Sequence[str] | None = None) -> None:
        return None

    def delete(self, scope: str | None) -> None:
        return None

    def list_scopes(self) -> Sequence[str]:
        return []


class ParquetCache(TableCache):
    """On-disk cache: each table stored as Parquet in per-scope folders."""

    EXT = ".parquet"

    def save(self, scope: str | None, tables: Mapping[str, Table]) -> Path:
        target = self._scope_dir(scope, create=True)
        for name, table in tables.items():
            path = target / f"{name}{self.EXT}"
            pq.write_table(table.to_arrow(), path)
            logger.debug("Saved table %r to %s", name, path, extra=context(table=name, rows=table.size, backend=self.EXT))
        return target

    def load(self, scope: str | None, columns: Sequence[str] | None = None) -> Mapping[str, Table] | None:
        target = self._scope_dir(scope)
        out: dict[str, Table] = {}
        for path in target.glob(f"*{self.EXT}"):
            out[path.stem] = _from_arrow(pq.read_table(path, columns=list(columns) if columns else None))
        return out or None


class CSVCache(TableCache):
    """On-disk cache: each table stored as a CSV in per-scope folders."""

    EXT = ".csv"

    def save(self, scope: str | None, tables: Mapping[str, Table]) -> Path:
        target = self._scope_dir(scope, create=True)
        opts = pcsv.WriteOptions(include_header=True)
        for name, table in tables.items():
            path = target / f"{name}{self.EXT}"
            pcsv.write_csv(table.to_arrow(), path, write_options=opts)
            logger.debug("Saved table %r to %s", name, path, extra=context(table=name, rows=table.size, backend=self.EXT))
        return target

    def load(self, scope: str | None, columns: Sequence[str] | None = None) -> Mapping[str, Table] | None:
        target = self._scope_dir(scope)
        out: dict[str, Table] = {}
        for path in target.glob(f"*{self.EXT}"):
            if path.stat().st_size == 0:
                # a table without headers is written as an empty file
                out[path.stem] = Table([])
                continue
            read_opts = pcsv.ReadOptions(use_threads=True)
            parse_opts = pcsv.ParseOptions()
            # keep every column as text, as the table stores it
            with pcsv.open_csv(str(path), read_options=read_opts, parse_options=parse_opts) as reader:
                names = reader.schema.names
            convert_opts = pcsv.ConvertOptions(
                column_types={name: pa.string() for name in names},
                null_values=[""],
                include_columns=list(columns) if columns else None,
                strings_can_be_null=True,
            )
            data = pcsv.read_csv(str(path), read_options=read_opts, parse_options=parse_opts, convert_options=convert_opts)
            out[path.stem] = _from_arrow(data)
        return out or None
