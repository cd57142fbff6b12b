"""Mode-aware table over a sequence of rows.

The same rows can be addressed by row, by column, or (the default) by
whichever of the two the key implies:

    >>> table = Table([Row(["Name", "Value"], ["foo", "0"]), Row(["Name", "Value"], ["bar", "1"])])
    >>> table[0]["Name"]
    'foo'
    >>> table["Value"]
    ['0', '1']
    >>> table.by_col()[0]
    ['foo', 'bar']

Lookup misses never raise: a missing row is None and a missing column is
a list of None with one entry per row.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from typing import TYPE_CHECKING, Any

from csv_table.keys import AccessMode, Axis, KeyKind, classify, dispatch, dispatch_many, is_integer
from csv_table.logs import context
from csv_table.row import Row, RowLike
from csv_table.serialize import DEFAULT_OPTIONS, CSVOptions, dig, fields_to_csv
from csv_table.store import HeaderRegistry, RowStore, Slot

if TYPE_CHECKING:
    import pandas as pd
    import pyarrow as pa

__all__ = ["Table", "TableView"]

logger = logging.getLogger(__name__)


class TableView:
    """Lazy, restartable view over what a table would visit.

    Both the items and the length are computed on demand, so the view
    follows the table's current mode and contents.
    """

    def __init__(self, source: Callable[[], Iterator[Any]], size: Callable[[], int]) -> None:
        self._source = source
        self._size = size

    def __iter__(self) -> Iterator[Any]:
        return self._source()

    def __len__(self) -> int:
        return self._size()

    def __repr__(self) -> str:
        return f"<TableView size:{len(self)}>"


class Table:
    """Rows plus fallback headers, read and written through an access mode."""

    def __init__(self, rows: Iterable[Slot] = (), headers: Iterable[Any] | None = None) -> None:
        self._rows = rows if isinstance(rows, RowStore) else RowStore(rows)
        if headers is None:
            first = self._rows.first()
            headers = first.headers() if first is not None else []
        self._headers = HeaderRegistry(headers)
        self._mode = AccessMode.MIXED

    # -- access mode ------------------------------------------------------

    @property
    def mode(self) -> AccessMode:
        return self._mode

    def by_row(self, inplace: bool = False) -> Table:
        """Treat every key as a row index (or range)."""
        return self._switch(AccessMode.ROW, inplace)

    def by_col(self, inplace: bool = False) -> Table:
        """Treat every key as a column, integers included."""
        return self._switch(AccessMode.COLUMN, inplace)

    def by_col_or_row(self, inplace: bool = False) -> Table:
        """Integers and ranges address rows, anything else addresses columns."""
        return self._switch(AccessMode.MIXED, inplace)

    def _switch(self, mode: AccessMode, inplace: bool) -> Table:
        target = self if inplace else Table(self._rows.copy(), headers=self._headers.copy())
        logger.debug("Switching table to %s mode", mode, extra=context(mode=mode, inplace=inplace, rows=len(self._rows)))
        target._mode = mode
        return target

    # -- size and headers -------------------------------------------------

    def headers(self) -> list[Any]:
        """Headers in force: the first row's, or the fallback list when there is none."""
        first = self._rows.first()
        if first is None:
            return self._headers.copy()
        return first.headers()

    @property
    def size(self) -> int:
        return len(self._rows)

    @property
    def empty(self) -> bool:
        return self._rows.empty

    def __len__(self) -> int:
        return len(self._rows)

    # -- indexed access ---------------------------------------------------

    def __getitem__(self, key: Any) -> Any:
        if dispatch(self._mode, key) is Axis.ROW:
            if is_integer(key):
                return self._rows.get(key)
            return self._rows.get_range(key)
        return [None if row is None else row[key] for row in self._rows]

    def __setitem__(self, key: Any, value: Any) -> None:
        if dispatch(self._mode, key) is Axis.ROW:
            if is_integer(key):
                self._rows.set(key, self._coerce_row(value))
            else:
                items = value if isinstance(value, (list, tuple)) else [value]
                self._rows.set_range(key, [self._coerce_row(item) for item in items])
            return
        self._set_column(key, value)

    def _coerce_row(self, value: Any) -> Slot:
        if isinstance(value, (list, tuple)):
            return Row(self.headers(), value)
        if value is not None and not isinstance(value, RowLike):
            raise TypeError(f"Expected a Row or a sequence of fields, got {type(value).__name__}")
        return value

    def _set_column(self, key: Any, value: Any) -> None:
        if classify(key) is KeyKind.RANGE:
            raise TypeError(f"Cannot assign to a column range {key!r}")
        if not is_integer(key):
            self._headers.claim(key)
        many = isinstance(value, (list, tuple))
        for i, row in enumerate(self._rows):
            if row is None:
                continue
            if row.header_row:
                row[key] = key
            elif many:
                row[key] = value[i] if i < len(value) else None
            else:
                row[key] = value

    def values_at(self, *keys: Any) -> list[Any]:
        """Rows for row-like keys, otherwise each row's fields for *keys*."""
        if dispatch_many(self._mode, keys) is Axis.ROW:
            return self._rows.values_at(*keys)
        return [None if row is None else row.values_at(*keys) for row in self._rows]

    # -- growth and removal -----------------------------------------------

    def append(self, row: Any) -> Table:
        """Add a Row, or a sequence of fields labelled with the current headers."""
        self._rows.append(self._coerce_row(row))
        return self

    __lshift__ = append

    def push(self, *rows: Any) -> Table:
        for row in rows:
            self.append(row)
        return self

    def delete(self, *keys: Any) -> Any:
        """Remove rows or columns and return what was removed.

        Keys are applied one after another, so each one sees the table as
        left by the previous deletion. A single key returns its value;
        several keys return a list in key order.
        """
        if not keys:
            raise TypeError("wrong number of arguments (given 0, expected 1+)")
        deleted = [self._delete_one(key) for key in keys]
        return deleted[0] if len(keys) == 1 else deleted

    def __delitem__(self, key: Any) -> None:
        self.delete(key)

    def _delete_one(self, key: Any) -> Any:
        if dispatch(self._mode, key) is Axis.ROW:
            if is_integer(key):
                removed = self._rows.delete_at(key)
            else:
                removed = self._rows.delete_range(key)
            logger.debug("Deleted row(s) at %r", key, extra=context(key=key, mode=self._mode, rows=len(self._rows)))
            return removed
        if classify(key) is KeyKind.RANGE:
            raise TypeError(f"Cannot delete a column range {key!r}")
        if is_integer(key):
            self._headers.delete_at(key)
        else:
            self._headers.remove(key)
        logger.debug("Deleted column %r", key, extra=context(key=key, mode=self._mode))
        return [self._delete_field(row, key) for row in self._rows]

    @staticmethod
    def _delete_field(row: Slot, key: Any) -> Any:
        if row is None:
            return None
        pair = row.delete(key)
        return None if pair is None else pair[1]

    def delete_if(self, predicate: Callable[[Any], Any] | None = None) -> Table | TableView:
        """Remove every row (or, in column mode, every column) matching *predicate*.

        Columns are offered as ``(header, values)`` and removed by header.
        Without a predicate, returns a view of what would be visited.
        """
        if predicate is None:
            return self._view()
        if self._mode is AccessMode.COLUMN:
            for header in self.headers():
                if predicate((header, self[header])):
                    self.delete(header)
        else:
            removed = self._rows.delete_if(predicate)
            logger.debug("Removed %d rows by predicate", removed, extra=context(mode=self._mode, rows=len(self._rows)))
        return self

    # -- iteration --------------------------------------------------------

    def __iter__(self) -> Iterator[Any]:
        if self._mode is AccessMode.COLUMN:
            return ((header, self[header]) for header in self.headers())
        return iter(self._rows)

    def each(self, callback: Callable[[Any], Any] | None = None) -> Table | TableView:
        """Call *callback* for every row (or ``(header, values)`` pair in column mode)."""
        if callback is None:
            return self._view()
        for item in self:
            callback(item)
        return self

    def _view(self) -> TableView:
        def size() -> int:
            return len(self.headers()) if self._mode is AccessMode.COLUMN else len(self._rows)

        return TableView(self.__iter__, size)

    # -- projection -------------------------------------------------------

    def _data_rows(self) -> Iterator[RowLike]:
        return (row for row in self._rows if row is not None and not row.header_row)

    def to_list(self) -> list[list[Any]]:
        """Headers followed by the fields of every data row."""
        return [self.headers(), *(row.fields() for row in self._data_rows())]

    def to_csv(self, write_headers: bool = True, options: CSVOptions | None = None, **overrides: Any) -> str:
        opts = (options or DEFAULT_OPTIONS).merged(**overrides)
        lines = [fields_to_csv(self.headers(), opts)] if write_headers else []
        lines.extend(row.to_csv(opts) for row in self._data_rows())
        return "".join(lines)

    def __str__(self) -> str:
        return self.to_csv()

    def to_frame(self) -> pd.DataFrame:
        from csv_table.frame import to_frame

        return to_frame(self)

    def to_arrow(self) -> pa.Table:
        from csv_table.frame import to_arrow

        return to_arrow(self)

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> Table:
        from csv_table.frame import from_frame

        return from_frame(df)

    def dig(self, key: Any, *rest: Any) -> Any:
        value = self[key]
        if value is None or not rest:
            return value
        return dig(value, *rest)

    # -- comparison -------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Table):
            return self._rows == other._rows
        if isinstance(other, (list, tuple)):
            return self._rows == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"<Table mode:{self._mode} row_count:{len(self.to_list())}>"
