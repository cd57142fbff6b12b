"""Rows: ordered (header, field) pairs.

``Table`` only talks to rows through the ``RowLike`` protocol; ``Row`` is
the implementation the rest of the package builds.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from itertools import zip_longest
from typing import Any, Protocol, runtime_checkable

from csv_table.keys import is_integer, resolve_index, resolve_range
from csv_table.serialize import DEFAULT_OPTIONS, CSVOptions, dig, fields_to_csv

__all__ = ["Row", "RowLike"]


@runtime_checkable
class RowLike(Protocol):
    """Capabilities a table needs from a stored row."""

    header_row: bool

    def headers(self) -> list[Any]: ...

    def fields(self, *keys: Any) -> list[Any]: ...

    def values_at(self, *keys: Any) -> list[Any]: ...

    def __getitem__(self, key: Any) -> Any: ...

    def __setitem__(self, key: Any, value: Any) -> None: ...

    def delete(self, key: Any) -> tuple[Any, Any] | None: ...

    def to_csv(self, options: CSVOptions = DEFAULT_OPTIONS, **overrides: Any) -> str: ...


class Row:
    """A single table row.

    When *headers* and *fields* differ in length the shorter side is
    padded with None, so a row always has ``max(len(headers), len(fields))``
    pairs. Set *header_row* for a row that restates the header labels.
    """

    def __init__(self, headers: Sequence[Any], fields: Sequence[Any], header_row: bool = False) -> None:
        self.header_row = header_row
        self._pairs: list[list[Any]] = [[h, f] for h, f in zip_longest(headers, fields)]

    @property
    def field_row(self) -> bool:
        return not self.header_row

    def headers(self) -> list[Any]:
        return [header for header, _ in self._pairs]

    def index(self, header: Any, minimum_index: int = 0) -> int | None:
        """Position of the first *header* at or after *minimum_index*."""
        for position in range(minimum_index, len(self._pairs)):
            if self._pairs[position][0] == header:
                return position
        return None

    def has_key(self, header: Any) -> bool:
        return any(h == header for h, _ in self._pairs)

    __contains__ = has_key

    def field(self, key: Any, minimum_index: int = 0) -> Any:
        """Field by position, integer range, or header; misses give None."""
        if is_integer(key):
            position = resolve_index(key, len(self._pairs))
            return None if position is None else self._pairs[position][1]
        if isinstance(key, (slice, range)):
            span = resolve_range(key, len(self._pairs))
            if span is None:
                return None
            return [field for _, field in self._pairs[span[0] : span[1]]]
        position = self.index(key, minimum_index)
        return None if position is None else self._pairs[position][1]

    def __getitem__(self, key: Any) -> Any:
        return self.field(key)

    def __setitem__(self, key: Any, value: Any) -> None:
        if is_integer(key):
            if key >= len(self._pairs):
                self._pairs.extend([None, None] for _ in range(key - len(self._pairs)))
                self._pairs.append([None, value])
                return
            position = resolve_index(key, len(self._pairs))
            if position is None:
                raise IndexError(f"index {key} too small for row; minimum: -{len(self._pairs)}")
            self._pairs[position][1] = value
            return
        position = self.index(key)
        if position is None:
            self._pairs.append([key, value])
        else:
            self._pairs[position][1] = value

    def append(self, item: Any) -> Row:
        """Append a ``(header, field)`` pair, or a bare field with no header."""
        if isinstance(item, (list, tuple)) and len(item) == 2:
            self._pairs.append(list(item))
        else:
            self._pairs.append([None, item])
        return self

    def delete(self, key: Any) -> tuple[Any, Any] | None:
        """Remove a field by position or header and return its pair."""
        if is_integer(key):
            position = resolve_index(key, len(self._pairs))
        else:
            position = self.index(key)
        if position is None:
            return None
        header, field = self._pairs.pop(position)
        return header, field

    def fields(self, *keys: Any) -> list[Any]:
        """All fields, or the fields for *keys* in order.

        A slice key may use headers or positions as bounds.
        """
        if not keys:
            return [field for _, field in self._pairs]
        out: list[Any] = []
        for key in keys:
            if isinstance(key, (slice, range)):
                start = key.start if key.start is None or is_integer(key.start) else self.index(key.start)
                stop = key.stop if key.stop is None or is_integer(key.stop) else self.index(key.stop)
                span = resolve_range(slice(start, stop), len(self._pairs))
                if span is not None:
                    out.extend(self.field(i) for i in range(*span))
            else:
                out.append(self.field(key))
        return out

    values_at = fields

    def to_dict(self) -> dict[Any, Any]:
        """Header to field mapping; the first of duplicate headers wins."""
        out: dict[Any, Any] = {}
        for header, field in self._pairs:
            out.setdefault(header, field)
        return out

    def to_csv(self, options: CSVOptions = DEFAULT_OPTIONS, **overrides: Any) -> str:
        return fields_to_csv(self.fields(), options.merged(**overrides))

    def dig(self, key: Any, *rest: Any) -> Any:
        return dig(self.field(key), *rest)

    def __len__(self) -> int:
        return len(self._pairs)

    def __iter__(self) -> Iterator[tuple[Any, Any]]:
        return ((header, field) for header, field in self._pairs)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Row):
            return self._pairs == other._pairs
        if isinstance(other, (list, tuple)):
            try:
                return self._pairs == [list(pair) for pair in other]
            except TypeError:
                return False
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return self.to_csv()

    def __repr__(self) -> str:
        body = " ".join(f"{header!r}:{field!r}" for header, field in self._pairs)
        return f"<Row {body}>" if body else "<Row>"
