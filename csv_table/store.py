"""Owned storage behind a table: the row sequence and the fallback headers."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Any

from csv_table.keys import is_integer, resolve_column, resolve_index, resolve_range
from csv_table.logs import context
from csv_table.row import RowLike

__all__ = ["HeaderRegistry", "RowStore"]

logger = logging.getLogger(__name__)

# A slot holds a row, or None where assignment past the end left a gap
Slot = RowLike | None


class RowStore:
    """Ordered row sequence. Rows are shared by reference between copies."""

    def __init__(self, rows: Iterable[Slot] = ()) -> None:
        self._rows: list[Slot] = list(rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Slot]:
        return iter(self._rows)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RowStore):
            return self._rows == other._rows
        if isinstance(other, (list, tuple)):
            return len(self._rows) == len(other) and all(a == b for a, b in zip(self._rows, other))
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    @property
    def empty(self) -> bool:
        return not self._rows

    def first(self) -> Slot:
        return self._rows[0] if self._rows else None

    def copy(self) -> RowStore:
        return RowStore(self._rows)

    def get(self, index: int) -> Slot:
        position = resolve_index(index, len(self._rows))
        return None if position is None else self._rows[position]

    def get_range(self, key: slice | range) -> list[Slot] | None:
        span = resolve_range(key, len(self._rows))
        return None if span is None else self._rows[span[0] : span[1]]

    def set(self, index: int, row: Slot) -> None:
        """Store *row* at *index*, leaving None in any gap past the end."""
        size = len(self._rows)
        if index >= size:
            if index > size:
                logger.debug("Padding row store with %d absent slots", index - size, extra=context(key=index, rows=size))
            self._rows.extend([None] * (index - size))
            self._rows.append(row)
            return
        position = resolve_index(index, size)
        if position is None:
            raise IndexError(f"index {index} too small for table; minimum: -{size}")
        self._rows[position] = row

    def set_range(self, key: slice | range, rows: list[Slot]) -> None:
        size = len(self._rows)
        span = resolve_range(key, size)
        if span is None:
            start = key.start if key.start is not None else 0
            if start < 0:
                raise IndexError(f"range {key!r} out of range for table of size {size}")
            self._rows.extend([None] * (start - size))
            span = (start, start)
        self._rows[span[0] : span[1]] = rows

    def insert(self, index: int, row: Slot) -> None:
        self._rows.insert(index, row)

    def append(self, row: Slot) -> None:
        self._rows.append(row)

    def delete_at(self, index: int) -> Slot:
        """Remove and return the row at *index*; None when out of range."""
        position = resolve_index(index, len(self._rows))
        return None if position is None else self._rows.pop(position)

    def delete_range(self, key: slice | range) -> list[Slot] | None:
        span = resolve_range(key, len(self._rows))
        if span is None:
            return None
        removed = self._rows[span[0] : span[1]]
        del self._rows[span[0] : span[1]]
        return removed

    def delete_if(self, predicate: Callable[[Slot], Any]) -> int:
        """Drop every row matching *predicate*, keeping survivors in order."""
        before = len(self._rows)
        self._rows = [row for row in self._rows if not predicate(row)]
        return before - len(self._rows)

    def values_at(self, *keys: int | slice | range) -> list[Slot]:
        """Rows for *keys*; positions outside the store come back as None."""
        out: list[Slot] = []
        size = len(self._rows)
        for key in keys:
            if is_integer(key):
                out.append(self.get(key))
                continue
            start = 0 if key.start is None else key.start
            stop = size if key.stop is None else key.stop
            start = start + size if start < 0 else start
            stop = stop + size if stop < 0 else stop
            if start < 0:
                continue
            out.extend(self.get(i) for i in range(start, stop))
        return out


class HeaderRegistry:
    """Fallback column labels, used while the row store is empty."""

    def __init__(self, labels: Iterable[Any] = ()) -> None:
        self._labels: list[Any] = list(labels)

    def __len__(self) -> int:
        return len(self._labels)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._labels)

    def copy(self) -> list[Any]:
        return list(self._labels)

    def get(self, index: int) -> Any:
        position = resolve_column(index, len(self._labels))
        return None if position is None else self._labels[position]

    def set(self, index: int, label: Any) -> None:
        if index == len(self._labels):
            self._labels.append(label)
        else:
            self._labels[index] = label

    def index(self, label: Any) -> int | None:
        try:
            return self._labels.index(label)
        except ValueError:
            return None

    def append_if_absent(self, label: Any) -> int:
        position = self.index(label)
        if position is None:
            self._labels.append(label)
            return len(self._labels) - 1
        return position

    def claim(self, label: Any) -> int:
        """Write *label* over its equal at its existing position, or append it."""
        position = self.index(label)
        if position is None:
            position = len(self._labels)
            logger.debug("Adding column %r at position %d", label, position, extra=context(key=label))
        self.set(position, label)
        return position

    def delete_at(self, index: int) -> Any:
        position = resolve_column(index, len(self._labels))
        return None if position is None else self._labels.pop(position)

    def remove(self, label: Any) -> Any:
        """Remove every occurrence of *label*; returns it, or None when absent."""
        if label not in self._labels:
            return None
        self._labels = [existing for existing in self._labels if existing != label]
        return label
