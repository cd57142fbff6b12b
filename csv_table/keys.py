"""Key classification and index resolution.

A table key is one of three kinds:
  - INDEX: a plain integer
  - RANGE: a ``slice`` or ``range`` of integers with step 1
  - NAME:  anything else (column labels)

Which axis a key addresses depends on the table's access mode; the
mapping is the static ``_DISPATCH`` table below. Everything here is pure.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

__all__ = [
    "AccessMode",
    "Axis",
    "KeyKind",
    "classify",
    "dispatch",
    "dispatch_many",
    "is_integer",
    "resolve_column",
    "resolve_index",
    "resolve_range",
]


class AccessMode(Enum):
    ROW = "row"
    COLUMN = "col"
    MIXED = "col_or_row"

    def __str__(self) -> str:
        return self.value


class KeyKind(Enum):
    INDEX = "index"
    RANGE = "range"
    NAME = "name"


class Axis(Enum):
    ROW = "row"
    COLUMN = "column"


# None marks a key that has no meaning under the mode
_DISPATCH: dict[tuple[AccessMode, KeyKind], Axis | None] = {
    (AccessMode.ROW, KeyKind.INDEX): Axis.ROW,
    (AccessMode.ROW, KeyKind.RANGE): Axis.ROW,
    (AccessMode.ROW, KeyKind.NAME): None,
    (AccessMode.COLUMN, KeyKind.INDEX): Axis.COLUMN,
    (AccessMode.COLUMN, KeyKind.RANGE): Axis.COLUMN,
    (AccessMode.COLUMN, KeyKind.NAME): Axis.COLUMN,
    (AccessMode.MIXED, KeyKind.INDEX): Axis.ROW,
    (AccessMode.MIXED, KeyKind.RANGE): Axis.ROW,
    (AccessMode.MIXED, KeyKind.NAME): Axis.COLUMN,
}


def is_integer(value: Any) -> bool:
    """True for ints, but not for bools."""
    return isinstance(value, int) and not isinstance(value, bool)


def _is_integer_range(key: Any) -> bool:
    if isinstance(key, range):
        return key.step == 1
    if isinstance(key, slice):
        bounds_ok = all(b is None or is_integer(b) for b in (key.start, key.stop))
        return bounds_ok and key.step in (None, 1)
    return False


def classify(key: Any) -> KeyKind:
    """Return the kind of *key*."""
    if is_integer(key):
        return KeyKind.INDEX
    if _is_integer_range(key):
        return KeyKind.RANGE
    return KeyKind.NAME


def dispatch(mode: AccessMode, key: Any) -> Axis:
    """Return the axis *key* addresses under *mode*.

    Raises TypeError for keys that cannot be interpreted under the mode
    (a column name in row mode, or a slice with a step).
    """
    if isinstance(key, (slice, range)) and not _is_integer_range(key):
        raise TypeError(f"Only contiguous integer ranges are supported, got {key!r}")
    axis = _DISPATCH[(mode, classify(key))]
    if axis is None:
        raise TypeError(f"No implicit conversion of {type(key).__name__} into an integer index ({mode} mode)")
    return axis


def dispatch_many(mode: AccessMode, keys: tuple[Any, ...]) -> Axis:
    """Axis for a variadic key list.

    In mixed mode the keys address rows only when every one of them is an
    integer or an integer range; in row mode every key must be row-like.
    """
    if mode is AccessMode.COLUMN:
        return Axis.COLUMN
    if mode is AccessMode.ROW:
        for key in keys:
            dispatch(mode, key)
        return Axis.ROW
    if all(classify(key) is not KeyKind.NAME for key in keys):
        return Axis.ROW
    return Axis.COLUMN


def resolve_index(index: int, size: int) -> int | None:
    """Resolve a possibly negative *index* against *size*; None when out of range."""
    if index < 0:
        index += size
    if 0 <= index < size:
        return index
    return None


def resolve_range(key: slice | range, size: int) -> tuple[int, int] | None:
    """Resolve an integer range against *size*.

    Returns ``(start, stop)`` with an exclusive stop, clamped to *size*.
    A start equal to *size* resolves to an empty span; a start past
    *size* (or before the first element) resolves to None.
    """
    start, stop = key.start, key.stop
    start = 0 if start is None else start
    if start < 0:
        start += size
        if start < 0:
            return None
    if start > size:
        return None
    if stop is None:
        stop = size
    elif stop < 0:
        stop += size
    stop = max(start, min(stop, size))
    return start, stop


def resolve_column(index: int, width: int) -> int | None:
    """Resolve a column position against the header count *width*."""
    return resolve_index(index, width)
