"""Field-level CSV rendering and nested lookups shared by rows and tables."""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Any

from csv_table.keys import is_integer, resolve_index

__all__ = ["CSVOptions", "dig", "fields_to_csv"]


@dataclass(frozen=True, slots=True)
class CSVOptions:
    col_sep: str = ","
    row_sep: str = "\n"
    quote_char: str = '"'
    force_quotes: bool = False
    write_nil_value: Any = None
    write_empty_value: Any = ""

    def merged(self, **overrides: Any) -> CSVOptions:
        """Return a copy with *overrides* applied."""
        return replace(self, **overrides) if overrides else self


DEFAULT_OPTIONS = CSVOptions()


def _substitute(value: Any, options: CSVOptions) -> Any:
    if value is None:
        value = options.write_nil_value
    if value == "":
        value = options.write_empty_value
    return "" if value is None else value


def fields_to_csv(values: Iterable[Any], options: CSVOptions = DEFAULT_OPTIONS) -> str:
    """Render *values* as one CSV line, including the row separator."""
    buffer = io.StringIO()
    writer = csv.writer(
        buffer,
        delimiter=options.col_sep,
        quotechar=options.quote_char,
        lineterminator=options.row_sep,
        quoting=csv.QUOTE_ALL if options.force_quotes else csv.QUOTE_MINIMAL,
    )
    writer.writerow([_substitute(v, options) for v in values])
    return buffer.getvalue()


def dig(value: Any, *keys: Any) -> Any:
    """Follow *keys* into *value*, returning None on the first miss.

    Objects with their own ``dig`` take over the rest of the path; lists
    and tuples are indexed by integer, mappings by key. Anything else
    raises TypeError.
    """
    if not keys or value is None:
        return value
    if hasattr(value, "dig"):
        return value.dig(*keys)
    first, *rest = keys
    return dig(_step(value, first), *rest)


def _step(value: Any, key: Any) -> Any:
    if isinstance(value, Mapping):
        return value.get(key)
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        if not is_integer(key):
            raise TypeError(f"No implicit conversion of {type(key).__name__} into an integer index")
        position = resolve_index(key, len(value))
        return None if position is None else value[position]
    raise TypeError(f"{type(value).__name__} does not support dig")
