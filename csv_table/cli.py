#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import logging
import re
import sys
import traceback
from pathlib import Path
from typing import Any

from csv_table.cache import CSVCache, NoOpCache, ParquetCache, TableCache
from csv_table.keys import AccessMode
from csv_table.logs import setup_logging
from csv_table.reader import CSVReader
from csv_table.row import Row
from csv_table.serialize import CSVOptions, fields_to_csv
from csv_table.settings import TableSettings
from csv_table.table import Table

_INT = re.compile(r"^-?\d+$")
_RANGE = re.compile(r"^(-?\d*):(-?\d*)$")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="csv-table", description="Print rows or columns from a CSV file")
    p.add_argument("file", type=Path, help="Path to the CSV file")
    p.add_argument("--no-headers", action="store_true", help="Treat the first line as data, not headers")
    p.add_argument("--col-sep", default=",", help="Field separator (default: ',')")
    p.add_argument(
        "--mode",
        choices=[m.value for m in AccessMode],
        default=AccessMode.MIXED.value,
        help="How keys are interpreted: by row, by column, or by key type (default)",
    )
    p.add_argument("--get", action="append", default=[], metavar="KEY", help="Row index, range (a:b) or column name")
    p.add_argument("--delete", action="append", default=[], metavar="KEY", help="Row or column to delete first")
    p.add_argument("--format", choices=["csv", "json"], default="csv", help="Output format")
    p.add_argument("--save", choices=["csv", "parquet"], help="Save the resulting table to a cache backend")
    p.add_argument("--output", "-o", type=Path, help="Directory to store cached tables")
    p.add_argument("--scope", help="Cache scope (subdirectory) for --save")
    p.add_argument("--debug", action="store_true", help="Log at DEBUG level and print full traceback on error")
    return p.parse_args(argv)


def parse_key(text: str) -> Any:
    """'3' is a row index, '1:3' a range, anything else a column name."""
    if _INT.match(text):
        return int(text)
    if match := _RANGE.match(text):
        start, stop = (int(part) if part else None for part in match.groups())
        return slice(start, stop)
    return text


def select_cache(kind: str | None, root: Path | None) -> TableCache:
    if kind is None:
        return NoOpCache()
    if kind == "csv":
        return CSVCache(cache_root=root)
    if kind == "parquet":
        return ParquetCache(cache_root=root)
    raise ValueError(f"Unsupported cache type: {kind!r}")


def build_cfg(args: argparse.Namespace) -> TableSettings:
    options = CSVOptions(col_sep=args.col_sep)
    return TableSettings(
        reader=CSVReader(headers=not args.no_headers, options=options),
        cache_backend=select_cache(args.save, args.output),
        mode=AccessMode(args.mode),
        csv=options,
        debug=args.debug,
    )


def apply_mode(table: Table, mode: AccessMode) -> Table:
    switches = {
        AccessMode.ROW: table.by_row,
        AccessMode.COLUMN: table.by_col,
        AccessMode.MIXED: table.by_col_or_row,
    }
    return switches[mode](inplace=True)


def to_jsonable(value: Any) -> Any:
    if isinstance(value, Table):
        return value.to_list()
    if isinstance(value, Row):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    return value


def to_csv_text(value: Any, options: CSVOptions) -> str:
    if value is None:
        return ""
    if isinstance(value, Table):
        return value.to_csv(options=options)
    if isinstance(value, Row):
        return value.to_csv(options)
    if isinstance(value, (list, tuple)):
        lines = []
        for item in value:
            if isinstance(item, Row):
                lines.append(item.to_csv(options))
            elif isinstance(item, (list, tuple)):
                lines.append(fields_to_csv(item, options))
            else:
                lines.append(fields_to_csv([item], options))
        return "".join(lines)
    return fields_to_csv([value], options)


def render(selections: list[Any], fmt: str, options: CSVOptions) -> str:
    if fmt == "json":
        payload = to_jsonable(selections[0] if len(selections) == 1 else selections)
        return json.dumps(payload, ensure_ascii=False) + "\n"
    return "".join(to_csv_text(value, options) for value in selections)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    cfg = build_cfg(args)
    setup_logging(logging.DEBUG if cfg.debug else logging.WARNING)

    try:
        table = apply_mode(cfg.reader.read(args.file), cfg.mode)
        if args.delete:
            table.delete(*(parse_key(key) for key in args.delete))
        if args.save:
            cfg.cache_backend.save(args.scope, {args.file.stem: table})

        selections = [table[parse_key(key)] for key in args.get] or [table]
        sys.stdout.write(render(selections, args.format, cfg.csv))

        payload: dict[str, Any] = {"status": "ok", "rows": table.size}
        exit_code = 0
    except Exception as exc:
        if cfg.debug:
            traceback.print_exc()
        payload = {"status": "error", "message": str(exc)}
        exit_code = 1

    print(json.dumps(payload, ensure_ascii=False), flush=True, file=sys.stderr)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
