from __future__ import annotations

import csv
import io
import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path
from typing import IO, Any

import numpy as np
import pandas as pd

from csv_table.row import Row
from csv_table.serialize import DEFAULT_OPTIONS, CSVOptions
from csv_table.table import Table

logger = logging.getLogger(__name__)


class BaseReader(ABC):
    """
    Abstract reader turning CSV sources into tables.
    Subclasses must implement _load_raw() and _build_table().
    """

    def read(self, file_path: str | Path) -> Table:
        """Load a file, validate what came back, and build the table."""
        path = Path(file_path).expanduser().resolve(strict=True)
        return self._read_source(path, label=str(path))

    def parse(self, text: str) -> Table:
        """Same as read(), for CSV text already in memory."""
        return self._read_source(io.StringIO(text), label="<text>")

    def _read_source(self, source: Path | IO[str], label: str) -> Table:
        df = self._load_raw(source)
        self._validate_dataframe(df)
        records = self._to_records(df)
        logger.debug("Loaded %d records from %s", len(records), label)
        return self._build_table(records)

    @abstractmethod
    def _load_raw(self, source: Path | IO[str]) -> pd.DataFrame:
        """Load raw string data from the given source. Must be implemented by subclasses."""
        ...

    @abstractmethod
    def _build_table(self, records: list[list[Any]]) -> Table:
        """Turn parsed records into a table. Must be implemented by subclasses."""
        ...

    def _validate_dataframe(self, df: pd.DataFrame) -> None:
        """Ensure the loader returned a DataFrame."""
        if not isinstance(df, pd.DataFrame):
            raise TypeError(f"Expected DataFrame, got {type(df).__name__}")

    def _to_records(self, df: pd.DataFrame) -> list[list[Any]]:
        """Plain lists of fields, with missing values as None."""
        values = df.to_numpy(dtype=object)
        return np.where(pd.isna(values), None, values).tolist()


class CSVReader(BaseReader):
    """Reader for delimited text, with all fields kept as strings.

    *headers* is True to take the first line as headers, a sequence of
    names to use instead, or False for no headers. With *return_headers*
    the header line stays in the table as a header row.
    """

    def __init__(
        self,
        headers: bool | Sequence[str] = True,
        return_headers: bool = False,
        options: CSVOptions = DEFAULT_OPTIONS,
        encoding: str = "utf-8",
    ) -> None:
        self.headers = headers
        self.return_headers = return_headers
        self.options = options
        self.encoding = encoding

    def _load_raw(self, source: Path | IO[str]) -> pd.DataFrame:
        """Load raw CSV data with the configured separator and quoting.

        Lines may hold different numbers of fields. Columns are sized to
        the widest line and each record's own width is kept in
        ``df.attrs["widths"]`` so padding can be dropped again.
        """
        try:
            text = source.read_text(encoding=self.encoding) if isinstance(source, Path) else source.read()
            widths = [len(fields) for fields in csv.reader(io.StringIO(text), **self._dialect()) if fields]
        except UnicodeDecodeError as e:
            raise ValueError(f"Encoding error: {e}") from e
        except csv.Error as e:
            raise ValueError(f"CSV parse error: {e}") from e
        if not widths:
            return pd.DataFrame()
        try:
            df = pd.read_csv(
                io.StringIO(text),
                sep=self.options.col_sep,
                quotechar=self.options.quote_char,
                header=None,
                names=list(range(max(widths))),
                dtype=str,
                keep_default_na=False,
                na_values=[""],
                on_bad_lines="error",
                engine="c",
            )
        except pd.errors.ParserError as e:
            raise ValueError(f"CSV parse error: {e}") from e
        df.attrs["widths"] = widths
        return df

    def _dialect(self) -> dict[str, Any]:
        return {"delimiter": self.options.col_sep, "quotechar": self.options.quote_char}

    def _to_records(self, df: pd.DataFrame) -> list[list[Any]]:
        records = super()._to_records(df)
        widths = df.attrs.get("widths")
        if widths is None or len(widths) != len(records):
            return records
        return [fields[:width] for fields, width in zip(records, widths)]

    def _build_table(self, records: list[list[Any]]) -> Table:
        if self.headers is True:
            if not records:
                return Table([], headers=[])
            names, records = records[0], records[1:]
        elif self.headers:
            names = list(self.headers)
        else:
            return Table([Row([], fields) for fields in records])

        rows = [Row(names, fields) for fields in records]
        if self.return_headers:
            rows.insert(0, Row(names, names, header_row=True))
        return Table(rows, headers=names)
