"""Conversions between tables and pandas / Arrow objects."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pyarrow as pa

from csv_table.row import Row
from csv_table.table import Table

__all__ = ["from_frame", "to_arrow", "to_frame"]


def to_frame(table: Table) -> pd.DataFrame:
    """DataFrame of the data rows, labelled with the table's headers.

    Header rows and absent slots are left out; missing fields are None.
    """
    headers, *records = table.to_list()
    width = len(headers)
    # rows longer than the header list are cut, shorter ones padded
    data = [list(fields[:width]) + [None] * (width - len(fields)) for fields in records]
    return pd.DataFrame(data, columns=pd.Index(headers, dtype=object), dtype=object)


def from_frame(df: pd.DataFrame) -> Table:
    """Table with one row per DataFrame record; NaN becomes None."""
    headers = [str(column) if not isinstance(column, str) else column for column in df.columns]
    values = df.to_numpy(dtype=object)
    values = np.where(pd.isna(values), None, values)
    return Table([Row(headers, fields) for fields in values.tolist()], headers=headers)


def to_arrow(table: Table) -> pa.Table:
    """Arrow table of the data rows, every column as nullable strings."""
    headers, *records = table.to_list()
    names, arrays = [], []
    for position, name in enumerate(headers):
        names.append(name if isinstance(name, str) else f"column_{position}")
        values = [fields[position] if position < len(fields) else None for fields in records]
        arrays.append(pa.array([None if v is None else str(v) for v in values], type=pa.string()))
    return pa.Table.from_arrays(arrays, names=names)
