__version__ = "0.1.0"

from .cache import CSVCache, NoOpCache, ParquetCache, TableCache
from .keys import AccessMode
from .reader import BaseReader, CSVReader
from .row import Row, RowLike
from .serialize import CSVOptions
from .settings import TableSettings
from .table import Table, TableView

__all__ = [
    "AccessMode",
    "BaseReader",
    "CSVCache",
    "CSVOptions",
    "CSVReader",
    "NoOpCache",
    "ParquetCache",
    "Row",
    "RowLike",
    "Table",
    "TableCache",
    "TableSettings",
    "TableView",
]
