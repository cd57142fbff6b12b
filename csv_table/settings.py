from dataclasses import dataclass

from csv_table.cache import NoOpCache, TableCache
from csv_table.keys import AccessMode
from csv_table.reader import BaseReader, CSVReader
from csv_table.serialize import CSVOptions


@dataclass(slots=True)
class TableSettings:
    reader: BaseReader = CSVReader()
    cache_backend: TableCache = NoOpCache()
    mode: AccessMode = AccessMode.MIXED
    csv: CSVOptions = CSVOptions()
    debug: bool = False
