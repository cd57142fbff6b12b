import pytest

from csv_table import CSVReader, Row, Table

HEADERS = ["Name", "Value"]


@pytest.fixture(scope="session")
def source() -> str:
    return "Name,Value\nfoo,0\nbar,1\nbaz,2\n"


@pytest.fixture
def table() -> Table:
    """The three-row Name/Value table used throughout the docs."""
    return Table([Row(HEADERS, fields) for fields in [["foo", "0"], ["bar", "1"], ["baz", "2"]]])


@pytest.fixture
def four_rows() -> Table:
    return Table([Row(HEADERS, [name, str(i)]) for i, name in enumerate(["foo", "bar", "baz", "bat"])])


@pytest.fixture
def with_header_row(source: str) -> Table:
    return CSVReader(return_headers=True).parse(source)
