import pytest

from src.ram_points.ram_points.core.exceptions import ValidationError
from src.ram_points.ram_points.imports.rows import parse_row


@pytest.mark.parametrize(
    "row",
    [
        {"Name": "Ada", "Computing ID": "AL1X"},
        {"name": "Ada", "computingId": "al1x"},
        {"NAME": " Ada ", "ComputingId": " Al1x "},
        {"Name": "Ada", "computing_id": "al1x", "Year": "2"},
    ],
)
def test_parse_row_header_variants(row):
    parsed = parse_row(row)

    assert parsed.name == "Ada"
    assert parsed.computing_id == "al1x"


@pytest.mark.parametrize(
    "row",
    [
        {"Name": "", "Computing ID": "al1x"},
        {"Name": "Ada", "Computing ID": "   "},
        {"Name": "Ada"},
        {"Name": None, "Computing ID": None},
        {},
    ],
)
def test_parse_row_rejects_incomplete_rows(row):
    with pytest.raises(ValidationError):
        parse_row(row)
