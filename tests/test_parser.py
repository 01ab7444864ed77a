import io
from datetime import date

import pytest

from geoprice.core.errors import CsvParseError, DatasetLoadError, EmptyDatasetError, SchemaError
from geoprice.data.parser import REQUIRED_COLUMNS, load_csv, parse_csv_text, parse_rows, read_csv


def row(**overrides):
    base = {
        "address": "1 Main St",
        "latitude": "37.77",
        "longitude": "-122.42",
        "sale_price": "500000",
        "sale_date": "2024-01-01",
        "square_footage": "1000",
    }
    base.update(overrides)
    return base


def test_drops_zero_footage_row(sample_csv):
    records = parse_csv_text(sample_csv)
    assert len(records) == 3
    assert [r.address for r in records] == ["12 Oak St", "98 Pine Ave", "5 Elm Ct"]


def test_record_fields_and_ids(sample_csv):
    first = parse_csv_text(sample_csv)[0]
    assert first.id == "0-12 Oak St"
    assert first.latitude == 37.77
    assert first.sale_date == date(2024, 1, 15)
    assert first.price_per_area == 850000 / 1700


def test_price_per_area_matches_inputs(sample_csv):
    for r in parse_csv_text(sample_csv):
        assert r.price_per_area == r.sale_price / r.square_footage


def test_missing_column_names_it():
    headers = [c for c in REQUIRED_COLUMNS if c != "square_footage"]
    with pytest.raises(SchemaError) as exc:
        parse_rows([row()], headers)
    assert exc.value.missing == ("square_footage",)
    assert "square_footage" in str(exc.value)


def test_missing_several_columns_in_required_order():
    with pytest.raises(SchemaError) as exc:
        parse_rows([], ["address", "sale_price"])
    assert exc.value.missing == ("latitude", "longitude", "sale_date", "square_footage")


def test_all_rows_invalid_raises_empty():
    rows = [row(square_footage="0"), row(sale_price="abc"), row(sale_date="unknown"), row(latitude="")]
    with pytest.raises(EmptyDatasetError):
        parse_rows(rows, REQUIRED_COLUMNS)


@pytest.mark.parametrize("bad", [
    {"sale_price": "n/a"},
    {"square_footage": "-10"},
    {"latitude": "nan"},
    {"longitude": "inf"},
    {"latitude": "91"},
    {"sale_date": "sometime"},
    {"sale_date": ""},
    {"address": "   "},
    {"sale_price": None},
])
def test_invalid_rows_are_dropped_silently(bad):
    records = parse_rows([row(**bad), row(address="2 Main St")], REQUIRED_COLUMNS)
    assert [r.address for r in records] == ["2 Main St"]
    # ordinal comes from the source position, not the output position
    assert records[0].id == "1-2 Main St"


def test_extra_columns_ignored_and_whitespace_tolerated():
    records = parse_rows([row(sale_price=" 410000 ", notes="corner lot")], list(REQUIRED_COLUMNS) + ["notes"])
    assert records[0].sale_price == 410000.0


def test_other_date_formats():
    records = parse_rows([row(sale_date="03/15/2023"), row(sale_date="July 4, 2022")], REQUIRED_COLUMNS)
    assert [r.sale_date for r in records] == [date(2023, 3, 15), date(2022, 7, 4)]


def test_read_csv_skips_blank_lines_and_strips_headers():
    text = "\ufeffaddress , latitude,longitude,sale_price,sale_date,square_footage\n\n1 A St,1,2,3,2024-01-01,4\n,,,,,\n"
    headers, rows = read_csv(io.StringIO(text))
    assert headers == list(REQUIRED_COLUMNS)
    assert len(rows) == 1
    assert rows[0]["address"] == "1 A St"


def test_short_rows_yield_missing_cells():
    text = "address,latitude,longitude,sale_price,sale_date,square_footage\n1 A St,1,2\n"
    headers, rows = read_csv(io.StringIO(text))
    assert rows[0]["square_footage"] is None
    with pytest.raises(EmptyDatasetError):
        parse_rows(rows, headers)


def test_load_csv_from_path(tmp_path, sample_csv):
    path = tmp_path / "sales.csv"
    path.write_text(sample_csv, encoding="utf-8")
    assert len(load_csv(path)) == 3
    assert len(load_csv(str(path))) == 3


def test_header_only_file_is_empty():
    with pytest.raises(EmptyDatasetError):
        parse_csv_text(",".join(REQUIRED_COLUMNS) + "\n")


def test_empty_file_is_schema_error():
    with pytest.raises(SchemaError):
        parse_csv_text("")


@pytest.mark.parametrize("raw,expected", [
    ("March 2024", date(2024, 3, 1)),
    ("2024", date(2024, 1, 1)),
    ("2024-06", date(2024, 6, 1)),
])
def test_partial_dates_fill_first_of_period(raw, expected):
    records = parse_rows([row(sale_date=raw)], REQUIRED_COLUMNS)
    assert records[0].sale_date == expected


def test_undecodable_file_is_load_error(tmp_path):
    path = tmp_path / "sales.csv"
    path.write_bytes(b"address,latitude\n\xff\xfe,1\n")
    with pytest.raises(CsvParseError) as exc:
        load_csv(path)
    assert isinstance(exc.value, DatasetLoadError)
    assert str(exc.value).startswith("Error parsing CSV:")
    assert isinstance(exc.value.__cause__, UnicodeDecodeError)


def test_oversized_field_is_load_error():
    header = ",".join(REQUIRED_COLUMNS)
    text = f"{header}\n{'x' * 200_000},1,2,3,2024-01-01,4\n"
    with pytest.raises(CsvParseError):
        parse_csv_text(text)
