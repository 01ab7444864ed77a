"""CSV → validated Record snapshot."""

from __future__ import annotations

import csv
import io
import logging
import math
from datetime import date, datetime
from pathlib import Path
from typing import Iterable, Mapping, Optional, TextIO, Union

from dateutil import parser as date_parser

from .base import Record
from ..core.errors import CsvParseError, EmptyDatasetError, SchemaError
from ..core.metrics import DATASET_LOADS, ROWS_DROPPED

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("address", "latitude", "longitude", "sale_price", "sale_date", "square_footage")

Row = Mapping[str, Optional[str]]

# Fills the parts a partial date leaves out: "March 2024" is 2024-03-01,
# "2024" is 2024-01-01.
_DATE_DEFAULT = datetime(2000, 1, 1)


def _to_float(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return None
    try:
        value = float(raw.strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _to_date(raw: Optional[str]) -> Optional[date]:
    if raw is None or not raw.strip():
        return None
    try:
        return date_parser.parse(raw.strip(), default=_DATE_DEFAULT).date()
    except (ValueError, OverflowError):
        return None


def _parse_row(index: int, row: Row) -> tuple[Record | None, str | None]:
    """Returns (record, None) or (None, reason)."""
    address = (row.get("address") or "").strip()
    if not address:
        return None, "blank address"

    price = _to_float(row.get("sale_price"))
    area = _to_float(row.get("square_footage"))
    lat = _to_float(row.get("latitude"))
    lon = _to_float(row.get("longitude"))
    if price is None or area is None or lat is None or lon is None:
        return None, "non-numeric field"
    if area <= 0:
        return None, "non-positive square_footage"
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
        return None, "coordinates out of range"

    sold = _to_date(row.get("sale_date"))
    if sold is None:
        return None, "unparseable sale_date"

    return Record(
        id=f"{index}-{address}",
        address=address,
        latitude=lat,
        longitude=lon,
        sale_price=price,
        sale_date=sold,
        square_footage=area,
    ), None


def parse_rows(rows: Iterable[Row], headers: Iterable[str]) -> tuple[Record, ...]:
    """
    Validate the header, then convert each row into a Record.

    Rows that fail conversion are dropped and only counted. A missing required
    column (SchemaError) or an empty result (EmptyDatasetError) aborts the load.
    """
    present = set(headers)
    missing = [c for c in REQUIRED_COLUMNS if c not in present]
    if missing:
        DATASET_LOADS.labels(outcome="schema_error").inc()
        logger.warning("CSV rejected, missing columns: %s", ", ".join(missing))
        raise SchemaError(missing, REQUIRED_COLUMNS)

    records: list[Record] = []
    dropped = 0
    for index, row in enumerate(rows):
        record, reason = _parse_row(index, row)
        if record is None:
            dropped += 1
            logger.debug("Dropping row %d: %s", index, reason)
            continue
        records.append(record)

    if dropped:
        ROWS_DROPPED.inc(dropped)
    if not records:
        DATASET_LOADS.labels(outcome="empty").inc()
        logger.warning("CSV rejected, none of %d rows passed validation", dropped)
        raise EmptyDatasetError()

    DATASET_LOADS.labels(outcome="ok").inc()
    logger.info("Loaded %d properties (%d rows dropped)", len(records), dropped)
    return tuple(records)


def read_csv(source: Union[str, Path, TextIO]) -> tuple[list[str], list[dict[str, Optional[str]]]]:
    """
    Tokenize a CSV file or text stream. Header names are stripped of
    whitespace, blank lines are skipped. Undecodable bytes and tokenizer
    failures raise CsvParseError.
    """
    try:
        if isinstance(source, (str, Path)):
            with open(source, newline="", encoding="utf-8-sig") as fh:
                return _read(fh)
        return _read(source)
    except (UnicodeDecodeError, csv.Error) as exc:
        DATASET_LOADS.labels(outcome="parse_error").inc()
        logger.warning("CSV rejected, unreadable input: %s", exc)
        raise CsvParseError(str(exc)) from exc


def _read(fh: TextIO) -> tuple[list[str], list[dict[str, Optional[str]]]]:
    reader = csv.reader(fh)
    header = next(reader, None)
    if header is None:
        return [], []
    headers = [h.lstrip("\ufeff").strip() for h in header]
    rows = []
    for cells in reader:
        if not any(c.strip() for c in cells):
            continue
        rows.append({h: (cells[i] if i < len(cells) else None) for i, h in enumerate(headers)})
    return headers, rows


def load_csv(source: Union[str, Path, TextIO]) -> tuple[Record, ...]:
    headers, rows = read_csv(source)
    return parse_rows(rows, headers)


def parse_csv_text(text: str) -> tuple[Record, ...]:
    """Same as load_csv for an upload body already held in memory."""
    return load_csv(io.StringIO(text))
