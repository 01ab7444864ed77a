from datetime import date
from enum import Enum
from typing import Dict, List, Sequence

from ..core.utils import month_label
from ..data.base import MonthlyPoint, Record

AVERAGE_FIELDS = ("price_per_area", "sale_price", "square_footage")

class AggregationMode(str, Enum):
    COUNT = "count"
    AVERAGE = "average"

def aggregate_by_month(
    records: Sequence[Record],
    mode: AggregationMode = AggregationMode.COUNT,
    field: str = "price_per_area",
) -> List[MonthlyPoint]:
    """
    Group sales by calendar month of sale_date.

    COUNT → number of sales per month; AVERAGE → mean of `field` per month.
    Points come back in chronological order.
    """
    mode = AggregationMode(mode)
    if mode is AggregationMode.AVERAGE and field not in AVERAGE_FIELDS:
        raise ValueError(f"Cannot average field {field!r}; expected one of {AVERAGE_FIELDS}")

    totals: Dict[date, float] = {}
    counts: Dict[date, int] = {}
    for r in records:
        month = r.sale_date.replace(day=1)
        counts[month] = counts.get(month, 0) + 1
        if mode is AggregationMode.AVERAGE:
            totals[month] = totals.get(month, 0.0) + getattr(r, field)

    out: List[MonthlyPoint] = []
    for month in sorted(counts):
        if mode is AggregationMode.COUNT:
            value = counts[month]
        else:
            value = totals[month] / counts[month]
        out.append(MonthlyPoint(month=month, label=month_label(month), value=value))
    return out

def sales_volume(records: Sequence[Record]) -> List[MonthlyPoint]:
    return aggregate_by_month(records, AggregationMode.COUNT)

def price_per_area_trend(records: Sequence[Record]) -> List[MonthlyPoint]:
    return aggregate_by_month(records, AggregationMode.AVERAGE, "price_per_area")
