from statistics import fmean
from typing import Sequence

from ..core.errors import InsufficientDataError
from ..data.base import DatasetSummary, Record

def compute_summary(records: Sequence[Record]) -> DatasetSummary:
    """
    Descriptive statistics over a non-empty record list.

    avg_price_per_area is the mean of the per-record ratios, which differs
    from avg_price / avg_area whenever square footage varies.
    """
    if not records:
        raise InsufficientDataError("Cannot summarize an empty record set")

    prices = [r.sale_price for r in records]
    areas = [r.square_footage for r in records]
    dates = [r.sale_date for r in records]

    return DatasetSummary(
        count=len(records),
        min_price=min(prices),
        max_price=max(prices),
        avg_price=fmean(prices),
        min_area=min(areas),
        max_area=max(areas),
        avg_area=fmean(areas),
        min_date=min(dates),
        max_date=max(dates),
        avg_price_per_area=fmean(r.price_per_area for r in records),
    )
