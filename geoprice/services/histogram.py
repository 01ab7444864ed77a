from typing import List, Sequence

import numpy as np

from ..core.config import settings
from ..core.errors import InsufficientDataError
from ..core.utils import format_compact_currency
from ..data.base import Bin, Record

def bin_values(values: Sequence[float], bin_count: int) -> List[Bin]:
    """
    Equal-width histogram over [min, max] with `bin_count` buckets.

    Every value lands in exactly one bucket: the maximum goes into the last
    bucket rather than an extra one, and when all values are equal (zero
    width) everything goes into bucket 0.
    """
    if isinstance(bin_count, bool) or not isinstance(bin_count, (int, np.integer)) or bin_count < 1:
        raise ValueError(f"bin_count must be a positive integer, got {bin_count!r}")
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        raise InsufficientDataError("Cannot bin an empty value list")

    lo = float(arr.min())
    hi = float(arr.max())
    width = (hi - lo) / bin_count

    if width > 0:
        idx = np.floor((arr - lo) / width).astype(np.int64)
        idx = np.clip(idx, 0, bin_count - 1)
    else:
        idx = np.zeros(arr.size, dtype=np.int64)

    counts = np.bincount(idx, minlength=bin_count)
    return [Bin(start=lo + i * width, count=int(c)) for i, c in enumerate(counts)]

def price_histogram(records: Sequence[Record], bin_count: int, currency: str | None = None) -> List[Bin]:
    """Sale-price histogram with compact currency labels ($350K, $1.2M)."""
    currency = currency or settings.DEFAULT_CURRENCY
    bins = bin_values([r.sale_price for r in records], bin_count)
    return [Bin(start=b.start, count=b.count, label=format_compact_currency(b.start, currency)) for b in bins]
