from typing import Optional, Sequence

from ..data.base import Bounds, Record

def apply_filter(
    records: Sequence[Record],
    bounds: Optional[Bounds] = None,
    enabled: bool = True,
) -> Sequence[Record]:
    """
    Records whose coordinates fall inside `bounds`, in their original order.
    With no bounds, or filtering switched off, the input is returned as is.
    """
    if bounds is None or not enabled:
        return records
    return tuple(r for r in records if bounds.contains(r.latitude, r.longitude))
