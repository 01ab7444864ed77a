"""
Dashboard session: the loaded snapshot, the map filter and the views the
presentation layer renders.

State machine:
  Empty --load--> Loaded(records)
  Loaded|Filtered --set_bounds/set_filtering--> Filtered(records, active)
  any --reset--> Empty
A failed load leaves the current state untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, TextIO, Union

from ..core.config import settings
from ..core.errors import InsightsPendingError
from ..data.base import Bin, Bounds, DatasetSummary, MarkerPoint, MonthlyPoint, Record
from ..data.parser import Row, load_csv, parse_csv_text, parse_rows
from ..models.base import InsightGenerator
from ..models.provider import insights_generator, run_generator
from .histogram import price_histogram
from .insights import build_insight_request
from .spatial import apply_filter
from .stats import compute_summary
from .timeseries import price_per_area_trend, sales_volume

logger = logging.getLogger(__name__)

# Map centre when nothing is loaded (San Francisco)
DEFAULT_CENTER = (37.7749, -122.4194)


@dataclass(frozen=True)
class Empty:
    pass


@dataclass(frozen=True)
class Loaded:
    records: tuple[Record, ...]


@dataclass(frozen=True)
class Filtered:
    records: tuple[Record, ...]
    active: tuple[Record, ...]
    bounds: Optional[Bounds]
    filter_enabled: bool


DashboardState = Union[Empty, Loaded, Filtered]


class Dashboard:
    def __init__(
        self,
        generator: Optional[InsightGenerator] = None,
        bin_count: Optional[int] = None,
        currency: Optional[str] = None,
    ):
        self.generator = generator or insights_generator()
        self.bin_count = self._check_bins(settings.HISTOGRAM_BINS if bin_count is None else bin_count)
        self.currency = currency or settings.DEFAULT_CURRENCY
        self.state: DashboardState = Empty()
        self.bounds: Optional[Bounds] = None
        self.filter_enabled = True
        self._insights_pending = False

    # ----- transitions -----

    def load(self, rows: Iterable[Row], headers: Iterable[str]) -> tuple[Record, ...]:
        return self._replace(parse_rows(rows, headers))

    def load_csv(self, source: Union[str, Path, TextIO]) -> tuple[Record, ...]:
        return self._replace(load_csv(source))

    def load_text(self, text: str) -> tuple[Record, ...]:
        return self._replace(parse_csv_text(text))

    def set_bounds(self, bounds: Optional[Bounds]) -> None:
        self.bounds = bounds
        self._refilter()

    def set_filtering(self, enabled: bool) -> None:
        self.filter_enabled = bool(enabled)
        self._refilter()

    def reset(self) -> None:
        self.state = Empty()
        self.bounds = None
        logger.info("Dashboard reset")

    def _replace(self, records: tuple[Record, ...]) -> tuple[Record, ...]:
        self.bounds = None
        self.state = Loaded(records)
        return records

    def _refilter(self) -> None:
        if isinstance(self.state, Empty):
            return
        records = self.state.records
        active = tuple(apply_filter(records, self.bounds, self.filter_enabled))
        self.state = Filtered(records, active, self.bounds, self.filter_enabled)

    # ----- views -----

    @property
    def records(self) -> tuple[Record, ...]:
        if isinstance(self.state, Empty):
            return ()
        return self.state.records

    @property
    def active_records(self) -> tuple[Record, ...]:
        if isinstance(self.state, Filtered):
            return self.state.active
        return self.records

    @property
    def insights_pending(self) -> bool:
        return self._insights_pending

    def summary(self) -> Optional[DatasetSummary]:
        active = self.active_records
        return compute_summary(active) if active else None

    def histogram(self, bin_count: Optional[int] = None) -> List[Bin]:
        active = self.active_records
        if not active:
            return []
        bins = self._check_bins(bin_count) if bin_count is not None else self.bin_count
        return price_histogram(active, bins, self.currency)

    def price_per_area_series(self) -> List[MonthlyPoint]:
        return price_per_area_trend(self.active_records)

    def sales_volume_series(self) -> List[MonthlyPoint]:
        return sales_volume(self.active_records)

    def markers(self) -> List[MarkerPoint]:
        """Every loaded sale, regardless of the current viewport."""
        return [
            MarkerPoint(id=r.id, latitude=r.latitude, longitude=r.longitude,
                        address=r.address, sale_price=r.sale_price)
            for r in self.records
        ]

    def map_center(self) -> tuple[float, float]:
        records = self.records
        if not records:
            return DEFAULT_CENTER
        lat = sum(r.latitude for r in records) / len(records)
        lon = sum(r.longitude for r in records) / len(records)
        return lat, lon

    async def generate_insights(self, focus: Optional[str] = None) -> str:
        """
        Ask the text-generation backend about the active records.
        Only one request may be in flight per session.
        """
        if self._insights_pending:
            raise InsightsPendingError("An insight request is already in progress")
        request = build_insight_request(self.summary(), focus, self.currency)
        self._insights_pending = True
        try:
            return await run_generator(self.generator, request)
        finally:
            self._insights_pending = False

    @staticmethod
    def _check_bins(bin_count: int) -> int:
        lo, hi = settings.HISTOGRAM_MIN_BINS, settings.HISTOGRAM_MAX_BINS
        if not lo <= bin_count <= hi:
            raise ValueError(f"bin_count must be between {lo} and {hi}, got {bin_count}")
        return bin_count
