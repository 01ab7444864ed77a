from typing import Protocol
from dataclasses import dataclass, field
from datetime import date

# ----- Data shapes (thin & explicit) -----

@dataclass(frozen=True)
class Record:
    """One validated sale. price_per_area is fixed at construction."""
    id: str
    address: str
    latitude: float
    longitude: float
    sale_price: float
    sale_date: date
    square_footage: float
    price_per_area: float = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "price_per_area", self.sale_price / self.square_footage)

@dataclass(frozen=True)
class DatasetSummary:
    count: int
    min_price: float
    max_price: float
    avg_price: float
    min_area: float
    max_area: float
    avg_area: float
    min_date: date
    max_date: date
    avg_price_per_area: float

@dataclass(frozen=True)
class Bin:
    start: float
    count: int
    label: str = ""

@dataclass(frozen=True)
class MonthlyPoint:
    month: date   # first day of the month
    label: str    # e.g. "Jan 24"
    value: float

@dataclass(frozen=True)
class MarkerPoint:
    id: str
    latitude: float
    longitude: float
    address: str
    sale_price: float

# ----- Protocols (interfaces) -----

class Bounds(Protocol):
    def contains(self, latitude: float, longitude: float) -> bool: ...

@dataclass(frozen=True)
class LatLngBounds:
    """
    Rectangular map viewport. Edges are inclusive.
    When west > east the box spans the antimeridian.
    """
    south: float
    west: float
    north: float
    east: float

    def __post_init__(self):
        if self.south > self.north:
            raise ValueError(f"south ({self.south}) must not exceed north ({self.north})")

    def contains(self, latitude: float, longitude: float) -> bool:
        if not self.south <= latitude <= self.north:
            return False
        if self.west <= self.east:
            return self.west <= longitude <= self.east
        return longitude >= self.west or longitude <= self.east
