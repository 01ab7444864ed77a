from datetime import date

import pytest

from geoprice.data.base import Record

SAMPLE_CSV = """address,latitude,longitude,sale_price,sale_date,square_footage,bedrooms
12 Oak St,37.77,-122.42,850000,2024-01-15,1700,3
98 Pine Ave,37.80,-122.41,1200000,2024-02-03,2400,4
5 Elm Ct,37.75,-122.45,640000,2024-02-20,1280,2
7 Birch Rd,37.79,-122.40,990000,2024-03-11,0,3
"""


def make_record(index, address="1 Main St", lat=37.77, lon=-122.42,
                price=500_000.0, sold=date(2024, 1, 1), area=1000.0):
    return Record(
        id=f"{index}-{address}",
        address=address,
        latitude=lat,
        longitude=lon,
        sale_price=price,
        sale_date=sold,
        square_footage=area,
    )


@pytest.fixture
def sample_csv():
    return SAMPLE_CSV


@pytest.fixture
def records():
    return (
        make_record(0, "12 Oak St", 37.77, -122.42, 850_000, date(2024, 1, 15), 1700),
        make_record(1, "98 Pine Ave", 37.80, -122.41, 1_200_000, date(2024, 2, 3), 2400),
        make_record(2, "5 Elm Ct", 37.75, -122.45, 640_000, date(2024, 2, 20), 1280),
    )
