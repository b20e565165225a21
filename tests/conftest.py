import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from db.models import Listing


@pytest.fixture
def make_listing():
    def _make(**overrides) -> Listing:
        fields = {
            "vin": "4T1K61AK0MU123456",
            "make": "Toyota",
            "model": "RAV4",
            "year": 2021,
            "price": 25000,
            "mileage": 28000,
            "images_url": [f"https://images.example.com/{i}.jpg" for i in range(10)],
        }
        fields.update(overrides)
        return Listing(**fields)

    return _make


@pytest.fixture
def raw_record():
    def _make(index: int = 0, **overrides) -> dict:
        record = {
            "vin": f"TESTVIN{index:010d}",
            "make": "Toyota",
            "model": "Camry",
            "year": 2021,
            "price": 20000 + index * 1000,
            "mileage": 30000,
            "title_status": "clean",
            "owner_count": 1,
            "days_on_market": 10,
            "images_url": [f"https://images.example.com/{index}/{i}.jpg" for i in range(8)],
        }
        record.update(overrides)
        return record

    return _make
