from __future__ import annotations

from pathlib import Path
from typing import List
import sys

import pytest

# Ensure project root is on sys.path for absolute imports
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from bidcompare.models import Bid
from bidcompare.normalize import normalize_bid


@pytest.fixture()
def bid_records() -> List[dict]:
    """Three bids: two itemized, one without a breakdown."""

    return [
        {
            "id": "A",
            "shipper": {"name": "Alpha"},
            "price": 500,
            "line_items": [
                {"category": "Packing", "description": "Crate", "unit_price": 500, "quantity": 1},
            ],
        },
        {
            "id": "B",
            "shipper": {"name": "Beta"},
            "price": 700,
            "line_items": [
                {"category": "Packing", "description": "Crate", "unit_price": 600, "quantity": 1},
                {
                    "category": "Insurance",
                    "description": "Coverage",
                    "unit_price": 50,
                    "is_optional": True,
                },
            ],
        },
        {"id": "C", "shipper": {"name": "Gamma"}, "price": 900, "line_items": []},
    ]


@pytest.fixture()
def bids(bid_records: List[dict]) -> List[Bid]:
    return [normalize_bid(record) for record in bid_records]
