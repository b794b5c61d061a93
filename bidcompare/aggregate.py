"""Per-bid rollups computed from the normalized breakdown."""

from __future__ import annotations

import math
from typing import Any, Dict, Mapping, Union

from .models import Bid, BidSummary
from .normalize import ensure_finite, normalize_bid


def per_bid_summary(bid: Bid) -> Dict[str, int]:
    return {
        "total_services": len(bid.line_items),
        "optional_count": sum(1 for item in bid.line_items if item.is_optional),
    }


def derived_bid_total(bid: Bid) -> float:
    """Sum of the active line item amounts, or the quoted price.

    A breakdown that sums to zero or less is treated as missing rather than as
    a free shipment.
    """

    accumulated = sum(item.amount for item in bid.line_items)
    if math.isfinite(accumulated) and accumulated > 0:
        return float(accumulated)
    return bid.price


def breakdown_status(bid: Bid, estimate_active: bool = False) -> str:
    if bid.line_items:
        return "itemized"
    if estimate_active and not bid.show_breakdown:
        return "locked"
    return "unavailable"


def summarize(bid: Union[Bid, Mapping[str, Any]], estimate_active: bool = False) -> BidSummary:
    bid = normalize_bid(bid)
    counts = per_bid_summary(bid)
    return BidSummary(
        bid_id=bid.id,
        total_services=counts["total_services"],
        optional_count=counts["optional_count"],
        derived_total=ensure_finite(derived_bid_total(bid), "derived bid total"),
        breakdown_status=breakdown_status(bid, estimate_active),
    )


__all__ = ["breakdown_status", "derived_bid_total", "per_bid_summary", "summarize"]
