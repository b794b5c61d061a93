"""Normalization of loosely-typed bid line items."""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, List, Mapping, Optional, Union

from .models import (
    DEFAULT_SORT_ORDER,
    Bid,
    NormalizedLineItem,
    RawLineItem,
    Shipper,
)

logger = logging.getLogger(__name__)

DESCRIPTION_SEPARATOR = " • "

LineItemLike = Union[RawLineItem, Mapping[str, Any]]


def normalize_text(token: Any) -> str:
    """Return ``token`` as display text with underscores turned into spaces."""

    if token is None:
        return ""
    return str(token).replace("_", " ").strip()


def normalize_description(value: Any) -> str:
    """Flatten a scalar or list description into a single display string."""

    if isinstance(value, (list, tuple)):
        parts = [normalize_text(part) for part in value if part]
        return DESCRIPTION_SEPARATOR.join(parts).strip()
    return normalize_text(value)


def to_number(value: Any) -> float:
    """Coerce ``value`` to a float, returning NaN when it is not numeric.

    Blank strings count as zero and booleans as 0/1. Digit separators such
    as ``"1_000"`` are not numbers.
    """

    if value is None:
        return math.nan
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if "_" in text:
            return math.nan
        value = text
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return math.nan


def ensure_finite(value: float, label: str) -> float:
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"{label} must be finite, got {value!r}")
    return number


def compute_amount(item: LineItemLike) -> float:
    """Return the canonical total of a line item.

    An explicit, finite ``total_amount`` always wins. Otherwise the amount is
    ``quantity * unit_price`` where a missing, zero or unusable quantity
    counts as 1 and an unusable unit price counts as 0.
    """

    item = RawLineItem.coerce(item)

    quantity = to_number(1 if item.quantity is None else item.quantity)
    if not math.isfinite(quantity) or quantity == 0:
        quantity = 1.0
    unit = to_number(0 if item.unit_price is None else item.unit_price)
    if not math.isfinite(unit):
        unit = 0.0

    fallback_total = quantity * unit
    if not math.isfinite(fallback_total):
        logger.warning(
            "Line item %r overflows (quantity=%r, unit_price=%r); using 0",
            item.id,
            item.quantity,
            item.unit_price,
        )
        fallback_total = 0.0

    if item.total_amount is None:
        return fallback_total
    raw_total = to_number(item.total_amount)
    return raw_total if math.isfinite(raw_total) else fallback_total


def filter_active(items: Iterable[Optional[LineItemLike]]) -> List[RawLineItem]:
    """Drop empty entries and items explicitly flagged ``is_active=False``."""

    active: List[RawLineItem] = []
    for item in items:
        if item is None:
            continue
        raw = RawLineItem.coerce(item)
        if raw.is_active is False:
            continue
        active.append(raw)
    return active


def effective_sort_order(value: Any) -> float:
    if value is None:
        return float(DEFAULT_SORT_ORDER)
    number = to_number(value)
    if not math.isfinite(number):
        return float(DEFAULT_SORT_ORDER)
    return number


def sort_by_sort_order(items: Iterable[LineItemLike]) -> List[RawLineItem]:
    """Stable ascending sort by ``sort_order``; unknown orders go last."""

    raw_items = [RawLineItem.coerce(item) for item in items]
    return sorted(raw_items, key=lambda item: effective_sort_order(item.sort_order))


def normalize_line_item(item: LineItemLike) -> NormalizedLineItem:
    raw = RawLineItem.coerce(item)
    return NormalizedLineItem(
        id=raw.id,
        category_text=normalize_description(raw.category),
        description_text=normalize_description(raw.description),
        amount=ensure_finite(compute_amount(raw), "line item amount"),
        is_optional=bool(raw.is_optional),
        notes=None if raw.notes is None else str(raw.notes),
        effective_sort_order=effective_sort_order(raw.sort_order),
    )


def normalize_line_items(items: Iterable[Optional[LineItemLike]]) -> List[NormalizedLineItem]:
    """Filter, sort and normalize one bid's raw breakdown."""

    return [normalize_line_item(item) for item in sort_by_sort_order(filter_active(items))]


def normalize_bid(record: Union[Bid, Mapping[str, Any]]) -> Bid:
    """Build a :class:`Bid` from a loosely-typed bid record.

    Anything that is not a mapping is treated as an empty record.
    """

    if isinstance(record, Bid):
        return record
    if not isinstance(record, Mapping):
        logger.warning("Bid record %r is not a mapping; treating it as empty", record)
        record = {}

    raw_items = record.get("line_items") or []
    if not isinstance(raw_items, (list, tuple)):
        logger.warning("Bid %r has malformed line_items; ignoring breakdown", record.get("id"))
        raw_items = []

    usable: List[Optional[LineItemLike]] = []
    for entry in raw_items:
        if entry is None or isinstance(entry, (RawLineItem, Mapping)):
            usable.append(entry)
        else:
            logger.warning("Skipping malformed line item %r on bid %r", entry, record.get("id"))

    price = to_number(record.get("price", record.get("amount")))
    co2 = to_number(record.get("co2_tonnes"))
    delivery_time = record.get("delivery_time")

    return Bid(
        id=record.get("id"),
        price=price if math.isfinite(price) else 0.0,
        line_items=normalize_line_items(usable),
        shipper=_parse_shipper(record.get("shipper")),
        delivery_time=None if delivery_time is None else str(delivery_time),
        co2_tonnes=co2 if math.isfinite(co2) else 0.0,
        status=record.get("status"),
        show_breakdown=bool(record.get("show_breakdown")),
    )


def normalize_bids(records: Iterable[Any]) -> List[Bid]:
    """Normalize every usable bid record, skipping entries that are not bids."""

    bids: List[Bid] = []
    for index, record in enumerate(records):
        if not isinstance(record, (Bid, Mapping)):
            logger.warning("Skipping bid #%d: not a mapping", index)
            continue
        bids.append(normalize_bid(record))
    return bids


def _shipper_text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _parse_shipper(value: Any) -> Shipper:
    if isinstance(value, Shipper):
        return value
    if isinstance(value, Mapping):
        return Shipper(
            name=_shipper_text(value.get("name")),
            abbreviation=_shipper_text(value.get("abbreviation")),
            brand_color=value.get("brand_color"),
        )
    return Shipper(name=_shipper_text(value))


__all__ = [
    "DESCRIPTION_SEPARATOR",
    "compute_amount",
    "effective_sort_order",
    "ensure_finite",
    "filter_active",
    "normalize_bid",
    "normalize_bids",
    "normalize_description",
    "normalize_line_item",
    "normalize_line_items",
    "normalize_text",
    "sort_by_sort_order",
    "to_number",
]
