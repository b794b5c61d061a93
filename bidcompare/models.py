"""Data structures shared by the bid reconciliation engine."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, List, Mapping, Optional, Union

DEFAULT_SORT_ORDER = 9999


@dataclass
class RawLineItem:
    """A line item exactly as supplied by the data-access layer.

    Every field is optional apart from ``unit_price`` and values are not
    validated; the normalizer is responsible for coercing them.
    """

    id: Any = None
    category: Any = None
    description: Any = None
    quantity: Any = None
    unit_price: Any = 0
    total_amount: Any = None
    is_optional: Any = None
    notes: Optional[str] = None
    sort_order: Any = None
    is_active: Any = None

    @classmethod
    def from_mapping(cls, record: Mapping[str, Any]) -> "RawLineItem":
        known = {info.name for info in fields(cls)}
        values = {key: value for key, value in record.items() if key in known}
        if values.get("unit_price") is None:
            values["unit_price"] = 0
        return cls(**values)

    @classmethod
    def coerce(cls, item: Union["RawLineItem", Mapping[str, Any]]) -> "RawLineItem":
        if isinstance(item, RawLineItem):
            return item
        return cls.from_mapping(item)


@dataclass
class NormalizedLineItem:
    """Canonical form of a line item; ``amount`` is always finite."""

    id: Any
    category_text: str
    description_text: str
    amount: float
    is_optional: bool
    notes: Optional[str] = None
    effective_sort_order: float = DEFAULT_SORT_ORDER


@dataclass
class Shipper:
    name: str = ""
    abbreviation: str = ""
    brand_color: Optional[str] = None


@dataclass
class Bid:
    """A shipper's quote together with its normalized breakdown."""

    id: Any
    price: float = 0.0
    line_items: List[NormalizedLineItem] = field(default_factory=list)
    shipper: Shipper = field(default_factory=Shipper)
    delivery_time: Optional[str] = None
    co2_tonnes: float = 0.0
    status: Optional[str] = None
    show_breakdown: bool = False

    @property
    def is_winning(self) -> bool:
        return self.status == "accepted"


@dataclass
class ComparisonEntry:
    bid_id: Any
    present: bool
    amount: Optional[float] = None
    is_optional: bool = False
    notes: Optional[str] = None


@dataclass
class ComparisonRow:
    """One reconciled line item aligned across every compared bid.

    ``entries`` holds exactly one entry per bid, in the order the bids were
    passed to the matrix builder.
    """

    key: str
    category: str
    description: str
    order: float
    entries: List[ComparisonEntry] = field(default_factory=list)


@dataclass
class DisplayRow:
    """An entry of the rendered sequence: a category marker or an item row."""

    kind: str
    key: str
    category: str
    row: Optional[ComparisonRow] = None

    @property
    def is_category(self) -> bool:
        return self.kind == "category"


@dataclass
class BidSummary:
    bid_id: Any
    total_services: int
    optional_count: int
    derived_total: float
    breakdown_status: str = "itemized"


@dataclass(frozen=True)
class ReconcileOptions:
    """Toggles owned by the comparison view."""

    include_optional: bool = True
    only_differences: bool = False
    group_by_category: bool = True


__all__ = [
    "DEFAULT_SORT_ORDER",
    "Bid",
    "BidSummary",
    "ComparisonEntry",
    "ComparisonRow",
    "DisplayRow",
    "NormalizedLineItem",
    "RawLineItem",
    "ReconcileOptions",
    "Shipper",
]
