"""Bid comparison core package.

This package reconciles the itemized cost breakdowns of competing shipping
bids into a comparison matrix that a buyer can filter and scan. The engine is
pure: it receives already-fetched bid records and returns plain data
structures for whatever front end renders them.
"""

from .aggregate import derived_bid_total, per_bid_summary, summarize
from .comparison import ComparisonResult, build_comparison_rows, compare_bids, reconcile
from .config import AppConfig, ComparisonConfig, OutputConfig, load_config
from .filters import apply_filters, include_optional, only_differences
from .grouping import project_rows
from .io import load_bid_records, load_bids
from .keys import build_key
from .models import (
    Bid,
    BidSummary,
    ComparisonEntry,
    ComparisonRow,
    DisplayRow,
    NormalizedLineItem,
    RawLineItem,
    ReconcileOptions,
    Shipper,
)
from .normalize import compute_amount, normalize_bid, normalize_line_items
from .reporting import comparison_frame, summary_frame

__all__ = [
    "AppConfig",
    "Bid",
    "BidSummary",
    "ComparisonConfig",
    "ComparisonEntry",
    "ComparisonResult",
    "ComparisonRow",
    "DisplayRow",
    "NormalizedLineItem",
    "OutputConfig",
    "RawLineItem",
    "ReconcileOptions",
    "Shipper",
    "apply_filters",
    "build_comparison_rows",
    "build_key",
    "compare_bids",
    "comparison_frame",
    "compute_amount",
    "derived_bid_total",
    "include_optional",
    "load_bid_records",
    "load_bids",
    "load_config",
    "normalize_bid",
    "normalize_line_items",
    "only_differences",
    "per_bid_summary",
    "project_rows",
    "reconcile",
    "summarize",
    "summary_frame",
]
