"""Comparison matrix for competing shipping bids."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence, Union

from .aggregate import summarize
from .filters import apply_filters
from .grouping import project_rows
from .keys import build_key, collation_key
from .models import (
    Bid,
    BidSummary,
    ComparisonEntry,
    ComparisonRow,
    DisplayRow,
    ReconcileOptions,
)
from .normalize import ensure_finite, normalize_bids

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "Additional"
DEFAULT_DESCRIPTION = "Details unavailable"

BidLike = Union[Bid, Mapping[str, Any]]
OptionsLike = Union[ReconcileOptions, Mapping[str, Any], None]


@dataclass
class ComparisonResult:
    """Structured output from :func:`compare_bids`."""

    rows: List[ComparisonRow]
    display: List[DisplayRow]
    summaries: List[BidSummary]
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class _PendingRow:
    key: str
    category: str
    description: str
    order: float
    entries: Dict[Any, ComparisonEntry] = field(default_factory=dict)


def build_comparison_rows(bids: Sequence[Bid]) -> List[ComparisonRow]:
    """Align the line items of ``bids`` into one row per reconciliation key.

    Each row's order is the smallest ``sort_order + row/100 + column/1000``
    seen for its key, so within-bid order is kept and earlier bids win ties.
    """

    _warn_on_duplicate_ids(bids)
    pending: Dict[str, _PendingRow] = {}

    for column_index, bid in enumerate(bids):
        items = sorted(bid.line_items, key=lambda item: item.effective_sort_order)
        for item_index, item in enumerate(items):
            category = item.category_text or DEFAULT_CATEGORY
            description = item.description_text
            score = item.effective_sort_order + item_index / 100 + column_index / 1000
            key = build_key(category, description)

            row = pending.get(key)
            if row is None:
                row = _PendingRow(
                    key=key,
                    category=category,
                    description=description or DEFAULT_DESCRIPTION,
                    order=score,
                )
                pending[key] = row
            else:
                row.order = min(row.order, score)

            row.entries[bid.id] = ComparisonEntry(
                bid_id=bid.id,
                present=True,
                amount=ensure_finite(item.amount, "comparison amount"),
                is_optional=item.is_optional,
                notes=item.notes,
            )

    rows = [_materialize(row, bids) for row in pending.values()]
    rows.sort(
        key=lambda row: (row.order, collation_key(row.category), collation_key(row.description))
    )
    logger.debug("Built %d comparison rows from %d bids", len(rows), len(bids))
    return rows


def _materialize(row: _PendingRow, bids: Sequence[Bid]) -> ComparisonRow:
    entries = [
        row.entries.get(bid.id) or ComparisonEntry(bid_id=bid.id, present=False, is_optional=False)
        for bid in bids
    ]
    return ComparisonRow(
        key=row.key,
        category=row.category,
        description=row.description,
        order=ensure_finite(row.order, "row order"),
        entries=entries,
    )


def _warn_on_duplicate_ids(bids: Sequence[Bid]) -> None:
    counts = Counter(bid.id for bid in bids)
    duplicates = sorted(str(bid_id) for bid_id, count in counts.items() if count > 1)
    if duplicates:
        logger.warning(
            "Duplicate bid ids passed to one comparison: %s; entries will collide",
            ", ".join(duplicates),
        )


def _coerce_options(options: OptionsLike) -> ReconcileOptions:
    if options is None:
        return ReconcileOptions()
    if isinstance(options, ReconcileOptions):
        return options
    return ReconcileOptions(**dict(options))


def reconcile(bids: Sequence[BidLike], options: OptionsLike = None) -> List[DisplayRow]:
    """Return the filtered, optionally grouped comparison rows for ``bids``."""

    resolved = _coerce_options(options)
    normalized = normalize_bids(bids)
    rows = apply_filters(build_comparison_rows(normalized), resolved)
    return project_rows(rows, resolved.group_by_category)


def compare_bids(
    bids: Sequence[BidLike],
    options: OptionsLike = None,
    estimate_active: bool = False,
) -> ComparisonResult:
    """Run the full comparison, including per-bid summaries."""

    resolved = _coerce_options(options)
    normalized = normalize_bids(bids)
    logger.info("Comparing %d bids", len(normalized))

    rows = build_comparison_rows(normalized)
    filtered = apply_filters(rows, resolved)
    display = project_rows(filtered, resolved.group_by_category)
    summaries = [summarize(bid, estimate_active=estimate_active) for bid in normalized]

    metadata = {
        "bid_count": len(normalized),
        "row_count": len(rows),
        "displayed_item_count": len(filtered),
        "include_optional": resolved.include_optional,
        "only_differences": resolved.only_differences,
        "group_by_category": resolved.group_by_category,
    }

    return ComparisonResult(rows=rows, display=display, summaries=summaries, metadata=metadata)


__all__ = [
    "DEFAULT_CATEGORY",
    "DEFAULT_DESCRIPTION",
    "ComparisonResult",
    "build_comparison_rows",
    "compare_bids",
    "reconcile",
]
