"""Row filters applied to the comparison matrix."""

from __future__ import annotations

import logging
from typing import List, Sequence

from .models import ComparisonEntry, ComparisonRow, ReconcileOptions

logger = logging.getLogger(__name__)


def include_optional(rows: Sequence[ComparisonRow], flag: bool) -> List[ComparisonRow]:
    """Keep every row when ``flag`` is set; otherwise only rows some bid requires."""

    if flag:
        return list(rows)
    return [
        row
        for row in rows
        if any(entry.present and not entry.is_optional for entry in row.entries)
    ]


def _differs(entry: ComparisonEntry, reference: ComparisonEntry) -> bool:
    if entry.present != reference.present:
        return True
    if entry.is_optional != reference.is_optional:
        return True
    if entry.present and reference.present and entry.amount != reference.amount:
        return True
    return (entry.notes or "").strip() != (reference.notes or "").strip()


def only_differences(rows: Sequence[ComparisonRow]) -> List[ComparisonRow]:
    """Keep rows where some bid disagrees with the first bid's entry.

    With a single bid nothing can disagree, so all rows are returned.
    """

    kept: List[ComparisonRow] = []
    for row in rows:
        if len(row.entries) <= 1:
            kept.append(row)
            continue
        reference = row.entries[0]
        if any(_differs(entry, reference) for entry in row.entries[1:]):
            kept.append(row)
    return kept


def apply_filters(rows: Sequence[ComparisonRow], options: ReconcileOptions) -> List[ComparisonRow]:
    """Run the optional-item filter, then the differences filter."""

    filtered = include_optional(rows, options.include_optional)
    if options.only_differences:
        filtered = only_differences(filtered)
    logger.debug("Filters kept %d of %d rows", len(filtered), len(rows))
    return filtered


__all__ = ["apply_filters", "include_optional", "only_differences"]
