"""Projection of comparison rows into the rendered sequence."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .models import ComparisonRow, DisplayRow


def _item(row: ComparisonRow) -> DisplayRow:
    return DisplayRow(kind="item", key=row.key, category=row.category, row=row)


def project_rows(rows: Sequence[ComparisonRow], group_by_category: bool) -> List[DisplayRow]:
    """Tag rows as items, inserting a category marker at each category change.

    Grouping relies on ``rows`` already being sorted; the item rows keep their
    count and order either way.
    """

    if not group_by_category:
        return [_item(row) for row in rows]

    projected: List[DisplayRow] = []
    last_category: Optional[str] = None
    for row in rows:
        if row.category != last_category:
            last_category = row.category
            projected.append(
                DisplayRow(
                    kind="category",
                    key=f"category-{row.category}-{row.order}",
                    category=row.category,
                )
            )
        projected.append(_item(row))
    return projected


__all__ = ["project_rows"]
