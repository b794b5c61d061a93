"""Tabular projections of comparison results."""

from __future__ import annotations

from collections import Counter
from dataclasses import asdict
from typing import Any, Dict, List, Sequence

import numpy as np
import pandas as pd

from .comparison import ComparisonResult
from .models import Bid, BidSummary, DisplayRow

BASE_COLUMNS = ["kind", "category", "description"]


def bid_labels(bids: Sequence[Bid]) -> List[str]:
    """Column label per bid.

    Labels are the shipper name, suffixed with the bid id when the name is
    shared or would clash with a fixed column or another bid's flag column.
    """

    names = [bid.shipper.name or str(bid.id) for bid in bids]
    counts = Counter(names)
    candidates = [
        name if counts[name] == 1 else f"{name} ({bid.id})"
        for name, bid in zip(names, bids)
    ]
    flag_columns = {f"{candidate} optional" for candidate in candidates}

    taken = set(BASE_COLUMNS)
    labels: List[str] = []
    for candidate, bid in zip(candidates, bids):
        label = candidate
        if label in taken or label in flag_columns:
            label = f"{candidate} ({bid.id})"
        attempt = 2
        while label in taken or f"{label} optional" in taken or label in flag_columns:
            label = f"{candidate} ({bid.id}) #{attempt}"
            attempt += 1
        taken.update((label, f"{label} optional"))
        labels.append(label)
    return labels


def comparison_frame(display: Sequence[DisplayRow], bids: Sequence[Bid]) -> pd.DataFrame:
    """Render display rows with one amount and one optional flag column per bid."""

    labels = bid_labels(bids)
    columns = list(BASE_COLUMNS)
    for label in labels:
        columns.extend([label, f"{label} optional"])

    records: List[Dict[str, Any]] = []
    for entry in display:
        record: Dict[str, Any] = {
            "kind": entry.kind,
            "category": entry.category,
            "description": entry.row.description if entry.row else "",
        }
        for index, label in enumerate(labels):
            cell = entry.row.entries[index] if entry.row else None
            if cell is not None and cell.present:
                record[label] = cell.amount
            else:
                record[label] = np.nan
            record[f"{label} optional"] = bool(cell.is_optional) if cell is not None else False
        records.append(record)

    return pd.DataFrame(records, columns=columns)


def summary_frame(summaries: Sequence[BidSummary], bids: Sequence[Bid]) -> pd.DataFrame:
    labels = bid_labels(bids)
    rows = [
        {
            "bid_id": summary.bid_id,
            "shipper": label,
            "price": bid.price,
            "derived_total": summary.derived_total,
            "total_services": summary.total_services,
            "optional_count": summary.optional_count,
            "breakdown_status": summary.breakdown_status,
            "winning": bid.is_winning,
        }
        for summary, bid, label in zip(summaries, bids, labels)
    ]
    return pd.DataFrame(rows)


def result_to_dict(result: ComparisonResult) -> Dict[str, Any]:
    """Return a JSON-serializable view of ``result``."""

    return {
        "metadata": dict(result.metadata),
        "summaries": [asdict(summary) for summary in result.summaries],
        "display": [asdict(entry) for entry in result.display],
    }


__all__ = ["bid_labels", "comparison_frame", "result_to_dict", "summary_frame"]
